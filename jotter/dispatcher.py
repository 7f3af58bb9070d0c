"""Maps key events onto the navigation state, the editor and the note store."""
import logging
from dataclasses import dataclass, field
from typing import Optional

from .editor import EditorState
from .navigation import NEW_NOTE, OPEN_NOTE, QUIT, ComposeNote, Menu, NavigationState, ViewNote, menu_items
from .store import NoteStore, StoreWriteError

log = logging.getLogger(__name__)

UP = 'up'
DOWN = 'down'
LEFT = 'left'
RIGHT = 'right'
HOME = 'home'
END = 'end'
ENTER = 'enter'
ESC = 'esc'
BACKSPACE = 'backspace'
SAVE = 'save'
CHAR = 'char'
RESIZE = 'resize'
UNKNOWN = 'unknown'


@dataclass(frozen=True)
class KeyEvent:
    kind: str
    char: Optional[str] = None


@dataclass(frozen=True)
class RenderRequest:
    redraw: bool = True
    quit: bool = False


@dataclass
class Session:
    store: NoteStore
    nav: NavigationState = field(default_factory=NavigationState)
    editor: EditorState = field(default_factory=EditorState)
    status: str = ""


def handle_key(session: Session, event: KeyEvent) -> RenderRequest:
    screen = session.nav.screen
    if event.kind == RESIZE:
        return RenderRequest()
    if isinstance(screen, Menu):
        return _menu_key(session, event)
    if isinstance(screen, ComposeNote):
        return _compose_key(session, event)
    if isinstance(screen, ViewNote):
        return _view_key(session, event)
    raise TypeError(f"unhandled screen {screen!r}")


def _menu_key(session: Session, event: KeyEvent) -> RenderRequest:
    nav = session.nav
    items = menu_items(session.store.notes)
    nav.clamp(len(items))
    if event.kind == UP:
        nav.move_up(len(items))
    elif event.kind == DOWN:
        nav.move_down(len(items))
    elif event.kind == CHAR and event.char == 'q':
        return RenderRequest(quit=True)
    elif event.kind == ENTER:
        item = items[nav.selected_index]
        if item.kind == NEW_NOTE:
            session.editor = EditorState()
            nav.open_compose()
            session.status = "Ctrl+S save | Esc cancel"
        elif item.kind == OPEN_NOTE:
            nav.open_view(item.note)
            session.status = "Esc back"
        elif item.kind == QUIT:
            return RenderRequest(quit=True)
    return RenderRequest()


def _compose_key(session: Session, event: KeyEvent) -> RenderRequest:
    ed = session.editor
    k = event.kind
    if k == CHAR and event.char:
        ed.insert_char(event.char)
    elif k == ENTER:
        ed.insert_newline()
    elif k == BACKSPACE:
        ed.backspace()
    elif k == LEFT:
        ed.move_left()
    elif k == RIGHT:
        ed.move_right()
    elif k == UP:
        ed.move_up()
    elif k == DOWN:
        ed.move_down()
    elif k == HOME:
        ed.home()
    elif k == END:
        ed.end()
    elif k == ESC:
        ed.clear()
        session.nav.back_to_menu()
        session.status = "Discarded note"
    elif k == SAVE:
        save_note(session)
    return RenderRequest()


def _view_key(session: Session, event: KeyEvent) -> RenderRequest:
    if event.kind in (ESC, LEFT):
        session.nav.back_to_menu()
        session.status = ""
    return RenderRequest()


def save_note(session: Session):
    ed = session.editor
    if ed.is_empty:
        session.status = "Nothing to save"
        return
    pos = ed.pos
    body = ''.join(ed.clear())
    note = session.store.new_note(body)
    try:
        session.store.append_and_persist(note)
    except StoreWriteError as e:
        ed.load(body)
        ed.pos = pos
        session.status = f"Save failed: {e}"
        return
    log.info("Saved note %s", note.title_or_id)
    session.nav.back_to_menu()
    session.status = f"Saved note {note.title_or_id}"
