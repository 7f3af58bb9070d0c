#!/usr/bin/env python3
"""
Jotter: compose and browse short timestamped notes in the terminal
"""
import curses
import logging
import os
from typing import Dict, Union

from .config import as_bool, load_config, log_path, notes_path
from .dispatcher import (
    BACKSPACE, CHAR, DOWN, END, ENTER, ESC, HOME, LEFT, RESIZE, RIGHT, SAVE, UNKNOWN, UP,
    KeyEvent, Session, handle_key,
)
from .editor import visual_cursor, visual_rows
from .logger import configure_logging
from .navigation import ComposeNote, Menu, ViewNote, menu_items, visible_items
from .store import CorruptStoreError, NoteStore

log = logging.getLogger(__name__)

MIN_W, MIN_H = 40, 10

HELP_LINES = [
    "How to use jotter:",
    "",
    "  ↑/↓      move the selection",
    "  Enter    open the selected entry",
    "  Esc      back / discard the note",
    "  Ctrl+S   save the note being written",
    "  q        quit (from this menu)",
]

_SPECIAL_KEYS = {
    curses.KEY_UP: UP,
    curses.KEY_DOWN: DOWN,
    curses.KEY_LEFT: LEFT,
    curses.KEY_RIGHT: RIGHT,
    curses.KEY_HOME: HOME,
    curses.KEY_END: END,
    curses.KEY_ENTER: ENTER,
    curses.KEY_BACKSPACE: BACKSPACE,
    curses.KEY_RESIZE: RESIZE,
    10: ENTER, 13: ENTER,
    27: ESC,
    127: BACKSPACE, 8: BACKSPACE,
    19: SAVE,
}


def key_event(k: Union[int, str]) -> KeyEvent:
    """Translate a get_wch()/getch() result into a KeyEvent."""
    if isinstance(k, str):
        if len(k) == 1 and ord(k) in _SPECIAL_KEYS:
            return KeyEvent(_SPECIAL_KEYS[ord(k)])
        if len(k) == 1 and k.isprintable():
            return KeyEvent(CHAR, k)
        return KeyEvent(UNKNOWN)
    if k in _SPECIAL_KEYS:
        return KeyEvent(_SPECIAL_KEYS[k])
    if 32 <= k <= 126:
        return KeyEvent(CHAR, chr(k))
    return KeyEvent(UNKNOWN)


def draw_box(win, y, x, h, w, title: str = ""):
    if w < 2 or h < 2:
        return
    try:
        win.addch(y, x, '╭'); win.addch(y, x + w - 1, '╮')
        win.addch(y + h - 1, x, '╰'); win.addch(y + h - 1, x + w - 1, '╯')
        for i in range(1, w - 1):
            win.addch(y, x + i, '─'); win.addch(y + h - 1, x + i, '─')
        for i in range(1, h - 1):
            win.addch(y + i, x, '│'); win.addch(y + i, x + w - 1, '│')
        if title:
            title_text = f" {title[:w - 4]} "
            win.addstr(y, x + 2, title_text)
    except curses.error:
        pass


def cursor_cell(row, col, text_h, text_w):
    # column text_w is the padding cell just inside the border, after a full row
    return min(max(0, row), text_h - 1), min(max(0, col), text_w)


class Jotter:
    def __init__(self, stdscr, config: Dict[str, str]):
        self.stdscr = stdscr
        self.config = config
        self.wrap = as_bool(config.get('wrap_lines', 'true'))
        self.session = Session(NoteStore(notes_path(config)))
        self.colors = {}
        self.running = True
        self.load_notes()

    def load_notes(self):
        store = self.session.store
        try:
            store.load()
            self.session.status = f"{len(store)} notes loaded"
        except CorruptStoreError as e:
            log.error("Starting with an empty store: %s", e)
            self.session.status = f"Notes file unreadable ({e.reason}); starting empty"
        except OSError as e:
            log.error("Could not read %s: %s", store.path, e)
            self.session.status = f"Could not read notes: {e}"

    def setup_colors(self):
        try:
            curses.use_default_colors()
            curses.init_pair(1, curses.COLOR_MAGENTA, -1)
            curses.init_pair(2, curses.COLOR_YELLOW, -1)
            curses.init_pair(3, curses.COLOR_BLUE, -1)
            curses.init_pair(4, curses.COLOR_RED, -1)
        except curses.error:
            pass
        self.colors = {'header': 1, 'status': 2, 'list': 3, 'info': 4}

    def _addstr(self, y, x, text, attr=0):
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass

    def draw(self):
        stdscr = self.stdscr
        h, w = stdscr.getmaxyx()
        stdscr.erase()
        if w < MIN_W or h < MIN_H:
            self._addstr(0, 0, "Terminal too small")
            stdscr.refresh()
            return
        self._addstr(0, max(0, (w - len("Jotter")) // 2), "Jotter",
                     curses.color_pair(self.colors['header']) | curses.A_BOLD)
        list_w = max(28, w // 3)
        self.draw_menu(1, 0, h - 2, list_w)
        pane_x, pane_w = list_w + 1, w - list_w - 1
        screen = self.session.nav.screen
        cursor_at = None
        if isinstance(screen, Menu):
            self.draw_help(1, pane_x, h - 2, pane_w)
        elif isinstance(screen, ComposeNote):
            cursor_at = self.draw_compose(1, pane_x, h - 2, pane_w)
        elif isinstance(screen, ViewNote):
            self.draw_note(1, pane_x, h - 2, pane_w, screen)
        self._addstr(h - 1, 1, self.session.status[:w - 4], curses.color_pair(self.colors['status']))
        try:
            if cursor_at:
                curses.curs_set(1)
                stdscr.move(*cursor_at)
            else:
                curses.curs_set(0)
        except curses.error:
            pass
        stdscr.refresh()

    def draw_menu(self, y, x, h, w):
        nav = self.session.nav
        items = menu_items(self.session.store.notes)
        nav.clamp(len(items))
        active = isinstance(nav.screen, Menu)
        draw_box(self.stdscr, y, x, h, w, "Menu")
        # no scrolling: entries past the panel stay selectable but are not drawn
        shown, more = visible_items(items, h - 2)
        for i, item in enumerate(shown):
            sel = active and i == nav.selected_index
            text = f"{'→ ' if sel else '  '}{item.label}"[:w - 3]
            attr = curses.color_pair(self.colors['list']) | curses.A_BOLD if sel else 0
            self._addstr(y + 1 + i, x + 1, text, attr)
        if more:
            hidden = active and nav.selected_index >= len(shown)
            self._addstr(y + 1 + len(shown), x + 1, f"{'→ ' if hidden else '  '}… {len(items) - len(shown)} more", curses.A_DIM)

    def draw_help(self, y, x, h, w):
        draw_box(self.stdscr, y, x, h, w, "Info")
        for i, ln in enumerate(HELP_LINES[:h - 2]):
            attr = curses.color_pair(self.colors['info']) if i == 0 else 0
            self._addstr(y + 1 + i, x + 2, ln[:w - 4], attr)

    def _rows(self, lines, width):
        if self.wrap:
            return visual_rows(lines, width)
        return [(li, 0, ln[:width]) for li, ln in enumerate(lines)]

    def draw_compose(self, y, x, h, w):
        ed = self.session.editor
        draw_box(self.stdscr, y, x, h, w, "New note")
        text_y, text_x = y + 1, x + 2
        text_h, text_w = h - 3, max(1, w - 4)
        lines = ed.lines
        rows = self._rows(lines, text_w)
        if self.wrap:
            vrow, vcol = visual_cursor(lines, ed.cursor, text_w)
        else:
            vrow, vcol = ed.cursor
        top = max(0, vrow - text_h + 1)
        for i, (_, _, seg) in enumerate(rows[top:top + text_h]):
            self._addstr(text_y + i, text_x, seg, curses.color_pair(self.colors['status']))
        self._addstr(y + h - 2, text_x, ed.stats()[:text_w], curses.A_DIM)
        dy, dx = cursor_cell(vrow - top, vcol, text_h, text_w)
        return text_y + dy, text_x + dx

    def draw_note(self, y, x, h, w, screen: ViewNote):
        note = screen.note
        draw_box(self.stdscr, y, x, h, w, note.title_or_id)
        rows = self._rows(note.body.split('\n'), max(1, w - 4))
        for i, (_, _, seg) in enumerate(rows[:h - 2]):
            self._addstr(y + 1 + i, x + 2, seg)

    def run(self):
        curses.raw()
        self.stdscr.keypad(True)
        self.setup_colors()
        while self.running:
            self.draw()
            try:
                k = self.stdscr.get_wch()
            except curses.error:
                continue
            req = handle_key(self.session, key_event(k))
            if req.quit:
                self.running = False
        log.info("Exiting with %d notes", len(self.session.store))


def main(stdscr):
    config = load_config()
    configure_logging(config['log_level'], log_path(config))
    app = Jotter(stdscr, config)
    app.run()


def cli():
    """Command-line entrypoint (used by pip install jotter)"""
    os.environ.setdefault('ESCDELAY', '25')
    curses.wrapper(main)


if __name__ == '__main__':
    cli()
