"""Screens and the menu selection."""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .store import Note


@dataclass(frozen=True)
class Menu:
    pass


@dataclass(frozen=True)
class ComposeNote:
    pass


@dataclass(frozen=True)
class ViewNote:
    note: Note


Screen = Union[Menu, ComposeNote, ViewNote]

NEW_NOTE = 'new'
OPEN_NOTE = 'note'
QUIT = 'quit'


@dataclass(frozen=True)
class MenuItem:
    kind: str
    label: str
    note: Optional[Note] = None


def menu_items(notes: Sequence[Note]) -> List[MenuItem]:
    items = [MenuItem(NEW_NOTE, "New note")]
    for n in notes:
        items.append(MenuItem(OPEN_NOTE, f"{n.title_or_id}  {n.preview}", n))
    items.append(MenuItem(QUIT, "Quit"))
    return items


@dataclass
class NavigationState:
    screen: Screen = Menu()
    selected_index: int = 0

    def clamp(self, count: int):
        self.selected_index = max(0, min(self.selected_index, count - 1))

    def move_up(self, count: int):
        if isinstance(self.screen, Menu):
            self.selected_index = max(0, self.selected_index - 1)
            self.clamp(count)

    def move_down(self, count: int):
        if isinstance(self.screen, Menu):
            self.selected_index = min(count - 1, self.selected_index + 1)
            self.clamp(count)

    def open_compose(self):
        self.screen = ComposeNote()

    def open_view(self, note: Note):
        self.screen = ViewNote(note)

    def back_to_menu(self):
        self.screen = Menu()


def visible_items(items: List[MenuItem], rows: int):
    """Items that fit in `rows` lines, and whether a trailing '…' row is needed."""
    if len(items) <= rows:
        return items, False
    return items[:max(0, rows - 1)], True
