import curses

from jotter.config import DEFAULT_CONFIG
from jotter.dispatcher import BACKSPACE, CHAR, DOWN, ENTER, ESC, RESIZE, SAVE, UNKNOWN, UP
from jotter.editor import visual_cursor
from jotter.main import Jotter, cursor_cell, key_event


def test_special_keys():
    assert key_event(curses.KEY_UP).kind == UP
    assert key_event(curses.KEY_DOWN).kind == DOWN
    assert key_event(curses.KEY_RESIZE).kind == RESIZE
    assert key_event(curses.KEY_BACKSPACE).kind == BACKSPACE


def test_control_characters():
    assert key_event("\n").kind == ENTER
    assert key_event("\r").kind == ENTER
    assert key_event(13).kind == ENTER
    assert key_event("\x1b").kind == ESC
    assert key_event("\x7f").kind == BACKSPACE
    assert key_event("\x13").kind == SAVE
    assert key_event("\x03").kind == UNKNOWN


def test_printable_characters():
    assert key_event("a") == key_event(ord("a"))
    ev = key_event("é")
    assert (ev.kind, ev.char) == (CHAR, "é")
    assert key_event(curses.KEY_F1).kind == UNKNOWN


def make_app(path):
    cfg = dict(DEFAULT_CONFIG, notes_file=str(path))
    return Jotter(None, cfg)


def test_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "saved-notes.bin"
    path.write_bytes(b"JOTR\x01\x00\x00\x00\x02\x00")
    app = make_app(path)
    assert len(app.session.store) == 0
    assert "unreadable" in app.session.status
    assert path.read_bytes() == b"JOTR\x01\x00\x00\x00\x02\x00"


def test_startup_loads_saved_notes(tmp_path):
    path = tmp_path / "saved-notes.bin"
    app = make_app(path)
    app.session.store.append_and_persist(app.session.store.new_note("Hello"))
    app = make_app(path)
    assert [n.body for n in app.session.store.notes] == ["Hello"]
    assert app.session.status == "1 notes loaded"


def test_cursor_after_full_row_sits_past_last_char():
    row, col = visual_cursor(["abcdef"], (0, 6), 3)
    assert cursor_cell(row, col, 5, 3) == (1, 3)


def test_cursor_cell_clamps_to_text_area():
    assert cursor_cell(9, 50, 5, 10) == (4, 10)
    assert cursor_cell(2, 4, 5, 10) == (2, 4)
