import random

from jotter.editor import EditorState, visual_cursor, visual_rows


def typed(text):
    ed = EditorState()
    for c in text:
        ed.insert_char(c)
    return ed


def test_insert_advances_cursor():
    ed = typed("abc")
    assert ed.text == "abc"
    assert ed.cursor == (0, 3)


def test_newline_moves_to_next_row():
    ed = typed("ab")
    ed.insert_newline()
    assert ed.cursor == (1, 0)
    ed.insert_char("c")
    assert ed.lines == ["ab", "c"]
    assert ed.cursor == (1, 1)


def test_backspace_at_start_is_noop():
    ed = EditorState()
    ed.backspace()
    assert ed.text == "" and ed.cursor == (0, 0)


def test_backspace_joins_lines():
    ed = typed("ab\ncd")
    ed.home()
    ed.backspace()
    assert ed.text == "abcd"
    assert ed.cursor == (0, 2)


def test_insert_in_middle():
    ed = typed("ac")
    ed.move_left()
    ed.insert_char("b")
    assert ed.text == "abc"
    assert ed.cursor == (0, 2)


def test_vertical_moves_clamp_column():
    ed = typed("long line\nab\nlonger line")
    ed.move_up()
    assert ed.cursor == (1, 2)
    ed.move_up()
    assert ed.cursor == (0, 2)
    ed.end()
    ed.move_down()
    assert ed.cursor == (1, 2)
    ed.move_down()
    ed.move_down()
    assert ed.cursor == (2, 2)


def test_clear_returns_and_empties():
    ed = typed("hi")
    assert ed.clear() == ["h", "i"]
    assert ed.is_empty and ed.cursor == (0, 0)


def test_long_line_stays_one_row():
    ed = typed("x" * 200)
    assert ed.cursor == (0, 200)
    assert len(ed.lines) == 1


def test_random_edits_keep_cursor_in_bounds():
    rng = random.Random(7)
    ed = EditorState()
    ops = [ed.backspace, ed.insert_newline, ed.move_left, ed.move_right,
           ed.move_up, ed.move_down, ed.home, ed.end,
           lambda: ed.insert_char(rng.choice("ab "))]
    for _ in range(2000):
        rng.choice(ops)()
        row, col = ed.cursor
        assert 0 <= ed.pos <= len(ed.buffer)
        assert 0 <= row < len(ed.lines)
        assert 0 <= col <= len(ed.lines[row])


def test_visual_rows_wrap_at_width():
    rows = visual_rows(["abcdefg", "", "hi"], 3)
    assert rows == [(0, 0, "abc"), (0, 3, "def"), (0, 6, "g"), (1, 0, ""), (2, 0, "hi")]


def test_visual_cursor_follows_wrap():
    lines = ["abcdefg", "hi"]
    assert visual_cursor(lines, (0, 4), 3) == (1, 1)
    assert visual_cursor(lines, (1, 1), 3) == (3, 1)
    assert visual_cursor(["abcdef"], (0, 6), 3) == (1, 3)
    assert visual_cursor(["abcdef"], (0, 3), 3) == (1, 0)
