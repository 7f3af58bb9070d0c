from typing import List, Tuple


class EditorState:
    """
    Text being composed. The buffer is one flat character list; the
    (row, col) cursor is derived from the insertion index and only explicit
    newlines start a new row. Visual wrapping is left to the renderer.
    """

    def __init__(self):
        self.buffer: List[str] = []
        self.pos = 0

    @property
    def text(self) -> str:
        return ''.join(self.buffer)

    @property
    def lines(self) -> List[str]:
        return self.text.split('\n')

    @property
    def is_empty(self) -> bool:
        return not self.buffer

    @property
    def cursor(self) -> Tuple[int, int]:
        before = self.buffer[:self.pos]
        row = before.count('\n')
        if row:
            last_nl = len(before) - 1 - before[::-1].index('\n')
            col = self.pos - last_nl - 1
        else:
            col = self.pos
        return row, col

    def _line_start(self, pos: int) -> int:
        while pos > 0 and self.buffer[pos - 1] != '\n':
            pos -= 1
        return pos

    def _line_end(self, pos: int) -> int:
        while pos < len(self.buffer) and self.buffer[pos] != '\n':
            pos += 1
        return pos

    def insert_char(self, c: str):
        if c == '\n':
            self.insert_newline(); return
        self.buffer.insert(self.pos, c)
        self.pos += 1

    def insert_newline(self):
        self.buffer.insert(self.pos, '\n')
        self.pos += 1

    def backspace(self):
        if self.pos > 0:
            self.pos -= 1
            del self.buffer[self.pos]

    def clear(self) -> List[str]:
        chars, self.buffer = self.buffer, []
        self.pos = 0
        return chars

    def load(self, text: str):
        self.buffer = list(text)
        self.pos = len(self.buffer)

    def move_left(self):
        self.pos = max(0, self.pos - 1)

    def move_right(self):
        self.pos = min(len(self.buffer), self.pos + 1)

    def home(self):
        self.pos = self._line_start(self.pos)

    def end(self):
        self.pos = self._line_end(self.pos)

    def move_up(self):
        start = self._line_start(self.pos)
        if start == 0:
            return
        col = self.pos - start
        prev_start = self._line_start(start - 1)
        self.pos = min(prev_start + col, start - 1)

    def move_down(self):
        end = self._line_end(self.pos)
        if end == len(self.buffer):
            return
        col = self.pos - self._line_start(self.pos)
        next_start = end + 1
        self.pos = min(next_start + col, self._line_end(next_start))

    def stats(self) -> str:
        text = self.text
        return f"Lines:{len(self.lines)} | Words:{len(text.split())} | Chars:{len(text)}"


def visual_rows(lines: List[str], width: int) -> List[Tuple[int, int, str]]:
    """Return (logical_row, start_col, segment) for each screen row."""
    width = max(1, width)
    rows = []
    for li, ln in enumerate(lines):
        if ln == '':
            rows.append((li, 0, ''))
            continue
        for start in range(0, len(ln), width):
            rows.append((li, start, ln[start:start + width]))
    return rows


def visual_cursor(lines: List[str], cursor: Tuple[int, int], width: int) -> Tuple[int, int]:
    width = max(1, width)
    row, col = cursor
    vrow = 0
    for li in range(row):
        vrow += max(1, -(-len(lines[li]) // width))
    # cursor at the end of a line that exactly fills its last row stays on that row
    if col and col % width == 0 and col == len(lines[row]):
        return vrow + col // width - 1, width
    return vrow + col // width, col % width
