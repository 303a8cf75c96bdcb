import curses
from typing import Dict, List, Optional, Tuple

TITLE = " lectern help"
CLOSE_KEYS = (27, ord("q"), ord("h"), ord("?"), 10, 13, curses.KEY_ENTER)


def footer_text(first: int, last: int, total: int) -> str:
    """1-based visible range, e.g. ' lines 1-10 of 14 | q close'."""
    if total == 0:
        return " empty | q close"
    return f" lines {first + 1}-{last} of {total} | q close"


class HelpOverlay:
    """Full-screen help page over the text area.

    The page has a title row and a footer row; the rows between them scroll.
    The scroll position of each distinct page is remembered, so reopening the
    same help returns to where it was left.
    """

    def __init__(self, layout):
        self.layout = layout
        self.visible = False
        self.lines: List[str] = []
        self.scroll = 0
        self.win = None
        self._positions: Dict[Tuple[str, ...], int] = {}

    def open_help(self, lines: List[str], win=None):
        self.lines = list(lines or [])
        if win is None:
            win = curses.newwin(max(3, self.layout.H), self.layout.W, 0, 0)
            win.leaveok(True)
        self.win = win
        self.scroll = min(self._positions.get(self._key(), 0), self.max_scroll())
        self.visible = True

    def close(self):
        if self.lines:
            self._positions[self._key()] = self.scroll
        self.visible = False
        self.lines = []
        self.scroll = 0
        self.win = None

    def _key(self) -> Tuple[str, ...]:
        return tuple(self.lines)

    def body_height(self) -> int:
        if self.win is None:
            return 1
        h, _ = self.win.getmaxyx()
        return max(1, h - 2)

    def max_scroll(self) -> int:
        return max(0, len(self.lines) - self.body_height())

    def _scroll_to(self, pos: int):
        self.scroll = max(0, min(self.max_scroll(), pos))

    def handle_key(self, ch):
        if not self.visible or self.win is None or ch == -1:
            return
        if ch in CLOSE_KEYS:
            self.close()
            return

        half_page = max(1, self.body_height() // 2)
        moves = {
            curses.KEY_NPAGE: self.scroll + half_page,
            ord(" "): self.scroll + half_page,
            curses.KEY_PPAGE: self.scroll - half_page,
            curses.KEY_HOME: 0,
            curses.KEY_END: self.max_scroll(),
            ord("j"): self.scroll + 1,
            curses.KEY_DOWN: self.scroll + 1,
            ord("k"): self.scroll - 1,
            curses.KEY_UP: self.scroll - 1,
        }
        if ch in moves:
            self._scroll_to(moves[ch])

    def _put(self, row: int, text: str, width: int, attr: int = 0):
        try:
            self.win.addnstr(row, 0, text.ljust(width), width, attr)
        except curses.error:
            pass

    def draw(self):
        if not self.visible or self.win is None:
            return

        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        width = max(1, w - 1)
        body = self.body_height()

        self._put(0, TITLE, width, curses.A_REVERSE)
        shown = self.lines[self.scroll:self.scroll + body]
        for row in range(body):
            text = shown[row] if row < len(shown) else ""
            self._put(row + 1, text, width)
        last = self.scroll + len(shown)
        self._put(h - 1, footer_text(self.scroll, last, len(self.lines)), width, curses.A_DIM)

        win.refresh()
