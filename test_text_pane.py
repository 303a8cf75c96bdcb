import pytest

from screen_layout import compute_geometry
from text_pane import TextPane, render_scrollbar
from text_view import TextView


@pytest.mark.parametrize(
    "height, top, visible, total, expected",
    [
        (10, 0, 10, 5, (0, 10)),
        (10, 0, 5, 20, (0, 2)),
        (10, 15, 5, 20, (7, 2)),
        (10, 0, 5, 1000, (0, 1)),
        (10, 999, 5, 1000, (9, 1)),
        (0, 0, 5, 20, (0, 0)),
    ],
)
def test_render_scrollbar(height, top, visible, total, expected):
    assert render_scrollbar(height, top, visible, total) == expected


def test_geometry_with_chrome_and_panes():
    geo = compute_geometry(24, 120, True, True, True)
    assert geo.title_h == 1
    assert geo.status_h == 1
    assert geo.body_h == 22
    assert geo.outline_w == 30
    assert geo.scrollbar_w == 1
    assert geo.body_w == 89


def test_geometry_without_chrome_uses_whole_screen():
    geo = compute_geometry(24, 120, False, False, False)
    assert geo.body_h == 24
    assert geo.body_w == 120


def test_outline_skipped_on_narrow_terminals():
    geo = compute_geometry(24, 36, True, True, True)
    assert geo.outline_w == 0


class DummyWin:
    def __init__(self, h, w):
        self._h = h
        self._w = w
        self.writes = []

    def getmaxyx(self):
        return self._h, self._w

    def erase(self):
        self.writes = []

    def bkgd(self, ch, attr):
        self.bkgd_attr = attr

    def addstr(self, y, x, text, attr=0):
        self.writes.append((y, x, text, attr))

    def noutrefresh(self):
        pass


def test_draw_places_text_between_margins_with_spacing():
    view = TextView("one\ntwo\nthree", height=6, width=20)
    view.set_margins(4, 4)
    view.set_line_spacing(1)
    win = DummyWin(6, 20)
    TextPane().draw(win, view)
    text_writes = [(y, x, t) for y, x, t, _ in win.writes if t.strip()]
    assert text_writes == [(0, 4, "one"), (2, 4, "two"), (4, 4, "three")]
    fringe = [(y, x) for y, x, t, _ in win.writes if not t.strip()]
    assert (1, 0) in fringe and (1, 16) in fringe


def test_cursor_hidden_when_view_hides_it():
    view = TextView("abc", height=3, width=10)
    pane = TextPane()
    pane.draw(DummyWin(3, 10), view)
    assert pane.cursor_yx == (0, 0)
    view.set_cursor_visible(False)
    pane.draw(DummyWin(3, 10), view)
    assert pane.cursor_yx is None
