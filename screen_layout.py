import curses
from dataclasses import dataclass


@dataclass(frozen=True)
class Geometry:
    H: int
    W: int
    title_h: int
    status_h: int
    body_h: int
    body_w: int
    outline_w: int
    scrollbar_w: int


def compute_geometry(H, W, chrome_visible, outline_visible, scrollbar_visible):
    title_h = 1 if chrome_visible else 0
    status_h = 1 if chrome_visible else 0
    body_h = max(1, H - title_h - status_h)

    outline_w = min(30, W // 4) if (outline_visible and W >= 40) else 0
    scrollbar_w = 1 if scrollbar_visible else 0
    body_w = max(1, W - outline_w - scrollbar_w)
    return Geometry(H, W, title_h, status_h, body_h, body_w, outline_w, scrollbar_w)


class ScreenLayout:
    def __init__(self, stdscr, chrome_visible=True, outline_visible=False, scrollbar_visible=True):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()
        self.key = (self.H, self.W, chrome_visible, outline_visible, scrollbar_visible)

        geo = compute_geometry(
            self.H, self.W, chrome_visible, outline_visible, scrollbar_visible
        )
        self.geometry = geo
        self.body_h = geo.body_h
        self.body_w = geo.body_w

        # layout: title bar, [outline | body | scroll indicator], status bar
        self.title_win = None
        self.status_win = None
        self.outline_win = None
        self.scrollbar_win = None

        if geo.title_h:
            self.title_win = curses.newwin(geo.title_h, self.W, 0, 0)
            self.title_win.leaveok(True)

        if geo.outline_w:
            self.outline_win = curses.newwin(geo.body_h, geo.outline_w, geo.title_h, 0)
            self.outline_win.leaveok(True)

        self.body_win = curses.newwin(geo.body_h, geo.body_w, geo.title_h, geo.outline_w)

        if geo.scrollbar_w:
            self.scrollbar_win = curses.newwin(
                geo.body_h, geo.scrollbar_w, geo.title_h, geo.outline_w + geo.body_w
            )
            self.scrollbar_win.leaveok(True)

        if geo.status_h:
            self.status_win = curses.newwin(geo.status_h, self.W, geo.title_h + geo.body_h, 0)
            # do not let status bar steal cursor
            self.status_win.leaveok(True)

    def matches(self, view) -> bool:
        H, W = self.stdscr.getmaxyx()
        return self.key == (
            H,
            W,
            view.chrome_visible,
            view.outline_visible,
            view.scrollbar_visible,
        )
