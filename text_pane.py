import curses


def render_scrollbar(height, top, visible, total):
    """Thumb (start, length) for a scroll indicator `height` cells tall."""
    if height <= 0:
        return 0, 0
    if total <= visible or total <= 0:
        return 0, height
    length = max(1, height * visible // total)
    max_start = height - length
    start = min(max_start, height * top // total)
    return start, length


class TextPane:
    """Draws a TextView into the body window."""

    def __init__(self):
        self.cursor_yx = None

    def _attr(self, view, surface):
        return curses.A_REVERSE if view.inverted.get(surface) else curses.A_NORMAL

    def text_x(self, view):
        left, right = view.margins
        avail = max(1, view.width - left - right)
        # scaled text sits centred between the margins
        return left + max(0, (avail - view.text_width()) // 2)

    def draw(self, win, view):
        win.erase()
        h, w = win.getmaxyx()
        default_attr = self._attr(view, "default")
        fringe_attr = self._attr(view, "fringe")
        try:
            win.bkgd(" ", default_attr)
        except curses.error:
            pass

        left, right = view.margins
        left = min(left, w)
        right = min(right, max(0, w - left))

        rows = view.display_rows()
        top = view.top_row
        step = 1 + view.line_spacing
        x = self.text_x(view)
        text_w = view.text_width()

        for y in range(h):
            if left:
                self._put(win, y, 0, " " * left, fringe_attr)
            if right:
                self._put(win, y, w - right, " " * right, fringe_attr)
            if y % step:
                continue
            r = top + y // step
            if r >= len(rows):
                continue
            self._put(win, y, x, view.row_text(r)[:text_w], default_attr)

        self.cursor_yx = self._cursor_position(view, h, w, top, step, x)
        win.noutrefresh()

    def _cursor_position(self, view, h, w, top, step, x):
        if not view.cursor_visible:
            return None
        row = view.row_of(view.point)
        if row < top:
            return None
        y = (row - top) * step
        if y >= h:
            return None
        idx, start, _ = view.display_rows()[row]
        col = view.point - (view.line_starts[idx] + start)
        return y, min(w - 1, x + col)

    def _put(self, win, y, x, text, attr):
        if not text:
            return
        try:
            win.addstr(y, x, text, attr)
        except curses.error:
            # writing the bottom-right cell raises after a successful write
            pass

    def draw_scrollbar(self, win, view):
        win.erase()
        h, _ = win.getmaxyx()
        total = len(view.display_rows())
        start, length = render_scrollbar(h, view.top_row, view.visible_rows(), total)
        for y in range(h):
            ch = "#" if start <= y < start + length else "|"
            try:
                win.addstr(y, 0, ch, curses.A_DIM)
            except curses.error:
                pass
        win.noutrefresh()

    def draw_outline(self, win, view):
        win.erase()
        h, w = win.getmaxyx()
        entries = view.outline()
        current = None
        for i, (offset, _) in enumerate(entries):
            if offset <= view.top_offset:
                current = i
        if not entries:
            entries = [(0, "(no headings)")]
        for y, (_, title) in enumerate(entries[:h]):
            attr = curses.A_BOLD if y == current else curses.A_NORMAL
            try:
                win.addnstr(y, 0, title.ljust(w - 1), w - 1, attr)
            except curses.error:
                pass
        win.noutrefresh()
