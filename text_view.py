import re
from bisect import bisect_right
from typing import List, Optional

from host_view import HostView

_HEADING = re.compile(r"^(#{1,6}|\*+)\s+(\S.*)$")


class TextView(HostView):
    """In-memory text view: document, layout, scrolling and editing state.

    `width`/`height` are the size of the text area in cells; curses windows
    around it (title bar, status bar, scroll indicator, outline) are sized
    by ScreenLayout and are not part of it.
    """

    FONT_STEP_FACTOR = 1.2

    def __init__(self, text: str = "", height: int = 24, width: int = 80, read_only: bool = False):
        self._text = text or ""
        self._version = 0
        self._line_cache = None
        self._row_cache = None

        self.height = max(1, height)
        self.width = max(1, width)
        self.read_only = read_only
        self.modified = False

        self.point = 0
        self.top_offset = 0

        self.chrome_visible = True
        self.cursor_visible = True
        self.word_wrap = False
        self.line_spacing = 0
        self.scroll_step = 3
        self.scrollbar_visible = True
        self.margins = (0, 0)
        self.font_scale = 0
        self.inverted = {"default": False, "fringe": False}
        self.outline_visible = False
        self.text_input_enabled = True

        self.status_message: Optional[str] = None
        self.help_lines: Optional[List[str]] = None
        self.full_redraw_requested = False

    # ---------- document ----------
    @property
    def text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text or ""
        self._touch()
        self.point = min(self.point, len(self._text))
        self.top_offset = min(self.top_offset, len(self._text))
        self.modified = False

    def _touch(self):
        self._version += 1
        self._line_cache = None
        self._row_cache = None

    def _split_lines(self):
        if self._line_cache is None:
            lines = self._text.split("\n")
            starts = []
            pos = 0
            for line in lines:
                starts.append(pos)
                pos += len(line) + 1
            self._line_cache = (lines, starts)
        return self._line_cache

    @property
    def lines(self) -> List[str]:
        return self._split_lines()[0]

    @property
    def line_starts(self) -> List[int]:
        return self._split_lines()[1]

    def line_of(self, offset: int) -> int:
        return max(0, bisect_right(self.line_starts, offset) - 1)

    def current_line_number(self) -> int:
        return self.line_of(self.point) + 1

    def outline(self) -> list[tuple[int, str]]:
        """Markdown/Org headings as (offset, indented title)."""
        entries = []
        for line, start in zip(self.lines, self.line_starts):
            m = _HEADING.match(line)
            if not m:
                continue
            level = len(m.group(1))
            entries.append((start, "  " * (level - 1) + m.group(2).strip()))
        return entries

    def toggle_outline(self) -> None:
        self.outline_visible = not self.outline_visible

    # ---------- layout ----------
    def resize(self, height: int, width: int) -> None:
        self.height = max(1, height)
        self.width = max(1, width)

    def text_width(self) -> int:
        left, right = self.margins
        avail = max(1, self.width - left - right)
        # a larger font fits fewer columns; never wider than what is there
        scaled = int(avail / (self.FONT_STEP_FACTOR ** self.font_scale))
        return max(1, min(avail, scaled))

    def visible_rows(self) -> int:
        spacing = self.line_spacing
        return max(1, (self.height + spacing) // (1 + spacing))

    def _wrap_line(self, line: str, width: int) -> list[tuple[int, int]]:
        spans = []
        start = 0
        n = len(line)
        while n - start > width:
            end = start + width
            if self.word_wrap:
                if line[end] == " ":
                    # break space falls just past the row; it is not drawn
                    spans.append((start, end))
                    start = end + 1
                    continue
                brk = line.rfind(" ", start, end)
                if brk > start:
                    end = brk + 1
            spans.append((start, end))
            start = end
        if start < n or not spans:
            spans.append((start, n))
        return spans

    def display_rows(self) -> list[tuple[int, int, int]]:
        """Rows as (line index, start column, end column)."""
        width = self.text_width()
        key = (self._version, width, self.word_wrap)
        if self._row_cache is not None and self._row_cache[0] == key:
            return self._row_cache[1]
        rows = []
        for idx, line in enumerate(self.lines):
            for start, end in self._wrap_line(line, width):
                rows.append((idx, start, end))
        starts = self.line_starts
        offsets = [starts[idx] + start for idx, start, _ in rows]
        self._row_cache = (key, rows, offsets)
        return rows

    def _row_offsets(self) -> List[int]:
        self.display_rows()
        return self._row_cache[2]

    def row_text(self, row: int) -> str:
        idx, start, end = self.display_rows()[row]
        return self.lines[idx][start:end]

    def row_of(self, offset: int) -> int:
        return max(0, bisect_right(self._row_offsets(), offset) - 1)

    @property
    def top_row(self) -> int:
        return self.row_of(self.top_offset)

    def max_top_row(self) -> int:
        return max(0, len(self.display_rows()) - self.visible_rows())

    def _set_top_row(self, row: int) -> None:
        row = max(0, min(row, self.max_top_row()))
        self.top_offset = self._row_offsets()[row]
        self._keep_point_on_screen()

    def visible_range(self) -> tuple[int, int]:
        """First and last display row index currently on screen."""
        top = self.top_row
        last = min(len(self.display_rows()), top + self.visible_rows()) - 1
        return top, max(top, last)

    def _row_end_offset(self, row: int) -> int:
        idx, _, end = self.display_rows()[row]
        return self.line_starts[idx] + end

    def _keep_point_on_screen(self) -> None:
        top, last = self.visible_range()
        offsets = self._row_offsets()
        if self.point < offsets[top]:
            self.point = offsets[top]
        elif self.point > self._row_end_offset(last):
            self.point = offsets[last]

    def ensure_point_visible(self) -> None:
        row = self.row_of(self.point)
        top, last = self.visible_range()
        if row < top:
            self._set_top_row(row)
        elif row > last:
            self._set_top_row(row - self.visible_rows() + 1)

    # ---------- HostView: chrome / cursor ----------
    def get_chrome_visible(self) -> bool:
        return self.chrome_visible

    def set_chrome_visible(self, visible: bool) -> None:
        self.chrome_visible = bool(visible)

    def get_scrollbar_visible(self) -> bool:
        return self.scrollbar_visible

    def set_scrollbar_visible(self, visible: bool) -> None:
        self.scrollbar_visible = bool(visible)

    def get_cursor_visible(self) -> bool:
        return self.cursor_visible

    def set_cursor_visible(self, visible: bool) -> None:
        self.cursor_visible = bool(visible)

    # ---------- HostView: layout ----------
    def get_word_wrap(self) -> bool:
        return self.word_wrap

    def set_word_wrap(self, enabled: bool) -> None:
        self.word_wrap = bool(enabled)

    def get_line_spacing(self) -> int:
        return self.line_spacing

    def set_line_spacing(self, spacing: int) -> None:
        self.line_spacing = max(0, int(spacing))

    def get_scroll_step(self) -> int:
        return self.scroll_step

    def set_scroll_step(self, step: int) -> None:
        self.scroll_step = max(1, int(step))

    def get_margins(self) -> tuple[int, int]:
        return self.margins

    def set_margins(self, left: int, right: int) -> None:
        self.margins = (max(0, int(left)), max(0, int(right)))

    def get_font_scale(self) -> int:
        return self.font_scale

    def set_font_scale(self, scale: int) -> None:
        self.font_scale = int(scale)

    def invert_colors(self) -> None:
        for surface in self.inverted:
            self.inverted[surface] = not self.inverted[surface]

    def is_inverted(self) -> bool:
        return self.inverted["default"]

    # ---------- HostView: geometry / position ----------
    def view_width(self) -> int:
        return self.width

    def content_size(self) -> int:
        return len(self._text)

    def current_offset(self) -> int:
        return self.top_offset + 1

    def scroll_lines(self, count: int) -> None:
        self._set_top_row(self.top_row + count)

    def scroll_pages(self, count: int) -> None:
        page = max(1, self.visible_rows() - 2)
        self._set_top_row(self.top_row + page * count)

    def delete_other_panes(self) -> None:
        self.outline_visible = False

    # ---------- HostView: input / feedback ----------
    def set_text_input_enabled(self, enabled: bool) -> None:
        self.text_input_enabled = bool(enabled)

    def message(self, text: str) -> None:
        self.status_message = text

    def show_help(self, lines: List[str]) -> None:
        self.help_lines = list(lines)

    def redraw(self, force: bool = True) -> None:
        self.full_redraw_requested = self.full_redraw_requested or force

    def pop_message(self) -> Optional[str]:
        msg, self.status_message = self.status_message, None
        return msg

    def pop_help(self) -> Optional[List[str]]:
        lines, self.help_lines = self.help_lines, None
        return lines

    # ---------- editing ----------
    def _can_edit(self) -> bool:
        return self.text_input_enabled and not self.read_only

    def _replace(self, start: int, end: int, new: str) -> None:
        self._text = self._text[:start] + new + self._text[end:]
        self._touch()
        self.modified = True

    def insert_char(self, ch: str) -> bool:
        if not self._can_edit():
            return False
        self._replace(self.point, self.point, ch)
        self.point += len(ch)
        return True

    def newline(self) -> bool:
        return self.insert_char("\n")

    def backspace(self) -> bool:
        if not self._can_edit() or self.point == 0:
            return False
        self._replace(self.point - 1, self.point, "")
        self.point -= 1
        return True

    def delete_forward(self) -> bool:
        if not self._can_edit() or self.point >= len(self._text):
            return False
        self._replace(self.point, self.point + 1, "")
        return True

    # ---------- point motion ----------
    def move_left(self) -> None:
        self.point = max(0, self.point - 1)

    def move_right(self) -> None:
        self.point = min(len(self._text), self.point + 1)

    def _move_rows(self, delta: int) -> None:
        rows = self.display_rows()
        offsets = self._row_offsets()
        row = self.row_of(self.point)
        col = self.point - offsets[row]
        target = max(0, min(len(rows) - 1, row + delta))
        if target == row:
            return
        idx, start, end = rows[target]
        self.point = offsets[target] + min(col, end - start)

    def move_up(self) -> None:
        self._move_rows(-1)

    def move_down(self) -> None:
        self._move_rows(1)

    def move_line_start(self) -> None:
        self.point = self.line_starts[self.line_of(self.point)]

    def move_line_end(self) -> None:
        idx = self.line_of(self.point)
        self.point = self.line_starts[idx] + len(self.lines[idx])

    def jump_to(self, offset: int) -> None:
        self.point = max(0, min(len(self._text), offset))
        self.ensure_point_visible()
