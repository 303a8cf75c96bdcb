from abc import ABC, abstractmethod
from typing import List


class HostView(ABC):
    """Everything the reading-mode controller needs from the view it drives.

    Widths and margins are in character cells. Offsets are 1-based.
    """

    # ---------- chrome / cursor ----------
    @abstractmethod
    def get_chrome_visible(self) -> bool: ...

    @abstractmethod
    def set_chrome_visible(self, visible: bool) -> None: ...

    @abstractmethod
    def get_scrollbar_visible(self) -> bool: ...

    @abstractmethod
    def set_scrollbar_visible(self, visible: bool) -> None: ...

    @abstractmethod
    def get_cursor_visible(self) -> bool: ...

    @abstractmethod
    def set_cursor_visible(self, visible: bool) -> None: ...

    # ---------- text layout ----------
    @abstractmethod
    def get_word_wrap(self) -> bool: ...

    @abstractmethod
    def set_word_wrap(self, enabled: bool) -> None: ...

    @abstractmethod
    def get_line_spacing(self) -> int: ...

    @abstractmethod
    def set_line_spacing(self, spacing: int) -> None: ...

    @abstractmethod
    def get_scroll_step(self) -> int: ...

    @abstractmethod
    def set_scroll_step(self, step: int) -> None: ...

    @abstractmethod
    def get_margins(self) -> tuple[int, int]: ...

    @abstractmethod
    def set_margins(self, left: int, right: int) -> None: ...

    @abstractmethod
    def get_font_scale(self) -> int: ...

    @abstractmethod
    def set_font_scale(self, scale: int) -> None: ...

    @abstractmethod
    def invert_colors(self) -> None:
        """Swap foreground/background of the default and fringe surfaces."""

    @abstractmethod
    def is_inverted(self) -> bool: ...

    # ---------- geometry / position ----------
    @abstractmethod
    def view_width(self) -> int: ...

    @abstractmethod
    def content_size(self) -> int: ...

    @abstractmethod
    def current_offset(self) -> int: ...

    @abstractmethod
    def scroll_lines(self, count: int) -> None: ...

    @abstractmethod
    def scroll_pages(self, count: int) -> None: ...

    @abstractmethod
    def delete_other_panes(self) -> None: ...

    # ---------- input / feedback ----------
    @abstractmethod
    def set_text_input_enabled(self, enabled: bool) -> None: ...

    @abstractmethod
    def message(self, text: str) -> None: ...

    @abstractmethod
    def show_help(self, lines: List[str]) -> None: ...

    @abstractmethod
    def redraw(self, force: bool = True) -> None: ...
