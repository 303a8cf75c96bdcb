from dataclasses import dataclass


@dataclass(frozen=True)
class ViewState:
    """Presentation settings captured when reading mode starts."""

    chrome_visible: bool
    cursor_visible: bool
    word_wrap: bool
    line_spacing: int
    scroll_step: int
    scrollbar_visible: bool

    @classmethod
    def capture(cls, view) -> "ViewState":
        return cls(
            chrome_visible=view.get_chrome_visible(),
            cursor_visible=view.get_cursor_visible(),
            word_wrap=view.get_word_wrap(),
            line_spacing=view.get_line_spacing(),
            scroll_step=view.get_scroll_step(),
            scrollbar_visible=view.get_scrollbar_visible(),
        )

    def restore(self, view) -> None:
        view.set_chrome_visible(self.chrome_visible)
        view.set_cursor_visible(self.cursor_visible)
        view.set_word_wrap(self.word_wrap)
        view.set_line_spacing(self.line_spacing)
        view.set_scroll_step(self.scroll_step)
        view.set_scrollbar_visible(self.scrollbar_visible)
