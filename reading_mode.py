import curses
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from view_state import ViewState

logger = logging.getLogger(__name__)

INACTIVE = "inactive"
ACTIVE = "active"

HOOK_NAMES = (
    "before_activate",
    "after_activate",
    "before_deactivate",
    "after_deactivate",
)

# (keys, command, help text); order is the order shown by show_help
KEY_BINDINGS = [
    (("n", "<next>", "SPC"), "scroll_page_down", "Page down"),
    (("p", "<prior>"), "scroll_page_up", "Page up"),
    (("<down>", "<wheel-down>"), "scroll_line_down", "Scroll down one line"),
    (("<up>", "<wheel-up>"), "scroll_line_up", "Scroll up one line"),
    (("<left>",), "increase_margin", "Widen margins"),
    (("<right>",), "decrease_margin", "Narrow margins"),
    (("+",), "increase_font_size", "Enlarge text"),
    (("-",), "decrease_font_size", "Shrink text"),
    (("i",), "invert_colors", "Invert colors"),
    (("q",), "quit", "Leave reading mode"),
    (("h", "?"), "show_help", "This help"),
]

KEYMAP = {key: command for keys, command, _ in KEY_BINDINGS for key in keys}

_NAMED_KEYS = {
    ord(" "): "SPC",
    curses.KEY_NPAGE: "<next>",
    curses.KEY_PPAGE: "<prior>",
    curses.KEY_DOWN: "<down>",
    curses.KEY_UP: "<up>",
    curses.KEY_LEFT: "<left>",
    curses.KEY_RIGHT: "<right>",
}

_TEXT_INPUT_KEYS = {
    8,
    9,
    10,
    13,
    127,
    curses.KEY_BACKSPACE,
    curses.KEY_DC,
    curses.KEY_ENTER,
}

FONT_STEP = 1
LARGE_CONTENT = 50000


class ReadingModeError(RuntimeError):
    pass


def key_name(ch) -> Optional[str]:
    """Name a key the way KEY_BINDINGS spells it, or None if it has no name."""
    if isinstance(ch, str):
        # synthetic names (mouse wheel) arrive already spelled
        return ch
    if ch in _NAMED_KEYS:
        return _NAMED_KEYS[ch]
    if 33 <= ch <= 126:
        return chr(ch)
    return None


def is_text_input(ch) -> bool:
    """True for keys that would insert or delete text in the buffer.

    Control combinations (Ctrl+letter, Esc/Alt prefixes) and non-text special
    keys are not text input and keep their normal bindings.
    """
    if isinstance(ch, str):
        return False
    if ch in _TEXT_INPUT_KEYS:
        return True
    return 32 <= ch <= 126 or 128 <= ch <= 255


def position_percent(total: int, pos: int) -> int:
    if total > LARGE_CONTENT:
        # divide first so big buffers never overflow the product below
        return (total // 200 + (pos - 1)) // max(total // 100, 1)
    return (total // 2 + 100 * (pos - 1)) // max(total, 1)


def help_lines() -> List[str]:
    lines = ["Reading mode keys", ""]
    for keys, _, text in KEY_BINDINGS:
        lines.append(f"  {' '.join(keys):<22} {text}")
    return lines


class InversionFlag:
    """Color inversion state; outlives a single reading session."""

    def __init__(self, inverted: bool = False):
        self.inverted = inverted


@dataclass
class ReadingConfig:
    default_margin: Optional[int] = None
    feedback_enabled: bool = True
    target_text_columns: int = 68
    min_text_width: int = 40
    line_spacing: int = 1

    @classmethod
    def from_dict(cls, cfg: dict) -> "ReadingConfig":
        return cls(
            default_margin=cfg.get("DEFAULT_MARGIN"),
            feedback_enabled=bool(cfg.get("FEEDBACK_ENABLED", True)),
            target_text_columns=int(cfg.get("TARGET_TEXT_COLUMNS", 68)),
            min_text_width=int(cfg.get("MIN_TEXT_WIDTH", 40)),
            line_spacing=int(cfg.get("READING_LINE_SPACING", 1)),
        )


@dataclass
class ReadingSession:
    margin: int
    max_margin: int
    font_delta: int = 0


class ReadingModeController:
    def __init__(self, view, config: ReadingConfig | None = None, inversion=None):
        self.view = view
        self.config = config or ReadingConfig()
        self.inversion = inversion if inversion is not None else InversionFlag()

        self.state = INACTIVE
        self.snapshot: ViewState | None = None
        self.session: ReadingSession | None = None

        self.before_activate: List[Callable[[], None]] = []
        self.after_activate: List[Callable[[], None]] = []
        self.before_deactivate: List[Callable[[], None]] = []
        self.after_deactivate: List[Callable[[], None]] = []

    @property
    def active(self) -> bool:
        return self.state == ACTIVE

    # ---------- hooks ----------
    def add_hook(self, name: str, fn: Callable[[], None]) -> None:
        if name not in HOOK_NAMES:
            raise ValueError(f"unknown hook: {name}")
        getattr(self, name).append(fn)

    def _run_hooks(self, name: str) -> None:
        for fn in list(getattr(self, name)):
            fn()

    # ---------- state machine ----------
    def toggle(self) -> None:
        if self.active:
            self.deactivate()
        else:
            self.activate()

    def _margin_bounds(self):
        width = self.view.view_width()
        max_margin = max(0, (width - self.config.min_text_width) // 2)
        if self.config.default_margin is not None:
            margin = self.config.default_margin
        else:
            margin = max(0, (width - self.config.target_text_columns) // 2)
        return min(margin, max_margin), max_margin

    def activate(self) -> None:
        if self.active:
            raise ReadingModeError("reading mode is already active")

        self._run_hooks("before_activate")

        view = self.view
        self.snapshot = ViewState.capture(view)
        margin, max_margin = self._margin_bounds()
        self.session = ReadingSession(margin=margin, max_margin=max_margin)

        view.set_chrome_visible(False)
        view.set_scrollbar_visible(False)
        view.set_cursor_visible(False)
        view.set_word_wrap(True)
        view.set_line_spacing(self.config.line_spacing)
        view.set_scroll_step(1)
        self._step_font(FONT_STEP)
        self._apply_margins()
        view.delete_other_panes()
        view.set_text_input_enabled(False)

        self.state = ACTIVE
        logger.info(
            "Reading mode on (margin=%d, max_margin=%d)", margin, max_margin
        )
        self._run_hooks("after_activate")

    def deactivate(self) -> None:
        if not self.active:
            raise ReadingModeError("reading mode is not active")

        self._run_hooks("before_deactivate")

        view = self.view
        self.snapshot.restore(view)
        view.set_margins(0, 0)
        view.set_font_scale(0)
        view.set_text_input_enabled(True)
        # always leave with normal colors, whatever the session did
        if view.is_inverted():
            self.invert_colors()
        self.inversion.inverted = False

        self.state = INACTIVE
        self.snapshot = None
        self.session = None
        logger.info("Reading mode off")
        self._run_hooks("after_deactivate")
        view.redraw(force=True)

    # ---------- commands ----------
    def _report_position(self) -> None:
        if not self.config.feedback_enabled:
            return
        percent = position_percent(
            self.view.content_size(), self.view.current_offset()
        )
        self.view.message(f"{percent}%")

    def scroll_line_up(self) -> None:
        self.view.scroll_lines(-1)
        self._report_position()

    def scroll_line_down(self) -> None:
        self.view.scroll_lines(1)
        self._report_position()

    def scroll_page_up(self) -> None:
        self.view.scroll_pages(-1)
        self._report_position()

    def scroll_page_down(self) -> None:
        self.view.scroll_pages(1)
        self._report_position()

    def _apply_margins(self) -> None:
        margin = self.session.margin
        self.view.set_margins(margin, margin)

    def increase_margin(self) -> None:
        session = self.session
        session.margin = min(session.margin + 1, session.max_margin)
        self._apply_margins()
        logger.debug("margin=%d", session.margin)

    def decrease_margin(self) -> None:
        session = self.session
        session.margin = max(session.margin - 1, 0)
        self._apply_margins()
        logger.debug("margin=%d", session.margin)

    def _step_font(self, delta: int) -> None:
        self.view.set_font_scale(self.view.get_font_scale() + delta)
        if self.session is not None:
            self.session.font_delta += delta

    def increase_font_size(self) -> None:
        self._step_font(FONT_STEP)
        logger.debug("font scale=%d", self.view.get_font_scale())

    def decrease_font_size(self) -> None:
        self._step_font(-FONT_STEP)
        logger.debug("font scale=%d", self.view.get_font_scale())

    def invert_colors(self) -> None:
        self.view.invert_colors()
        self.inversion.inverted = not self.inversion.inverted

    def show_help(self) -> None:
        self.view.show_help(help_lines())

    def quit(self) -> None:
        self.toggle()

    # ---------- key dispatch ----------
    def handle_key(self, ch) -> bool:
        """Run the bound command for ch; True when the key was consumed."""
        if not self.active:
            return False
        name = key_name(ch)
        command = KEYMAP.get(name) if name is not None else None
        if command is not None:
            getattr(self, command)()
            return True
        # swallow text input, let modifier combinations through
        return is_text_input(ch)
