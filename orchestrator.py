import curses
import time
import logging

from config_paths import EXTENSIONS_PY, POSITIONS_JSON, ensure_config_dirs
from document_loader import DocumentError
from extension_hooks import load_extension_hooks, register_hooks
from overlay import HelpOverlay
from position_store import PositionStore
from reading_mode import ReadingConfig, ReadingModeController, position_percent
from screen_layout import ScreenLayout
from status_bar import render_status, render_title
from text_pane import TextPane

logger = logging.getLogger(__name__)

CTRL_C = 3
CTRL_O = 15
CTRL_R = 18
CTRL_S = 19
CTRL_X = 24

_WHEEL_UP = getattr(curses, "BUTTON4_PRESSED", 0)
_WHEEL_DOWN = getattr(curses, "BUTTON5_PRESSED", 0)


class Orchestrator:
    def __init__(self, stdscr, app_state, start_reading=False, warnings=()):
        self.stdscr = stdscr
        curses.curs_set(1)
        curses.raw()
        self.stdscr.keypad(True)
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)
        try:
            curses.mousemask(_WHEEL_UP | _WHEEL_DOWN)
        except curses.error:
            pass

        ensure_config_dirs()

        self.state = app_state
        self.view = app_state.view
        config = app_state.config

        self.pane = TextPane()
        self.layout = None
        self._relayout()
        self.overlay = HelpOverlay(self.layout)

        self.reading = ReadingModeController(self.view, ReadingConfig.from_dict(config))

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

        # ---- hooks from extensions.py ----
        hooks, hook_warnings = load_extension_hooks(EXTENSIONS_PY, view=self.view)
        register_hooks(self.reading, hooks)
        startup_warnings = list(warnings) + hook_warnings
        if startup_warnings:
            self._set_status(startup_warnings[0], seconds=6)

        # ---- reading position ----
        self.remember_position = bool(config.get("REMEMBER_POSITION", True))
        self.positions = PositionStore(POSITIONS_JSON)
        if self.remember_position and app_state.file_path:
            self.positions.load()
            offset = self.positions.get(app_state.file_path)
            if offset:
                self.view.jump_to(offset)
                self.view.top_offset = self.view.point

        if start_reading:
            self._toggle_reading()

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _relayout(self):
        view = self.view
        self.layout = ScreenLayout(
            self.stdscr,
            chrome_visible=view.chrome_visible,
            outline_visible=view.outline_visible,
            scrollbar_visible=view.scrollbar_visible,
        )
        view.resize(self.layout.body_h, self.layout.body_w)
        if getattr(self, "overlay", None) is not None:
            self.overlay.layout = self.layout

    def _toggle_reading(self):
        self.reading.toggle()
        if self.reading.active:
            self._set_status("Reading mode (h for help, q to leave)", 3)
        else:
            self.view.ensure_point_visible()
            self._set_status("Reading mode off", 2)

    def _save(self):
        try:
            self.state.save()
            fname = self.state.file_path or ""
            self._set_status(f"Saved {fname}" if fname else "Saved", 3)
            return True
        except DocumentError as e:
            msg = f"Save failed: {e}"[: self.layout.W - 2]
            self._set_status(msg, 4)
            return False

    def _remember_position(self):
        if self.remember_position and self.state.file_path:
            self.positions.remember(self.state.file_path, self.view.top_offset)

    def _translate_mouse(self):
        try:
            _, _, _, _, bstate = curses.getmouse()
        except curses.error:
            return None
        if _WHEEL_UP and bstate & _WHEEL_UP:
            return "<wheel-up>"
        if _WHEEL_DOWN and bstate & _WHEEL_DOWN:
            return "<wheel-down>"
        return None

    def _collect_view_output(self):
        msg = self.view.pop_message()
        if msg:
            self._set_status(msg, 2)
        lines = self.view.pop_help()
        if lines:
            self.overlay.open_help(lines)

    # ---------------- UI ----------------

    def redraw(self):
        view = self.view
        if not self.layout.matches(view):
            self._relayout()
        if view.full_redraw_requested:
            view.full_redraw_requested = False
            self.stdscr.clear()
            self.stdscr.noutrefresh()

        if self.overlay.visible:
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            self.overlay.draw()
            return

        layout = self.layout
        if layout.title_win is not None:
            tw = layout.title_win
            tw.erase()
            _, w = tw.getmaxyx()
            try:
                tw.addnstr(0, 0, render_title(self.state.file_path, w), w - 1, curses.A_REVERSE)
            except curses.error:
                pass
            tw.noutrefresh()

        if layout.outline_win is not None:
            self.pane.draw_outline(layout.outline_win, view)
        if layout.scrollbar_win is not None:
            self.pane.draw_scrollbar(layout.scrollbar_win, view)

        self.pane.draw(layout.body_win, view)

        message = None
        if self.status_msg and time.time() < self.status_msg_until:
            message = self.status_msg

        if layout.status_win is not None:
            sw = layout.status_win
            sw.erase()
            _, w = sw.getmaxyx()
            context = {
                "status_msg": self.status_msg,
                "status_until": self.status_msg_until,
                "reading": self.reading.active,
                "file_path": self.state.file_path,
                "modified": view.modified,
                "read_only": view.read_only,
                "line": view.current_line_number(),
                "total_lines": len(view.lines),
                "percent": position_percent(view.content_size(), view.current_offset()),
            }
            try:
                sw.addnstr(0, 0, render_status(context, w), w - 1, curses.A_REVERSE)
            except curses.error:
                pass
            sw.noutrefresh()
        elif message:
            # no mode line: echo transient messages on the last body row
            bw = layout.body_win
            h, w = bw.getmaxyx()
            try:
                bw.addnstr(h - 1, 0, f" {message}".ljust(w - 1), w - 1, curses.A_DIM)
            except curses.error:
                pass
            bw.noutrefresh()

        cursor = self.pane.cursor_yx
        try:
            if cursor is not None:
                curses.curs_set(1)
                layout.body_win.move(*cursor)
                layout.body_win.noutrefresh()
            else:
                curses.curs_set(0)
        except curses.error:
            pass
        curses.doupdate()

    # ---------------- keys ----------------

    def handle_key(self, ch):
        if ch == curses.KEY_RESIZE:
            self._relayout()
            return
        if ch == curses.KEY_MOUSE:
            ch = self._translate_mouse()
            if ch is None:
                return

        if ch in (CTRL_R, curses.KEY_F5):
            self._toggle_reading()
            return

        if self.reading.handle_key(ch):
            return

        self._handle_normal_key(ch)

    def _handle_normal_key(self, ch):
        view = self.view
        if ch == "<wheel-up>":
            view.scroll_lines(-view.scroll_step)
            return
        if ch == "<wheel-down>":
            view.scroll_lines(view.scroll_step)
            return
        if isinstance(ch, str):
            return

        if ch == CTRL_O:
            view.toggle_outline()
            return
        if ch == curses.KEY_NPAGE:
            view.scroll_pages(1)
            return
        if ch == curses.KEY_PPAGE:
            view.scroll_pages(-1)
            return

        if ch == curses.KEY_LEFT:
            view.move_left()
        elif ch == curses.KEY_RIGHT:
            view.move_right()
        elif ch == curses.KEY_UP:
            view.move_up()
        elif ch == curses.KEY_DOWN:
            view.move_down()
        elif ch == curses.KEY_HOME:
            view.move_line_start()
        elif ch == curses.KEY_END:
            view.move_line_end()
        elif ch in (curses.KEY_BACKSPACE, 127, 8):
            self._edit(view.backspace())
        elif ch == curses.KEY_DC:
            self._edit(view.delete_forward())
        elif ch in (10, 13, curses.KEY_ENTER):
            self._edit(view.newline())
        elif ch == 9:
            self._edit(view.insert_char("    "))
        elif 32 <= ch <= 126:
            self._edit(view.insert_char(chr(ch)))
        else:
            return
        view.ensure_point_visible()

    def _edit(self, changed):
        if not changed and self.view.read_only:
            self._set_status("Read-only document", 2)

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while True:
            ch = self.stdscr.getch()

            if ch in (CTRL_C, CTRL_X):
                self._remember_position()
                break

            if self.overlay.visible:
                self.overlay.handle_key(ch)
                self.redraw()
                continue

            if ch == -1:
                self.redraw()
                continue

            if ch == CTRL_S:
                self._save()
                self.redraw()
                continue

            try:
                self.handle_key(ch)
            except Exception as e:
                # hooks may raise; report and keep the editor alive
                logger.exception("Key %r failed", ch)
                self._set_status(f"Error: {e}", 5)

            self._collect_view_output()
            self.redraw()
