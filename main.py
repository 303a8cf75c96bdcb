import sys
import os
import curses
import locale
from types import SimpleNamespace

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

from app_state import AppState
from config_paths import ensure_config_dirs, load_config
from document_loader import DocumentError, DocumentLoader
from log_manager import setup_application_logging
from orchestrator import Orchestrator

try:
    from _version import __version__
except Exception:
    __version__ = "0.0.0"


USAGE = (
    "lectern - terminal text viewer with a distraction-free reading mode\n\n"
    "Usage:\n  lectern [path]\n  lectern -r [path]   open in reading mode\n"
    "  lectern -v\n"
)


def _parse_args(args):
    opts = SimpleNamespace(action="run", reading=False, path=None)
    if "-v" in args or "-V" in args:
        opts.action = "version"
        return opts
    if "-h" in args or "--help" in args:
        opts.action = "help"
        return opts

    rest = []
    for arg in args:
        if arg == "-r":
            opts.reading = True
        else:
            rest.append(arg)
    if len(rest) > 1 or any(a.startswith("-") for a in rest):
        opts.action = "usage_error"
        return opts
    opts.path = rest[0] if rest else None
    return opts


def main():
    opts = _parse_args(sys.argv[1:])

    if opts.action == "version":
        print(__version__)
        return
    if opts.action == "help":
        print(USAGE)
        return
    if opts.action == "usage_error":
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    ensure_config_dirs()
    config = load_config()
    setup_application_logging(config["LOG_LEVEL"])

    loader = DocumentLoader(opts.path) if opts.path else None
    try:
        text = loader.load() if loader else ""
    except DocumentError as e:
        print(f"Load failed: {e}", file=sys.stderr)
        sys.exit(1)

    state = AppState(text, opts.path, loader, config)
    start_reading = opts.reading or config["START_IN_READING_MODE"]

    locale.setlocale(locale.LC_ALL, "")

    def curses_main(stdscr):
        Orchestrator(stdscr, state, start_reading=start_reading).run()

    curses.wrapper(curses_main)


if __name__ == "__main__":
    main()
