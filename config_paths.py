import os
import json

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "lectern")
EXTENSIONS_PY = os.path.join(CONFIG_DIR, "extensions.py")
POSITIONS_JSON = os.path.join(CONFIG_DIR, "positions.json")
LOG_PATH = os.path.join(CONFIG_DIR, "lectern.log")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
DEFAULT_MARGIN_DEFAULT = None
FEEDBACK_ENABLED_DEFAULT = True
TARGET_TEXT_COLUMNS_DEFAULT = 68
MIN_TEXT_WIDTH_DEFAULT = 40
READING_LINE_SPACING_DEFAULT = 1
START_IN_READING_MODE_DEFAULT = False
REMEMBER_POSITION_DEFAULT = True
LOG_LEVEL_DEFAULT = "INFO"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def _non_negative_int(value):
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


def load_config():
    cfg = {
        "DEFAULT_MARGIN": DEFAULT_MARGIN_DEFAULT,
        "FEEDBACK_ENABLED": FEEDBACK_ENABLED_DEFAULT,
        "TARGET_TEXT_COLUMNS": TARGET_TEXT_COLUMNS_DEFAULT,
        "MIN_TEXT_WIDTH": MIN_TEXT_WIDTH_DEFAULT,
        "READING_LINE_SPACING": READING_LINE_SPACING_DEFAULT,
        "START_IN_READING_MODE": START_IN_READING_MODE_DEFAULT,
        "REMEMBER_POSITION": REMEMBER_POSITION_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg
    if not isinstance(data, dict):
        return cfg

    reading = data.get("reading_mode")
    if isinstance(reading, dict):
        margin = _non_negative_int(reading.get("default_margin"))
        if margin is not None:
            cfg["DEFAULT_MARGIN"] = margin

        feedback = reading.get("feedback_enabled")
        if isinstance(feedback, bool):
            cfg["FEEDBACK_ENABLED"] = feedback

        target = _non_negative_int(reading.get("target_text_columns"))
        if target:
            cfg["TARGET_TEXT_COLUMNS"] = target

        min_width = _non_negative_int(reading.get("min_text_width"))
        if min_width:
            cfg["MIN_TEXT_WIDTH"] = min_width

        spacing = _non_negative_int(reading.get("line_spacing"))
        if spacing is not None:
            cfg["READING_LINE_SPACING"] = spacing

        start = reading.get("start_active")
        if isinstance(start, bool):
            cfg["START_IN_READING_MODE"] = start

    remember = data.get("remember_position")
    if isinstance(remember, bool):
        cfg["REMEMBER_POSITION"] = remember

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
