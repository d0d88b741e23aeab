import json
import logging
import os

log = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "gridport")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "gridport.log")

# default settings
MAX_WIDTH_DEFAULT = None  # fit the window
MAX_HEIGHT_DEFAULT = None
COLOR_DEFAULT = True
LOG_LEVEL_DEFAULT = "INFO"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _positive_int(value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return None
    return value


def load_config():
    cfg = {
        "MAX_WIDTH": MAX_WIDTH_DEFAULT,
        "MAX_HEIGHT": MAX_HEIGHT_DEFAULT,
        "KEY_MAP": {},
        "COLOR": COLOR_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        log.warning("ignoring unreadable config %s: %s", CONFIG_JSON, e)
        return cfg

    if not isinstance(data, dict):
        log.warning("ignoring config %s: top level must be an object", CONFIG_JSON)
        return cfg

    viewport = data.get("viewport")
    if isinstance(viewport, dict):
        width = viewport.get("width")
        height = viewport.get("height")
        if width is not None:
            cfg["MAX_WIDTH"] = _positive_int(width)
            if cfg["MAX_WIDTH"] is None:
                log.warning("viewport.width must be a positive integer")
        if height is not None:
            cfg["MAX_HEIGHT"] = _positive_int(height)
            if cfg["MAX_HEIGHT"] is None:
                log.warning("viewport.height must be a positive integer")

    key_map = data.get("key_map")
    if isinstance(key_map, dict):
        cfg["KEY_MAP"] = key_map
    elif key_map is not None:
        log.warning("key_map must be an object")

    color = data.get("color")
    if isinstance(color, bool):
        cfg["COLOR"] = color

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()
    elif level is not None:
        log.warning("unknown log_level %r", level)

    return cfg
