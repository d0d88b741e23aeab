"""File logging for gridport. The terminal belongs to curses, so nothing is
written to stdout or stderr."""

import logging
from pathlib import Path

import config_paths

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level="INFO", log_path=None):
    """Attach a single file handler to the root logger and return it."""
    path = Path(log_path or config_paths.LOG_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_gridport", False):
            root.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._gridport = True
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return handler
