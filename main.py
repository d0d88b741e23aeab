import curses
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version

import config_paths
from file_type_handler import FileTypeHandler
from key_map import key_map_from_config
from log_setup import setup_logging
from table_model import TableModel
from table_styles import default_styles, plain_styles

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")
from orchestrator import Orchestrator  # noqa: E402

try:
    __version__ = version("gridport")
except PackageNotFoundError:
    __version__ = "0.0.0"

log = logging.getLogger(__name__)

USAGE = (
    "gridport - terminal table viewer\n\nUsage:\n"
    "  gridport [path] [-s SEP]\n"
    "  command | gridport [-s SEP]\n"
    "  gridport -v\n"
)

ESCAPES = {"\\t": "\t", "tab": "\t", "\\n": "\n"}


def _parse_args(args):
    """Returns (path, separator, action); action is 'version', 'help' or None."""
    path = None
    separator = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("-v", "-V"):
            return None, None, "version"
        if arg == "-h":
            return None, None, "help"
        if arg == "-s":
            if i + 1 >= len(args) or args[i + 1] == "":
                raise ValueError("-s requires a separator")
            separator = ESCAPES.get(args[i + 1], args[i + 1])
            i += 2
            continue
        if arg.startswith("-") and arg != "-":
            raise ValueError(f"unknown option: {arg}")
        if path is not None:
            raise ValueError("only one path may be given")
        path = arg
        i += 1
    return path, separator, None


def _read_stdin(separator):
    text = sys.stdin.read()
    # hand the keyboard back to curses
    tty = os.open("/dev/tty", os.O_RDONLY)
    os.dup2(tty, 0)
    os.close(tty)
    return FileTypeHandler.text_to_table(text, separator or ",")


def main():
    try:
        path, separator, action = _parse_args(sys.argv[1:])
    except ValueError as e:
        print(f"gridport: {e}\n\n{USAGE}", file=sys.stderr)
        sys.exit(2)

    if action == "version":
        print(__version__)
        return
    if action == "help":
        print(USAGE)
        return

    cfg = config_paths.load_config()
    try:
        setup_logging(cfg["LOG_LEVEL"])
    except OSError as e:
        print(f"gridport: logging disabled: {e}", file=sys.stderr)

    try:
        if path and path != "-":
            columns, rows = FileTypeHandler(path, separator).load()
        elif not sys.stdin.isatty():
            columns, rows = _read_stdin(separator)
        else:
            print(USAGE, file=sys.stderr)
            sys.exit(2)
    except (ValueError, OSError) as e:
        log.error("load failed: %s", e)
        print(f"Load failed: {e}", file=sys.stderr)
        sys.exit(1)

    def curses_main(stdscr):
        styles = default_styles() if cfg["COLOR"] else plain_styles()
        model = TableModel(
            columns=columns,
            rows=rows,
            focused=True,
            styles=styles,
            key_map=key_map_from_config(cfg["KEY_MAP"]),
        )
        Orchestrator(stdscr, model, file_path=path, config=cfg).run()

    curses.wrapper(curses_main)


if __name__ == "__main__":
    main()
