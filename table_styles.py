import curses
from dataclasses import dataclass

PAIR_SELECTED = 1
SELECTED_COLOR = 212


@dataclass
class Styles:
    header: int
    cell: int
    selected: int
    selected_cell: int


def _selected_attr():
    try:
        curses.start_color()
        curses.use_default_colors()
        fg = SELECTED_COLOR if curses.COLORS > SELECTED_COLOR else curses.COLOR_MAGENTA
        curses.init_pair(PAIR_SELECTED, fg, -1)
        return curses.color_pair(PAIR_SELECTED) | curses.A_BOLD
    except curses.error:
        # no screen yet, or a terminal without colours
        return curses.A_BOLD | curses.A_REVERSE


def default_styles() -> Styles:
    selected = _selected_attr()
    return Styles(
        header=curses.A_BOLD,
        cell=curses.A_NORMAL,
        selected=selected,
        selected_cell=selected,
    )


def plain_styles() -> Styles:
    """Attribute set that does not touch colour pairs."""
    return Styles(
        header=curses.A_BOLD,
        cell=curses.A_NORMAL,
        selected=curses.A_REVERSE,
        selected_cell=curses.A_REVERSE | curses.A_BOLD,
    )
