import logging
from dataclasses import dataclass

from key_map import default_key_map
from table_styles import default_styles

log = logging.getLogger(__name__)

DEFAULT_WIDTH = 20
DEFAULT_HEIGHT = 20


@dataclass
class Column:
    title: str
    width: int


def clamp(v, low, high):
    return min(max(v, low), high)


def split_values(value: str, separator: str) -> list[list[str]]:
    """One row per line, cells split on ``separator``. No quoting. An empty
    separator makes every character a cell."""
    if separator == "":
        return [list(line) for line in value.split("\n")]
    return [line.split(separator) for line in value.split("\n")]


class TableModel:
    """Viewport and cursor state for a table widget.

    ``row`` and ``col`` are absolute indices into the grid. ``x_offset`` and
    ``y_offset`` are the first visible column and row; ``width`` and
    ``height`` count cells, not characters.
    """

    def __init__(
        self,
        columns=None,
        rows=None,
        width=DEFAULT_WIDTH,
        height=DEFAULT_HEIGHT,
        focused=False,
        styles=None,
        key_map=None,
    ):
        self.key_map = key_map if key_map is not None else default_key_map()
        self.styles = styles if styles is not None else default_styles()

        self.x_offset = 0
        self.y_offset = 0
        self._width = max(1, width)
        self._height = max(1, height)

        self.row = 0
        self.col = 0
        self._focus = focused
        self._cell_select = False

        self._cols: list[Column] = list(columns or [])
        self._rows: list[list[str]] = []
        self._row_width = 0
        self.set_rows(rows or [])

    # ---------- grid ----------
    def columns(self):
        return self._cols

    def set_columns(self, cols):
        self._cols = list(cols or [])

    def rows(self):
        return self._rows

    def set_rows(self, rows):
        """Replace the grid; ragged rows are padded to the widest row."""
        rows = [list(r) for r in rows or []]
        row_width = max((len(r) for r in rows), default=0)
        ragged = 0
        for r in rows:
            if len(r) < row_width:
                r.extend([""] * (row_width - len(r)))
                ragged += 1
        if ragged:
            log.warning("padded %d ragged rows to %d cells", ragged, row_width)

        self._rows = rows
        self._row_width = row_width

        # keep cursor and viewport inside the new grid
        self.row = clamp(self.row, 0, max(0, len(rows) - 1))
        self.col = clamp(self.col, 0, max(0, row_width - 1))
        self.y_offset = clamp(self.y_offset, 0, self.row)
        self.x_offset = clamp(self.x_offset, 0, self._max_x_offset())
        log.debug("set %d rows x %d cells", len(rows), row_width)

    def row_count(self) -> int:
        return len(self._rows)

    def row_width(self) -> int:
        return self._row_width

    def is_empty(self) -> bool:
        return not self._rows

    def from_values(self, value: str, separator: str):
        """Build rows from a block of text: one row per line, cells split on
        ``separator``. No quoting is supported."""
        self.set_rows(split_values(value, separator))

    # ---------- viewport ----------
    def width(self) -> int:
        return self._width

    def set_width(self, w: int):
        self._width = max(1, w)

    def height(self) -> int:
        return self._height

    def set_height(self, h: int):
        self._height = max(1, h)

    def _max_x_offset(self) -> int:
        return max(0, self._row_width - self._width)

    def visible_columns(self) -> range:
        end = clamp(self.x_offset + self._width, 0, self._row_width)
        return range(self.x_offset, end)

    def visible_rows(self) -> range:
        end = clamp(self.y_offset + self._height, 0, len(self._rows))
        return range(self.y_offset, end)

    # ---------- focus / mode ----------
    def focused(self) -> bool:
        return self._focus

    def focus(self):
        self._focus = True

    def blur(self):
        self._focus = False

    @property
    def cell_select(self) -> bool:
        return self._cell_select

    def toggle_cell_select(self):
        self._cell_select = not self._cell_select

    def set_styles(self, styles):
        self.styles = styles

    # ---------- cursor ----------
    def cursor(self) -> int:
        if not self._rows:
            return 0
        return clamp(self.row, 0, len(self._rows) - 1)

    def row_index(self) -> int:
        return self.cursor()

    def set_cursor(self, n: int):
        if not self._rows:
            return
        self.row = clamp(n, 0, len(self._rows) - 1)

    def set_row_index(self, n: int):
        self.set_cursor(n)

    def col_index(self) -> int:
        if not self._row_width:
            return 0
        return clamp(self.col, 0, self._row_width - 1)

    def set_col_index(self, n: int):
        if not self._row_width:
            return
        self.col = clamp(n, 0, self._row_width - 1)

    def selected_row(self):
        if not self._rows:
            return []
        return self._rows[self.row]

    def selected_cell(self) -> str:
        if not self._cell_select or not self._rows or not self._row_width:
            return ""
        return self._rows[self.row][self.col]

    # ---------- navigation ----------
    def move_up(self, n: int = 1):
        if not self._rows:
            return
        self.row = clamp(self.row - n, 0, len(self._rows) - 1)

        if self.row < self.y_offset:
            self.y_offset = self.row

    def move_down(self, n: int = 1):
        if not self._rows:
            return
        self.row = clamp(self.row + n, 0, len(self._rows) - 1)

        if self.row > self.y_offset + (self._height - 1):
            self.y_offset = self.row - (self._height - 1)

    def move_left(self, n: int = 1):
        if not self._rows:
            return
        if self._cell_select:
            self.col = clamp(self.col - n, 0, max(0, self._row_width - 1))

            if self.col < self.x_offset:
                self.x_offset = self.col
        else:
            self.x_offset = clamp(self.x_offset - n, 0, self._max_x_offset())

    def move_right(self, n: int = 1):
        if not self._rows:
            return
        if self._cell_select:
            self.col = clamp(self.col + n, 0, max(0, self._row_width - 1))

            if self.col > self.x_offset + (self._width - 1):
                self.x_offset = self.col - (self._width - 1)
        else:
            self.x_offset = clamp(self.x_offset + n, 0, self._max_x_offset())

    def page_up(self):
        self.move_up(self._height)

    def page_down(self):
        self.move_down(self._height)

    def half_page_up(self):
        self.move_up(self._height // 2)

    def half_page_down(self):
        self.move_down(self._height // 2)

    def goto_top(self):
        self.move_up(self.row)

    def goto_bottom(self):
        self.move_down(len(self._rows))

    # ---------- input ----------
    def handle_key(self, ch, count: int = 1) -> bool:
        """Apply the action bound to ``ch``. Returns True when a binding
        matched. Unfocused tables ignore every key."""
        if not self._focus:
            return False

        km = self.key_map
        count = max(1, count)
        if km.line_up.matches(ch):
            self.move_up(count)
        elif km.line_down.matches(ch):
            self.move_down(count)
        elif km.line_left.matches(ch):
            self.move_left(count)
        elif km.line_right.matches(ch):
            self.move_right(count)
        elif km.page_up.matches(ch):
            for _ in range(count):
                self.page_up()
        elif km.page_down.matches(ch):
            for _ in range(count):
                self.page_down()
        elif km.half_page_up.matches(ch):
            for _ in range(count):
                self.half_page_up()
        elif km.half_page_down.matches(ch):
            for _ in range(count):
                self.half_page_down()
        elif km.goto_top.matches(ch):
            self.goto_top()
        elif km.goto_bottom.matches(ch):
            self.goto_bottom()
        elif km.toggle_cell_select.matches(ch):
            self.toggle_cell_select()
        else:
            return False
        return True
