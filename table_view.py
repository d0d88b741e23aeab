import curses
import re
from typing import NamedTuple

from wcwidth import wcwidth

ELLIPSIS = "…"
CELL_PADDING = 1
DEFAULT_COL_WIDTH = 10

_CONTROL = re.compile(r"[\x00-\x1f\x7f]")


class Segment(NamedTuple):
    text: str
    width: int
    attr: int


def char_width(ch: str) -> int:
    w = wcwidth(ch)
    if w < 0:  # non-printable
        return 1
    return w


def text_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def truncate(text, width: int, tail: str = ELLIPSIS) -> str:
    """Clip ``text`` to ``width`` terminal cells, appending ``tail`` when it
    does not fit, and pad the result to exactly ``width`` cells. Wide glyphs
    are never split."""
    if width <= 0:
        return ""
    # control characters would move the curses cursor mid-cell
    text = "" if text is None else _CONTROL.sub(" ", str(text))
    if text_width(text) > width:
        tail_w = text_width(tail)
        if tail_w > width:
            tail, tail_w = "", 0
        out = []
        used = 0
        for ch in text:
            w = char_width(ch)
            if used + w > width - tail_w:
                break
            out.append(ch)
            used += w
        text = "".join(out) + tail
    return text + " " * (width - text_width(text))


def column_width(model, idx: int) -> int:
    cols = model.columns()
    if 0 <= idx < len(cols):
        return max(0, cols[idx].width)
    return DEFAULT_COL_WIDTH


def column_title(model, idx: int) -> str:
    cols = model.columns()
    if 0 <= idx < len(cols):
        return cols[idx].title
    return ""


def _pad(text: str) -> str:
    pad = " " * CELL_PADDING
    return f"{pad}{text}{pad}"


def headers_view(model) -> list[Segment]:
    visible = model.visible_columns()
    if model.is_empty():
        # titles only, e.g. a CSV holding just its header line
        visible = range(0, min(len(model.columns()), model.width()))
    segments = []
    for c in visible:
        cw = column_width(model, c)
        text = _pad(truncate(column_title(model, c), cw))
        segments.append(Segment(text, cw + 2 * CELL_PADDING, model.styles.header))
    return segments


def render_row(model, row_id: int) -> list[Segment]:
    styles = model.styles
    row = model.rows()[row_id]
    is_cursor_row = row_id == model.row
    segments = []
    for c in model.visible_columns():
        cw = column_width(model, c)
        text = _pad(truncate(row[c], cw))
        if is_cursor_row and model.cell_select and c == model.col:
            attr = styles.selected_cell
        elif is_cursor_row and not model.cell_select:
            attr = styles.selected
        else:
            attr = styles.cell
        segments.append(Segment(text, cw + 2 * CELL_PADDING, attr))
    return segments


def body_view(model) -> list[list[Segment]]:
    return [render_row(model, r) for r in model.visible_rows()]


def view(model) -> list[list[Segment]]:
    """Header line followed by the visible body lines."""
    header = headers_view(model)
    body = body_view(model)
    return [header] + body


def view_text(model) -> str:
    return "\n".join("".join(s.text for s in line) for line in view(model))


def fit_viewport(model, win, max_width=None, max_height=None):
    """Size the model's viewport to what fits in ``win``: one header line,
    and as many columns from ``x_offset`` as fit the window width. The
    optional maxima cap the cell counts."""
    h, w = win.getmaxyx()
    height = max(1, h - 1)
    if max_height:
        height = min(height, max_height)
    model.set_height(height)
    model.move_up(0)
    model.move_down(0)

    n_cols = model.row_width() or len(model.columns())
    # column widths differ, so a follow that shifts x_offset changes how
    # many columns fit; measure again until the offset settles
    for _ in range(n_cols + 1):
        x_offset = model.x_offset
        model.set_width(_columns_fitting(model, x_offset, n_cols, w, max_width))
        if model.cell_select:
            model.move_left(0)
            model.move_right(0)
        else:
            model.move_left(0)
        if model.x_offset == x_offset:
            break


def _columns_fitting(model, start, n_cols, w, max_width=None) -> int:
    visible_count = 0
    used = 0
    for c in range(start, n_cols):
        cw = column_width(model, c) + 2 * CELL_PADDING
        if used + cw > w or (max_width and visible_count >= max_width):
            break
        used += cw
        visible_count += 1
    return max(1, visible_count)


def draw(model, win):
    win.erase()
    h, w = win.getmaxyx()
    for y, line in enumerate(view(model)):
        if y >= h:
            break
        x = 0
        for seg in line:
            if x >= w:
                break
            try:
                win.addnstr(y, x, seg.text, w - x, seg.attr)
            except curses.error:
                pass
            x += seg.width
    win.refresh()
