import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, cell_select, focused, file_path,
                  row, col, total_rows, total_cols, count
    """
    text = ""
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        mode = "CELL" if context.get("cell_select") else "ROW"
        if not context.get("focused", True):
            mode = f"{mode} (blurred)"
        fname = context.get("file_path") or ""
        if fname:
            fname = os.path.basename(fname)
        total_rows = context.get("total_rows", 0)
        total_cols = context.get("total_cols", 0)
        row = context.get("row", 0)
        if total_rows:
            pos = f"row {row + 1}/{total_rows}"
            if context.get("cell_select"):
                pos += f" col {context.get('col', 0) + 1}/{total_cols}"
        else:
            pos = "empty"
        text = f" {mode} | {fname} | {pos}"
        count = context.get("count")
        if count:
            text += f" | Count: {count}"

    return text.ljust(width)[:width]
