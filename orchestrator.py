import curses
import logging
import time

import table_view
from key_counts import KeyCounts
from overlay import OverlayView
from screen_layout import ScreenLayout
from status_bar import render_status

log = logging.getLogger(__name__)

QUIT_KEYS = (3, 24, ord("q"))  # Ctrl+C, Ctrl+X, q


class Orchestrator:
    def __init__(self, stdscr, model, file_path=None, config=None):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.config = config or {}
        self.model = model
        self.model.focus()
        self.file_path = file_path

        self.layout = ScreenLayout(stdscr)
        self.overlay = OverlayView(self.layout)
        self.counts = KeyCounts()

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    # ---------------- UI ----------------

    def redraw(self):
        if self.overlay.visible:
            self.overlay.draw()
            return

        table_view.fit_viewport(
            self.model,
            self.layout.table_win,
            max_width=self.config.get("MAX_WIDTH"),
            max_height=self.config.get("MAX_HEIGHT"),
        )
        table_view.draw(self.model, self.layout.table_win)

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        text = render_status(
            {
                "status_msg": self.status_msg,
                "status_until": self.status_msg_until,
                "cell_select": self.model.cell_select,
                "focused": self.model.focused(),
                "file_path": self.file_path,
                "row": self.model.cursor(),
                "col": self.model.col_index(),
                "total_rows": self.model.row_count(),
                "total_cols": self.model.row_width(),
                "count": self.counts.pending_count,
            },
            w,
        )
        try:
            # last cell of the screen cannot be written
            sw.addnstr(0, 0, text, max(0, w - 1), curses.A_REVERSE)
        except curses.error:
            pass
        sw.refresh()

    def _resize(self):
        curses.update_lines_cols()
        self.stdscr.clear()
        self.stdscr.refresh()
        self.layout = ScreenLayout(self.stdscr)
        self.overlay.layout = self.layout
        if self.overlay.visible:
            self.overlay.open(self.model.key_map.help_lines())

    def _show_selection(self):
        if self.model.is_empty():
            self._set_status("Empty table", 2)
            return
        if self.model.cell_select:
            self._set_status(self.model.selected_cell() or "(empty cell)", 5)
        else:
            self._set_status(" | ".join(self.model.selected_row()), 5)

    # ---------------- keys ----------------

    def handle_key(self, ch):
        """Returns False when the application should exit."""
        if ch == -1:
            return True

        if ch == curses.KEY_RESIZE:
            self._resize()
            return True

        if self.overlay.visible:
            self.overlay.handle_key(ch)
            return True

        if ch in QUIT_KEYS:
            return False

        if self.counts.push_key(ch):
            return True

        if ch == ord("?"):
            self.counts.reset()
            self.overlay.open(self.model.key_map.help_lines())
        elif ch in (10, 13, curses.KEY_ENTER):
            self.counts.reset()
            self._show_selection()
        elif ch == 27:
            self.counts.reset()
        else:
            count = self.counts.consume()
            if not self.model.handle_key(ch, count=count):
                log.debug("unbound key %r", ch)
        return True

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while True:
            ch = self.stdscr.getch()
            if not self.handle_key(ch):
                break
            self.redraw()
