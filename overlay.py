import curses
from typing import List


class OverlayView:
    """Boxed, scrollable text overlay used for the key-binding help."""

    def __init__(self, layout, win_factory=curses.newwin):
        self.layout = layout
        self._newwin = win_factory
        self.visible = False
        self.lines: List[str] = []
        self.scroll = 0
        self.win = None

    def open(self, lines: List[str]):
        self.lines = list(lines or [])
        self.scroll = 0

        max_h = max(3, self.layout.overlay_h)
        overlay_h = max(3, min(len(self.lines) + 2, max_h))
        overlay_y = max(0, (self.layout.table_h - overlay_h) // 2)
        self.win = self._newwin(overlay_h, self.layout.W, overlay_y, 0)
        self.win.leaveok(True)
        self.visible = True

    def close(self):
        self.visible = False
        self.lines = []
        self.scroll = 0
        self.win = None

    def handle_key(self, ch):
        if not self.visible or self.win is None:
            return
        if ch == -1:
            return

        h, _ = self.win.getmaxyx()
        content_rows = max(0, h - 2)
        max_scroll = max(0, len(self.lines) - content_rows)
        half_page = max(1, content_rows // 2)

        # close
        if ch in (27, ord("q"), 10, 13, curses.KEY_ENTER, ord("?")):
            self.close()
            return

        if ch in (curses.KEY_NPAGE, ord("d")):
            self.scroll = min(max_scroll, self.scroll + half_page)
        elif ch in (curses.KEY_PPAGE, ord("u")):
            self.scroll = max(0, self.scroll - half_page)
        elif ch in (curses.KEY_HOME, ord("g")):
            self.scroll = 0
        elif ch in (curses.KEY_END, ord("G")):
            self.scroll = max_scroll
        elif ch in (ord("j"), curses.KEY_DOWN):
            self.scroll = min(max_scroll, self.scroll + 1)
        elif ch in (ord("k"), curses.KEY_UP):
            self.scroll = max(0, self.scroll - 1)

    def draw(self):
        if not self.visible or not self.win:
            return

        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        win.box()

        max_visible = max(0, h - 2)
        start = self.scroll
        end = start + max_visible
        for i, line in enumerate(self.lines[start:end]):
            try:
                win.addnstr(1 + i, 1, line, w - 2)
            except curses.error:
                pass

        win.refresh()
