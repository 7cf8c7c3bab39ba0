import curses
from typing import Callable


class FilterPrompt:
    """One-line filter input; every keystroke re-filters the grid."""

    def __init__(self, state, set_status_cb: Callable[[str, int], None]):
        self.state = state
        self._set_status = set_status_cb

        self.active = False
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0
        self._previous = ""

    def start(self):
        self.active = True
        self._previous = self.state.filter_text
        self.buffer = self.state.filter_text
        self.cursor = len(self.buffer)
        self.hscroll = 0

    def _apply(self):
        self.state.set_filter(self.buffer)

    def _reset(self):
        self.active = False
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    def handle_key(self, ch):
        if not self.active:
            return

        if ch in (10, 13, curses.KEY_ENTER):
            self._apply()
            if self.buffer:
                self._set_status(f"Filter: {self.buffer}", 3)
            else:
                self._set_status("Filter cleared", 3)
            self._reset()
            return

        if ch == 27:  # Esc
            self.state.set_filter(self._previous)
            self._set_status("Filter canceled", 3)
            self._reset()
            return

        if ch == 21:  # Ctrl+U
            self.buffer = self.buffer[self.cursor :]
            self.cursor = 0
            self._apply()
            return

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
                self._apply()
            return

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return

        if ch == curses.KEY_HOME:
            self.cursor = 0
            return

        if ch == curses.KEY_END:
            self.cursor = len(self.buffer)
            return

        if 32 <= ch <= 126:
            self.buffer = self.buffer[: self.cursor] + chr(ch) + self.buffer[self.cursor :]
            self.cursor += 1
            self._apply()
            return

    def draw(self, win):
        prompt = "Filter: "
        h, w = win.getmaxyx()
        text_w = max(1, w - len(prompt) - 1)

        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + text_w:
            self.hscroll = self.cursor - text_w

        start = self.hscroll
        visible = self.buffer[start : start + text_w]

        try:
            win.addnstr(0, 0, prompt, len(prompt))
            win.addnstr(0, len(prompt), visible, text_w)
            win.move(0, len(prompt) + (self.cursor - self.hscroll))
        except curses.error:
            pass
        win.refresh()
