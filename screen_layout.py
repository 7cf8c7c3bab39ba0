import curses


class ScreenLayout:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: view (main), status bar (1 line)
        self.status_h = 1
        self.view_h = max(1, self.H - self.status_h)

        self.view_win = curses.newwin(self.view_h, self.W, 0, 0)
        # panes must never own cursor
        self.view_win.leaveok(True)

        # status line doubles as the filter prompt
        self.status_win = curses.newwin(self.status_h, self.W, self.view_h, 0)
