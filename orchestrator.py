# ~/Apps/jsongrid/orchestrator.py
import curses
import logging
import time

from app_state import MODE_GRID, MODE_TREE
from cell_format import is_drillable
from config_paths import load_config
from filter_prompt import FilterPrompt
from grid_pane import GridPane
from screen_layout import ScreenLayout
from status_bar import render_status
from tree_pane import TreePane

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "j/k rows  h/l cols  g/G ends  s sort  / filter  e expand row  "
    "E expand all  Enter open/toggle  Esc back  r reload  q quit"
)


class Orchestrator:
    def __init__(self, stdscr, app_state, config=None):
        self.stdscr = stdscr
        curses.curs_set(0)
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.config = config or load_config()
        self.state = app_state
        self.layout = ScreenLayout(stdscr)
        self.grid = GridPane(
            app_state,
            max_col_width=self.config["MAX_COL_WIDTH"],
            overscan=self.config["OVERSCAN"],
        )
        self.tree = TreePane(
            app_state,
            indent=self.config["INDENT"],
            overscan=self.config["OVERSCAN"],
        )
        self.filter_prompt = FilterPrompt(app_state, self._set_status)

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0
        if not app_state.has_data and app_state.error:
            self._set_status(app_state.error, 5)

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _status_context(self):
        ctx = {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "mode": self.state.mode,
            "file_path": self.state.file_path,
            "error": self.state.error,
        }
        if self.state.mode == MODE_GRID:
            window = self.grid.virtualizer.visible_items()
            ctx.update(
                shape=self.state.shape.value if self.state.shape else "",
                total_rows=len(self.state.rows),
                shown_rows=len(self.state.processed_rows),
                first_row=window[0].index + 1 if window else 0,
                last_row=window[-1].index + 1 if window else 0,
                sort=self._sort_label(),
                filter=self.state.filter_text,
            )
        else:
            ctx["nodes"] = len(self.state.tree_nodes())
        return ctx

    def _sort_label(self):
        sort_state = self.state.sort_state
        if not sort_state.active:
            return ""
        direction = "desc" if sort_state.descending else "asc"
        return f"{sort_state.column} {direction}"

    def reload(self):
        loader = self.state.loader
        if loader is None:
            self._set_status("Nothing to reload", 3)
            return
        try:
            text, result = loader.load()
        except OSError as e:
            logger.warning("reload of %s failed: %s", self.state.file_path, e)
            self._set_status(f"Reload failed: {e}", 4)
            return
        self.state.set_result(result, text)
        if result.ok:
            self._set_status("Reloaded", 3)
        else:
            self._set_status(f"Invalid JSON: {result.error}", 5)

    # ---------------- UI ----------------

    def redraw(self):
        mode = self.state.mode
        win = self.layout.view_win
        if mode == MODE_TREE:
            self.tree.draw(win, active=not self.filter_prompt.active)
        else:
            self.grid.draw(win, active=not self.filter_prompt.active)

        sw = self.layout.status_win
        sw.erase()
        h, w = sw.getmaxyx()
        if self.filter_prompt.active:
            try:
                curses.curs_set(1)
            except curses.error:
                pass
            self.filter_prompt.draw(sw)
            return

        try:
            curses.curs_set(0)
        except curses.error:
            pass
        text = render_status(self._status_context(), max(1, w - 1))
        try:
            sw.addnstr(0, 0, text, max(1, w - 1), curses.A_REVERSE)
        except curses.error:
            pass
        sw.refresh()

    # ---------------- keys ----------------

    def handle_grid_key(self, ch):
        grid = self.grid
        grid.sync()
        if ch in (ord("j"), curses.KEY_DOWN):
            grid.move_down()
        elif ch in (ord("k"), curses.KEY_UP):
            grid.move_up()
        elif ch in (ord("h"), curses.KEY_LEFT):
            grid.move_left()
        elif ch in (ord("l"), curses.KEY_RIGHT):
            grid.move_right()
        elif ch in (4, curses.KEY_NPAGE):  # Ctrl+D
            grid.move_down(grid.half_page())
        elif ch in (21, curses.KEY_PPAGE):  # Ctrl+U
            grid.move_up(grid.half_page())
        elif ch in (ord("g"), curses.KEY_HOME):
            grid.jump_first_row()
        elif ch in (ord("G"), curses.KEY_END):
            grid.jump_last_row()
        elif ch == ord("s"):
            column = grid.current_column()
            if column is not None:
                self.state.toggle_sort(column)
                label = self._sort_label()
                self._set_status(f"Sort: {label}" if label else "Sort cleared", 2)
        elif ch == ord("/"):
            self.filter_prompt.start()
        elif ch == 27:  # Esc
            if self.state.filter_text:
                self.state.set_filter("")
                self._set_status("Filter cleared", 2)
        elif ch == ord("e"):
            if grid.rows:
                self.state.toggle_row_expanded(grid.curr_row)
        elif ch == ord("E"):
            self.state.expand_all_rows = not self.state.expand_all_rows
        elif ch in (10, 13, curses.KEY_ENTER):
            value = grid.current_value()
            if is_drillable(value):
                label = f"row {grid.curr_row + 1} . {grid.current_column()}"
                self.state.drill_into(label, value)
                self.tree.jump_first()
            else:
                self._set_status("Not a nested value", 2)

    def handle_tree_key(self, ch):
        tree = self.tree
        if ch in (ord("j"), curses.KEY_DOWN):
            tree.move_down()
        elif ch in (ord("k"), curses.KEY_UP):
            tree.move_up()
        elif ch in (4, curses.KEY_NPAGE):
            tree.move_down(tree.half_page())
        elif ch in (21, curses.KEY_PPAGE):
            tree.move_up(tree.half_page())
        elif ch in (ord("g"), curses.KEY_HOME):
            tree.jump_first()
        elif ch in (ord("G"), curses.KEY_END):
            tree.jump_last()
        elif ch in (10, 13, curses.KEY_ENTER, ord(" ")):
            tree.toggle_current()
        elif ch == ord("E"):
            tree.expand_all()
        elif ch == ord("C"):
            tree.collapse_all()
        elif ch in (27, curses.KEY_BACKSPACE, 127):
            if self.state.drill_out():
                tree.jump_first()

    def handle_key(self, ch):
        """Returns False when the app should exit."""
        if self.filter_prompt.active:
            self.filter_prompt.handle_key(ch)
            return True

        if ch == -1:
            return True

        if ch in (3, 24, ord("q")):  # Ctrl+C / Ctrl+X
            return False

        if ch == ord("?"):
            self._set_status(HELP_TEXT, 8)
        elif ch == ord("r"):
            self.reload()
        elif self.state.mode == MODE_TREE:
            self.handle_tree_key(ch)
        elif self.state.mode == MODE_GRID:
            self.handle_grid_key(ch)
        return True

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while True:
            ch = self.stdscr.getch()
            if ch == curses.KEY_RESIZE:
                self.layout = ScreenLayout(self.stdscr)
            elif not self.handle_key(ch):
                break
            self.redraw()
