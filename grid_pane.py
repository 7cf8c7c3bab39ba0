# ~/Apps/jsongrid/grid_pane.py
import curses

import pandas as pd

from cell_format import (
    STYLE_ABSENT,
    STYLE_FALSE,
    STYLE_NESTED,
    STYLE_NULL,
    STYLE_NUMBER,
    STYLE_TRUE,
    format_cell,
    right_aligned,
)
from schema_inference import cell_value
from text_wrap import wrap_cell, wrap_line_count
from virtualizer import DEFAULT_OVERSCAN, Virtualizer


def _attr(pair: int, extra: int = 0) -> int:
    try:
        return curses.color_pair(pair) | extra
    except curses.error:
        return extra


class GridPane:
    PAIR_CELL_TEXT = 6
    PAIR_NULL = 7
    PAIR_TRUE = 8
    PAIR_FALSE = 10
    PAIR_NUMBER = 11
    PAIR_NESTED = 12
    PAIR_HEADER_SORTED = 13
    MAX_COL_WIDTH = 40
    MIN_COL_WIDTH = 4
    HEADER_H = 1
    PLACEHOLDER = "Invalid JSON or Empty"
    ABSENT_FILL = "·"

    def __init__(self, state, max_col_width: int = MAX_COL_WIDTH, overscan: int = DEFAULT_OVERSCAN):
        self.state = state
        self.max_col_width = max_col_width
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_CELL_TEXT, curses.COLOR_WHITE, -1)
            curses.init_pair(self.PAIR_NULL, curses.COLOR_BLACK, -1)
            curses.init_pair(self.PAIR_TRUE, curses.COLOR_GREEN, -1)
            curses.init_pair(self.PAIR_FALSE, curses.COLOR_RED, -1)
            curses.init_pair(self.PAIR_NUMBER, curses.COLOR_BLUE, -1)
            curses.init_pair(self.PAIR_NESTED, curses.COLOR_MAGENTA, -1)
            curses.init_pair(self.PAIR_HEADER_SORTED, curses.COLOR_CYAN, -1)
        except curses.error:
            pass

        self.curr_row = 0
        self.curr_col = 0
        self.col_offset = 0
        # column index -> width on screen, for the columns drawn last time
        self.drawn_widths: dict[int, int] = {}

        self.virtualizer = Virtualizer(estimate_size=self.row_height, overscan=overscan)
        self._rows_key = None

    # ---------- shape ----------
    @property
    def rows(self):
        return self.state.processed_rows

    @property
    def columns(self):
        return self.state.columns

    def current_column(self) -> str | None:
        if not self.columns:
            return None
        return self.columns[min(self.curr_col, len(self.columns) - 1)]

    def current_value(self):
        column = self.current_column()
        if column is None or not self.rows:
            return None
        return cell_value(self.rows[self.curr_row], column)

    def row_height(self, row_idx: int) -> int:
        if not self.state.is_row_expanded(row_idx):
            return 1
        row = self.rows[row_idx]
        if self.drawn_widths:
            widths = self.drawn_widths.items()
        else:
            widths = ((c, self.max_col_width) for c in range(len(self.columns)))
        height = 1
        for c, width in widths:
            if c >= len(self.columns):
                continue
            text, _ = format_cell(cell_value(row, self.columns[c]))
            height = max(height, wrap_line_count(text, width))
        return height

    def sync(self):
        """Re-derive the scroll model after the rows, filter or sort changed."""
        key = (self.state.view_key, frozenset(self.state.expanded_rows), self.state.expand_all_rows)
        if key != self._rows_key:
            self._rows_key = key
            self.virtualizer.set_count(len(self.rows))
            self.virtualizer.set_estimator(self.row_height)
        self.curr_row = max(0, min(self.curr_row, len(self.rows) - 1))
        self.curr_col = max(0, min(self.curr_col, len(self.columns) - 1))

    # ---------- navigation ----------
    def move_left(self):
        self.curr_col = max(0, self.curr_col - 1)

    def move_right(self):
        self.curr_col = min(max(0, len(self.columns) - 1), self.curr_col + 1)

    def move_down(self, count: int = 1):
        self.curr_row = min(max(0, len(self.rows) - 1), self.curr_row + count)

    def move_up(self, count: int = 1):
        self.curr_row = max(0, self.curr_row - count)

    def jump_first_row(self):
        self.curr_row = 0

    def jump_last_row(self):
        self.curr_row = max(0, len(self.rows) - 1)

    def half_page(self) -> int:
        return max(1, self.virtualizer.viewport_extent // 2)

    # ---------- widths ----------
    def _window_frame(self, row_indices) -> pd.DataFrame:
        rows = self.rows
        records = [
            [format_cell(cell_value(rows[r], column))[0] for column in self.columns]
            for r in row_indices
        ]
        return pd.DataFrame(records, columns=range(len(self.columns)), dtype=object)

    def _compute_widths(self, frame: pd.DataFrame) -> list[int]:
        widths = []
        for c, column in enumerate(self.columns):
            max_len = len(str(column)) + 2  # room for the sort indicator
            if not frame.empty:
                longest = frame[c].map(len).max()
                if not pd.isna(longest):
                    max_len = max(max_len, int(longest))
            widths.append(max(self.MIN_COL_WIDTH, min(self.max_col_width, max_len + 2)))
        return widths

    def _visible_cols(self, widths, avail_w) -> tuple:
        max_cols = 0
        used = 0
        for cw in widths[self.col_offset :]:
            if used + cw + 1 > avail_w:
                break
            used += cw + 1
            max_cols += 1
        max_cols = max(1, max_cols)

        if self.curr_col < self.col_offset:
            self.col_offset = self.curr_col
        elif self.curr_col >= self.col_offset + max_cols:
            self.col_offset = self.curr_col - max_cols + 1
        self.col_offset = max(0, min(self.col_offset, max(0, len(widths) - 1)))

        return tuple(range(self.col_offset, min(len(widths), self.col_offset + max_cols)))

    # ---------- rendering ----------
    def _style_attr(self, style: str) -> int:
        if style == STYLE_NULL:
            return _attr(self.PAIR_NULL, curses.A_DIM)
        if style == STYLE_TRUE:
            return _attr(self.PAIR_TRUE, curses.A_BOLD)
        if style == STYLE_FALSE:
            return _attr(self.PAIR_FALSE, curses.A_BOLD)
        if style == STYLE_NUMBER:
            return _attr(self.PAIR_NUMBER)
        if style == STYLE_NESTED:
            return _attr(self.PAIR_NESTED, curses.A_UNDERLINE)
        if style == STYLE_ABSENT:
            return curses.A_DIM
        return _attr(self.PAIR_CELL_TEXT)

    def _put(self, win, y, x, text, width, attr=0):
        try:
            win.addnstr(y, x, text, width, attr)
        except curses.error:
            pass

    def draw_placeholder(self, win, message: str | None = None):
        h, w = win.getmaxyx()
        lines = [self.PLACEHOLDER]
        if message:
            lines.append(message)
        top = max(0, h // 2 - len(lines))
        for i, line in enumerate(lines):
            line = line[: max(0, w - 1)]
            self._put(win, top + i, max(0, (w - len(line)) // 2), line, max(1, w - 1), curses.A_DIM)

    def _layout(self, w):
        """Window rows, their cell texts, and the on-screen width of each drawn column."""
        window = self.virtualizer.window()
        frame = self._window_frame(window.indices)
        widths = self._compute_widths(frame)

        row_w = max(3, len(str(len(self.rows))) + 1)
        avail_w = max(1, w - (row_w + 1))
        drawn = {}
        x = row_w + 1
        for c in self._visible_cols(widths, avail_w):
            drawn[c] = min(widths[c], max(1, w - x - 1))
            x += drawn[c] + 1
        return window, frame, row_w, drawn

    def draw(self, win, active=True):
        win.erase()
        h, w = win.getmaxyx()

        if not self.state.has_data:
            self.draw_placeholder(win, self.state.error)
            win.refresh()
            return

        self.sync()
        body_h = max(0, h - self.HEADER_H)
        self.virtualizer.set_viewport(body_h)

        # expanded rows are measured at the drawn widths, which depend on the window
        for attempt in range(3):
            if self.rows:
                self.virtualizer.scroll_to_index(self.curr_row)
            window, frame, row_w, drawn = self._layout(w)
            if drawn == self.drawn_widths or attempt == 2:
                break
            self.drawn_widths = drawn
            self.virtualizer.set_estimator(self.row_height)
        avail_w = max(1, w - (row_w + 1))

        # header
        self._put(win, 0, 0, "#".rjust(row_w), row_w, curses.A_BOLD)
        x = row_w + 1
        sort_state = self.state.sort_state
        for c, cw in drawn.items():
            column = self.columns[c]
            indicator = sort_state.indicator(column)
            name = f"{column} {indicator}" if indicator else str(column)
            attr = curses.A_BOLD
            if indicator:
                attr = _attr(self.PAIR_HEADER_SORTED, curses.A_BOLD)
            if active and c == self.curr_col:
                attr |= curses.A_UNDERLINE
            self._put(win, 0, x, name[:cw].ljust(cw), cw, attr)
            x += cw + 1

        if not self.rows:
            self._put(win, self.HEADER_H + 1, row_w + 1, "No matching rows", max(1, avail_w), curses.A_DIM)
            win.refresh()
            return

        # rows: only the window is formatted and drawn
        top = self.virtualizer.scroll_offset
        for pos, item in enumerate(window.items):
            y = self.HEADER_H + item.offset - top
            if y + item.size <= self.HEADER_H or y >= h:
                continue
            r = item.index
            row_attr = curses.A_REVERSE if (active and r == self.curr_row) else 0
            if y >= self.HEADER_H:
                self._put(win, y, 0, str(r + 1).rjust(row_w), row_w, curses.A_DIM | row_attr)

            x = row_w + 1
            row = self.rows[r]
            for c, cw in drawn.items():
                value = cell_value(row, self.columns[c])
                text = frame.iat[pos, c]
                _, style = format_cell(value)
                attr = self._style_attr(style)
                if active and r == self.curr_row and c == self.curr_col:
                    attr |= curses.A_REVERSE

                if style == STYLE_ABSENT:
                    lines = [self.ABSENT_FILL * cw] * item.size
                else:
                    lines = wrap_cell(text, cw, item.size) if item.size > 1 else [text[:cw]]

                for line_idx, line in enumerate(lines):
                    line_y = y + line_idx
                    if line_y < self.HEADER_H or line_y >= h:
                        continue
                    cell = line.rjust(cw) if right_aligned(style) else line.ljust(cw)
                    self._put(win, line_y, x, cell, cw, attr)
                x += cw + 1

        win.refresh()
