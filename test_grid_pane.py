import json
import unittest

import pandas as pd

from app_state import AppState
from grid_pane import GridPane


class DummyWin:
    def __init__(self, h=24, w=120):
        self._h = h
        self._w = w
        self.calls = []

    def getmaxyx(self):
        return self._h, self._w

    def addnstr(self, y, x, text, n, attr=0):
        self.calls.append((y, x, text[:n]))

    def erase(self):
        self.calls.clear()

    def refresh(self):
        pass

    def text(self):
        return "\n".join(t for _, _, t in self.calls)

    def line(self, y):
        return "".join(t for yy, _, t in sorted(self.calls) if yy == y)


PEOPLE = json.dumps([{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}])


def _grid(text, **kwargs):
    return GridPane(AppState(text=text), **kwargs)


class GridPaneDrawTests(unittest.TestCase):
    def test_draws_header_and_cells(self):
        grid = _grid(PEOPLE)
        win = DummyWin(10, 80)
        grid.draw(win)
        self.assertIn("id", win.line(0))
        self.assertIn("name", win.line(0))
        self.assertIn("Alice", win.line(1))
        self.assertIn("Bob", win.line(2))

    def test_sort_indicator_in_header(self):
        grid = _grid(PEOPLE)
        grid.state.toggle_sort("name")
        win = DummyWin(10, 80)
        grid.draw(win)
        self.assertIn("name ▲", win.line(0))
        grid.state.toggle_sort("name")
        grid.draw(win)
        self.assertIn("name ▼", win.line(0))
        self.assertIn("Bob", win.line(1))

    def test_absent_cells_are_filled_and_null_is_written(self):
        grid = _grid('[{"a": 1, "b": null}, {"b": 2}]')
        win = DummyWin(10, 80)
        grid.draw(win)
        self.assertIn("null", win.line(1))
        self.assertIn(GridPane.ABSENT_FILL * 4, win.line(2))

    def test_invalid_document_shows_placeholder_with_error(self):
        grid = _grid("{nope")
        win = DummyWin(10, 80)
        grid.draw(win)
        self.assertIn(GridPane.PLACEHOLDER, win.text())
        self.assertIn(grid.state.error, win.text())

    def test_filter_with_no_matches(self):
        grid = _grid(PEOPLE)
        grid.state.set_filter("zzz")
        win = DummyWin(10, 80)
        grid.draw(win)
        self.assertIn("No matching rows", win.text())

    def test_only_window_rows_are_formatted(self):
        rows = [{"n": i, "s": f"row {i}"} for i in range(10_000)]
        grid = _grid(json.dumps(rows), overscan=5)
        seen = []
        real_frame = grid._window_frame

        def spy(indices):
            seen.append(list(indices))
            return real_frame(indices)

        grid._window_frame = spy
        win = DummyWin(21, 80)
        grid.curr_row = 5000
        grid.draw(win)

        self.assertTrue(seen)
        self.assertTrue(all(len(indices) < 40 for indices in seen))
        self.assertIn(5000, seen[-1])
        self.assertIn("row 5000", win.text())
        self.assertNotIn("row 4000", win.text())

    def test_expanded_row_wraps_long_text(self):
        grid = _grid(json.dumps([{"t": "aaa bbb ccc ddd"}, {"t": "x"}]), max_col_width=8)
        grid.state.toggle_row_expanded(0)
        grid.sync()
        self.assertEqual(grid.row_height(0), 2)
        self.assertEqual(grid.row_height(1), 1)
        win = DummyWin(10, 80)
        grid.draw(win)
        self.assertIn("aaa", win.line(1))
        self.assertIn("ccc", win.line(2))
        self.assertIn("x", win.line(3))

    def test_expanded_row_in_clipped_column_shows_every_word(self):
        words = [f"w{i:02d}" for i in range(20)]
        grid = _grid(json.dumps([{"id": 1, "note": " ".join(words)}]))
        grid.sync()
        grid.move_right()
        grid.state.toggle_row_expanded(0)
        win = DummyWin(10, 30)
        grid.draw(win)

        self.assertEqual(grid.drawn_widths, {1: 25})
        self.assertEqual(grid.virtualizer.window().items[0].size, 4)
        drawn = win.text()
        for word in words:
            self.assertIn(word, drawn)

    def test_collapsing_an_expanded_row_restores_one_line(self):
        grid = _grid(json.dumps([{"t": "aaa bbb ccc ddd"}]), max_col_width=8)
        grid.state.toggle_row_expanded(0)
        win = DummyWin(10, 80)
        grid.draw(win)
        self.assertEqual(grid.virtualizer.total_extent, 2)
        grid.state.toggle_row_expanded(0)
        grid.draw(win)
        self.assertEqual(grid.virtualizer.total_extent, 1)


class GridPaneWidthTests(unittest.TestCase):
    def test_width_comes_from_window_frame(self):
        grid = _grid(PEOPLE, max_col_width=40)
        frame = grid._window_frame([0, 1])
        self.assertIsInstance(frame, pd.DataFrame)
        self.assertEqual(frame.iat[0, 1], "Alice")
        self.assertEqual(grid._compute_widths(frame), [6, 8])

    def test_width_is_capped(self):
        grid = _grid(json.dumps([{"a": "x" * 100}]), max_col_width=12)
        widths = grid._compute_widths(grid._window_frame([0]))
        self.assertEqual(widths, [12])

    def test_visible_cols_follow_cursor(self):
        grid = _grid(json.dumps([{f"c{i}": 0 for i in range(50)}]))
        widths = [6] * 50
        grid.curr_col = 49
        cols = grid._visible_cols(widths, 70)
        self.assertIn(49, cols)
        self.assertEqual(cols[-1], 49)


class GridPaneNavigationTests(unittest.TestCase):
    def test_moves_are_clamped(self):
        grid = _grid(PEOPLE)
        grid.sync()
        grid.move_right()
        grid.move_right()
        self.assertEqual(grid.curr_col, 1)
        grid.move_down(10)
        self.assertEqual(grid.curr_row, 1)
        grid.move_up(10)
        self.assertEqual(grid.curr_row, 0)
        grid.move_left()
        self.assertEqual(grid.current_column(), "id")

    def test_current_value_uses_processed_rows(self):
        grid = _grid(PEOPLE)
        grid.state.toggle_sort("id")
        grid.state.toggle_sort("id")
        grid.sync()
        grid.move_right()
        self.assertEqual(grid.current_value(), "Bob")

    def test_sync_clamps_cursor_after_filter(self):
        grid = _grid(PEOPLE)
        grid.sync()
        grid.jump_last_row()
        grid.state.set_filter("alice")
        grid.sync()
        self.assertEqual(grid.curr_row, 0)
        self.assertEqual(grid.virtualizer.count, 1)


if __name__ == "__main__":
    unittest.main()
