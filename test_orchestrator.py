import curses
import json
import unittest

from app_state import MODE_GRID, MODE_TREE, AppState
from filter_prompt import FilterPrompt
from grid_pane import GridPane
from orchestrator import Orchestrator
from tree_pane import TreePane


DOC = json.dumps(
    [
        {"id": 2, "name": "Bob", "tags": ["x", "y"]},
        {"id": 1, "name": "Alice", "tags": []},
    ]
)


class _Loader:
    def __init__(self, text):
        self.text = text

    def parse(self, text):
        from json_value import parse_json_text

        return parse_json_text(text)

    def load(self):
        return self.text, self.parse(self.text)


def _orchestrator(state):
    # skip __init__: it needs a live terminal
    orch = Orchestrator.__new__(Orchestrator)
    orch.state = state
    orch.config = {"MAX_COL_WIDTH": 40, "OVERSCAN": 5, "INDENT": 2}
    orch.grid = GridPane(state)
    orch.tree = TreePane(state)
    orch.status_msg = None
    orch.status_msg_until = 0
    orch.filter_prompt = FilterPrompt(state, orch._set_status)
    return orch


class OrchestratorKeyTests(unittest.TestCase):
    def setUp(self):
        self.state = AppState(text=DOC)
        self.orch = _orchestrator(self.state)

    def _keys(self, *keys):
        for key in keys:
            ch = ord(key) if isinstance(key, str) else key
            self.assertTrue(self.orch.handle_key(ch))

    def test_quit_keys(self):
        for ch in (ord("q"), 3, 24):
            self.assertFalse(self.orch.handle_key(ch))

    def test_sort_cycles_on_current_column(self):
        self._keys("s")
        self.assertEqual([r["id"] for r in self.state.processed_rows], [1, 2])
        self.assertEqual(self.orch.status_msg, "Sort: id asc")
        self._keys("s")
        self.assertEqual(self.orch._sort_label(), "id desc")
        self._keys("s")
        self.assertEqual(self.orch.status_msg, "Sort cleared")

    def test_filter_prompt_takes_all_keys_until_enter(self):
        self._keys("/", "a", "l", "q")
        self.assertEqual(self.state.filter_text, "alq")
        self._keys(curses.KEY_BACKSPACE, 10)
        self.assertEqual(self.state.filter_text, "al")
        self.assertEqual(len(self.state.processed_rows), 1)
        self._keys(27)
        self.assertEqual(self.state.filter_text, "")

    def test_enter_on_nested_cell_drills_into_tree(self):
        self._keys("l", "l", 10)
        self.assertEqual(self.state.mode, MODE_TREE)
        self.assertEqual(self.state.tree_label, "row 1 . tags")
        self._keys("j", 10)
        self.assertEqual(self.orch.tree.curr, 1)
        self._keys(27)
        self.assertEqual(self.state.mode, MODE_GRID)

    def test_enter_on_scalar_reports(self):
        self._keys(10)
        self.assertEqual(self.state.mode, MODE_GRID)
        self.assertEqual(self.orch.status_msg, "Not a nested value")

    def test_enter_on_empty_array_does_not_drill(self):
        self._keys("j", "l", "l", 10)
        self.assertEqual(self.state.mode, MODE_GRID)

    def test_row_expansion_keys(self):
        self._keys("e")
        self.assertTrue(self.state.is_row_expanded(0))
        self._keys("e", "E")
        self.assertTrue(self.state.expand_all_rows)

    def test_reload_without_loader(self):
        self._keys("r")
        self.assertEqual(self.orch.status_msg, "Nothing to reload")

    def test_reload_replaces_document(self):
        self.state.loader = _Loader('[{"z": 1}]')
        self._keys("r")
        self.assertEqual(self.state.columns, ["z"])
        self.assertEqual(self.orch.status_msg, "Reloaded")

    def test_reload_with_bad_json_reports(self):
        self.state.loader = _Loader("[")
        self._keys("r")
        self.assertTrue(self.orch.status_msg.startswith("Invalid JSON"))

    def test_status_context_for_grid(self):
        ctx = self.orch._status_context()
        self.assertEqual(ctx["mode"], MODE_GRID)
        self.assertEqual(ctx["total_rows"], 2)
        self.assertEqual(ctx["shape"], "array")


if __name__ == "__main__":
    unittest.main()
