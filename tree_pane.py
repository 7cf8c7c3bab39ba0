# ~/Apps/jsongrid/tree_pane.py
import curses

from tree_projector import NodeKind, node_text
from virtualizer import DEFAULT_OVERSCAN, Virtualizer


def _attr(pair: int, extra: int = 0) -> int:
    try:
        return curses.color_pair(pair) | extra
    except curses.error:
        return extra


class TreePane:
    PAIR_KEY = 14
    PAIR_STRING = 15
    PAIR_NUMBER = 16
    PAIR_BOOL = 17
    PAIR_NULL = 18
    HEADER_H = 1

    def __init__(self, state, indent: int = 2, overscan: int = DEFAULT_OVERSCAN):
        self.state = state
        self.indent = indent
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_KEY, curses.COLOR_MAGENTA, -1)
            curses.init_pair(self.PAIR_STRING, curses.COLOR_YELLOW, -1)
            curses.init_pair(self.PAIR_NUMBER, curses.COLOR_GREEN, -1)
            curses.init_pair(self.PAIR_BOOL, curses.COLOR_BLUE, -1)
            curses.init_pair(self.PAIR_NULL, curses.COLOR_BLACK, -1)
        except curses.error:
            pass

        self.curr = 0
        self.virtualizer = Virtualizer(overscan=overscan)

    @property
    def nodes(self):
        return self.state.tree_nodes()

    def current_node(self):
        nodes = self.nodes
        if not nodes:
            return None
        return nodes[min(self.curr, len(nodes) - 1)]

    # ---------- navigation ----------
    def move_down(self, count: int = 1):
        self.curr = min(max(0, len(self.nodes) - 1), self.curr + count)

    def move_up(self, count: int = 1):
        self.curr = max(0, self.curr - count)

    def jump_first(self):
        self.curr = 0

    def jump_last(self):
        self.curr = max(0, len(self.nodes) - 1)

    def half_page(self) -> int:
        return max(1, self.virtualizer.viewport_extent // 2)

    def toggle_current(self) -> bool:
        """Collapse or expand the container under the cursor.

        On a closing bracket the toggle applies to its opening line, and the
        cursor moves there so it stays on a visible node.
        """
        node = self.current_node()
        if node is None or node.kind not in (NodeKind.OPEN, NodeKind.CLOSE):
            return False
        self.state.toggle_collapse(node.path)
        if node.kind is NodeKind.CLOSE:
            for idx, other in enumerate(self.nodes):
                if other.path == node.path and other.kind is NodeKind.OPEN:
                    self.curr = idx
                    break
        self.curr = min(self.curr, max(0, len(self.nodes) - 1))
        return True

    def expand_all(self):
        self.state.tree_collapse.expand_all()

    def collapse_all(self):
        self.state.tree_collapse.collapse_all(self.state.tree_root)
        self.curr = 0

    # ---------- rendering ----------
    def _value_attr(self, node) -> int:
        value = node.value
        if node.kind is not NodeKind.LEAF:
            return curses.A_NORMAL
        if value is None:
            return _attr(self.PAIR_NULL, curses.A_DIM)
        if isinstance(value, bool):
            return _attr(self.PAIR_BOOL)
        if isinstance(value, (int, float)):
            return _attr(self.PAIR_NUMBER)
        return _attr(self.PAIR_STRING)

    def _put(self, win, y, x, text, width, attr=0):
        try:
            win.addnstr(y, x, text, width, attr)
        except curses.error:
            pass

    def draw(self, win, active=True):
        win.erase()
        h, w = win.getmaxyx()

        label = self.state.tree_label
        title = f" {label} " if label else " tree "
        self._put(win, 0, 0, title, max(1, w - 1), curses.A_BOLD)

        nodes = self.nodes
        self.virtualizer.set_count(len(nodes))
        self.virtualizer.set_viewport(max(0, h - self.HEADER_H))
        self.curr = max(0, min(self.curr, len(nodes) - 1))
        if nodes:
            self.virtualizer.scroll_to_index(self.curr)

        top = self.virtualizer.scroll_offset
        for item in self.virtualizer.window().items:
            y = self.HEADER_H + item.offset - top
            if y < self.HEADER_H or y >= h:
                continue
            node = nodes[item.index]
            text = node_text(node, self.indent)
            attr = self._value_attr(node)
            if active and item.index == self.curr:
                attr |= curses.A_REVERSE
            self._put(win, y, 0, text.ljust(w - 1), max(1, w - 1), attr)

        win.refresh()
