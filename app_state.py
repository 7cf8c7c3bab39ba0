import logging
from dataclasses import dataclass, field

from json_value import ParseResult, Shape, classify, dispatch, object_rows, parse_json_text
from row_processor import UNSORTED, SortState, process
from schema_inference import cell_value, infer_columns
from tree_projector import CollapseStore, ViewNode, project_list

logger = logging.getLogger(__name__)

MODE_EMPTY = "empty"
MODE_GRID = "grid"
MODE_TREE = "tree"


@dataclass
class DrillFrame:
    label: str
    value: object
    collapse: CollapseStore = field(default_factory=CollapseStore)


class AppState:
    def __init__(self, text=None, file_path=None, loader=None, result: ParseResult | None = None):
        self.file_path = file_path
        self.loader = loader

        self.text = ""
        self.result = ParseResult.failure("No input")
        self._doc_version = 0

        self.filter_text = ""
        self.sort_state: SortState = UNSORTED

        self.expanded_rows: set[int] = set()
        self.expand_all_rows: bool = False

        self.collapse = CollapseStore()
        self.drill_stack: list[DrillFrame] = []
        self._drill_version = 0

        self._columns_key = None
        self._columns: list[str] = []
        self._processed_key = None
        self._processed: list = []
        self._tree_key = None
        self._tree: list[ViewNode] = []

        if result is not None:
            self.set_result(result, text or "")
        elif text is not None:
            self.set_text(text)

    # ---------- document ----------
    def _parse(self, text) -> ParseResult:
        if self.loader is not None:
            return self.loader.parse(text)
        return parse_json_text(text)

    def set_text(self, text):
        self.set_result(self._parse(text), text)

    def set_result(self, result: ParseResult, text=""):
        self.text = text or ""
        self.result = result
        self._doc_version += 1
        self.expanded_rows.clear()
        self.drill_stack.clear()
        if result.ok:
            # keep collapse choices for paths that still exist
            self.collapse.prune(result.value)
        else:
            logger.debug("document has no data: %s", result.error)

    @property
    def has_data(self) -> bool:
        return self.result.ok

    @property
    def data(self):
        return self.result.value if self.result.ok else None

    @property
    def error(self) -> str | None:
        return None if self.result.ok else self.result.error

    @property
    def shape(self) -> Shape | None:
        if not self.result.ok:
            return None
        return classify(self.result.value)

    @property
    def mode(self) -> str:
        if not self.result.ok:
            return MODE_EMPTY
        if self.drill_stack:
            return MODE_TREE
        return dispatch(
            self.result.value,
            on_array=lambda _v: MODE_GRID,
            on_object=lambda _v: MODE_GRID,
            on_scalar=lambda _v: MODE_TREE,
        )

    @property
    def rows(self) -> list:
        if not self.result.ok:
            return []
        return dispatch(
            self.result.value,
            on_array=lambda v: v,
            on_object=object_rows,
            on_scalar=lambda _v: [],
        )

    # ---------- grid ----------
    @property
    def columns(self) -> list[str]:
        if self._columns_key != self._doc_version:
            self._columns = infer_columns(self.rows)
            self._columns_key = self._doc_version
        return self._columns

    @property
    def view_key(self) -> tuple:
        return (self._doc_version, self.filter_text, self.sort_state)

    @property
    def processed_rows(self) -> list:
        key = self.view_key
        if key != self._processed_key:
            self._processed = process(self.rows, self.filter_text, self.sort_state)
            self._processed_key = key
        return self._processed

    def cell(self, row_idx: int, column: str):
        return cell_value(self.processed_rows[row_idx], column)

    def set_filter(self, text: str):
        text = text or ""
        if text != self.filter_text:
            self.filter_text = text
            self.expanded_rows.clear()

    def toggle_sort(self, column: str) -> SortState:
        self.sort_state = self.sort_state.toggled(column)
        self.expanded_rows.clear()
        return self.sort_state

    def toggle_row_expanded(self, row_idx: int) -> bool:
        if row_idx in self.expanded_rows:
            self.expanded_rows.discard(row_idx)
            return False
        self.expanded_rows.add(row_idx)
        return True

    def is_row_expanded(self, row_idx: int) -> bool:
        return self.expand_all_rows or row_idx in self.expanded_rows

    # ---------- tree ----------
    @property
    def tree_root(self):
        if self.drill_stack:
            return self.drill_stack[-1].value
        return self.data

    @property
    def tree_label(self) -> str | None:
        if self.drill_stack:
            return self.drill_stack[-1].label
        return None

    @property
    def tree_collapse(self) -> CollapseStore:
        if self.drill_stack:
            return self.drill_stack[-1].collapse
        return self.collapse

    def tree_nodes(self) -> list[ViewNode]:
        if not self.result.ok:
            return []
        store = self.tree_collapse
        key = (self._doc_version, self._drill_version, store.version)
        if key != self._tree_key:
            self._tree = project_list(self.tree_root, collapsed=store)
            self._tree_key = key
        return self._tree

    def toggle_collapse(self, path) -> bool:
        return self.tree_collapse.toggle(path)

    def drill_into(self, label: str, value):
        self.drill_stack.append(DrillFrame(label, value))
        self._drill_version += 1

    def drill_out(self) -> bool:
        if not self.drill_stack:
            return False
        self.drill_stack.pop()
        self._drill_version += 1
        return True
