import math
from dataclasses import dataclass
from typing import Any, Sequence

from json_value import ABSENT, canonical_dumps
from schema_inference import cell_value


# Cross-type order for a column holding mixed JSON types.
RANK_NULL = 0
RANK_BOOL = 1
RANK_NUMBER = 2
RANK_STRING = 3
RANK_ARRAY = 4
RANK_OBJECT = 5


@dataclass(frozen=True)
class SortState:
    column: str | None = None
    descending: bool = False

    @property
    def active(self) -> bool:
        return self.column is not None

    def toggled(self, column: str) -> "SortState":
        """unsorted -> ascending -> descending -> unsorted, per column."""
        if self.column != column:
            return SortState(column, False)
        if not self.descending:
            return SortState(column, True)
        return SortState()

    def indicator(self, column: str) -> str:
        if self.column != column:
            return ""
        return "▼" if self.descending else "▲"


UNSORTED = SortState()


def sort_key(value: Any) -> tuple:
    """Total-order key for a present JSON value."""
    if value is None:
        return (RANK_NULL,)
    if isinstance(value, bool):
        return (RANK_BOOL, int(value))
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return (RANK_NUMBER, 1, 0)
        return (RANK_NUMBER, 0, value)
    if isinstance(value, str):
        return (RANK_STRING, value)
    if isinstance(value, list):
        return (RANK_ARRAY, canonical_dumps(value))
    if isinstance(value, dict):
        return (RANK_OBJECT, canonical_dumps(value))
    return (RANK_OBJECT + 1, repr(value))


def compare_values(a: Any, b: Any) -> int:
    if a is ABSENT and b is ABSENT:
        return 0
    if a is ABSENT:
        return 1
    if b is ABSENT:
        return -1
    ka = sort_key(a)
    kb = sort_key(b)
    if ka == kb:
        return 0
    return -1 if ka < kb else 1


def filter_rows(rows: Sequence[Any], filter_text: str) -> list:
    if not filter_text:
        return list(rows)
    needle = filter_text.casefold()
    return [row for row in rows if needle in canonical_dumps(row).casefold()]


def sort_rows(rows: Sequence[Any], sort_state: SortState) -> list:
    if not sort_state.active:
        return list(rows)

    column = sort_state.column
    present = []
    missing = []
    for row in rows:
        value = cell_value(row, column)
        if value is ABSENT:
            missing.append(row)
        else:
            present.append((sort_key(value), row))

    # sorted() stays stable with reverse=True, so ties keep input order
    present.sort(key=lambda pair: pair[0], reverse=sort_state.descending)
    return [row for _, row in present] + missing


def process(rows: Sequence[Any], filter_text: str = "", sort_state: SortState = UNSORTED) -> list:
    return sort_rows(filter_rows(rows, filter_text), sort_state)
