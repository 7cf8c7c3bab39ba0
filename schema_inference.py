from typing import Any, Iterable

from json_value import ABSENT


VALUE_COLUMN = "value"


def infer_columns(rows: Iterable[Any]) -> list[str]:
    """Ordered union of keys across every row; first occurrence wins.

    Rows that are not objects (scalars, arrays, null) contribute the
    synthetic "value" column once.
    """
    seen: dict[str, None] = {}
    for row in rows:
        if isinstance(row, dict):
            for key in row:
                if key not in seen:
                    seen[key] = None
        elif VALUE_COLUMN not in seen:
            seen[VALUE_COLUMN] = None
    return list(seen)


def cell_value(row: Any, column: str):
    if isinstance(row, dict):
        return row.get(column, ABSENT)
    if column == VALUE_COLUMN:
        return row
    return ABSENT
