from json_value import ABSENT

STYLE_ABSENT = "absent"
STYLE_NULL = "null"
STYLE_TRUE = "true"
STYLE_FALSE = "false"
STYLE_NUMBER = "number"
STYLE_NESTED = "nested"
STYLE_STRING = "string"


def format_cell(value) -> tuple[str, str]:
    """Display text and style class for one grid cell."""
    if value is ABSENT:
        return "", STYLE_ABSENT
    if value is None:
        return "null", STYLE_NULL
    if isinstance(value, bool):
        if value:
            return "✓ true", STYLE_TRUE
        return "✗ false", STYLE_FALSE
    if isinstance(value, (int, float)):
        return _format_number(value), STYLE_NUMBER
    if isinstance(value, list):
        return f"[array({len(value)})]", STYLE_NESTED
    if isinstance(value, dict):
        return "{object}", STYLE_NESTED
    return str(value), STYLE_STRING


def _format_number(value) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


def right_aligned(style: str) -> bool:
    return style == STYLE_NUMBER


def is_drillable(value) -> bool:
    return isinstance(value, (list, dict)) and len(value) > 0
