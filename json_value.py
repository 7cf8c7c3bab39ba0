import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


logger = logging.getLogger(__name__)


class _Absent:
    """Marker for a cell whose row has no value for the column."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "<absent>"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


class Shape(Enum):
    ARRAY = "array"
    OBJECT = "object"
    SCALAR = "scalar"


def classify(value: Any) -> Shape:
    if isinstance(value, list):
        return Shape.ARRAY
    if isinstance(value, dict):
        return Shape.OBJECT
    return Shape.SCALAR


def dispatch(
    value: Any,
    on_array: Callable[[list], Any],
    on_object: Callable[[dict], Any],
    on_scalar: Callable[[Any], Any],
):
    shape = classify(value)
    handlers = {
        Shape.ARRAY: on_array,
        Shape.OBJECT: on_object,
        Shape.SCALAR: on_scalar,
    }
    return handlers[shape](value)


def is_container(value: Any) -> bool:
    return isinstance(value, (list, dict))


def canonical_dumps(value: Any) -> str:
    # sort_keys keeps the text stable across calls regardless of key order
    return json.dumps(
        value, sort_keys=True, ensure_ascii=False, separators=(",", ":")
    )


def literal_text(value: Any) -> str:
    """JSON literal for a scalar: quoted strings, true/false/null, numbers."""
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def object_rows(obj: dict) -> list[dict]:
    return [{"key": k, "value": v} for k, v in obj.items()]


@dataclass(frozen=True)
class ParseResult:
    ok: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def success(cls, value):
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str):
        return cls(ok=False, value=None, error=error)


def _decode(data) -> tuple[str | None, str | None]:
    """Strict UTF-8 for raw bytes; a leading BOM is dropped."""
    if not isinstance(data, (bytes, bytearray)):
        return data, None
    try:
        return data.decode("utf-8-sig"), None
    except UnicodeDecodeError as exc:
        logger.debug("input is not utf-8: %s", exc)
        return None, f"Invalid encoding: {exc.reason} at byte {exc.start}"


def parse_json_text(text) -> ParseResult:
    if text is None:
        return ParseResult.failure("No input")
    text, error = _decode(text)
    if error:
        return ParseResult.failure(error)
    if not text.strip():
        return ParseResult.failure("Empty input")
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.debug("parse failed at line %s col %s: %s", exc.lineno, exc.colno, exc.msg)
        return ParseResult.failure(f"{exc.msg} (line {exc.lineno}, col {exc.colno})")
    except (ValueError, RecursionError) as exc:
        logger.debug("parse failed: %s", exc)
        return ParseResult.failure(str(exc) or "Invalid JSON")
    return ParseResult.success(value)


def parse_json_lines(text) -> ParseResult:
    """One JSON value per non-blank line; the whole document becomes an array."""
    if text is None:
        return ParseResult.failure("No input")
    text, error = _decode(text)
    if error:
        return ParseResult.failure(error)
    if not text.strip():
        return ParseResult.failure("Empty input")
    values = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            values.append(json.loads(line))
        except (json.JSONDecodeError, RecursionError) as exc:
            logger.debug("jsonl parse failed on line %d: %s", lineno, exc)
            return ParseResult.failure(f"Line {lineno}: invalid JSON")
    return ParseResult.success(values)
