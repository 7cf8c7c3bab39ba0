import logging
import os
import sys

from json_value import ParseResult, parse_json_lines, parse_json_text

logger = logging.getLogger(__name__)

SAMPLE_TEXT = """[
  { "id": 1, "name": "Alice", "active": true, "role": "Admin", "details": { "login": "2024-01-01" } },
  { "id": 2, "name": "Bob", "active": false, "role": "User", "details": { "login": "2024-01-02" } },
  { "id": 3, "name": "Charlie", "active": true, "role": "User", "details": { "login": "2024-01-03" } }
]"""


class DefaultDocument:
    def create(self) -> str:
        return SAMPLE_TEXT


class DocumentLoader:
    JSON_EXTS = {".json", ".geojson"}
    LINES_EXTS = {".jsonl", ".ndjson"}

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in self.JSON_EXTS | self.LINES_EXTS:
            print("Unsupported file type (use .json, .jsonl, or .ndjson)")
            sys.exit(1)

    @property
    def is_lines(self) -> bool:
        return self.ext in self.LINES_EXTS

    def read_bytes(self) -> bytes:
        with open(self.path, "rb") as f:
            return f.read()

    def parse(self, data) -> ParseResult:
        if self.is_lines:
            return parse_json_lines(data)
        return parse_json_text(data)

    def load(self) -> tuple[str, ParseResult]:
        """Parse the raw bytes strictly; the returned text is for display only."""
        raw = self.read_bytes()
        result = self.parse(raw)
        if not result.ok:
            logger.info("%s did not parse: %s", self.path, result.error)
        return raw.decode("utf-8", errors="replace"), result
