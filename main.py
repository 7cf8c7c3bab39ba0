import sys
import os
import curses

from app_logging import setup_logging
from app_state import AppState
from config_paths import load_config
from document_loader import DefaultDocument, DocumentLoader
from json_value import parse_json_text

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")
from orchestrator import Orchestrator

from _version import __version__


USAGE = (
    "jsongrid - terminal JSON grid and tree viewer\n\n"
    "Usage:\n  jsongrid [path.json|path.jsonl]\n  jsongrid -v\n"
)


def build_state(path: str | None) -> AppState:
    """Load the document for path (or the sample) without touching curses."""
    if path is None:
        text = DefaultDocument().create()
        return AppState(result=parse_json_text(text), text=text)

    loader = DocumentLoader(path)
    text, result = loader.load()
    return AppState(result=result, text=text, file_path=path, loader=loader)


def main():
    args = sys.argv[1:]

    if "-v" in args or "-V" in args:
        print(__version__)
        return

    if "-h" in args or "--help" in args or len(args) > 1:
        print(USAGE)
        return

    config = load_config()
    setup_logging(config["LOG_LEVEL"])

    path = args[0] if args else None
    try:
        state = build_state(path)
    except OSError as e:
        print(f"Load failed: {e}", file=sys.stderr)
        sys.exit(1)

    def curses_main(stdscr):
        Orchestrator(stdscr, state, config=config).run()

    curses.wrapper(curses_main)


if __name__ == "__main__":
    main()
