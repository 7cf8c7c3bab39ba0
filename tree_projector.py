from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator

from json_value import is_container, literal_text


Path = tuple


class NodeKind(Enum):
    LEAF = "leaf"
    EMPTY = "empty"
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class ViewNode:
    depth: int
    key: str | int | None
    value: Any
    is_last: bool
    collapsed: bool
    kind: NodeKind
    path: Path = ()

    @property
    def toggleable(self) -> bool:
        return self.kind is NodeKind.OPEN


class CollapseStore:
    """Collapse flags keyed by structural path from the root.

    Paths survive re-parsing, so an equivalent document keeps the user's
    choices. Anything not recorded is expanded.
    """

    def __init__(self):
        self._collapsed: set[Path] = set()
        self.version = 0

    def __contains__(self, path) -> bool:
        return tuple(path) in self._collapsed

    def __len__(self):
        return len(self._collapsed)

    def is_collapsed(self, path) -> bool:
        return tuple(path) in self._collapsed

    def collapse(self, path):
        self._collapsed.add(tuple(path))
        self.version += 1

    def expand(self, path):
        self._collapsed.discard(tuple(path))
        self.version += 1

    def toggle(self, path) -> bool:
        path = tuple(path)
        self.version += 1
        if path in self._collapsed:
            self._collapsed.remove(path)
            return False
        self._collapsed.add(path)
        return True

    def expand_all(self):
        self._collapsed.clear()
        self.version += 1

    def collapse_all(self, value, include_root: bool = False):
        self._collapsed = set(_container_paths(value, ()))
        if not include_root:
            self._collapsed.discard(())
        self.version += 1

    def prune(self, value):
        """Forget paths that do not point at a non-empty container in value."""
        self._collapsed &= set(_container_paths(value, ()))
        self.version += 1


def _container_paths(value, path: Path) -> Iterator[Path]:
    if not is_container(value) or not value:
        return
    yield path
    for key, child in _children(value):
        yield from _container_paths(child, path + (key,))


def _children(value):
    if isinstance(value, dict):
        return list(value.items())
    return list(enumerate(value))


def project(
    value: Any,
    name: str | int | None = None,
    is_last: bool = True,
    collapsed: Callable[[Path], bool] | CollapseStore | None = None,
    depth: int = 0,
    path: Path = (),
) -> Iterator[ViewNode]:
    if collapsed is None:
        lookup = lambda _p: False
    elif isinstance(collapsed, CollapseStore):
        lookup = collapsed.is_collapsed
    else:
        lookup = collapsed
    return _project(value, name, is_last, lookup, depth, path)


def _project(value, name, is_last, lookup, depth, path) -> Iterator[ViewNode]:
    if not is_container(value):
        yield ViewNode(depth, name, value, is_last, False, NodeKind.LEAF, path)
        return

    if not value:
        yield ViewNode(depth, name, value, is_last, False, NodeKind.EMPTY, path)
        return

    if lookup(path):
        yield ViewNode(depth, name, value, is_last, True, NodeKind.OPEN, path)
        return

    yield ViewNode(depth, name, value, is_last, False, NodeKind.OPEN, path)

    children = _children(value)
    in_object = isinstance(value, dict)
    last_pos = len(children) - 1
    for pos, (key, child) in enumerate(children):
        yield from _project(
            child,
            key if in_object else None,
            pos == last_pos,
            lookup,
            depth + 1,
            path + (key,),
        )

    yield ViewNode(depth, name, value, is_last, False, NodeKind.CLOSE, path)


def project_list(value, collapsed=None) -> list[ViewNode]:
    return list(project(value, collapsed=collapsed))


def brackets(value) -> tuple[str, str]:
    return ("[", "]") if isinstance(value, list) else ("{", "}")


def node_text(node: ViewNode, indent: int = 2) -> str:
    pad = " " * (indent * node.depth)
    comma = "" if node.is_last else ","

    if node.kind is NodeKind.CLOSE:
        return f"{pad}  {brackets(node.value)[1]}{comma}"

    label = f"{literal_text(node.key)}: " if isinstance(node.key, str) else ""

    if node.kind is NodeKind.LEAF:
        return f"{pad}  {label}{literal_text(node.value)}{comma}"

    open_char, close_char = brackets(node.value)
    if node.kind is NodeKind.EMPTY:
        return f"{pad}  {label}{open_char}{close_char}{comma}"

    if node.collapsed:
        return f"{pad}▶ {label}{open_char} … {close_char}{comma}"
    return f"{pad}▼ {label}{open_char}"
