from dataclasses import dataclass, field
from typing import Callable

import numpy as np


DEFAULT_ITEM_SIZE = 1
DEFAULT_OVERSCAN = 5


@dataclass(frozen=True)
class VirtualItem:
    index: int
    offset: int
    size: int

    @property
    def end(self) -> int:
        return self.offset + self.size


@dataclass(frozen=True)
class VirtualWindow:
    total_extent: int
    items: tuple = field(default_factory=tuple)

    @property
    def indices(self) -> list[int]:
        return [item.index for item in self.items]

    @property
    def start_index(self) -> int | None:
        return self.items[0].index if self.items else None

    @property
    def end_index(self) -> int | None:
        return self.items[-1].index + 1 if self.items else None


EMPTY_WINDOW = VirtualWindow(0, ())


def _sizes(item_count: int, estimate_size: Callable[[int], int]) -> np.ndarray:
    sizes = np.fromiter(
        (int(estimate_size(i)) for i in range(item_count)), dtype=np.int64, count=item_count
    )
    return np.clip(sizes, 0, None)


def window_from_sizes(sizes, viewport_extent, scroll_offset, overscan) -> VirtualWindow:
    sizes = np.asarray(sizes, dtype=np.int64)
    count = len(sizes)
    if count == 0:
        return EMPTY_WINDOW

    ends = np.cumsum(sizes)
    starts = ends - sizes
    total = int(ends[-1])

    avg = total / count
    lo = scroll_offset - overscan * avg
    hi = scroll_offset + max(0, viewport_extent) + overscan * avg

    # first item ending after lo, up to the last item starting before hi
    first = int(np.searchsorted(ends, lo, side="right"))
    last = int(np.searchsorted(starts, hi, side="left"))
    if first >= last:
        return VirtualWindow(total, ())

    items = tuple(
        VirtualItem(i, int(starts[i]), int(sizes[i])) for i in range(first, last)
    )
    return VirtualWindow(total, items)


def compute_window(
    item_count: int,
    estimate_size: Callable[[int], int],
    viewport_extent: int,
    scroll_offset: int,
    overscan: int = DEFAULT_OVERSCAN,
) -> VirtualWindow:
    if item_count <= 0:
        return EMPTY_WINDOW
    sizes = _sizes(item_count, estimate_size)
    return window_from_sizes(sizes, viewport_extent, scroll_offset, max(0, overscan))


class Virtualizer:
    """Scroll state for a list whose items may have different sizes.

    Only the window is handed to the renderer; skipped items are never
    measured or drawn. Sizes reported through measure() override the
    estimator until the item count changes.
    """

    def __init__(
        self,
        count: int = 0,
        estimate_size: Callable[[int], int] | None = None,
        viewport_extent: int = 0,
        overscan: int = DEFAULT_OVERSCAN,
    ):
        self.estimate_size = estimate_size or (lambda _i: DEFAULT_ITEM_SIZE)
        self.count = max(0, count)
        self.viewport_extent = max(0, viewport_extent)
        self.overscan = max(0, overscan)
        self.scroll_offset = 0
        self.measured: dict[int, int] = {}
        self._sizes_cache = None
        self._sizes_version = 0
        self._window_key = None
        self._window = EMPTY_WINDOW

    # ---------- inputs ----------
    def set_count(self, count: int):
        count = max(0, count)
        if count != self.count:
            self.count = count
            self.measured.clear()
            self._invalidate_sizes()
        self._clamp()

    def set_estimator(self, estimate_size: Callable[[int], int]):
        self.estimate_size = estimate_size
        self._invalidate_sizes()
        self._clamp()

    def set_viewport(self, extent: int):
        self.viewport_extent = max(0, extent)
        self._clamp()

    def measure(self, index: int, size: int):
        if 0 <= index < self.count and self.measured.get(index) != size:
            self.measured[index] = max(0, size)
            self._invalidate_sizes()

    def scroll_to(self, offset: int):
        self.scroll_offset = int(offset)
        self._clamp()

    def scroll_by(self, delta: int):
        self.scroll_to(self.scroll_offset + delta)

    def scroll_to_index(self, index: int, align: str = "auto"):
        if self.count == 0:
            self.scroll_offset = 0
            return
        index = max(0, min(index, self.count - 1))
        sizes = self._item_sizes()
        start = int(sizes[:index].sum())
        end = start + int(sizes[index])

        if align == "start":
            self.scroll_to(start)
        elif align == "end":
            self.scroll_to(end - self.viewport_extent)
        elif start < self.scroll_offset:
            self.scroll_to(start)
        elif end > self.scroll_offset + self.viewport_extent:
            self.scroll_to(end - self.viewport_extent)

    # ---------- outputs ----------
    @property
    def total_extent(self) -> int:
        if self.count == 0:
            return 0
        return int(self._item_sizes().sum())

    def window(self) -> VirtualWindow:
        key = (
            self.count,
            self.scroll_offset,
            self.viewport_extent,
            self.overscan,
            self._sizes_version,
        )
        if key != self._window_key:
            self._window = window_from_sizes(
                self._item_sizes(), self.viewport_extent, self.scroll_offset, self.overscan
            )
            self._window_key = key
        return self._window

    def visible_items(self) -> list[VirtualItem]:
        """Items intersecting the viewport itself, without overscan."""
        top = self.scroll_offset
        bottom = top + self.viewport_extent
        return [
            item
            for item in self.window().items
            if item.end > top and item.offset < bottom
        ]

    # ---------- internals ----------
    def _invalidate_sizes(self):
        self._sizes_cache = None
        self._sizes_version += 1

    def _item_sizes(self) -> np.ndarray:
        if self._sizes_cache is None:
            sizes = _sizes(self.count, self.estimate_size)
            for index, size in self.measured.items():
                if index < self.count:
                    sizes[index] = size
            self._sizes_cache = sizes
        return self._sizes_cache

    def _clamp(self):
        max_offset = max(0, self.total_extent - self.viewport_extent)
        self.scroll_offset = max(0, min(self.scroll_offset, max_offset))
