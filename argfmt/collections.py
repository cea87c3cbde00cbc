"""
Argfmt Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import warnings

from typing import Any, Generic, Iterable, Iterator, Self, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_arg
from .options import FmtOptions

# Classes --------------------------------------------------------------------------------------------------------------

T = TypeVar("T")


class CollectionTracker(Generic[T]):
    """
    Caching wrapper that makes a single-use iterable safe to display.

    Items are pulled from the source lazily and remembered, so iterating the
    tracker any number of times consumes the source at most once, and
    formatting only pulls as many items as it displays. Implements the
    SupportsFormatStart protocol, so fmt_arg() delegates to format_start().

    - Iteration replays cached items, then continues pulling from the source.
    - format_start() renders the first items, e.g. '[1, 2, 3, 4, 5, ···]'.
    - format_indexed_mismatch() renders a window around one index and reports
      where that item starts, for a pointer line under the failing element.
    - close() releases the source if it has a close() method; the tracker is
      also a context manager.

    Examples:
        >>> tracker = CollectionTracker(x * x for x in range(100))
        >>> tracker.format_start()
        '[0, 1, 4, 9, 16, ···]'
        >>> len(tracker.items)
        6
    """

    def __init__(self, source: Iterable[T], *, opts: FmtOptions | None = None) -> None:
        self._source = source
        self._iterator: Iterator[T] | None = None
        self._items: list[T] = []
        self._exhausted = False
        self._opts = opts if opts is not None else FmtOptions()

    # ----- Iteration -----

    def __iter__(self) -> Iterator[T]:
        idx = 0
        while idx < len(self._items) or self._pull():
            yield self._items[idx]
            idx += 1

    @property
    def items(self) -> tuple[T, ...]:
        """Items pulled from the source so far."""
        return tuple(self._items)

    # ----- Formatting -----

    def format_start(self, depth: int = 1) -> str:
        """Format the first max_items items, pulling one extra to detect truncation."""
        opts = self._opts
        if depth >= opts.max_depth:
            return f"[{opts.ellipsis}]"

        self._fill(opts.max_items + 1)
        shown = self._items[: opts.max_items]
        parts = [self._fmt_item(item, depth) for item in shown]
        if len(self._items) > opts.max_items:
            parts.append(opts.ellipsis)
        return "[" + ", ".join(parts) + "]"

    def format_indexed_mismatch(self, index: int, depth: int = 1) -> tuple[str, int]:
        """
        Format the items around index and locate it in the output.

        Shows up to max_items items with index roughly centered, with an
        ellipsis on each side where items were cut.

        Returns:
            (text, pointer_indent): pointer_indent is the column in text where
            the item at index starts, or of the closing bracket if the source
            has no item at index.

        Examples:
            >>> CollectionTracker(range(20)).format_indexed_mismatch(10)
            ('[···, 8, 9, 10, 11, 12, ···]', 12)
        """
        if index < 0:
            raise ValueError(f"index must be >= 0, got {fmt_arg(index)}")

        opts = self._opts
        if depth >= opts.max_depth:
            return f"[{opts.ellipsis}]", 1

        start = max(0, index - opts.max_items // 2)
        end = start + opts.max_items
        self._fill(end + 1)

        text = "["
        if start > 0:
            text += opts.ellipsis
        pointer_indent = None
        for idx in range(start, min(end, len(self._items))):
            if idx > 0:
                text += ", "
            if idx == index:
                pointer_indent = len(text)
            text += self._fmt_item(self._items[idx], depth)
        if len(self._items) > end:
            text += ", " + opts.ellipsis
        text += "]"

        if pointer_indent is None:
            pointer_indent = len(text) - 1
        return text, pointer_indent

    # ----- Resource handling -----

    def close(self) -> None:
        """Close the source if it supports it. Failures are reported as ResourceWarning."""
        close = getattr(self._source, "close", None)
        if not callable(close):
            return
        try:
            close()
        except Exception as e:
            warnings.warn(
                f"closing {type(self._source).__name__} failed: {fmt_arg(e)}",
                ResourceWarning,
                stacklevel=2,
            )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"CollectionTracker({self.format_start()})"

    # ----- Private -----

    def _fill(self, count: int) -> None:
        while len(self._items) < count and self._pull():
            pass

    def _fmt_item(self, item: Any, depth: int) -> str:
        next_depth = depth + 1 if issubclass(type(item), abc.Iterable) else depth
        return fmt_arg(item, next_depth, opts=self._opts)

    def _pull(self) -> bool:
        """Cache one more item from the source; False once it is exhausted."""
        if self._exhausted:
            return False
        if self._iterator is None:
            self._iterator = iter(self._source)
        try:
            item = next(self._iterator)
        except StopIteration:
            self._exhausted = True
            return False
        self._items.append(item)
        return True
