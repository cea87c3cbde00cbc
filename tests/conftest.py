#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Callable, Iterable, Iterator

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from argfmt.abc import RepeatableIterable


# Helpers --------------------------------------------------------------------------------------------------------------


class CountingIterable(RepeatableIterable):
    """Repeatable iterable that records how many items were pulled from it."""

    def __init__(self, items: Iterable[Any]):
        self._items = list(items)
        self.pulled = 0

    def __iter__(self) -> Iterator[Any]:
        for item in self._items:
            self.pulled += 1
            yield item


class CountingGenerator:
    """Single-use source that records pulls and whether it was closed."""

    def __init__(self, items: Iterable[Any]):
        self._iterator = iter(items)
        self.pulled = 0
        self.closed = False

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        item = next(self._iterator)
        self.pulled += 1
        return item

    def close(self) -> None:
        self.closed = True


# Fixtures -------------------------------------------------------------------------------------------------------------


@pytest.fixture
def counting_iterable() -> Callable[[Iterable[Any]], CountingIterable]:
    """Fixture to create a repeatable iterable that counts the items pulled from it."""

    def _create(items: Iterable[Any]) -> CountingIterable:
        return CountingIterable(items)

    return _create


@pytest.fixture
def counting_source() -> Callable[[Iterable[Any]], CountingGenerator]:
    """Fixture to create a single-use closable source that counts pulls."""

    def _create(items: Iterable[Any]) -> CountingGenerator:
        return CountingGenerator(items)

    return _create
