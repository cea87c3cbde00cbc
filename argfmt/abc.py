"""
Capability markers that steer argument formatting.

Whether a collection may be iterated for display is declared, not guessed:
register a class with RepeatableIterable when iterating it is side-effect free
and repeatable, or with OpaqueIterable when it must never be iterated by a
formatter. Unregistered iterables are treated as opaque.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections
import collections.abc as abc
import ctypes
import datetime as dt
import numbers
import uuid

from abc import ABCMeta
from dataclasses import dataclass
from typing import Any, Iterator, Protocol, runtime_checkable


# Classes --------------------------------------------------------------------------------------------------------------


class RepeatableIterable(abc.Iterable):
    """
    Marker for iterables that can be iterated again without side effects.

    Formatters expand these element by element. Explicit OpaqueIterable
    subclasses are never expanded, even when registered here through a base class.
    """

    __slots__ = ()


class OpaqueIterable(abc.Iterable):
    """Marker for iterables of unknown repeatability, e.g. streams and single-use readers."""

    __slots__ = ()


class ValueType(metaclass=ABCMeta):
    """Marker for immutable scalar-like values displayed via str()."""

    __slots__ = ()


@runtime_checkable
class SupportsFormatStart(Protocol):
    """
    Self-describing collection that renders its own start for diagnostics.

    Implementations typically wrap a pull-based source and cache what they
    consumed, so that formatting does not consume it a second time.
    """

    def __iter__(self) -> Iterator[Any]: ...

    def close(self) -> None: ...

    def format_start(self, depth: int = 1) -> str: ...


@dataclass(frozen=True, slots=True)
class KeyValuePair:
    """One mapping entry, displayed as ``[key] = value``."""

    key: Any
    value: Any


# Methods --------------------------------------------------------------------------------------------------------------


def is_tuple_like(obj: Any) -> bool:
    """
    Check whether obj is a positional record: sized and indexable by position.

    The check is structural and looks at the type, so instance attributes named
    ``__len__`` or ``__getitem__`` do not count.
    """
    cls = type(obj)
    return hasattr(cls, "__len__") and hasattr(cls, "__getitem__")


def is_value_type(obj: Any) -> bool:
    """Check whether obj is a registered ValueType."""
    return isinstance(obj, ValueType)


# Registrations --------------------------------------------------------------------------------------------------------

for _cls in (
    abc.MutableSequence,
    abc.Set,
    abc.MappingView,
    range,
    bytes,
    memoryview,
    array.array,
    collections.deque,
    collections.UserList,
    ctypes.Array,
):
    RepeatableIterable.register(_cls)

for _cls in (numbers.Number, uuid.UUID, dt.timedelta, KeyValuePair):
    ValueType.register(_cls)

del _cls
