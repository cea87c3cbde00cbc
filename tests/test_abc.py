#
# Argfmt - ABC Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections
import ctypes
import datetime as dt
import io
import uuid

from decimal import Decimal
from fractions import Fraction

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from argfmt.abc import (
    KeyValuePair,
    OpaqueIterable,
    RepeatableIterable,
    SupportsFormatStart,
    ValueType,
    is_tuple_like,
    is_value_type,
)


class Stream(list, OpaqueIterable):
    pass


class Tracked:
    def __iter__(self):
        return iter(())

    def close(self):
        pass

    def format_start(self, depth=1):
        return "[]"


class Positional:
    def __len__(self):
        return 2

    def __getitem__(self, idx):
        return idx


# Tests ----------------------------------------------------------------------------------------------------------------


class TestRepeatableIterable:
    @pytest.mark.parametrize(
        "obj",
        [
            pytest.param([1], id="list"),
            pytest.param({1}, id="set"),
            pytest.param(frozenset({1}), id="frozenset"),
            pytest.param({"a": 1}.keys(), id="dict-keys"),
            pytest.param({"a": 1}.values(), id="dict-values"),
            pytest.param(range(3), id="range"),
            pytest.param(b"ab", id="bytes"),
            pytest.param(bytearray(b"ab"), id="bytearray"),
            pytest.param(memoryview(b"ab"), id="memoryview"),
            pytest.param(array.array("i", [1]), id="array"),
            pytest.param(collections.deque([1]), id="deque"),
            pytest.param(collections.UserList([1]), id="userlist"),
            pytest.param((ctypes.c_int * 2)(1, 2), id="ctypes-array"),
        ],
    )
    def test_registered(self, obj):
        """Recognize built-in collections that iterate without side effects."""
        assert isinstance(obj, RepeatableIterable)

    @pytest.mark.parametrize(
        "obj",
        [
            pytest.param(iter([1]), id="iterator"),
            pytest.param((x for x in ()), id="generator"),
            pytest.param(io.StringIO("x"), id="stream"),
            pytest.param((1, 2), id="tuple"),
            pytest.param("abc", id="str"),
            pytest.param(frozendict(a=1), id="mapping"),
        ],
    )
    def test_not_registered(self, obj):
        """Leave single-use and specially handled iterables out."""
        assert not isinstance(obj, RepeatableIterable)

    def test_subclass_opt_in(self):
        """Let user iterables opt in by subclassing."""

        class Bag(RepeatableIterable):
            def __iter__(self):
                return iter((1, 2))

        assert isinstance(Bag(), RepeatableIterable)

    def test_opaque_marker_on_list_subclass(self):
        """Keep both markers visible on an opted-out list subclass."""
        stream = Stream([1, 2])
        assert isinstance(stream, RepeatableIterable)
        assert isinstance(stream, OpaqueIterable)


class TestSupportsFormatStart:
    def test_structural_match(self):
        """Recognize any class with __iter__, close and format_start."""
        assert isinstance(Tracked(), SupportsFormatStart)

    def test_partial_match_rejected(self):
        """Reject classes missing format_start."""
        assert not isinstance([1], SupportsFormatStart)


class TestValueType:
    @pytest.mark.parametrize(
        "obj",
        [
            pytest.param(1, id="int"),
            pytest.param(True, id="bool"),
            pytest.param(1.5, id="float"),
            pytest.param(1 + 2j, id="complex"),
            pytest.param(Decimal("1.5"), id="decimal"),
            pytest.param(Fraction(1, 3), id="fraction"),
            pytest.param(uuid.UUID(int=0), id="uuid"),
            pytest.param(dt.timedelta(seconds=1), id="timedelta"),
            pytest.param(KeyValuePair("k", 1), id="key-value-pair"),
        ],
    )
    def test_value_types(self, obj):
        """Recognize immutable scalar-like values."""
        assert is_value_type(obj)
        assert isinstance(obj, ValueType)

    @pytest.mark.parametrize(
        "obj",
        [
            pytest.param("s", id="str"),
            pytest.param(object(), id="object"),
            pytest.param(dt.datetime(2024, 1, 1), id="datetime"),
        ],
    )
    def test_not_value_types(self, obj):
        """Reject strings, plain objects and date stamps."""
        assert not is_value_type(obj)


class TestKeyValuePair:
    def test_frozen_and_equal(self):
        """Compare pairs by value and reject mutation."""
        pair = KeyValuePair("a", 1)
        assert pair == KeyValuePair("a", 1)
        with pytest.raises(AttributeError):
            pair.key = "b"

    def test_not_iterable(self):
        """Stay a scalar so formatters do not expand it as a collection."""
        assert not hasattr(KeyValuePair("a", 1), "__iter__")


class TestIsTupleLike:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param((1, 2), True, id="tuple"),
            pytest.param(Positional(), True, id="structural"),
            pytest.param(object(), False, id="object"),
            pytest.param(1, False, id="int"),
        ],
    )
    def test_tuple_like(self, obj, expected):
        """Detect sized, indexable records structurally."""
        assert is_tuple_like(obj) is expected

    def test_instance_attributes_ignored(self):
        """Look at the type, not at instance attributes."""

        class Fake:
            pass

        fake = Fake()
        fake.__len__ = lambda: 1
        fake.__getitem__ = lambda idx: idx
        assert not is_tuple_like(fake)
