#
# Argfmt - Type Name Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import ctypes
import typing

from typing import Generic, Optional, TypeVar, Union

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from argfmt.typename import PRIMITIVE_ALIASES, fmt_type_name

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


class Widget:
    pass


class Outer:
    class Inner:
        pass


class Box(Generic[T]):
    pass


class Pair(Generic[K, V]):
    pass


class IntBox(Box[int]):
    pass


class Grid(ctypes.Array):
    _type_ = ctypes.c_double
    _length_ = 6
    __array_rank__ = 2


class Cube(ctypes.Array):
    _type_ = ctypes.c_int
    _length_ = 8
    __array_rank__ = 3


class OneBased(ctypes.Array):
    _type_ = ctypes.c_double
    _length_ = 4
    __array_lower_bound__ = 1


# Tests ----------------------------------------------------------------------------------------------------------------


class TestPrimitives:
    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(int, "int", id="int"),
            pytest.param(str, "str", id="str"),
            pytest.param(bool, "bool", id="bool"),
            pytest.param(object, "object", id="object"),
            pytest.param(type(None), "None", id="none-type"),
            pytest.param(ctypes.c_double, "double", id="c-double"),
            pytest.param(ctypes.c_float, "float", id="c-float"),
            pytest.param(ctypes.c_ushort, "unsigned short", id="c-ushort"),
            pytest.param(ctypes.c_wchar, "wchar_t", id="c-wchar"),
        ],
    )
    def test_alias(self, tp, expected):
        """Use the primitive alias instead of the class name."""
        assert fmt_type_name(tp) == expected

    def test_alias_ignores_fully_qualified(self):
        """Never qualify primitive aliases."""
        assert fmt_type_name(int, fully_qualified=True) == "int"
        assert fmt_type_name(ctypes.c_double, fully_qualified=True) == "double"

    def test_every_alias_is_a_type(self):
        """Key the alias table by classes only."""
        assert all(isinstance(tp, type) for tp in PRIMITIVE_ALIASES)


class TestClasses:
    def test_short_name(self):
        """Show the bare class name by default."""
        assert fmt_type_name(Widget) == "Widget"
        assert fmt_type_name(Outer.Inner) == "Inner"

    def test_fully_qualified(self):
        """Prefix the module and outer classes when fully qualified."""
        assert fmt_type_name(Widget, fully_qualified=True) == f"{Widget.__module__}.Widget"
        assert fmt_type_name(Outer.Inner, fully_qualified=True) == f"{Outer.__module__}.Outer.Inner"

    def test_builtin_class_not_qualified(self):
        """Keep builtins short even when fully qualified."""
        assert fmt_type_name(dict, fully_qualified=True) == "dict"


class TestArrays:
    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(ctypes.c_double * 4, "double[]", id="vector"),
            pytest.param((ctypes.c_short * 3) * 2, "short[][]", id="jagged"),
            pytest.param(Grid, "double[,]", id="rank-2"),
            pytest.param(Cube, "int[,,]", id="rank-3"),
            pytest.param(OneBased, "double[*]", id="non-zero-lower-bound"),
            pytest.param(Widget, "Widget", id="not-an-array"),
        ],
    )
    def test_suffix(self, tp, expected):
        """Append one suffix per array level."""
        assert fmt_type_name(tp) == expected

    def test_element_qualified(self):
        """Qualify the element type, not the suffix."""
        assert fmt_type_name(ctypes.c_char * 2, fully_qualified=True) == "char[]"


class TestGenerics:
    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(list[int], "list[int]", id="list"),
            pytest.param(dict[str, int], "dict[str, int]", id="dict"),
            pytest.param(dict[str, list[int]], "dict[str, list[int]]", id="nested"),
            pytest.param(typing.List[int], "list[int]", id="typing-list"),
            pytest.param(typing.Dict[str, typing.Any], "dict[str, Any]", id="typing-dict-any"),
            pytest.param(tuple[int, ...], "tuple[int, ...]", id="variadic-tuple"),
            pytest.param(typing.Callable[[int], str], "Callable[[int], str]", id="callable"),
            pytest.param(abc.Iterator[bytes], "Iterator[bytes]", id="abc-iterator"),
            pytest.param(Box[int], "Box[int]", id="closed-user-generic"),
        ],
    )
    def test_closed(self, tp, expected):
        """List the arguments of a parameterized alias."""
        assert fmt_type_name(tp) == expected

    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(Box, "Box[T]", id="one-param"),
            pytest.param(Pair, "Pair[K, V]", id="two-params"),
            pytest.param(IntBox, "IntBox", id="closed-subclass"),
            pytest.param(T, "T", id="typevar"),
        ],
    )
    def test_open(self, tp, expected):
        """Show type variable slots for open generic definitions."""
        assert fmt_type_name(tp) == expected


class TestOptional:
    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(Optional[int], "int?", id="typing-optional"),
            pytest.param(int | None, "int?", id="pipe-none"),
            pytest.param(Optional[list[int]], "list[int]?", id="optional-generic"),
            pytest.param(dict[str, Optional[int]], "dict[str, int?]", id="optional-argument"),
        ],
    )
    def test_nullable(self, tp, expected):
        """Render a union of one type with None as T?."""
        assert fmt_type_name(tp) == expected

    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(int | str, "int | str", id="pipe"),
            pytest.param(Union[int, str, None], "int | str | None", id="three-way"),
        ],
    )
    def test_union(self, tp, expected):
        """Join other unions with a pipe."""
        assert fmt_type_name(tp) == expected
