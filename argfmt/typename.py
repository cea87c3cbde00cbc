"""
Display names for types, generic aliases and ctypes arrays.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
import types
import typing

from types import MappingProxyType
from typing import Any, get_args, get_origin

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

# Constants ------------------------------------------------------------------------------------------------------------

# Later entries win where ctypes aliases one scalar to another (e.g. c_longlong is c_long on LP64)
PRIMITIVE_ALIASES = MappingProxyType(
    {
        bool: "bool",
        int: "int",
        float: "float",
        complex: "complex",
        str: "str",
        bytes: "bytes",
        bytearray: "bytearray",
        object: "object",
        type(None): "None",
        ctypes.c_bool: "bool",
        ctypes.c_char: "char",
        ctypes.c_wchar: "wchar_t",
        ctypes.c_byte: "signed char",
        ctypes.c_ubyte: "unsigned char",
        ctypes.c_short: "short",
        ctypes.c_ushort: "unsigned short",
        ctypes.c_longlong: "long long",
        ctypes.c_ulonglong: "unsigned long long",
        ctypes.c_long: "long",
        ctypes.c_ulong: "unsigned long",
        ctypes.c_int: "int",
        ctypes.c_uint: "unsigned int",
        ctypes.c_float: "float",
        ctypes.c_double: "double",
        ctypes.c_longdouble: "long double",
        ctypes.c_char_p: "char *",
        ctypes.c_wchar_p: "wchar_t *",
        ctypes.c_void_p: "void *",
    }
)

_UNION_ORIGINS = (typing.Union, types.UnionType)


# Methods --------------------------------------------------------------------------------------------------------------


def fmt_type_name(tp: Any, fully_qualified: bool = False) -> str:
    """
    Format the display name of a type for diagnostic messages.

    Array levels are stripped first and re-attached as a suffix, then the
    element type is named:

    - primitive aliases win (``int``, ``None``, ``double`` for ``ctypes.c_double``);
    - otherwise the short class name, or ``module.QualName`` if fully_qualified
      (builtins are never qualified);
    - an open generic class lists its type variables, e.g. ``Box[T]``;
    - a parameterized alias lists its arguments, e.g. ``dict[str, int]``;
    - ``Optional[T]`` and ``T | None`` become ``T?``.

    A ctypes array level adds ``[]``. Array types may refine this with the
    class attributes ``__array_rank__`` (``[,]`` with rank-1 commas) and a
    non-zero ``__array_lower_bound__`` (``[*]``).

    Args:
        tp: A class, a typing alias, a TypeVar or a ctypes array type.
        fully_qualified: Use module-qualified names for the outermost non-builtin type.

    Returns:
        The display name; never raises for ordinary typing constructs.

    Examples:
        >>> fmt_type_name(dict[str, list[int]])
        'dict[str, list[int]]'
        >>> fmt_type_name(int | None)
        'int?'
        >>> fmt_type_name(ctypes.c_double * 4)
        'double[]'
    """
    suffix = ""
    while _is_array_type(tp):
        suffix += _array_suffix(tp)
        tp = tp._type_

    return _element_name(tp, fully_qualified) + suffix


# Private Methods ------------------------------------------------------------------------------------------------------


def _array_suffix(tp: type) -> str:
    rank = getattr(tp, "__array_rank__", 1)
    if rank > 1:
        return "[" + "," * (rank - 1) + "]"
    if getattr(tp, "__array_lower_bound__", 0):
        return "[*]"
    return "[]"


def _arg_name(arg: Any) -> str:
    """Name a single generic argument, which is not always a type."""
    if arg is Ellipsis:
        return "..."
    if isinstance(arg, list):
        # Callable[[int, str], bool] carries its parameters as a list
        return "[" + ", ".join(_arg_name(a) for a in arg) + "]"
    if isinstance(arg, (type, typing.TypeVar)) or get_origin(arg) is not None:
        return fmt_type_name(arg)
    if hasattr(arg, "__name__"):
        return arg.__name__
    return repr(arg)


def _base_name(tp: Any, fully_qualified: bool) -> str:
    if isinstance(tp, type):
        alias = PRIMITIVE_ALIASES.get(tp)
        if alias is not None:
            return alias
        return class_name(tp, fully_qualified=fully_qualified)
    name = getattr(tp, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(tp)


def _element_name(tp: Any, fully_qualified: bool) -> str:
    origin = get_origin(tp)

    if origin in _UNION_ORIGINS:
        args = get_args(tp)
        others = [a for a in args if a is not type(None)]
        if len(args) == 2 and len(others) == 1:
            return fmt_type_name(others[0]) + "?"
        return " | ".join(_arg_name(a) for a in args)

    if origin is not None:
        name = _base_name(origin, fully_qualified)
        args = get_args(tp)
        if not args:
            return name
        return f"{name}[{', '.join(_arg_name(a) for a in args)}]"

    if isinstance(tp, typing.TypeVar):
        return tp.__name__

    name = _base_name(tp, fully_qualified)
    params = getattr(tp, "__parameters__", None) if isinstance(tp, type) else None
    if params:
        # Open generic definition: one slot per type parameter
        return f"{name}[{', '.join(_arg_name(p) for p in params)}]"
    return name


def _is_array_type(tp: Any) -> bool:
    if get_origin(tp) is not None:
        return False
    return isinstance(tp, type) and issubclass(tp, ctypes.Array) and hasattr(tp, "_type_")
