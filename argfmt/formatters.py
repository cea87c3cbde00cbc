"""
Bounded, fail-safe argument formatting for test-failure messages.

fmt_arg() renders any runtime value into a short, human-readable string.
Output size is bounded by FmtOptions regardless of input size or nesting,
one-shot iterables are never consumed, and no exception escapes: a value that
cannot be formatted is described by the exception its formatting raised.

Nested values are rendered by mutual recursion between fmt_arg() and the
collection, tuple and object renderers; every descent increments the depth,
and reaching max_depth collapses the branch into a placeholder.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import asyncio
import collections.abc as abc
import concurrent.futures
import ctypes
import datetime as dt
import enum
import inspect
import math
import sys
import typing
import unicodedata

from typing import Any, Callable, Iterable, get_origin

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import (
    KeyValuePair,
    OpaqueIterable,
    RepeatableIterable,
    SupportsFormatStart,
    is_tuple_like,
    is_value_type,
)
from .escape import ESCAPE_SEQUENCES, escape_str
from .members import is_anonymous, public_members
from .options import FmtOptions
from .typename import fmt_type_name
from .utils import class_name, unwrap_exception

_DEFAULT_OPTIONS = FmtOptions()


# Methods --------------------------------------------------------------------------------------------------------------


def fmt_arg(value: Any, depth: int = 1, *, opts: FmtOptions | None = None) -> str:
    """Format any value for a test-failure message.

    Main entry point. Classifies the value and routes it to a specialized
    renderer. Classification is ordered and the first match wins, since
    categories overlap (a str is iterable, an IntEnum is a number):

        1. None                          → 'null'
        2. class / typing alias          → 'typeof(pkg.Name)'
        3. Enum member                   → member name; Flag members joined by ' | '
        4. ctypes.c_char / c_wchar       → fmt_char()
        5. ctypes.c_float                → fmt_float32()
        6. float / ctypes.c_double       → fmt_float64()
        7. datetime / date / time        → ISO 8601
        8. str                           → fmt_str()
        9. SupportsFormatStart           → value.format_start(depth)
        10. futures, tasks, coroutines   → 'Task { Status = Pending }'
        11. Mapping                      → fmt_safe_iterable() over KeyValuePair items
        12. RepeatableIterable           → fmt_safe_iterable()
        13. other iterable (not tuple)   → fmt_unsafe_iterable(), never iterated
        14. tuple-like                   → fmt_tuple()
        15. ValueType                    → '[key] = value' for KeyValuePair, else str()
        16. custom __repr__ / __str__    → its output, truncated to max_repr;
            anything else                → fmt_object()

    Args:
        value: Any Python object.
        depth: Current nesting depth; callers start at 1.
        opts: Output bounds. Defaults to FmtOptions().

    Returns:
        The formatted string. Never raises an Exception; if formatting fails the
        result is '<ErrorKind> was thrown formatting an object of type "<Type>"'.

    Examples:
        >>> fmt_arg([1, "two", None])
        '[1, "two", null]'
        >>> fmt_arg({"a": 1})
        '[["a"] = 1]'
        >>> fmt_arg(x for x in range(3))
        'generator [···]'
        >>> fmt_arg((1, 2.5))
        'Tuple (1, 2.5)'
    """
    opts = _DEFAULT_OPTIONS if opts is None else opts
    try:
        return _fmt_dispatch(value, depth, opts)
    except Exception as e:
        return f'{class_name(unwrap_exception(e))} was thrown formatting an object of type "{_type_name(value)}"'


def fmt_char(ch: str) -> str:
    """
    Format a single character in single quotes.

    Escape-table characters use their mnemonic, printable characters (letters,
    digits, punctuation, symbols and the space) are shown as is, and everything
    else falls back to a 4-digit hex code point without quotes.

    Examples:
        >>> fmt_char("a")
        "'a'"
        >>> fmt_char("\\n")
        "'\\\\n'"
        >>> fmt_char("\\x7f")
        '0x007f'
    """
    if ch == "'":
        return "'\\''"

    sequence = ESCAPE_SEQUENCES.get(ch)
    if sequence is not None:
        return f"'{sequence}'"

    category = unicodedata.category(ch)
    if ch == " " or category == "Nd" or category[0] in "LPS":
        return f"'{ch}'"

    return f"0x{ord(ch):04x}"


def fmt_float32(x: float) -> str:
    """Format x as a single-precision float with 9 significant digits, enough to round-trip."""
    return format(ctypes.c_float(x).value, ".9g")


def fmt_float64(x: float) -> str:
    """Format x as a double-precision float with 17 significant digits, enough to round-trip."""
    return format(float(x), ".17g")


def fmt_str(s: str, *, opts: FmtOptions | None = None) -> str:
    """
    Format a string in double quotes with escaped control characters.

    Embedded double quotes are backslash-escaped. If the escaped text exceeds
    max_str characters it is cut there and the ellipsis follows the closing quote.

    Examples:
        >>> fmt_str('say "hi"\\t')
        '"say \\\\"hi\\\\"\\\\t"'
        >>> fmt_str("x" * 60, opts=FmtOptions(max_str=5))
        '"xxxxx"···'
    """
    opts = _DEFAULT_OPTIONS if opts is None else opts
    escaped = escape_str(s).replace('"', '\\"')
    if len(escaped) > opts.max_str:
        return f'"{escaped[: opts.max_str]}"{opts.ellipsis}'
    return f'"{escaped}"'


def fmt_safe_iterable(iterable: Iterable[Any], depth: int = 1, *, opts: FmtOptions | None = None) -> str:
    """
    Format the leading elements of a repeatable iterable as '[e0, e1, ...]'.

    The caller guarantees that iterating has no side effects. At most
    max_items + 1 elements are pulled: max_items to show and one more to
    detect truncation. Elements that are themselves iterable are rendered one
    level deeper; scalars stay at the current depth.

    Args:
        iterable: A mapping's KeyValuePair items, a list, a set, etc.
        depth: Current nesting depth.
        opts: Output bounds.

    Returns:
        '[···]' at max_depth, otherwise the bracketed element list with a
        trailing ellipsis if elements were left out.

    Examples:
        >>> fmt_safe_iterable(range(7))
        '[0, 1, 2, 3, 4, ···]'
        >>> fmt_safe_iterable([[1]], depth=3)
        '[···]'
    """
    opts = _DEFAULT_OPTIONS if opts is None else opts
    if depth >= opts.max_depth:
        return f"[{opts.ellipsis}]"

    parts: list[str] = []
    for idx, item in enumerate(iterable):
        if idx == opts.max_items:
            parts.append(opts.ellipsis)
            break
        next_depth = depth + 1 if issubclass(type(item), abc.Iterable) else depth
        parts.append(fmt_arg(item, next_depth, opts=opts))

    return "[" + ", ".join(parts) + "]"


def fmt_unsafe_iterable(iterable: Iterable[Any], *, opts: FmtOptions | None = None) -> str:
    """
    Format an iterable of unknown repeatability without iterating it.

    Examples:
        >>> fmt_unsafe_iterable(iter([1, 2]))
        'list_iterator [···]'
    """
    opts = _DEFAULT_OPTIONS if opts is None else opts
    return f"{class_name(type(iterable))} [{opts.ellipsis}]"


def fmt_tuple(value: Any, depth: int = 1, *, opts: FmtOptions | None = None) -> str:
    """
    Format a positional record as 'Tuple (e0, e1, ...)'.

    Works structurally on anything with __len__ and integer __getitem__.
    Elements are fetched one by one, each inside its own failure boundary,
    and rendered one level deeper.
    """
    opts = _DEFAULT_OPTIONS if opts is None else opts
    if depth >= opts.max_depth:
        return f"Tuple ({opts.ellipsis})"

    length = len(value)
    parts = [
        _fmt_guarded(lambda idx=idx: value[idx], depth + 1, opts)
        for idx in range(min(length, opts.max_items))
    ]
    if length > opts.max_items:
        parts.append(opts.ellipsis)

    return "Tuple (" + ", ".join(parts) + ")"


def fmt_object(obj: Any, depth: int = 1, *, opts: FmtOptions | None = None) -> str:
    """
    Format an object by its public members: 'Type { a = 1, b = "x" }'.

    Members come from public_members(), sorted by name. Only the first
    max_members accessors are invoked; each runs in its own failure boundary
    so that a raising property shows as '(throws ErrorKind)' while its
    siblings still render. Anonymous namespaces omit the type name.

    Args:
        obj: Any instance.
        depth: Current nesting depth; member values render one level deeper.
        opts: Output bounds.

    Returns:
        'Type { ··· }' at max_depth, 'Type { }' without members, otherwise the
        member list with a trailing ellipsis if members were left out.

    Examples:
        >>> from types import SimpleNamespace
        >>> fmt_object(SimpleNamespace(b=2, a=1))
        '{ a = 1, b = 2 }'
    """
    opts = _DEFAULT_OPTIONS if opts is None else opts
    prefix = "" if is_anonymous(obj) else f"{class_name(type(obj))} "

    if depth >= opts.max_depth:
        return f"{prefix}{{ {opts.ellipsis} }}"

    members = public_members(obj)
    if not members:
        return f"{prefix}{{ }}"

    parts = [f"{m.name} = {_fmt_guarded(m.getter, depth + 1, opts)}" for m in members[: opts.max_members]]
    if len(members) > opts.max_members:
        parts.append(opts.ellipsis)

    return f"{prefix}{{ {', '.join(parts)} }}"


# Private Methods ------------------------------------------------------------------------------------------------------


def _fmt_dispatch(value: Any, depth: int, opts: FmtOptions) -> str:
    if value is None:
        return "null"

    if _is_type_descriptor(value):
        return f"typeof({fmt_type_name(value, fully_qualified=True)})"

    if isinstance(value, enum.Enum):
        return _fmt_enum(value)

    if isinstance(value, ctypes.c_char):
        return fmt_char(value.value.decode("latin-1"))

    if isinstance(value, ctypes.c_wchar):
        return fmt_char(value.value)

    if isinstance(value, ctypes.c_float):
        return fmt_float32(value.value)

    if isinstance(value, ctypes.c_double):
        return fmt_float64(value.value)

    if isinstance(value, float):
        return fmt_float64(value)

    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()

    if isinstance(value, str):
        return fmt_str(value, opts=opts)

    if isinstance(value, SupportsFormatStart):
        text = value.format_start(depth)
        if not isinstance(text, str):
            raise TypeError(f"format_start() must return str, not {type(text).__name__}")
        return text

    # asyncio futures are iterable for `yield from`, so status comes before collections
    status = _async_status(value)
    if status is not None:
        return f"{class_name(type(value))} {{ Status = {status} }}"

    if isinstance(value, abc.Mapping):
        return fmt_safe_iterable((KeyValuePair(k, v) for k, v in value.items()), depth, opts=opts)

    if isinstance(value, RepeatableIterable) and not isinstance(value, OpaqueIterable):
        return fmt_safe_iterable(value, depth, opts=opts)

    # Tuples are positional records rather than collections
    if isinstance(value, abc.Iterable) and not isinstance(value, tuple):
        return fmt_unsafe_iterable(value, opts=opts)

    if is_tuple_like(value):
        return fmt_tuple(value, depth, opts=opts)

    if is_value_type(value):
        if isinstance(value, KeyValuePair):
            return f"[{fmt_arg(value.key, depth + 1, opts=opts)}] = {fmt_arg(value.value, depth + 1, opts=opts)}"
        if isinstance(value, int):
            return _fmt_int(value, opts)
        return _fmt_truncate(str(value), opts)

    if not is_anonymous(value):
        cls = type(value)
        if cls.__repr__ is not object.__repr__:
            return _fmt_truncate(repr(value), opts)
        if cls.__str__ is not object.__str__:
            return _fmt_truncate(str(value), opts)

    return fmt_object(value, depth, opts=opts)


def _async_status(value: Any) -> str | None:
    """Status of a future, task or coroutine without touching its result; None for anything else."""
    if asyncio.isfuture(value):
        if value.cancelled():
            return "Cancelled"
        return "Finished" if value.done() else "Pending"

    if isinstance(value, concurrent.futures.Future):
        if value.cancelled():
            return "Cancelled"
        if value.running():
            return "Running"
        return "Finished" if value.done() else "Pending"

    if inspect.iscoroutine(value):
        return inspect.getcoroutinestate(value).removeprefix("CORO_").title()

    return None


def _fmt_enum(value: enum.Enum) -> str:
    if isinstance(value, enum.Flag):
        names = [member.name for member in value]
        if names:
            return " | ".join(names)
    if value.name is not None:
        return value.name
    return str(value.value)


def _fmt_int(value: int, opts: FmtOptions) -> str:
    """Decimal text of an int; past sys.get_int_max_str_digits() only the leading digits are kept."""
    try:
        return _fmt_truncate(str(value), opts)
    except ValueError:
        pass

    shown = min(opts.max_repr, sys.get_int_max_str_digits() - 1)
    magnitude = abs(value)
    # Lower bound on the digit count, so the quotient keeps at least `shown` digits
    digits = int(magnitude.bit_length() * math.log10(2))
    leading = magnitude // 10 ** max(digits - shown, 0)
    sign = "-" if value < 0 else ""
    return sign + str(leading)[:shown] + opts.ellipsis


def _fmt_guarded(getter: Callable[[], Any], depth: int, opts: FmtOptions) -> str:
    """Fetch one member or element; a raising accessor becomes '(throws ErrorKind)'."""
    try:
        value = getter()
    except Exception as e:
        return f"(throws {class_name(unwrap_exception(e))})"
    return fmt_arg(value, depth, opts=opts)


def _fmt_truncate(text: str, opts: FmtOptions) -> str:
    if len(text) > opts.max_repr:
        return text[: opts.max_repr] + opts.ellipsis
    return text


def _is_type_descriptor(value: Any) -> bool:
    return isinstance(value, (type, typing.TypeVar)) or get_origin(value) is not None


def _type_name(value: Any) -> str:
    try:
        return class_name(type(value), fully_qualified=True)
    except Exception:
        return "?"
