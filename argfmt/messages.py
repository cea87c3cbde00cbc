"""
Failure messages built from formatted arguments.

The builders only splice pre-formatted strings (see fmt_arg) into fixed
templates, so they accept arbitrarily long input and never fail on it. Where
a failure has a position, a pointer line '↓ (pos N)' is indented so that the
arrow sits above the offending element in the line below it.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .escape import escape_char
from .options import FmtOptions

# Constants ------------------------------------------------------------------------------------------------------------

POINTER = "↓"

_CHARS_BEFORE = 20
_CHARS_AFTER = 41


# Classes --------------------------------------------------------------------------------------------------------------


class DoesNotContainError(AssertionError):
    """
    Raised when a collection, mapping, set or string unexpectedly contains a value.

    Instances are created through the ``for_*`` factories, which take values
    already formatted by fmt_arg().

    Examples:
        >>> err = DoesNotContainError.for_key_found('"b"', '["a", "b"]')
        >>> print(err)
        DoesNotContain() Failure: Key found in dictionary
        Keys:  ["a", "b"]
        Found: "b"
    """

    @classmethod
    def for_collection_filter_matched(cls, index: int, pointer_indent: int, collection: str) -> Self:
        """An item in the collection matched the filter that nothing should match."""
        return cls(
            _title("Filter matched in collection"),
            _pointer(12, pointer_indent, index),
            "Collection: " + collection,
        )

    @classmethod
    def for_collection_item_found(cls, item: str, index: int, pointer_indent: int, collection: str) -> Self:
        """The item was found in the collection at index."""
        return cls(
            _title("Item found in collection"),
            _pointer(12, pointer_indent, index),
            "Collection: " + collection,
            "Found:      " + item,
        )

    @classmethod
    def for_key_found(cls, expected_key: str, keys: str) -> Self:
        """The key was found in the mapping."""
        return cls(
            _title("Key found in dictionary"),
            "Keys:  " + keys,
            "Found: " + expected_key,
        )

    @classmethod
    def for_set_item_found(cls, item: str, set_: str) -> Self:
        """The item was found in the set."""
        return cls(
            _title("Item found in set"),
            "Set:   " + set_,
            "Found: " + item,
        )

    @classmethod
    def for_sub_sequence_found(cls, expected: str, index: int, pointer_indent: int, sequence: str) -> Self:
        """A contiguous run of items was found in the sequence starting at index."""
        return cls(
            _title("Sub-sequence found"),
            _pointer(10, pointer_indent, index),
            "Sequence: " + sequence,
            "Found:    " + expected,
        )

    @classmethod
    def for_sub_string_found(cls, expected: str | None, index: int, string: str | None) -> Self:
        """
        The substring was found in the string starting at index.

        Unlike the other factories this takes raw strings: the searched string
        is shortened to a window around index so the pointer stays on screen.
        """
        encoded, pointer_indent = shorten_and_encode_string(string, index)
        return cls(
            _title("Sub-string found"),
            _pointer(8, pointer_indent, index),
            "String: " + encoded,
            "Found:  " + shorten_and_encode_string(expected)[0],
        )

    def __init__(self, *lines: str) -> None:
        super().__init__("\n".join(lines))


# Methods --------------------------------------------------------------------------------------------------------------


def shorten_and_encode_string(
    value: str | None,
    position: int | None = None,
    *,
    opts: FmtOptions | None = None,
) -> tuple[str, int]:
    r"""
    Quote and escape the part of a string around position.

    Keeps 20 characters before position and 41 from it; cut sides are marked
    with the ellipsis outside the quotes. Characters are escaped as by
    escape_str(), so a surrogate pair inside the window is kept whole, and
    double quotes are backslash-escaped.

    Args:
        value: The string, or None.
        position: Index of the character of interest. Defaults to 0.
        opts: Supplies the ellipsis marker.

    Returns:
        (text, pointer_indent): pointer_indent is the column of the character
        at position inside text, accounting for the quote, a leading
        ellipsis and wider escape sequences before it. For None: ('null', 0).

    Examples:
        >>> shorten_and_encode_string("a\tb", 2)
        ('"a\\tb"', 4)
        >>> text, indent = shorten_and_encode_string("0123456789" * 10, 50)
        >>> text[:4], indent
        ('···"', 24)
    """
    if value is None:
        return "null", 0

    ellipsis = (opts or FmtOptions()).ellipsis
    position = 0 if position is None else max(0, min(position, len(value)))

    start = max(position - _CHARS_BEFORE, 0)
    end = min(position + _CHARS_AFTER, len(value))

    pointer_indent = position - start + 1
    parts: list[str] = []
    if start > 0:
        parts.append(ellipsis)
        pointer_indent += len(ellipsis)

    parts.append('"')
    for idx in range(start, end):
        ch = value[idx]
        if ch == '"':
            encoded = '\\"'
        elif _in_surrogate_pair(value, idx, start, end):
            encoded = ch
        else:
            encoded = escape_char(ch) or ch
        parts.append(encoded)
        if idx < position:
            pointer_indent += len(encoded) - 1
    parts.append('"')

    if end < len(value):
        parts.append(ellipsis)

    return "".join(parts), pointer_indent


# Private Methods ------------------------------------------------------------------------------------------------------


def _in_surrogate_pair(value: str, idx: int, start: int, end: int) -> bool:
    """True if value[idx] is half of a high/low surrogate pair lying wholly inside value[start:end]."""
    code = ord(value[idx])
    if 0xD800 <= code <= 0xDBFF:
        return idx + 1 < end and 0xDC00 <= ord(value[idx + 1]) <= 0xDFFF
    if 0xDC00 <= code <= 0xDFFF:
        return idx - 1 >= start and 0xD800 <= ord(value[idx - 1]) <= 0xDBFF
    return False


def _pointer(label_width: int, pointer_indent: int, index: int) -> str:
    return " " * (label_width + pointer_indent) + f"{POINTER} (pos {index})"


def _title(reason: str) -> str:
    return f"DoesNotContain() Failure: {reason}"
