"""
Character escaping for diagnostic strings.

Control characters and invalid UTF-16 code units are made visible so that
whitespace and garbage in a test value never hide in a failure message.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from types import MappingProxyType

# Constants ------------------------------------------------------------------------------------------------------------

ESCAPE_SEQUENCES = MappingProxyType(
    {
        "\t": "\\t",
        "\n": "\\n",
        "\v": "\\v",
        "\a": "\\a",
        "\r": "\\r",
        "\f": "\\f",
        "\b": "\\b",
        "\0": "\\0",
        "\\": "\\\\",
    }
)

_NON_CHARACTERS = frozenset(("\ufffe", "\uffff"))


# Methods --------------------------------------------------------------------------------------------------------------


def escape_char(ch: str) -> str | None:
    r"""
    Return the escape sequence for a single character, or None if it prints as is.

    Surrogates are always escaped here; pairs are only recognized by escape_str().

    Examples:
        >>> print(escape_char("\t"))
        \t
        >>> print(escape_char("\x01"))
        \x01
        >>> escape_char("a") is None
        True
    """
    sequence = ESCAPE_SEQUENCES.get(ch)
    if sequence is not None:
        return sequence

    code = ord(ch)
    if code < 32:
        return f"\\x{code:02x}"
    if _is_surrogate(code) or ch in _NON_CHARACTERS:
        return f"\\x{code:04x}"
    return None


def escape_str(s: str) -> str:
    """
    Escape control characters, lone surrogates and non-characters in a string.

    A high surrogate immediately followed by a low surrogate (as produced by
    ``surrogatepass`` decoding) is a valid pair and is kept verbatim.
    """
    parts: list[str] = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        code = ord(ch)
        if 0xD800 <= code <= 0xDBFF and i + 1 < n and 0xDC00 <= ord(s[i + 1]) <= 0xDFFF:
            parts.append(s[i : i + 2])
            i += 2
            continue

        sequence = escape_char(ch)
        parts.append(ch if sequence is None else sequence)
        i += 1
    return "".join(parts)


# Private Methods ------------------------------------------------------------------------------------------------------


def _is_surrogate(code: int) -> bool:
    return 0xD800 <= code <= 0xDFFF
