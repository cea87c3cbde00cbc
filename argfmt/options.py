"""
Formatting options shared by all argfmt formatters.

Options are immutable and passed explicitly; there is no module-level state to configure.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, replace
from typing import Any, Self

# Constants ------------------------------------------------------------------------------------------------------------

ELLIPSIS = "·" * 3


# Classes --------------------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class FmtOptions:
    """
    Output bounds for argument formatting.

    Attributes:
        max_depth: Depth at which nested containers and objects collapse into a placeholder.
            Formatting starts at depth 1, so the default of 3 expands two levels of nesting.
        max_items: Elements shown from a collection or tuple before the ellipsis.
        max_members: Members shown from a reflected object before the ellipsis.
        max_str: Characters shown from a string (after escaping) before the ellipsis.
        max_repr: Characters shown from a custom __repr__/__str__ before the ellipsis.
        ellipsis: Truncation marker.

    Raises:
        ValueError: If any bound is less than 1.
        TypeError: If ellipsis is not a str.

    Examples:
        >>> FmtOptions().merge(max_items=2).max_items
        2
        >>> FmtOptions.compact().max_depth
        2
    """

    max_depth: int = 3
    max_items: int = 5
    max_members: int = 5
    max_str: int = 50
    max_repr: int = 120
    ellipsis: str = ELLIPSIS

    def __post_init__(self):
        for name in ("max_depth", "max_items", "max_members", "max_str", "max_repr"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {_fmt(value)}")
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {_fmt(value)}")
        if not isinstance(self.ellipsis, str):
            raise TypeError(f"ellipsis must be a str, got {_fmt(self.ellipsis)}")

    @classmethod
    def compact(cls) -> Self:
        """Short one-line output for crowded messages."""
        return cls(max_depth=2, max_items=3, max_members=3, max_str=20, max_repr=60)

    @classmethod
    def debug(cls) -> Self:
        """Generous bounds for interactive inspection."""
        return cls(max_depth=5, max_items=20, max_members=20, max_str=200, max_repr=400)

    def merge(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced."""
        return replace(self, **kwargs)


# Private Methods ------------------------------------------------------------------------------------------------------


def _fmt(value: Any) -> str:
    from .formatters import fmt_arg

    return fmt_arg(value)
