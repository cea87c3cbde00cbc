"""
Public member discovery for reflective object formatting.

Finds the public instance state of an object (instance attributes, slots and
properties) without evaluating any of it. Values are fetched later through the
returned accessors, one at a time, so a failing getter can be isolated.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import functools
import types

from dataclasses import dataclass
from typing import Any, Callable

# Constants ------------------------------------------------------------------------------------------------------------

_GETTER_DESCRIPTORS = (property, functools.cached_property, types.MemberDescriptorType)


# Classes --------------------------------------------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Member:
    """A named public member and a zero-argument accessor for its current value."""

    name: str
    getter: Callable[[], Any]


# Methods --------------------------------------------------------------------------------------------------------------


def is_anonymous(obj: Any) -> bool:
    """True for ad-hoc attribute bags whose type name carries no information."""
    return type(obj) is types.SimpleNamespace


def public_members(obj: Any) -> list[Member]:
    """
    List the public instance members of obj, sorted by name.

    Members are:
        - instance attributes stored in ``obj.__dict__``;
        - slots and properties (including ``functools.cached_property``)
          defined anywhere on the class MRO.

    Names starting with an underscore, class-level attributes, methods and
    write-only properties are skipped. Nothing is evaluated here; each
    Member.getter performs a plain getattr() when called.

    Args:
        obj: Any instance.

    Returns:
        Members ordered by ordinal name comparison; a name appears once even if it is
        both a property and an instance attribute (as with cached_property).

    Examples:
        >>> class Point:
        ...     def __init__(self):
        ...         self.y = 2
        ...         self.x = 1
        ...     @property
        ...     def norm(self):
        ...         return 5
        >>> [m.name for m in public_members(Point())]
        ['norm', 'x', 'y']
    """
    names = set(_class_members(type(obj)))

    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        names.update(name for name in instance_dict if isinstance(name, str) and not name.startswith("_"))

    return [Member(name, functools.partial(getattr, obj, name)) for name in sorted(names)]


# Private Methods ------------------------------------------------------------------------------------------------------


@functools.lru_cache(maxsize=512)
def _class_members(cls: type) -> tuple[str, ...]:
    """Public getter descriptors visible on instances of cls, keyed by class identity."""
    seen: set[str] = set()
    found: list[str] = []
    for klass in cls.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            # The nearest definition in the MRO decides what the name is
            seen.add(name)
            if name.startswith("_") or not isinstance(attr, _GETTER_DESCRIPTORS):
                continue
            if isinstance(attr, property) and attr.fget is None:
                continue
            found.append(name)
    return tuple(found)
