"""
Argfmt utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Qualified names use the class `__qualname__`, so nested classes keep their
    outer class path while function-local classes lose the `<locals>` marker.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
        >>> class Outer:
        ...     class Inner: ...
        >>> class_name(Outer.Inner, fully_qualified=True)
        '__main__.Outer.Inner'
    """
    cls = obj if isinstance(obj, type) else type(obj)

    module = getattr(cls, "__module__", None) or ""
    short = getattr(cls, "__name__", None) or "?"

    if module == "builtins":
        qualify = fully_qualified_builtins
    else:
        qualify = fully_qualified

    if not qualify:
        return short

    qualname = getattr(cls, "__qualname__", None) or short
    qualname = qualname.replace("<locals>.", "")
    return f"{module}.{qualname}" if module else qualname


def unwrap_exception(exc: BaseException) -> BaseException:
    """
    Return the innermost exception behind wrapping boundaries.

    An exception group holding exactly one exception is a wrapper around it
    (e.g. what ``asyncio.TaskGroup`` raises for a single failing task), so it
    is peeled off repeatedly. Anything else is returned as is; ordinary
    ``__cause__`` chains are kept because the outer exception is the one the
    accessor actually raised.
    """
    while isinstance(exc, BaseExceptionGroup) and len(exc.exceptions) == 1:
        exc = exc.exceptions[0]
    return exc
