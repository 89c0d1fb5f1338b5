"""
Empty-slot marker (implementation detail).

This module defines a process-wide singleton `null` and its type `nulltype`.
A `Value` whose content is `null` holds nothing: it was never stored, or it was
cleared before a new parsing pass. Using a dedicated marker keeps “nothing bound”
apart from legitimate bound content such as "" or [].

Semantics
- Falsy: bool(null) is False.
- Stable string form: repr(null) == "null" (and Rich uses a dim style).
- Identity: nulltype() always returns the same instance per interpreter, and
  copy/deepcopy/pickle preserve that identity.
"""
import functools

from rich.text import Text


class nulltype:
    """
    Singleton type of the empty-slot marker.

    Notes
    - This type is final; subclassing is blocked to preserve semantics.
    - Instances are singletons per interpreter process.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __reduce__(self):
        # Unpickling goes through the cached constructor.
        return type(self), ()

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __rich__(self):
        """
        Rich protocol hook: render a dim 'null' token for empty slots.
        """
        return Text(repr(self), style="dim")

    def __repr__(self):
        return "null"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'nulltype' is not an acceptable base type")


null = nulltype()


__all__ = (
    "nulltype",
    "null",
)
