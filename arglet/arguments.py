r"""
Arglet argument descriptors.

Overview
- Arity
  • Fixed(count): consumes exactly `count` tokens (count >= 0; zero means a switch).
  • Unbounded(minimum): consumes a run of tokens; minimum 1 is nargs="+", minimum 0 is nargs="*".
  • arity(nargs): resolve the user-facing nargs spelling (int, "+", "*") into one of the above.

- Names
  • sanitize(name): validate a dashed name and strip its dashes.
    "-x" (dash + one alphanumeric) is a short name, "--name" is a long name; any other
    shape raises InvalidNameFormatError.

- Argument
  • Immutable record of one declared argument: short/long names, optionality, arity and
    whether it is the final (trailing positional) argument. Fields are exposed as
    read-only properties declared in __introspectable__.

Quick example:
    >>> from arglet.arguments import Argument, arity
    >>> Argument("n", "name", arity(1))
    argument(short='n', long='name', optional=True, arity=Fixed(count=1), final=False)
"""
import functools
import operator
import re
from typing import NamedTuple

from .faults import FaultCode, InvalidNameFormatError, getdoc
from .utils import *


class Fixed(NamedTuple):
    count: int

    def __eq__(self, other):
        # Fixed(1) and Unbounded(1) are different arities even though both are (1,).
        if type(other) is not type(self):
            return NotImplemented
        return tuple.__eq__(self, other)

    __hash__ = tuple.__hash__

    @property
    def shape(self):
        """
        Shape of the slot paired with this arity: str up to one token, list above.
        """
        return str if self.count <= 1 else list

    def __str__(self):
        return str(self.count)


class Unbounded(NamedTuple):
    minimum: int

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return tuple.__eq__(self, other)

    __hash__ = tuple.__hash__

    @property
    def shape(self):
        return list

    @property
    def symbol(self):
        return "+" if self.minimum else "*"

    def __str__(self):
        return self.symbol


def arity(nargs, /):
    """
    Resolve a nargs value into a Fixed or Unbounded arity.

    Accepted
    - int >= 0      → Fixed(nargs)
    - "+"           → Unbounded(1)
    - "*"           → Unbounded(0)
    - Fixed/Unbounded instances are validated and returned unchanged.

    Raises
    - TypeError: nargs is not an int, a string, or an arity (bool is rejected).
    - ValueError: negative count, unknown symbol, or an Unbounded minimum other than 0/1.
    """
    match nargs:
        case Fixed(count) if isinstance(count, int) and not isinstance(count, bool):
            if count < 0:
                raise ValueError("argument 'nargs' must be a non-negative integer")
            return nargs
        case Unbounded(minimum) if minimum in (0, 1) and not isinstance(minimum, bool):
            return nargs
        case Unbounded():
            raise ValueError("argument unbounded minimum must be 0 or 1")
        case bool():
            raise TypeError("argument 'nargs' must be an integer, '+' or '*'")
        case int():
            if nargs < 0:
                raise ValueError("argument 'nargs' must be a non-negative integer")
            return Fixed(nargs)
        case "+":
            return Unbounded(1)
        case "*":
            return Unbounded(0)
        case str():
            raise ValueError("argument 'nargs' must be one of '+' or '*' when given as a string")
        case _:
            raise TypeError("argument 'nargs' must be an integer, '+' or '*'")


def sanitize(name, /):
    """
    Validate a dashed argument name and return (kind, bare) where kind is "short" or "long".

    Rules
    - two characters: '-' followed by one alphanumeric character (short form).
    - more than two characters: must begin with '--' (long form); the remainder must
      not start with another dash and may not contain whitespace or '='.
    - any other length is rejected.
    """
    if not isinstance(name, str):
        raise TypeError("argument names must be strings")

    if len(name) == 2:
        if name[0] == "-" and name[1].isalnum():
            return "short", name[1:]
        raise InvalidNameFormatError(
            "invalid argument name %r: short names must be '-' followed by one letter or digit" % name,
            title="invalid argument name",
            code=FaultCode.INVALID_NAME_FORMAT,
            hint="use a form like '-x'",
            name=name,
            docs=getdoc(FaultCode.INVALID_NAME_FORMAT)
        )
    if len(name) > 2:
        if re.fullmatch(r"--[^\s=-][^\s=]*", name):
            return "long", name[2:]
        raise InvalidNameFormatError(
            "invalid argument name %r: multi-character names must begin with '--'" % name,
            title="invalid argument name",
            code=FaultCode.INVALID_NAME_FORMAT,
            hint="use a form like '--name'",
            name=name,
            docs=getdoc(FaultCode.INVALID_NAME_FORMAT)
        )
    raise InvalidNameFormatError(
        "invalid argument name %r: argument specifier has the wrong format" % name,
        title="invalid argument name",
        code=FaultCode.INVALID_NAME_FORMAT,
        hint="use '-x' for short names or '--name' for long names",
        name=name,
        docs=getdoc(FaultCode.INVALID_NAME_FORMAT)
    )


class ArgumentType(type):
    """
    Metaclass that turns descriptor classes into immutable, introspectable records.

    Responsibilities
    - Expose the fields listed in __introspectable__ as read-only properties (via mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name for messages.
    - Seal the class against subclassing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


class Argument(metaclass=ArgumentType):
    """
    Immutable declaration of one argument.

    Fields
    - short: "" or a single alphanumeric character (no dash).
    - long: "" or a long name (no leading dashes).
    - optional: bool.
    - arity: Fixed | Unbounded.
    - final: bool; the final argument is bound by position, never by a flag token.

    Derived
    - names: the non-empty names, short first.
    - metavar: upper-cased long name, else upper-cased short name.
    - flag: the dashed spelling used in usage and messages ("--name" or "-n").
    - shape: str or list, the shape of the paired slot.
    """

    __introspectable__ = (
        "short",
        "long",
        "optional",
        "arity",
        "final",
    )

    __slots__ = ("_short", "_long", "_optional", "_arity", "_final")

    def __init__(self, short="", long="", arity=Fixed(0), /, optional=True, *, final=False):
        if not isinstance(short, str) or not isinstance(long, str):
            raise TypeError("argument names must be strings")
        if not short and not long:
            raise TypeError("argument must specify at least one name")
        if not isinstance(arity, Fixed | Unbounded):
            raise TypeError("argument 'arity' must be a Fixed or Unbounded arity")
        object.__setattr__(self, "_short", short)
        object.__setattr__(self, "_long", long)
        object.__setattr__(self, "_optional", bool(optional))
        object.__setattr__(self, "_arity", arity)
        object.__setattr__(self, "_final", bool(final))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__typename__} objects are immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__typename__} objects are immutable")

    @property
    def names(self):
        return tuple(name for name in (self._short, self._long) if name)

    @property
    def metavar(self):
        return (self._long or self._short).upper()

    @property
    def flag(self):
        return "--" + self._long if self._long else "-" + self._short

    @property
    def shape(self):
        return self._arity.shape

    def __eq__(self, other):
        if not isinstance(other, Argument):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash((self._short, self._long, self._optional, self._arity, self._final))


__all__ = (
    "Fixed",
    "Unbounded",
    "Argument",
    "arity",
    "sanitize",
)

# Keep the metaclass out of star-imports; it is an implementation detail.
del ArgumentType
