"""
Arglet faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the library
  reports. Codes are grouped by the phase that detects them:
  declaration (211xx), binding (212xx), retrieval (213xx) and warnings (22xxx).
- ArgumentException / ArgumentWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- Concrete faults also derive from the matching builtin (ValueError, LookupError,
  TypeError) so plain `except ValueError:` code keeps working.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Phases
- Declaration faults (bad names, duplicates, second final argument) and retrieval
  faults (unknown name, wrong shape, empty slot) are programming errors and are
  raised directly.
- Binding faults (missing values, unknown arguments, missing required arguments)
  concern the end user and go through ArgumentParser.trigger(), which renders
  them on stderr in shell mode.

Host configuration (read from __main__)
- __codes__: mapping FaultCode -> label used instead of the numeric code.
- __docs__: mapping FaultCode -> short documentation string.
- __styles__: mapping style-name -> rich style overriding the default palette.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - declaration (2110x)
      • INVALID_NAME_FORMAT, DUPLICATE_ARGUMENT, MULTIPLE_FINAL_ARGUMENTS
    - binding (2120x)
      • MISSING_VALUE, UNKNOWN_ARGUMENT, UNEXPECTED_VALUE, MISSING_REQUIRED_ARGUMENT
    - retrieval (2130x)
      • UNKNOWN_NAME, TYPE_MISMATCH, EMPTY_VALUE
    - warnings (2210x)
      • REPEATED_ARGUMENT
    """
    # --- declaration errors (211xx) ---
    INVALID_NAME_FORMAT         = 21101
    DUPLICATE_ARGUMENT          = 21102
    MULTIPLE_FINAL_ARGUMENTS    = 21103

    # --- binding errors (212xx) ---
    MISSING_VALUE               = 21201
    UNKNOWN_ARGUMENT            = 21202
    UNEXPECTED_VALUE            = 21203
    MISSING_REQUIRED_ARGUMENT   = 21204

    # --- retrieval errors (213xx) ---
    UNKNOWN_NAME                = 21301
    TYPE_MISMATCH               = 21302
    EMPTY_VALUE                 = 21303

    # --- warnings (22xxx) ---
    REPEATED_ARGUMENT           = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderable(fault, palette, kind):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: "[ prog — code | Title ]"
    - body: the message, then "→ hint" on its own line.
    - fancy: the body is wrapped in a Panel titled by the header.
    """
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    prog = text(getattr(main, "__prog__", fault.options.get("prog", "")), "prog-name")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if (code := fault.options.get("code")) else "", "code"),
        " | ",
        text(fault.options.get("title", "").title(), kind + "-title"),
        " ]"
    )
    message = text(fault.message, kind + "-message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(fault.options.get("hint", ""), "hint"))

    if fault.options.get("fancy", False):
        return Panel(Group(message, hint), title=header, title_align="left")

    return Group(header, message, hint)


class ArgumentException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _renderable(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


# declaration
class InvalidNameFormatError(ArgumentException, ValueError): ...
class DuplicateArgumentError(ArgumentException, ValueError): ...
class MultipleFinalArgumentsError(ArgumentException, ValueError): ...

# binding
class MissingValueError(ArgumentException, ValueError): ...
class UnknownArgumentError(ArgumentException, LookupError): ...
class MissingRequiredArgumentError(ArgumentException, ValueError): ...

# retrieval
class TypeMismatchError(ArgumentException, TypeError): ...
class EmptyValueError(ArgumentException, LookupError): ...


class ArgumentWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _renderable(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RepeatedArgumentWarning(ArgumentWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace before triggering.
    - in shell mode, rendering happens via the rich console; otherwise exceptions
      are raised and warnings are emitted through the warnings module.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, docs, and any context the
      reporter may want to keep (token, index, argument, suggestions, ...).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys are
    FaultCode members and values are short documentation strings. returns None
    when no documentation is registered.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentException",
    "InvalidNameFormatError",
    "DuplicateArgumentError",
    "MultipleFinalArgumentsError",
    "MissingValueError",
    "UnknownArgumentError",
    "MissingRequiredArgumentError",
    "TypeMismatchError",
    "EmptyValueError",
    "ArgumentWarning",
    "RepeatedArgumentWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
