"""
compactopt faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and searches predictable.
- ConfigurationError and subclasses: raised while a session is being built, when
  the option declarations themselves are wrong. These are programming errors and
  are never caught by the package.
- ParseFault and subclasses: problems in the argument vector (unknown option,
  missing value, ...). The engine collects them as data; the adapter surfaces each
  one through trigger(), which renders it to standard error with rich. They never
  abort parsing: the session status flag carries the failure.
- ParseWarning and subclasses: emitted through warnings.warn.
- trigger(): central entry point to surface a fault or a warning.

Customization
- The host application can define __styles__ (style overrides), __prog__ (program
  label) and __codes__ (code relabeling) in __main__.
"""
import copy
import inspect
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, UnsetType

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - configuration (1110x)
      • MALFORMED_OPTION, DUPLICATE_KEY, UNKNOWN_TOGGLE, MALFORMED_MODE
    - parsing (1111x)
      • UNKNOWN_OPTION, MISSING_VALUE, INVALID_VALUE, UNEXPECTED_VALUE, AMBIGUOUS_OPTION
    - warnings (1211x)
      • DUPLICATE_ALIAS
    """
    # --- configuration errors (1110x) ---
    MALFORMED_OPTION    = 11101
    DUPLICATE_KEY       = 11102
    UNKNOWN_TOGGLE      = 11103
    MALFORMED_MODE      = 11104

    # --- parse errors (1111x) ---
    UNKNOWN_OPTION      = 11111
    MISSING_VALUE       = 11112
    INVALID_VALUE       = 11113
    UNEXPECTED_VALUE    = 11114
    AMBIGUOUS_OPTION    = 11115

    # --- warnings (1211x) ---
    DUPLICATE_ALIAS     = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to override
        numeric ids with friendlier labels; otherwise the numeric value is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ConfigurationError(ValueError):
    """
    raised when option declarations or session configuration are malformed.

    configuration errors abort session construction immediately; they are never
    retried nor reported through the usage/exit path.
    """
    code = FaultCode.MALFORMED_OPTION


class MalformedOptionError(ConfigurationError):
    code = FaultCode.MALFORMED_OPTION


class DuplicateKeyError(ConfigurationError):
    code = FaultCode.DUPLICATE_KEY


class UnknownToggleError(ConfigurationError):
    code = FaultCode.UNKNOWN_TOGGLE


class MalformedModeError(ConfigurationError):
    code = FaultCode.MALFORMED_MODE


def _styles(defaults):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


def _text(fragment, style=""):
    if not fragment:
        return Text("")
    if isinstance(fragment, Text):
        return fragment
    return Text(str(fragment), style)


class ParseFault(Exception):
    """
    a problem found in the argument vector.

    options (all optional but 'code' and 'title')
    - code: FaultCode
    - title: short, lowercase title
    - hint: one sentence telling the user what to do
    - input: the offending token (or option name)
    - prog: program label shown in the header (set by the adapter)
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        styles = _styles({
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

        prog = _text(getattr(main, "__prog__", self.options.get("prog") or "getopt"), styles["prog-name"])
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            _text(self.options["code"].normalize(), styles["code"]),
            " | ",
            _text(self.options["title"].title(), styles["error-title"]),
            " ]"
        )
        message = _text(str(self), styles["error-message"])

        if not (hint := self.options.get("hint")):
            return Group(header, message)
        hint = Text.assemble(_text(" → ", styles["hint-arrow"]), _text(hint, styles["hint"]))
        return Group(header, message, hint)

    def __trigger__(self):
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParseFault): ...
class MissingValueError(ParseFault): ...
class InvalidValueError(ParseFault): ...
class UnexpectedValueError(ParseFault): ...
class AmbiguousOptionError(ParseFault): ...


class ParseWarning(Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __trigger__(self):
        warnings.warn(self, stacklevel=len(inspect.stack()))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateAliasWarning(ParseWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - parse faults are printed to standard error; warnings go through warnings.warn.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ConfigurationError",
    "MalformedOptionError",
    "DuplicateKeyError",
    "UnknownToggleError",
    "MalformedModeError",
    "ParseFault",
    "UnknownOptionError",
    "MissingValueError",
    "InvalidValueError",
    "UnexpectedValueError",
    "AmbiguousOptionError",
    "ParseWarning",
    "DuplicateAliasWarning",
    "trigger",
)
