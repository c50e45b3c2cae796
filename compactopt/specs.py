"""
compactopt option descriptors and their canonical form.

Overview
- OptionSpec (user-authored)
  • a single name: "verbose"
  • or a sequence (names, descr, argument, destination), only names required:
      (["v", "verbose"], "verbose mode")
      (["w", "wibble"], "specify a wibble parameter", ":s")
      (["j", "joobies"], "jooby integer list", "=i", joobies)

- CanonicalOption (normalized, immutable)
  • names: aliases sorted shortest-first (stable for equal lengths).
  • key: first alias longer than one character in declared order, else the first alias.
  • arity: Arity member derived from the argument token; the token itself is kept verbatim
    in 'spec' and handed to the engine untouched.
  • descr: display text, or None (hidden from usage, still parsed).
  • destination: OwnedSlot(key) when no destination is given, ExternalSlot(handle) otherwise.
    Resolved once here, so nothing downstream has to guess where a value goes.

Validation highlights
- At least one alias; aliases are non-empty strings, unique within the option, and free of
  the engine's grammar characters ("|", "!", "+", "=", ":").
- The argument token must start with "=", ":" or be exactly "!" or "+".
- External destinations must be a Slot, a mutable sequence, a mutable mapping or a callable.
"""
from collections.abc import MutableMapping, MutableSequence, Sequence
from enum import Enum
from typing import NamedTuple

from .engine import Slot
from .faults import MalformedOptionError
from .utils import *


class Arity(Enum):
    FLAG = "flag"
    OPTIONAL = "optional-value"
    REQUIRED = "required-value"
    INCREMENTING = "incrementing"
    NEGATABLE = "negatable"

    @classmethod
    def of(cls, spec, /):
        """
        Classify an argument token (None/"" for a plain flag).
        """
        match spec:
            case None | "":
                return cls.FLAG
            case "!":
                return cls.NEGATABLE
            case "+":
                return cls.INCREMENTING
            case str() if spec.startswith("="):
                return cls.REQUIRED
            case str() if spec.startswith(":"):
                return cls.OPTIONAL
            case str():
                raise MalformedOptionError(f"malformed argument specification {spec!r}")
            case _:
                raise TypeError("argument specification must be a string")

    @property
    def takes_value(self):
        return self in (Arity.OPTIONAL, Arity.REQUIRED)


class OwnedSlot(NamedTuple):
    """the value lives in the session's results map under 'key'."""
    key: str


class ExternalSlot(NamedTuple):
    """the value is written to a caller-provided handle."""
    handle: object


class CanonicalOption:
    """
    Normalized option record (see the module docstring).

    Instances are immutable; every field is exposed as a read-only property.
    """
    __slots__ = ("_names", "_key", "_arity", "_spec", "_descr", "_destination")

    names = mirror("names")
    key = mirror("key")
    arity = mirror("arity")
    spec = mirror("spec")
    descr = mirror("descr")
    destination = mirror("destination")

    def __init__(self, names, key, arity, spec, descr, destination):
        self._names = tuple(names)
        self._key = key
        self._arity = arity
        self._spec = spec
        self._descr = descr
        self._destination = destination

    @property
    def hidden(self):
        return not self._descr

    @property
    def valuetype(self):
        """
        "s", "i", "o" or "f" for value-bearing options, None otherwise.

        ":N" and ":+" tokens are optional integers.
        """
        if not self._arity.takes_value:
            return None
        return self._spec[1] if self._spec[1:2] in ("s", "i", "o", "f") else "i"

    def __setattr__(self, name, value):
        if name in CanonicalOption.__slots__ and not hasattr(self, name):
            return super().__setattr__(name, value)
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __eq__(self, other):
        if not isinstance(other, CanonicalOption):
            return NotImplemented
        return tuple(other.__rich_repr__()) == tuple(self.__rich_repr__())

    def __hash__(self):
        return hash((self._names, self._key, self._spec))

    def __repr__(self):
        return "canonical-option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "names", self._names
        yield "key", self._key
        yield "arity", self._arity
        yield "spec", self._spec
        yield "descr", self._descr
        yield "destination", self._destination


def _sanitize_names(names):
    if isinstance(names, str):
        names = [names]
    elif not isinstance(names, Sequence):
        raise TypeError("option names must be a string or a sequence of strings")

    if not names:
        raise MalformedOptionError("option must specify at least one name")

    sanitized = []
    for name in names:
        if not isinstance(name, str):
            raise TypeError("option names must be strings")
        elif not name:
            raise MalformedOptionError("option names cannot be empty-strings")
        elif set(name) & set("|!+=:"):
            raise MalformedOptionError(f"option name {name!r} cannot contain any of '|!+=:'")
        elif name in sanitized:
            raise MalformedOptionError(f"option names cannot contain duplicates ({name!r})")
        sanitized.append(name)
    return sanitized


def _select_key(names):
    """first multi-character alias in declared order, else the first alias."""
    return next((name for name in names if len(name) > 1), names[0])


def normalize(spec, /):
    """
    Turn one raw option declaration into a CanonicalOption.

    Raises
    - MalformedOptionError: empty/duplicated aliases, bad argument token, too many fields.
    - TypeError: fields of the wrong Python type.
    """
    match spec:
        case str():
            fields = (spec,)
        case Sequence() if 1 <= len(spec) <= 4:
            fields = tuple(spec)
        case Sequence():
            raise MalformedOptionError(
                "option declaration takes 1 to 4 fields (names, descr, argument, destination) but %d were given" % len(spec)
            )
        case _:
            raise TypeError("option declaration must be a string or a sequence")

    names, descr, argument, destination = fields + (Unset,) * (4 - len(fields))

    names = _sanitize_names(names)
    key = _select_key(names)

    if not isinstance(descr := coalesce(descr), str | None):
        raise TypeError(f"option {key!r} description must be a string")

    if not isinstance(argument := coalesce(argument, ""), str | None):
        raise TypeError(f"option {key!r} argument specification must be a string")
    arity = Arity.of(argument)

    match coalesce(destination):
        case None:
            destination = OwnedSlot(key)
        case Slot() | MutableSequence() | MutableMapping() as handle:
            destination = ExternalSlot(handle)
        case handle if callable(handle):
            destination = ExternalSlot(handle)
        case _:
            raise MalformedOptionError(
                f"option {key!r} destination must be a Slot, a mutable sequence, a mutable mapping or a callable"
            )

    return CanonicalOption(
        sorted(names, key=len),
        key,
        arity,
        argument or "",
        descr,
        destination,
    )


__all__ = (
    "Arity",
    "OwnedSlot",
    "ExternalSlot",
    "CanonicalOption",
    "normalize",
)
