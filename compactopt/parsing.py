"""
compactopt parsing adapter.

Translates an OptionTable into the engine's input (one specification string per
option, "|".join(names) + argument token, bound to its storage target), runs the
engine once over the argument vector and surfaces the engine's faults.

Engine configuration
- DEFAULT_CONFIG is immutable: {"no_auto_abbrev": True, "bundling": True}.
- User toggles are merged over it (user wins per key); only toggles whose value is
  true are applied, in merged order, on top of the engine's base configuration.
  {"bundling": False} therefore leaves bundling at the engine's base value (off).
"""
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .engine import Configuration, Engine, Slot
from .faults import trigger
from .specs import ExternalSlot, OwnedSlot

DEFAULT_CONFIG = MappingProxyType({"no_auto_abbrev": True, "bundling": True})


class ResultSlot(Slot):
    """Slot view over one entry of a results map."""
    __slots__ = ("results", "key")

    def __init__(self, results, key, /):
        self.results = results
        self.key = key

    @property
    def value(self):
        return self.results.get(self.key)

    @value.setter
    def value(self, value):
        self.results[self.key] = value

    def __repr__(self):
        return f"ResultSlot({self.key!r}={self.value!r})"


def configuration(overrides=None, /):
    """
    Merge user toggles over DEFAULT_CONFIG and build the engine configuration.

    Raises UnknownToggleError for toggles the engine does not know, whatever
    their value.
    """
    if overrides is None:
        overrides = {}
    if not isinstance(overrides, Mapping):
        raise TypeError("configure must be a mapping of toggle names to booleans")

    merged = DEFAULT_CONFIG | overrides
    Configuration().configure(*merged)  # validates every toggle name
    return Configuration().configure(*(toggle for toggle, enabled in merged.items() if enabled))


def bind(option, results, /):
    """Resolve an option's destination into an engine storage target."""
    match option.destination:
        case OwnedSlot(key):
            return ResultSlot(results, key)
        case ExternalSlot(Slot() as handle):
            return handle
        case ExternalSlot(handle) if not isinstance(handle, Iterable) and callable(handle):
            # callbacks are told the option key, not the engine's primary alias
            return lambda name, *values: handle(option.key, *values)
        case ExternalSlot(handle):
            return handle


def specification(option, /):
    return "|".join(option.names) + option.spec


def parse(table, argv, results, configure=None, /, *, prog=None):
    """
    Parse argv against table, writing owned values into results.

    Every key of the table is initialised to None in results first. Engine faults
    are rendered through trigger(); the returned Outcome carries the success flag
    and the leftover operands.
    """
    if isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("argv must be an iterable of strings")
    argv = list(argv)
    if not all(isinstance(argument, str) for argument in argv):
        raise TypeError("argv must be an iterable of strings")

    bindings = {}
    for option in table:
        results[option.key] = None
        bindings[specification(option)] = bind(option, results)

    outcome = Engine(configuration(configure)).parse(argv, bindings)
    for fault in outcome.faults:
        trigger(fault, prog=prog)
    return outcome


__all__ = (
    "DEFAULT_CONFIG",
    "ResultSlot",
    "configuration",
    "bind",
    "specification",
    "parse",
)
