"""
compactopt option table.

build() assembles the ordered option table of one session:

    1. help option  (-h, --help)         when usage is enabled and no option is named "help"
    2. mode options (-v, --verbose ...)  one per mode name, in mode order
    3. user options                      in declaration order
    4. man option   (--man)              unless an option is already named "man"

The order is fixed; it is also the display order of the usage text.
"""
from collections.abc import Iterable, Sequence

from .faults import DuplicateKeyError, MalformedModeError
from .specs import normalize

HELP = (("h", "help"), "this help message")
MAN = ("man", "Display documentation")


def _mode_option(mode):
    if not isinstance(mode, str):
        raise TypeError("mode names must be strings")
    if not mode[:1].isalnum():
        raise MalformedModeError(f"mode name {mode!r} must start with a letter or a digit")
    # -t is conventionally taken by something other than a test mode
    letter = "n" if mode == "test" else mode[0].lower()
    return (letter, mode), f"{mode} mode"


class OptionTable(Sequence):
    """
    Immutable, ordered sequence of CanonicalOption records.

    - allow_man: True when the man option was injected (the session may handle --man itself).
    - keys(): results-map keys in table order.
    - find(key): the option stored under key, or None.
    - has(alias): whether any option answers to alias.
    """

    def __init__(self, options, /, *, allow_man=False):
        self._options = tuple(options)
        self._allow_man = bool(allow_man)

        seen = {}
        for option in self._options:
            if (other := seen.get(option.key)) is not None:
                raise DuplicateKeyError(
                    "options %s and %s resolve to the same key %r" % (
                        "|".join(other.names), "|".join(option.names), option.key
                    )
                )
            seen[option.key] = option
        self._index = seen

    @property
    def allow_man(self):
        return self._allow_man

    def __getitem__(self, index):
        return self._options[index]

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return "option-table(%s)" % ", ".join(option.key for option in self._options)

    def keys(self):
        return [option.key for option in self._options]

    def find(self, key, /):
        return self._index.get(key)

    def has(self, alias, /):
        return _has(self._options, alias)


def _has(options, alias):
    return any(alias in option.names for option in options)


def build(struct=(), /, *, usage=True, modes=()):
    """
    Normalize the user's declarations and inject the implicit options.

    Raises
    - MalformedOptionError / MalformedModeError: bad declarations or mode names.
    - DuplicateKeyError: two options resolve to the same results-map key.
    """
    if isinstance(struct, str) or not isinstance(struct, Iterable):
        raise TypeError("option declarations must be an iterable of declarations")
    if isinstance(modes, str) or not isinstance(modes, Iterable):
        raise TypeError("modes must be an iterable of mode names")

    options = [normalize(spec) for spec in struct]
    options[:0] = [normalize(_mode_option(mode)) for mode in modes]

    if usage and not _has(options, "help"):
        options.insert(0, normalize(HELP))

    if allow_man := not _has(options, "man"):
        options.append(normalize(MAN))

    return OptionTable(options, allow_man=allow_man)


__all__ = (
    "OptionTable",
    "build",
)
