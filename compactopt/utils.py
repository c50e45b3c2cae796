"""
compactopt helpers.

- Unset: marker for "field not provided". None cannot play that role, since an
  option uses None for "hidden" (description) and "owned" (destination).
- coalesce(value, default): Unset becomes default, anything else is kept.
- mirror("attr"): read-only property over self._attr; lists and dicts are handed
  out as deep copies.
- ucfirst(text): first character upper-cased.
"""
import copy
from typing import final


@final
class UnsetType:
    """Falsy singleton; cannot be subclassed."""
    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


Unset = UnsetType()


def coalesce(value, default=None, /):
    return default if value is Unset else value


def mirror(name, /):
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        value = getattr(self, "_" + name)
        return copy.deepcopy(value) if isinstance(value, list | dict) else value

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


def ucfirst(text, /):
    if not isinstance(text, str):
        raise TypeError("ucfirst() argument must be a string")
    return text[:1].upper() + text[1:]


__all__ = (
    "coalesce",
    "mirror",
    "ucfirst",
    "UnsetType",
    "Unset",
)
