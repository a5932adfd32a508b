"""
Small helpers shared by the schema, matcher, renderer and registry layers.

- Unset: the "nothing was given" marker. Flag defaults may legitimately be
  False, 0 or "", so None-style checks are not enough.
- coalesce(value, default): swap Unset for a default, leave everything else.
- rename(name): decorator fixing __name__/__qualname__ of generated callables.
- mirror(name): read-only property over "_<name>"; containers come back as
  views so a registered schema cannot be edited through its public surface.

    >>> coalesce(Unset, 60)
    60
    >>> coalesce(0, 60)
    0
"""
import functools
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker; there is exactly one instance per process.

    Unset is falsy, prints as "Unset", joins PEP 604 unions (``str | Unset``)
    and refuses to be subclassed.
    """
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    def __or__(self, other, /):
        try:
            return UnsetType | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | UnsetType
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return UnsetType, ()


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset, `object` otherwise.
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator giving a generated callable a stable __name__ and __qualname__.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(callable, /):
        try:
            callable.__name__ = callable.__qualname__ = name
        except (AttributeError, TypeError):
            raise TypeError("rename() can only decorate a function") from None
        return callable

    return decorator


def _view(object):
    # strings are sequences too, but they are immutable already
    match object:
        case str():
            return object
        case Mapping():
            return MappingProxyType(object)
        case Set():
            return frozenset(object)
        case Sequence():
            return tuple(object)
    return object


def mirror(name, /):
    """
    Read-only property returning a view of the private "_<name>" attribute.

    Mappings become MappingProxyType (live, not writable), sets become
    frozensets and other sequences become tuples.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _view(getattr(self, "_" + name))

    return property(getter)


__all__ = (
    "Unset",
    "UnsetType",
    "coalesce",
    "mirror",
    "rename",
)
