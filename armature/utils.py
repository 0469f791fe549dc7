"""
Armature utilities (internal helpers, carefully exposed)

Scope
- Building blocks shared by the items, commands and compiler layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the compiled specification types.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated methods for clean tracebacks.

- view("attr")
  • Read-only property over a private backing field (self._attr); sequences are
    surfaced as tuples and mappings as read-only proxies.

- pairs(object)
  • Normalize a keyed collection (mapping or keyword-list of pairs) into a tuple of
    (key, value) pairs, or Unset when the shape is invalid or keys repeat.

- SpecType
  • Metaclass for immutable specification objects: read-only fields, structural
    equality, copy.replace() support and stable __repr__/__rich_repr__.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> pairs([("verbose", {}), ("quiet", {})])
    (('verbose', {}), ('quiet', {}))
    >>> pairs([("verbose", {}), ("verbose", {})])
    Unset
"""
import builtins
import functools
import operator
import re
from collections.abc import Iterable, Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def view(name, /):
    """
    Build a read-only property over the backing field "_{name}".

    behavior
    - Sequence (non-str) → tuple
    - Mapping            → MappingProxyType
    - Set                → frozenset
    - other types        → returned as-is
    """
    if not isinstance(name, str):
        raise TypeError("view() argument must be a string")

    @rename(name)
    def getter(self):
        value = object.__getattribute__(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


def pairs(object, /):
    """
    Normalize a keyed collection into a tuple of (key, value) pairs.

    accepted shapes
    - Mapping with str keys (order of insertion is kept).
    - Non-string iterable of 2-item pairs whose keys are str (keyword-list shape).

    returns
    - tuple[tuple[str, Any], ...] in declaration order.
    - Unset when the shape is not keyed, a key is not a string, or a key repeats.

    notes
    - Unset is returned instead of raising so each caller can report the failure
      with the fault type and wording that fits its collection.
    """
    if isinstance(object, Mapping):
        items = tuple(object.items())
    elif isinstance(object, Iterable) and not isinstance(object, str | bytes):
        items = []
        for item in object:
            if isinstance(item, str | bytes) or not isinstance(item, Sequence) or len(item) != 2:
                return Unset
            items.append(tuple(item))
        items = tuple(items)
    else:
        return Unset

    seen = set()
    for key, _ in items:
        if not isinstance(key, str) or key in seen:
            return Unset
        seen.add(key)
    return items


class SpecType(type):
    """
    Metaclass for immutable specification objects.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by a private "_{name}" slot.
    - Reject attribute assignment and deletion after construction.
    - Provide structural equality, copy.replace() support and stable
      __repr__/__rich_repr__ implementations.
    - Offer materialize(**fields) to build an instance from a complete set of
      already validated fields.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      unless the class declares its own.
    - A field the class body already defines (e.g. a plain property) keeps that
      definition instead of the generated view; use it for values that must be
      returned exactly as stored.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        introspectable = namespace.get("__introspectable__", ())

        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": namespace.get("__typename__", re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower()),
                "__slots__": tuple("_" + name for name in introspectable),
            } | {
                name: view(name) for name in introspectable if name not in namespace
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - flag(name='verbose', short='v', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__eq__")
        def __eq__(self, other, /):
            if type(other) is not type(self):
                return NotImplemented
            return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)
        self.__eq__ = __eq__
        self.__hash__ = None

        @rename("__replace__")
        def __replace__(self, /, **changes):
            """
            Return a copy with the given fields replaced (see copy.replace()).
            """
            if unknown := sorted(changes.keys() - set(type(self).__introspectable__)):
                raise TypeError(f"{type(self).__typename__} has no field {unknown[0]!r}")
            return type(self).materialize(**{
                name: changes.get(name, getattr(self, name)) for name in type(self).__introspectable__
            })
        self.__replace__ = __replace__

        @rename("__reduce__")
        def __reduce__(self):
            """
            Rebuild through materialize() so copy.deepcopy() and pickle bypass
            the immutable __setattr__.
            """
            return _restore, (type(self), {
                name: object.__getattribute__(self, "_" + name) for name in type(self).__introspectable__
            })
        self.__reduce__ = __reduce__

        @rename("__setattr__")
        def __setattr__(self, name, value, /):
            raise AttributeError(f"{type(self).__typename__} is immutable")
        self.__setattr__ = __setattr__

        @rename("__delattr__")
        def __delattr__(self, name, /):
            raise AttributeError(f"{type(self).__typename__} is immutable")
        self.__delattr__ = __delattr__

        return self

    def materialize(self, /, **fields):
        """
        Build an instance from already validated fields.

        Every introspectable field must be given exactly once; the values are
        stored as-is (sequences should already be tuples).
        """
        if missing := [name for name in self.__introspectable__ if name not in fields]:
            raise TypeError(f"{self.__typename__} is missing field {missing[0]!r}")
        if unknown := sorted(fields.keys() - set(self.__introspectable__)):
            raise TypeError(f"{self.__typename__} has no field {unknown[0]!r}")
        instance = object.__new__(self)
        for name in self.__introspectable__:
            object.__setattr__(instance, "_" + name, fields[name])
        return instance


def _restore(cls, fields, /):
    return cls.materialize(**fields)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Distinct from None: equality and identity checks must not treat it as None.
- Typical pattern: value = coalesce(user_value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "view",
    "pairs",

    # Types
    "UnsetType",
    "SpecType",

    # Constants
    "Unset",
)
