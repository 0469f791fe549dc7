r"""
Armature item specifications (arguments, flags and options).

Overview
- Specs
  • Argument: positional, value-bearing item (required unless stated otherwise).
  • Flag: named, presence-only switch, e.g. -v/--verbose.
  • Option: named, value-bearing switch, e.g. -o/--output FILE.

- Builders
  Each spec class is its own item builder: Kind.new(name, props) validates one
  declaration and returns an immutable spec, raising FieldError on the first
  invalid property. The compiler selects the builder per list (args → Argument,
  flags → Flag, options → Option).

Properties (raw keys accepted in props)
- Argument: value_name, help, required (True), type ("string"), hide (False)
- Flag:     short, long, help, multiple (False), global (False), hide (False)
- Option:   value_name, short, long, help, multiple (False), required (False),
            type ("string"), default (None), global (False), hide (False)

Validation highlights
- props must be a mapping (or list of pairs) with unique string keys.
- Unknown property keys are rejected.
- short accepts "v" or "-v", long accepts "verbose" or "--verbose"; both are stored bare.
- Flags and options must declare at least one of short/long.
- 'global' is a Python keyword, so the field is exposed as `global_`.

Quick example:
    >>> Flag.new("verbose", {"short": "-v", "global": True})
    flag(name='verbose', short='v', long=None, help=None, multiple=False, global_=True, hide=False)
"""
import copy

from .faults import FieldError
from .properties import *
from .utils import SpecType, Unset, pairs


def _sanitize_props(cls, name, props, /):
    """
    Internal: validate the item name and the shape of its property collection.

    Returns a dict view of props; unknown keys are rejected against
    cls.__properties__ so typos never pass silently.
    """
    name = build_item_name(f"{cls.__typename__} name", name)

    if (entries := pairs(props)) is Unset:
        raise FieldError(
            f"{cls.__typename__} {name!r} properties are expected to be a mapping with unique keys",
            field="properties",
            item=name,
        )
    props = dict(entries)

    if unknown := [key for key in props if key not in cls.__properties__]:
        raise FieldError(f"{cls.__typename__} {name!r} has unknown property {unknown[0]!r}", field=unknown[0], item=name)

    return name, props


def _sanitize_switches(cls, name, props, /):
    """
    Internal: validate short/long names shared by flags and options.
    """
    short = build_short("short", props.get("short", Unset))
    long = build_long("long", props.get("long", Unset))
    if short is None and long is None:
        raise FieldError(f"{cls.__typename__} {name!r} must define a short or a long name", field="short", item=name)
    return short, long


class Argument(metaclass=SpecType):
    """
    Positional argument specification.

    Arguments are matched by position; a required argument may not follow an
    optional one (checked by the compiler on each command level).
    """

    __introspectable__ = (
        "name",
        "value_name",
        "help",
        "required",
        "type",
        "hide",
    )
    __properties__ = frozenset({"value_name", "help", "required", "type", "hide"})

    @property
    def global_(self):
        """Arguments never propagate to subcommands."""
        return False

    @classmethod
    def new(cls, name, props, /):
        name, props = _sanitize_props(cls, name, props)
        try:
            return cls.materialize(
                name=name,
                value_name=build_string("value_name", props.get("value_name", Unset), name.upper()),
                help=build_string("help", props.get("help", Unset), None),
                required=build_bool("required", props.get("required", Unset), True),
                type=build_type("type", props.get("type", Unset), str),
                hide=build_bool("hide", props.get("hide", Unset), False),
            )
        except FieldError as error:
            raise copy.replace(error, message=f"{cls.__typename__} {name!r}: {error.message}", item=name) from None


class Flag(metaclass=SpecType):
    """
    Presence-only switch specification.

    A flag marked global is injected, hidden, into every nested subcommand.
    """

    __introspectable__ = (
        "name",
        "short",
        "long",
        "help",
        "multiple",
        "global_",
        "hide",
    )
    __properties__ = frozenset({"short", "long", "help", "multiple", "global", "hide"})

    @property
    def switches(self):
        """Rendered switch names, e.g. ("-v", "--verbose")."""
        return tuple(filter(None, (self.short and "-" + self.short, self.long and "--" + self.long)))

    @classmethod
    def new(cls, name, props, /):
        name, props = _sanitize_props(cls, name, props)
        try:
            short, long = _sanitize_switches(cls, name, props)
            return cls.materialize(
                name=name,
                short=short,
                long=long,
                help=build_string("help", props.get("help", Unset), None),
                multiple=build_bool("multiple", props.get("multiple", Unset), False),
                global_=build_bool("global", props.get("global", Unset), False),
                hide=build_bool("hide", props.get("hide", Unset), False),
            )
        except FieldError as error:
            if error.item is not None:
                raise
            raise copy.replace(error, message=f"{cls.__typename__} {name!r}: {error.message}", item=name) from None


class Option(metaclass=SpecType):
    """
    Value-bearing switch specification.

    Same global/hide semantics as Flag, plus the value converter, an optional
    default and a required marker.
    """

    __introspectable__ = (
        "name",
        "value_name",
        "short",
        "long",
        "help",
        "multiple",
        "required",
        "type",
        "default",
        "global_",
        "hide",
    )
    __properties__ = frozenset({
        "value_name", "short", "long", "help", "multiple", "required", "type", "default", "global", "hide",
    })

    @property
    def default(self):
        """
        The default value exactly as declared (never converted).
        """
        return self._default

    @property
    def switches(self):
        return tuple(filter(None, (self.short and "-" + self.short, self.long and "--" + self.long)))

    @classmethod
    def new(cls, name, props, /):
        name, props = _sanitize_props(cls, name, props)
        try:
            short, long = _sanitize_switches(cls, name, props)
            return cls.materialize(
                name=name,
                value_name=build_string("value_name", props.get("value_name", Unset), name.upper()),
                short=short,
                long=long,
                help=build_string("help", props.get("help", Unset), None),
                multiple=build_bool("multiple", props.get("multiple", Unset), False),
                required=build_bool("required", props.get("required", Unset), False),
                type=build_type("type", props.get("type", Unset), str),
                default=props.get("default"),
                global_=build_bool("global", props.get("global", Unset), False),
                hide=build_bool("hide", props.get("hide", Unset), False),
            )
        except FieldError as error:
            if error.item is not None:
                raise
            raise copy.replace(error, message=f"{cls.__typename__} {name!r}: {error.message}", item=name) from None


__all__ = (
    "Argument",
    "Flag",
    "Option",
)
