"""
Armature compiler: turn a declarative CLI description into a CommandSpec tree.

Input shape (the same at every level)
    {
        "name": "tool",                       # optional, defaults to the subcommand key
        "description": ..., "version": ..., "author": ..., "about": ..., "summary": ...,
        "allow_unknown_args": False,
        "parse_double_dash": True,
        "args":        {"src": {"required": True}, ...},
        "flags":       {"verbose": {"short": "v", "global": True}, ...},
        "options":     {"output": {"short": "o", "long": "output"}, ...},
        "subcommands": {"build": {...}, ...},
    }

Every keyed collection may also be given as a list of (key, value) pairs; keys
must then be unique.

Per level
1. check the configuration shape;
2. build the scalar fields and derive the summary from `about` when not given;
3. build args/flags/options through the item builders (first failure aborts);
4. collect this level's global flags/options (hidden copies) ahead of the ones
   inherited from above, and compile subcommands with that accumulator;
5. append the accumulator to each compiled subcommand's flags/options, default
   its name to its key and record the key;
6. validate this level's own args ordering and short/long name conflicts.

Inherited globals are merged after a subcommand validated its own items, so a
local flag reusing an inherited global's short or long name is not reported.

Quick example:
    >>> spec = compile({
    ...     "name": "tool",
    ...     "flags": {"verbose": {"short": "v", "global": True}},
    ...     "subcommands": {"build": {}},
    ... })
    >>> spec.find("build").flags[0].hide
    True
"""
import copy
from typing import NamedTuple

from . import properties
from .commands import CommandSpec
from .faults import *
from .items import Argument, Flag, Option
from .utils import Unset, pairs


class Globals(NamedTuple):
    """
    Accumulator of global flags/options threaded down the subcommand recursion.
    """
    flags: tuple = ()
    options: tuple = ()


def _derive_summary(summary, about, /):
    if summary is not None:
        return summary
    if about is None:
        return None
    return about.split("\n\n", 1)[0].strip()


class Compiler:
    """
    Stateless specification compiler.

    Collaborators
    - properties: scalar property builder exposing build_string, build_bool
      and build_command_name (defaults to armature.properties).
    - argument / flag / option: item builders exposing new(name, props)
      (default to Argument, Flag and Option).

    A single instance may compile any number of specifications, concurrently
    or not: no state is kept between calls.
    """

    def __init__(self, /, properties=properties, *, argument=Argument, flag=Flag, option=Option):
        self._properties = properties
        self._builders = {
            "args": argument,
            "flags": flag,
            "options": option,
        }

    def compile(self, raw, /):
        """
        Compile a raw specification into a CommandSpec tree.

        Raises the first CompileError found anywhere in the tree.
        """
        return self._compile(raw, Globals())

    def _compile(self, raw, inherited, /):
        if (entries := pairs(raw)) is Unset:
            raise StructuralError(
                "configuration is expected to be a mapping with unique keys",
                collection="configuration",
            )
        raw = dict(entries)
        builder = self._properties

        name = builder.build_command_name("name", raw.get("name", Unset))
        description = builder.build_string("description", raw.get("description", Unset), None)
        version = builder.build_string("version", raw.get("version", Unset), None)
        author = builder.build_string("author", raw.get("author", Unset), None)
        about = builder.build_string("about", raw.get("about", Unset), None)
        summary = _derive_summary(builder.build_string("summary", raw.get("summary", Unset), None), about)
        allow_unknown_args = builder.build_bool("allow_unknown_args", raw.get("allow_unknown_args", Unset), False)
        parse_double_dash = builder.build_bool("parse_double_dash", raw.get("parse_double_dash", Unset), True)

        args = self._build_items("args", raw.get("args"))
        flags = self._build_items("flags", raw.get("flags"))
        options = self._build_items("options", raw.get("options"))

        accumulated = Globals(
            flags=tuple(copy.replace(flag, hide=True) for flag in flags if flag.global_) + inherited.flags,
            options=tuple(copy.replace(option, hide=True) for option in options if option.global_) + inherited.options,
        )
        subcommands = self._build_subcommands(raw.get("subcommands"), accumulated)

        _validate_args(args)
        _validate_conflicts(flags, options)

        return CommandSpec.materialize(
            name=name,
            description=description,
            version=version,
            author=author,
            about=about,
            summary=summary,
            allow_unknown_args=allow_unknown_args,
            parse_double_dash=parse_double_dash,
            args=args,
            flags=flags,
            options=options,
            subcommands=subcommands,
            subcommand_key=None,
        )

    def _build_items(self, collection, raw, /):
        if raw is None:
            return ()
        if (entries := pairs(raw)) is Unset:
            raise StructuralError(
                f"{collection} specs are expected to be a mapping with unique keys",
                collection=collection,
            )

        items = []
        for name, props in entries:
            try:
                items.append(self._builders[collection].new(name, props))
            except CompileError as error:
                raise copy.replace(
                    error,
                    message=f"invalid {collection} spec {name!r}: {error.message}",
                    collection=collection,
                ) from error
        return tuple(items)

    def _build_subcommands(self, raw, accumulated, /):
        if raw is None:
            return ()
        if (entries := pairs(raw)) is Unset:
            raise StructuralError(
                "subcommands specs are expected to be a mapping with unique keys",
                collection="subcommands",
            )

        subcommands = []
        for key, props in entries:
            try:
                subcommand = self._compile(props, accumulated)
            except CompileError as error:
                nested = isinstance(error, SubcommandError)
                raise SubcommandError(
                    f"error building subcommand {key!r}: {error.message}",
                    subcommand=key,
                    path=(key, *error.path) if nested else (key,),
                    origin=error.origin if nested else error,
                ) from error

            subcommands.append(copy.replace(
                subcommand,
                name=subcommand.name if subcommand.name is not None else str(key),
                flags=subcommand.flags + accumulated.flags,
                options=subcommand.options + accumulated.options,
                subcommand_key=key,
            ))
        return tuple(subcommands)


def _validate_args(args, /):
    for first, second in zip(args, args[1:]):
        if not first.required and second.required:
            raise OrderingError(
                f"required argument {second.name!r} follows optional argument {first.name!r}",
                argument=second.name,
                follows=first.name,
            )


def _validate_conflicts(flags, options, /):
    codes = {
        "short": FaultCode.DUPLICATED_SHORT,
        "long": FaultCode.DUPLICATED_LONG,
    }
    for family, code in codes.items():
        groups = {}
        for item in (*flags, *options):
            if key := getattr(item, family):
                groups.setdefault(key, []).append(item.name)
        for key, members in groups.items():
            if len(members) > 1:
                raise ConflictError(
                    f"duplicate {family} option name: {key}",
                    family=family,
                    key=key,
                    members=tuple(members),
                    code=code,
                )


_default = Compiler()


def compile(raw, /):
    """
    Compile a raw specification with the default collaborators.

    See Compiler.compile().
    """
    return _default.compile(raw)


__all__ = (
    "Globals",
    "Compiler",
    "compile",
)
