"""
Armature command layer: the compiled, immutable command specification.

What this module provides
- CommandSpec: one node of a compiled specification tree. The root node is the
  program itself (subcommand_key is None); every nested node records the key it
  was declared under in its parent's subcommands.

Fields
- name, description, version, author, about, summary: str | None
- allow_unknown_args: bool, parse_double_dash: bool
- args, flags, options, subcommands: tuples, in declaration order
- subcommand_key: str | None

Design notes
- Nodes are produced by armature.compiler and never mutated afterwards; derived
  nodes are built with copy.replace().
- A subcommand's flags/options end with the hidden copies of every global
  flag/option declared above it.
"""
from .utils import SpecType


class CommandSpec(metaclass=SpecType):
    """
    Compiled command (or subcommand) specification.

    Navigation
    - find(*keys): descend through subcommands by key.
    - walk(): depth-first iteration over (path, node) pairs, root first.
    """
    __typename__ = "command"
    __introspectable__ = (
        "name",
        "description",
        "version",
        "author",
        "about",
        "summary",
        "allow_unknown_args",
        "parse_double_dash",
        "args",
        "flags",
        "options",
        "subcommands",
        "subcommand_key",
    )

    @property
    def root(self):
        return self.subcommand_key is None

    def find(self, *keys):
        """
        Return the nested subcommand reached by following keys from this node.

        Raises KeyError naming the first key that does not match a subcommand.
        """
        node = self
        for key in keys:
            for subcommand in node.subcommands:
                if subcommand.subcommand_key == key:
                    node = subcommand
                    break
            else:
                raise KeyError(key)
        return node

    def walk(self, path=()):
        yield path, self
        for subcommand in self.subcommands:
            yield from subcommand.walk((*path, subcommand.subcommand_key))


__all__ = (
    "CommandSpec",
)
