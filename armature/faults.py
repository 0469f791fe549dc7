"""
Armature faults (compile errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every compile failure.
  Codes are grouped by family to keep copy consistent and searches predictable.
- CompileError: base type that carries message + options and knows how to render
  itself (rich) in a friendly, lowercased, actionable way.
- Families: StructuralError, FieldError, OrderingError, ConflictError, SubcommandError.
- trigger(): central entry point to surface a fault (raise, or render and exit in shell mode).

Error families
- structural: a collection expected to be a mapping with unique keys is not one
  (top-level configuration, args, flags, options, subcommands).
- field: a scalar or item property failed validation.
- ordering: a required argument follows an optional one.
- conflict: two flags/options at one level share a short or long name.
- subcommand: any of the above inside a nested subcommand, wrapped with the
  subcommand key so the failure stays locatable.

Host configuration (read from __main__, all optional)
- __styles__: mapping of style overrides for rendering.
- __codes__: mapping of FaultCode -> label used instead of the numeric code.
- __prog__: program name shown in rendered headers.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes raised while compiling a specification.

    grouping (by family)
    - structural (2110x): MALFORMED_COLLECTION
    - field      (2111x): INVALID_PROPERTY
    - ordering   (2112x): REQUIRED_AFTER_OPTIONAL
    - conflict   (2113x): DUPLICATED_SHORT, DUPLICATED_LONG
    - subcommand (2114x): SUBCOMMAND_FAILURE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- structural errors ---
    MALFORMED_COLLECTION    = 21101

    # --- field errors ---
    INVALID_PROPERTY        = 21111

    # --- ordering errors ---
    REQUIRED_AFTER_OPTIONAL = 21121

    # --- conflict errors ---
    DUPLICATED_SHORT        = 21131
    DUPLICATED_LONG         = 21132

    # --- subcommand errors ---
    SUBCOMMAND_FAILURE      = 21141

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CompileError(Exception):
    """
    base type for every failure raised while compiling a specification.

    the message is the single explanatory line a user sees; options carry the
    structured context (field, collection, subcommand path, ...) and the
    rendering switches (shell, fancy, colorful) used by trigger().
    """
    __code__ = Unset
    __title__ = "compile error"
    __hint__ = "fix the specification and compile again"

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    @property
    def code(self):
        return coalesce(self.options.get("code", Unset), type(self).__code__)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        def label(code):
            try:
                return FaultCode(code).normalize()
            except ValueError:
                return str(code)

        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", self.options.get("prog", "armature")), "prog-name"),
            " — ",
            text(label(self.code) if self.code else "", "code"),
            " | ",
            text(self.options.get("title", type(self).__title__).title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint", type(self).__hint__), "hint"))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self
        console.print(self)
        sys.exit(1)

    def __replace__(self, /, message=Unset, **overrides):
        return type(self)(coalesce(message, self.message), **{**self.options, **overrides})


class StructuralError(CompileError):
    __code__ = FaultCode.MALFORMED_COLLECTION
    __title__ = "malformed specification"
    __hint__ = "declare the collection as a mapping (or a list of pairs) with unique keys"

    @property
    def collection(self):
        """name of the malformed collection ('configuration', 'args', 'flags', ...)."""
        return self.options.get("collection")


class FieldError(CompileError):
    __code__ = FaultCode.INVALID_PROPERTY
    __title__ = "invalid property"
    __hint__ = "check the property value against its expected type"

    @property
    def field(self):
        return self.options.get("field")

    @property
    def collection(self):
        """list the offending item was declared in, when it came from an item builder."""
        return self.options.get("collection")

    @property
    def item(self):
        return self.options.get("item")


class OrderingError(CompileError):
    __code__ = FaultCode.REQUIRED_AFTER_OPTIONAL
    __title__ = "argument ordering"
    __hint__ = "move required arguments before optional ones"

    @property
    def argument(self):
        """the required argument that was found out of place."""
        return self.options.get("argument")

    @property
    def follows(self):
        """the optional argument it follows."""
        return self.options.get("follows")


class ConflictError(CompileError):
    __code__ = FaultCode.DUPLICATED_SHORT
    __title__ = "name conflict"
    __hint__ = "give each flag and option a distinct short and long name"

    @property
    def family(self):
        """either 'short' or 'long'."""
        return self.options.get("family")

    @property
    def key(self):
        return self.options.get("key")

    @property
    def members(self):
        return self.options.get("members", ())


class SubcommandError(CompileError):
    """
    a failure inside a nested subcommand.

    path holds the subcommand keys from the outermost level inward; origin is
    the innermost, non-subcommand error that started the chain.
    """
    __code__ = FaultCode.SUBCOMMAND_FAILURE
    __title__ = "subcommand failure"
    __hint__ = "fix the subcommand named in the message"

    @property
    def subcommand(self):
        return self.options.get("subcommand")

    @property
    def path(self):
        return self.options.get("path", ())

    @property
    def origin(self):
        return self.options.get("origin")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CompileError).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode the fault is rendered on the stderr console and the process
      exits with status 1; otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, prog, title, hint.
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
    "CompileError",
    "StructuralError",
    "FieldError",
    "OrderingError",
    "ConflictError",
    "SubcommandError",
    "trigger",
)
