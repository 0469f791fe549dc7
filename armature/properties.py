"""
Scalar property builders.

Every builder takes the property (field) name first, the raw value second and,
where it applies, the default used when the value is absent (Unset or None).
Valid values are returned normalized; invalid ones raise FieldError naming the
field, so the compiler can propagate the message verbatim.

Builders
- build_string / build_bool: plain typed scalars with a default.
- build_command_name: the name token of a command or subcommand.
- build_item_name: the key an argument, flag or option is declared under.
- build_short / build_long: switch names, stored without their dashes.
- build_type: value converter ("string", "integer", "float" or any callable).
"""
import re

from .faults import FieldError
from .utils import Unset

_TYPES = {
    "string": str,
    "integer": int,
    "float": float,
}


def _absent(value):
    return value is Unset or value is None


def build_string(field, value, default, /):
    if _absent(value):
        return default
    if not isinstance(value, str):
        raise FieldError(f"{field} should be a string", field=field)
    return value


def build_bool(field, value, default, /):
    if _absent(value):
        return default
    if not isinstance(value, bool):
        raise FieldError(f"{field} should be a boolean", field=field)
    return value


def build_command_name(field, value, /):
    """
    Validate a command name token.

    A command name is optional (None when absent); when given it must start with
    a letter or digit and continue with letters, digits, '-' or '_'.
    """
    if _absent(value):
        return None
    if not isinstance(value, str):
        raise FieldError(f"{field} should be a string", field=field)
    if not re.fullmatch(r"[^\W_][\w-]*", value):
        raise FieldError(
            f"{field} should be a non-empty command name made of letters, digits, '-' and '_', got {value!r}",
            field=field,
        )
    return value


def build_item_name(field, value, /):
    if not isinstance(value, str):
        raise FieldError(f"{field} should be a string", field=field)
    if not re.fullmatch(r"[^\W\d][\w-]*", value):
        raise FieldError(f"{field} should be an identifier-like name, got {value!r}", field=field)
    return value


def build_short(field, value, /):
    """
    Validate a short switch name.

    Accepts "v" or "-v" and returns the bare letter "v"; None when absent.
    """
    if _absent(value):
        return None
    if not isinstance(value, str):
        raise FieldError(f"{field} should be a string", field=field)
    if not (match := re.fullmatch(r"-?([^\W\d_])", value)):
        raise FieldError(f"{field} should be a single letter, optionally prefixed by '-', got {value!r}", field=field)
    return match.group(1)


def build_long(field, value, /):
    """
    Validate a long switch name.

    Accepts "dry-run" or "--dry-run" and returns the bare "dry-run"; None when absent.
    The name starts with a letter, may hold letters, digits, "_" and "-", and
    must not end with "-".
    """
    if _absent(value):
        return None
    if not isinstance(value, str):
        raise FieldError(f"{field} should be a string", field=field)
    if not (match := re.fullmatch(r"(?:--)?([^\W\d_][\w-]*(?<!-))", value)):
        raise FieldError(f"{field} should be a long switch name such as 'dry-run' or '--dry-run', got {value!r}", field=field)
    return match.group(1)


def build_type(field, value, default, /):
    if _absent(value):
        return default
    if isinstance(value, str):
        try:
            return _TYPES[value]
        except KeyError:
            pass
    elif callable(value):
        return value
    raise FieldError(f"{field} should be a callable or one of {', '.join(map(repr, _TYPES))}", field=field)


__all__ = (
    "build_string",
    "build_bool",
    "build_command_name",
    "build_item_name",
    "build_short",
    "build_long",
    "build_type",
)
