"""
Typed argument values and token coercion.

Overview
- ArgType: the closed set of declared value types (bool, int, float, string).
- ArgValue: a (type, value) named tuple; exactly one ArgType tags each value.
- coerce(type, token): total conversion of one raw token into an ArgValue, or a
  TypeMismatchError naming the expected type and the offending token.

Coercion rules
- bool: only the literals "true" and "false", case-insensitive ("TRUE" works).
- int: optional sign followed by ASCII digits, within the signed 64-bit range.
- float: any literal accepted by float() except digit separators ("1_0");
  "inf"/"nan" are accepted and overflow saturates to infinity.
- string: the token verbatim.
"""
import re
from enum import Enum
from typing import NamedTuple

from .faults import FaultCode, TypeMismatchError
from .utils import ordinal

INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ArgType(Enum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"

    def __str__(self):
        return self.value


class ArgValue(NamedTuple):
    type: ArgType
    value: bool | int | float | str


def _to_bool(token):
    match token.lower():
        case "true":
            return True
        case "false":
            return False
    raise ValueError(token)


def _to_int(token):
    if not _INTEGER.fullmatch(token):
        raise ValueError(token)
    if not INT_MIN <= (number := int(token)) <= INT_MAX:
        raise OverflowError(token)
    return number


def _to_float(token):
    # float() is more lenient than a numeric literal should be here
    if "_" in token or token != token.strip():
        raise ValueError(token)
    return float(token)


_converters = {
    ArgType.BOOL: _to_bool,
    ArgType.INT: _to_int,
    ArgType.FLOAT: _to_float,
    ArgType.STRING: str,
}

_hints = {
    ArgType.BOOL: "use 'true' or 'false'",
    ArgType.INT: "use a whole number between %d and %d" % (INT_MIN, INT_MAX),
    ArgType.FLOAT: "use a decimal number such as 4.2 or 1e-3",
    ArgType.STRING: "any token is a valid string",
}


def coerce(type, token, /, **options):
    """
    convert a raw token into an ArgValue of the declared type.

    parameters
    - type: ArgType
      the declared type of the positional value or parameter.
    - token: str
      the raw token, passed unmodified.
    - **options
      extra fault options (input, index, ...) forwarded into the TypeMismatchError.

    raises
    - TypeError: when type is not an ArgType or token is not a string.
    - TypeMismatchError: when the token cannot be read as the declared type.
    """
    if not isinstance(type, ArgType):
        raise TypeError("coerce() first argument must be an ArgType")
    if not isinstance(token, str):
        raise TypeError("coerce() second argument must be a string")

    try:
        return ArgValue(type, _converters[type](token))
    except (ValueError, OverflowError):
        overflow = type is ArgType.INT and bool(_INTEGER.fullmatch(token))
        where = " at %s position" % ordinal(options["index"]) if options.get("index") else ""
        raise TypeMismatchError(
            "%r%s is not a valid %s%s" % (token, where, type, " (out of range)" if overflow else ""),
            title="type mismatch",
            code=FaultCode.TYPE_MISMATCH,
            hint=_hints[type],
            expected=type,
            token=token,
            **options
        ) from None


__all__ = (
    "ArgType",
    "ArgValue",
    "coerce",
)
