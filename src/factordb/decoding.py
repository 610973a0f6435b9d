"""Flexible-field decoding for FactorDB responses.

The service is not consistent about whether numbers are sent as JSON
integers or JSON strings. Each decoder here dispatches on the JSON type
of one field and either normalises it to ``int`` or raises
``DecodeError``. There is no "try int, then str" fallback: each branch
is explicit and every other type is rejected.

Values are already-parsed JSON (``json.loads`` output), so ``bool`` is
checked before ``int``.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import ValidationError, ValidationInfo

from factordb.constants import DecodeErrorKind
from factordb.errors import DecodeError

__all__ = [
    "WIRE_CONTEXT",
    "decode_base",
    "decode_exponent",
    "decode_id",
    "format_decimal",
    "is_wire",
    "parse_decimal",
    "translate_validation_error",
]

# Validation context marking input that came off the wire
WIRE_CONTEXT: dict[str, Any] = {"wire": True}

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")

# Stays under the interpreter's int/str conversion limit, whatever it
# is set to (the lowest allowed value is 640).
_DIGIT_CHUNK = 600
_CHUNK_MODULUS = 10**_DIGIT_CHUNK

# pydantic error types that mean "wrong structure", not "wrong value"
_SHAPE_ERROR_TYPES = frozenset({
    "missing",
    "model_type",
    "model_attributes_type",
    "dict_type",
    "list_type",
    "tuple_type",
    "iterable_type",
    "too_short",
    "too_long",
})


def is_wire(info: ValidationInfo) -> bool:
    """True when validating a decoded response body."""
    context = info.context
    return isinstance(context, dict) and bool(context.get("wire"))


def _is_json_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_decimal(text: str) -> int:
    """Parse a signed base-10 literal of any length."""
    sign = -1 if text.startswith("-") else 1
    digits = text.lstrip("+-")
    if len(digits) <= _DIGIT_CHUNK:
        return sign * int(digits)
    value = 0
    for start in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[start:start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return sign * value


def format_decimal(value: int) -> str:
    """Render ``value`` in base 10 regardless of its length."""
    if -_CHUNK_MODULUS < value < _CHUNK_MODULUS:
        return str(value)
    sign = "-" if value < 0 else ""
    remaining = abs(value)
    chunks: list[int] = []
    while remaining:
        remaining, chunk = divmod(remaining, _CHUNK_MODULUS)
        chunks.append(chunk)
    head = str(chunks.pop())
    tail = "".join(
        str(chunk).zfill(_DIGIT_CHUNK) for chunk in reversed(chunks)
    )
    return f"{sign}{head}{tail}"


def _decode_literal(value: str, field: str) -> int:
    if _INTEGER_LITERAL.fullmatch(value) is None:
        raise DecodeError(
            DecodeErrorKind.INVALID_VALUE,
            field,
            value,
            "not a base-10 integer literal",
        )
    return parse_decimal(value)


def decode_id(value: Any, field: str = "id") -> int:
    """Decode a JSON integer or integer string."""
    if _is_json_int(value):
        return int(value)
    if isinstance(value, str):
        return _decode_literal(value, field)
    raise DecodeError(
        DecodeErrorKind.INVALID_VALUE,
        field,
        value,
        "expected an integer or an integer string",
    )


def decode_base(value: Any, field: str = "base") -> int:
    """Decode an integer string; JSON integers are rejected."""
    if isinstance(value, str):
        return _decode_literal(value, field)
    raise DecodeError(
        DecodeErrorKind.INVALID_VALUE,
        field,
        value,
        "expected an integer string",
    )


def decode_exponent(value: Any, field: str = "exponent") -> int:
    """Decode a non-negative JSON integer."""
    if not _is_json_int(value):
        raise DecodeError(
            DecodeErrorKind.INVALID_VALUE,
            field,
            value,
            "expected a non-negative integer",
        )
    if value < 0:
        raise DecodeError(
            DecodeErrorKind.INVALID_VALUE,
            field,
            value,
            "exponent must not be negative",
        )
    return int(value)


def translate_validation_error(exc: ValidationError) -> DecodeError:
    """Turn the first pydantic error into a located ``DecodeError``."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "number"
    cause = error.get("ctx", {}).get("error")
    if isinstance(cause, DecodeError):
        return cause.at(field)
    kind = (
        DecodeErrorKind.UNEXPECTED_SHAPE
        if error["type"] in _SHAPE_ERROR_TYPES
        else DecodeErrorKind.INVALID_VALUE
    )
    return DecodeError(kind, field, error.get("input"), error["msg"])
