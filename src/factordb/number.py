"""Response model for FactorDB API requests.

``Number`` owns its ``Factor`` list; both are frozen. Every derived
view (flattened factors, unique factors) is recomputed per call.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from itertools import chain
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, PlainValidator, ValidationError

from factordb.constants import (
    ERROR_TRUNCATION_CHARS,
    FACTOR_SEPARATOR,
    DecodeErrorKind,
)
from factordb.decoding import (
    WIRE_CONTEXT,
    decode_id,
    format_decimal,
    parse_decimal,
    translate_validation_error,
)
from factordb.errors import DecodeError
from factordb.factor import Factor
from factordb.status import NumberStatus


def _validate_id(value: Any) -> int:
    return decode_id(value)


def _validate_status(value: Any) -> NumberStatus:
    return NumberStatus.from_wire(value)


class Number(BaseModel):
    """A number entry in FactorDB.

    ``id`` is FactorDB's own identifier, kept exactly as sent (0 and 1
    both come back as -1). ``factors`` keeps the service's order.
    """

    model_config = ConfigDict(frozen=True)

    id: Annotated[int, PlainValidator(_validate_id)]
    status: Annotated[NumberStatus, PlainValidator(_validate_status)]
    factors: tuple[Factor, ...]

    @classmethod
    def from_wire(cls, payload: Any) -> Number:
        return decode_number(payload)

    @classmethod
    def from_json(cls, text: str | bytes) -> Number:
        return decode_number_json(text)

    def is_prime(self) -> bool:
        """Return True if the number may be prime.

        Use ``is_definitely_prime`` to exclude probable primes.
        """
        return self.status in (
            NumberStatus.DEFINITELY_PRIME,
            NumberStatus.PROBABLY_PRIME,
        )

    def is_definitely_prime(self) -> bool:
        return self.status == NumberStatus.DEFINITELY_PRIME

    def unique_factors(self) -> list[int]:
        """Distinct factor bases in ascending order."""
        return sorted({f.base for f in self.factors})

    def iter_flattened(self) -> Iterator[int]:
        """Lazily yield every factor with exponents expanded, in input order."""
        return chain.from_iterable(f.expand() for f in self.factors)

    def flattened_factors(self) -> list[int]:
        """Every factor with exponents expanded, in ascending order."""
        return sorted(self.iter_flattened())

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.to_wire(),
            "factors": [f.to_wire() for f in self.factors],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_wire())

    def __str__(self) -> str:
        return FACTOR_SEPARATOR.join(
            format_decimal(n) for n in self.flattened_factors()
        )


def decode_number(payload: Any) -> Number:
    """Validate a parsed response body into a ``Number``.

    Raises:
        DecodeError: the body does not match the wire format.
    """
    try:
        return Number.model_validate(payload, context=WIRE_CONTEXT)
    except ValidationError as exc:
        raise translate_validation_error(exc) from exc


def decode_number_json(text: str | bytes) -> Number:
    """Parse and validate a raw response body."""
    try:
        payload = json.loads(text, parse_int=parse_decimal)
    except ValueError as exc:
        raise DecodeError(
            DecodeErrorKind.UNEXPECTED_SHAPE,
            "number",
            text[:ERROR_TRUNCATION_CHARS],
            "malformed JSON",
        ) from exc
    return decode_number(payload)
