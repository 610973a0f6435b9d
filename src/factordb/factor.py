"""A single ``base^exponent`` term of a factorization, and its expansion."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    PlainValidator,
    ValidationInfo,
    model_validator,
)

from factordb.constants import FACTOR_SEPARATOR, DecodeErrorKind
from factordb.decoding import (
    decode_base,
    decode_exponent,
    format_decimal,
    is_wire,
)
from factordb.errors import DecodeError


def _validate_base(value: Any, info: ValidationInfo) -> int:
    # Python callers may pass an int; the wire only ever sends strings.
    if (
        not is_wire(info)
        and isinstance(value, int)
        and not isinstance(value, bool)
    ):
        return int(value)
    return decode_base(value)


def _validate_exponent(value: Any) -> int:
    return decode_exponent(value)


class FactorExpansion(Iterator[int]):
    """Yields a factor's base ``exponent`` times.

    The remaining count is a plain ``int``, so exponents beyond any
    machine word are fine and nothing is materialised up front.
    """

    __slots__ = ("_base", "_remaining")

    def __init__(self, base: int, exponent: int) -> None:
        self._base = base
        self._remaining = exponent

    def __iter__(self) -> FactorExpansion:
        return self

    def __next__(self) -> int:
        if self._remaining <= 0:
            raise StopIteration
        self._remaining -= 1
        return self._base

    @property
    def remaining(self) -> int:
        """How many more times the base will be yielded."""
        return self._remaining


class Factor(BaseModel):
    """A factor with a unique base and its exponent.

    On the wire a factor is a ``["<base>", <exponent>]`` pair; the base
    is always a string and the exponent a JSON integer.
    """

    model_config = ConfigDict(frozen=True)

    base: Annotated[int, PlainValidator(_validate_base)]
    exponent: Annotated[int, PlainValidator(_validate_exponent)]

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any, info: ValidationInfo) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise DecodeError(
                    DecodeErrorKind.UNEXPECTED_SHAPE,
                    "factor",
                    data,
                    f"expected a [base, exponent] pair, got {len(data)} items",
                )
            base, exponent = data
            return {"base": base, "exponent": exponent}
        if not is_wire(info) and isinstance(data, (dict, cls)):
            return data
        raise DecodeError(
            DecodeErrorKind.UNEXPECTED_SHAPE,
            "factor",
            data,
            "expected a [base, exponent] pair",
        )

    def expand(self) -> FactorExpansion:
        """Return a fresh lazy iterator over the repeated base."""
        return FactorExpansion(self.base, self.exponent)

    def to_wire(self) -> list[Any]:
        return [format_decimal(self.base), self.exponent]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Factor):
            return NotImplemented
        return (self.base, self.exponent) < (other.base, other.exponent)

    def __str__(self) -> str:
        return FACTOR_SEPARATOR.join(
            format_decimal(n) for n in self.expand()
        )
