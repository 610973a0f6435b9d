"""Classification codes reported by FactorDB for each number."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from factordb.constants import DecodeErrorKind
from factordb.errors import DecodeError


class NumberStatus(StrEnum):
    """The status of a number in FactorDB.

    Member values are the short wire tags. ``Unit`` and ``Zero`` are
    only ever reported for the numbers 1 and 0.
    """

    NO_FACTORS_KNOWN = "C"
    FACTORS_KNOWN = "CF"
    FULLY_FACTORED = "FF"
    DEFINITELY_PRIME = "P"
    PROBABLY_PRIME = "Prp"
    UNKNOWN = "U"
    UNIT = "Unit"
    ZERO = "Zero"
    NOT_IN_DATABASE = "N"

    @classmethod
    def from_wire(cls, tag: Any) -> NumberStatus:
        """Map a wire tag to its status.

        ``Prp`` is the only tag matched case-insensitively (the service
        has been seen sending ``PRP``). Anything unrecognised is an
        error, never a default.
        """
        if not isinstance(tag, str):
            raise DecodeError(
                DecodeErrorKind.INVALID_VALUE,
                "status",
                tag,
                "expected a status tag string",
            )
        try:
            return cls(tag)
        except ValueError:
            pass
        if tag.casefold() == cls.PROBABLY_PRIME.value.casefold():
            return cls.PROBABLY_PRIME
        raise DecodeError(
            DecodeErrorKind.INVALID_VALUE,
            "status",
            tag,
            "unknown status tag",
        )

    def to_wire(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[NumberStatus, str] = {
    NumberStatus.NO_FACTORS_KNOWN: "composite, no factors known",
    NumberStatus.FACTORS_KNOWN: "composite, factors known",
    NumberStatus.FULLY_FACTORED: "composite, fully factored",
    NumberStatus.DEFINITELY_PRIME: "definitely prime",
    NumberStatus.PROBABLY_PRIME: "probably prime",
    NumberStatus.UNKNOWN: "unknown",
    NumberStatus.UNIT: "unit",
    NumberStatus.ZERO: "zero",
    NumberStatus.NOT_IN_DATABASE: "not in database",
}
