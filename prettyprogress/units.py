"""Units describe how a tracked value is printed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Mapping, Optional, Union

UnitsFormatter = Callable[[int], str]

_UNIT_SCALES = (
    1_000_000_000_000_000,
    1_000_000_000_000,
    1_000_000_000,
    1_000_000,
    1_000,
)

_BYTE_SUFFIXES: Mapping[int, str] = {
    1_000_000_000_000_000: "PB",
    1_000_000_000_000: "TB",
    1_000_000_000: "GB",
    1_000_000: "MB",
    1_000: "KB",
    0: "B",
}

_NUMBER_SUFFIXES: Mapping[int, str] = {
    1_000_000_000_000_000: "Q",
    1_000_000_000_000: "T",
    1_000_000_000: "B",
    1_000_000: "M",
    1_000: "K",
    0: "",
}


class UnitsNotationPosition(IntEnum):
    """Where the notation goes relative to the formatted value."""

    BEFORE = 0
    AFTER = 1


def _format_scaled(value: int, suffixes: Mapping[int, str]) -> str:
    for scale in _UNIT_SCALES:
        if value >= scale:
            return f"{float(value) / float(scale):.2f}{suffixes[scale]}"
    return f"{value}{suffixes[0]}"


def format_bytes(value: int) -> str:
    """Format a value as a byte count: B, KB, MB, GB, TB or PB."""
    return _format_scaled(value, _BYTE_SUFFIXES)


def format_number(value: int) -> str:
    """Format a value as a plain number with K, M, B, T or Q suffixes."""
    return _format_scaled(value, _NUMBER_SUFFIXES)


@dataclass(frozen=True)
class Units:
    """The kind of value a tracker follows and how it is printed."""

    formatter: Optional[UnitsFormatter] = None
    notation: str = ""
    notation_position: Union[UnitsNotationPosition, int] = UnitsNotationPosition.BEFORE

    def sprint(self, value: int) -> str:
        """Render the value with the formatter and notation."""
        formatter = self.formatter or format_number
        formatted = formatter(value)
        if self.notation_position == UnitsNotationPosition.AFTER:
            return formatted + self.notation
        return self.notation + formatted


UNITS_DEFAULT = Units(formatter=format_number)
UNITS_BYTES = Units(formatter=format_bytes)
UNITS_CURRENCY_DOLLAR = Units(formatter=format_number, notation="$")
UNITS_CURRENCY_EURO = Units(formatter=format_number, notation="₠")
UNITS_CURRENCY_POUND = Units(formatter=format_number, notation="£")