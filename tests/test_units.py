import pytest

from prettyprogress.units import (
    UNITS_BYTES,
    UNITS_CURRENCY_DOLLAR,
    UNITS_CURRENCY_EURO,
    UNITS_CURRENCY_POUND,
    UNITS_DEFAULT,
    Units,
    UnitsNotationPosition,
    format_bytes,
    format_number,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, "1B"),
        (1500, "1.50KB"),
        (1500000, "1.50MB"),
        (1500000000, "1.50GB"),
        (1500000000000, "1.50TB"),
        (1500000000000000, "1.50PB"),
        (1500000000000000000, "1500.00PB"),
    ],
)
def test_format_bytes(value, expected):
    assert format_bytes(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, "1"),
        (1500, "1.50K"),
        (1500000, "1.50M"),
        (1500000000, "1.50B"),
        (1500000000000, "1.50T"),
        (1500000000000000, "1.50Q"),
        (1500000000000000000, "1500.00Q"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_number_below_first_scale_and_negative():
    assert format_number(999) == "999"
    assert format_number(0) == "0"
    assert format_number(-5000) == "-5000"


@pytest.mark.parametrize(
    "units, expected",
    [
        (UNITS_DEFAULT, "1.50K"),
        (UNITS_BYTES, "1.50KB"),
        (UNITS_CURRENCY_DOLLAR, "$1.50K"),
        (UNITS_CURRENCY_EURO, "₠1.50K"),
        (UNITS_CURRENCY_POUND, "£1.50K"),
        (Units(notation="#"), "#1.50K"),
    ],
)
def test_units_sprint(units, expected):
    assert units.sprint(1500) == expected


def test_units_notation_after():
    after = Units(notation=" ₽", notation_position=UnitsNotationPosition.AFTER)
    assert after.sprint(1500) == "1.50K ₽"


def test_units_unknown_notation_position_falls_back_to_before():
    unknown = Units(notation="* ", notation_position=999)
    assert unknown.sprint(1500) == "* 1.50K"


def test_units_custom_formatter():
    units = Units(formatter=lambda v: f"<{v}>", notation="x", notation_position=UnitsNotationPosition.AFTER)
    assert units.sprint(7) == "<7>x"