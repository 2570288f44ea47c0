"""
Decimal parsing and rounding helpers shared by every estimator.
"""

from decimal import Decimal

import pytest

from buildcalc.errors import ParseError
from buildcalc.units import ceil_int, ceil_to_half, ceil_to_step, parse_decimal, plain


def test_parse_accepts_comma_separator():
    """'3,5' and '3.5' are the same measurement."""
    assert parse_decimal("3,5") == Decimal("3.5")
    assert parse_decimal("3.5") == Decimal("3.5")
    assert parse_decimal(" 2,25 ") == Decimal("2.25")


def test_parse_is_exact():
    """No binary floating point drift: 0.1 + 0.2 == 0.3."""
    assert parse_decimal("0.1") + parse_decimal("0,2") == Decimal("0.3")


def test_parse_passes_zero_and_negative_through():
    assert parse_decimal("0") == 0
    assert parse_decimal("-1,5") == Decimal("-1.5")


@pytest.mark.parametrize("raw", ["", "   ", None, "abc", "1,234.5", "3.5m", "NaN", "Infinity", "1e3", "2,5E-1", "1e999999"])
def test_parse_rejects_malformed(raw):
    with pytest.raises(ParseError):
        parse_decimal(raw)


def test_parse_error_names_the_field():
    with pytest.raises(ParseError, match="box area"):
        parse_decimal("x", "box area")


def test_ceil_to_step_rounds_up_to_multiple():
    step = Decimal("0.2")
    assert ceil_to_step(Decimal("3.7"), step) == Decimal("3.8")
    assert ceil_to_step(Decimal("3.8"), step) == Decimal("3.8")
    assert ceil_to_step(Decimal("2.5"), step) == Decimal("2.6")


def test_ceil_helpers():
    assert ceil_int(Decimal("11.7")) == 12
    assert ceil_int(Decimal("12")) == 12
    assert ceil_to_half(Decimal("0.4")) == Decimal("0.5")
    assert ceil_to_half(Decimal("1.5")) == Decimal("1.5")
    assert ceil_to_half(Decimal("1.51")) == Decimal("2")


def test_plain_never_uses_exponent():
    assert plain(Decimal("1E+1")) == "10"
    assert plain(Decimal("3.80")) == "3.8"
    assert plain(Decimal("0.0000001")) == "0.0000001"
