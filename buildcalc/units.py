# Material constants and exact-decimal helpers shared by every estimator.
# All measurements are metric: meters, square meters, kilograms.

import re
from decimal import Decimal, InvalidOperation, ROUND_CEILING

from .errors import ParseError

# Slab module widths (m): one beam per module across the perpendicular side
TRELLIS_MODULE_WIDTH = Decimal("0.37")
FOAM_MODULE_WIDTH = Decimal("0.42")

# Beam lengths are sold in 0.2 m steps
BEAM_LENGTH_STEP = Decimal("0.2")

# Trellis slab: ceramic fillers per m² of adjusted slab
TRELLIS_FILLERS_PER_M2 = Decimal("13")
# Foam slab: one block covers 0.5 m of beam run
FOAM_BLOCK_LENGTH = Decimal("0.5")

# Ceiling panels (PVC lining)
PANEL_WIDTH = Decimal("0.2")
PANEL_STOCK_LENGTHS = (Decimal("3"), Decimal("4"), Decimal("5"), Decimal("6"))
SPLICE_LENGTH = Decimal("0.2")  # splice profile consumed per joint
SPLICE_BAR_LENGTH = Decimal("6")

# Bulk material weights
AGGREGATE_DENSITY_KG_M3 = Decimal("1450")
AGGREGATE_BAG_KG = Decimal("20")
CEMENT_BAG_KG = Decimal("50")
MORTAR_BAG_KG = Decimal("20")

# Grout waste allowance (5%)
GROUT_WASTE_FACTOR = Decimal("1.05")

# Built-in coefficient defaults, used when nothing has been saved
DEFAULT_MORTAR_FACTOR_SINGLE = Decimal("5.0")
DEFAULT_MORTAR_FACTOR_DOUBLE = Decimal("7.0")
DEFAULT_GROUT_COEFFICIENT = Decimal("1.58")

ZERO = Decimal("0")

# Plain positional numbers only: no exponent, no NaN or Infinity
_PLAIN_NUMBER = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)")


def parse_decimal(value, field: str = "value") -> Decimal:
    """
    Parse free-form user input into an exact Decimal.

    Accepts ',' or '.' as the decimal separator ("3,5" == "3.5").
    Raises ParseError on empty, malformed or non-finite input and on
    exponent notation ("1e3"). Zero and negative values pass through;
    callers reject them where they make no physical sense.
    """
    if value is None:
        raise ParseError(f"Missing {field}")
    if isinstance(value, Decimal):
        result = value
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            raise ParseError(f"Missing {field}")
        if not _PLAIN_NUMBER.fullmatch(text):
            raise ParseError(f"Invalid {field}: {value!r}")
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise ParseError(f"Invalid {field}: {value!r}") from None
    if not result.is_finite():
        raise ParseError(f"Invalid {field}: {value!r}")
    return result


def is_blank(value) -> bool:
    """True when a raw field was left empty."""
    return value is None or str(value).strip() == ""


def ceil_decimal(value: Decimal) -> Decimal:
    """Round up to the next whole number, keeping the Decimal type."""
    return value.to_integral_value(rounding=ROUND_CEILING)


def ceil_int(value: Decimal) -> int:
    """Round up to a whole count of purchasable units."""
    return int(ceil_decimal(value))


def ceil_to_step(value: Decimal, step: Decimal) -> Decimal:
    """Round up to the next multiple of step (e.g. 3.7 m -> 3.8 m for 0.2 m)."""
    return ceil_decimal(value / step) * step


def ceil_to_half(value: Decimal) -> Decimal:
    """Round up to the nearest 0.5 (bulk sand and stone are ordered by half m³)."""
    return ceil_decimal(value * 2) / 2


def plain(value: Decimal) -> str:
    """Decimal as plain positional text, never scientific notation."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
