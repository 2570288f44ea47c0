"""
Abstract base class for all estimators.

Input: fields dict of raw user strings (as typed into the form).
Output: result dict, {"ok": True, "calc_type", "result", "report"} or
{"ok": False, "calc_type", "error", "report"} when validation fails.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, DecimalException

from ..defaults import BUILTIN_DEFAULTS, DefaultsSnapshot
from ..errors import CalculationError, ParseError
from ..units import is_blank, parse_decimal

logger = logging.getLogger(__name__)

OUT_OF_RANGE = "Calculation out of range"


@dataclass(frozen=True)
class Room:
    """Rectangular room, meters."""
    width: Decimal
    length: Decimal

    @property
    def area(self) -> Decimal:
        return self.width * self.length

    @property
    def perimeter(self) -> Decimal:
        return (self.width + self.length) * 2


def orient(width: Decimal, length: Decimal, long_side_first: bool) -> tuple:
    """
    Split a room into (installation side, perpendicular side).

    Long-side-first runs along the longer side; short-side-first along the
    shorter one. Equal sides keep width as the installation side.
    """
    if long_side_first:
        return (width, length) if width >= length else (length, width)
    return (width, length) if width <= length else (length, width)


class BaseCalculator(ABC):
    """All estimators inherit from this."""

    calc_type = ""

    def __init__(self, defaults: DefaultsSnapshot = None):
        self.defaults = defaults or BUILTIN_DEFAULTS

    def calculate(self, fields: dict) -> dict:
        """
        Parse the raw fields, run the estimate and render the report.
        Validation failures come back as a diagnostic, never as partial output.
        """
        try:
            inputs = self.parse_fields(fields or {})
            result = self.estimate(inputs)
            output = {
                "ok": True,
                "calc_type": self.calc_type,
                "result": result.to_dict(),
                "report": self.render(result),
            }
        except CalculationError as e:
            logger.info("%s estimate rejected: %s", self.calc_type, e)
            return self._failure(str(e))
        except DecimalException as e:
            logger.warning("%s estimate out of decimal range: %r", self.calc_type, e)
            return self._failure(OUT_OF_RANGE)
        logger.debug("%s estimate complete", self.calc_type)
        return output

    def _failure(self, message: str) -> dict:
        return {"ok": False, "calc_type": self.calc_type, "error": message, "report": message}

    @abstractmethod
    def parse_fields(self, fields: dict):
        """Turn raw strings into the typed input of estimate()."""

    @abstractmethod
    def estimate(self, inputs):
        """Pure computation on typed input."""

    @abstractmethod
    def render(self, result) -> str:
        """Human-readable multi-line report."""

    # --- Helper methods for all calculators ---

    def parse_required(self, fields: dict, key: str, label: str) -> Decimal:
        """Parse a field that must be present."""
        return parse_decimal(fields.get(key), label)

    def parse_optional(self, fields: dict, key: str, label: str, default: Decimal) -> Decimal:
        """Parse a field that falls back to default when left blank."""
        value = fields.get(key)
        if is_blank(value):
            return default
        return parse_decimal(value, label)

    def parse_choice(self, fields: dict, key: str, enum_cls, default=None):
        """Parse an enum-valued field; blank gives default."""
        value = fields.get(key)
        if is_blank(value):
            if default is None:
                raise ParseError(f"Missing {key}")
            return default
        try:
            return enum_cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(e.value for e in enum_cls)
            raise ParseError(f"Invalid {key}: {value!r} (expected one of {choices})") from None

    def parse_room(self, raw: dict, index: int) -> Room:
        """Parse one room; index is 1-based for the diagnostic."""
        try:
            width = parse_decimal(raw.get("width"), "width")
        except ParseError:
            raise ParseError(f"Invalid width in room {index}") from None
        try:
            length = parse_decimal(raw.get("length"), "length")
        except ParseError:
            raise ParseError(f"Invalid length in room {index}") from None
        return Room(width=width, length=length)

    def room_list(self, fields: dict) -> list:
        rooms = fields.get("rooms")
        if rooms is None:
            return []
        if not isinstance(rooms, list):
            raise ParseError("Invalid rooms: expected a list")
        return [raw if isinstance(raw, dict) else {} for raw in rooms]
