"""
Four-function calculator with a pending operation and a short history.

Keys: digits and '.', operators + - * / (also x, ×, ÷), '=' or newline to
evaluate, 'c' to clear, backspace ('\\b') to delete the last character.
Malformed display text counts as zero and dividing by zero gives zero;
the calculator never raises on user input.
"""

import enum
import logging
from collections import deque
from decimal import Decimal

from .errors import ParseError
from .units import ZERO, parse_decimal

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 10

DIGIT_KEYS = frozenset("0123456789.")

OPERATOR_ALIASES = {
    "+": "+",
    "-": "-",
    "−": "-",
    "*": "*",
    "x": "*",
    "×": "*",
    "/": "/",
    "÷": "/",
}


class CalculatorStage(str, enum.Enum):
    ENTERING = "entering"
    OPERATOR_PENDING = "operator_pending"
    RESULT = "result"


def _format(value: Decimal) -> str:
    return format(value, "f")


def _apply(left: Decimal, op: str, right: Decimal) -> Decimal:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        # Saturating: x / 0 == 0
        return left / right if right != 0 else ZERO
    return right


class BasicCalculator:

    def __init__(self):
        self.display = "0"
        self.pending_operator = None
        self.left_operand = ZERO
        self.clear_on_next_entry = False
        self.stage = CalculatorStage.ENTERING
        self.history = deque(maxlen=HISTORY_LIMIT)

    # --- key handling ---

    def press(self, key: str) -> None:
        """Handle one key. Unknown keys are ignored."""
        if key in DIGIT_KEYS:
            self.enter_digit(key)
        elif key in OPERATOR_ALIASES:
            self.set_operator(OPERATOR_ALIASES[key])
        elif key in ("=", "\n", "\r"):
            self.evaluate()
        elif key in ("c", "C"):
            self.clear()
        elif key == "\b":
            self.backspace()

    def press_keys(self, keys: str) -> None:
        for key in keys:
            self.press(key)

    def enter_digit(self, digit: str) -> None:
        if self.clear_on_next_entry:
            self.display = ""
            self.clear_on_next_entry = False
        if digit == "." and "." in self.display:
            return
        if self.display == "0" and digit != ".":
            self.display = ""
        self.display += digit
        self.stage = CalculatorStage.ENTERING

    def set_operator(self, op: str) -> None:
        # Chained input: "2 + 3 *" applies the + before arming the *
        self.evaluate()
        self.left_operand = self.current_value()
        self.pending_operator = op
        self.clear_on_next_entry = True
        self.stage = CalculatorStage.OPERATOR_PENDING

    def evaluate(self) -> None:
        if self.pending_operator is None:
            return
        right = self.current_value()
        result = _apply(self.left_operand, self.pending_operator, right)
        entry = f"{_format(self.left_operand)} {self.pending_operator} {_format(right)} = {_format(result)}"
        self.history.appendleft(entry)
        logger.debug("calculator: %s", entry)
        self.display = _format(result)
        self.pending_operator = None
        self.left_operand = result
        self.stage = CalculatorStage.RESULT

    def clear(self) -> None:
        self.display = "0"
        self.pending_operator = None
        self.left_operand = ZERO
        self.clear_on_next_entry = False
        self.stage = CalculatorStage.ENTERING

    def backspace(self) -> None:
        if len(self.display) > 1:
            self.display = self.display[:-1]
        else:
            self.display = "0"

    # --- state ---

    def current_value(self) -> Decimal:
        """Displayed value; anything unparseable counts as zero."""
        try:
            return parse_decimal(self.display, "display")
        except ParseError:
            return ZERO

    def to_dict(self) -> dict:
        return {
            "display": self.display,
            "pending_operator": self.pending_operator,
            "stage": self.stage.value,
            "history": list(self.history),
        }
