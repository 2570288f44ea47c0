"""
Basic calculator: pending operation, chaining, saturating division, history.
"""

from buildcalc.basic_calculator import HISTORY_LIMIT, BasicCalculator, CalculatorStage


def _run(keys: str) -> BasicCalculator:
    calc = BasicCalculator()
    calc.press_keys(keys)
    return calc


def test_addition_and_history():
    calc = _run("2+3=")
    assert calc.display == "5"
    assert list(calc.history) == ["2 + 3 = 5"]
    assert calc.pending_operator is None
    assert calc.stage == CalculatorStage.RESULT


def test_divide_by_zero_gives_zero():
    """Saturating policy: x / 0 is 0, not an error."""
    calc = _run("5/0=")
    assert calc.display == "0"
    assert calc.history[0] == "5 / 0 = 0"


def test_second_operator_applies_the_first():
    calc = _run("2+3*4=")
    assert calc.display == "20"
    assert list(calc.history) == ["5 * 4 = 20", "2 + 3 = 5"]


def test_operator_arms_clear_on_next_digit():
    calc = _run("12+")
    assert calc.display == "12"
    assert calc.stage == CalculatorStage.OPERATOR_PENDING
    calc.press("7")
    assert calc.display == "7"


def test_result_is_next_left_operand():
    calc = _run("2+3=")
    calc.press_keys("*2=")
    assert calc.display == "10"


def test_digit_after_result_appends():
    """No clear-on-next after '=', typing continues the displayed number."""
    calc = _run("2+3=1")
    assert calc.display == "51"


def test_history_is_capped_oldest_evicted():
    calc = BasicCalculator()
    for i in range(11):
        calc.press_keys(f"c{i}+1=")
    assert len(calc.history) == HISTORY_LIMIT
    assert calc.history[0] == "10 + 1 = 11"
    assert calc.history[-1] == "1 + 1 = 2"
    assert "0 + 1 = 1" not in calc.history


def test_placeholder_zero_is_replaced():
    assert _run("007").display == "7"
    assert _run(".5").display == "0.5"


def test_second_decimal_point_ignored():
    assert _run("1..5.2").display == "1.52"


def test_malformed_display_counts_as_zero():
    calc = _run("5+.=")
    assert calc.display == "5"
    assert calc.history[0] == "5 + 0 = 5"


def test_clear_drops_pending_operation():
    calc = _run("5+c3=")
    assert calc.display == "3"
    assert len(calc.history) == 0
    assert calc.pending_operator is None


def test_clear_keeps_history():
    calc = _run("1+1=c")
    assert calc.display == "0"
    assert list(calc.history) == ["1 + 1 = 2"]


def test_backspace():
    assert _run("123\b").display == "12"
    assert _run("1\b").display == "0"
    assert _run("\b").display == "0"


def test_operator_aliases_and_enter():
    calc = _run("6x7\n")
    assert calc.display == "42"
    assert calc.history[0] == "6 * 7 = 42"
    assert _run("9÷3=").display == "3"


def test_decimal_results_are_exact():
    assert _run("0.1+0.2=").display == "0.3"
    assert _run("1.5*2=").display == "3.0"


def test_equals_without_operator_does_nothing():
    calc = _run("42=")
    assert calc.display == "42"
    assert len(calc.history) == 0


def test_unknown_keys_ignored():
    assert _run("2a+b3=").display == "5"


def test_to_dict():
    state = _run("2+").to_dict()
    assert state == {
        "display": "2",
        "pending_operator": "+",
        "stage": "operator_pending",
        "history": [],
    }
