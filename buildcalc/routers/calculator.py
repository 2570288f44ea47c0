"""
Basic calculator API: one calculator for the lifetime of the process.

GET  /api/calculator        Display, pending operator, history
POST /api/calculator/input  Feed a string of keys ("12+3=")
POST /api/calculator/clear  Clear display and pending operation
"""

import threading

from fastapi import APIRouter

from .. import schemas
from ..basic_calculator import BasicCalculator

router = APIRouter(prefix="/calculator", tags=["calculator"])

# Singleton, mutated by every key press
calculator = BasicCalculator()
_lock = threading.Lock()


@router.get("/", response_model=schemas.CalculatorState)
def get_state():
    with _lock:
        return calculator.to_dict()


@router.post("/input", response_model=schemas.CalculatorState)
def press_keys(request: schemas.KeyInput):
    with _lock:
        calculator.press_keys(request.keys)
        return calculator.to_dict()


@router.post("/clear", response_model=schemas.CalculatorState)
def clear():
    with _lock:
        calculator.clear()
        return calculator.to_dict()
