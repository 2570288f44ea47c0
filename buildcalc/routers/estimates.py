"""
Estimates API: one endpoint per registered calculator.

GET  /api/estimates                      Available calculator types
POST /api/estimates/flooring/selection   Apply one flooring option toggle
POST /api/estimates/{calc_type}          Run a calculator on raw form fields
"""

from fastapi import APIRouter, Depends, HTTPException

from .. import schemas
from ..calculators.registry import get_calculator, has_calculator, list_calculators
from ..calculators.selection import FlooringSelection, toggle
from ..defaults import DefaultsStore, get_defaults_store

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.get("/")
def list_estimators():
    return {"calculators": list_calculators()}


@router.post("/flooring/selection")
def toggle_flooring_selection(request: schemas.SelectionToggle):
    try:
        current = FlooringSelection(request.selection)
        selection = toggle(current, request.option)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"selection": selection.value, "options": sorted(selection.options)}


@router.post("/{calc_type}", response_model=schemas.EstimateResponse)
def run_estimate(
    calc_type: str,
    request: schemas.EstimateRequest,
    store: DefaultsStore = Depends(get_defaults_store),
):
    if not has_calculator(calc_type):
        raise HTTPException(status_code=404, detail=f"Unknown calculator: {calc_type}")
    calculator = get_calculator(calc_type, defaults=store.snapshot())
    return calculator.calculate(request.fields)
