from pydantic import BaseModel
from typing import Optional, List


class EstimateRequest(BaseModel):
    fields: dict = {}  # raw form values, parsed by the calculator


class EstimateResponse(BaseModel):
    ok: bool
    calc_type: str
    result: Optional[dict] = None
    error: Optional[str] = None
    report: str


class SelectionToggle(BaseModel):
    selection: str = "flooring"
    option: str


class KeyInput(BaseModel):
    keys: str


class CalculatorState(BaseModel):
    display: str
    pending_operator: Optional[str] = None
    stage: str
    history: List[str] = []


class DefaultValue(BaseModel):
    value: str


class Defaults(BaseModel):
    mortar_factor_single: str
    mortar_factor_double: str
    grout_coefficient: str
