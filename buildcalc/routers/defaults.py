"""
Coefficient defaults API.

GET  /api/defaults                  Current mortar factors and grout coefficient
PUT  /api/defaults/mortar/{method}  Save the mortar factor for an application method
PUT  /api/defaults/grout            Save the grout coefficient
POST /api/defaults/reset            Restore built-in defaults (5.0, 7.0, 1.58)
"""

from fastapi import APIRouter, Depends, HTTPException

from .. import models, schemas
from ..defaults import DefaultsStore, get_defaults_store
from ..errors import ParseError

router = APIRouter(prefix="/defaults", tags=["defaults"])


@router.get("/", response_model=schemas.Defaults)
def get_defaults(store: DefaultsStore = Depends(get_defaults_store)):
    return store.snapshot().to_dict()


@router.put("/mortar/{method}", response_model=schemas.Defaults)
def save_mortar_factor(
    method: models.ApplicationMethod,
    update: schemas.DefaultValue,
    store: DefaultsStore = Depends(get_defaults_store),
):
    try:
        snapshot = store.save_mortar_factor(method, update.value)
    except ParseError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return snapshot.to_dict()


@router.put("/grout", response_model=schemas.Defaults)
def save_grout_coefficient(
    update: schemas.DefaultValue,
    store: DefaultsStore = Depends(get_defaults_store),
):
    try:
        snapshot = store.save_grout_coefficient(update.value)
    except ParseError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return snapshot.to_dict()


@router.post("/reset", response_model=schemas.Defaults)
def reset_defaults(store: DefaultsStore = Depends(get_defaults_store)):
    return store.reset().to_dict()
