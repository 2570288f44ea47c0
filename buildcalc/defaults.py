"""
Persisted coefficient defaults: mortar coverage factors and grout coefficient.

The store loads the `default_settings` table once, hands out an immutable
DefaultsSnapshot to the estimators, and rewrites all three rows whenever a
value is saved or the defaults are reset.
"""

import logging
import threading
from dataclasses import dataclass, replace
from decimal import Decimal

from . import models
from .database import SessionLocal
from .errors import ParseError
from .units import (
    DEFAULT_GROUT_COEFFICIENT,
    DEFAULT_MORTAR_FACTOR_DOUBLE,
    DEFAULT_MORTAR_FACTOR_SINGLE,
    is_blank,
    parse_decimal,
    plain,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultsSnapshot:
    mortar_factor_single: Decimal = DEFAULT_MORTAR_FACTOR_SINGLE
    mortar_factor_double: Decimal = DEFAULT_MORTAR_FACTOR_DOUBLE
    grout_coefficient: Decimal = DEFAULT_GROUT_COEFFICIENT

    def mortar_factor(self, method: models.ApplicationMethod) -> Decimal:
        """Coverage factor (kg/m²) for an application method."""
        if method == models.ApplicationMethod.DOUBLE_SIDED:
            return self.mortar_factor_double
        return self.mortar_factor_single

    def to_dict(self) -> dict:
        return {
            models.MORTAR_FACTOR_SINGLE_KEY: plain(self.mortar_factor_single),
            models.MORTAR_FACTOR_DOUBLE_KEY: plain(self.mortar_factor_double),
            models.GROUT_COEFFICIENT_KEY: plain(self.grout_coefficient),
        }


BUILTIN_DEFAULTS = DefaultsSnapshot()

_FIELD_FOR_KEY = {
    models.MORTAR_FACTOR_SINGLE_KEY: "mortar_factor_single",
    models.MORTAR_FACTOR_DOUBLE_KEY: "mortar_factor_double",
    models.GROUT_COEFFICIENT_KEY: "grout_coefficient",
}


class DefaultsStore:
    """Thread-safe access to the persisted defaults."""

    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory
        self._lock = threading.Lock()
        self._snapshot = None

    def load(self) -> DefaultsSnapshot:
        """Read the table and replace the cached snapshot. Missing rows fall back to built-ins."""
        with self._lock:
            self._snapshot = self._read()
            return self._snapshot

    def snapshot(self) -> DefaultsSnapshot:
        """Current defaults. Loads on first use."""
        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._read()
            return self._snapshot

    def save_mortar_factor(self, method: models.ApplicationMethod, value) -> DefaultsSnapshot:
        factor = parse_decimal(value, "mortar factor")
        field = ("mortar_factor_double" if method == models.ApplicationMethod.DOUBLE_SIDED
                 else "mortar_factor_single")
        return self._update(**{field: factor})

    def save_grout_coefficient(self, value) -> DefaultsSnapshot:
        coefficient = parse_decimal(value, "grout coefficient")
        return self._update(grout_coefficient=coefficient)

    def reset(self) -> DefaultsSnapshot:
        """Restore the built-in defaults and persist them."""
        with self._lock:
            self._write(BUILTIN_DEFAULTS)
            self._snapshot = BUILTIN_DEFAULTS
        logger.info("Coefficient defaults reset to built-in values")
        return BUILTIN_DEFAULTS

    # --- internals ---

    def _update(self, **changes) -> DefaultsSnapshot:
        with self._lock:
            current = self._snapshot if self._snapshot is not None else self._read()
            updated = replace(current, **changes)
            self._write(updated)
            self._snapshot = updated
        logger.info("Saved coefficient defaults: %s", updated.to_dict())
        return updated

    def _read(self) -> DefaultsSnapshot:
        values = {}
        db = self._session_factory()
        try:
            rows = db.query(models.DefaultSetting).all()
        finally:
            db.close()
        for row in rows:
            field = _FIELD_FOR_KEY.get(row.key)
            if field is None or is_blank(row.value):
                continue
            try:
                values[field] = parse_decimal(row.value, row.key)
            except ParseError:
                logger.warning("Ignoring malformed stored default %s=%r", row.key, row.value)
        return replace(BUILTIN_DEFAULTS, **values)

    def _write(self, snapshot: DefaultsSnapshot) -> None:
        db = self._session_factory()
        try:
            for key, value in snapshot.to_dict().items():
                row = db.query(models.DefaultSetting).filter(models.DefaultSetting.key == key).first()
                if row:
                    row.value = value
                else:
                    db.add(models.DefaultSetting(key=key, value=value))
            db.commit()
        finally:
            db.close()


store = DefaultsStore()


def get_defaults_store() -> DefaultsStore:
    """FastAPI dependency, overridden in tests."""
    return store
