from sqlalchemy import Column, String, DateTime
from datetime import datetime
from .database import Base
import enum


# --- Enums (accepted as raw field values) ---

class SlabType(str, enum.Enum):
    TRELLIS = "trellis"
    FOAM = "foam"


class InstallDirection(str, enum.Enum):
    """Which side of the room the beams/panels run along."""
    LONG_SIDE = "long_side"
    SHORT_SIDE = "short_side"


class ApplicationMethod(str, enum.Enum):
    SINGLE_SIDED = "single_sided"
    DOUBLE_SIDED = "double_sided"


class ConcreteInputMode(str, enum.Enum):
    VOLUME = "volume"
    QUANTITIES = "quantities"


# Keys of the persisted coefficient defaults
MORTAR_FACTOR_SINGLE_KEY = "mortar_factor_single"
MORTAR_FACTOR_DOUBLE_KEY = "mortar_factor_double"
GROUT_COEFFICIENT_KEY = "grout_coefficient"

DEFAULT_SETTING_KEYS = [
    MORTAR_FACTOR_SINGLE_KEY,
    MORTAR_FACTOR_DOUBLE_KEY,
    GROUT_COEFFICIENT_KEY,
]


class DefaultSetting(Base):
    """User-saved coefficient defaults, one row per key, value is a decimal string."""
    __tablename__ = "default_settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False, default="")  # "" means built-in default
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
