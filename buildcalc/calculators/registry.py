"""
Calculator registry: maps calculator type strings to estimator classes.
"""

from .slab import SlabCalculator
from .ceiling import CeilingCalculator
from .flooring import FlooringCalculator
from .concrete import ConcreteMixCalculator
from .base import BaseCalculator

CALCULATOR_REGISTRY: dict[str, type] = {
    "slab": SlabCalculator,
    "ceiling": CeilingCalculator,
    "flooring": FlooringCalculator,
    "concrete": ConcreteMixCalculator,
}


def get_calculator(calc_type: str, defaults=None) -> BaseCalculator:
    """Returns an instance of the calculator for a type, or raises ValueError."""
    if calc_type not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for type: {calc_type}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[calc_type](defaults=defaults)


def has_calculator(calc_type: str) -> bool:
    """Check if a calculator exists for a type."""
    return calc_type in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered calculator types."""
    return list(CALCULATOR_REGISTRY.keys())
