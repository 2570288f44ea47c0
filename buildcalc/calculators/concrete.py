"""
Concrete mix solver.

Two ways in:
- by volume: split a target concrete volume by a cement:sand:stone ratio
- by quantities: cement volume plus sand and stone, each as m³ or as 20 kg
  bags; the concrete volume is the sum of the three

Output: cement in 50 kg bags, sand and stone in half-m³ steps and 20 kg bags,
and the ratio actually realized (component / cement).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..errors import LogicalInconsistency
from ..models import ConcreteInputMode
from ..units import (
    AGGREGATE_BAG_KG,
    AGGREGATE_DENSITY_KG_M3,
    CEMENT_BAG_KG,
    ceil_int,
    ceil_to_half,
    is_blank,
    parse_decimal,
    plain,
)
from .base import BaseCalculator


@dataclass(frozen=True)
class ConcreteRatio:
    cement: Decimal = Decimal("1")
    sand: Decimal = Decimal("2")
    stone: Decimal = Decimal("2")

    def __post_init__(self):
        for name in ("cement", "sand", "stone"):
            if getattr(self, name) <= 0:
                raise LogicalInconsistency(f"Ratio part for {name} must be greater than zero")

    @property
    def total(self) -> Decimal:
        return self.cement + self.sand + self.stone


DEFAULT_RATIO = ConcreteRatio()


@dataclass
class ConcreteMix:
    """Component volumes, m³."""
    volume: Decimal
    cement: Decimal
    sand: Decimal
    stone: Decimal

    @property
    def cement_bags(self) -> int:
        return ceil_int(self.cement * AGGREGATE_DENSITY_KG_M3 / CEMENT_BAG_KG)

    @property
    def sand_m3(self) -> Decimal:
        return ceil_to_half(self.sand)

    @property
    def sand_bags(self) -> int:
        return bags_for(self.sand)

    @property
    def stone_m3(self) -> Decimal:
        return ceil_to_half(self.stone)

    @property
    def stone_bags(self) -> int:
        return bags_for(self.stone)

    @property
    def realized_ratio(self) -> tuple:
        """(1, sand/cement, stone/cement); may differ from the nominal ratio in quantity mode."""
        if self.cement <= 0:
            raise LogicalInconsistency("Cement quantity must be greater than zero")
        return (self.cement / self.cement, self.sand / self.cement, self.stone / self.cement)

    def to_dict(self) -> dict:
        cement_part, sand_part, stone_part = self.realized_ratio
        return {
            "volume_m3": plain(self.volume),
            "cement_m3": plain(self.cement),
            "sand_m3": plain(self.sand),
            "stone_m3": plain(self.stone),
            "cement_bags_50kg": self.cement_bags,
            "sand_order_m3": plain(self.sand_m3),
            "sand_bags_20kg": self.sand_bags,
            "stone_order_m3": plain(self.stone_m3),
            "stone_bags_20kg": self.stone_bags,
            "realized_ratio": [plain(cement_part), plain(sand_part), plain(stone_part)],
        }


def bags_for(volume: Decimal) -> int:
    """20 kg aggregate bags for a volume."""
    return ceil_int(volume * AGGREGATE_DENSITY_KG_M3 / AGGREGATE_BAG_KG)


def bags_to_volume(bags: Decimal) -> Decimal:
    return bags * AGGREGATE_BAG_KG / AGGREGATE_DENSITY_KG_M3


def mix_by_volume(volume: Decimal, ratio: ConcreteRatio = DEFAULT_RATIO) -> ConcreteMix:
    total = ratio.total
    return ConcreteMix(
        volume=volume,
        cement=volume * ratio.cement / total,
        sand=volume * ratio.sand / total,
        stone=volume * ratio.stone / total,
    )


def mix_by_quantities(cement: Decimal, sand: Decimal, stone: Decimal) -> ConcreteMix:
    return ConcreteMix(volume=cement + sand + stone, cement=cement, sand=sand, stone=stone)


@dataclass(frozen=True)
class ConcreteInputs:
    mode: ConcreteInputMode
    ratio: ConcreteRatio = DEFAULT_RATIO
    volume: Optional[Decimal] = None
    cement: Optional[Decimal] = None
    sand: Optional[Decimal] = None
    stone: Optional[Decimal] = None


class ConcreteMixCalculator(BaseCalculator):

    calc_type = "concrete"

    def parse_fields(self, fields: dict) -> ConcreteInputs:
        mode = self.parse_choice(fields, "mode", ConcreteInputMode, default=ConcreteInputMode.VOLUME)

        if mode == ConcreteInputMode.VOLUME:
            ratio = ConcreteRatio(
                cement=self.parse_optional(fields, "ratio_cement", "cement ratio", DEFAULT_RATIO.cement),
                sand=self.parse_optional(fields, "ratio_sand", "sand ratio", DEFAULT_RATIO.sand),
                stone=self.parse_optional(fields, "ratio_stone", "stone ratio", DEFAULT_RATIO.stone),
            )
            volume = self.parse_required(fields, "volume", "concrete volume")
            return ConcreteInputs(mode=mode, ratio=ratio, volume=volume)

        return ConcreteInputs(
            mode=mode,
            cement=self.parse_required(fields, "cement", "cement quantity"),
            sand=self._aggregate(fields, "sand"),
            stone=self._aggregate(fields, "stone"),
        )

    def _aggregate(self, fields: dict, name: str) -> Decimal:
        """Volume of sand or stone: m³ wins over bags when both are given."""
        m3 = fields.get(f"{name}_m3")
        bags = fields.get(f"{name}_bags")
        if not is_blank(m3):
            volume = parse_decimal(m3, f"{name} volume")
        elif not is_blank(bags):
            volume = bags_to_volume(parse_decimal(bags, f"{name} bags"))
        else:
            raise LogicalInconsistency(f"Enter either a volume or a bag count for {name}")
        if volume <= 0:
            raise LogicalInconsistency(f"{name.capitalize()} quantity must be greater than zero")
        return volume

    def estimate(self, inputs: ConcreteInputs) -> ConcreteMix:
        if inputs.mode == ConcreteInputMode.VOLUME:
            mix = mix_by_volume(inputs.volume, inputs.ratio)
        else:
            mix = mix_by_quantities(inputs.cement, inputs.sand, inputs.stone)
        if mix.cement <= 0:
            raise LogicalInconsistency("Cement quantity must be greater than zero")
        return mix

    def render(self, mix: ConcreteMix) -> str:
        cement_part, sand_part, stone_part = mix.realized_ratio
        return "\n".join([
            f"Concrete volume: {mix.volume:.2f} m³",
            f"Cement: {mix.cement_bags} bags of {plain(CEMENT_BAG_KG)}kg",
            f"Sand: {mix.sand_m3:.1f} m³ or {mix.sand_bags} bags of {plain(AGGREGATE_BAG_KG)}kg",
            f"Stone: {mix.stone_m3:.1f} m³ or {mix.stone_bags} bags of {plain(AGGREGATE_BAG_KG)}kg",
            f"Realized ratio (cement:sand:stone): {cement_part:.2f}:{sand_part:.2f}:{stone_part:.2f}",
        ])

