"""
Flooring, tile mortar and grout estimator.

Input: rooms, the selected sub-calculations and only the fields those need.
Output: boxes of flooring with surplus, mortar mass and 20 kg bags, grout
mass with a 5% waste allowance.

Grout formula (tile dimensions in mm):
    kg/m² = (W + L) × T × J × coefficient / (W × L)
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..errors import LogicalInconsistency
from ..models import ApplicationMethod
from ..units import (
    GROUT_WASTE_FACTOR,
    MORTAR_BAG_KG,
    ZERO,
    ceil_decimal,
    ceil_int,
    plain,
)
from .base import BaseCalculator, Room
from .selection import FLOORING, GROUT, MORTAR, FlooringSelection

DEFAULT_TILE_THICKNESS_MM = Decimal("3")
DEFAULT_JOINT_SPACING_MM = Decimal("2")

METHOD_LABELS = {
    ApplicationMethod.SINGLE_SIDED: "Single-sided",
    ApplicationMethod.DOUBLE_SIDED: "Double-sided (back-buttered)",
}


@dataclass(frozen=True)
class Tile:
    """Tile face and joint, millimeters."""
    width: Decimal
    length: Decimal
    thickness: Decimal = DEFAULT_TILE_THICKNESS_MM
    joint_spacing: Decimal = DEFAULT_JOINT_SPACING_MM


@dataclass
class FlooringBoxes:
    box_area: Decimal
    total_area: Decimal
    boxes: int
    covered_area: Decimal
    surplus: Decimal

    def to_dict(self) -> dict:
        return {
            "box_area_m2": plain(self.box_area),
            "total_area_m2": plain(self.total_area),
            "boxes": self.boxes,
            "covered_area_m2": plain(self.covered_area),
            "surplus_m2": plain(self.surplus),
        }


@dataclass
class MortarEstimate:
    total_area: Decimal
    method: ApplicationMethod
    factor: Decimal
    mass_kg: Decimal
    bags: int

    def to_dict(self) -> dict:
        return {
            "total_area_m2": plain(self.total_area),
            "application_method": self.method.value,
            "factor_kg_m2": plain(self.factor),
            "mass_kg": plain(self.mass_kg),
            "bags_20kg": self.bags,
        }


@dataclass
class GroutEstimate:
    total_area: Decimal
    tile: Tile
    coefficient: Decimal
    per_m2_kg: Decimal
    total_kg: int

    def to_dict(self) -> dict:
        return {
            "total_area_m2": plain(self.total_area),
            "tile_mm": [plain(self.tile.width), plain(self.tile.length), plain(self.tile.thickness)],
            "joint_spacing_mm": plain(self.tile.joint_spacing),
            "coefficient": plain(self.coefficient),
            "per_m2_kg": plain(self.per_m2_kg),
            "total_kg": self.total_kg,
        }


@dataclass
class FlooringResult:
    total_area: Decimal
    flooring: Optional[FlooringBoxes] = None
    mortar: Optional[MortarEstimate] = None
    grout: Optional[GroutEstimate] = None

    def to_dict(self) -> dict:
        return {
            "total_area_m2": plain(self.total_area),
            "flooring": self.flooring.to_dict() if self.flooring else None,
            "mortar": self.mortar.to_dict() if self.mortar else None,
            "grout": self.grout.to_dict() if self.grout else None,
        }


def total_area(rooms: list) -> Decimal:
    return sum((room.area for room in rooms), ZERO)


def flooring_boxes(area: Decimal, box_area: Decimal) -> FlooringBoxes:
    if box_area <= 0:
        raise LogicalInconsistency("Box area must be greater than zero")
    boxes = ceil_decimal(area / box_area)
    covered = boxes * box_area
    return FlooringBoxes(
        box_area=box_area,
        total_area=area,
        boxes=int(boxes),
        covered_area=covered,
        surplus=covered - area,
    )


def mortar_mass(area: Decimal, factor: Decimal,
                method: ApplicationMethod = ApplicationMethod.SINGLE_SIDED) -> MortarEstimate:
    mass = area * factor
    return MortarEstimate(
        total_area=area,
        method=method,
        factor=factor,
        mass_kg=mass,
        bags=ceil_int(mass / MORTAR_BAG_KG),
    )


def grout_per_m2(tile: Tile, coefficient: Decimal) -> Decimal:
    face = tile.width * tile.length
    if face == 0:
        raise LogicalInconsistency("Tile width and length must be non-zero")
    return (tile.width + tile.length) * tile.thickness * tile.joint_spacing * coefficient / face


def grout_mass(area: Decimal, tile: Tile, coefficient: Decimal) -> GroutEstimate:
    per_m2 = grout_per_m2(tile, coefficient)
    return GroutEstimate(
        total_area=area,
        tile=tile,
        coefficient=coefficient,
        per_m2_kg=per_m2,
        total_kg=ceil_int(per_m2 * area * GROUT_WASTE_FACTOR),
    )


@dataclass(frozen=True)
class FlooringInputs:
    rooms: list
    selection: FlooringSelection
    box_area: Optional[Decimal] = None
    method: ApplicationMethod = ApplicationMethod.SINGLE_SIDED
    mortar_factor: Optional[Decimal] = None
    tile: Optional[Tile] = None
    grout_coefficient: Optional[Decimal] = None


class FlooringCalculator(BaseCalculator):

    calc_type = "flooring"

    def parse_fields(self, fields: dict) -> FlooringInputs:
        selection = self.parse_choice(fields, "selection", FlooringSelection,
                                      default=FlooringSelection.FLOORING)
        options = selection.options
        rooms = [self.parse_room(raw, i) for i, raw in enumerate(self.room_list(fields), start=1)]

        # Each sub-calculation only validates its own fields
        box_area = None
        if FLOORING in options:
            box_area = self.parse_required(fields, "box_area", "box area")

        method = ApplicationMethod.SINGLE_SIDED
        mortar_factor = None
        if MORTAR in options:
            method = self.parse_choice(fields, "application_method", ApplicationMethod,
                                       default=ApplicationMethod.SINGLE_SIDED)
            mortar_factor = self.parse_optional(fields, "mortar_factor", "mortar factor",
                                                self.defaults.mortar_factor(method))

        tile = None
        grout_coefficient = None
        if GROUT in options:
            tile = Tile(
                width=self.parse_required(fields, "tile_width", "tile width"),
                length=self.parse_required(fields, "tile_length", "tile length"),
                thickness=self.parse_optional(fields, "tile_thickness", "tile thickness",
                                              DEFAULT_TILE_THICKNESS_MM),
                joint_spacing=self.parse_optional(fields, "joint_spacing", "joint spacing",
                                                  DEFAULT_JOINT_SPACING_MM),
            )
            grout_coefficient = self.parse_optional(fields, "grout_coefficient", "grout coefficient",
                                                    self.defaults.grout_coefficient)

        return FlooringInputs(
            rooms=rooms,
            selection=selection,
            box_area=box_area,
            method=method,
            mortar_factor=mortar_factor,
            tile=tile,
            grout_coefficient=grout_coefficient,
        )

    def estimate(self, inputs: FlooringInputs) -> FlooringResult:
        area = total_area(inputs.rooms)
        options = inputs.selection.options
        result = FlooringResult(total_area=area)
        if FLOORING in options:
            result.flooring = flooring_boxes(area, inputs.box_area)
        if MORTAR in options:
            result.mortar = mortar_mass(area, inputs.mortar_factor, inputs.method)
        if GROUT in options:
            result.grout = grout_mass(area, inputs.tile, inputs.grout_coefficient)
        return result

    def render(self, result: FlooringResult) -> str:
        lines = []
        if result.flooring:
            f = result.flooring
            lines += [
                "Flooring:",
                f"Box area: {f.box_area:.2f} m²",
                f"Total area to cover: {f.total_area:.2f} m²",
                f"Boxes needed: {f.boxes} ({f.covered_area:.2f} m²)",
                f"Estimated surplus: {f.surplus:.2f} m²",
                "",
            ]
        if result.mortar:
            m = result.mortar
            lines += [
                "Mortar:",
                f"Total area: {m.total_area:.2f} m²",
                f"Application method: {METHOD_LABELS[m.method]}",
                f"Coverage factor: {m.factor:.2f} kg/m²",
                f"Mortar needed: {m.mass_kg:.2f} kg",
                f"20kg bags needed: {m.bags}",
                "",
            ]
        if result.grout:
            g = result.grout
            lines += [
                "Grout:",
                f"Total area: {g.total_area:.2f} m²",
                f"Tile: {g.tile.width:.0f}mm x {g.tile.length:.0f}mm x {g.tile.thickness:.0f}mm",
                f"Joint spacing: {g.tile.joint_spacing:.2f} mm",
                f"Grout coefficient: {g.coefficient:.2f}",
                f"Grout needed: {g.total_kg} kg",
                "",
            ]
        return "\n".join(lines).rstrip("\n")
