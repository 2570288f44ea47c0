"""
Precast slab (laje) estimator.

Input: slab type (trellis or foam) and a list of rooms, each with its own
install direction.
Output: beams per adjusted length, filler elements (ceramic tiles for trellis,
foam blocks for foam) and the unadjusted total area.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from ..models import InstallDirection, SlabType
from ..units import (
    BEAM_LENGTH_STEP,
    FOAM_BLOCK_LENGTH,
    FOAM_MODULE_WIDTH,
    TRELLIS_FILLERS_PER_M2,
    TRELLIS_MODULE_WIDTH,
    ZERO,
    ceil_decimal,
    ceil_int,
    ceil_to_step,
    plain,
)
from .base import BaseCalculator, Room, orient

MODULE_WIDTHS = {
    SlabType.TRELLIS: TRELLIS_MODULE_WIDTH,
    SlabType.FOAM: FOAM_MODULE_WIDTH,
}

ELEMENT_LABELS = {
    SlabType.TRELLIS: "Ceramic fillers",
    SlabType.FOAM: "Foam blocks",
}


@dataclass(frozen=True)
class SlabRoom:
    room: Room
    direction: InstallDirection = InstallDirection.SHORT_SIDE


@dataclass
class SlabRoomResult:
    index: int
    direction: InstallDirection
    adjusted_width: Decimal
    adjusted_length: Decimal
    beam_count: int
    elements: int
    area: Decimal

    def to_dict(self) -> dict:
        return {
            "room": self.index,
            "direction": self.direction.value,
            "adjusted_width_m": plain(self.adjusted_width),
            "adjusted_length_m": plain(self.adjusted_length),
            "beams": self.beam_count,
            "elements": self.elements,
            "area_m2": plain(self.area),
        }


@dataclass
class SlabResult:
    slab_type: SlabType
    rooms: list = field(default_factory=list)
    beams_by_length: dict = field(default_factory=dict)
    total_area: Decimal = ZERO
    total_elements: int = 0

    def to_dict(self) -> dict:
        return {
            "slab_type": self.slab_type.value,
            "rooms": [r.to_dict() for r in self.rooms],
            "beams_by_length": {plain(k): v for k, v in self.beams_by_length.items()},
            "total_area_m2": plain(self.total_area),
            "total_elements": self.total_elements,
        }


def beam_run(perpendicular: Decimal, module_width: Decimal) -> tuple:
    """Beams across the perpendicular side: (adjusted width, beam count)."""
    count = ceil_decimal(perpendicular / module_width)
    if count < 0:
        count = ZERO
    return count * module_width, int(count)


def trellis_fillers(adjusted_width: Decimal, adjusted_length: Decimal) -> int:
    return max(ceil_int(adjusted_width * adjusted_length * TRELLIS_FILLERS_PER_M2), 0)


def foam_blocks(beam_count: int, adjusted_length: Decimal) -> int:
    return max(ceil_int(Decimal(beam_count) * adjusted_length / FOAM_BLOCK_LENGTH), 0)


def estimate_slab(rooms: list, slab_type: SlabType) -> SlabResult:
    """Beam and filler quantities for a batch of SlabRoom."""
    module_width = MODULE_WIDTHS[slab_type]
    result = SlabResult(slab_type=slab_type)
    beams = {}

    for i, slab_room in enumerate(rooms, start=1):
        room = slab_room.room
        install_side, perpendicular = orient(
            room.width, room.length,
            long_side_first=slab_room.direction == InstallDirection.LONG_SIDE,
        )

        adjusted_length = ceil_to_step(install_side, BEAM_LENGTH_STEP)
        adjusted_width, beam_count = beam_run(perpendicular, module_width)

        # Equal beam lengths across rooms share one purchase line
        beams[adjusted_length] = beams.get(adjusted_length, 0) + beam_count

        if slab_type == SlabType.TRELLIS:
            elements = trellis_fillers(adjusted_width, adjusted_length)
        else:
            elements = foam_blocks(beam_count, adjusted_length)

        result.rooms.append(SlabRoomResult(
            index=i,
            direction=slab_room.direction,
            adjusted_width=adjusted_width,
            adjusted_length=adjusted_length,
            beam_count=beam_count,
            elements=elements,
            area=room.area,
        ))
        # Area stays physical; the adjustment is purchasing overhead only
        result.total_area += room.area
        result.total_elements += elements

    result.beams_by_length = dict(sorted(beams.items()))
    return result


class SlabCalculator(BaseCalculator):

    calc_type = "slab"

    def parse_fields(self, fields: dict) -> tuple:
        slab_type = self.parse_choice(fields, "slab_type", SlabType, default=SlabType.TRELLIS)
        rooms = []
        for i, raw in enumerate(self.room_list(fields), start=1):
            room = self.parse_room(raw, i)
            direction = self.parse_choice(raw, "direction", InstallDirection,
                                          default=InstallDirection.SHORT_SIDE)
            rooms.append(SlabRoom(room=room, direction=direction))
        return rooms, slab_type

    def estimate(self, inputs: tuple) -> SlabResult:
        rooms, slab_type = inputs
        return estimate_slab(rooms, slab_type)

    def render(self, result: SlabResult) -> str:
        label = ELEMENT_LABELS[result.slab_type]
        lines = []
        for r in result.rooms:
            lines.append(f"Room {r.index}:")
            lines.append(f"Slab type: {result.slab_type.value}")
            lines.append(f"Install direction: {r.direction.value.replace('_', ' ')}")
            lines.append(f"Adjusted width: {r.adjusted_width:.2f} m")
            lines.append(f"Adjusted length: {r.adjusted_length:.2f} m")
            lines.append(f"Beams: {r.beam_count} of {r.adjusted_length:.2f} m")
            lines.append(f"{label}: {r.elements}")
            lines.append(f"Room area: {r.area:.2f} m²")
            lines.append("")
        lines.append(f"Total area: {result.total_area:.2f} m²")
        lines.append("Total beams:")
        for length, count in result.beams_by_length.items():
            lines.append(f"  {count} beams of {length:.2f} m")
        lines.append(f"Total {label.lower()}: {result.total_elements}")
        return "\n".join(lines)
