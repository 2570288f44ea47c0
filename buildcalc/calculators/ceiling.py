"""
Ceiling panel (forro) layout engine.

Rows of 0.2 m wide panels run along the installation side. Each row is
packed greedily from the 3/4/5/6 m stock: the longest piece that still fits
the remaining run, or the shortest piece when nothing fits (the last piece
overhangs and is cut on site). Every joint inside a row takes one splice.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from ..models import InstallDirection
from ..units import (
    PANEL_STOCK_LENGTHS,
    PANEL_WIDTH,
    SPLICE_BAR_LENGTH,
    SPLICE_LENGTH,
    ZERO,
    ceil_int,
    plain,
)
from .base import BaseCalculator, Room, orient


def pack_row(run_length: Decimal, stock_lengths=PANEL_STOCK_LENGTHS) -> dict:
    """Stock piece counts for one row, {length: count}."""
    by_size = sorted(stock_lengths, reverse=True)
    longest, shortest = by_size[0], by_size[-1]
    counts = {}
    if run_length <= 0:
        return counts
    # Every full longest-length stretch takes a longest piece
    full = int(run_length // longest)
    if full:
        counts[longest] = full
    remaining = run_length - full * longest
    while remaining > 0:
        piece = next((size for size in by_size if size <= remaining), shortest)
        counts[piece] = counts.get(piece, 0) + 1
        remaining -= piece
    return counts


def row_count(perpendicular: Decimal) -> int:
    return max(ceil_int(perpendicular / PANEL_WIDTH), 0)


def empty_piece_counts() -> dict:
    return {size: 0 for size in PANEL_STOCK_LENGTHS}


@dataclass
class CeilingRoomResult:
    index: int
    room: Room
    rows: int
    pieces: dict
    splices: int

    @property
    def splice_meters(self) -> Decimal:
        return Decimal(self.splices) * SPLICE_LENGTH

    def to_dict(self) -> dict:
        return {
            "room": self.index,
            "area_m2": plain(self.room.area),
            "perimeter_m": plain(self.room.perimeter),
            "rows": self.rows,
            "pieces": {plain(k): v for k, v in self.pieces.items() if v},
            "splice_m": plain(self.splice_meters),
            "trim_m": plain(self.room.perimeter),
        }


@dataclass
class CeilingResult:
    direction: InstallDirection
    rooms: list = field(default_factory=list)
    pieces: dict = field(default_factory=empty_piece_counts)
    total_area: Decimal = ZERO
    total_splice_meters: Decimal = ZERO
    total_trim: Decimal = ZERO

    @property
    def splice_bars(self) -> int:
        return ceil_int(self.total_splice_meters / SPLICE_BAR_LENGTH)

    def to_dict(self) -> dict:
        return {
            "direction": self.direction.value,
            "rooms": [r.to_dict() for r in self.rooms],
            "pieces": {plain(k): v for k, v in self.pieces.items() if v},
            "total_area_m2": plain(self.total_area),
            "total_splice_m": plain(self.total_splice_meters),
            "splice_bars": self.splice_bars,
            "total_trim_m": plain(self.total_trim),
        }


def layout_room(room: Room, direction: InstallDirection, index: int = 1) -> CeilingRoomResult:
    install_side, perpendicular = orient(
        room.width, room.length,
        long_side_first=direction == InstallDirection.LONG_SIDE,
    )
    rows = row_count(perpendicular)
    pieces = empty_piece_counts()
    if rows == 0:
        return CeilingRoomResult(index=index, room=room, rows=0, pieces=pieces, splices=0)
    # Every row is identical
    row = pack_row(install_side)
    for size, count in row.items():
        pieces[size] += count * rows
    splices = max(sum(row.values()) - 1, 0) * rows
    return CeilingRoomResult(index=index, room=room, rows=rows, pieces=pieces, splices=splices)


def estimate_ceiling(rooms: list, direction: InstallDirection) -> CeilingResult:
    """Panel, splice and trim quantities; one direction applies to every room."""
    result = CeilingResult(direction=direction)
    for i, room in enumerate(rooms, start=1):
        room_result = layout_room(room, direction, index=i)
        result.rooms.append(room_result)
        for size, count in room_result.pieces.items():
            result.pieces[size] += count
        result.total_area += room.area
        result.total_splice_meters += room_result.splice_meters
        result.total_trim += room.perimeter
    return result


class CeilingCalculator(BaseCalculator):

    calc_type = "ceiling"

    def parse_fields(self, fields: dict) -> tuple:
        direction = self.parse_choice(fields, "direction", InstallDirection,
                                      default=InstallDirection.LONG_SIDE)
        rooms = [self.parse_room(raw, i) for i, raw in enumerate(self.room_list(fields), start=1)]
        return rooms, direction

    def estimate(self, inputs: tuple) -> CeilingResult:
        rooms, direction = inputs
        return estimate_ceiling(rooms, direction)

    def render(self, result: CeilingResult) -> str:
        direction = result.direction.value.replace("_", " ")
        lines = []
        for r in result.rooms:
            lines.append(f"Room {r.index}: {r.room.width:.2f}m x {r.room.length:.2f}m = {r.room.area:.2f}m²")
            lines.append(f"Perimeter: {r.room.perimeter:.2f}m")
            lines.append(f"Install direction: {direction}")
            for size, count in r.pieces.items():
                if count:
                    lines.append(f"  Pieces of {plain(size)}m: {count}")
            if r.splice_meters > 0:
                lines.append(f"  Splice needed: {r.splice_meters:.2f} meters")
            else:
                lines.append("  Splice: not needed")
            lines.append(f"  Trim needed: {r.room.perimeter:.2f} meters")
            lines.append("")

        lines.append(f"Total area of all rooms: {result.total_area:.2f}m²")
        lines.append("")
        lines.append("Total pieces needed:")
        for size, count in result.pieces.items():
            if count:
                lines.append(f"  Pieces of {plain(size)}m: {count}")

        if result.total_splice_meters > 0:
            lines.append("")
            lines.append(f"Total splice needed: {result.total_splice_meters:.2f} meters")
            lines.append(f"Splice bars of {SPLICE_BAR_LENGTH:.2f}m: {result.splice_bars}")
        else:
            lines.append("")
            lines.append("Splice: not needed")

        lines.append("")
        lines.append(f"Total trim needed: {result.total_trim:.2f} meters")
        return "\n".join(lines)
