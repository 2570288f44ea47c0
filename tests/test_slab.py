"""
Slab estimator: beam runs, filler counts, per-length aggregation.
"""

from decimal import Decimal

import pytest

from buildcalc.calculators.base import Room
from buildcalc.calculators.slab import SlabCalculator, SlabRoom, estimate_slab
from buildcalc.models import InstallDirection, SlabType

D = Decimal


def _room(width, length, direction=InstallDirection.SHORT_SIDE):
    return SlabRoom(room=Room(D(width), D(length)), direction=direction)


def test_trellis_short_side():
    """3 x 4 room, beams run along the 3 m side across 4 m of 0.37 m modules."""
    result = estimate_slab([_room("3", "4")], SlabType.TRELLIS)
    room = result.rooms[0]
    assert room.adjusted_length == D("3.0")
    assert room.beam_count == 11
    assert room.adjusted_width == D("4.07")
    assert room.elements == 159  # ceil(4.07 * 3.0 * 13) = ceil(158.73)
    assert result.total_area == D("12")


def test_trellis_long_side():
    result = estimate_slab([_room("3", "4", InstallDirection.LONG_SIDE)], SlabType.TRELLIS)
    room = result.rooms[0]
    assert room.adjusted_length == D("4.0")
    assert room.beam_count == 9
    assert room.adjusted_width == D("3.33")
    assert room.elements == 174  # ceil(3.33 * 4.0 * 13) = ceil(173.16)


def test_foam_blocks_follow_beam_runs():
    result = estimate_slab([_room("3", "4")], SlabType.FOAM)
    room = result.rooms[0]
    assert room.beam_count == 10  # ceil(4 / 0.42)
    assert room.adjusted_width == D("4.20")
    assert room.elements == 60    # 10 beams * 3.0 m / 0.5 m


def test_length_rounds_up_to_02_step():
    result = estimate_slab([_room("3.7", "2.5")], SlabType.TRELLIS)
    room = result.rooms[0]
    assert room.adjusted_length == D("2.6")
    assert room.beam_count == 10  # 3.7 / 0.37 exactly
    assert room.elements == 126   # ceil(3.70 * 2.6 * 13) = ceil(125.06)


def test_beams_of_equal_length_are_summed():
    result = estimate_slab([_room("3", "4"), _room("4", "3"), _room("3.7", "2.5")], SlabType.TRELLIS)
    assert result.beams_by_length == {D("2.6"): 10, D("3.0"): 22}
    assert list(result.beams_by_length) == [D("2.6"), D("3.0")]
    assert result.total_elements == 159 + 159 + 126


def test_total_area_is_unadjusted():
    result = estimate_slab([_room("3", "4"), _room("2.5", "3.7")], SlabType.FOAM)
    assert result.total_area == D("12") + D("9.25")


@pytest.mark.parametrize("width,length", [("3", "4"), ("2.5", "7.3"), ("5", "5"), ("0.9", "12.1")])
@pytest.mark.parametrize("direction", list(InstallDirection))
def test_beam_counts_symmetric_in_width_and_length(width, length, direction):
    """
    Swapping width and length leaves each direction mode's result unchanged.

    Direction is chosen by side length, not by which field holds it, so the
    long-side and short-side modes do not trade results under a swap.
    """
    for slab_type in SlabType:
        a = estimate_slab([_room(width, length, direction)], slab_type)
        b = estimate_slab([_room(length, width, direction)], slab_type)
        assert a.rooms[0].beam_count == b.rooms[0].beam_count
        assert a.beams_by_length == b.beams_by_length
        assert a.total_elements == b.total_elements


def test_calculate_from_raw_fields():
    calc = SlabCalculator()
    out = calc.calculate({
        "slab_type": "trellis",
        "rooms": [{"width": "3,0", "length": "4", "direction": "short_side"}],
    })
    assert out["ok"] is True
    assert out["result"]["beams_by_length"] == {"3": 11}
    assert out["result"]["total_elements"] == 159
    assert "11 beams of 3.00 m" in out["report"]
    assert "Total area: 12.00 m²" in out["report"]


def test_invalid_room_aborts_batch():
    calc = SlabCalculator()
    out = calc.calculate({
        "slab_type": "foam",
        "rooms": [{"width": "3", "length": "4"}, {"width": "abc", "length": "4"}],
    })
    assert out["ok"] is False
    assert out["error"] == "Invalid width in room 2"
    assert "result" not in out


def test_invalid_length_names_room():
    out = SlabCalculator().calculate({"rooms": [{"width": "3", "length": ""}]})
    assert out["error"] == "Invalid length in room 1"


def test_invalid_slab_type():
    out = SlabCalculator().calculate({"slab_type": "steel", "rooms": []})
    assert out["ok"] is False
    assert "slab_type" in out["error"]


def test_exponent_room_width_rejected():
    out = SlabCalculator().calculate({"rooms": [{"width": "1e999999", "length": "10"}]})
    assert out == {
        "ok": False,
        "calc_type": "slab",
        "error": "Invalid width in room 1",
        "report": "Invalid width in room 1",
    }
