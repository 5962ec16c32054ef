"""Tests for slot id encoding, coordinates and canonical ordering."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.layout import FacilityLayout
from models.slot import SlotId, Coordinates
from engine.errors import InvalidSlotId, LayoutError
from engine.layout import (
    parse_slot_id,
    coordinates,
    slot_id_for,
    all_slots,
    canonical_levels,
    canonical_key,
)


def make_layout(levels=4, rows=4, columns=12, sections=2):
    return FacilityLayout(levels, rows, columns, sections)


class TestFacilityLayout:
    def test_defaults_match_garage_map(self):
        layout = FacilityLayout()
        assert layout.level_names == ["L1", "L2", "L3", "L4"]
        assert layout.section_letters == ["A", "B"]
        assert layout.rows_per_section == 2
        assert layout.slots_per_section == 24
        assert layout.capacity == 192

    def test_zero_sections_is_fatal(self):
        with pytest.raises(LayoutError):
            make_layout(sections=0)

    def test_rows_must_split_evenly(self):
        with pytest.raises(LayoutError):
            make_layout(rows=4, sections=3)

    def test_odd_columns_rejected(self):
        with pytest.raises(LayoutError):
            make_layout(columns=11)

    def test_zero_levels_rejected(self):
        with pytest.raises(LayoutError):
            make_layout(levels=0)


class TestParseSlotId:
    def test_valid_ids(self):
        layout = make_layout()
        assert parse_slot_id(layout, "L1-A1") == SlotId("L1", "A", 1)
        assert parse_slot_id(layout, "L4-B24") == SlotId("L4", "B", 24)

    def test_display_form(self):
        assert str(SlotId("L2", "B", 13)) == "L2-B13"

    @pytest.mark.parametrize("text", [
        "", "L1A1", "l1-a1", "L1-A0", "L1-A25", "L5-A1", "L1-C1",
        "L01-A1", "L1-A01", "L1-AA1", "L1-A1x", "1-A1",
    ])
    def test_malformed_or_out_of_range(self, text):
        with pytest.raises(InvalidSlotId):
            parse_slot_id(make_layout(), text)

    def test_non_string_rejected(self):
        with pytest.raises(InvalidSlotId):
            parse_slot_id(make_layout(), None)

    def test_slot_id_validates_construction(self):
        with pytest.raises(ValueError):
            SlotId("L1", "a", 1)
        with pytest.raises(ValueError):
            SlotId("L1", "A", 0)


class TestCoordinates:
    def test_first_slot(self):
        coords = coordinates(make_layout(), "L1-A1")
        assert coords == Coordinates("L1", 0, 0, "outbound")

    def test_second_row_of_section(self):
        coords = coordinates(make_layout(), "L1-A13")
        assert coords.row == 1
        assert coords.column == 0
        assert coords.direction == "inbound"

    def test_last_slot_on_level(self):
        coords = coordinates(make_layout(), "L2-B24")
        assert (coords.level, coords.row, coords.column) == ("L2", 3, 11)

    def test_one_row_per_section(self):
        layout = make_layout(levels=1, rows=4, columns=12, sections=4)
        assert coordinates(layout, "L1-C5").row == 2
        with pytest.raises(InvalidSlotId):
            coordinates(layout, "L1-A13")

    def test_inverse_rejects_wrong_direction(self):
        with pytest.raises(InvalidSlotId):
            slot_id_for(make_layout(), Coordinates("L1", 0, 0, "inbound"))

    def test_inverse_rejects_out_of_range(self):
        with pytest.raises(InvalidSlotId):
            slot_id_for(make_layout(), Coordinates("L1", 4, 0, "outbound"))
        with pytest.raises(InvalidSlotId):
            slot_id_for(make_layout(), Coordinates("L1", 0, 12, "outbound"))

    def test_round_trip_over_whole_facility(self):
        layout = make_layout()
        seen = set()
        for level in layout.level_names:
            for slot_id in all_slots(layout, level):
                coords = coordinates(layout, slot_id)
                assert slot_id_for(layout, coords) == slot_id
                assert parse_slot_id(layout, str(slot_id)) == slot_id
                seen.add(coords)
        assert len(seen) == layout.capacity


class TestAllSlots:
    def test_canonical_order(self):
        slots = [str(s) for s in all_slots(make_layout(), "L1")]
        assert slots[:3] == ["L1-A1", "L1-A2", "L1-A3"]
        assert slots[23:25] == ["L1-A24", "L1-B1"]
        assert len(slots) == 48

    def test_restartable(self):
        layout = make_layout()
        first = list(all_slots(layout, "L2"))
        second = list(all_slots(layout, "L2"))
        assert first == second

    def test_sorted_by_canonical_key(self):
        layout = make_layout()
        slots = list(all_slots(layout, "L3"))
        assert slots == sorted(slots, key=lambda s: canonical_key(layout, s))

    def test_unknown_level(self):
        with pytest.raises(InvalidSlotId):
            all_slots(make_layout(), "L9")


class TestCanonicalLevels:
    def test_default_order(self):
        assert canonical_levels(make_layout()) == ["L1", "L2", "L3", "L4"]

    def test_preferred_first(self):
        assert canonical_levels(make_layout(), preferred="L3") == ["L3", "L1", "L2", "L4"]

    def test_excluded_levels(self):
        assert canonical_levels(make_layout(), preferred="L2", exclude={"L1"}) == ["L2", "L3", "L4"]

    def test_unknown_preferred_level(self):
        with pytest.raises(InvalidSlotId):
            canonical_levels(make_layout(), preferred="L7")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
