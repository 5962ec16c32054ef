"""Tests for the occupancy table."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timezone

import pytest

from models.layout import FacilityLayout
from models.slot import SlotId
from engine.errors import AlreadyOccupied, DuplicatePlate, InvalidSlotId, NotFound, NotOccupied
from engine.occupancy_table import OccupancyTable

T0 = datetime(2025, 4, 28, 9, 15, tzinfo=timezone.utc)


def make_table(levels=2):
    return OccupancyTable(FacilityLayout(levels=levels, rows_per_level=4, columns=12, sections=2))


class TestInsert:
    def test_insert_marks_occupied(self):
        table = make_table()
        record = table.insert("L1-A1", "KA01AB1234", T0)

        assert table.is_occupied("L1-A1")
        assert table.is_occupied(SlotId("L1", "A", 1))
        assert "L1-A1" in table
        assert record.plate_number == "KA01AB1234"
        assert record.since == T0
        assert len(table) == 1

    def test_slot_taken(self):
        table = make_table()
        table.insert("L1-A1", "KA01AB1234", T0)
        with pytest.raises(AlreadyOccupied):
            table.insert("L1-A1", "MH12XY0001", T0)
        assert table.get("L1-A1").plate_number == "KA01AB1234"

    def test_plate_already_parked(self):
        table = make_table()
        table.insert("L1-A1", "KA01AB1234", T0)
        with pytest.raises(DuplicatePlate):
            table.insert("L1-A2", "ka01 ab1234", T0)
        assert not table.is_occupied("L1-A2")

    def test_same_plate_same_slot_is_already_occupied(self):
        table = make_table()
        table.insert("L1-A1", "KA01AB1234", T0)
        with pytest.raises(AlreadyOccupied):
            table.insert("L1-A1", "KA01AB1234", T0)

    def test_invalid_slot(self):
        with pytest.raises(InvalidSlotId):
            make_table().insert("L3-A1", "KA01AB1234", T0)

    def test_empty_plate(self):
        with pytest.raises(ValueError):
            make_table().insert("L1-A1", "   ", T0)

    def test_naive_timestamp_treated_as_utc(self):
        table = make_table()
        record = table.insert("L1-A1", "KA01AB1234", datetime(2025, 4, 28, 9, 15))
        assert record.since == T0


class TestRemove:
    def test_remove_frees_slot_and_plate(self):
        table = make_table()
        table.insert("L1-A1", "KA01AB1234", T0)
        removed = table.remove("L1-A1")

        assert removed.plate_number == "KA01AB1234"
        assert not table.is_occupied("L1-A1")
        table.insert("L1-A5", "KA01AB1234", T0)  # plate may park again

    def test_remove_free_slot(self):
        with pytest.raises(NotOccupied):
            make_table().remove("L1-A1")


class TestFind:
    def test_find_normalises_plate(self):
        table = make_table()
        table.insert("L2-B3", "KA01AB1234", T0)
        assert table.find(" ka01ab1234 ").slot_id == SlotId("L2", "B", 3)

    def test_find_unknown(self):
        with pytest.raises(NotFound):
            make_table().find("KA01AB1234")


class TestSnapshots:
    def test_occupants_per_level(self):
        table = make_table()
        table.insert("L1-A1", "P1", T0)
        table.insert("L2-A1", "P2", T0)
        table.insert("L1-B2", "P3", T0)

        assert table.occupants("L1") == {SlotId("L1", "A", 1), SlotId("L1", "B", 2)}
        assert table.occupants("L2") == {SlotId("L2", "A", 1)}

    def test_occupants_unknown_level(self):
        with pytest.raises(InvalidSlotId):
            make_table().occupants("L5")

    def test_records_in_canonical_order(self):
        table = make_table()
        for slot, plate in [("L2-A1", "P1"), ("L1-B2", "P2"), ("L1-A10", "P3"), ("L1-A2", "P4")]:
            table.insert(slot, plate, T0)

        assert [str(r.slot_id) for r in table.records()] == ["L1-A2", "L1-A10", "L1-B2", "L2-A1"]
        assert [str(r.slot_id) for r in table.records("L2")] == ["L2-A1"]

    def test_clear(self):
        table = make_table()
        table.insert("L1-A1", "P1", T0)
        table.clear()
        assert len(table) == 0
        with pytest.raises(NotFound):
            table.find("P1")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
