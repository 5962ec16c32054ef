"""Tests for the facility service lifecycle and queries."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest

from models.layout import FacilityLayout
from models.occupancy import OccupancyRecord
from models.slot import SlotId
from engine.errors import AlreadyOccupied, LayoutError, NotFound
from engine.facility_service import FacilityService, build_service

T0 = datetime(2025, 4, 28, 9, 15, tzinfo=timezone.utc)


def make_layout(levels=2):
    return FacilityLayout(levels=levels, rows_per_level=4, columns=12, sections=2)


def make_service(state_file=None, levels=2):
    return FacilityService(make_layout(levels), state_file=state_file)


class TestLifecycle:
    def test_start_without_state_file(self):
        service = make_service().start()
        assert service.started
        assert len(service.table) == 0

    def test_missing_state_file_starts_empty(self, tmp_path):
        service = make_service(str(tmp_path / "occupancy.csv")).start()
        assert len(service.table) == 0

    def test_flush_and_restore(self, tmp_path):
        path = str(tmp_path / "occupancy.csv")
        with make_service(path) as service:
            service.vehicle_entry("KA01AB1234", now=T0)
            service.vehicle_entry("MH12XY0001", preferred_level="L2", now=T0)

        assert os.path.exists(path)

        restored = make_service(path).start()
        first = restored.vehicle("KA01AB1234")
        assert str(first.slot_id) == "L1-A1"
        assert first.since == T0
        assert str(restored.vehicle("MH12XY0001").slot_id) == "L2-A1"

    def test_invalid_state_file_aborts_start(self, tmp_path):
        path = tmp_path / "occupancy.csv"
        pd.DataFrame([
            {"Slot ID": "L1-A1", "Plate Number": "P1", "Since": T0.isoformat()},
            {"Slot ID": "L1-A1", "Plate Number": "P2", "Since": T0.isoformat()},
        ]).to_csv(path, index=False)

        with pytest.raises(ValueError):
            make_service(str(path)).start()

    def test_build_service_from_settings(self):
        service = build_service({
            "levels": 3, "rows_per_level": 4, "columns": 12, "sections": 2, "state_file": None,
        })
        assert service.layout.levels == 3
        assert service.state_file is None

    def test_build_service_rejects_bad_layout(self):
        with pytest.raises(LayoutError):
            build_service({"levels": 1, "rows_per_level": 4, "columns": 12, "sections": 0})


class TestRestore:
    def test_load_occupancy_replaces_table(self):
        service = make_service().start()
        service.vehicle_entry("OLD1", now=T0)
        df = pd.DataFrame([
            {"Slot ID": "L2-B3", "Plate Number": "new 1", "Since": T0.isoformat()},
        ])

        assert service.load_occupancy(df) == 1
        assert str(service.vehicle("NEW1").slot_id) == "L2-B3"
        with pytest.raises(NotFound):
            service.vehicle("OLD1")

    def test_invalid_upload_keeps_table(self):
        service = make_service().start()
        service.vehicle_entry("OLD1", now=T0)
        df = pd.DataFrame([
            {"Slot ID": "L1-A1", "Plate Number": "P1", "Since": T0.isoformat()},
            {"Slot ID": " L1-A1", "Plate Number": "P2", "Since": T0.isoformat()},
        ])

        with pytest.raises(ValueError):
            service.load_occupancy(df)
        assert str(service.vehicle("OLD1").slot_id) == "L1-A1"
        assert len(service.table) == 1

    def test_conflicting_records_leave_table_untouched(self):
        service = make_service().start()
        service.vehicle_entry("OLD1", now=T0)
        records = [
            OccupancyRecord(SlotId("L1", "A", 5), "P1", T0),
            OccupancyRecord(SlotId("L1", "A", 5), "P2", T0),
        ]

        with pytest.raises(AlreadyOccupied):
            service.restore(records)
        assert len(service.table) == 1
        assert service.is_occupied("L1-A1")
        assert not service.is_occupied("L1-A5")


class TestVehicleEvents:
    def test_entry_then_exit(self):
        service = make_service().start()
        result = service.vehicle_entry("KA01AB1234", now=T0)
        released = service.vehicle_exit("KA01AB1234", now=T0 + timedelta(minutes=30))

        assert str(result.slot) == "L1-A1"
        assert released.duration_text == "30m"
        assert not service.is_occupied("L1-A1")

    def test_force_release(self):
        service = make_service().start()
        service.vehicle_entry("KA01AB1234", now=T0)
        service.force_release("L1-A1", now=T0 + timedelta(hours=1))

        with pytest.raises(NotFound):
            service.vehicle("KA01AB1234")


class TestQueries:
    def test_occupancy_snapshot(self):
        service = make_service().start()
        service.vehicle_entry("P1", now=T0)
        service.vehicle_entry("P2", preferred_level="L2", now=T0)

        assert [str(r.slot_id) for r in service.occupancy("L1")] == ["L1-A1"]
        assert len(service.occupancy()) == 2

    def test_level_utilization(self):
        service = make_service().start()
        service.vehicle_entry("P1", now=T0)
        util = {u["level"]: u for u in service.level_utilization()}

        assert util["L1"]["occupied_slots"] == 1
        assert util["L1"]["available_slots"] == 47
        assert util["L2"]["utilization_pct"] == 0

    def test_elapsed_text(self):
        service = make_service().start()
        service.vehicle_entry("P1", now=T0)
        record = service.vehicle("P1")
        assert service.elapsed_text(record, now=T0 + timedelta(hours=1, minutes=30)) == "01:30:00"

    def test_suggest_and_directions(self):
        service = make_service().start()
        slot = service.suggest()
        to_slot, to_exit = service.directions(slot)

        assert str(slot) == "L1-A1"
        assert to_slot[-1] == "Find your car in slot L1-A1 on your left."
        assert len(to_exit) == 4


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
