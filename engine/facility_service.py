"""Facility Service: the single authority over occupancy for one process.

Owns the OccupancyTable lifetime: ``start()`` loads persisted occupants and
``stop()`` flushes them back. Every entry/exit request goes through here.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple, Union

import pandas as pd

from models.allocation import AllocationResult, ReleaseResult
from models.layout import FacilityLayout
from models.occupancy import OccupancyRecord, as_utc
from models.slot import SlotId
from engine import allocator
from engine.directions import directions_for
from engine.layout import to_slot_id
from engine.occupancy_table import OccupancyTable
from data.loader import load_occupancy_path, parse_occupancy, save_occupancy_csv
from data.validator import validate_occupancy
from config.defaults import build_layout, get_settings

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FacilityService:
    def __init__(self, layout: FacilityLayout, state_file: Optional[str] = None):
        self.layout = layout
        self.state_file = state_file
        self.table = OccupancyTable(layout)
        self.started = False

    # --- Lifecycle ---

    def start(self) -> "FacilityService":
        """Load persisted occupants. Invalid files abort startup."""
        if self.state_file:
            self.load_occupancy(load_occupancy_path(self.state_file))
        self.started = True
        logger.info("Facility started: %d levels, %d slots, %d occupied",
                    self.layout.levels, self.layout.capacity, len(self.table))
        return self

    def flush(self):
        """Write occupants to the state file, if one is configured."""
        if self.state_file:
            save_occupancy_csv(self.table.records(), self.state_file)

    def stop(self):
        self.flush()
        self.started = False
        logger.info("Facility stopped with %d occupied slots", len(self.table))

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False

    def load_occupancy(self, df: pd.DataFrame) -> int:
        """Validate an occupancy DataFrame and replace the table with it.

        Raises ValueError listing every problem when the data is invalid.
        """
        result = validate_occupancy(df, self.layout)
        for w in result.warnings:
            logger.warning(w)
        if not result.is_valid:
            raise ValueError("; ".join(result.errors))
        return self.restore(parse_occupancy(df, self.layout))

    def restore(self, records: Iterable[OccupancyRecord]) -> int:
        """Replace the table contents with the given records.

        The records are checked in a staging table first, so a conflict leaves
        the live table untouched.
        """
        staged = OccupancyTable(self.layout)
        for r in records:
            staged.insert(r.slot_id, r.plate_number, r.since)
        records = staged.records()

        with self.table.locked():
            self.table.clear()
            for r in records:
                self.table.insert(r.slot_id, r.plate_number, r.since)
        count = len(records)
        logger.info("Restored %d occupancy records", count)
        return count

    # --- Vehicle events ---

    def vehicle_entry(
        self,
        plate_number: str,
        preferred_level: Optional[str] = None,
        exclude_levels: Iterable[str] = (),
        now: Optional[datetime] = None,
    ) -> AllocationResult:
        return allocator.allocate(
            self.table,
            plate_number,
            now or utc_now(),
            level_preference=preferred_level,
            exclude_levels=exclude_levels,
        )

    def vehicle_exit(self, plate_number: str, now: Optional[datetime] = None) -> ReleaseResult:
        return allocator.release(self.table, plate_number, now or utc_now())

    def force_release(self, slot_id: Union[SlotId, str], now: Optional[datetime] = None) -> ReleaseResult:
        return allocator.release_slot(self.table, slot_id, now or utc_now())

    # --- Queries ---

    def suggest(self, preferred_level: Optional[str] = None, exclude_levels: Iterable[str] = ()) -> SlotId:
        return allocator.suggest(self.table, preferred_level, exclude_levels)

    def directions(self, slot_id: Union[SlotId, str]) -> Tuple[List[str], List[str]]:
        return directions_for(self.layout, slot_id)

    def vehicle(self, plate_number: str) -> OccupancyRecord:
        return self.table.find(plate_number)

    def elapsed_text(self, record: OccupancyRecord, now: Optional[datetime] = None) -> str:
        return allocator.format_elapsed(as_utc(now or utc_now()) - record.since)

    def occupancy(self, level: Optional[str] = None) -> List[OccupancyRecord]:
        return self.table.records(level)

    def is_occupied(self, slot_id: Union[SlotId, str]) -> bool:
        return self.table.is_occupied(to_slot_id(self.layout, slot_id))

    def level_utilization(self) -> List[dict]:
        """Occupied/free counts per level."""
        results = []
        for level in self.layout.level_names:
            used = len(self.table.occupants(level))
            total = self.layout.slots_per_level
            results.append({
                "level": level,
                "total_slots": total,
                "occupied_slots": used,
                "available_slots": total - used,
                "utilization_pct": used / total if total > 0 else 0,
            })
        return results


def build_service(settings: dict = None) -> FacilityService:
    """Construct a service from configuration. Raises LayoutError for a bad layout."""
    cfg = settings or get_settings()
    return FacilityService(build_layout(cfg), state_file=cfg.get("state_file"))

