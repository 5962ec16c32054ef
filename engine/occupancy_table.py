"""The authoritative record of which slots are taken and by whom.

All reads and writes go through one re-entrant lock, so every operation is
linearizable. ``locked()`` lets callers compose several operations into one
atomic step (e.g. find-then-remove on release).
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, List, Optional, Set, Union

from models.layout import FacilityLayout
from models.occupancy import OccupancyRecord, normalize_plate
from models.slot import SlotId
from engine.errors import AlreadyOccupied, DuplicatePlate, NotFound, NotOccupied
from engine.layout import canonical_key, to_slot_id, validate_level

logger = logging.getLogger(__name__)


class OccupancyTable:
    def __init__(self, layout: FacilityLayout):
        self.layout = layout
        self._lock = threading.RLock()
        self._by_slot: Dict[SlotId, OccupancyRecord] = {}
        self._by_plate: Dict[str, SlotId] = {}

    @contextmanager
    def locked(self):
        with self._lock:
            yield self

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_slot)

    def __contains__(self, slot_id) -> bool:
        return self.is_occupied(slot_id)

    def is_occupied(self, slot_id: Union[SlotId, str]) -> bool:
        slot_id = to_slot_id(self.layout, slot_id)
        with self._lock:
            return slot_id in self._by_slot

    def occupants(self, level: str) -> Set[SlotId]:
        """Snapshot of occupied slots on one level."""
        validate_level(self.layout, level)
        with self._lock:
            return {s for s in self._by_slot if s.level == level}

    def get(self, slot_id: Union[SlotId, str]) -> Optional[OccupancyRecord]:
        slot_id = to_slot_id(self.layout, slot_id)
        with self._lock:
            return self._by_slot.get(slot_id)

    def insert(self, slot_id: Union[SlotId, str], plate_number: str, since: datetime) -> OccupancyRecord:
        slot_id = to_slot_id(self.layout, slot_id)
        record = OccupancyRecord(slot_id=slot_id, plate_number=plate_number, since=since)
        with self._lock:
            if slot_id in self._by_slot:
                raise AlreadyOccupied(slot_id)
            held = self._by_plate.get(record.plate_number)
            if held is not None:
                raise DuplicatePlate(record.plate_number, held)
            self._by_slot[slot_id] = record
            self._by_plate[record.plate_number] = slot_id
        return record

    def remove(self, slot_id: Union[SlotId, str]) -> OccupancyRecord:
        slot_id = to_slot_id(self.layout, slot_id)
        with self._lock:
            record = self._by_slot.pop(slot_id, None)
            if record is None:
                raise NotOccupied(slot_id)
            del self._by_plate[record.plate_number]
        return record

    def find(self, plate_number: str) -> OccupancyRecord:
        """The live record for a plate, or ``NotFound``."""
        plate = normalize_plate(plate_number)
        with self._lock:
            slot_id = self._by_plate.get(plate)
            if slot_id is None:
                raise NotFound(plate)
            return self._by_slot[slot_id]

    def records(self, level: Optional[str] = None) -> List[OccupancyRecord]:
        """Snapshot of live records in canonical slot order, optionally for one level."""
        if level is not None:
            validate_level(self.layout, level)
        with self._lock:
            rows = [r for r in self._by_slot.values() if level is None or r.slot_id.level == level]
        return sorted(rows, key=lambda r: canonical_key(self.layout, r.slot_id))

    def clear(self):
        with self._lock:
            count = len(self._by_slot)
            self._by_slot.clear()
            self._by_plate.clear()
        logger.info("Cleared %d occupancy records", count)
