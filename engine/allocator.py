"""Slot allocation and release: the core business engine."""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional, Union

from models.allocation import AllocationResult, ReleaseResult
from models.occupancy import as_utc, normalize_plate
from models.slot import SlotId
from engine.directions import directions_for
from engine.errors import AlreadyOccupied, NoSlotsAvailable
from engine.layout import all_slots, canonical_levels
from engine.occupancy_table import OccupancyTable

logger = logging.getLogger(__name__)


def format_duration(elapsed: timedelta) -> str:
    """Whole hours and minutes, seconds truncated: '1h 45m', or '30m' under an hour."""
    total_minutes = max(0, int(elapsed.total_seconds() // 60))
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_elapsed(elapsed: timedelta) -> str:
    """Running timer form, 'HH:MM:SS'."""
    total_seconds = max(0, int(elapsed.total_seconds()))
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _candidates(
    table: OccupancyTable,
    level_preference: Optional[str],
    exclude_levels: Iterable[str],
):
    """Free slots in scan order. Occupancy is snapshotted once per level."""
    for level in canonical_levels(table.layout, level_preference, exclude_levels):
        taken = table.occupants(level)
        for slot_id in all_slots(table.layout, level):
            if slot_id not in taken:
                yield slot_id


def suggest(
    table: OccupancyTable,
    level_preference: Optional[str] = None,
    exclude_levels: Iterable[str] = (),
) -> SlotId:
    """The slot ``allocate`` would try first. Nothing is reserved."""
    for slot_id in _candidates(table, level_preference, exclude_levels):
        return slot_id
    raise NoSlotsAvailable()


def allocate(
    table: OccupancyTable,
    plate_number: str,
    now: datetime,
    level_preference: Optional[str] = None,
    exclude_levels: Iterable[str] = (),
) -> AllocationResult:
    """Reserve the first free slot in canonical order and return directions to it.

    A slot lost to a concurrent allocation is skipped and the scan resumes at
    the next slot. Each slot is tried at most once, so the loop is bounded by
    the facility capacity.
    """
    plate = normalize_plate(plate_number)
    exclude_levels = tuple(exclude_levels)

    for slot_id in _candidates(table, level_preference, exclude_levels):
        try:
            table.insert(slot_id, plate, now)
        except AlreadyOccupied:
            logger.debug("Lost race for %s, resuming scan", slot_id)
            continue

        to_slot, to_exit = directions_for(table.layout, slot_id)
        logger.info("Allocated %s to %s", slot_id, plate)
        return AllocationResult(
            slot=slot_id,
            directions_to_slot=to_slot,
            directions_to_exit=to_exit,
        )

    logger.warning("No slots available for %s (preferred=%s, excluded=%s)",
                   plate, level_preference, list(exclude_levels))
    raise NoSlotsAvailable()


def release(table: OccupancyTable, plate_number: str, now: datetime) -> ReleaseResult:
    """Free the slot held by a plate and report how long it was parked."""
    with table.locked():
        record = table.find(plate_number)
        table.remove(record.slot_id)
    return _release_result(record, now)


def release_slot(table: OccupancyTable, slot_id: Union[SlotId, str], now: datetime) -> ReleaseResult:
    """Administrative override: free a slot regardless of which plate holds it."""
    record = table.remove(slot_id)
    logger.warning("Slot %s force-released (held by %s)", record.slot_id, record.plate_number)
    return _release_result(record, now)


def _release_result(record, now: datetime) -> ReleaseResult:
    now = as_utc(now)
    duration_text = format_duration(now - record.since)
    logger.info("Released %s from %s after %s", record.plate_number, record.slot_id, duration_text)
    return ReleaseResult(
        plate_number=record.plate_number,
        slot=record.slot_id,
        since=record.since,
        released_at=now,
        duration_text=duration_text,
    )
