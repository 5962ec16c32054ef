from dataclasses import dataclass
from datetime import datetime, timezone

from models.slot import SlotId


def normalize_plate(plate_number: str) -> str:
    """Canonical plate form: trimmed, upper-case, no inner spaces."""
    plate = "".join(str(plate_number).split()).upper()
    if not plate:
        raise ValueError("Plate number cannot be empty.")
    return plate


def as_utc(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC so durations never mix naive and aware values."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class OccupancyRecord:
    slot_id: SlotId
    plate_number: str
    since: datetime

    def __post_init__(self):
        object.__setattr__(self, "plate_number", normalize_plate(self.plate_number))
        object.__setattr__(self, "since", as_utc(self.since))
