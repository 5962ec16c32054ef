from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from models.slot import SlotId


@dataclass(frozen=True)
class AllocationResult:
    slot: SlotId
    directions_to_slot: Tuple[str, ...]
    directions_to_exit: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "directions_to_slot", tuple(self.directions_to_slot))
        object.__setattr__(self, "directions_to_exit", tuple(self.directions_to_exit))


@dataclass(frozen=True)
class ReleaseResult:
    """A completed parking session, returned when a slot is freed."""
    plate_number: str
    slot: SlotId
    since: datetime
    released_at: datetime
    duration_text: str  # e.g. "1h 45m" or "30m"
