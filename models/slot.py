from dataclasses import dataclass

OUTBOUND = "outbound"
INBOUND = "inbound"


@dataclass(frozen=True)
class SlotId:
    level: str      # e.g. "L1"
    section: str    # single letter, e.g. "A"
    number: int     # 1-based within the section

    def __post_init__(self):
        if not self.level:
            raise ValueError("Slot level cannot be empty.")
        if len(self.section) != 1 or not self.section.isalpha() or not self.section.isupper():
            raise ValueError(f"Slot section must be one upper-case letter, got {self.section!r}.")
        if isinstance(self.number, bool) or not isinstance(self.number, int) or self.number < 1:
            raise ValueError(f"Slot number must be a positive integer, got {self.number!r}.")

    def __str__(self) -> str:
        return f"{self.level}-{self.section}{self.number}"


@dataclass(frozen=True)
class Coordinates:
    level: str
    row: int        # 0-based row on the level
    column: int     # 0-based position within the row
    direction: str  # "outbound" (even rows) or "inbound" (odd rows)
