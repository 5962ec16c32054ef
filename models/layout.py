import string
from dataclasses import dataclass
from typing import List

from engine.errors import LayoutError


@dataclass(frozen=True)
class FacilityLayout:
    """Static geometry of the facility. Validated on construction."""
    levels: int = 4
    rows_per_level: int = 4
    columns: int = 12
    sections: int = 2

    def __post_init__(self):
        for name in ("levels", "rows_per_level", "columns", "sections"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise LayoutError(f"{name} must be a positive integer, got {value!r}.")
        if self.sections > len(string.ascii_uppercase):
            raise LayoutError(f"At most {len(string.ascii_uppercase)} sections are supported.")
        if self.rows_per_level % self.sections != 0:
            raise LayoutError(
                f"{self.rows_per_level} rows cannot be split evenly into {self.sections} sections."
            )
        if self.columns % 2 != 0:
            raise LayoutError(f"columns must be even (left/right halves), got {self.columns}.")

    @property
    def rows_per_section(self) -> int:
        return self.rows_per_level // self.sections

    @property
    def slots_per_section(self) -> int:
        return self.rows_per_section * self.columns

    @property
    def slots_per_level(self) -> int:
        return self.rows_per_level * self.columns

    @property
    def capacity(self) -> int:
        return self.levels * self.slots_per_level

    @property
    def half_columns(self) -> int:
        return self.columns // 2

    @property
    def level_names(self) -> List[str]:
        return [f"L{i}" for i in range(1, self.levels + 1)]

    @property
    def section_letters(self) -> List[str]:
        return list(string.ascii_uppercase[:self.sections])
