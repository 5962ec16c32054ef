"""Schema validation for occupancy files."""

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from models.layout import FacilityLayout
from engine.errors import InvalidSlotId
from engine.layout import parse_slot_id
from data.loader import OCCUPANCY_COLUMNS, SLOT_COLUMN, PLATE_COLUMN, SINCE_COLUMN


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    return result


def validate_occupancy(df: pd.DataFrame, layout: FacilityLayout) -> ValidationResult:
    result = _check_required_columns(df, OCCUPANCY_COLUMNS, "Occupancy")
    if not result.is_valid:
        return result

    if df.empty:
        result.warnings.append("Occupancy: File contains no rows. The facility will start empty.")
        return result

    # Slot ids must decode against the configured layout
    bad_slots = []
    parsed = []
    for value in df[SLOT_COLUMN]:
        try:
            parsed.append(str(parse_slot_id(layout, str(value))))
        except InvalidSlotId:
            bad_slots.append(str(value))
            parsed.append(None)
    if bad_slots:
        result.is_valid = False
        result.errors.append(f"Occupancy: Invalid slot ids for this layout: {bad_slots}")

    plates = df[PLATE_COLUMN].fillna("").astype(str).str.replace(r"\s+", "", regex=True).str.upper()
    if (plates == "").any():
        result.is_valid = False
        result.errors.append("Occupancy: Plate Number cannot be empty.")

    # Compared on the decoded id so " L1-A1" and "L1-A1" collide
    slots = pd.Series(parsed, index=df.index)
    slot_dupes = slots.duplicated(keep=False) & slots.notna()
    if slot_dupes.any():
        result.is_valid = False
        result.errors.append(
            f"Occupancy: Duplicate slot entries: {slots[slot_dupes].unique().tolist()}"
        )

    plate_dupes = plates.duplicated(keep=False) & (plates != "")
    if plate_dupes.any():
        result.is_valid = False
        result.errors.append(
            f"Occupancy: Plates holding more than one slot: {plates[plate_dupes].unique().tolist()}"
        )

    since = pd.to_datetime(df[SINCE_COLUMN], errors="coerce", utc=True)
    if since.isna().any():
        result.is_valid = False
        result.errors.append("Occupancy: Since must be a valid timestamp on every row.")

    return result
