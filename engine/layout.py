"""Slot identifier encoding, geometric coordinates, and canonical slot ordering."""

import re
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from models.layout import FacilityLayout
from models.slot import SlotId, Coordinates, OUTBOUND, INBOUND
from engine.errors import InvalidSlotId

# No leading zeros, so each slot has exactly one string form
SLOT_ID_PATTERN = re.compile(r"^(?P<level>L[1-9]\d*)-(?P<section>[A-Z])(?P<number>[1-9]\d*)$")


def row_direction(row: int) -> str:
    return OUTBOUND if row % 2 == 0 else INBOUND


def validate_level(layout: FacilityLayout, level: str) -> str:
    if level not in layout.level_names:
        raise InvalidSlotId(f"Unknown level {level!r}. Expected one of: {layout.level_names}.")
    return level


def parse_slot_id(layout: FacilityLayout, text: str) -> SlotId:
    """Decode the display form ``"<level>-<section><number>"`` into a validated SlotId."""
    match = SLOT_ID_PATTERN.match(text.strip()) if isinstance(text, str) else None
    if match is None:
        raise InvalidSlotId(f"Malformed slot id {text!r}. Expected e.g. 'L1-A1'.")
    slot_id = SlotId(match["level"], match["section"], int(match["number"]))
    return validate_slot_id(layout, slot_id)


def validate_slot_id(layout: FacilityLayout, slot_id: SlotId) -> SlotId:
    validate_level(layout, slot_id.level)
    if slot_id.section not in layout.section_letters:
        raise InvalidSlotId(
            f"Unknown section {slot_id.section!r} in {slot_id}. "
            f"Expected one of: {layout.section_letters}."
        )
    if not 1 <= slot_id.number <= layout.slots_per_section:
        raise InvalidSlotId(
            f"Slot number {slot_id.number} in {slot_id} is out of range "
            f"1..{layout.slots_per_section}."
        )
    return slot_id


def to_slot_id(layout: FacilityLayout, value: Union[SlotId, str]) -> SlotId:
    """Accept either a SlotId or its string form."""
    if isinstance(value, SlotId):
        return validate_slot_id(layout, value)
    return parse_slot_id(layout, value)


def coordinates(layout: FacilityLayout, slot_id: Union[SlotId, str]) -> Coordinates:
    """Map a slot to its level, row, in-row column and row direction."""
    slot_id = to_slot_id(layout, slot_id)
    section_index = layout.section_letters.index(slot_id.section)
    row_in_section, column = divmod(slot_id.number - 1, layout.columns)
    row = section_index * layout.rows_per_section + row_in_section
    return Coordinates(
        level=slot_id.level,
        row=row,
        column=column,
        direction=row_direction(row),
    )


def slot_id_for(layout: FacilityLayout, coords: Coordinates) -> SlotId:
    """Inverse of ``coordinates``."""
    validate_level(layout, coords.level)
    if not 0 <= coords.row < layout.rows_per_level:
        raise InvalidSlotId(f"Row {coords.row} is out of range 0..{layout.rows_per_level - 1}.")
    if not 0 <= coords.column < layout.columns:
        raise InvalidSlotId(f"Column {coords.column} is out of range 0..{layout.columns - 1}.")
    if coords.direction != row_direction(coords.row):
        raise InvalidSlotId(
            f"Row {coords.row} faces {row_direction(coords.row)}, not {coords.direction}."
        )
    section_index, row_in_section = divmod(coords.row, layout.rows_per_section)
    return SlotId(
        level=coords.level,
        section=layout.section_letters[section_index],
        number=row_in_section * layout.columns + coords.column + 1,
    )


def all_slots(layout: FacilityLayout, level: str) -> Iterator[SlotId]:
    """Every slot on a level in canonical order (section asc, number asc).

    Each call returns a fresh generator, so the sequence can be restarted.
    """
    validate_level(layout, level)
    return (
        SlotId(level, section, number)
        for section in layout.section_letters
        for number in range(1, layout.slots_per_section + 1)
    )


def canonical_levels(
    layout: FacilityLayout,
    preferred: Optional[str] = None,
    exclude: Iterable[str] = (),
) -> List[str]:
    """Level scan order: the preferred level first, then the rest ascending."""
    excluded = set(exclude)
    for level in excluded:
        validate_level(layout, level)
    order = list(layout.level_names)
    if preferred is not None:
        validate_level(layout, preferred)
        order.remove(preferred)
        order.insert(0, preferred)
    return [level for level in order if level not in excluded]


def canonical_key(layout: FacilityLayout, slot_id: SlotId) -> Tuple[int, int, int]:
    """Sort key realising canonical order (level, section, number)."""
    return (
        layout.level_names.index(slot_id.level),
        layout.section_letters.index(slot_id.section),
        slot_id.number,
    )
