"""Generates turn-by-turn navigation text from a slot's position in the layout."""

from typing import List, Tuple, Union

from models.layout import FacilityLayout
from models.slot import SlotId, Coordinates
from engine.layout import coordinates, to_slot_id

LEFT = "left"
RIGHT = "right"

EXIT_BARRIER_STEP = "Scan your QR code at the exit barrier to leave."


def ordinal(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def side_and_pillar(layout: FacilityLayout, coords: Coordinates) -> Tuple[str, int]:
    """Which half of the row the slot sits in, and the pillar numbered from 1 on that side."""
    if coords.column < layout.half_columns:
        return LEFT, coords.column + 1
    return RIGHT, coords.column + 1 - layout.half_columns


def opposite(side: str) -> str:
    return RIGHT if side == LEFT else LEFT


def to_slot(layout: FacilityLayout, slot_id: Union[SlotId, str]) -> List[str]:
    """Steps from the main entrance to the slot."""
    slot_id = to_slot_id(layout, slot_id)
    coords = coordinates(layout, slot_id)
    side, pillar = side_and_pillar(layout, coords)

    return [
        f"Enter the parking garage at the main entrance on {coords.level}.",
        "Proceed straight along the main driving lane.",
        f"Turn {side} into the {ordinal(coords.row + 1)} row after pillar number {pillar}.",
        f"Find your car in slot {slot_id} on your {side}.",
    ]


def to_exit(layout: FacilityLayout, slot_id: Union[SlotId, str]) -> List[str]:
    """Steps from the slot back out through the level's exit."""
    slot_id = to_slot_id(layout, slot_id)
    coords = coordinates(layout, slot_id)
    side, _ = side_and_pillar(layout, coords)

    return [
        f"Exit slot {slot_id} and turn {opposite(side)} to rejoin the main driving lane.",
        "Proceed straight along the main driving lane.",
        f"Follow the exit signs to the exit on {coords.level}.",
        EXIT_BARRIER_STEP,
    ]


def directions_for(layout: FacilityLayout, slot_id: Union[SlotId, str]) -> Tuple[List[str], List[str]]:
    return to_slot(layout, slot_id), to_exit(layout, slot_id)
