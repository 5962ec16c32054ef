"""Generate a synthetic occupancy snapshot for demos and manual testing."""

import os
import random
import string
from datetime import datetime, timedelta, timezone

import pandas as pd

from models.layout import FacilityLayout
from models.occupancy import OccupancyRecord
from engine.layout import all_slots
from data.loader import occupancy_to_df

STATE_CODES = ["KA", "MH", "TN", "DL", "KL", "AP"]


def random_plate(rng: random.Random) -> str:
    """Indian-style registration, e.g. KA01AB1234."""
    return (
        rng.choice(STATE_CODES)
        + f"{rng.randint(1, 99):02d}"
        + "".join(rng.choice(string.ascii_uppercase) for _ in range(2))
        + f"{rng.randint(0, 9999):04d}"
    )


def generate_occupancy_df(
    layout: FacilityLayout,
    fill_ratio: float = 0.3,
    seed: int = 42,
    now: datetime = None,
) -> pd.DataFrame:
    """Occupy roughly ``fill_ratio`` of every level with unique plates parked up to 5 hours ago."""
    rng = random.Random(seed)
    now = now or datetime.now(timezone.utc)
    plates = set()
    records = []
    for level in layout.level_names:
        for slot_id in all_slots(layout, level):
            if rng.random() >= fill_ratio:
                continue
            plate = random_plate(rng)
            while plate in plates:
                plate = random_plate(rng)
            plates.add(plate)
            records.append(OccupancyRecord(
                slot_id=slot_id,
                plate_number=plate,
                since=now - timedelta(minutes=rng.randint(1, 300)),
            ))
    return occupancy_to_df(records)


def generate_sample_csv(output_dir: str, layout: FacilityLayout = None):
    """Write a sample occupancy CSV to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    df = generate_occupancy_df(layout or FacilityLayout())
    df.to_csv(os.path.join(output_dir, "occupancy.csv"), index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csv(out)
    print("Sample occupancy CSV generated in sample_files/")
