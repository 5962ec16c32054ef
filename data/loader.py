"""Occupancy file parsing: CSV/XLSX into typed records and back."""

import logging
import os
from typing import List

import pandas as pd

from models.layout import FacilityLayout
from models.occupancy import OccupancyRecord
from engine.layout import parse_slot_id

logger = logging.getLogger(__name__)

SLOT_COLUMN = "Slot ID"
PLATE_COLUMN = "Plate Number"
SINCE_COLUMN = "Since"
OCCUPANCY_COLUMNS = [SLOT_COLUMN, PLATE_COLUMN, SINCE_COLUMN]


def parse_occupancy(df: pd.DataFrame, layout: FacilityLayout) -> List[OccupancyRecord]:
    """Convert an occupancy DataFrame into OccupancyRecord objects."""
    records = []
    for _, row in df.iterrows():
        since = pd.to_datetime(row[SINCE_COLUMN], utc=True).to_pydatetime()
        records.append(OccupancyRecord(
            slot_id=parse_slot_id(layout, str(row[SLOT_COLUMN])),
            plate_number=str(row[PLATE_COLUMN]),
            since=since,
        ))
    return records


def occupancy_to_df(records: List[OccupancyRecord]) -> pd.DataFrame:
    """Tabular form of occupancy records, in the order given."""
    rows = [{
        SLOT_COLUMN: str(r.slot_id),
        PLATE_COLUMN: r.plate_number,
        SINCE_COLUMN: r.since.isoformat(),
    } for r in records]
    return pd.DataFrame(rows, columns=OCCUPANCY_COLUMNS)


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file, dtype=str)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl", dtype=str)
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


def load_occupancy_path(path: str) -> pd.DataFrame:
    """Load persisted occupants from a local path. A missing file means an empty facility."""
    if not os.path.exists(path):
        logger.info("No occupancy file at %s, starting empty", path)
        return pd.DataFrame(columns=OCCUPANCY_COLUMNS)
    if path.lower().endswith((".xlsx", ".xls")):
        return pd.read_excel(path, engine="openpyxl", dtype=str)
    return pd.read_csv(path, dtype=str)


def save_occupancy_csv(records: List[OccupancyRecord], path: str):
    """Write occupants to CSV, replacing the file atomically."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    tmp_path = path + ".tmp"
    occupancy_to_df(records).to_csv(tmp_path, index=False)
    os.replace(tmp_path, path)
    logger.info("Flushed %d occupancy records to %s", len(records), path)
