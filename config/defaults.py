"""Default configuration constants for the ParkSense slot allocation service.

Each value can be overridden with the environment variable of the same name.
"""

import os

from models.layout import FacilityLayout


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from None


# Facility geometry (matches the four-level garage map: 4 rows of 12, 2 rows per section)
PARKING_LEVELS = _env_int("PARKING_LEVELS", 4)
PARKING_ROWS_PER_LEVEL = _env_int("PARKING_ROWS_PER_LEVEL", 4)
PARKING_COLUMNS = _env_int("PARKING_COLUMNS", 12)
PARKING_SECTIONS = _env_int("PARKING_SECTIONS", 2)

# Occupants are loaded from here on startup and flushed back on shutdown.
# Empty string disables persistence.
PARKING_STATE_FILE = os.environ.get("PARKING_STATE_FILE", "")

PARKING_LOG_LEVEL = os.environ.get("PARKING_LOG_LEVEL", "INFO")

# Occupancy alert thresholds for the operator console
LEVEL_SATURATION_THRESHOLD = 0.90
LEVEL_SURPLUS_THRESHOLD = 0.50


def get_settings() -> dict:
    """Effective configuration, re-read from the environment."""
    return {
        "levels": _env_int("PARKING_LEVELS", PARKING_LEVELS),
        "rows_per_level": _env_int("PARKING_ROWS_PER_LEVEL", PARKING_ROWS_PER_LEVEL),
        "columns": _env_int("PARKING_COLUMNS", PARKING_COLUMNS),
        "sections": _env_int("PARKING_SECTIONS", PARKING_SECTIONS),
        "state_file": os.environ.get("PARKING_STATE_FILE", PARKING_STATE_FILE) or None,
        "log_level": os.environ.get("PARKING_LOG_LEVEL", PARKING_LOG_LEVEL),
    }


def build_layout(settings: dict = None) -> FacilityLayout:
    """Construct the facility layout. Raises LayoutError for an invalid configuration."""
    cfg = settings or get_settings()
    return FacilityLayout(
        levels=cfg["levels"],
        rows_per_level=cfg["rows_per_level"],
        columns=cfg["columns"],
        sections=cfg["sections"],
    )
