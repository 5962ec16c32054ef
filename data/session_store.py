"""Typed wrapper around st.session_state for the operator console.

The FacilityService itself is process-wide (``st.cache_resource``) so every
browser session talks to the same occupancy authority; only UI state such as
the last result lives in the per-session state.
"""

import atexit
import streamlit as st
from typing import List, Optional

from config.defaults import get_settings
from config.logging_setup import configure_logging
from engine.facility_service import FacilityService, build_service
from models.allocation import AllocationResult, ReleaseResult


@st.cache_resource
def _shared_service() -> FacilityService:
    settings = get_settings()
    configure_logging(settings["log_level"])
    service = build_service(settings).start()
    atexit.register(service.stop)
    return service


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "last_allocation": None,
        "last_release": None,
        "event_log": [],
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_service() -> FacilityService:
    return _shared_service()


def get_last_allocation() -> Optional[AllocationResult]:
    return st.session_state.get("last_allocation")


def get_last_release() -> Optional[ReleaseResult]:
    return st.session_state.get("last_release")


def get_event_log() -> List[str]:
    return st.session_state.get("event_log", [])


# --- Setters ---

def set_last_allocation(result: AllocationResult, plate_number: str):
    st.session_state["last_allocation"] = result
    add_event(f"ENTRY {plate_number} -> {result.slot}")


def set_last_release(result: ReleaseResult):
    st.session_state["last_release"] = result
    add_event(f"EXIT {result.plate_number} <- {result.slot} ({result.duration_text})")


def add_event(message: str):
    st.session_state["event_log"].append(message)
