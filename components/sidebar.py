"""Global sidebar: layout summary and persistence controls."""

import streamlit as st
from dataclasses import dataclass
from typing import Optional

from data.loader import load_file
from data.session_store import get_service, add_event


@dataclass
class SidebarState:
    level: str
    preferred_level: Optional[str]


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    service = get_service()
    layout = service.layout

    with st.sidebar:
        st.title("ParkSense")
        st.divider()

        level = st.selectbox("Level", options=layout.level_names, key="sidebar_level")

        preferred = st.selectbox(
            "Preferred entry level",
            options=["Any"] + layout.level_names,
            key="sidebar_preferred_level",
        )

        st.divider()
        st.caption(
            f"{layout.levels} levels · {layout.rows_per_level} rows · "
            f"{layout.columns} columns · sections {', '.join(layout.section_letters)}"
        )
        st.caption(f"Occupied: {len(service.table)} / {layout.capacity}")

        if service.state_file:
            st.caption(f"State file: {service.state_file}")
            if st.button("Flush occupancy now", key="sidebar_flush"):
                service.flush()
                add_event("FLUSH occupancy")
                st.success("Occupancy flushed")
        else:
            st.warning("No state file configured, occupancy is kept in memory only")

        st.divider()
        uploaded = st.file_uploader(
            "Restore occupancy (Slot ID, Plate Number, Since)",
            type=["csv", "xlsx"],
            key="sidebar_restore_file",
        )
        if st.button("Upload & Restore", key="sidebar_restore"):
            if uploaded:
                try:
                    count = service.load_occupancy(load_file(uploaded))
                    add_event(f"RESTORE {count} occupants from {uploaded.name}")
                    st.success(f"Restored {count} occupied slots")
                except Exception as e:
                    st.error(f"Error restoring occupancy: {e}")
            else:
                st.warning("Please upload an occupancy file.")

    return SidebarState(
        level=level,
        preferred_level=None if preferred == "Any" else preferred,
    )
