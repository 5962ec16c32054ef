"""Tab 2: Vehicle Exit. Release a slot and report the parking duration."""

import streamlit as st

from data.session_store import get_service, get_last_release, set_last_release
from engine.errors import ParkingError
from components.metrics_cards import render_metric_row


def render(sidebar_state):
    """Render the Vehicle Exit tab."""
    st.header("Vehicle Exit")
    service = get_service()

    with st.form("exit_form", clear_on_submit=True):
        plate = st.text_input("Plate number", placeholder="KA01AB1234")
        submitted = st.form_submit_button("Release slot")

    if submitted:
        try:
            set_last_release(service.vehicle_exit(plate))
        except (ParkingError, ValueError) as exc:
            st.error(str(exc))

    result = get_last_release()
    if result is not None:
        st.divider()
        render_metric_row([
            {"label": "Plate", "value": result.plate_number},
            {"label": "Slot", "value": str(result.slot)},
            {"label": "Entry", "value": result.since.strftime("%H:%M")},
            {"label": "Exit", "value": result.released_at.strftime("%H:%M")},
            {"label": "Duration", "value": result.duration_text},
        ])

    st.divider()
    st.subheader("Administrative release")
    with st.form("force_release_form", clear_on_submit=True):
        slot_id = st.text_input("Slot id", placeholder="L1-A1")
        forced = st.form_submit_button("Force release")

    if forced:
        try:
            released = service.force_release(slot_id)
        except ParkingError as exc:
            st.error(str(exc))
        else:
            set_last_release(released)
            st.warning(f"{released.slot} released (was held by {released.plate_number})")
