"""Tab 1: Vehicle Entry. Reserve a slot and show directions."""

import streamlit as st

from data.session_store import get_service, get_last_allocation, set_last_allocation
from engine.errors import ParkingError, NoSlotsAvailable
from models.occupancy import normalize_plate
from components.metrics_cards import render_alert_card, render_steps


def render(sidebar_state):
    """Render the Vehicle Entry tab."""
    st.header("Vehicle Entry")
    service = get_service()

    try:
        suggested = service.suggest(sidebar_state.preferred_level)
        st.info(f"Next vehicle will be sent to **{suggested}**")
    except NoSlotsAvailable:
        render_alert_card("All parking slots are occupied.", level="error")

    with st.form("entry_form", clear_on_submit=True):
        plate = st.text_input("Plate number", placeholder="KA01AB1234")
        excluded = st.multiselect("Exclude levels", options=service.layout.level_names)
        submitted = st.form_submit_button("Assign slot")

    if submitted:
        try:
            result = service.vehicle_entry(
                plate,
                preferred_level=sidebar_state.preferred_level,
                exclude_levels=excluded,
            )
        except (ParkingError, ValueError) as exc:
            st.error(str(exc))
        else:
            set_last_allocation(result, normalize_plate(plate))
            st.success(f"Slot {result.slot} assigned")

    result = get_last_allocation()
    if result is None:
        return

    st.divider()
    st.subheader(f"Slot {result.slot}")
    col1, col2 = st.columns(2)
    with col1:
        render_steps(f"From entrance to {result.slot}", result.directions_to_slot)
    with col2:
        render_steps(f"From {result.slot} to exit", result.directions_to_exit)
