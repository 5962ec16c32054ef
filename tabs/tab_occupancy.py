"""Tab 3: Occupancy. Read-only snapshot per level."""

import streamlit as st
import pandas as pd

from data.session_store import get_service, get_event_log
from data.loader import occupancy_to_df
from components.charts import level_utilization_bar, facility_occupancy_donut
from components.tables import render_occupant_table, render_utilization_table
from config.defaults import LEVEL_SATURATION_THRESHOLD, LEVEL_SURPLUS_THRESHOLD


def render(sidebar_state):
    """Render the Occupancy tab."""
    st.header("Occupancy")
    service = get_service()
    utilization = service.level_utilization()

    col1, col2 = st.columns([3, 2])
    with col1:
        st.plotly_chart(level_utilization_bar(utilization), use_container_width=True)
    with col2:
        st.plotly_chart(facility_occupancy_donut(utilization), use_container_width=True)

    saturated = [u["level"] for u in utilization if u["utilization_pct"] >= LEVEL_SATURATION_THRESHOLD]
    if saturated:
        st.warning(f"Saturated levels (≥{LEVEL_SATURATION_THRESHOLD:.0%}): {', '.join(saturated)}")
    surplus = [u["level"] for u in utilization if u["utilization_pct"] < LEVEL_SURPLUS_THRESHOLD]
    if surplus:
        st.caption(f"Levels with spare capacity: {', '.join(surplus)}")

    render_utilization_table(pd.DataFrame([{
        "Level": u["level"],
        "Total": u["total_slots"],
        "Occupied": u["occupied_slots"],
        "Available": u["available_slots"],
        "Utilization": f"{u['utilization_pct']:.0%}",
    } for u in utilization]))

    st.divider()

    level = sidebar_state.level
    records = service.occupancy(level)
    if records:
        df = occupancy_to_df(records)
        df["Parked For"] = [service.elapsed_text(r) for r in records]
        render_occupant_table(df, title=f"Occupied slots on {level}")
    else:
        st.info(f"No vehicles parked on {level}.")

    events = get_event_log()
    if events:
        st.divider()
        st.subheader("Session events")
        for e in reversed(events[-20:]):
            st.text(e)
