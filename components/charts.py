"""Plotly chart builders for the operator console."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List

OCCUPIED_COLOR = "#E8734A"
FREE_COLOR = "#4A90D9"


def level_utilization_bar(utilization: List[dict]) -> go.Figure:
    """Stacked bar of occupied and free slots per level."""
    df = pd.DataFrame(utilization).rename(
        columns={"occupied_slots": "Occupied", "available_slots": "Free"}
    )
    fig = px.bar(
        df, x="level", y=["Occupied", "Free"],
        barmode="stack",
        labels={"value": "Slots", "level": "Level", "variable": ""},
        title="Occupied vs Free Slots by Level",
        color_discrete_map={"Occupied": OCCUPIED_COLOR, "Free": FREE_COLOR},
    )
    fig.update_layout(legend_title_text="", height=400)
    return fig


def facility_occupancy_donut(utilization: List[dict]) -> go.Figure:
    """Whole-facility occupancy across all levels."""
    occupied = sum(u["occupied_slots"] for u in utilization)
    total = sum(u["total_slots"] for u in utilization)
    fig = go.Figure(go.Pie(
        labels=["Occupied", "Free"],
        values=[occupied, total - occupied],
        hole=0.6,
        marker_colors=[OCCUPIED_COLOR, FREE_COLOR],
        sort=False,
    ))
    fig.update_layout(
        title="Facility Occupancy",
        height=350,
        annotations=[dict(text=f"{occupied}/{total}", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig
