"""Reusable KPI metric card widgets."""

import streamlit as st

ALERT_STYLES = {
    "error": (st.error, "🔴"),
    "warning": (st.warning, "🟡"),
    "info": (st.info, "🔵"),
}


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally help.
    """
    for col, m in zip(st.columns(len(metrics)), metrics):
        col.metric(label=m["label"], value=m["value"], help=m.get("help"))


def render_alert_card(message: str, level: str = "warning"):
    show, icon = ALERT_STYLES.get(level, ALERT_STYLES["info"])
    show(message, icon=icon)


def render_steps(title: str, steps):
    """Numbered navigation steps."""
    st.markdown(f"**{title}**")
    st.markdown("\n".join(f"{i}. {step}" for i, step in enumerate(steps, start=1)))
