"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import Optional

from config.defaults import LEVEL_SATURATION_THRESHOLD, LEVEL_SURPLUS_THRESHOLD


def render_occupant_table(df: pd.DataFrame, title: Optional[str] = None):
    """Read-only occupant listing without the positional index."""
    if title:
        st.subheader(title)
    st.dataframe(df, hide_index=True, use_container_width=True)


def render_utilization_table(df: pd.DataFrame, pct_column: str = "Utilization"):
    """Per-level utilization, saturated levels in red and busy levels in amber."""
    def color_pct(val):
        try:
            v = float(str(val).rstrip("%")) / 100
        except (ValueError, TypeError):
            return ""
        if v >= LEVEL_SATURATION_THRESHOLD:
            return "background-color: #ffcccc; color: #cc0000; font-weight: bold"
        elif v >= LEVEL_SURPLUS_THRESHOLD:
            return "background-color: #fff3cd; color: #856404"
        return "background-color: #d4edda; color: #155724"

    styled = df.style.map(color_pct, subset=[pct_column]) if pct_column in df.columns else df
    st.dataframe(styled, hide_index=True, use_container_width=True)
