"""
sections/borough_detail.py
--------------------------
'Borough Detail' section — offence count for the selected borough,
the offence-group pie chart with its highlighted-group label, and the
offence-group legend.

Streamlit has no hover events, so selecting a pie sector stands in for
hovering it and clearing the selection stands in for leaving it.
Plotly's own hover tooltip still shows each sector's count.
"""

import streamlit as st

from utils.charts import category_legend_html, pie_figure
from utils.constants import (
    BOROUGH_OFFENCE_COUNT_ID,
    BOROUGH_OFFENCE_GROUP_ID,
    CHART_CONFIG,
    PIE_CHART_ID,
)
from utils.controller import DashboardController


def render(controller: DashboardController):
    surface = controller.surface

    st.subheader("Borough detail")

    count_text = surface.text(BOROUGH_OFFENCE_COUNT_ID)
    if not count_text:
        st.info("Click a borough on the map to see its offences by group.")
        return

    st.markdown(f"**{count_text}**")

    st.plotly_chart(
        pie_figure(surface),
        config=CHART_CONFIG,
        key=PIE_CHART_ID,
        on_select=lambda: _on_pie_select(controller),
        selection_mode=("points",),
    )

    group_text = surface.text(BOROUGH_OFFENCE_GROUP_ID)
    if group_text:
        st.markdown(group_text)

    if surface.category_legend:
        st.divider()
        st.caption("Offence groups")
        st.markdown(category_legend_html(surface.category_legend), unsafe_allow_html=True)


# ── Event callbacks ───────────────────────────────────────────────

def _on_pie_select(controller: DashboardController):
    event = st.session_state.get(PIE_CHART_ID)
    points = event.get("selection", {}).get("points", []) if event else []

    if points:
        offence_group = points[0].get("label")
        if offence_group:
            controller.on_sector_hover(offence_group)
        return

    hovered = controller.detail_view.hovered_group
    if hovered is not None:
        controller.on_sector_unhover(hovered)
