"""
sections/crime_map.py
---------------------
'Crime Map' section — borough choropleth for the selected month, the
timeline slider, the monthly total and the severity legend.
"""

import streamlit as st

from utils.charts import map_figure, severity_legend_figure
from utils.constants import (
    CHART_CONFIG,
    MAP_ID,
    TIMELINE_DATE_ID,
    TIMELINE_SLIDER_ID,
    TOTAL_OFFENCES_ID,
)
from utils.controller import DashboardController


def render(controller: DashboardController, geojson: dict | None):
    surface = controller.surface

    st.title("London Crime by Borough")
    st.markdown("""
    Recorded criminal offences in each London borough, month by month.
    Darker red means more offences. The colour scale is fixed across the
    whole timeline, so months can be compared directly. Click a borough
    to see which offences make up its total.
    """)

    # ── Timeline ──────────────────────────────────────────────────
    st.subheader(surface.text(TIMELINE_DATE_ID))
    if surface.slider_max > 0:
        if TIMELINE_SLIDER_ID not in st.session_state:
            st.session_state[TIMELINE_SLIDER_ID] = surface.slider_value
        st.slider(
            "Timeline",
            min_value=0,
            max_value=surface.slider_max,
            key=TIMELINE_SLIDER_ID,
            on_change=_on_timeline_change,
            args=(controller,),
            label_visibility="collapsed",
        )
    st.markdown(surface.text(TOTAL_OFFENCES_ID))

    # ── Map + legend ──────────────────────────────────────────────
    map_col, legend_col = st.columns([5, 1])
    with map_col:
        st.plotly_chart(
            map_figure(surface, geojson),
            use_container_width=True,
            config=CHART_CONFIG,
            key=MAP_ID,
            on_select=lambda: _on_map_select(controller),
            selection_mode=("points",),
        )
    with legend_col:
        if surface.severity_legend is not None:
            st.caption("Criminal offences")
            st.plotly_chart(
                severity_legend_figure(surface.severity_legend),
                config=CHART_CONFIG,
            )


# ── Event callbacks ───────────────────────────────────────────────

def _on_timeline_change(controller: DashboardController):
    controller.on_timeline_input(int(st.session_state[TIMELINE_SLIDER_ID]))


def _on_map_select(controller: DashboardController):
    region_id = _clicked_region(st.session_state.get(MAP_ID))
    if region_id is not None:
        controller.on_borough_click(region_id)


def _clicked_region(event) -> str | None:
    if not event:
        return None
    points = event.get("selection", {}).get("points", [])
    if not points:
        return None

    point = points[0]
    location = point.get("location")
    if location:
        return location
    customdata = point.get("customdata")
    if isinstance(customdata, (list, tuple)):
        return customdata[0] if customdata else None
    return customdata
