"""
utils/constants.py
------------------
Shared constants used across the dashboard, the renderers and the
processing scripts. Import from here rather than defining locally.
"""

import os

# ── Paths ─────────────────────────────────────────────────────────
DATA_DIR      = "data"
CRIME_DATA_PATH = os.path.join(DATA_DIR, "london-crime-data.json")
# Source: https://github.com/radoi90/housequest-data/blob/master/london_boroughs.geojson
GEOJSON_PATH  = os.path.join(DATA_DIR, "london-boroughs.geojson")
PROCESSED_DIR = os.path.join(DATA_DIR, "processed")
LOG_DIR       = "logs"

REQUEST_TIMEOUT = 10

# ── Element ids of the rendered surface ───────────────────────────
MAP_ID                   = "map"
TIMELINE_SLIDER_ID       = "timeline-slider"
TIMELINE_DATE_ID         = "timeline-date"
TOTAL_OFFENCES_ID        = "total-offences"
BOROUGH_OFFENCE_COUNT_ID = "borough-offence-count"
BOROUGH_OFFENCE_GROUP_ID = "borough-offence-group"
PIE_CHART_ID             = "borough-crime-pie-chart"
MAP_LEGEND_ID            = "map-legend"
OFFENCE_GROUPS_LEGEND_ID = "offence-groups-legend"

TEXT_ELEMENT_IDS = (
    TIMELINE_DATE_ID,
    TOTAL_OFFENCES_ID,
    BOROUGH_OFFENCE_COUNT_ID,
    BOROUGH_OFFENCE_GROUP_ID,
)

# ── Borough names ─────────────────────────────────────────────────
# Words left in lowercase when a borough key is turned into a display name
CAPITALIZE_EXCEPTIONS = frozenset({
    "a", "an", "and", "of", "in", "on", "for", "the", "to", "with",
})

# ── Colours ───────────────────────────────────────────────────────
FALLBACK_COLOUR     = "#ffffff"
PIE_COLORMAP        = "Turbo"
SECTOR_STROKE       = "black"
SECTOR_STROKE_WIDTH = 1

# ── Pie chart geometry and transitions ────────────────────────────
PIE_WIDTH           = 200
HOVER_SIZE_INCREASE = 1.1
PIE_RADIUS          = PIE_WIDTH / (2 * HOVER_SIZE_INCREASE)

HOVER_TRANSITION   = {"duration": 100, "easing": "quad-out"}
UNHOVER_TRANSITION = {"duration": 400, "easing": "bounce-out"}

# ── Severity legend ───────────────────────────────────────────────
LEGEND_GRADIENT_STEPS = 100
LEGEND_TICK_COUNT     = 5
LEGEND_WIDTH          = 55
LEGEND_HEIGHT         = 200
LEGEND_FONT_SIZE      = 15

# ── Map figure ────────────────────────────────────────────────────
MAP_HEIGHT = 250

# ── Plotly chart config ───────────────────────────────────────────
CHART_CONFIG = {'displayModeBar': False, 'scrollZoom': False}

BASE_LAYOUT = dict(
    plot_bgcolor='rgba(0,0,0,0)',
    paper_bgcolor='rgba(0,0,0,0)',
    dragmode=False,
    margin=dict(l=0, r=0, t=0, b=0),
)
