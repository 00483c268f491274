import streamlit as st

import sections.borough_detail as borough_detail
import sections.crime_map as crime_map
from utils.constants import CRIME_DATA_PATH, GEOJSON_PATH, LOG_DIR
from utils.controller import DashboardController
from utils.data_loaders import (
    load_borough_geometry,
    load_crime_data,
    regions_from_dataset,
    regions_from_geojson,
)
from utils.exceptions import DatasetLoadError
from utils.logger_config import setup_logger

st.set_page_config(
    page_title="London Crime Map",
    page_icon="🗺️",
    layout="wide"
)

logger = setup_logger("app", log_dir=LOG_DIR)

# ── Data loading ──────────────────────────────────────────────────

@st.cache_data
def load_crime_dataset():
    try:
        return load_crime_data(CRIME_DATA_PATH)
    except DatasetLoadError as e:
        logger.error(str(e))
        st.error(
            f"{e}. "
            "Run processing/01_prepare_data.py to check the dataset."
        )
        st.stop()


@st.cache_data
def load_geometry():
    try:
        return load_borough_geometry(GEOJSON_PATH)
    except DatasetLoadError as e:
        logger.error(str(e))
        st.error(str(e))
        st.stop()


def get_controller(dataset, geojson) -> DashboardController:
    # One controller per browser session, holding that session's selection
    if "controller" not in st.session_state:
        regions = (
            regions_from_geojson(geojson) if geojson is not None
            else regions_from_dataset(dataset)
        )
        st.session_state["controller"] = DashboardController(dataset, regions)
        logger.info("New dashboard session started")
    return st.session_state["controller"]


# ── Page ──────────────────────────────────────────────────────────

dataset    = load_crime_dataset()
geojson    = load_geometry()
controller = get_controller(dataset, geojson)

map_col, detail_col = st.columns([3, 2])
with map_col:
    crime_map.render(controller, geojson)
with detail_col:
    borough_detail.render(controller)

st.caption("""
Source: Metropolitan Police Service recorded crime by borough |
Borough boundaries: london_boroughs.geojson (housequest-data)
""")
