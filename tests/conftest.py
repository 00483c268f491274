"""
tests/conftest.py
-----------------
Shared fixtures: a small two-month crime dataset and a matching borough
geometry.

Run with:
    pytest -v

April 2010 (stored second, so date order is checked):
    barking-and-dagenham   100   Burglary 60, Robbery 40
    southwark             4312   Burglary 312, Theft and Handling 4000
    westminster           2500   Theft and Handling 2000,
                                 Violence Against the Person 500
May 2010 (stored first):
    barking-and-dagenham    90   Burglary 90
    southwark             3000   Drugs 1000, Theft and Handling 2000
    (no westminster)

The geometry draws Barking and Dagenham, City of London, Southwark,
Westminster and Hackney. Hackney has no data in any month.
"""

import copy
import json

import pytest

from utils.borough_lookup import BoroughLookup
from utils.controller import DashboardController
from utils.data_loaders import parse_crime_data, regions_from_geojson
from utils.helpers import name_to_id
from utils.surface import Surface

APRIL = "2010-04-01"
MAY   = "2010-05-01"

REGION_NAMES = [
    "Barking and Dagenham",
    "City of London",
    "Southwark",
    "Westminster",
    "Hackney",
]


def group(total: int, subgroups: dict | None = None) -> dict:
    return {
        "total_criminal_offences": total,
        "offence_subgroups": subgroups if subgroups is not None else {"All": total},
    }


def borough(groups: dict) -> dict:
    return {
        "total_criminal_offences": sum(g["total_criminal_offences"] for g in groups.values()),
        "offence_groups": groups,
    }


RAW_CRIME_DATA = {
    "total_criminal_offences": 17000,
    "total_known_borough_criminal_offences": 10002,
    "dates": {
        MAY: {
            "total_criminal_offences": 8000,
            "total_known_borough_criminal_offences": 3090,
            "boroughs": {
                "barking-and-dagenham": borough({
                    "Burglary": group(90),
                }),
                "southwark": borough({
                    "Theft and Handling": group(2000),
                    "Drugs": group(1000, {"Drug Trafficking": 150, "Possession Of Drugs": 850}),
                }),
            },
        },
        APRIL: {
            "total_criminal_offences": 9000,
            "total_known_borough_criminal_offences": 6912,
            "boroughs": {
                "barking-and-dagenham": borough({
                    "Robbery": group(40, {"Personal Property": 40}),
                    "Burglary": group(60, {
                        "Burglary In A Dwelling": 40,
                        "Burglary In Other Buildings": 20,
                    }),
                }),
                "southwark": borough({
                    "Burglary": group(312),
                    "Theft and Handling": group(4000),
                }),
                "westminster": borough({
                    "Theft and Handling": group(2000),
                    "Violence Against the Person": group(500),
                }),
            },
        },
    },
}


def square(x: float, y: float) -> dict:
    return {
        "type": "Polygon",
        "coordinates": [[
            [x, y], [x + 0.05, y], [x + 0.05, y + 0.05], [x, y + 0.05], [x, y],
        ]],
    }


GEOJSON = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"name": name},
            "geometry": square(-0.3 + 0.1 * i, 51.4),
        }
        for i, name in enumerate(REGION_NAMES)
    ],
}


@pytest.fixture
def raw_crime_data():
    return copy.deepcopy(RAW_CRIME_DATA)


@pytest.fixture
def crime_data_file(tmp_path, raw_crime_data):
    path = tmp_path / "london-crime-data.json"
    path.write_text(json.dumps(raw_crime_data), encoding="utf-8")
    return str(path)


@pytest.fixture
def geojson_file(tmp_path):
    path = tmp_path / "london-boroughs.geojson"
    path.write_text(json.dumps(GEOJSON), encoding="utf-8")
    return str(path)


@pytest.fixture
def dataset(raw_crime_data):
    return parse_crime_data(raw_crime_data)


@pytest.fixture
def geojson():
    stamped = copy.deepcopy(GEOJSON)
    for feature in stamped["features"]:
        feature["id"] = name_to_id(feature["properties"]["name"])
    return stamped


@pytest.fixture
def regions(geojson):
    return regions_from_geojson(geojson)


@pytest.fixture
def surface(regions):
    return Surface.with_regions(regions)


@pytest.fixture
def lookup(dataset, surface):
    return BoroughLookup(dataset.borough_keys, surface.regions)


@pytest.fixture
def controller(dataset, regions):
    return DashboardController(dataset, regions)
