"""
utils/data_loaders.py
---------------------
Loading and parsing of the time-series crime dataset and the optional
borough geometry.

The dataset is a nested JSON document:

    {
      "total_criminal_offences": int,
      "total_known_borough_criminal_offences": int,
      "dates": {
        "<ISO date>": {
          "total_criminal_offences": int,
          "total_known_borough_criminal_offences": int,
          "boroughs": {
            "<borough key>": {
              "total_criminal_offences": int,
              "offence_groups": {
                "<group>": {
                  "total_criminal_offences": int,
                  "offence_subgroups": {"<subgroup>": int}
                }
              }
            }
          }
        }
      }
    }

It is parsed into the dataclasses below, which round-trip back to the
same shape through to_dict(). Nothing here depends on Streamlit: the
cached wrappers that stop the page on failure live in app.py.
"""

import json
import os
from dataclasses import dataclass, field
from numbers import Number

import requests

from utils.constants import REQUEST_TIMEOUT
from utils.exceptions import DatasetLoadError
from utils.helpers import borough_display_name, name_to_id, parse_date, sort_date_keys
from utils.logger_config import setup_logger
from utils.surface import RegionElement

logger = setup_logger(__name__)

TOTAL_KEY       = "total_criminal_offences"
KNOWN_TOTAL_KEY = "total_known_borough_criminal_offences"


# ── Data model ────────────────────────────────────────────────────

@dataclass(frozen=True)
class OffenceGroupRecord:
    total_criminal_offences: int
    offence_subgroups: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            TOTAL_KEY: self.total_criminal_offences,
            "offence_subgroups": dict(self.offence_subgroups),
        }


@dataclass(frozen=True)
class BoroughRecord:
    total_criminal_offences: int
    offence_groups: dict[str, OffenceGroupRecord] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            TOTAL_KEY: self.total_criminal_offences,
            "offence_groups": {
                name: group.to_dict() for name, group in self.offence_groups.items()
            },
        }


@dataclass(frozen=True)
class DateFrame:
    total_criminal_offences: int
    total_known_borough_criminal_offences: int
    boroughs: dict[str, BoroughRecord] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            TOTAL_KEY: self.total_criminal_offences,
            KNOWN_TOTAL_KEY: self.total_known_borough_criminal_offences,
            "boroughs": {
                key: borough.to_dict() for key, borough in self.boroughs.items()
            },
        }


@dataclass(frozen=True)
class CrimeDataset:
    total_criminal_offences: int
    total_known_borough_criminal_offences: int
    dates: dict[str, DateFrame]

    @property
    def date_keys(self) -> list[str]:
        """Date keys in chronological order."""
        return sort_date_keys(self.dates)

    @property
    def borough_keys(self) -> list[str]:
        """Every borough key seen in any frame, in first-seen order."""
        keys = {}
        for frame in self.dates.values():
            keys.update(dict.fromkeys(frame.boroughs))
        return list(keys)

    def to_dict(self) -> dict:
        return {
            TOTAL_KEY: self.total_criminal_offences,
            KNOWN_TOTAL_KEY: self.total_known_borough_criminal_offences,
            "dates": {key: frame.to_dict() for key, frame in self.dates.items()},
        }


# ── Validation ────────────────────────────────────────────────────

def _is_count(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def validate_crime_data(raw) -> list[str]:
    """
    Check that a parsed JSON document has the structure the renderers need.

    Only the structure is checked: totals are not reconciled against
    their parts.

    Args:
        raw: Parsed JSON document.

    Returns:
        List of problems found (empty list if the document is usable).
    """
    if not isinstance(raw, dict):
        return ["dataset root is not an object"]

    problems = []
    for key in (TOTAL_KEY, KNOWN_TOTAL_KEY):
        if not _is_count(raw.get(key)):
            problems.append(f"dataset root: '{key}' missing or not a number")

    dates = raw.get("dates")
    if not isinstance(dates, dict) or not dates:
        problems.append("dataset root: 'dates' missing or empty")
        return problems

    for date_key, frame in dates.items():
        try:
            parse_date(date_key)
        except (ValueError, TypeError):
            problems.append(f"date {date_key!r}: key is not a parseable date")
        if not isinstance(frame, dict):
            problems.append(f"date {date_key!r}: not an object")
            continue
        if not _is_count(frame.get(TOTAL_KEY)):
            problems.append(f"date {date_key!r}: '{TOTAL_KEY}' missing or not a number")
        boroughs = frame.get("boroughs")
        if not isinstance(boroughs, dict):
            problems.append(f"date {date_key!r}: 'boroughs' missing")
            continue
        for borough_key, borough in boroughs.items():
            where = f"date {date_key!r}, borough {borough_key!r}"
            if not isinstance(borough, dict) or not _is_count(borough.get(TOTAL_KEY)):
                problems.append(f"{where}: '{TOTAL_KEY}' missing or not a number")
                continue
            groups = borough.get("offence_groups")
            if not isinstance(groups, dict):
                problems.append(f"{where}: 'offence_groups' missing")
                continue
            for group_name, group in groups.items():
                if not isinstance(group, dict) or not _is_count(group.get(TOTAL_KEY)):
                    problems.append(
                        f"{where}, group {group_name!r}: '{TOTAL_KEY}' missing or not a number"
                    )

    return problems


# ── Parsing ───────────────────────────────────────────────────────

def parse_crime_data(raw: dict) -> CrimeDataset:
    """Build a CrimeDataset from a parsed JSON document. Raises DatasetLoadError."""
    problems = validate_crime_data(raw)
    if problems:
        shown = "; ".join(problems[:5])
        more  = f" (and {len(problems) - 5} more)" if len(problems) > 5 else ""
        raise DatasetLoadError(f"Malformed crime dataset: {shown}{more}")

    dates = {}
    for date_key, frame in raw["dates"].items():
        boroughs = {}
        for borough_key, borough in frame["boroughs"].items():
            groups = {
                group_name: OffenceGroupRecord(
                    total_criminal_offences=group[TOTAL_KEY],
                    offence_subgroups=dict(group.get("offence_subgroups", {})),
                )
                for group_name, group in borough["offence_groups"].items()
            }
            boroughs[borough_key] = BoroughRecord(borough[TOTAL_KEY], groups)
        dates[date_key] = DateFrame(
            total_criminal_offences=frame[TOTAL_KEY],
            total_known_borough_criminal_offences=frame.get(KNOWN_TOTAL_KEY, 0),
            boroughs=boroughs,
        )

    return CrimeDataset(
        total_criminal_offences=raw[TOTAL_KEY],
        total_known_borough_criminal_offences=raw[KNOWN_TOTAL_KEY],
        dates=dates,
    )


def _read_json(source: str):
    """Read JSON from a local path or an http(s) URL."""
    if source.startswith(("http://", "https://")):
        response = requests.get(source, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()
    with open(source, encoding="utf-8") as f:
        return json.load(f)


def load_crime_data(source: str) -> CrimeDataset:
    """
    Fetch and parse the crime dataset.

    Args:
        source: Local file path or http(s) URL of the JSON document.

    Returns:
        The parsed CrimeDataset.

    Raises:
        DatasetLoadError: if the document cannot be read, is not valid
            JSON, or does not have the expected structure.
    """
    try:
        raw = _read_json(source)
    except FileNotFoundError as e:
        raise DatasetLoadError(f"Crime dataset not found at {source}") from e
    except (OSError, ValueError, requests.RequestException) as e:
        raise DatasetLoadError(f"Could not read crime dataset from {source}: {e}") from e

    dataset = parse_crime_data(raw)
    logger.info(
        f"Loaded crime data from {source}: {len(dataset.dates)} dates, "
        f"{len(dataset.borough_keys)} boroughs"
    )
    return dataset


# ── Geometry ──────────────────────────────────────────────────────

def load_borough_geometry(source: str) -> dict | None:
    """
    Load the borough GeoJSON feature collection.

    Returns None if the file does not exist, so the map can fall back to
    regions derived from the dataset. Raises DatasetLoadError if the file
    exists but is not a usable feature collection.
    """
    if not source.startswith(("http://", "https://")) and not os.path.exists(source):
        logger.warning(f"Borough geometry not found at {source}, using dataset regions")
        return None

    try:
        geojson = _read_json(source)
    except (OSError, ValueError, requests.RequestException) as e:
        raise DatasetLoadError(f"Could not read borough geometry from {source}: {e}") from e

    features = geojson.get("features") if isinstance(geojson, dict) else None
    if not isinstance(features, list) or not features:
        raise DatasetLoadError(f"Borough geometry at {source} has no features")
    for feature in features:
        if not feature.get("properties", {}).get("name"):
            raise DatasetLoadError(f"Borough geometry at {source} has a feature without a name")

    for feature in features:
        feature["id"] = name_to_id(feature["properties"]["name"])
    return geojson


def regions_from_geojson(geojson: dict) -> list[RegionElement]:
    """One region per GeoJSON feature, keyed by name_to_id(properties.name)."""
    return [
        RegionElement(
            region_id=name_to_id(feature["properties"]["name"]),
            name=feature["properties"]["name"],
        )
        for feature in geojson["features"]
    ]


def regions_from_dataset(dataset: CrimeDataset) -> list[RegionElement]:
    """One region per dataset borough key, for when no geometry is available."""
    return [
        RegionElement(region_id=name_to_id(key), name=borough_display_name(key))
        for key in dataset.borough_keys
    ]
