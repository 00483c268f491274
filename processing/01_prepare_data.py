"""
01_prepare_data.py
------------------
Checks the crime dataset and the borough geometry before the dashboard
is deployed, and writes minified copies of both so the page downloads
as little as possible.

Inputs:
    data/london-crime-data.json     — nested crime dataset
    data/london-boroughs.geojson    — borough boundaries (optional)

Outputs:
    data/processed/london-crime-data.json
    data/processed/london-boroughs.geojson

Run from project root:
    python processing/01_prepare_data.py
"""

import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.aggregation import get_offence_info
from utils.borough_lookup import BoroughLookup
from utils.constants import CRIME_DATA_PATH, GEOJSON_PATH, PROCESSED_DIR
from utils.data_loaders import load_borough_geometry, load_crime_data, regions_from_geojson
from utils.exceptions import BoroughNotFoundError
from utils.scales import offences_upper_bound


def minify_json(source: str, destination: str) -> None:
    with open(source, encoding="utf-8") as f:
        content = json.load(f)
    with open(destination, "w", encoding="utf-8") as f:
        f.write(json.dumps(content, separators=(",", ":"), ensure_ascii=False) + "\n")

    before = os.path.getsize(source)
    after  = os.path.getsize(destination)
    print(f"    ✓ Minified {source}: {before:,} → {after:,} bytes")


def main():
    print("01_prepare_data.py")
    print("=" * 50)

    # ── 1. Dataset ────────────────────────────────────────────────
    print("Loading crime dataset...")
    dataset = load_crime_data(CRIME_DATA_PATH)
    dates = dataset.date_keys
    print(f"  {len(dates)} dates ({dates[0]} to {dates[-1]})")
    print(f"  {len(dataset.borough_keys)} borough keys")

    if list(dataset.dates) != dates:
        print("  WARNING: date keys are not stored in chronological order "
              "(the dashboard sorts them)")

    info = get_offence_info(dataset)
    print(f"  Largest borough total in one month: {info.max_offences:,}")
    print(f"  Severity scale upper bound: {offences_upper_bound(info.max_offences):,}")
    print(f"  {len(info.offence_groups)} offence groups")

    os.makedirs(PROCESSED_DIR, exist_ok=True)
    minify_json(CRIME_DATA_PATH, os.path.join(PROCESSED_DIR, os.path.basename(CRIME_DATA_PATH)))

    # ── 2. Geometry ───────────────────────────────────────────────
    print("Loading borough geometry...")
    geojson = load_borough_geometry(GEOJSON_PATH)
    if geojson is None:
        print(f"  {GEOJSON_PATH} not found, the dashboard will list boroughs "
              "without a map")
        print(f"\n✓ Outputs written to {PROCESSED_DIR}")
        return

    regions = regions_from_geojson(geojson)
    region_ids = [r.region_id for r in regions]
    lookup = BoroughLookup(dataset.borough_keys, region_ids)
    print(f"  {len(regions)} regions")

    unmatched_regions = []
    for region_id in region_ids:
        try:
            lookup.to_borough_key(region_id)
        except BoroughNotFoundError:
            unmatched_regions.append(region_id)

    unmatched_boroughs = []
    for borough_key in dataset.borough_keys:
        try:
            lookup.to_region_id(borough_key)
        except BoroughNotFoundError:
            unmatched_boroughs.append(borough_key)

    if unmatched_regions:
        print(f"  WARNING: regions with no borough data: {unmatched_regions}")
    if unmatched_boroughs:
        print(f"  WARNING: borough keys not drawn on the map: {unmatched_boroughs}")

    minify_json(GEOJSON_PATH, os.path.join(PROCESSED_DIR, os.path.basename(GEOJSON_PATH)))

    print(f"\n✓ Outputs written to {PROCESSED_DIR}")


if __name__ == "__main__":
    main()
