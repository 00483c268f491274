"""
utils/aggregation.py
--------------------
Single pass over the whole dataset that finds the largest borough total
in any frame and the full set of offence groups. Both feed the colour
scales, which must be valid for every frame of the timeline.
"""

from dataclasses import dataclass

import pandas as pd

from utils.data_loaders import CrimeDataset

OFFENCE_COLUMNS = ["date", "borough", "offence_group", "count"]
TOTAL_COLUMNS   = ["date", "borough", "total"]


@dataclass(frozen=True)
class OffenceInfo:
    max_offences: int
    offence_groups: list[str]


def offence_table(dataset: CrimeDataset) -> pd.DataFrame:
    """Long table with one row per date, borough and offence group."""
    rows = [
        (date_key, borough_key, group_name, group.total_criminal_offences)
        for date_key, frame in dataset.dates.items()
        for borough_key, borough in frame.boroughs.items()
        for group_name, group in borough.offence_groups.items()
    ]
    return pd.DataFrame(rows, columns=OFFENCE_COLUMNS)


def borough_totals(dataset: CrimeDataset) -> pd.DataFrame:
    """Long table with one row per date and borough."""
    rows = [
        (date_key, borough_key, borough.total_criminal_offences)
        for date_key, frame in dataset.dates.items()
        for borough_key, borough in frame.boroughs.items()
    ]
    return pd.DataFrame(rows, columns=TOTAL_COLUMNS)


def get_offence_info(dataset: CrimeDataset) -> OffenceInfo:
    """
    Scan every frame and every borough record.

    max_offences is the largest single borough total in any one frame,
    not a sum over time. offence_groups is the sorted union of group
    names over all frames, so the palette covers groups that only appear
    in some of them.
    """
    totals = borough_totals(dataset)
    groups = offence_table(dataset)["offence_group"]

    max_offences = int(totals["total"].max()) if not totals.empty else 0
    return OffenceInfo(
        max_offences=max_offences,
        offence_groups=sorted(groups.unique().tolist()),
    )
