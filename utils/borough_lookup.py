"""
Reconciles dataset borough keys with the region identifiers of the map.

The dataset keys boroughs by a lowercase name, spaced or hyphenated
depending on its vintage ("barking and dagenham", "barking-and-dagenham").
The map keys its regions by name_to_id() of the geometry's feature name.
Both sides are compared through that same slug.

One administrative merge needs more than a slug: the dataset reports the
City of London together with Southwark under a single "southwark" key.
Depending on the geometry, the City is drawn as its own region
("city-of-london", which then shows Southwark's figures) or both are drawn
as one region ("southwark-and-city-of-london"). The merge is kept as data
in BOROUGH_MERGES so no renderer has to special-case it:

  borough_key  — dataset key the merged regions read their data from
  region_ids   — every region id that represents it, preferred first
  display_name — joint name shown in the borough detail panel

An identifier with no counterpart raises BoroughNotFoundError. Callers
log it and skip that borough rather than abort the whole render.
"""

from dataclasses import dataclass

from utils.exceptions import BoroughNotFoundError
from utils.helpers import borough_display_name, name_to_id


@dataclass(frozen=True)
class BoroughMerge:
    borough_key: str
    region_ids: tuple[str, ...]
    display_name: str


BOROUGH_MERGES = (
    BoroughMerge(
        borough_key="southwark",
        region_ids=("southwark", "city-of-london", "southwark-and-city-of-london"),
        display_name="the City of London and Southwark",
    ),
)


class BoroughLookup:
    """
    Two-way mapping between dataset borough keys and map region ids.

    Args:
        borough_keys: Every borough key in the dataset (all frames).
        region_ids:   Every region id drawn on the map.
        merges:       Merged-region table, BOROUGH_MERGES by default.
    """

    def __init__(self, borough_keys, region_ids, merges=BOROUGH_MERGES):
        self._keys_by_slug = {name_to_id(key): key for key in borough_keys}
        self._region_ids = set(region_ids)
        self._merge_by_region = {
            region_id: merge for merge in merges for region_id in merge.region_ids
        }
        self._merge_by_key = {merge.borough_key: merge for merge in merges}

    def to_region_id(self, borough_key: str) -> str:
        """Region id drawing the given dataset borough key."""
        slug = name_to_id(borough_key)
        if slug not in self._keys_by_slug:
            raise BoroughNotFoundError(borough_key)
        if slug in self._region_ids:
            return slug

        merge = self._merge_by_key.get(slug)
        if merge is not None:
            for region_id in merge.region_ids:
                if region_id in self._region_ids:
                    return region_id
        raise BoroughNotFoundError(borough_key)

    def to_borough_key(self, region_id: str) -> str:
        """Dataset borough key a region reads its figures from."""
        merge = self._merge_by_region.get(region_id)
        slug = merge.borough_key if merge is not None else region_id
        try:
            return self._keys_by_slug[slug]
        except KeyError:
            raise BoroughNotFoundError(region_id) from None

    def merge_for(self, region_id: str) -> BoroughMerge | None:
        """Merge record for a region id, or None for an ordinary borough."""
        return self._merge_by_region.get(region_id)

    def display_name(self, region_id: str) -> str:
        """Name used in the borough detail panel."""
        merge = self.merge_for(region_id)
        if merge is not None:
            return merge.display_name
        return borough_display_name(self.to_borough_key(region_id))
