"""
tests/test_borough_lookup.py
----------------------------
Reconciliation between dataset borough keys and map region ids,
including the City of London / Southwark merge.
"""

import pytest

from utils.borough_lookup import BoroughLookup
from utils.exceptions import BoroughNotFoundError
from utils.helpers import borough_display_name, name_to_id


class TestRoundTrip:

    @pytest.mark.parametrize("borough_key", ["barking-and-dagenham", "westminster", "southwark"])
    def test_round_trip(self, lookup, borough_key):
        assert lookup.to_borough_key(lookup.to_region_id(borough_key)) == borough_key

    def test_spaced_dataset_keys(self):
        keys = ["barking and dagenham", "kingston upon thames"]
        lookup = BoroughLookup(keys, ["barking-and-dagenham", "kingston-upon-thames"])
        for key in keys:
            assert lookup.to_borough_key(lookup.to_region_id(key)) == key
        assert lookup.to_region_id("kingston upon thames") == "kingston-upon-thames"


class TestMerge:

    def test_city_of_london_reads_southwark(self, lookup):
        assert lookup.to_borough_key("city-of-london") == "southwark"

    def test_southwark_prefers_its_own_region(self, lookup):
        assert lookup.to_region_id("southwark") == "southwark"

    def test_single_merged_region(self):
        lookup = BoroughLookup(
            ["southwark", "lambeth"],
            ["southwark-and-city-of-london", "lambeth"],
        )
        assert lookup.to_region_id("southwark") == "southwark-and-city-of-london"
        assert lookup.to_borough_key("southwark-and-city-of-london") == "southwark"

    @pytest.mark.parametrize("region_id", ["city-of-london", "southwark"])
    def test_joint_display_name(self, lookup, region_id):
        assert lookup.display_name(region_id) == "the City of London and Southwark"

    def test_merge_for_ordinary_borough(self, lookup):
        assert lookup.merge_for("westminster") is None


class TestNotFound:

    def test_region_without_data(self, lookup):
        with pytest.raises(BoroughNotFoundError) as exc:
            lookup.to_borough_key("hackney")
        assert str(exc.value) == "Borough 'hackney' not found"

    def test_borough_without_region(self, dataset):
        lookup = BoroughLookup(dataset.borough_keys, ["westminster"])
        with pytest.raises(BoroughNotFoundError):
            lookup.to_region_id("barking-and-dagenham")

    def test_unknown_borough_key(self, lookup):
        with pytest.raises(BoroughNotFoundError):
            lookup.to_region_id("Unknown")

    def test_is_a_key_error(self, lookup):
        with pytest.raises(KeyError):
            lookup.to_borough_key("atlantis")


class TestDisplayNames:

    @pytest.mark.parametrize("key, name", [
        ("barking-and-dagenham", "Barking and Dagenham"),
        ("kingston upon thames", "Kingston Upon Thames"),
        ("hammersmith-and-fulham", "Hammersmith and Fulham"),
        ("city-of-westminster", "City of Westminster"),
        ("westminster", "Westminster"),
    ])
    def test_borough_display_name(self, key, name):
        assert borough_display_name(key) == name

    def test_display_name_from_lookup(self, lookup):
        assert lookup.display_name("barking-and-dagenham") == "Barking and Dagenham"

    def test_name_to_id(self):
        assert name_to_id("Kingston upon Thames") == "kingston-upon-thames"
