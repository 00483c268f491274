"""
tests/test_helpers.py
---------------------
Date and number formatting helpers.
"""

import pytest

from utils.helpers import fmt_si, month_label, sort_date_keys


@pytest.mark.parametrize("value, text", [
    (0, "0"),
    (500, "500"),
    (1000, "1k"),
    (2500, "2.5k"),
    (1_200_000, "1.2M"),
])
def test_fmt_si(value, text):
    assert fmt_si(value) == text


def test_month_label():
    assert month_label("2010-04-01") == "April 2010"
    assert month_label("2016-12-01") == "December 2016"


def test_sort_date_keys_by_date_value():
    keys = ["2011-01-01", "2010-12-01", "2010-02-01"]
    assert sort_date_keys(keys) == ["2010-02-01", "2010-12-01", "2011-01-01"]


def test_unparseable_date_raises():
    with pytest.raises(ValueError):
        month_label("not-a-date")
