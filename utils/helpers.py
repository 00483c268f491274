"""
utils/helpers.py
----------------
Small general-purpose helper functions used across the renderers.
These are pure Python with no Streamlit or Plotly dependencies
so they can also be used safely inside processing scripts.

Import example:
    from utils.helpers import name_to_id, month_label, fmt_si
"""

import pandas as pd

from utils.constants import CAPITALIZE_EXCEPTIONS


# ── Identifier helpers ────────────────────────────────────────────

def name_to_id(name: str) -> str:
    """
    Turn a borough name or dataset key into a region identifier:
    lowercase, with spaces replaced by hyphens.

    Example:
        name_to_id("Kingston upon Thames") -> "kingston-upon-thames"
    """
    return name.strip().lower().replace(" ", "-")


def borough_display_name(borough_key: str) -> str:
    """
    Build a human-readable borough name from a dataset key or region id.

    Separators are replaced by spaces and every word is capitalised,
    except the small words in CAPITALIZE_EXCEPTIONS, which stay lowercase
    wherever they appear.

    Example:
        borough_display_name("barking-and-dagenham") -> "Barking and Dagenham"
    """
    words = borough_key.replace("-", " ").split()
    return " ".join(
        word if word in CAPITALIZE_EXCEPTIONS else word[:1].upper() + word[1:]
        for word in words
    )


# ── Date helpers ──────────────────────────────────────────────────

def parse_date(date_key: str) -> pd.Timestamp:
    """Parse an ISO date key from the dataset. Raises ValueError if unparseable."""
    return pd.to_datetime(date_key)


def sort_date_keys(date_keys) -> list[str]:
    """Return date keys sorted by their parsed date value rather than by text."""
    return sorted(date_keys, key=parse_date)


def month_label(date_key: str) -> str:
    """Format a date key as '<Month> <Year>', e.g. '2010-04-01' -> 'April 2010'."""
    return parse_date(date_key).strftime("%B %Y")


# ── Formatting helpers ────────────────────────────────────────────

def fmt_si(value: float) -> str:
    """
    Format an axis value with an SI suffix and no trailing zeros.

    Returns:
        Formatted string e.g. '0', '500', '1k', '2.5k', '1.2M'.
    """
    for threshold, suffix in ((1e9, "G"), (1e6, "M"), (1e3, "k")):
        if abs(value) >= threshold:
            return f"{value / threshold:g}{suffix}"
    return f"{value:g}"
