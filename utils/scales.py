"""
utils/scales.py
---------------
Colour encodings shared by the map, the pie chart and the legends.

    - Severity scale: borough total → white-to-red colour, over a domain
      [0, upper bound] rounded up from the all-time maximum.
    - Category palette: offence group → colour sampled from the Turbo
      colormap, one position per group.

Import example:
    from utils.scales import offences_upper_bound, get_map_color
"""

import math

import numpy as np
from plotly.colors import sample_colorscale, sequential

from utils.constants import LEGEND_GRADIENT_STEPS, LEGEND_TICK_COUNT, PIE_COLORMAP


# ── Severity scale ────────────────────────────────────────────────

def get_scale(value: int) -> int:
    """Power of ten one order below the magnitude of value, e.g. 4312 -> 1000."""
    power = len(str(int(value))) - 1
    return 10 ** power


def round_up(value: float, scale: int) -> int:
    """Round value up to the next multiple of scale."""
    return math.ceil(value / scale) * scale


def offences_upper_bound(max_offences: int) -> int:
    """Top of the severity domain, e.g. 4312 -> 5000."""
    return round_up(max_offences, get_scale(max_offences))


def ratio_for(total: float, upper_bound: int) -> float:
    """Position of total in [0, upper_bound], clamped to [0, 1]."""
    if upper_bound <= 0:
        return 0.0
    return min(max(total / upper_bound, 0.0), 1.0)


def get_map_color(ratio: float) -> str:
    """
    White at ratio 0, pure red at ratio 1.

    Red stays at 255 and green and blue both fall to
    floor(255 * (1 - ratio)).
    """
    ratio = min(max(ratio, 0.0), 1.0)
    color_value = math.floor(255 * (1 - ratio))
    return f"#ff{color_value:02x}{color_value:02x}"


def severity_colorscale(steps: int = LEGEND_GRADIENT_STEPS) -> list[list]:
    """Plotly colorscale sampled from get_map_color at steps + 1 positions."""
    return [
        [float(t), get_map_color(float(t))]
        for t in np.linspace(0.0, 1.0, steps + 1)
    ]


def legend_ticks(upper_bound: float, count: int = LEGEND_TICK_COUNT) -> list[float]:
    """
    Roughly `count` evenly spaced round tick values covering [0, upper_bound].

    The step is 1, 2 or 5 times a power of ten, whichever gives the
    tick count closest to the one requested.
    """
    if upper_bound <= 0:
        return [0.0]

    raw_step = upper_bound / count
    power = 10 ** math.floor(math.log10(raw_step))
    error = raw_step / power
    if error >= math.sqrt(50):
        factor = 10
    elif error >= math.sqrt(10):
        factor = 5
    elif error >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    step = factor * power

    ticks = np.arange(0.0, upper_bound + step / 2, step)
    return [float(t) for t in ticks if t <= upper_bound]


# ── Category palette ──────────────────────────────────────────────

def generate_pie_colors(categories: list[str]) -> dict[str, str]:
    """
    Assign each offence group a colour from the Turbo colormap.

    Group i of n is placed at (i + 1) / (n + 1), which spreads the groups
    evenly and keeps them off both ends of the colormap.
    """
    if not categories:
        return {}
    colorscale = getattr(sequential, PIE_COLORMAP)
    positions = [(i + 1) / (len(categories) + 1) for i in range(len(categories))]
    colors = sample_colorscale(colorscale, positions)
    return dict(zip(categories, colors))
