"""
utils/renderers.py
------------------
Renderers that bind the crime dataset to the rendered surface:

    FrameRenderer      – paints every map region for one date and
                         updates the summary text.
    BoroughDetailView  – offence-group breakdown (pie) for one borough,
                         with hover emphasis and the highlighted-group label.
    LegendBuilder      – severity gradient and offence-group swatches.

Each one writes to a Surface and never to a presentation layer, so the
same renderers drive the Streamlit page and the tests. All three also
implement the generic Renderer interface, render(state, context), which
the controller uses to redraw everything from the current ViewState.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from utils.borough_lookup import BoroughLookup
from utils.constants import (
    BOROUGH_OFFENCE_COUNT_ID,
    BOROUGH_OFFENCE_GROUP_ID,
    FALLBACK_COLOUR,
    HOVER_SIZE_INCREASE,
    HOVER_TRANSITION,
    PIE_RADIUS,
    TIMELINE_DATE_ID,
    TOTAL_OFFENCES_ID,
    UNHOVER_TRANSITION,
)
from utils.data_loaders import BoroughRecord, CrimeDataset, DateFrame
from utils.exceptions import BoroughNotFoundError, FrameNotFoundError
from utils.helpers import fmt_si, month_label
from utils.logger_config import setup_logger
from utils.scales import get_map_color, legend_ticks, ratio_for, severity_colorscale
from utils.surface import LegendTier, PieSector, SeverityLegend, Surface, Transition

logger = setup_logger(__name__)


# ── Shared render inputs ──────────────────────────────────────────

@dataclass
class ViewState:
    """Mutable selection state, written only by the controller."""
    date_index: int = 0
    selected_region: str | None = None
    selected_offence_group: str | None = None


@dataclass(frozen=True)
class RenderContext:
    """Everything derived once at startup and shared by every render."""
    dataset: CrimeDataset
    dates: list[str]
    upper_bound: int
    palette: dict[str, str]

    def date_for(self, state: ViewState) -> str:
        return self.dates[state.date_index]


class Renderer(ABC):
    def __init__(self, surface: Surface):
        self.surface = surface

    @abstractmethod
    def render(self, state: ViewState, context: RenderContext) -> None:
        ...


def get_frame(dataset: CrimeDataset, date_key: str) -> DateFrame:
    try:
        return dataset.dates[date_key]
    except KeyError:
        raise FrameNotFoundError(date_key) from None


# ── Frame renderer ────────────────────────────────────────────────

class FrameRenderer(Renderer):

    def __init__(self, surface: Surface, lookup: BoroughLookup):
        super().__init__(surface)
        self.lookup = lookup

    def render(self, state: ViewState, context: RenderContext) -> None:
        self.render_frame(context.dataset, context.date_for(state), context.upper_bound)

    def render_frame(self, dataset: CrimeDataset, date_key: str, upper_bound: int) -> None:
        """
        Paint every region with its severity colour for date_key.

        A region with no data for this date is logged and painted with the
        fallback colour; the other regions are still painted. Every call
        replaces the previous fill, title and total of each region.
        """
        frame = get_frame(dataset, date_key)
        label = month_label(date_key)

        self.surface.set_text(TIMELINE_DATE_ID, label)
        self.surface.set_text(
            TOTAL_OFFENCES_ID,
            f"Total criminal offences in London in {label}: {frame.total_criminal_offences}",
        )

        for region in self.surface.regions.values():
            record = self._find_record(frame, region.region_id, date_key)
            if record is None:
                region.fill  = FALLBACK_COLOUR
                region.title = region.name
                region.total = None
                continue

            total = record.total_criminal_offences
            region.fill  = get_map_color(ratio_for(total, upper_bound))
            region.title = f"{region.name}: {total} criminal offences"
            region.total = total

    def _find_record(self, frame: DateFrame, region_id: str, date_key: str) -> BoroughRecord | None:
        try:
            borough_key = self.lookup.to_borough_key(region_id)
        except BoroughNotFoundError:
            logger.warning(f"Borough data for {region_id} on {date_key} not found: no matching borough key")
            return None

        record = frame.boroughs.get(borough_key)
        if record is None:
            logger.warning(f"Borough data for {borough_key} on {date_key} not found")
        return record


# ── Borough detail view ───────────────────────────────────────────

def layout_pie(counts: list[tuple[str, int]]) -> list[tuple[float, float]]:
    """
    Start and end angles (radians, clockwise from 12 o'clock) for each
    (group, count) pair, in the order given. A pie whose counts are all
    zero gets zero-width sectors.
    """
    total = sum(count for _, count in counts)
    scale = 2 * math.pi / total if total > 0 else 0.0

    angles = []
    start = 0.0
    for _, count in counts:
        end = start + count * scale
        angles.append((start, end))
        start = end
    return angles


class BoroughDetailView(Renderer):
    """
    Detail panel for the selected borough.

    Remembers the borough and date of the last successful selection, i.e.
    the ones the pie on display was drawn from, so a hover reads its
    count from that same pie.
    """

    def __init__(self, surface: Surface, lookup: BoroughLookup):
        super().__init__(surface)
        self.lookup = lookup
        self.borough_key: str | None = None
        self.date_key: str | None = None
        self.hovered_group: str | None = None

    def render(self, state: ViewState, context: RenderContext) -> None:
        if state.selected_region is None:
            return
        date_key = context.date_for(state)
        if self.select(context.dataset, state.selected_region, date_key, context.palette):
            if state.selected_offence_group is not None:
                self.show_offence_group(context.dataset, date_key, state.selected_offence_group)
        elif state.selected_offence_group is not None:
            # The selected borough has no groups on this date
            self.surface.set_text(BOROUGH_OFFENCE_GROUP_ID, "")

    def select(
        self,
        dataset: CrimeDataset,
        region_id: str,
        date_key: str,
        palette: dict[str, str],
    ) -> bool:
        """
        Show the breakdown for region_id on date_key.

        Returns False, leaving the panel as it was, when the region has no
        borough or the borough has no data for that date.
        """
        try:
            borough_key = self.lookup.to_borough_key(region_id)
        except BoroughNotFoundError:
            logger.warning(f"Borough data for {region_id} on {date_key} not found: no matching borough key")
            return False

        record = get_frame(dataset, date_key).boroughs.get(borough_key)
        if record is None:
            logger.warning(f"Borough data for {region_id} on {date_key} not found")
            return False

        borough_name = self.lookup.display_name(region_id)
        self.surface.set_text(
            BOROUGH_OFFENCE_COUNT_ID,
            f"Criminal offences in {borough_name} in {month_label(date_key)}: "
            f"{record.total_criminal_offences}",
        )

        self.borough_key = borough_key
        self.date_key = date_key
        self.hovered_group = None
        self._draw_pie(record, palette)
        return True

    def _draw_pie(self, record: BoroughRecord, palette: dict[str, str]) -> None:
        counts = sorted(
            (group_name, group.total_criminal_offences)
            for group_name, group in record.offence_groups.items()
        )
        self.surface.pie = [
            PieSector(
                offence_group=group_name,
                count=count,
                color=palette.get(group_name, FALLBACK_COLOUR),
                start_angle=start,
                end_angle=end,
                outer_radius=PIE_RADIUS,
                title=f"{group_name}: {count} occurrences",
            )
            for (group_name, count), (start, end) in zip(counts, layout_pie(counts))
        ]

    def hover_sector(self, offence_group: str) -> bool:
        """Enlarge the sector for offence_group. Returns False if it is not drawn."""
        sector = self.surface.sector(offence_group)
        if sector is None:
            return False

        if self.hovered_group is not None and self.hovered_group != offence_group:
            self.unhover_sector(self.hovered_group)

        sector.outer_radius = PIE_RADIUS * HOVER_SIZE_INCREASE
        sector.transition = Transition(**HOVER_TRANSITION)
        self.hovered_group = offence_group
        return True

    def unhover_sector(self, offence_group: str) -> None:
        """Return the sector for offence_group to its normal size."""
        sector = self.surface.sector(offence_group)
        if sector is None:
            return
        sector.outer_radius = PIE_RADIUS
        sector.transition = Transition(**UNHOVER_TRANSITION)
        if self.hovered_group == offence_group:
            self.hovered_group = None

    def show_offence_group(self, dataset: CrimeDataset, date_key: str, offence_group: str) -> bool:
        """
        Set the highlighted-group label to '<group>: <count>' for the
        selected borough on date_key. Clears the label and returns False
        when that borough has no such group.
        """
        record = None
        if self.borough_key is not None:
            record = get_frame(dataset, date_key).boroughs.get(self.borough_key)

        group = record.offence_groups.get(offence_group) if record is not None else None
        if group is None:
            self.surface.set_text(BOROUGH_OFFENCE_GROUP_ID, "")
            return False

        self.surface.set_text(
            BOROUGH_OFFENCE_GROUP_ID,
            f"{offence_group}: {group.total_criminal_offences}",
        )
        return True


# ── Legend builder ────────────────────────────────────────────────

class LegendBuilder(Renderer):

    def __init__(self, surface: Surface):
        super().__init__(surface)
        self.category_legend_built = False

    def render(self, state: ViewState, context: RenderContext) -> None:
        self.build_severity_legend(context.upper_bound)
        if state.selected_region is not None:
            self.build_category_legend(context.palette)

    def build_severity_legend(self, upper_bound: int) -> SeverityLegend:
        """Gradient over [0, upper_bound] with SI-labelled ticks. Replaces any previous one."""
        stops = [
            (position * upper_bound, color)
            for position, color in severity_colorscale()
        ]
        ticks = [(value, fmt_si(value)) for value in legend_ticks(upper_bound)]
        self.surface.severity_legend = SeverityLegend(upper_bound, stops, ticks)
        return self.surface.severity_legend

    def build_category_legend(self, palette: dict[str, str]) -> bool:
        """
        One tier per offence group, in palette order. Only the first call
        adds tiers; returns False for every later call.
        """
        if self.category_legend_built:
            return False
        for offence_group, color in palette.items():
            self.surface.category_legend.append(LegendTier(color, offence_group))
        self.category_legend_built = True
        return True
