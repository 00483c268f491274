"""
utils/controller.py
-------------------
Top-level controller for one page session.

At startup it runs the whole derivation once:

    dataset → offence info → upper bound + palette → severity legend
            → first chronological frame

and afterwards it owns the ViewState and routes the four UI events
(timeline input, borough click, sector hover, sector unhover) to the
renderers. The renderers only read the state they are given.
"""

from utils.aggregation import get_offence_info
from utils.borough_lookup import BoroughLookup
from utils.data_loaders import CrimeDataset
from utils.logger_config import setup_logger
from utils.renderers import (
    BoroughDetailView,
    FrameRenderer,
    LegendBuilder,
    RenderContext,
    ViewState,
)
from utils.scales import generate_pie_colors, offences_upper_bound
from utils.surface import RegionElement, Surface

logger = setup_logger(__name__)


class DashboardController:
    """
    Args:
        dataset: The parsed crime dataset.
        regions: The map regions, from the geometry or from the dataset.
    """

    def __init__(self, dataset: CrimeDataset, regions: list[RegionElement]):
        if not dataset.dates:
            raise ValueError("Crime dataset has no dates")

        self.offence_info = get_offence_info(dataset)
        self.context = RenderContext(
            dataset=dataset,
            dates=dataset.date_keys,
            upper_bound=offences_upper_bound(self.offence_info.max_offences),
            palette=generate_pie_colors(self.offence_info.offence_groups),
        )
        self.state = ViewState()

        self.surface = Surface.with_regions(regions)
        self.lookup = BoroughLookup(dataset.borough_keys, self.surface.regions)

        self.frame_renderer = FrameRenderer(self.surface, self.lookup)
        self.detail_view = BoroughDetailView(self.surface, self.lookup)
        self.legends = LegendBuilder(self.surface)

        self.legends.build_severity_legend(self.context.upper_bound)
        self.surface.slider_max = len(self.context.dates) - 1
        self.surface.slider_value = self.state.date_index
        self.frame_renderer.render(self.state, self.context)

        logger.info(
            f"Dashboard ready: {len(self.context.dates)} dates, "
            f"{len(self.surface.regions)} regions, "
            f"{len(self.context.palette)} offence groups, "
            f"upper bound {self.context.upper_bound}"
        )

    # ── Accessors ─────────────────────────────────────────────────

    @property
    def dates(self) -> list[str]:
        return self.context.dates

    @property
    def upper_bound(self) -> int:
        return self.context.upper_bound

    @property
    def palette(self) -> dict[str, str]:
        return self.context.palette

    @property
    def current_date(self) -> str:
        return self.context.date_for(self.state)

    # ── Event handlers ────────────────────────────────────────────

    def on_timeline_input(self, index: int) -> None:
        """Move the timeline to date index `index` and redraw."""
        if not 0 <= index <= self.surface.slider_max:
            raise IndexError(f"Timeline index {index} outside 0..{self.surface.slider_max}")

        logger.debug(f"Timeline moved to {self.dates[index]}")
        self.state.date_index = index
        self.surface.slider_value = index
        self.frame_renderer.render(self.state, self.context)
        # Also re-applies the highlighted group when the borough has data
        self.detail_view.render(self.state, self.context)

    def on_borough_click(self, region_id: str) -> bool:
        """Select a borough. Returns False if its detail could not be shown."""
        logger.debug(f"Borough {region_id} selected on {self.current_date}")
        self.state.selected_region = region_id

        shown = self.detail_view.select(
            self.context.dataset, region_id, self.current_date, self.palette
        )
        if not shown:
            return False

        # The group stays selected when absent, so it returns once a later
        # borough has it again
        if self.state.selected_offence_group is not None:
            self.detail_view.show_offence_group(
                self.context.dataset, self.current_date, self.state.selected_offence_group
            )
        self.legends.build_category_legend(self.palette)
        return True

    def on_sector_hover(self, offence_group: str) -> None:
        if not self.detail_view.hover_sector(offence_group):
            logger.warning(f"No pie sector for offence group {offence_group}")
            return
        self.state.selected_offence_group = offence_group
        # The pie may still show an earlier date than the timeline
        self.detail_view.show_offence_group(
            self.context.dataset, self.detail_view.date_key, offence_group
        )

    def on_sector_unhover(self, offence_group: str) -> None:
        self.detail_view.unhover_sector(offence_group)
