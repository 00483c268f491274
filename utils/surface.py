"""
utils/surface.py
----------------
In-memory rendered surface. Every element the page shows is addressed by
one of the element ids in utils/constants.py, and the renderers write
their output here rather than to a concrete presentation layer.

The Streamlit sections read a Surface and turn it into widgets and
Plotly figures (see utils/charts.py); the tests read it directly.
"""

from dataclasses import dataclass, field

from utils.constants import FALLBACK_COLOUR, TEXT_ELEMENT_IDS


@dataclass
class RegionElement:
    region_id: str
    name: str
    fill: str = FALLBACK_COLOUR
    title: str | None = None
    total: int | None = None


@dataclass(frozen=True)
class Transition:
    duration: int
    easing: str


@dataclass
class PieSector:
    offence_group: str
    count: int
    color: str
    start_angle: float
    end_angle: float
    outer_radius: float
    title: str
    transition: Transition | None = None


@dataclass(frozen=True)
class LegendTier:
    color: str
    label: str


@dataclass(frozen=True)
class SeverityLegend:
    upper_bound: int
    stops: list[tuple[float, str]]
    ticks: list[tuple[float, str]]


@dataclass
class Surface:
    regions: dict[str, RegionElement] = field(default_factory=dict)
    texts: dict[str, str] = field(
        default_factory=lambda: dict.fromkeys(TEXT_ELEMENT_IDS, "")
    )
    slider_max: int = 0
    slider_value: int = 0
    pie: list[PieSector] = field(default_factory=list)
    severity_legend: SeverityLegend | None = None
    category_legend: list[LegendTier] = field(default_factory=list)

    @classmethod
    def with_regions(cls, regions) -> "Surface":
        return cls(regions={region.region_id: region for region in regions})

    def region(self, region_id: str) -> RegionElement:
        return self.regions[region_id]

    def text(self, element_id: str) -> str:
        return self.texts[element_id]

    def set_text(self, element_id: str, value: str) -> None:
        if element_id not in self.texts:
            raise KeyError(element_id)
        self.texts[element_id] = value

    def sector(self, offence_group: str) -> PieSector | None:
        for sector in self.pie:
            if sector.offence_group == offence_group:
                return sector
        return None
