"""
tests/test_charts.py
--------------------
Plotly figures drawn from a rendered Surface.
"""

import pytest

from utils.charts import (
    category_legend_html,
    fixed_colorscale,
    map_figure,
    pie_figure,
    severity_legend_figure,
)
from utils.constants import HOVER_SIZE_INCREASE
from utils.surface import LegendTier


class TestFixedColorscale:

    def test_one_stop_per_colour(self):
        assert fixed_colorscale(["#ffffff", "#ff7f7f", "#ff0000"]) == [
            [0.0, "#ffffff"], [0.5, "#ff7f7f"], [1.0, "#ff0000"],
        ]

    def test_single_colour(self):
        assert fixed_colorscale(["#ff2323"]) == [[0.0, "#ff2323"], [1.0, "#ff2323"]]


class TestMapFigure:

    def test_choropleth_uses_region_fills(self, controller, geojson):
        trace = map_figure(controller.surface, geojson).data[0]
        assert trace.type == "choropleth"
        assert list(trace.locations) == list(controller.surface.regions)

        colorscale = [color for _, color in trace.colorscale]
        fills = [region.fill for region in controller.surface.regions.values()]
        assert colorscale == fills

    def test_choropleth_hover_text(self, controller, geojson):
        trace = map_figure(controller.surface, geojson).data[0]
        assert "Westminster: 2500 criminal offences" in trace.text
        assert "Hackney" in trace.text

    def test_bar_fallback_without_geometry(self, controller):
        trace = map_figure(controller.surface).data[0]
        assert trace.type == "bar"
        assert "city-of-london" in trace.customdata
        assert len(trace.customdata) == len(controller.surface.regions)


class TestPieFigure:

    def test_sectors_in_renderer_order(self, controller):
        controller.on_borough_click("barking-and-dagenham")
        trace = pie_figure(controller.surface).data[0]
        assert list(trace.labels) == ["Burglary", "Robbery"]
        assert list(trace.values) == [60, 40]
        assert trace.sort is False
        assert trace.direction == "clockwise"

    def test_hovered_sector_pulled_out(self, controller):
        controller.on_borough_click("barking-and-dagenham")
        controller.on_sector_hover("Robbery")
        fig = pie_figure(controller.surface)
        pull = list(fig.data[0].pull)
        assert pull[0] == pytest.approx(0.0)
        assert pull[1] == pytest.approx(HOVER_SIZE_INCREASE - 1)
        assert fig.layout.transition.duration == 100
        assert fig.layout.transition.easing == "quad-out"

    def test_sector_colours_from_palette(self, controller):
        controller.on_borough_click("westminster")
        trace = pie_figure(controller.surface).data[0]
        assert list(trace.marker.colors) == [
            controller.palette["Theft and Handling"],
            controller.palette["Violence Against the Person"],
        ]


class TestLegends:

    def test_severity_legend_ticks(self, controller):
        fig = severity_legend_figure(controller.surface.severity_legend)
        assert list(fig.layout.yaxis.ticktext) == ["0", "1k", "2k", "3k", "4k", "5k"]
        assert list(fig.layout.yaxis.tickvals) == [0, 1000, 2000, 3000, 4000, 5000]
        assert list(fig.layout.yaxis.range) == [0, 5000]

    def test_category_legend_html(self):
        html = category_legend_html([
            LegendTier("rgb(1, 2, 3)", "Burglary"),
            LegendTier("rgb(4, 5, 6)", "Fraud & Forgery"),
        ])
        assert html.count('class="legend-tier"') == 2
        assert "background-color:rgb(1, 2, 3)" in html
        assert "Fraud &amp; Forgery" in html

    def test_empty_category_legend(self):
        assert category_legend_html([]) == ""
