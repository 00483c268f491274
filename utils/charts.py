"""
utils/charts.py
---------------
Plotly figure builders that draw a rendered Surface.
All figure functions return a Plotly figure object; nothing here
computes colours, the renderers have already done that.

Import example:
    from utils.charts import map_figure, pie_figure, severity_legend_figure
"""

import html

import plotly.graph_objects as go

from utils.constants import (
    BASE_LAYOUT,
    LEGEND_FONT_SIZE,
    LEGEND_HEIGHT,
    LEGEND_WIDTH,
    MAP_HEIGHT,
    PIE_RADIUS,
    PIE_WIDTH,
    SECTOR_STROKE,
    SECTOR_STROKE_WIDTH,
)
from utils.surface import LegendTier, SeverityLegend, Surface


# ── Layout helpers ────────────────────────────────────────────────

def apply_base_layout(fig: go.Figure, height: int = 420, **kwargs) -> go.Figure:
    """
    Apply the standard transparent background, no-drag and zero-margin
    settings to a figure. Additional layout kwargs are passed through
    so callers can override individual properties.

    Usage:
        fig = apply_base_layout(fig, height=360, hovermode='closest')
    """
    layout = {**BASE_LAYOUT, "height": height, **kwargs}
    fig.update_layout(**layout)
    return fig


def fixed_colorscale(colors: list[str]) -> list[list]:
    """
    Colorscale with one stop per colour, so that z = i draws exactly
    colors[i]. Used to paint each region with the fill the renderer
    chose instead of letting Plotly interpolate from raw values.
    """
    if len(colors) == 1:
        return [[0.0, colors[0]], [1.0, colors[0]]]
    last = len(colors) - 1
    return [[i / last, color] for i, color in enumerate(colors)]


# ── Map ───────────────────────────────────────────────────────────

def map_figure(surface: Surface, geojson: dict | None = None) -> go.Figure:
    """
    Choropleth of every region on the surface, or a bar chart of the
    regions when no borough geometry is available.

    The clicked region comes back from Streamlit as the point's
    'location' (choropleth) or 'customdata' (bar fallback).
    """
    regions = list(surface.regions.values())
    if geojson is None:
        return _region_bar_figure(regions)

    fig = go.Figure(go.Choropleth(
        geojson=geojson,
        featureidkey="id",
        locations=[r.region_id for r in regions],
        z=list(range(len(regions))),
        zmin=0,
        zmax=max(len(regions) - 1, 1),
        colorscale=fixed_colorscale([r.fill for r in regions]),
        showscale=False,
        text=[r.title or r.name for r in regions],
        hovertemplate="%{text}<extra></extra>",
        marker=dict(line=dict(color="black", width=0.5)),
    ))
    fig.update_geos(fitbounds="locations", visible=False)
    return apply_base_layout(fig, height=MAP_HEIGHT * 2, hovermode="closest")


def _region_bar_figure(regions) -> go.Figure:
    regions = sorted(regions, key=lambda r: r.name)
    fig = go.Figure(go.Bar(
        x=[r.total or 0 for r in regions],
        y=[r.name for r in regions],
        orientation="h",
        marker=dict(
            color=[r.fill for r in regions],
            line=dict(color="black", width=0.5),
        ),
        customdata=[r.region_id for r in regions],
        text=[r.title or r.name for r in regions],
        hovertemplate="%{text}<extra></extra>",
        textposition="none",
    ))
    fig = apply_base_layout(fig, height=max(20 * len(regions), MAP_HEIGHT), hovermode="closest")
    fig.update_yaxes(autorange="reversed", showspikes=False)
    fig.update_xaxes(title="Criminal offences", showspikes=False)
    return fig


# ── Pie chart ─────────────────────────────────────────────────────

def pie_figure(surface: Surface) -> go.Figure:
    """
    Offence-group pie for the selected borough.

    Sectors keep the renderer's order, clockwise from 12 o'clock. A sector
    enlarged by a hover is pulled out by the same fraction of the radius,
    and its transition drives the layout transition.
    """
    sectors = surface.pie
    fig = go.Figure(go.Pie(
        labels=[s.offence_group for s in sectors],
        values=[s.count for s in sectors],
        text=[s.title for s in sectors],
        hovertemplate="%{text}<extra></extra>",
        textinfo="none",
        sort=False,
        direction="clockwise",
        rotation=0,
        pull=[s.outer_radius / PIE_RADIUS - 1 for s in sectors],
        marker=dict(
            colors=[s.color for s in sectors],
            line=dict(color=SECTOR_STROKE, width=SECTOR_STROKE_WIDTH),
        ),
        showlegend=False,
    ))

    transitions = [s.transition for s in sectors if s.transition is not None]
    if transitions:
        last = transitions[-1]
        fig.update_layout(transition=dict(duration=last.duration, easing=last.easing))

    return apply_base_layout(fig, height=PIE_WIDTH, width=PIE_WIDTH)


# ── Legends ───────────────────────────────────────────────────────

def severity_legend_figure(legend: SeverityLegend) -> go.Figure:
    """
    Vertical gradient bar over [0, upper bound] with the legend's ticks
    on the right, zero at the bottom.
    """
    values = [value for value, _ in legend.stops]
    upper = legend.upper_bound or 1
    last = max(len(legend.stops) - 1, 1)

    fig = go.Figure(go.Heatmap(
        z=[[value] for value in values],
        y=values,
        x=[0],
        colorscale=[[i / last, color] for i, (_, color) in enumerate(legend.stops)],
        zmin=0,
        zmax=upper,
        showscale=False,
        hoverinfo="skip",
    ))
    fig = apply_base_layout(
        fig,
        height=LEGEND_HEIGHT,
        width=LEGEND_WIDTH * 2,
        margin=dict(l=0, r=LEGEND_WIDTH, t=10, b=10),
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(
        side="right",
        range=[0, upper],
        tickvals=[value for value, _ in legend.ticks],
        ticktext=[label for _, label in legend.ticks],
        tickfont=dict(size=LEGEND_FONT_SIZE),
        showgrid=False,
        zeroline=False,
    )
    return fig


def category_legend_html(tiers: list[LegendTier]) -> str:
    """One colour swatch and label per legend tier, as HTML."""
    rows = [
        '<div class="legend-tier" style="display:flex;align-items:center;gap:8px;">'
        f'<div class="legend-tier-color" style="width:14px;height:14px;'
        f'background-color:{tier.color};border:1px solid black;"></div>'
        f'<p class="legend-tier-label" style="margin:0;">{html.escape(tier.label)}</p>'
        '</div>'
        for tier in tiers
    ]
    return "\n".join(rows)
