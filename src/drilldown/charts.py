"""
Plotly figures for the console: the drill-down map frame and the offense bar card.

The map figure uses the frame's pixel space directly (origin top-left, y
down) so a clicked point's coordinates can be fed straight into the session.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import plotly.graph_objects as go
from PIL import Image

from drilldown.config import (
    BAR_COLOR,
    BAR_TRACK_COLOR,
    BREAKDOWN_ROWS,
    CARD_COLOR,
    CLICK_GRID_STEP,
    FRAME_MARGIN,
    HITBOX_TAG,
    PLACEHOLDER_COLOR,
    REGIONAL_SHORT,
)
from drilldown.region_stats import OffenseRow, RegionStats
from drilldown.view_state import Hitbox, contains

BACKGROUND = 'rgb(3,6,20)'
TEXT_COLOR = 'rgb(226,232,240)'
MUTED_TEXT = 'rgb(148,163,184)'
HINT_TEXT = f'Hover {HITBOX_TAG} • Click to drill into {REGIONAL_SHORT}'


def click_grid(width: float, height: float, step: float = CLICK_GRID_STEP) -> Tuple[np.ndarray, np.ndarray]:
    """Centres of a regular grid of clickable points covering the frame."""
    xs = np.arange(step / 2, width, step)
    ys = np.arange(step / 2, height, step)
    gx, gy = np.meshgrid(xs, ys)
    return gx.ravel(), gy.ravel()


def hover_summary(stats: Optional[RegionStats], top_n: int = BREAKDOWN_ROWS) -> str:
    if stats is None:
        return f'<b>{HITBOX_TAG}</b><br>Stats unavailable<br><i>Click to drill into {REGIONAL_SHORT}</i>'
    lines = [f'<b>{stats.label}</b>', f'Total: {stats.total:,.0f}']
    lines += [f'{row.name}: {row.value:,.0f}' for row in stats.head(top_n)]
    lines.append(f'<i>Click to drill into {REGIONAL_SHORT}</i>')
    return '<br>'.join(lines)


def _frame_layout(fig: go.Figure, width: float, height: float) -> go.Figure:
    fig.update_layout(
        width=int(width),
        height=int(height),
        margin={'r': 0, 't': 0, 'l': 0, 'b': 0},
        paper_bgcolor=BACKGROUND,
        plot_bgcolor=BACKGROUND,
        showlegend=False,
        dragmode=False,
        clickmode='event+select',
        hoverlabel=dict(bgcolor='rgba(15,23,42,0.92)', font=dict(color=TEXT_COLOR, size=12)),
    )
    fig.update_xaxes(range=[0, width], visible=False, fixedrange=True)
    fig.update_yaxes(range=[height, 0], visible=False, fixedrange=True)
    return fig


def _add_image_or_placeholder(
    fig: go.Figure,
    image: Optional[Image.Image],
    x: float,
    y: float,
    w: float,
    h: float,
    opacity: float = 1.0,
) -> None:
    if image is not None:
        fig.add_layout_image(
            source=image, xref='x', yref='y', x=x, y=y, sizex=w, sizey=h,
            xanchor='left', yanchor='top', sizing='stretch', opacity=opacity, layer='below',
        )
    else:
        fig.add_shape(type='rect', x0=x, y0=y, x1=x + w, y1=y + h,
                      fillcolor=PLACEHOLDER_COLOR, line_width=0, layer='below')


def _add_click_targets(
    fig: go.Figure,
    width: float,
    height: float,
    hitbox: Optional[Hitbox] = None,
    hover_stats: Optional[RegionStats] = None,
) -> None:
    gx, gy = click_grid(width, height)
    if hitbox is not None:
        inside = np.array([contains(x, y, hitbox) for x, y in zip(gx, gy)], dtype=bool)
    else:
        inside = np.zeros(len(gx), dtype=bool)

    marker = dict(size=CLICK_GRID_STEP, opacity=0.01, color='white')
    # hoverinfo 'none' keeps the points clickable without a tooltip
    fig.add_trace(go.Scatter(x=gx[~inside], y=gy[~inside], mode='markers', marker=marker, hoverinfo='none'))
    if inside.any():
        fig.add_trace(go.Scatter(
            x=gx[inside], y=gy[inside], mode='markers', marker=marker,
            hovertemplate=hover_summary(hover_stats) + '<extra></extra>',
        ))


def national_map_figure(
    width: float,
    height: float,
    hitbox: Hitbox,
    image: Optional[Image.Image],
    hover_stats: Optional[RegionStats],
) -> go.Figure:
    """National map with the highlighted drill-down region and hint chip."""
    fig = go.Figure()
    margin = width * FRAME_MARGIN
    _add_image_or_placeholder(fig, image, margin, margin, width - margin * 2, height - margin * 2, opacity=0.94)

    # glass overlay, glow ring, then the inner box
    fig.add_shape(type='rect', x0=0, y0=0, x1=width, y1=height,
                  fillcolor='rgba(15,23,42,0.47)', line_width=0)
    fig.add_shape(type='rect', x0=hitbox.x - 6, y0=hitbox.y - 6,
                  x1=hitbox.x + hitbox.w + 6, y1=hitbox.y + hitbox.h + 6,
                  line=dict(color='rgba(56,189,248,0.7)', width=5))
    fig.add_shape(type='rect', x0=hitbox.x, y0=hitbox.y, x1=hitbox.x + hitbox.w, y1=hitbox.y + hitbox.h,
                  fillcolor='rgba(8,47,73,0.6)', line_width=0)

    fig.add_annotation(
        x=hitbox.x + hitbox.w + 14, y=hitbox.y + hitbox.h * 0.35, text=HITBOX_TAG,
        xanchor='left', showarrow=False, font=dict(color=TEXT_COLOR, size=13),
        bgcolor='rgba(15,23,42,0.9)', borderpad=6,
    )
    fig.add_annotation(
        x=width - 18, y=height - 18, text=HINT_TEXT, xanchor='right', yanchor='bottom',
        showarrow=False, font=dict(color=MUTED_TEXT, size=11),
        bgcolor='rgba(15,23,42,0.86)', borderpad=6,
    )
    _add_click_targets(fig, width, height, hitbox, hover_stats)
    return _frame_layout(fig, width, height)


def regional_map_figure(
    width: float,
    height: float,
    image: Optional[Image.Image],
) -> go.Figure:
    """Regional focus card; any click on it returns to the national map."""
    fig = go.Figure()
    pad = width * 0.06
    fig.add_shape(type='rect', x0=pad, y0=pad, x1=width - pad, y1=height - pad,
                  fillcolor='rgb(10,18,40)', line=dict(color='rgba(6,182,255,0.8)', width=2), layer='below')

    inner_pad = pad + 18
    _add_image_or_placeholder(fig, image, inner_pad, inner_pad, width * 0.38, height - inner_pad * 2)

    fig.add_annotation(
        x=pad + 18, y=pad - 4, text=f'{HITBOX_TAG} ➜ {REGIONAL_SHORT} County Focus',
        xanchor='left', yanchor='bottom', showarrow=False, font=dict(color='rgb(248,250,252)', size=18),
    )
    fig.add_annotation(
        x=pad + 18, y=pad + 14, text='Click anywhere on the map to go back to USA.',
        xanchor='left', yanchor='top', showarrow=False, font=dict(color=MUTED_TEXT, size=12),
    )
    _add_click_targets(fig, width, height)
    return _frame_layout(fig, width, height)


def offense_bar_chart(
    stats: RegionStats,
    rows: Sequence[OffenseRow],
    title: str,
    height: int = 420,
) -> go.Figure:
    """
    Horizontal bar card for *rows* (already truncated, in source order).

    Bars are scaled against the largest value over all of *stats*, so the
    maximum row fills the full track even when it isn't among *rows*.
    """
    rows = list(rows)[:BREAKDOWN_ROWS]
    max_val = stats.max_value
    positions = list(range(len(rows)))
    names = [row.name for row in rows]
    values = [row.value for row in rows]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[max_val] * len(rows), y=positions, orientation='h',
        marker_color=BAR_TRACK_COLOR, hoverinfo='skip',
    ))
    fig.add_trace(go.Bar(
        x=values, y=positions, orientation='h', marker_color=BAR_COLOR,
        customdata=names,
        hovertemplate='%{customdata}: %{x:,.0f}<extra></extra>',
    ))
    for pos, value in zip(positions, values):
        fig.add_annotation(x=max_val, y=pos, text=f'{value:,.0f}', xanchor='left', xshift=6,
                           showarrow=False, font=dict(color=MUTED_TEXT, size=12))

    fig.update_layout(
        title=dict(text=f'{title}<br><sup>Total: {stats.total:,.0f}</sup>', font=dict(color='rgb(248,248,248)', size=14)),
        barmode='overlay',
        bargap=0.55,
        height=height,
        paper_bgcolor=CARD_COLOR,
        plot_bgcolor=CARD_COLOR,
        showlegend=False,
        dragmode=False,
        margin={'r': 70, 't': 70, 'l': 10, 'b': 10},
    )
    fig.update_xaxes(range=[0, max_val], visible=False, fixedrange=True)
    fig.update_yaxes(
        tickvals=positions, ticktext=names, autorange='reversed',
        tickfont=dict(color='rgb(229,231,235)', size=12), showgrid=False, fixedrange=True,
    )
    return fig
