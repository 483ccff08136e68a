"""Plotly chart builders for the SplitSpend dashboard."""

from __future__ import annotations

from typing import Hashable, Mapping, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go

from core.models import CategoryInsight
from core.timekeys import DEFAULT_TIMEZONE, from_timestamp_ms

from .theme import theme_tokens

TOKENS = theme_tokens()

__all__ = [
    "bucket_categories",
    "build_bucket_chart",
    "build_bucket_frame",
    "build_category_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def bucket_categories(bucketed: Mapping[int, Sequence[CategoryInsight]]) -> dict[Hashable, str]:
    """Return category id to display name, in first appearance across buckets."""

    names: dict[Hashable, str] = {}
    for key in sorted(bucketed):
        for insight in bucketed[key]:
            names.setdefault(insight.id, insight.name)
    return names


def build_bucket_frame(
    bucketed: Mapping[int, Sequence[CategoryInsight]],
    tz: str = DEFAULT_TIMEZONE,
) -> pd.DataFrame:
    """Flatten bucketed insights into one row per bucket and one column per category id.

    Buckets without spend keep their row with zeros so the time axis stays
    contiguous. Category columns follow first appearance across buckets; use
    :func:`bucket_categories` for their display names.
    """

    category_ids = list(bucket_categories(bucketed))
    records: list[dict[Hashable, object]] = []
    for key in sorted(bucketed):
        record: dict[Hashable, object] = {"Bucket": from_timestamp_ms(key, tz).tz_localize(None)}
        for insight in bucketed[key]:
            record[insight.id] = float(record.get(insight.id, 0.0)) + insight.total
        records.append(record)

    frame = pd.DataFrame.from_records(records, columns=["Bucket", *category_ids])
    if category_ids:
        frame[category_ids] = frame[category_ids].fillna(0.0).astype(float)
    return frame


def build_bucket_chart(
    bucketed: Mapping[int, Sequence[CategoryInsight]],
    tz: str = DEFAULT_TIMEZONE,
    currency_symbol: str | None = "$",
    weekly: bool = False,
    colors: Optional[Mapping[Hashable, str]] = None,
) -> go.Figure:
    """Render category totals per day or week as stacked bars.

    ``colors`` maps category id to color; pass the same map to
    :func:`build_category_chart` so both charts agree.
    """

    frame = build_bucket_frame(bucketed, tz)
    if frame.empty:
        return _empty_plotly_figure("No spend in the selected range.")

    names = bucket_categories(bucketed)
    palette = TOKENS.category_colors(names) if colors is None else colors
    time_format = TOKENS.week_format if weekly else TOKENS.day_format
    labels = frame["Bucket"].dt.strftime(time_format)
    currency_prefix = f"{currency_symbol} " if currency_symbol else ""

    fig = go.Figure()
    for category_id, name in names.items():
        fig.add_trace(
            go.Bar(
                x=labels,
                y=frame[category_id],
                name=name,
                marker=dict(color=palette.get(category_id, TOKENS.neutral_grey)),
                hovertemplate=f"{name}<br>{currency_prefix}%{{y:,.2f}}<extra></extra>",
            )
        )

    fig.update_layout(
        barmode="stack",
        margin=dict(l=0, r=0, t=20, b=0),
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        xaxis=dict(showgrid=False, type="category"),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.grid_color, zeroline=False),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def build_category_chart(
    insights: Sequence[CategoryInsight],
    currency_symbol: str | None = "$",
    colors: Optional[Mapping[Hashable, str]] = None,
) -> go.Figure:
    """Render a donut chart of the category totals."""

    if not insights:
        return _empty_plotly_figure("No categories to show.")

    palette = TOKENS.category_colors(insight.id for insight in insights) if colors is None else colors
    currency_prefix = f"{currency_symbol} " if currency_symbol else ""
    fig = go.Figure(
        go.Pie(
            labels=[insight.name for insight in insights],
            values=[insight.total for insight in insights],
            hole=0.55,
            sort=False,
            marker=dict(
                colors=[palette.get(insight.id, TOKENS.neutral_grey) for insight in insights],
                line=dict(color=TOKENS.neutral_white, width=2),
            ),
            textposition="inside",
            texttemplate="%{label}<br>%{percent:.1%}",
            hovertemplate=f"%{{label}}<br>Spend: {currency_prefix}%{{value:,.2f}}<extra></extra>",
        )
    )

    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(
            title="",
            orientation="v",
            yanchor="middle",
            y=0.5,
            xanchor="left",
            x=1.05,
            font=dict(color=TOKENS.label_color, family=TOKENS.label_font, size=TOKENS.label_size),
        ),
        showlegend=True,
    )
    return fig
