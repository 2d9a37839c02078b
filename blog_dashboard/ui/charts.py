from __future__ import annotations

from typing import List, Optional, Sequence

import plotly.express as px
import plotly.graph_objs as go

from blog_dashboard.config.model import DEFAULT_CATEGORY_PALETTE
from blog_dashboard.core.snapshot import DashboardSnapshot

USERS_COLOR = "#3b82f6"
BLOGS_COLOR = "#ef4444"
ENGAGEMENT_FILL = "#10b981"
ENGAGEMENT_LINE = "#059669"

_MARGIN = dict(l=40, r=20, t=20, b=40)


def category_colors(n: int, palette: Sequence[str] = DEFAULT_CATEGORY_PALETTE) -> List[str]:
    """Colour for each of n slices, by position, cycling through the palette."""
    if not palette:
        raise ValueError("palette must not be empty")
    return [palette[i % len(palette)] for i in range(n)]


def message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=_MARGIN)
    return fig


def _no_data() -> go.Figure:
    return message_figure("No data for this period.")


def users_growth_figure(snapshot: DashboardSnapshot) -> go.Figure:
    df = snapshot.series_frame("usersGrowth")
    if df.empty:
        return _no_data()
    fig = px.line(df, x="date", y="users", labels={"users": "Users"})
    fig.update_traces(line_color=USERS_COLOR, name="Users", showlegend=True)
    fig.update_layout(margin=_MARGIN)
    return fig


def blogs_created_figure(snapshot: DashboardSnapshot) -> go.Figure:
    df = snapshot.series_frame("blogsCreated")
    if df.empty:
        return _no_data()
    fig = px.bar(df, x="period", y="blogs", labels={"blogs": "Blogs"})
    fig.update_traces(marker_color=BLOGS_COLOR, name="Blogs", showlegend=True)
    fig.update_layout(margin=_MARGIN)
    return fig


def blogs_by_category_figure(
        snapshot: DashboardSnapshot,
        palette: Sequence[str] = DEFAULT_CATEGORY_PALETTE,
) -> go.Figure:
    df = snapshot.series_frame("blogsByCategory")
    if df.empty:
        return _no_data()
    fig = go.Figure(
        go.Pie(
            labels=df["category"],
            values=df["count"],
            marker=dict(colors=category_colors(len(df), palette)),
            sort=False,
        )
    )
    fig.update_layout(margin=_MARGIN)
    return fig


def engagement_trend_figure(snapshot: DashboardSnapshot) -> go.Figure:
    df = snapshot.series_frame("engagementTrend")
    if df.empty:
        return _no_data()
    fig = px.area(df, x="date", y="engagement", labels={"engagement": "Engagement"})
    fig.update_traces(line_color=ENGAGEMENT_LINE, fillcolor=ENGAGEMENT_FILL, name="Engagement", showlegend=True)
    fig.update_layout(margin=_MARGIN)
    return fig
