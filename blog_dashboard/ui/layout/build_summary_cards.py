from __future__ import annotations

from typing import Any, List

import dash_bootstrap_components as dbc
from dash import html

from blog_dashboard.core.snapshot import Summary


def _display(value: Any) -> Any:
    # falsy backend values (None, "", 0) all show as 0
    return value or 0


def summary_card_values(summary: Summary) -> List[tuple[str, str]]:
    return [
        ("Total Users", f"{_display(summary.total_users)}"),
        ("Total Blogs", f"{_display(summary.total_blogs)}"),
        ("Total Views", f"{_display(summary.total_views)}"),
        ("Engagement Rate", f"{_display(summary.engagement_rate)}%"),
    ]


def build_summary_cards(summary: Summary) -> dbc.Row:
    cards = [
        dbc.Col(
            dbc.Card(
                dbc.CardBody(
                    [
                        html.H6(label, className="text-muted small fw-medium"),
                        html.P(value, className="fs-3 fw-bold mb-0"),
                    ]
                ),
                className="h-100 shadow-sm",
            ),
            md=3,
            className="mb-3",
        )
        for label, value in summary_card_values(summary)
    ]
    return dbc.Row(cards, className="gx-3")
