from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from blog_dashboard.core.filter_state import GROUP_BY_DAY
from blog_dashboard.ui.ids import IDs


def _graph(graph_id: str) -> dcc.Graph:
    return dcc.Graph(
        id=graph_id,
        style={"height": "320px"},
        config={"responsive": True, "displaylogo": False},
    )


def _chart_card(title: str, graph_id: str, controls=None) -> dbc.Card:
    header = [html.H5(title, className="mb-0 fw-semibold")]
    if controls is not None:
        header.append(controls)
    return dbc.Card(
        [
            dbc.CardHeader(html.Div(header, className="d-flex flex-column gap-3")),
            dbc.CardBody(_graph(graph_id)),
        ],
        className="h-100 shadow-sm",
    )


def build_users_growth_controls() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    dbc.Label("Start Date", html_for=IDs.Control.START_DATE, className="small"),
                    dbc.Input(id=IDs.Control.START_DATE, type="date", value="", size="sm"),
                ],
            ),
            html.Div(
                [
                    dbc.Label("End Date", html_for=IDs.Control.END_DATE, className="small"),
                    dbc.Input(id=IDs.Control.END_DATE, type="date", value="", size="sm"),
                ],
            ),
            dbc.Button(
                "Reset",
                id=IDs.Control.RESET_DATES_BTN,
                color="secondary",
                size="sm",
                className="align-self-end",
            ),
        ],
        className="d-flex gap-3 flex-wrap",
    )


def build_blogs_created_controls() -> html.Div:
    return html.Div(
        [
            dbc.Label("Group By", html_for=IDs.Control.GROUP_BY_SELECT, className="small"),
            dbc.Select(
                id=IDs.Control.GROUP_BY_SELECT,
                options=[
                    {"label": "Day", "value": "day"},
                    {"label": "Month", "value": "month"},
                ],
                value=GROUP_BY_DAY,
                size="sm",
                style={"maxWidth": "160px"},
            ),
        ],
    )


def build_chart_panels() -> html.Div:
    """Two-by-two grid of the four series charts."""
    return html.Div(
        [
            dbc.Row(
                [
                    dbc.Col(
                        _chart_card("Users Growth", IDs.Control.USERS_GROWTH_GRAPH, build_users_growth_controls()),
                        lg=6,
                        className="mb-3",
                    ),
                    dbc.Col(
                        _chart_card("Blogs Created", IDs.Control.BLOGS_CREATED_GRAPH, build_blogs_created_controls()),
                        lg=6,
                        className="mb-3",
                    ),
                ],
                className="gx-3",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        _chart_card("Blogs by Category", IDs.Control.BLOGS_BY_CATEGORY_GRAPH),
                        lg=6,
                        className="mb-3",
                    ),
                    dbc.Col(
                        _chart_card("Engagement Trend", IDs.Control.ENGAGEMENT_TREND_GRAPH),
                        lg=6,
                        className="mb-3",
                    ),
                ],
                className="gx-3",
            ),
        ]
    )
