from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from blog_dashboard.ui.ids import IDs
from blog_dashboard.ui.layout.build_chart_panels import build_chart_panels
from blog_dashboard.ui.layout.build_export_modal import build_export_modal
from blog_dashboard.ui.layout.build_navbar import build_navbar

if TYPE_CHECKING:
    from blog_dashboard.ui.config import AppConfig


def build_layout(ctx: AppConfig) -> dbc.Container:
    navbar = build_navbar(ctx.global_config)

    header = html.Div(
        [
            html.H1("Dashboard Overview", className="d-none d-md-block fw-medium mb-0"),
            dbc.Button("Export Excel", id=IDs.Control.EXPORT_OPEN_BTN, color="primary"),
        ],
        className="d-md-flex align-items-center justify-content-between mt-4 mb-3",
    )

    return dbc.Container(
        fluid=True,
        className="bd-root",
        children=[
            navbar,

            # App-level stores
            dcc.Store(id=IDs.Store.SNAPSHOT, storage_type="memory"),
            dcc.Store(id=IDs.Store.DASHBOARD_ERROR, storage_type="memory"),
            dcc.Store(id=IDs.Store.DASHBOARD_FILTERS, storage_type="memory"),
            dcc.Store(id=IDs.Store.EXPORT_INSTANCE_ID, storage_type="memory"),

            header,
            dbc.Alert(
                id=IDs.Control.DASHBOARD_ERROR_ALERT,
                color="danger",
                is_open=False,
            ),
            dcc.Loading(
                id="summary-loading",
                type="default",
                children=html.Div(id=IDs.Control.SUMMARY_CARDS),
            ),
            build_chart_panels(),
            build_export_modal(),
        ],
    )
