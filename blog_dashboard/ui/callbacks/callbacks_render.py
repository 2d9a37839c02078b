from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import Input, Output

from blog_dashboard.core.snapshot import DashboardSnapshot
from blog_dashboard.ui.charts import (
    blogs_by_category_figure,
    blogs_created_figure,
    engagement_trend_figure,
    message_figure,
    users_growth_figure,
)
from blog_dashboard.ui.ids import IDs
from blog_dashboard.ui.layout.build_summary_cards import build_summary_cards

if TYPE_CHECKING:
    from blog_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    palette = ctx.global_config.category_palette

    # ---------------------------------------------------------
    # Snapshot / error -> cards + charts
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.SUMMARY_CARDS, "children"),
        Output(IDs.Control.DASHBOARD_ERROR_ALERT, "children"),
        Output(IDs.Control.DASHBOARD_ERROR_ALERT, "is_open"),
        Output(IDs.Control.USERS_GROWTH_GRAPH, "figure"),
        Output(IDs.Control.BLOGS_CREATED_GRAPH, "figure"),
        Output(IDs.Control.BLOGS_BY_CATEGORY_GRAPH, "figure"),
        Output(IDs.Control.ENGAGEMENT_TREND_GRAPH, "figure"),
        Input(IDs.Store.SNAPSHOT, "data"),
        Input(IDs.Store.DASHBOARD_ERROR, "data"),
    )
    def render_dashboard(snapshot_data: dict[str, Any] | None, error: Optional[str]):
        # An error hides every series; stale data is never shown next to it.
        if error:
            unavailable = message_figure("Data unavailable.", "Change a filter to try again.")
            return None, f"Error: {error}", True, unavailable, unavailable, unavailable, unavailable

        snapshot = DashboardSnapshot.from_dict(snapshot_data)
        if snapshot is None:
            loading = message_figure("Loading...")
            return None, None, False, loading, loading, loading, loading

        try:
            return (
                build_summary_cards(snapshot.summary),
                None,
                False,
                users_growth_figure(snapshot),
                blogs_created_figure(snapshot),
                blogs_by_category_figure(snapshot, palette),
                engagement_trend_figure(snapshot),
            )
        except Exception:
            logger.exception("Error rendering dashboard snapshot")
            broken = message_figure("Something went wrong while rendering this chart.")
            return None, "Error: could not render analytics data", True, broken, broken, broken, broken
