from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

import dash
from dash import Input, Output, State

from blog_dashboard.core.filter_state import DashboardFilters
from blog_dashboard.core.snapshot import DashboardSnapshot
from blog_dashboard.services.dashboard_controller import DashboardController, DashboardViewState
from blog_dashboard.ui.ids import IDs

if TYPE_CHECKING:
    from blog_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)


def apply_dashboard_filters(
        controller: DashboardController,
        triggered_id: Any,
        start_date: Any,
        end_date: Any,
        group_by: Any,
        snapshot_data: Optional[dict],
        error: Optional[str],
        filters_data: Optional[dict],
) -> Tuple[Any, ...]:
    """
    Rebuild the view state from the stores, apply the filter change and map
    the result back onto (snapshot, error, filters, start_date, end_date).

    The snapshot store is only written on success, so a failed fetch never
    replaces the last published snapshot. Date inputs are only written back
    when Reset cleared them.
    """
    state = DashboardViewState(
        filters=DashboardFilters.from_dict(filters_data),
        snapshot=DashboardSnapshot.from_dict(snapshot_data),
        error=error or None,
    )

    reset = triggered_id == IDs.Control.RESET_DATES_BTN
    if reset:
        new_state = controller.reset_dates_sync(state)
    else:
        new_state = controller.update_filters_sync(
            state,
            start_date=start_date,
            end_date=end_date,
            group_by=group_by,
        )

    if new_state is state:
        raise dash.exceptions.PreventUpdate

    snapshot_out = dash.no_update if new_state.error else new_state.snapshot.to_dict()
    if reset:
        dates = (new_state.filters.start_date, new_state.filters.end_date)
    else:
        dates = (dash.no_update, dash.no_update)
    return (snapshot_out, new_state.error, new_state.filters.to_dict()) + dates


def register_dashboard_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Dashboard filters / Reset -> snapshot (full five-series fetch)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.SNAPSHOT, "data"),
        Output(IDs.Store.DASHBOARD_ERROR, "data"),
        Output(IDs.Store.DASHBOARD_FILTERS, "data"),
        Output(IDs.Control.START_DATE, "value"),
        Output(IDs.Control.END_DATE, "value"),
        Input(IDs.Control.START_DATE, "value"),
        Input(IDs.Control.END_DATE, "value"),
        Input(IDs.Control.GROUP_BY_SELECT, "value"),
        Input(IDs.Control.RESET_DATES_BTN, "n_clicks"),
        State(IDs.Store.SNAPSHOT, "data"),
        State(IDs.Store.DASHBOARD_ERROR, "data"),
        State(IDs.Store.DASHBOARD_FILTERS, "data"),
    )
    def refresh_snapshot(start_date, end_date, group_by, _reset_clicks, snapshot_data, error, filters_data):
        """
        Any change to the three dashboard filters refetches every series;
        Reset clears the date bounds and refetches.
        """
        return apply_dashboard_filters(
            ctx.controller,
            dash.ctx.triggered_id,
            start_date,
            end_date,
            group_by,
            snapshot_data,
            error,
            filters_data,
        )
