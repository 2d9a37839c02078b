from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

import dash
from dash import ALL, Input, Output, State

from blog_dashboard.core.filter_state import BlogFilters, UserFilters
from blog_dashboard.services.dashboard_controller import DashboardController, DashboardViewState
from blog_dashboard.services.export_downloader import ExportStatus
from blog_dashboard.ui.helpers import blank_values, build_export_filters
from blog_dashboard.ui.ids import IDs

if TYPE_CHECKING:
    from blog_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)

ALL_EXPORT_FIELDS = {"type": IDs.Pattern.EXPORT_FIELD, "domain": ALL, "field": ALL}

_HIDDEN = {"display": "none"}
_SHOWN: dict = {}

# Submit button is locked while an export is in flight
SUBMIT_RUNNING = [
    (Output(IDs.Control.EXPORT_SUBMIT_BTN, "disabled"), True, False),
    (Output(IDs.Control.EXPORT_SUBMIT_BTN, "children"), "Preparing...", "Download Excel"),
]


def toggle_dialog_outputs(
        controller: DashboardController,
        triggered_id: Any,
        instance_id: Optional[str],
        field_outputs: List[Any],
) -> Tuple[Any, ...]:
    """
    Opening starts a fresh dialog instance with every filter empty.
    Cancelling discards the instance and whatever was typed.
    """
    state = DashboardViewState(export_dialog_open=bool(instance_id), export_instance_id=instance_id)

    if triggered_id == IDs.Control.EXPORT_OPEN_BTN:
        state = controller.open_export_dialog(state)
        fields = blank_values(field_outputs)
    else:
        state = controller.close_export_dialog(state)
        fields = dash.no_update

    return state.export_dialog_open, state.export_instance_id, None, False, fields


def submit_export_outputs(
        controller: DashboardController,
        domain: Optional[str],
        field_states: List[dict],
        instance_id: Optional[str],
) -> Tuple[Any, ...]:
    """
    Run one export and map it onto (download, modal open, instance id,
    error text, error shown).
    """
    domain = domain or UserFilters.domain
    try:
        filters = build_export_filters(domain, field_states)
    except ValueError:
        logger.exception("Invalid export form state for %s", domain)
        return dash.no_update, dash.no_update, dash.no_update, "Invalid filter values.", True

    state = DashboardViewState(export_dialog_open=True, export_instance_id=instance_id)
    state, result = controller.submit_export_sync(state, domain, filters)

    if result.status is ExportStatus.IGNORED:
        # another download for this dialog is still running
        raise dash.exceptions.PreventUpdate

    if result.status is ExportStatus.FAILED:
        return dash.no_update, True, state.export_instance_id, f"Download failed: {state.export_error}", True

    return result.delivery, state.export_dialog_open, state.export_instance_id, None, False


def register_export_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # 1. Open / cancel the dialog
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.EXPORT_MODAL, "is_open", allow_duplicate=True),
        Output(IDs.Store.EXPORT_INSTANCE_ID, "data", allow_duplicate=True),
        Output(IDs.Control.EXPORT_ERROR, "children", allow_duplicate=True),
        Output(IDs.Control.EXPORT_ERROR, "is_open", allow_duplicate=True),
        Output(ALL_EXPORT_FIELDS, "value", allow_duplicate=True),
        Input(IDs.Control.EXPORT_OPEN_BTN, "n_clicks"),
        Input(IDs.Control.EXPORT_CLOSE_BTN, "n_clicks"),
        State(IDs.Store.EXPORT_INSTANCE_ID, "data"),
        prevent_initial_call=True,
    )
    def toggle_export_dialog(_open_clicks, _close_clicks, instance_id):
        return toggle_dialog_outputs(
            ctx.controller,
            dash.ctx.triggered_id,
            instance_id,
            dash.ctx.outputs_list[4],
        )

    # ---------------------------------------------------------
    # 2. Clear filters
    # ---------------------------------------------------------
    @app.callback(
        Output(ALL_EXPORT_FIELDS, "value", allow_duplicate=True),
        Input(IDs.Control.EXPORT_CLEAR_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def clear_export_filters(n_clicks):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        return blank_values(dash.ctx.outputs_list)

    # ---------------------------------------------------------
    # 3. Users / Blogs toggle
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.EXPORT_USERS_FIELDS, "style"),
        Output(IDs.Control.EXPORT_BLOGS_FIELDS, "style"),
        Input(IDs.Control.EXPORT_DOMAIN_SELECT, "value"),
    )
    def switch_export_domain(domain):
        if domain == BlogFilters.domain:
            return _HIDDEN, _SHOWN
        return _SHOWN, _HIDDEN

    # ---------------------------------------------------------
    # 4. Submit: compile the query, download, hand the file to the browser
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.EXPORT_DOWNLOAD, "data"),
        Output(IDs.Control.EXPORT_MODAL, "is_open", allow_duplicate=True),
        Output(IDs.Store.EXPORT_INSTANCE_ID, "data", allow_duplicate=True),
        Output(IDs.Control.EXPORT_ERROR, "children", allow_duplicate=True),
        Output(IDs.Control.EXPORT_ERROR, "is_open", allow_duplicate=True),
        Input(IDs.Control.EXPORT_SUBMIT_BTN, "n_clicks"),
        State(IDs.Control.EXPORT_DOMAIN_SELECT, "value"),
        State(ALL_EXPORT_FIELDS, "value"),
        State(IDs.Store.EXPORT_INSTANCE_ID, "data"),
        running=SUBMIT_RUNNING,
        prevent_initial_call=True,
    )
    def submit_export(n_clicks, domain, _field_values, instance_id):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate

        return submit_export_outputs(ctx.controller, domain, dash.ctx.states_list[1], instance_id)
