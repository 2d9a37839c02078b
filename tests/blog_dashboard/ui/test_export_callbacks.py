from __future__ import annotations

from dataclasses import replace

import dash
import pytest

from blog_dashboard.core.exceptions import ExportError
from blog_dashboard.services.export_downloader import ExportResult, ExportStatus
from blog_dashboard.ui.callbacks.callbacks_export import (
    SUBMIT_RUNNING,
    submit_export_outputs,
    toggle_dialog_outputs,
)
from blog_dashboard.ui.ids import IDs, export_field_id


class FakeController:
    """Records export calls and answers with a canned ExportResult."""

    def __init__(self, status=ExportStatus.SAVED):
        self.status = status
        self.submitted = []
        self.closed = []

    def open_export_dialog(self, state):
        return replace(state, export_dialog_open=True, export_instance_id="export-new")

    def close_export_dialog(self, state):
        self.closed.append(state.export_instance_id)
        return replace(state, export_dialog_open=False, export_instance_id=None)

    def submit_export_sync(self, state, domain, filters):
        self.submitted.append((domain, filters))
        if self.status is ExportStatus.SAVED:
            result = ExportResult(self.status, domain, filename=f"{domain}.xlsx", delivery={"filename": f"{domain}.xlsx"})
            return replace(state, export_dialog_open=False, export_instance_id=None), result
        if self.status is ExportStatus.FAILED:
            error = ExportError("Export of users failed with HTTP 500", domain=domain, status_code=500)
            result = ExportResult(self.status, domain, error=error)
            return replace(state, export_error=str(error)), result
        return state, ExportResult(self.status, domain)


def _field_states():
    return [
        {"id": export_field_id("users", "role"), "property": "value", "value": "admin"},
        {"id": export_field_id("users", "isActive"), "property": "value", "value": "true"},
        {"id": export_field_id("blogs", "title"), "property": "value", "value": "ignored"},
    ]


def test_opening_dialog_blanks_every_field():
    controller = FakeController()

    is_open, instance_id, error, error_open, fields = toggle_dialog_outputs(
        controller, IDs.Control.EXPORT_OPEN_BTN, None, [{}, {}, {}]
    )

    assert is_open
    assert instance_id == "export-new"
    assert (error, error_open) == (None, False)
    assert fields == ["", "", ""]


def test_cancel_discards_dialog_instance():
    controller = FakeController()

    is_open, instance_id, _, _, fields = toggle_dialog_outputs(
        controller, IDs.Control.EXPORT_CLOSE_BTN, "export-old", [{}, {}]
    )

    assert not is_open
    assert instance_id is None
    assert fields is dash.no_update
    assert controller.closed == ["export-old"]


def test_saved_export_delivers_file_and_closes_dialog():
    controller = FakeController(ExportStatus.SAVED)

    download, is_open, instance_id, error, error_open = submit_export_outputs(
        controller, "users", _field_states(), "export-1"
    )

    assert download == {"filename": "users.xlsx"}
    assert not is_open
    assert instance_id is None
    assert (error, error_open) == (None, False)

    domain, filters = controller.submitted[0]
    assert domain == "users"
    assert filters.role == "admin"
    assert filters.is_active == "true"


def test_failed_export_keeps_dialog_open_with_inline_error():
    controller = FakeController(ExportStatus.FAILED)

    download, is_open, instance_id, error, error_open = submit_export_outputs(
        controller, "users", _field_states(), "export-1"
    )

    assert download is dash.no_update
    assert is_open
    assert instance_id == "export-1"
    assert "HTTP 500" in error
    assert error_open


def test_ignored_export_changes_nothing():
    controller = FakeController(ExportStatus.IGNORED)

    with pytest.raises(dash.exceptions.PreventUpdate):
        submit_export_outputs(controller, "blogs", _field_states(), "export-1")


def test_missing_domain_defaults_to_users():
    controller = FakeController()

    submit_export_outputs(controller, None, _field_states(), "export-1")

    assert controller.submitted[0][0] == "users"


def test_submit_button_locked_while_running():
    targets = {str(output): (running, done) for output, running, done in SUBMIT_RUNNING}

    assert targets[f"{IDs.Control.EXPORT_SUBMIT_BTN}.disabled"] == (True, False)
    assert targets[f"{IDs.Control.EXPORT_SUBMIT_BTN}.children"] == ("Preparing...", "Download Excel")
