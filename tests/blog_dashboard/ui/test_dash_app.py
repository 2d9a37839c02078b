from __future__ import annotations

import json

import httpx
import pytest

from blog_dashboard.core.exceptions import ConfigError
from blog_dashboard.ui.dash_app import create_dash_app
from blog_dashboard.ui.ids import IDs, export_field_id


def _component_ids(layout):
    ids = [getattr(layout, "id", None)]
    ids.extend(getattr(c, "id", None) for c in layout._traverse())
    return [i for i in ids if i is not None]


def _offline_transport():
    return httpx.MockTransport(lambda request: httpx.Response(503))


def test_create_dash_app_uses_config_title(tmp_path):
    (tmp_path / "global.json").write_text(json.dumps({"ui_title": "Blog Analytics"}))

    app = create_dash_app(tmp_path, transport=_offline_transport())

    assert app.title == "Blog Analytics"
    assert len(app.callback_map) > 0


def test_layout_contains_dashboard_and_export_dialog(tmp_path):
    app = create_dash_app(tmp_path, transport=_offline_transport())

    ids = _component_ids(app.layout)

    for expected in (
        IDs.Store.SNAPSHOT,
        IDs.Store.DASHBOARD_ERROR,
        IDs.Control.START_DATE,
        IDs.Control.END_DATE,
        IDs.Control.GROUP_BY_SELECT,
        IDs.Control.USERS_GROWTH_GRAPH,
        IDs.Control.BLOGS_BY_CATEGORY_GRAPH,
        IDs.Control.EXPORT_MODAL,
        IDs.Control.EXPORT_DOWNLOAD,
    ):
        assert expected in ids

    assert export_field_id("users", "isActive") in ids
    assert export_field_id("blogs", "commentsCount") in ids


def test_submit_callback_locks_button_while_running(tmp_path):
    app = create_dash_app(tmp_path, transport=_offline_transport())

    running = [spec["running"] for spec in app._callback_list if spec.get("running")]

    assert len(running) == 1
    assert running[0]["running"] == {
        f"{IDs.Control.EXPORT_SUBMIT_BTN}.disabled": True,
        f"{IDs.Control.EXPORT_SUBMIT_BTN}.children": "Preparing...",
    }
    assert running[0]["runningOff"][f"{IDs.Control.EXPORT_SUBMIT_BTN}.disabled"] is False


def test_invalid_api_base_fails_at_startup(tmp_path):
    (tmp_path / "global.json").write_text(json.dumps({"api_base": "http://localhost:abc"}))

    with pytest.raises(ConfigError):
        create_dash_app(tmp_path, transport=_offline_transport())
