from __future__ import annotations

import pytest

from blog_dashboard.core.filter_state import BlogFilters, UserFilters
from blog_dashboard.core.query_compiler import compile_query
from blog_dashboard.ui.helpers import blank_values, build_export_filters, collect_field_values
from blog_dashboard.ui.ids import export_field_id
from blog_dashboard.ui.layout.build_export_modal import FIELD_SPECS_BY_DOMAIN


def _state(domain, field, value):
    return {"id": export_field_id(domain, field), "property": "value", "value": value}


def test_collect_field_values_groups_by_domain():
    states = [
        _state("users", "role", "admin"),
        _state("blogs", "title", "hello"),
        _state("users", "count", 5),
        {"id": "something-else", "property": "value", "value": "x"},
    ]

    assert collect_field_values(states) == {
        "users": {"role": "admin", "count": 5},
        "blogs": {"title": "hello"},
    }


def test_build_export_filters_normalises_widget_values():
    states = [
        _state("users", "role", "admin"),
        _state("users", "isActive", "true"),
        _state("users", "count", 10),
        _state("users", "name", None),
        _state("blogs", "title", "ignored"),
    ]

    filters = build_export_filters("users", states)

    assert filters == UserFilters(role="admin", is_active="true", count="10")
    assert compile_query("users", filters) == "role=admin&isActive=true&count=10"


def test_build_export_filters_without_states_is_empty():
    assert build_export_filters("blogs", []) == BlogFilters()


def test_blank_values_one_per_output():
    assert blank_values([{}, {}, {}]) == ["", "", ""]


@pytest.mark.parametrize("domain,cls", [("users", UserFilters), ("blogs", BlogFilters)])
def test_form_renders_every_filter_field_in_order(domain, cls):
    assert [spec.name for spec in FIELD_SPECS_BY_DOMAIN[domain]] == cls.field_names()
