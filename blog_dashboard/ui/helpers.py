from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from blog_dashboard.core.filter_state import ExportFilters, filters_class_for
from blog_dashboard.ui.ids import IDs


def collect_field_values(states: Iterable[Mapping[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Group pattern-matched export field states by domain.

    `states` is one entry of dash.ctx.states_list for an ALL pattern: a list
    of {"id": {"type", "domain", "field"}, "property": "value", "value": ...}.
    """
    by_domain: Dict[str, Dict[str, Any]] = {}
    for entry in states:
        comp_id = entry.get("id")
        if not isinstance(comp_id, Mapping) or comp_id.get("type") != IDs.Pattern.EXPORT_FIELD:
            continue
        by_domain.setdefault(comp_id["domain"], {})[comp_id["field"]] = entry.get("value")
    return by_domain


def build_export_filters(domain: str, states: Iterable[Mapping[str, Any]]) -> ExportFilters:
    """Build the domain's FilterState from the current form values."""
    values = collect_field_values(states).get(domain, {})
    return filters_class_for(domain).from_dict(values)


def blank_values(outputs: List[Any]) -> List[str]:
    return ["" for _ in outputs]
