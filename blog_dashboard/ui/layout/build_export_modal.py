from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html

from blog_dashboard.core.filter_state import BlogFilters, UserFilters
from blog_dashboard.ui.ids import IDs, export_field_id


@dataclass(frozen=True)
class FieldSpec:
    """How one filter field is rendered in the export form."""
    name: str
    label: str
    input_type: str = "text"
    placeholder: Optional[str] = None
    min: Optional[int] = None
    options: Optional[Sequence[Dict[str, str]]] = None


USER_FIELD_SPECS: List[FieldSpec] = [
    FieldSpec(
        "role",
        "Role",
        input_type="select",
        options=[
            {"label": "Any", "value": ""},
            {"label": "User", "value": "user"},
            {"label": "Admin", "value": "admin"},
        ],
    ),
    FieldSpec(
        "isActive",
        "Status",
        input_type="select",
        options=[
            {"label": "Any", "value": ""},
            {"label": "Active", "value": "true"},
            {"label": "Inactive", "value": "false"},
        ],
    ),
    FieldSpec("name", "Name", placeholder="Search by name"),
    FieldSpec("email", "Email", placeholder="user@email.com"),
    FieldSpec("startDate", "Created from", input_type="date"),
    FieldSpec("endDate", "Created to", input_type="date"),
    FieldSpec("count", "Limit", input_type="number", min=1, placeholder="Leave blank for all"),
]

BLOG_FIELD_SPECS: List[FieldSpec] = [
    FieldSpec("title", "Title", placeholder="Search by title"),
    FieldSpec("content", "Content", placeholder="Text contained in content"),
    FieldSpec("authorId", "Author Id", placeholder="author id"),
    FieldSpec("category", "Category", placeholder="tech, lifestyle"),
    FieldSpec("tags", "Tags", placeholder="tag1,tag2"),
    FieldSpec("status", "Status", placeholder="draft, published"),
    FieldSpec("views", "Min views", input_type="number", min=0, placeholder="0"),
    FieldSpec("likes", "Min likes", input_type="number", min=0, placeholder="0"),
    FieldSpec("commentsCount", "Min comments", input_type="number", min=0, placeholder="0"),
    FieldSpec("startDate", "Created from", input_type="date"),
    FieldSpec("endDate", "Created to", input_type="date"),
    FieldSpec("count", "Limit", input_type="number", min=1, placeholder="Leave blank for all"),
]

FIELD_SPECS_BY_DOMAIN: Dict[str, List[FieldSpec]] = {
    UserFilters.domain: USER_FIELD_SPECS,
    BlogFilters.domain: BLOG_FIELD_SPECS,
}


def _field_input(domain: str, spec: FieldSpec):
    field_id = export_field_id(domain, spec.name)
    if spec.input_type == "select":
        return dbc.Select(id=field_id, options=list(spec.options or []), value="")
    kwargs = {}
    if spec.min is not None:
        kwargs["min"] = spec.min
    return dbc.Input(
        id=field_id,
        type=spec.input_type,
        placeholder=spec.placeholder,
        value="",
        **kwargs,
    )


def build_field_grid(domain: str, specs: Sequence[FieldSpec]) -> dbc.Row:
    return dbc.Row(
        [
            dbc.Col(
                html.Div(
                    [
                        dbc.Label(spec.label, className="form-label small"),
                        _field_input(domain, spec),
                    ]
                ),
                sm=6,
                className="mb-3",
            )
            for spec in specs
        ],
        className="gx-3",
    )


def build_export_modal() -> dbc.Modal:
    """
    Export dialog:
    - Users/Blogs toggle
    - the selected domain's filter fields (both grids are rendered, one is hidden)
    - Clear filters / Download Excel
    """
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Export to Excel"), close_button=False),
            dbc.ModalBody(
                [
                    dbc.RadioItems(
                        id=IDs.Control.EXPORT_DOMAIN_SELECT,
                        options=[
                            {"label": "Users", "value": UserFilters.domain},
                            {"label": "Blogs", "value": BlogFilters.domain},
                        ],
                        value=UserFilters.domain,
                        inline=True,
                        className="btn-group mb-4",
                        inputClassName="btn-check",
                        labelClassName="btn btn-outline-primary",
                        labelCheckedClassName="active",
                    ),
                    html.Div(
                        build_field_grid(UserFilters.domain, USER_FIELD_SPECS),
                        id=IDs.Control.EXPORT_USERS_FIELDS,
                    ),
                    html.Div(
                        build_field_grid(BlogFilters.domain, BLOG_FIELD_SPECS),
                        id=IDs.Control.EXPORT_BLOGS_FIELDS,
                        style={"display": "none"},
                    ),
                    dbc.Alert(
                        id=IDs.Control.EXPORT_ERROR,
                        color="danger",
                        is_open=False,
                        className="small mb-0",
                    ),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Cancel", id=IDs.Control.EXPORT_CLOSE_BTN, color="link"),
                    dbc.Button("Clear filters", id=IDs.Control.EXPORT_CLEAR_BTN, color="light"),
                    dbc.Button("Download Excel", id=IDs.Control.EXPORT_SUBMIT_BTN, color="primary"),
                    dcc.Download(id=IDs.Control.EXPORT_DOWNLOAD),
                ]
            ),
        ],
        id=IDs.Control.EXPORT_MODAL,
        is_open=False,
        size="lg",
        backdrop="static",
    )
