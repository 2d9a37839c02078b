from __future__ import annotations

__all__ = ["IDs", "export_field_id"]


class IDs:
    class Store:
        SNAPSHOT = "dashboard-snapshot"
        DASHBOARD_ERROR = "dashboard-error"
        DASHBOARD_FILTERS = "dashboard-filters"
        EXPORT_INSTANCE_ID = "export-instance-id"

    class Control:
        # Dashboard filters
        START_DATE = "start-date-input"
        END_DATE = "end-date-input"
        RESET_DATES_BTN = "reset-dates-btn"
        GROUP_BY_SELECT = "group-by-select"

        # Dashboard content
        DASHBOARD_ERROR_ALERT = "dashboard-error-alert"
        SUMMARY_CARDS = "summary-cards"
        USERS_GROWTH_GRAPH = "users-growth-graph"
        BLOGS_CREATED_GRAPH = "blogs-created-graph"
        BLOGS_BY_CATEGORY_GRAPH = "blogs-by-category-graph"
        ENGAGEMENT_TREND_GRAPH = "engagement-trend-graph"

        # Export dialog
        EXPORT_OPEN_BTN = "export-open-btn"
        EXPORT_MODAL = "export-modal"
        EXPORT_CLOSE_BTN = "export-close-btn"
        EXPORT_DOMAIN_SELECT = "export-domain-select"
        EXPORT_USERS_FIELDS = "export-users-fields"
        EXPORT_BLOGS_FIELDS = "export-blogs-fields"
        EXPORT_CLEAR_BTN = "export-clear-btn"
        EXPORT_SUBMIT_BTN = "export-submit-btn"
        EXPORT_ERROR = "export-error"
        EXPORT_DOWNLOAD = "export-download"

    class Pattern:
        # pattern-matching "type" strings
        EXPORT_FIELD = "export-field"


def export_field_id(domain: str, field: str) -> dict:
    return {"type": IDs.Pattern.EXPORT_FIELD, "domain": domain, "field": field}
