"""
Core domain layer: filter state, query compilation, the dashboard snapshot
and the error taxonomy.
"""

from .exceptions import AggregationError, ConfigError, DashboardError, ExportError
from .filter_state import BlogFilters, DashboardFilters, ExportFilters, UserFilters
from .query_compiler import ExportRequest, compile_query
from .snapshot import DashboardSnapshot, Summary

__all__ = [
    "AggregationError",
    "BlogFilters",
    "ConfigError",
    "DashboardError",
    "DashboardFilters",
    "DashboardSnapshot",
    "ExportError",
    "ExportFilters",
    "ExportRequest",
    "Summary",
    "UserFilters",
    "compile_query",
]
