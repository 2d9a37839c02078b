from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


class DashboardError(Exception):
    """Base exception for all blog_dashboard errors"""
    pass


class ConfigError(DashboardError):
    """Invalid or inconsistent global.json or environment override"""
    pass


@dataclass(frozen=True)
class SeriesFailure:
    series: str
    message: str


class AggregationError(DashboardError):
    """
    One or more of the analytics requests behind a snapshot failed
    (transport error, non-2xx status or an undecodable body).
    """

    def __init__(self, failures: List[SeriesFailure]):
        self.failures = list(failures)
        details = "; ".join(f"{f.series}: {f.message}" for f in self.failures)
        super().__init__(f"Failed to fetch analytics data ({details})")

    @property
    def failed_series(self) -> List[str]:
        return [f.series for f in self.failures]


class ExportError(DashboardError):
    """The export request failed or its payload could not be saved as a file"""

    def __init__(self, message: str, *, domain: str, status_code: Optional[int] = None):
        self.domain = domain
        self.status_code = status_code
        super().__init__(message)
