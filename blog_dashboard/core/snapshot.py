from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

import pandas as pd

Point = Dict[str, Any]

# Columns each series is expected to carry; used to build empty frames.
SERIES_COLUMNS: Dict[str, Tuple[str, str]] = {
    "usersGrowth": ("date", "users"),
    "blogsCreated": ("period", "blogs"),
    "blogsByCategory": ("category", "count"),
    "engagementTrend": ("date", "engagement"),
}


@dataclass(frozen=True)
class Summary:
    """Headline counters. Values are whatever the backend sent; absent keys read as 0."""

    total_users: Any = 0
    total_blogs: Any = 0
    total_views: Any = 0
    engagement_rate: Any = 0

    @classmethod
    def from_payload(cls, payload: Any) -> Summary:
        if not isinstance(payload, Mapping):
            return cls()
        return cls(
            total_users=payload.get("totalUsers", 0),
            total_blogs=payload.get("totalBlogs", 0),
            total_views=payload.get("totalViews", 0),
            engagement_rate=payload.get("engagementRate", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalUsers": self.total_users,
            "totalBlogs": self.total_blogs,
            "totalViews": self.total_views,
            "engagementRate": self.engagement_rate,
        }


def series_from_payload(payload: Any) -> Tuple[Point, ...]:
    """
    Extract the `data` list from an analytics response body.

    A missing, null or empty `data` is a valid "no points" state and yields
    an empty tuple.
    """
    if not isinstance(payload, Mapping):
        return ()
    data = payload.get("data") or []
    return tuple(dict(p) for p in data if isinstance(p, Mapping))


@dataclass(frozen=True)
class DashboardSnapshot:
    """
    The complete set of dashboard series, published together.

    Instances are immutable and are replaced as a whole; there is no way to
    update a single series in place.
    """

    summary: Summary = field(default_factory=Summary)
    users_growth: Tuple[Point, ...] = ()
    blogs_created: Tuple[Point, ...] = ()
    blogs_by_category: Tuple[Point, ...] = ()
    engagement_trend: Tuple[Point, ...] = ()

    @classmethod
    def from_payloads(
            cls,
            *,
            summary: Any,
            users_growth: Any,
            blogs_created: Any,
            blogs_by_category: Any,
            engagement_trend: Any,
    ) -> DashboardSnapshot:
        return cls(
            summary=Summary.from_payload(summary),
            users_growth=series_from_payload(users_growth),
            blogs_created=series_from_payload(blogs_created),
            blogs_by_category=series_from_payload(blogs_by_category),
            engagement_trend=series_from_payload(engagement_trend),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "usersGrowth": [dict(p) for p in self.users_growth],
            "blogsCreated": [dict(p) for p in self.blogs_created],
            "blogsByCategory": [dict(p) for p in self.blogs_by_category],
            "engagementTrend": [dict(p) for p in self.engagement_trend],
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional[DashboardSnapshot]:
        if not isinstance(data, Mapping) or "summary" not in data:
            return None
        return cls(
            summary=Summary.from_payload(data.get("summary")),
            users_growth=series_from_payload({"data": data.get("usersGrowth")}),
            blogs_created=series_from_payload({"data": data.get("blogsCreated")}),
            blogs_by_category=series_from_payload({"data": data.get("blogsByCategory")}),
            engagement_trend=series_from_payload({"data": data.get("engagementTrend")}),
        )

    def series(self, name: str) -> Tuple[Point, ...]:
        return {
            "usersGrowth": self.users_growth,
            "blogsCreated": self.blogs_created,
            "blogsByCategory": self.blogs_by_category,
            "engagementTrend": self.engagement_trend,
        }[name]

    def series_frame(self, name: str) -> pd.DataFrame:
        """Series as a DataFrame for plotting, keeping backend order."""
        points = self.series(name)
        if not points:
            return pd.DataFrame(columns=list(SERIES_COLUMNS[name]))
        return pd.DataFrame.from_records(list(points))
