from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

import httpx

from blog_dashboard.core.exceptions import AggregationError, SeriesFailure
from blog_dashboard.core.filter_state import DashboardFilters
from blog_dashboard.core.query_compiler import encode_pairs, with_query
from blog_dashboard.core.snapshot import DashboardSnapshot
from blog_dashboard.services.api_client import AnalyticsApiClient

logger = logging.getLogger(__name__)

SUMMARY_PATH = "/analytics/summary"
USERS_GROWTH_PATH = "/analytics/users-growth"
BLOGS_CREATED_PATH = "/analytics/blogs-created"
BLOGS_BY_CATEGORY_PATH = "/analytics/blogs-by-category"
ENGAGEMENT_TREND_PATH = "/analytics/engagement-trend"


def build_series_paths(filters: DashboardFilters) -> Dict[str, str]:
    """
    Request path (with query) for each of the five series.

    users-growth only carries the date bounds that are set; blogs-created
    always carries groupBy.
    """
    growth_query = encode_pairs([("startDate", filters.start_date), ("endDate", filters.end_date)])
    created_query = encode_pairs([("groupBy", filters.group_by)])
    return {
        "summary": SUMMARY_PATH,
        "usersGrowth": with_query(USERS_GROWTH_PATH, growth_query),
        "blogsCreated": with_query(BLOGS_CREATED_PATH, created_query),
        "blogsByCategory": BLOGS_BY_CATEGORY_PATH,
        "engagementTrend": ENGAGEMENT_TREND_PATH,
    }


class AggregateFetcher:
    """
    Fetches the five analytics series concurrently and merges them into one
    DashboardSnapshot.

    The join is all-or-nothing: every request is awaited, and if any of them
    failed the whole fetch raises AggregationError and no snapshot is built.
    There is no caching; every call performs exactly one request per series.
    """

    def __init__(self, client: AnalyticsApiClient) -> None:
        self._client = client

    async def _fetch_one(self, session: httpx.AsyncClient, path: str) -> Any:
        response = await session.get(path)
        response.raise_for_status()
        return response.json()

    async def fetch_snapshot(self, filters: DashboardFilters) -> DashboardSnapshot:
        paths = build_series_paths(filters)
        names: List[str] = list(paths)

        logger.info("snapshot_fetch_start", extra={"filters": filters.to_dict()})

        results: List[Any]
        try:
            async with self._client.session() as session:
                results = await asyncio.gather(
                    *(self._fetch_one(session, paths[name]) for name in names),
                    return_exceptions=True,
                )
        except httpx.InvalidURL as e:
            # base URL rejected before any request could be sent
            results = [e] * len(names)

        payloads: Dict[str, Any] = {}
        failures: List[SeriesFailure] = []
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                failures.append(SeriesFailure(series=name, message=_describe(result)))
            else:
                payloads[name] = result

        if failures:
            logger.warning(
                "snapshot_fetch_failed",
                extra={"failed_series": [f.series for f in failures]},
            )
            raise AggregationError(failures)

        snapshot = DashboardSnapshot.from_payloads(
            summary=payloads["summary"],
            users_growth=payloads["usersGrowth"],
            blogs_created=payloads["blogsCreated"],
            blogs_by_category=payloads["blogsByCategory"],
            engagement_trend=payloads["engagementTrend"],
        )
        logger.info("snapshot_fetch_done", extra=_series_sizes(snapshot))
        return snapshot

    def fetch_snapshot_sync(self, filters: DashboardFilters) -> DashboardSnapshot:
        """Blocking wrapper for callers without a running event loop (Dash callbacks)."""
        return asyncio.run(self.fetch_snapshot(filters))


def _describe(exc: BaseException) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}"
    if isinstance(exc, httpx.HTTPError):
        return f"{type(exc).__name__}: {exc}"
    if isinstance(exc, ValueError):
        # response.json() on a non-JSON body
        return f"invalid JSON body: {exc}"
    return f"{type(exc).__name__}: {exc}"


def _series_sizes(snapshot: DashboardSnapshot) -> Dict[str, int]:
    return {
        "n_users_growth": len(snapshot.users_growth),
        "n_blogs_created": len(snapshot.blogs_created),
        "n_blogs_by_category": len(snapshot.blogs_by_category),
        "n_engagement_trend": len(snapshot.engagement_trend),
    }
