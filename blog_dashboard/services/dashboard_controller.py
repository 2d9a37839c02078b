from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from blog_dashboard.core.exceptions import AggregationError
from blog_dashboard.core.filter_state import AnyFilters, DashboardFilters
from blog_dashboard.core.query_compiler import ExportRequest
from blog_dashboard.core.snapshot import DashboardSnapshot
from blog_dashboard.services.aggregate_fetcher import AggregateFetcher
from blog_dashboard.services.export_downloader import DownloaderPool, ExportResult, ExportStatus

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def generate_dialog_id() -> str:
    return f"export-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class DashboardViewState:
    """
    Everything the page shows, replaced as a whole after each operation.

    - snapshot: last successfully published snapshot (kept across failures)
    - error: message shown instead of the dashboard content, None when healthy
    - export_instance_id: identifies the currently open export dialog
    """
    filters: DashboardFilters = DashboardFilters()
    snapshot: Optional[DashboardSnapshot] = None
    error: Optional[str] = None
    loading: bool = False
    export_dialog_open: bool = False
    export_instance_id: Optional[str] = None
    export_error: Optional[str] = None

    @property
    def visible_snapshot(self) -> Optional[DashboardSnapshot]:
        return None if self.error else self.snapshot


class DashboardController:
    """
    Glue between user actions and the fetch/export services.

    Owns no business rules: filter changes go to the AggregateFetcher, export
    submissions are compiled and handed to the dialog's ExportDownloader.
    """

    def __init__(self, fetcher: AggregateFetcher, downloaders: DownloaderPool) -> None:
        self._fetcher = fetcher
        self._downloaders = downloaders

    # ------------------------------------------------------------------
    # Dashboard filters -> snapshot
    # ------------------------------------------------------------------
    async def refresh(self, state: DashboardViewState) -> DashboardViewState:
        state = replace(state, loading=True)
        try:
            snapshot = await self._fetcher.fetch_snapshot(state.filters)
        except AggregationError as e:
            logger.error("dashboard_refresh_failed", extra={"failed_series": e.failed_series})
            return replace(state, loading=False, error=str(e))
        return replace(state, snapshot=snapshot, error=None, loading=False)

    async def update_filters(
            self,
            state: DashboardViewState,
            *,
            start_date: Any = _UNSET,
            end_date: Any = _UNSET,
            group_by: Any = _UNSET,
    ) -> DashboardViewState:
        current = state.filters
        updated = DashboardFilters(
            start_date=current.start_date if start_date is _UNSET else start_date,
            end_date=current.end_date if end_date is _UNSET else end_date,
            group_by=current.group_by if group_by is _UNSET else group_by,
        )
        if updated == current and state.snapshot is not None and state.error is None:
            return state
        return await self.refresh(replace(state, filters=updated))

    async def reset_dates(self, state: DashboardViewState) -> DashboardViewState:
        return await self.update_filters(state, start_date="", end_date="")

    def update_filters_sync(self, state: DashboardViewState, **changes: Any) -> DashboardViewState:
        """Blocking update_filters for callers without an event loop (Dash callbacks)."""
        return asyncio.run(self.update_filters(state, **changes))

    def reset_dates_sync(self, state: DashboardViewState) -> DashboardViewState:
        return asyncio.run(self.reset_dates(state))

    # ------------------------------------------------------------------
    # Export dialog
    # ------------------------------------------------------------------
    def open_export_dialog(self, state: DashboardViewState) -> DashboardViewState:
        return replace(
            state,
            export_dialog_open=True,
            export_instance_id=generate_dialog_id(),
            export_error=None,
        )

    def close_export_dialog(self, state: DashboardViewState) -> DashboardViewState:
        self._downloaders.discard(state.export_instance_id)
        return replace(state, export_dialog_open=False, export_instance_id=None, export_error=None)

    async def submit_export(
            self,
            state: DashboardViewState,
            domain: str,
            filters: AnyFilters,
    ) -> Tuple[DashboardViewState, ExportResult]:
        instance_id = state.export_instance_id or generate_dialog_id()
        request = ExportRequest.from_filters(domain, filters)
        downloader = self._downloaders.get(instance_id)

        try:
            result = await downloader.download(request.domain, request.query)
        finally:
            # drops the entry if the dialog was closed while this download ran
            self._downloaders.release(instance_id)

        if result.status is ExportStatus.SAVED:
            return self.close_export_dialog(replace(state, export_instance_id=instance_id)), result
        if result.status is ExportStatus.FAILED:
            message = str(result.error) if result.error else "Download failed"
            return replace(state, export_instance_id=instance_id, export_error=message), result
        return replace(state, export_instance_id=instance_id), result

    def submit_export_sync(
            self,
            state: DashboardViewState,
            domain: str,
            filters: AnyFilters,
    ) -> Tuple[DashboardViewState, ExportResult]:
        return asyncio.run(self.submit_export(state, domain, filters))
