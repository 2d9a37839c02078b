from __future__ import annotations

import asyncio
import logging
import os
import tempfile
import threading
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Set

import httpx
from dash import dcc

from blog_dashboard.core.exceptions import ExportError
from blog_dashboard.core.query_compiler import XLSX_MEDIA_TYPE, ExportRequest
from blog_dashboard.services.api_client import AnalyticsApiClient

logger = logging.getLogger(__name__)

# (path, filename, media_type) -> whatever the caller needs to hand the file over
DeliverFn = Callable[[str, str, str], Any]
ErrorHook = Callable[[ExportError], None]


def send_file_download(path: str, filename: str, media_type: str) -> Dict[str, Any]:
    """Default delivery: a dcc.Download payload the browser saves as `filename`."""
    return dcc.send_file(path, filename=filename, type=media_type)


class DownloadState(str, Enum):
    IDLE = "idle"
    DOWNLOADING = "downloading"
    FAILED = "failed"


class ExportStatus(str, Enum):
    SAVED = "saved"
    IGNORED = "ignored"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    status: ExportStatus
    domain: str
    filename: Optional[str] = None
    delivery: Any = None
    error: Optional[ExportError] = None

    @property
    def ok(self) -> bool:
        return self.status is ExportStatus.SAVED


class ExportDownloader:
    """
    Runs one export at a time and turns the binary response into a saved file.

    State machine:
        IDLE -> DOWNLOADING -> IDLE            (success)
        IDLE -> DOWNLOADING -> FAILED -> IDLE  (error, reported then cleared)

    A download requested while another is in flight is ignored without any
    network call. Errors never propagate out of download(); they come back in
    the ExportResult and are passed to `on_error` when given.
    """

    def __init__(
            self,
            client: AnalyticsApiClient,
            *,
            deliver: DeliverFn = send_file_download,
            on_error: Optional[ErrorHook] = None,
    ) -> None:
        self._client = client
        self._deliver = deliver
        self._on_error = on_error
        self._lock = threading.Lock()
        self._state = DownloadState.IDLE
        self.last_error: Optional[ExportError] = None

    @property
    def state(self) -> DownloadState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state is DownloadState.DOWNLOADING

    def _try_begin(self) -> bool:
        with self._lock:
            if self._state is DownloadState.DOWNLOADING:
                return False
            self._state = DownloadState.DOWNLOADING
            return True

    def _set_state(self, state: DownloadState) -> None:
        with self._lock:
            self._state = state

    async def download(self, domain: str, query: str = "") -> ExportResult:
        if not self._try_begin():
            logger.info("export_ignored_busy", extra={"domain": domain})
            return ExportResult(status=ExportStatus.IGNORED, domain=domain)

        request = ExportRequest(domain=domain, query=query)
        try:
            payload = await self._fetch(request)
            delivery = self._save(request, payload)
        except ExportError as e:
            self._set_state(DownloadState.FAILED)
            self.last_error = e
            logger.error(
                "export_failed",
                extra={"domain": domain, "status_code": e.status_code, "error": str(e)},
            )
            if self._on_error is not None:
                try:
                    self._on_error(e)
                except Exception:
                    logger.exception("export_error_hook_failed", extra={"domain": domain})
            return ExportResult(status=ExportStatus.FAILED, domain=domain, error=e)
        finally:
            # FAILED is only observable while the error is being reported
            self._set_state(DownloadState.IDLE)

        self.last_error = None
        logger.info("export_saved", extra={"domain": domain, "bytes": len(payload)})
        return ExportResult(
            status=ExportStatus.SAVED,
            domain=domain,
            filename=request.filename,
            delivery=delivery,
        )

    def download_sync(self, domain: str, query: str = "") -> ExportResult:
        return asyncio.run(self.download(domain, query))

    async def _fetch(self, request: ExportRequest) -> bytes:
        try:
            async with self._client.session() as session:
                response = await session.get(request.path)
                response.raise_for_status()
                return response.content
        except httpx.HTTPStatusError as e:
            raise ExportError(
                f"Export of {request.domain} failed with HTTP {e.response.status_code}",
                domain=request.domain,
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ExportError(
                f"Export of {request.domain} failed: {e}",
                domain=request.domain,
            ) from e

    def _save(self, request: ExportRequest, payload: bytes) -> Any:
        """
        Write the payload to a transient file, hand it to the delivery hook,
        then remove the file whether or not delivery succeeded.
        """
        path: Optional[str] = None
        try:
            fd, path = tempfile.mkstemp(prefix=f"{request.domain}-", suffix=".xlsx")
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            return self._deliver(path, request.filename, XLSX_MEDIA_TYPE)
        except Exception as e:
            raise ExportError(
                f"Could not save {request.filename}: {e}",
                domain=request.domain,
            ) from e
        finally:
            if path is not None:
                try:
                    os.unlink(path)
                except FileNotFoundError:
                    pass


class DownloaderPool:
    """
    One ExportDownloader per export dialog instance, so single-flight is
    scoped to a dialog rather than shared by every browser session.

    A dialog closed mid-download is retired and dropped by release() once its
    download finishes. Dialogs that are never closed (tab closed) are evicted
    oldest-first when more than max_size are held; running downloaders are
    never evicted.
    """

    def __init__(self, factory: Callable[[], ExportDownloader], max_size: int = 64) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._factory = factory
        self._max_size = max_size
        self._lock = threading.Lock()
        self._downloaders: "OrderedDict[str, ExportDownloader]" = OrderedDict()
        self._retired: Set[str] = set()

    def get(self, instance_id: str) -> ExportDownloader:
        with self._lock:
            downloader = self._downloaders.get(instance_id)
            if downloader is None:
                downloader = self._factory()
                self._downloaders[instance_id] = downloader
                self._evict_idle(keep=instance_id)
            else:
                self._downloaders.move_to_end(instance_id)
            return downloader

    def discard(self, instance_id: Optional[str]) -> None:
        if not instance_id:
            return
        with self._lock:
            downloader = self._downloaders.get(instance_id)
            if downloader is None:
                return
            if downloader.busy:
                self._retired.add(instance_id)
            else:
                self._drop(instance_id)

    def release(self, instance_id: Optional[str]) -> None:
        """Called after a download for instance_id has returned."""
        with self._lock:
            if instance_id not in self._retired:
                return
            downloader = self._downloaders.get(instance_id)
            if downloader is None or not downloader.busy:
                self._drop(instance_id)

    def _drop(self, instance_id: str) -> None:
        self._downloaders.pop(instance_id, None)
        self._retired.discard(instance_id)

    def _evict_idle(self, keep: str) -> None:
        for key in list(self._downloaders):
            if len(self._downloaders) <= self._max_size:
                break
            if key != keep and not self._downloaders[key].busy:
                self._drop(key)
                logger.info("export_downloader_evicted", extra={"instance_id": key})

    def __len__(self) -> int:
        return len(self._downloaders)

    def __contains__(self, instance_id: object) -> bool:
        return instance_id in self._downloaders
