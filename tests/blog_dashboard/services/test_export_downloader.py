from __future__ import annotations

import asyncio
import base64
import os

import httpx
import pytest

from blog_dashboard.core.exceptions import ExportError
from blog_dashboard.core.query_compiler import XLSX_MEDIA_TYPE
from blog_dashboard.services.api_client import AnalyticsApiClient
from blog_dashboard.services.export_downloader import (
    DownloaderPool,
    DownloadState,
    ExportDownloader,
    ExportStatus,
    send_file_download,
)

BASE = "http://api.test"
XLSX_BYTES = b"PK\x03\x04fake-workbook"


class RecordingDelivery:
    """Stands in for dcc.send_file; checks the transient file while it exists."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    def __call__(self, path, filename, media_type):
        with open(path, "rb") as f:
            content = f.read()
        self.calls.append({"path": path, "filename": filename, "media_type": media_type, "content": content})
        if self.fail:
            raise OSError("disk full")
        return {"filename": filename}


def _make_downloader(handler, **kwargs) -> ExportDownloader:
    client = AnalyticsApiClient(BASE, transport=httpx.MockTransport(handler))
    return ExportDownloader(client, **kwargs)


def _ok_handler(requests, content_type=XLSX_MEDIA_TYPE):
    def handler(request):
        requests.append(request)
        return httpx.Response(200, content=XLSX_BYTES, headers={"content-type": content_type})

    return handler


def test_users_export_saved_as_users_xlsx():
    requests = []
    delivery = RecordingDelivery()
    downloader = _make_downloader(_ok_handler(requests), deliver=delivery)

    result = asyncio.run(downloader.download("users", "role=admin&isActive=true"))

    assert result.status is ExportStatus.SAVED
    assert result.ok
    assert result.filename == "users.xlsx"
    assert result.delivery == {"filename": "users.xlsx"}
    assert str(requests[0].url) == "http://api.test/export/users?role=admin&isActive=true"

    call = delivery.calls[0]
    assert call["filename"] == "users.xlsx"
    assert call["media_type"] == XLSX_MEDIA_TYPE
    assert call["content"] == XLSX_BYTES
    # transient file is released once delivered
    assert not os.path.exists(call["path"])
    assert downloader.state is DownloadState.IDLE


def test_blogs_export_without_filters_has_no_query():
    requests = []
    delivery = RecordingDelivery()
    downloader = _make_downloader(_ok_handler(requests), deliver=delivery)

    result = asyncio.run(downloader.download("blogs", ""))

    assert result.filename == "blogs.xlsx"
    assert str(requests[0].url) == "http://api.test/export/blogs"


def test_declared_content_type_is_ignored():
    requests = []
    delivery = RecordingDelivery()
    downloader = _make_downloader(_ok_handler(requests, content_type="text/plain"), deliver=delivery)

    asyncio.run(downloader.download("users"))

    assert delivery.calls[0]["media_type"] == XLSX_MEDIA_TYPE


def test_server_error_reports_failure_and_returns_to_idle():
    errors = []
    delivery = RecordingDelivery()
    downloader = _make_downloader(
        lambda request: httpx.Response(500, text="boom"),
        deliver=delivery,
        on_error=errors.append,
    )

    result = asyncio.run(downloader.download("users", "role=admin"))

    assert result.status is ExportStatus.FAILED
    assert isinstance(result.error, ExportError)
    assert result.error.status_code == 500
    assert result.error.domain == "users"
    assert errors == [result.error]
    assert downloader.last_error is result.error
    assert delivery.calls == []
    assert downloader.state is DownloadState.IDLE


def test_transport_error_is_reported():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    downloader = _make_downloader(refuse, deliver=RecordingDelivery())

    result = asyncio.run(downloader.download("blogs"))

    assert result.status is ExportStatus.FAILED
    assert result.error.status_code is None
    assert not downloader.busy


def test_failed_delivery_still_removes_transient_file():
    requests = []
    delivery = RecordingDelivery(fail=True)
    downloader = _make_downloader(_ok_handler(requests), deliver=delivery)

    result = asyncio.run(downloader.download("users"))

    assert result.status is ExportStatus.FAILED
    assert "users.xlsx" in str(result.error)
    assert not os.path.exists(delivery.calls[0]["path"])
    assert downloader.state is DownloadState.IDLE


def test_second_download_while_in_flight_is_ignored():
    requests = []
    delivery = RecordingDelivery()

    async def scenario():
        release = asyncio.Event()

        async def slow_handler(request):
            requests.append(request)
            await release.wait()
            return httpx.Response(200, content=XLSX_BYTES)

        downloader = _make_downloader(slow_handler, deliver=delivery)
        first = asyncio.create_task(downloader.download("users", "role=admin"))
        await asyncio.sleep(0)
        assert downloader.busy

        second = await downloader.download("users", "role=admin")
        release.set()
        return await first, second, downloader

    first, second, downloader = asyncio.run(scenario())

    assert first.status is ExportStatus.SAVED
    assert second.status is ExportStatus.IGNORED
    assert len(requests) == 1
    assert len(delivery.calls) == 1
    assert downloader.state is DownloadState.IDLE


def test_download_allowed_again_after_failure():
    responses = [httpx.Response(500), httpx.Response(200, content=XLSX_BYTES)]
    downloader = _make_downloader(lambda request: responses.pop(0), deliver=RecordingDelivery())

    assert downloader.download_sync("users").status is ExportStatus.FAILED
    assert downloader.download_sync("users").status is ExportStatus.SAVED
    assert downloader.last_error is None


def test_send_file_download_builds_dcc_payload(tmp_path):
    path = tmp_path / "payload.xlsx"
    path.write_bytes(XLSX_BYTES)

    payload = send_file_download(str(path), "blogs.xlsx", XLSX_MEDIA_TYPE)

    assert payload["filename"] == "blogs.xlsx"
    assert payload["type"] == XLSX_MEDIA_TYPE
    assert payload["base64"] is True
    assert base64.b64decode(payload["content"]) == XLSX_BYTES


def test_pool_scopes_downloaders_per_dialog():
    pool = DownloaderPool(lambda: _make_downloader(_ok_handler([])))

    a = pool.get("export-a")
    assert pool.get("export-a") is a
    assert pool.get("export-b") is not a
    assert len(pool) == 2

    pool.discard("export-a")
    pool.discard(None)
    assert len(pool) == 1
    assert pool.get("export-a") is not a


@pytest.mark.parametrize("domain", ["users", "blogs"])
def test_filename_follows_domain(domain):
    delivery = RecordingDelivery()
    downloader = _make_downloader(_ok_handler([]), deliver=delivery)

    result = downloader.download_sync(domain)

    assert result.filename == f"{domain}.xlsx"
    assert delivery.calls[0]["filename"] == f"{domain}.xlsx"


def test_malformed_base_url_is_reported_not_raised():
    errors = []
    downloader = ExportDownloader(
        AnalyticsApiClient("http://localhost:abc"),
        deliver=RecordingDelivery(),
        on_error=errors.append,
    )

    result = downloader.download_sync("users", "role=admin")

    assert result.status is ExportStatus.FAILED
    assert isinstance(result.error, ExportError)
    assert errors == [result.error]
    assert downloader.state is DownloadState.IDLE


def test_failing_error_hook_does_not_escape():
    def broken_hook(error):
        raise RuntimeError("hook")

    downloader = _make_downloader(
        lambda request: httpx.Response(500),
        deliver=RecordingDelivery(),
        on_error=broken_hook,
    )

    result = downloader.download_sync("blogs")

    assert result.status is ExportStatus.FAILED
    assert not downloader.busy


def test_pool_evicts_oldest_idle_downloader_when_full():
    pool = DownloaderPool(lambda: _make_downloader(_ok_handler([])), max_size=2)

    first = pool.get("export-a")
    pool.get("export-b")
    pool.get("export-c")

    assert len(pool) == 2
    assert "export-a" not in pool
    assert "export-c" in pool
    assert pool.get("export-a") is not first


def test_pool_keeps_running_downloader_until_released():
    async def scenario():
        release = asyncio.Event()

        async def slow_handler(request):
            await release.wait()
            return httpx.Response(200, content=XLSX_BYTES)

        pool = DownloaderPool(lambda: _make_downloader(slow_handler, deliver=RecordingDelivery()), max_size=1)
        running = pool.get("export-a")
        task = asyncio.create_task(running.download("users"))
        await asyncio.sleep(0)

        pool.discard("export-a")
        pool.get("export-b")
        kept_while_running = "export-a" in pool

        release.set()
        await task
        pool.release("export-a")
        return kept_while_running, pool

    kept_while_running, pool = asyncio.run(scenario())

    assert kept_while_running
    assert "export-a" not in pool
    assert "export-b" in pool


def test_pool_rejects_empty_bound():
    with pytest.raises(ValueError):
        DownloaderPool(lambda: None, max_size=0)
