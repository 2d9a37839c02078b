from __future__ import annotations

from typing import Optional

import httpx

from blog_dashboard.config.model import DEFAULT_API_BASE, GlobalConfig


class AnalyticsApiClient:
    """
    Builds httpx.AsyncClient sessions bound to the backend base URL.

    A session is opened per operation (one per snapshot fetch, one per
    export download) so operations never share connection state.
    `transport` lets tests swap in httpx.MockTransport.
    """

    def __init__(
            self,
            base_url: str = DEFAULT_API_BASE,
            *,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, cfg: GlobalConfig, **kwargs) -> AnalyticsApiClient:
        return cls(cfg.api_base, timeout=cfg.request_timeout, **kwargs)

    def session(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        )
