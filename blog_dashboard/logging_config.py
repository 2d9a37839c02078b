from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

ENV_LOG_FORMAT = "DASHBOARD_LOG_FORMAT"
ENV_LOG_LEVEL = "DASHBOARD_LOG_LEVEL"

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv(ENV_LOG_LEVEL, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    # getLevelName returns "Level X" for names it does not know
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
        level: Optional[Union[int, str]] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure root logger for the dashboard

    Format (first match wins):
        1) force_format argument ("json" or "plain")
        2) env var DASHBOARD_LOG_FORMAT
        3) "json"

    Level: the `level` argument, else DASHBOARD_LOG_LEVEL, else INFO.
    httpx/httpcore log every request, so they are capped at WARNING unless
    the root level is DEBUG.
    """
    format_mode = (force_format or os.getenv(ENV_LOG_FORMAT, "json")).lower()
    root_level = _resolve_level(level)

    root = logging.getLogger()
    root.setLevel(root_level)

    handler = logging.StreamHandler()
    if format_mode == "plain":
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    else:
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    client_level = root_level if root_level <= logging.DEBUG else max(root_level, logging.WARNING)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(client_level)
