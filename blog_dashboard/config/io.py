from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

import httpx

from blog_dashboard.config.model import DEFAULT_API_BASE, DEFAULT_CATEGORY_PALETTE, GlobalConfig
from blog_dashboard.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_API_BASE = "DASHBOARD_API_BASE"
ENV_REQUEST_TIMEOUT = "DASHBOARD_REQUEST_TIMEOUT"


def _parse_timeout(raw: Any, source: str) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{source}: request_timeout must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{source}: request_timeout must be positive, got {value}")
    return value


def _parse_api_base(raw: Any, source: str) -> str:
    value = str(raw).rstrip("/")
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as e:
        raise ConfigError(f"{source}: api_base {raw!r} is not a valid URL ({e})")
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"{source}: api_base must be an http(s) URL with a host, got {raw!r}")
    return value


def _parse_palette(raw: Any, source: str) -> list[str]:
    if raw is None:
        return list(DEFAULT_CATEGORY_PALETTE)
    if not isinstance(raw, list) or not raw or not all(isinstance(c, str) for c in raw):
        raise ConfigError(f"{source}: category_palette must be a non-empty list of colours")
    return list(raw)


def load_global_config(root: Path, env: Optional[Mapping[str, str]] = None) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json     (optional)

    Recognised keys: ui_title, subtitle, api_base, request_timeout,
    category_palette. DASHBOARD_API_BASE and DASHBOARD_REQUEST_TIMEOUT in the
    environment take precedence over the file.

    :param root: directory that may contain 'global.json'
    :param env: environment mapping, defaults to os.environ
    :return: a GlobalConfig instance
    :raises ConfigError: if global.json is malformed or a value is invalid
    """
    env = os.environ if env is None else env
    root = Path(root)
    global_path = root / "global.json"

    raw: dict[str, Any] = {}
    if global_path.is_file():
        try:
            with global_path.open() as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{global_path}: invalid JSON ({e})")
        if not isinstance(raw, dict):
            raise ConfigError(f"{global_path}: expected a JSON object")
    else:
        logger.info("No global.json found, using defaults", extra={"config_root": str(root)})

    source = str(global_path)
    api_base = env.get(ENV_API_BASE) or raw.get("api_base") or DEFAULT_API_BASE
    timeout_raw = env.get(ENV_REQUEST_TIMEOUT) or raw.get("request_timeout")

    cfg = GlobalConfig(
        ui_title=raw.get("ui_title", "Dashboard Overview"),
        subtitle=raw.get("subtitle", "Users & blogs analytics"),
        api_base=_parse_api_base(api_base, source),
        request_timeout=_parse_timeout(timeout_raw, source),
        category_palette=_parse_palette(raw.get("category_palette"), source),
    )

    logger.info(
        "Loaded global config",
        extra={"config_root": str(root), "api_base": cfg.api_base},
    )
    return cfg
