from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
import httpx
from dash import Dash

from .config import AppConfig
from blog_dashboard.config.io import load_global_config
from blog_dashboard.services.aggregate_fetcher import AggregateFetcher
from blog_dashboard.services.api_client import AnalyticsApiClient
from blog_dashboard.services.dashboard_controller import DashboardController
from blog_dashboard.services.export_downloader import DownloaderPool, ExportDownloader
from blog_dashboard.ui.layout.build_layout import build_layout
from blog_dashboard.ui.callbacks.callbacks_dashboard import register_dashboard_callbacks
from blog_dashboard.ui.callbacks.callbacks_render import register_render_callbacks
from blog_dashboard.ui.callbacks.callbacks_export import register_export_callbacks

logger = logging.getLogger(__name__)


def create_dash_app(
        config_root: Path | str = Path("config"),
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Initialize Service Layer
    client = AnalyticsApiClient.from_config(global_config, transport=transport)
    fetcher = AggregateFetcher(client)
    downloaders = DownloaderPool(lambda: ExportDownloader(client))
    controller = DashboardController(fetcher, downloaders)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        client=client,
        downloaders=downloaders,
        controller=controller,
    )
    ctx.validate()

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
    )
    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_dashboard_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_export_callbacks(app, ctx)

    logger.info("Dash app created", extra={"api_base": global_config.api_base})
    return app
