from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from blog_dashboard.config.model import GlobalConfig
from blog_dashboard.services.api_client import AnalyticsApiClient
from blog_dashboard.services.dashboard_controller import DashboardController
from blog_dashboard.services.export_downloader import DownloaderPool


@dataclass
class AppConfig:
    config_root: Path
    global_config: GlobalConfig

    client: Optional[AnalyticsApiClient] = None
    downloaders: Optional[DownloaderPool] = None
    controller: Optional[DashboardController] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.client is None:
            raise RuntimeError("AppConfig.client must be initialized.")
        if self.downloaders is None:
            raise RuntimeError("AppConfig.downloaders must be initialized.")
        if self.controller is None:
            raise RuntimeError("AppConfig.controller must be initialized.")
