from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_API_BASE = "http://localhost:3000"

DEFAULT_CATEGORY_PALETTE = [
    "#3b82f6",
    "#ef4444",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
]


@dataclass
class GlobalConfig:
    """
    Parsed global.json (plus environment overrides).

    - api_base: backend host all analytics/export routes are resolved against
    - request_timeout: seconds per request, None waits indefinitely
    - category_palette: colours cycled over the blogs-by-category slices
    """
    ui_title: str = "Dashboard Overview"
    subtitle: str = "Users & blogs analytics"
    api_base: str = DEFAULT_API_BASE
    request_timeout: Optional[float] = None
    category_palette: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORY_PALETTE))
