"""
Config package for blog_dashboard.

Responsible for:
- the config model (GlobalConfig)
- config I/O (load_global_config)
"""

from .model import GlobalConfig  # optional re-exports
from .io import load_global_config  # optional
