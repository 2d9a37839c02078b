"""
Top-level package for the blog analytics dashboard.

This package exposes the core architecture (domain, services, UI adapters).
Most code should import from submodules such as:
    blog_dashboard.core
    blog_dashboard.services
    blog_dashboard.ui
"""

__all__: list[str] = []
