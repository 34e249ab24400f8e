"""Core utilities for pathmeta."""

from pathmeta.core.config import (
    LocaleConfig,
    SiteConfig,
    find_site_root,
    get_site_root,
    load_site_config,
)

__all__ = [
    "LocaleConfig",
    "SiteConfig",
    "find_site_root",
    "get_site_root",
    "load_site_config",
]
