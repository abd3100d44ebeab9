"""
Configuration module for easyi18n.

Exports the main components for convenient imports.
"""

from .loader import load_config
from .schema import (
    AppConfig,
    AssetsConfig,
    BuildConfig,
    CatalogConfig,
    LoggingConfig,
    NuggetsConfig,
)

__all__ = [
    "load_config",
    "AppConfig",
    "AssetsConfig",
    "BuildConfig",
    "CatalogConfig",
    "LoggingConfig",
    "NuggetsConfig",
]
