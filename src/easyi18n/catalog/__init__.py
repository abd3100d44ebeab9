"""
Catalog module - Translation source ingestion.

Exports the ingestor interface, the gettext implementation and the loading
helpers used by the build runner.
"""

from .base import CatalogError, CatalogIngestor, load_translation_table, write_lookup_cache
from .gettext import GettextIngestor

__all__ = [
    "CatalogError",
    "CatalogIngestor",
    "GettextIngestor",
    "load_translation_table",
    "write_lookup_cache",
]
