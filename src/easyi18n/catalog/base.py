"""
Translation source ingestion — adapter interface and loading helpers.

The engine only sees `dict[str, str]` tables. The catalog format is hidden
behind `CatalogIngestor`, so supporting another format means writing a new
ingestor and nothing else.
"""

import json
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()

__all__ = [
    "CatalogError",
    "CatalogIngestor",
    "load_translation_table",
    "write_lookup_cache",
]


class CatalogError(Exception):
    """The translation source could not be read or parsed.

    Fatal for the run: no asset is written once this is raised.
    """

    pass


class CatalogIngestor(Protocol):
    """Converts the raw bytes of a locale's catalog into a lookup table."""

    def ingest(self, locale: str, data: bytes) -> dict[str, str]:
        ...


def load_translation_table(
    locale: str,
    catalog_path: Path,
    ingestor: CatalogIngestor,
) -> dict[str, str]:
    """Read a catalog file and ingest it.

    Args:
        locale: Locale identifier.
        catalog_path: Path to the catalog file.
        ingestor: Format-specific ingestor.

    Returns:
        Lookup table for `locale`.

    Raises:
        CatalogError: If the file cannot be read or ingested.
    """
    try:
        data = catalog_path.read_bytes()
    except OSError as e:
        raise CatalogError(f"Could not read catalog {catalog_path}: {e}") from e

    table = ingestor.ingest(locale, data)
    logger.info(
        "catalog.loaded",
        locale=locale,
        path=str(catalog_path),
        entries=len(table),
    )
    return table


def write_lookup_cache(locale: str, table: dict[str, str], lookup_dir: Path) -> Path:
    """Persist a lookup table as `<lookup_dir>/<locale>.json`.

    Returns:
        Path of the written file.

    Raises:
        CatalogError: If the file cannot be written.
    """
    target = lookup_dir / f"{locale}.json"
    try:
        lookup_dir.mkdir(parents=True, exist_ok=True)
        target.write_text(
            json.dumps(table, indent=2, ensure_ascii=False, sort_keys=True),
            encoding="utf-8",
        )
    except OSError as e:
        raise CatalogError(f"Could not write lookup file {target}: {e}") from e

    logger.info("catalog.lookup_written", locale=locale, path=str(target))
    return target
