"""
Gettext catalog ingestion based on polib.

Turns the bytes of a `.po` file into the key -> translation table used by
the resolution policy. Keys are normalized the same way nugget keys are,
so a multi-line msgid matches a nugget written with CRLF line endings.
"""

import polib
import structlog

from ..nuggets.scanner import normalize_key
from .base import CatalogError

logger = structlog.get_logger()

__all__ = ["GettextIngestor"]


class GettextIngestor:
    """Catalog ingestor for gettext `.po` files.

    Skipped entries:
    - the header (empty msgid)
    - obsolete entries (`#~`)
    - entries with a msgctxt: nuggets carry no context
    - untranslated entries
    - fuzzy entries, unless `include_fuzzy` is set

    Plural entries contribute their first form (`msgstr[0]`).
    """

    def __init__(self, include_fuzzy: bool = False) -> None:
        self.include_fuzzy = include_fuzzy

    def ingest(self, locale: str, data: bytes) -> dict[str, str]:
        """Parse a catalog and return its lookup table.

        Args:
            locale: Locale identifier (only used for diagnostics).
            data: Raw bytes of the `.po` file.

        Returns:
            Dictionary key -> translated string.

        Raises:
            CatalogError: If the bytes are not valid UTF-8 or not a valid catalog.
        """
        try:
            content = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise CatalogError(f"Catalog for '{locale}' is not valid UTF-8: {e}") from e

        if not content.strip():
            raise CatalogError(f"Catalog for '{locale}' is empty")

        try:
            po = polib.pofile(content)
        except (OSError, ValueError) as e:
            raise CatalogError(f"Catalog for '{locale}' could not be parsed: {e}") from e

        table: dict[str, str] = {}
        skipped = 0
        for entry in po:
            if not entry.msgid or entry.obsolete or entry.msgctxt:
                skipped += 1
                continue
            if "fuzzy" in entry.flags and not self.include_fuzzy:
                skipped += 1
                continue

            value = entry.msgstr
            if entry.msgid_plural:
                value = entry.msgstr_plural.get(0, "")
            if not value:
                skipped += 1
                continue

            table[normalize_key(entry.msgid)] = value

        logger.debug(
            "catalog.gettext.parsed",
            locale=locale,
            entries=len(table),
            skipped=skipped,
        )
        return table
