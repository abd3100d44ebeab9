"""
Asset selection by substring of the asset name.
"""

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = ["AssetFilter", "SOURCE_MAP_SUFFIX"]

# Position maps are carried through untouched, never rewritten
SOURCE_MAP_SUFFIX = ".map"


@dataclass(frozen=True)
class AssetFilter:
    """Decides which assets are eligible for rewriting.

    An asset is excluded if its name contains any `exclude_urls` entry.
    Otherwise it is included when `include_urls` is None, or when its name
    contains at least one `include_urls` entry.
    """

    exclude_urls: Sequence[str] | None = None
    include_urls: Sequence[str] | None = None

    def is_selected(self, name: str) -> bool:
        if self.exclude_urls is not None and any(url in name for url in self.exclude_urls):
            return False
        if self.include_urls is None:
            return True
        return any(url in name for url in self.include_urls)
