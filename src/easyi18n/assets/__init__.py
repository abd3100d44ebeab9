"""
Assets module - Selection and rewriting of build output assets.
"""

from .runner import AssetError, AssetResult, BuildResult, BuildRunner
from .selection import AssetFilter

__all__ = [
    "AssetError",
    "AssetFilter",
    "AssetResult",
    "BuildResult",
    "BuildRunner",
]
