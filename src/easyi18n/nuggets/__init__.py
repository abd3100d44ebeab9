"""
Nuggets module - Extraction and substitution engine.

Scanner -> ResolutionPolicy (Escape Codec + Placeholder Formatter) -> Rewriter.
"""

from .codec import decode_literal_escapes, escape_for_embedding, escape_translation
from .formatter import format_placeholders
from .resolver import (
    BracketsStripped,
    MissingTranslation,
    Outcome,
    PassThrough,
    ResolutionPolicy,
    Translated,
)
from .rewriter import RewriteResult, rewrite_text
from .scanner import Nugget, iter_nuggets, normalize_key, scan_nuggets

__all__ = [
    "BracketsStripped",
    "MissingTranslation",
    "Nugget",
    "Outcome",
    "PassThrough",
    "ResolutionPolicy",
    "RewriteResult",
    "Translated",
    "decode_literal_escapes",
    "escape_for_embedding",
    "escape_translation",
    "format_placeholders",
    "iter_nuggets",
    "normalize_key",
    "rewrite_text",
    "scan_nuggets",
]
