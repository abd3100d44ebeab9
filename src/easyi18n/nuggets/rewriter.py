"""
Asset Rewriter — Applies the resolution policy to every nugget of a text.

Everything outside nugget spans is copied verbatim; each nugget span is
replaced by the text of its outcome. The rewrite is purely textual, so any
source map attached to the asset keeps referring to the original text.
"""

from dataclasses import dataclass, field

from .resolver import MissingTranslation, ResolutionPolicy, Translated
from .scanner import iter_nuggets

__all__ = ["RewriteResult", "rewrite_text"]


@dataclass
class RewriteResult:
    """Rewritten text of one asset plus what happened to its nuggets."""

    text: str
    warnings: list[MissingTranslation] = field(default_factory=list)
    nugget_count: int = 0
    translated_count: int = 0


def rewrite_text(text: str, policy: ResolutionPolicy, asset: str = "") -> RewriteResult:
    """Rewrite all nuggets of `text` according to `policy`.

    Args:
        text: Full text of the asset.
        policy: Resolution policy of the current run.
        asset: Asset name, reported in warnings.

    Returns:
        RewriteResult with the new text and the warnings of this asset.
    """
    parts: list[str] = []
    result = RewriteResult(text=text)
    cursor = 0

    for nugget in iter_nuggets(text):
        outcome, warning = policy.resolve(nugget, asset)
        parts.append(text[cursor:nugget.start])
        parts.append(outcome.text)
        cursor = nugget.end

        result.nugget_count += 1
        if isinstance(outcome, Translated):
            result.translated_count += 1
        if warning is not None:
            result.warnings.append(warning)

    if result.nugget_count:
        parts.append(text[cursor:])
        result.text = "".join(parts)
    return result
