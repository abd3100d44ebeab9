"""
Resolution Policy — Decides the replacement text of every nugget.

Outcomes form a closed set of variants:

- Translated:        the table has a non-empty value for the key.
- BracketsStripped:  no usable translation and `always_remove_brackets`;
                     the nugget text is emitted without delimiters.
- PassThrough:       no usable translation; the raw nugget is kept so a
                     later pass (typically the default locale) can handle it.

A lookup miss (or an empty value) with `warn_on_missing` produces a
MissingTranslation warning. It is informational only and never raised.
"""

from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from .codec import escape_translation
from .formatter import format_placeholders
from .scanner import Nugget

logger = structlog.get_logger()

__all__ = [
    "BracketsStripped",
    "MissingTranslation",
    "Outcome",
    "PassThrough",
    "ResolutionPolicy",
    "Translated",
]


@dataclass(frozen=True)
class Translated:
    """Escaped and formatted translation, ready to splice."""

    text: str


@dataclass(frozen=True)
class BracketsStripped:
    """Nugget text without delimiters, formatted but not translated."""

    text: str


@dataclass(frozen=True)
class PassThrough:
    """Original nugget, delimiters included."""

    text: str


Outcome = Translated | BracketsStripped | PassThrough


@dataclass(frozen=True)
class MissingTranslation:
    """A key that the active locale's table does not translate."""

    asset: str
    key: str
    locale: str

    def __str__(self) -> str:
        return f"Missing translation in {self.asset}.\n '{self.key}' : {self.locale}"


class ResolutionPolicy:
    """Per-run resolution settings plus the read-only translation table.

    Args:
        table: key -> translation for `locale`, or None for a run without
            a catalog (default locale pass).
        locale: Locale identifier, used in warnings.
        always_remove_brackets: Strip delimiters from untranslated nuggets.
        warn_on_missing: Report lookup misses as MissingTranslation.
    """

    def __init__(
        self,
        table: Mapping[str, str] | None,
        locale: str = "",
        always_remove_brackets: bool = False,
        warn_on_missing: bool = True,
    ) -> None:
        self.table = table
        self.locale = locale
        self.always_remove_brackets = always_remove_brackets
        self.warn_on_missing = warn_on_missing

    @property
    def has_table(self) -> bool:
        return self.table is not None

    def resolve(
        self, nugget: Nugget, asset: str = "",
    ) -> tuple[Outcome, MissingTranslation | None]:
        """Resolve one nugget.

        Args:
            nugget: Nugget produced by the scanner.
            asset: Name of the asset being rewritten (for warnings).

        Returns:
            Tuple (outcome, warning). `warning` is None unless the lookup
            missed and warnings are enabled.
        """
        if self.table is None:
            return self._fallback(nugget), None

        value = self.table.get(nugget.key)
        if value:
            text = format_placeholders(escape_translation(value), nugget.format_args)
            return Translated(text), None

        warning = None
        if self.warn_on_missing:
            warning = MissingTranslation(asset=asset, key=nugget.key, locale=self.locale)
            logger.debug(
                "nugget.missing",
                asset=asset,
                key=nugget.key,
                locale=self.locale,
            )
        return self._fallback(nugget), warning

    def _fallback(self, nugget: Nugget) -> Outcome:
        if self.always_remove_brackets:
            return BracketsStripped(format_placeholders(nugget.text, nugget.format_args))
        return PassThrough(nugget.raw)
