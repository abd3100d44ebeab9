"""
Pydantic models for easyi18n configuration.

Defines all configuration schemas using Pydantic v2 for validation,
defaults, and serialization.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class CatalogConfig(BaseModel):
    """Translation catalog of the locale being built."""

    path: Path | None = Field(
        default=None,
        description=(
            "Gettext (.po) catalog of the locale. None = default-locale pass: "
            "nuggets are left alone or only stripped of their brackets."
        ),
    )
    lookup_dir: Path | None = Field(
        default=None,
        description="If set, the ingested table is written to <lookup_dir>/<locale>.json",
    )
    include_fuzzy: bool = Field(
        default=False,
        description="Use entries flagged as fuzzy in the catalog",
    )

    model_config = {"extra": "forbid"}


class NuggetsConfig(BaseModel):
    """Resolution behaviour for nuggets."""

    always_remove_brackets: bool = Field(
        default=False,
        description=(
            "If True, untranslated nuggets are emitted without [[[ ]]] delimiters "
            "(formatted with their arguments) instead of being left untouched."
        ),
    )
    warn_on_missing_translations: bool = Field(
        default=True,
        description="Report keys that the catalog does not translate",
    )

    model_config = {"extra": "forbid"}


class AssetsConfig(BaseModel):
    """Asset selection by substring of the asset name."""

    exclude_urls: list[str] | None = Field(
        default=None,
        description="Assets whose name contains any of these substrings are skipped",
    )
    include_urls: list[str] | None = Field(
        default=None,
        description="If set, only assets whose name contains one of these substrings are rewritten",
    )

    model_config = {"extra": "forbid"}


class BuildConfig(BaseModel):
    """Build output directories and parallelism."""

    input_dir: Path = Path("dist")
    output_dir: Path | None = Field(
        default=None,
        description="Where rewritten assets are written. None = rewrite in place.",
    )
    workers: int = Field(default=4, ge=1, le=64, description="Assets processed in parallel")

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Logging system configuration."""

    level: Literal["debug", "info", "human", "warn", "error"] = "human"
    file: Path | None = None
    verbose: int = 0

    model_config = {"extra": "forbid"}


class AppConfig(BaseModel):
    """Complete application configuration.

    This is the root of the configuration tree. It combines all sections
    and is the entry point for validation.
    """

    locale: str = Field(default="default", min_length=1)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    nuggets: NuggetsConfig = Field(default_factory=NuggetsConfig)
    assets: AssetsConfig = Field(default_factory=AssetsConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("locale", mode="before")
    @classmethod
    def _strip_locale(cls, v: object) -> object:
        """YAML may parse locales like `no` as bool; keep them as strings."""
        if v is False:
            return "no"
        if isinstance(v, str):
            return v.strip()
        return v

    model_config = {"extra": "forbid"}
