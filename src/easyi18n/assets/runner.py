"""
Build Runner — Rewrites every selected asset of a build output directory.

A run has two phases:

1. Preparation: the catalog is ingested once. A CatalogError aborts here,
   before anything is read or written.
2. Rewriting: every asset is read and rewritten in a ThreadPoolExecutor.
   Each task returns its own result and warnings; they are merged in
   asset order once all tasks are done. Output is only written after all
   assets have been processed, so a failing asset leaves nothing half done.

Assets are named by their POSIX path relative to the input directory,
which is what `include_urls` / `exclude_urls` are matched against.
"""

import logging
import shutil
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from ..catalog import (
    CatalogIngestor,
    GettextIngestor,
    load_translation_table,
    write_lookup_cache,
)
from ..config.schema import AppConfig
from ..logging.human import HumanLog
from ..nuggets import MissingTranslation, ResolutionPolicy, rewrite_text
from .selection import SOURCE_MAP_SUFFIX, AssetFilter

logger = structlog.get_logger()

__all__ = [
    "AssetError",
    "AssetResult",
    "BuildResult",
    "BuildRunner",
]


class AssetError(Exception):
    """An asset could not be read or written."""

    pass


@dataclass
class AssetResult:
    """What happened to one asset."""

    name: str
    status: str  # "rewritten" | "unchanged" | "skipped" | "binary" | "sourcemap"
    nuggets: int = 0
    translated: int = 0
    warnings: list[MissingTranslation] = field(default_factory=list)


@dataclass
class BuildResult:
    """Summary of a build run."""

    locale: str
    catalog: str | None
    input_dir: str
    output_dir: str
    duration_seconds: float = 0.0
    assets: list[AssetResult] = field(default_factory=list)

    @property
    def warnings(self) -> list[MissingTranslation]:
        return [w for asset in self.assets for w in asset.warnings]

    @property
    def rewritten(self) -> list[AssetResult]:
        return [a for a in self.assets if a.status == "rewritten"]

    @property
    def nugget_count(self) -> int:
        return sum(a.nuggets for a in self.assets)

    @property
    def translated_count(self) -> int:
        return sum(a.translated for a in self.assets)


class BuildRunner:
    """Runs one locale pass over a build output directory.

    Args:
        config: Validated application configuration.
        ingestor: Catalog ingestor. Default: GettextIngestor.
    """

    def __init__(self, config: AppConfig, ingestor: CatalogIngestor | None = None) -> None:
        self.config = config
        self.ingestor = ingestor or GettextIngestor(
            include_fuzzy=config.catalog.include_fuzzy,
        )
        self.input_dir = Path(config.build.input_dir)
        self.output_dir = Path(config.build.output_dir or config.build.input_dir)
        self.asset_filter = AssetFilter(
            exclude_urls=config.assets.exclude_urls,
            include_urls=config.assets.include_urls,
        )
        self.log = logger.bind(component="build_runner", locale=config.locale)
        self.hlog = HumanLog(structlog.wrap_logger(
            logging.getLogger("easyi18n.build"),
            wrapper_class=structlog.stdlib.BoundLogger,
        ))

    @property
    def in_place(self) -> bool:
        return self.output_dir.resolve() == self.input_dir.resolve()

    def load_policy(self) -> ResolutionPolicy:
        """Ingest the catalog (if any) and build the resolution policy.

        Raises:
            CatalogError: If the catalog cannot be read, parsed or cached.
        """
        locale = self.config.locale
        catalog_path = self.config.catalog.path
        table = None

        if catalog_path is None:
            self.hlog.default_pass(locale)
        else:
            table = load_translation_table(locale, Path(catalog_path), self.ingestor)
            self.hlog.catalog_loaded(str(catalog_path), len(table))
            if self.config.catalog.lookup_dir is not None:
                target = write_lookup_cache(locale, table, Path(self.config.catalog.lookup_dir))
                self.hlog.lookup_written(str(target))

        return ResolutionPolicy(
            table,
            locale=locale,
            always_remove_brackets=self.config.nuggets.always_remove_brackets,
            warn_on_missing=self.config.nuggets.warn_on_missing_translations,
        )

    def run(self) -> BuildResult:
        """Run the locale pass.

        Returns:
            BuildResult with one AssetResult per discovered asset.

        Raises:
            CatalogError: If the catalog cannot be loaded (nothing is written).
            AssetError: If an asset cannot be read or written.
        """
        start = time.time()
        if not self.input_dir.is_dir():
            raise AssetError(f"Input directory not found: {self.input_dir}")

        policy = self.load_policy()
        names = self.discover_assets()
        self.log.info("build.start", assets=len(names), in_place=self.in_place)

        processed = self._process_all(names, policy)

        for result, text in processed:
            self._write(result, text)

        build = BuildResult(
            locale=self.config.locale,
            catalog=str(self.config.catalog.path) if self.config.catalog.path else None,
            input_dir=str(self.input_dir),
            output_dir=str(self.output_dir),
            duration_seconds=time.time() - start,
            assets=[result for result, _ in processed],
        )

        for warning in build.warnings:
            self.hlog.missing_translation(warning.asset, warning.key, warning.locale)
        self.hlog.build_complete(
            assets=len(build.assets),
            rewritten=len(build.rewritten),
            warnings=len(build.warnings),
        )
        self.log.info(
            "build.complete",
            assets=len(build.assets),
            rewritten=len(build.rewritten),
            nuggets=build.nugget_count,
            translated=build.translated_count,
            warnings=len(build.warnings),
            duration=round(build.duration_seconds, 3),
        )
        return build

    def discover_assets(self) -> list[str]:
        """List asset names (relative POSIX paths), sorted.

        When the output directory lives inside the input directory, its
        content is not treated as input.
        """
        output_root = self.output_dir.resolve()
        names: list[str] = []
        for path in sorted(self.input_dir.rglob("*")):
            if not path.is_file():
                continue
            if not self.in_place and path.resolve().is_relative_to(output_root):
                continue
            names.append(path.relative_to(self.input_dir).as_posix())
        return names

    def _process_all(
        self, names: list[str], policy: ResolutionPolicy,
    ) -> list[tuple[AssetResult, str | None]]:
        """Process assets in parallel, preserving their order."""
        results: list[tuple[AssetResult, str | None] | None] = [None] * len(names)
        workers = self.config.build.workers

        if workers == 1 or len(names) <= 1:
            return [self.process_asset(name, policy) for name in names]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(self.process_asset, name, policy): i
                for i, name in enumerate(names)
            }
            for future in as_completed(futures):
                idx = futures[future]
                results[idx] = future.result()

        return results  # type: ignore[return-value]

    def process_asset(
        self, name: str, policy: ResolutionPolicy,
    ) -> tuple[AssetResult, str | None]:
        """Rewrite one asset in memory.

        Returns:
            Tuple (result, new_text). `new_text` is None unless the asset
            was rewritten.
        """
        if name.endswith(SOURCE_MAP_SUFFIX):
            return AssetResult(name=name, status="sourcemap"), None

        if not self.asset_filter.is_selected(name):
            self.log.debug("asset.skipped", asset=name)
            return AssetResult(name=name, status="skipped"), None

        source = self.input_dir / name
        try:
            raw = source.read_bytes()
        except OSError as e:
            raise AssetError(f"Could not read asset {name}: {e}") from e

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            return AssetResult(name=name, status="binary"), None

        rewritten = rewrite_text(text, policy, asset=name)
        status = "rewritten" if rewritten.text != text else "unchanged"
        result = AssetResult(
            name=name,
            status=status,
            nuggets=rewritten.nugget_count,
            translated=rewritten.translated_count,
            warnings=rewritten.warnings,
        )
        if status == "rewritten":
            return result, rewritten.text
        return result, None

    def _write(self, result: AssetResult, text: str | None) -> None:
        """Write a rewritten asset, or carry the original through."""
        source = self.input_dir / result.name
        target = self.output_dir / result.name

        try:
            if text is not None:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(text.encode("utf-8"))
                self.hlog.asset_rewritten(result.name, result.nuggets, result.translated)
            elif not self.in_place:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, target)
        except OSError as e:
            raise AssetError(f"Could not write asset {result.name}: {e}") from e
