"""
Main CLI for easyi18n using Click.

Commands:
    build            Rewrite the nuggets of a build output directory for one locale.
    scan             List the nuggets of a single file.
    validate-config  Validate a YAML configuration file.
"""

import json
import sys
from dataclasses import asdict
from pathlib import Path

import click
from pydantic import ValidationError

from . import __version__
from .assets import AssetError, BuildRunner
from .catalog import CatalogError
from .config.loader import load_config
from .features.report import BuildReport, write_report
from .logging import bind_run_context, configure_logging
from .nuggets import scan_nuggets

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_WARNINGS = 2
EXIT_CONFIG_ERROR = 3
EXIT_CATALOG_ERROR = 4
EXIT_INTERRUPTED = 130


def _print_banner(locale: str, catalog: Path | None, quiet: bool) -> None:
    """Print the startup banner."""
    if not quiet:
        width = 50
        source = catalog.name if catalog else "default"
        label = f" easyi18n · {locale} · {source} "
        dashes = "─" * max(0, width - len(label))
        click.echo(f"\n─── {label}{dashes}\n", err=True)


@click.group()
@click.version_option(version=__version__, prog_name="easyi18n")
def main() -> None:
    """easyi18n - Build-time translation of [[[nuggets]]] in build output.

    Each run handles one locale: nuggets are looked up in the locale's
    gettext catalog, escaped, formatted and written back in place.
    """
    pass


@main.command()
@click.argument("input_dir", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to the YAML configuration file",
)
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: rewrite INPUT_DIR in place)",
)
@click.option(
    "-l",
    "--locale",
    help="Locale identifier (e.g.: fr, es-ES)",
)
@click.option(
    "-p",
    "--catalog",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Gettext (.po) catalog of the locale. Omit for the default locale pass",
)
@click.option(
    "--lookup-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write the ingested lookup table to <lookup-dir>/<locale>.json",
)
@click.option(
    "--always-remove-brackets/--keep-brackets",
    "always_remove_brackets",
    default=None,
    help="Strip [[[ ]]] from nuggets that end up untranslated",
)
@click.option(
    "--warn-missing/--no-warn-missing",
    "warn_missing",
    default=None,
    help="Report keys missing from the catalog",
)
@click.option(
    "--include",
    multiple=True,
    help="Only rewrite assets whose name contains this substring (repeatable)",
)
@click.option(
    "--exclude",
    multiple=True,
    help="Skip assets whose name contains this substring (repeatable)",
)
@click.option(
    "-j",
    "--workers",
    type=int,
    help="Number of assets processed in parallel",
)
@click.option(
    "--report",
    "report_file",
    type=click.Path(dir_okay=False),
    help="Write a build report (.json or .md)",
)
@click.option(
    "--strict",
    is_flag=True,
    help=f"Exit with code {EXIT_WARNINGS} when translations are missing",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Verbosity level (-v, -vv for more detail)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "human", "warn", "error"]),
    help="Explicit logging level",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="File to save structured logs (JSON)",
)
@click.option(
    "--quiet",
    is_flag=True,
    help="Quiet mode (errors only)",
)
def build(input_dir: Path | None, **kwargs) -> None:  # type: ignore
    """Translate the nuggets of a build output directory.

    INPUT_DIR: Build output directory (default: build.input_dir from config)

    Examples:

        \b
        # French build, written to dist-fr/
        $ easyi18n build dist -l fr -p locales/fr.po -o dist-fr

        \b
        # Default locale: only strip the brackets, in place
        $ easyi18n build dist -l en --always-remove-brackets

        \b
        # Only JS bundles, fail CI on missing translations
        $ easyi18n build dist -l de -p locales/de.po --include .js --strict
    """
    quiet = kwargs.get("quiet", False)
    try:
        config = load_config(
            config_path=kwargs.get("config"),
            cli_args={**kwargs, "input_dir": input_dir},
        )
    except (FileNotFoundError, ValueError, ValidationError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    configure_logging(config.logging, quiet=quiet)
    bind_run_context(config.locale, str(config.catalog.path) if config.catalog.path else None)
    _print_banner(config.locale, config.catalog.path, quiet)

    try:
        result = BuildRunner(config).run()
    except KeyboardInterrupt:
        click.echo("\nInterrupted.", err=True)
        sys.exit(EXIT_INTERRUPTED)
    except CatalogError as e:
        click.echo(f"Catalog error: {e}", err=True)
        sys.exit(EXIT_CATALOG_ERROR)
    except AssetError as e:
        click.echo(f"Build failed: {e}", err=True)
        sys.exit(EXIT_FAILED)

    report_file = kwargs.get("report_file")
    if report_file:
        try:
            path = write_report(BuildReport.from_result(result), report_file)
            if not quiet:
                click.echo(f"Report saved to {path}", err=True)
        except OSError as e:
            click.echo(f"Could not save report: {e}", err=True)

    if result.warnings and kwargs.get("strict"):
        sys.exit(EXIT_WARNINGS)
    sys.exit(EXIT_SUCCESS)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output in structured JSON format",
)
def scan(file: Path, json_output: bool) -> None:
    """List the nuggets found in FILE."""
    try:
        text = file.read_bytes().decode("utf-8")
    except UnicodeDecodeError:
        click.echo(f"Not a UTF-8 text file: {file}", err=True)
        sys.exit(EXIT_FAILED)

    nuggets = scan_nuggets(text)
    if json_output:
        payload = [
            {k: v for k, v in asdict(n).items() if k != "raw"}
            for n in nuggets
        ]
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    for n in nuggets:
        line = text.count("\n", 0, n.start) + 1
        key = n.key.replace("\n", "\\n")
        click.echo(f"{file}:{line}: {key}")
        if n.format_args:
            click.echo(f"    args: {', '.join(n.format_args)}")
        if n.comment:
            click.echo(f"    comment: {n.comment}")
    click.echo(f"{len(nuggets)} nugget(s)", err=True)


@main.command()
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to the configuration file to validate",
)
def validate_config(config: Path | None) -> None:
    """Validate a YAML configuration file."""
    try:
        app_config = load_config(config_path=config)
        click.echo("Valid configuration")
        click.echo(f"  Locale: {app_config.locale}")
        click.echo(f"  Catalog: {app_config.catalog.path or '(default locale pass)'}")
        click.echo(f"  Input: {app_config.build.input_dir}")
        click.echo(f"  Output: {app_config.build.output_dir or '(in place)'}")
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except Exception as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(EXIT_FAILED)


if __name__ == "__main__":  # pragma: no cover
    main()
