"""
Tests for the click CLI.

Covers:
- build (translation, default pass, strict mode, report, exit codes)
- scan (text and JSON output)
- validate-config
"""

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from easyi18n.cli import (
    EXIT_CATALOG_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_SUCCESS,
    EXIT_WARNINGS,
    main,
)

PO_FR = '''msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"

msgid "Log off"
msgstr "Se déconnecter"
'''


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("EASYI18N_LOCALE", "EASYI18N_CATALOG", "EASYI18N_LOG_LEVEL",
                 "EASYI18N_ALWAYS_REMOVE_BRACKETS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging():
    """configure_logging replaces the root handlers; put them back."""
    handlers = list(logging.root.handlers)
    yield
    logging.root.handlers[:] = handlers


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "main.js").write_text(
        'a("[[[Log off]]]");\nb("[[[Page not found]]]");\n', encoding="utf-8",
    )
    (tmp_path / "fr.po").write_text(PO_FR, encoding="utf-8")
    return tmp_path


# ── build ─────────────────────────────────────────────────────────────────


class TestBuild:
    def test_translates_to_output(self, runner: CliRunner, project: Path) -> None:
        out = project / "dist-fr"
        result = runner.invoke(main, [
            "build", str(project / "dist"),
            "-l", "fr", "-p", str(project / "fr.po"), "-o", str(out), "--quiet",
        ])
        assert result.exit_code == EXIT_SUCCESS, result.output
        text = (out / "main.js").read_text(encoding="utf-8")
        assert 'a("Se déconnecter");' in text
        assert 'b("[[[Page not found]]]");' in text

    def test_strict_fails_on_missing(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(main, [
            "build", str(project / "dist"),
            "-l", "fr", "-p", str(project / "fr.po"), "--strict", "--quiet",
        ])
        assert result.exit_code == EXIT_WARNINGS

    def test_strict_ok_without_warnings(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(main, [
            "build", str(project / "dist"),
            "-l", "fr", "-p", str(project / "fr.po"),
            "--no-warn-missing", "--strict", "--quiet",
        ])
        assert result.exit_code == EXIT_SUCCESS

    def test_default_pass_strip_brackets(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(main, [
            "build", str(project / "dist"), "-l", "en", "--always-remove-brackets", "--quiet",
        ])
        assert result.exit_code == EXIT_SUCCESS
        assert (project / "dist" / "main.js").read_text(encoding="utf-8") == (
            'a("Log off");\nb("Page not found");\n'
        )

    def test_human_output(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(main, [
            "build", str(project / "dist"), "-l", "fr", "-p", str(project / "fr.po"),
        ])
        assert result.exit_code == EXIT_SUCCESS
        assert "easyi18n · fr · fr.po" in result.output
        assert "Missing translation in main.js: 'Page not found' (fr)" in result.output
        assert "Build complete" in result.output

    def test_report_file(self, runner: CliRunner, project: Path) -> None:
        report = project / "report.json"
        result = runner.invoke(main, [
            "build", str(project / "dist"), "-l", "fr", "-p", str(project / "fr.po"),
            "--report", str(report), "--quiet",
        ])
        assert result.exit_code == EXIT_SUCCESS
        data = json.loads(report.read_text(encoding="utf-8"))
        assert data["status"] == "warnings"
        assert data["missing"][0]["key"] == "Page not found"

    def test_log_file_records_missing_translation(self, runner: CliRunner, project: Path) -> None:
        log_file = project / "build.jsonl"
        result = runner.invoke(main, [
            "build", str(project / "dist"), "-l", "fr", "-p", str(project / "fr.po"),
            "--log-file", str(log_file), "--quiet",
        ])
        assert result.exit_code == EXIT_SUCCESS
        for h in logging.root.handlers:
            h.close()
        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        missing = [r for r in records if r["event"] == "translation.missing"]
        assert len(missing) == 1
        assert missing[0]["asset"] == "main.js"
        assert missing[0]["key"] == "Page not found"
        assert missing[0]["locale"] == "fr"
        assert missing[0]["level"] == "human"

    def test_catalog_error_exit_code(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(main, [
            "build", str(project / "dist"), "-l", "fr", "-p", str(project / "missing.po"),
            "--quiet",
        ])
        assert result.exit_code == EXIT_CATALOG_ERROR
        assert "Catalog error" in result.output
        assert "[[[Log off]]]" in (project / "dist" / "main.js").read_text(encoding="utf-8")

    def test_invalid_config_exit_code(self, runner: CliRunner, project: Path) -> None:
        config = project / "bad.yaml"
        config.write_text("nuggets:\n  unknown_option: 1\n", encoding="utf-8")
        result = runner.invoke(main, ["build", str(project / "dist"), "-c", str(config)])
        assert result.exit_code == EXIT_CONFIG_ERROR

    def test_config_file(self, runner: CliRunner, project: Path) -> None:
        config = project / "easyi18n.yaml"
        config.write_text(
            f"locale: fr\n"
            f"catalog:\n  path: {(project / 'fr.po').as_posix()}\n"
            f"build:\n  input_dir: {(project / 'dist').as_posix()}\n",
            encoding="utf-8",
        )
        result = runner.invoke(main, ["build", "-c", str(config), "--quiet"])
        assert result.exit_code == EXIT_SUCCESS, result.output
        assert 'a("Se déconnecter");' in (project / "dist" / "main.js").read_text(encoding="utf-8")


# ── scan ──────────────────────────────────────────────────────────────────


class TestScan:
    def test_text_output(self, runner: CliRunner, tmp_path: Path) -> None:
        source = tmp_path / "app.js"
        source.write_text('x = 1;\ny("[[[Hi %0|||Ann///greeting]]]");\n', encoding="utf-8")
        result = runner.invoke(main, ["scan", str(source)])
        assert result.exit_code == 0
        assert f"{source}:2: Hi %0" in result.output
        assert "args: Ann" in result.output
        assert "comment: greeting" in result.output

    def test_json_output(self, runner: CliRunner, tmp_path: Path) -> None:
        source = tmp_path / "app.js"
        source.write_text("[[[A]]] [[[B|||1|||2]]]", encoding="utf-8")
        result = runner.invoke(main, ["scan", str(source), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [n["key"] for n in data] == ["A", "B"]
        assert data[1]["format_args"] == ["1", "2"]


# ── validate-config ───────────────────────────────────────────────────────


class TestValidateConfig:
    def test_valid(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "c.yaml"
        config.write_text("locale: de\n", encoding="utf-8")
        result = runner.invoke(main, ["validate-config", "-c", str(config)])
        assert result.exit_code == 0
        assert "Valid configuration" in result.output
        assert "Locale: de" in result.output

    def test_invalid(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "c.yaml"
        config.write_text("build:\n  workers: 0\n", encoding="utf-8")
        result = runner.invoke(main, ["validate-config", "-c", str(config)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
