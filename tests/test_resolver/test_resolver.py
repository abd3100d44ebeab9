"""
Tests for the Resolution Policy.

Covers every branch of the per-nugget state machine:
- No table: PassThrough / BracketsStripped
- Table miss and empty value: warning + fallback
- Table hit: Translated (decoded, escaped, formatted)
"""

import pytest

from easyi18n.nuggets.resolver import (
    BracketsStripped,
    MissingTranslation,
    PassThrough,
    ResolutionPolicy,
    Translated,
)
from easyi18n.nuggets.scanner import scan_nuggets


def _nugget(text: str):
    return scan_nuggets(text)[0]


@pytest.fixture
def table() -> dict[str, str]:
    return {
        "Log off": "Se déconnecter",
        "Hello, %0. My Name is %1.": "Bonjour, %0. Je m'appelle %1.",
        "Two\nlines": "Deux\nlignes",
        "Forgot Translation": "",
        "Fancy": "don\\u2019t",
    }


# ── No table (default locale pass) ───────────────────────────────────────


class TestNoTable:
    def test_pass_through(self) -> None:
        policy = ResolutionPolicy(None)
        outcome, warning = policy.resolve(_nugget("[[[Log off|||x///c]]]"))
        assert outcome == PassThrough("[[[Log off|||x///c]]]")
        assert warning is None

    def test_brackets_stripped_formats_args(self) -> None:
        policy = ResolutionPolicy(None, always_remove_brackets=True)
        outcome, warning = policy.resolve(_nugget("[[[Hi %0|||Ann///greeting]]]"))
        assert outcome == BracketsStripped("Hi Ann")
        assert warning is None

    def test_brackets_stripped_not_escaped(self) -> None:
        policy = ResolutionPolicy(None, always_remove_brackets=True)
        outcome, _ = policy.resolve(_nugget("[[[Hey, 'buddy']]]"))
        assert outcome.text == "Hey, 'buddy'"

    def test_no_warning_without_table(self) -> None:
        policy = ResolutionPolicy(None, warn_on_missing=True)
        _, warning = policy.resolve(_nugget("[[[Anything]]]"))
        assert warning is None
        assert not policy.has_table


# ── Missing translations ──────────────────────────────────────────────────


class TestMissing:
    def test_miss_records_warning_and_passes_through(self, table) -> None:
        policy = ResolutionPolicy(table, locale="fr")
        outcome, warning = policy.resolve(_nugget("[[[Page not found]]]"), "main.js")
        assert outcome == PassThrough("[[[Page not found]]]")
        assert warning == MissingTranslation(asset="main.js", key="Page not found", locale="fr")

    def test_empty_value_is_a_miss(self, table) -> None:
        policy = ResolutionPolicy(table, locale="fr")
        outcome, warning = policy.resolve(_nugget("[[[Forgot Translation]]]"), "main.js")
        assert isinstance(outcome, PassThrough)
        assert warning is not None

    def test_miss_without_warnings(self, table) -> None:
        policy = ResolutionPolicy(table, locale="fr", warn_on_missing=False)
        outcome, warning = policy.resolve(_nugget("[[[Page not found]]]"))
        assert isinstance(outcome, PassThrough)
        assert warning is None

    def test_miss_with_brackets_removed(self, table) -> None:
        policy = ResolutionPolicy(table, locale="fr", always_remove_brackets=True)
        outcome, warning = policy.resolve(_nugget("[[[Page %0|||404]]]"))
        assert outcome == BracketsStripped("Page 404")
        assert warning is not None

    def test_warning_message(self) -> None:
        warning = MissingTranslation(asset="main.js", key="Log in", locale="de")
        assert str(warning) == "Missing translation in main.js.\n 'Log in' : de"


# ── Translated ────────────────────────────────────────────────────────────


class TestTranslated:
    def test_simple_hit(self, table) -> None:
        policy = ResolutionPolicy(table, locale="fr")
        outcome, warning = policy.resolve(_nugget("[[[Log off]]]"))
        assert outcome == Translated("Se déconnecter")
        assert warning is None

    def test_hit_formats_and_escapes(self, table) -> None:
        policy = ResolutionPolicy(table, locale="fr")
        outcome, _ = policy.resolve(_nugget("[[[Hello, %0. My Name is %1.|||John|||Andrew]]]"))
        assert outcome == Translated("Bonjour, John. Je m\\'appelle Andrew.")

    def test_arguments_not_escaped(self) -> None:
        policy = ResolutionPolicy({"Count (%0)": "Total (%0)"}, locale="fr")
        outcome, _ = policy.resolve(_nugget('[[[Count (%0)|||" + n + "]]]'))
        assert outcome.text == 'Total (" + n + ")'

    def test_crlf_key_matches_normalized_entry(self, table) -> None:
        policy = ResolutionPolicy(table, locale="fr")
        outcome, _ = policy.resolve(_nugget("[[[Two\r\nlines]]]"))
        assert outcome == Translated("Deux\nlignes")

    def test_unicode_escape_decoded(self, table) -> None:
        policy = ResolutionPolicy(table, locale="fr")
        outcome, _ = policy.resolve(_nugget("[[[Fancy]]]"))
        assert outcome.text == "don" + chr(0x2019) + "t"

    def test_comment_ignored_for_lookup(self, table) -> None:
        policy = ResolutionPolicy(table, locale="fr")
        outcome, _ = policy.resolve(_nugget("[[[Log off///menu entry]]]"))
        assert outcome == Translated("Se déconnecter")

    def test_table_not_mutated(self, table) -> None:
        snapshot = dict(table)
        policy = ResolutionPolicy(table, locale="fr", always_remove_brackets=True)
        for text in ("[[[Log off]]]", "[[[Missing]]]", "[[[Forgot Translation]]]"):
            policy.resolve(_nugget(text))
        assert table == snapshot
