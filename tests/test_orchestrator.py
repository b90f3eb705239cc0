from __future__ import annotations

import json

import pytest

from ai_translate import orchestrator as orch
from ai_translate.errors import (
    ContentBlockedError,
    EmptyResponseError,
    FileParseError,
    TransportError,
    WriteError,
)
from ai_translate.models import OutcomeStatus, TranslationMode

from conftest import FakeProvider, read_locale, write_locale

DIFF = '+  "b": {"d": "New"},\n+  "e": "Four"'


def _opts(locales_dir, targets, **kw):
    return orch.RunOptions(diff=DIFF, locales_dir=locales_dir, targets=targets, **kw)


# ---------------------------
# Target discovery
# ---------------------------

def test_discover_skips_source_and_non_json(locales_dir):
    for code in ("en", "fr", "de"):
        write_locale(locales_dir, code, {})
    (locales_dir / "README.md").write_text("x", encoding="utf-8")
    (locales_dir / "nested.json").mkdir()

    assert orch.discover_target_locales(locales_dir, "en") == ["de", "fr"]


def test_discover_only_source_file_finds_nothing(locales_dir):
    write_locale(locales_dir, "en", {"a": "b"})

    assert orch.resolve_targets(None, locales_dir, "en") == []


def test_explicit_lang_wins(locales_dir):
    assert orch.resolve_targets("ja", locales_dir, "en") == ["ja"]


# ---------------------------
# Steps
# ---------------------------

def test_load_context_missing_is_empty(locales_dir):
    assert orch.load_context(locales_dir / "fr.json") == {}


def test_load_context_invalid_propagates(locales_dir):
    write_locale(locales_dir, "fr", "{broken")

    with pytest.raises(FileParseError):
        orch.load_context(locales_dir / "fr.json")


def test_apply_result_by_mode():
    ctx = {"a": "1", "b": {"c": "2"}}
    res = {"b": {"d": "3"}, "e": "4"}

    assert orch.apply_result(TranslationMode.FULL, ctx, res) == res
    assert orch.apply_result(TranslationMode.DELTA, ctx, res) == {"a": "1", "b": {"c": "2", "d": "3"}, "e": "4"}


# ---------------------------
# Run
# ---------------------------

def test_full_mode_replaces_document(locales_dir):
    write_locale(locales_dir, "es", {"old": "viejo", "a": "uno"})
    provider = FakeProvider({"es": json.dumps({"a": "uno", "e": "cuatro"})})

    summary = orch.run(provider, _opts(locales_dir, ["es"]))

    assert [o.status for o in summary.outcomes] == [OutcomeStatus.UPDATED]
    assert read_locale(locales_dir, "es") == {"a": "uno", "e": "cuatro"}
    assert provider.calls[0]["context_path"] == locales_dir / "es.json"
    assert "Spanish (es)" in provider.calls[0]["prompt"]


def test_delta_mode_merges_into_existing(locales_dir):
    write_locale(locales_dir, "fr", {"a": "1", "b": {"c": "2"}})
    provider = FakeProvider({"fr": json.dumps({"b": {"d": "3"}, "e": "4"})})

    summary = orch.run(provider, _opts(locales_dir, ["fr"], mode=TranslationMode.DELTA))

    assert summary.counts() == {"updated": 1, "skipped": 0, "failed": 0}
    out = read_locale(locales_dir, "fr")
    assert out == {"a": "1", "b": {"c": "2", "d": "3"}, "e": "4"}
    assert list(out) == ["a", "b", "e"]
    assert "Do not return the whole file" in provider.calls[0]["prompt"]


def test_missing_context_file_starts_empty_and_creates_file(locales_dir):
    provider = FakeProvider({"fr": '{"e": "quatre"}'})

    summary = orch.run(provider, _opts(locales_dir, ["fr"], mode=TranslationMode.DELTA))

    assert summary.outcomes[0].status == OutcomeStatus.UPDATED
    assert len(provider.calls) == 1
    assert read_locale(locales_dir, "fr") == {"e": "quatre"}


def test_non_json_response_is_skipped_and_logged(locales_dir, capsys):
    write_locale(locales_dir, "de", {"a": "eins"})
    provider = FakeProvider({"de": "not json", "fr": '{"a": "un"}'})

    summary = orch.run(provider, _opts(locales_dir, ["de", "fr"]))

    assert [o.status for o in summary.outcomes] == [OutcomeStatus.SKIPPED, OutcomeStatus.UPDATED]
    assert read_locale(locales_dir, "de") == {"a": "eins"}
    assert read_locale(locales_dir, "fr") == {"a": "un"}
    assert "Received: not json" in capsys.readouterr().err


def test_json_array_response_is_skipped(locales_dir):
    provider = FakeProvider({"it": '["a", "b"]'})

    summary = orch.run(provider, _opts(locales_dir, ["it"]))

    assert summary.outcomes[0].status == OutcomeStatus.SKIPPED
    assert not (locales_dir / "it.json").exists()


@pytest.mark.parametrize(
    "exc",
    [
        TransportError("OpenAI API error 500: boom", status=500, body="boom"),
        EmptyResponseError("empty"),
        ContentBlockedError("blocked", feedback={"block_reason": "SAFETY"}),
    ],
)
def test_provider_failure_is_isolated_per_locale(locales_dir, exc):
    write_locale(locales_dir, "ja", {"a": "ichi"})
    provider = FakeProvider({"ja": exc, "ko": '{"a": "il"}'})

    summary = orch.run(provider, _opts(locales_dir, ["ja", "ko"]))

    ja, ko = summary.outcomes
    assert ja.status == OutcomeStatus.FAILED
    assert ja.error is exc
    assert ko.status == OutcomeStatus.UPDATED
    assert read_locale(locales_dir, "ja") == {"a": "ichi"}
    assert summary.locales == ["ja", "ko"]


def test_unparseable_context_fails_locale_without_calling_provider(locales_dir):
    write_locale(locales_dir, "pt", "{oops")
    provider = FakeProvider({"nl": '{"a": "een"}'})

    summary = orch.run(provider, _opts(locales_dir, ["pt", "nl"]))

    assert [o.status for o in summary.outcomes] == [OutcomeStatus.FAILED, OutcomeStatus.UPDATED]
    assert isinstance(summary.outcomes[0].error, FileParseError)
    assert [c["locale"] for c in provider.calls] == ["nl"]


def test_write_error_aborts_run(locales_dir, monkeypatch):
    def boom(path, data):
        raise WriteError(path, "disk full")

    monkeypatch.setattr(orch, "write_json_file", boom)
    provider = FakeProvider(default='{"a": "b"}')

    with pytest.raises(WriteError):
        orch.run(provider, _opts(locales_dir, ["es", "fr"]))
    assert len(provider.calls) == 1


def test_dry_run_writes_nothing(locales_dir):
    write_locale(locales_dir, "es", {"a": "uno"})
    provider = FakeProvider({"es": '{"a": "UNO"}'})

    summary = orch.run(provider, _opts(locales_dir, ["es"], dry_run=True))

    assert summary.outcomes[0].status == OutcomeStatus.UPDATED
    assert summary.outcomes[0].reason == "dry-run"
    assert read_locale(locales_dir, "es") == {"a": "uno"}


def test_locale_names_override_prompt_name(locales_dir):
    provider = FakeProvider({"es": "{}"})

    orch.run(provider, _opts(locales_dir, ["es"], locale_names={"es": "Mexican Spanish"}))

    assert "Mexican Spanish (es)" in provider.calls[0]["prompt"]
