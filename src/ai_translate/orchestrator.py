from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from . import console
from .errors import FileReadError, MissingFileError, ProviderError, ResultParseError
from .fileio import LOCALE_SUFFIX, list_directory, locale_file, read_json_file, write_json_file
from .merge import merge_locale
from .models import LocaleDocument, LocaleOutcome, RunSummary, TranslationMode, TranslationRequest
from .prompt import build_prompt, language_name
from .providers.base import TranslationProvider


@dataclass(frozen=True)
class RunOptions:
    diff: str
    locales_dir: Path
    targets: Sequence[str]
    source_lang: str = "en"
    mode: TranslationMode = TranslationMode.FULL
    locale_names: Mapping[str, str] = field(default_factory=dict)
    dry_run: bool = False


# =========================
# Target discovery
# =========================

def discover_target_locales(locales_dir: Path, source_lang: str) -> List[str]:
    """Every `<code>.json` directly under locales_dir except the source locale, by name."""
    source_file = f"{source_lang}{LOCALE_SUFFIX}"
    codes: List[str] = []
    for name in list_directory(locales_dir):
        if not name.endswith(LOCALE_SUFFIX) or name == source_file:
            continue
        if not (locales_dir / name).is_file():
            continue
        codes.append(name[: -len(LOCALE_SUFFIX)])
    return codes


def resolve_targets(lang: Optional[str], locales_dir: Path, source_lang: str) -> List[str]:
    if lang:
        return [lang]
    return discover_target_locales(locales_dir, source_lang)


# =========================
# Per-locale steps
# =========================

def load_context(path: Path) -> LocaleDocument:
    """Existing translations; a locale without a file yet starts empty."""
    try:
        return read_json_file(path)
    except MissingFileError:
        return {}


def parse_result(raw: str) -> LocaleDocument:
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ResultParseError(f"Provider response is not valid JSON: {e}", raw=raw) from e
    if not isinstance(obj, dict):
        raise ResultParseError(
            f"Provider response must be a JSON object, got {type(obj).__name__}", raw=raw
        )
    return obj


def apply_result(mode: TranslationMode, context: LocaleDocument, result: LocaleDocument) -> LocaleDocument:
    if mode == TranslationMode.DELTA:
        return merge_locale(context, result)
    return result


def translate_locale(provider: TranslationProvider, code: str, opts: RunOptions) -> LocaleOutcome:
    """
    One locale, start to finish. Read, provider and parse failures become an
    outcome; a WriteError is not caught and ends the run.
    """
    target = locale_file(opts.locales_dir, code)

    try:
        context = load_context(target)
    except FileReadError as e:
        console.error(f"[{code}] could not load {target}: {e}")
        return LocaleOutcome.failed(code, target, e)

    if context:
        console.detail(f"[{code}] loaded {len(context)} top-level keys from {target}")
    else:
        console.detail(f"[{code}] no existing translations at {target}, starting from an empty object")

    request = TranslationRequest(
        prompt=build_prompt(
            opts.mode,
            opts.diff,
            code,
            language_name(code, opts.locale_names),
            source_locale=opts.source_lang,
        ),
        context_path=target,
    )

    console.info(f"[{code}] sending {opts.mode.value} request to {provider.name()}...")
    try:
        with console.status(f"Waiting for {provider.name()} ({code})"):
            raw = provider.translate(request.prompt, request.context_path)
    except ProviderError as e:
        console.error(f"[{code}] {type(e).__name__}: {e}")
        return LocaleOutcome.failed(code, target, e)

    try:
        result = parse_result(raw)
    except ResultParseError as e:
        console.error(f"[{code}] {e}. Skipping update for this locale.")
        console.detail(f"Received: {e.raw}")
        return LocaleOutcome.skipped(code, target, "response was not a JSON object", error=e)

    document = apply_result(opts.mode, context, result)

    if opts.dry_run:
        console.warn(f"[{code}] dry run, not writing {target}")
        return LocaleOutcome.updated(code, target, reason="dry-run")

    write_json_file(target, document)
    console.ok(f"[{code}] updated {target}")
    return LocaleOutcome.updated(code, target)


# =========================
# Run
# =========================

def run(provider: TranslationProvider, opts: RunOptions) -> RunSummary:
    """Translate every target locale in order, one provider call at a time."""
    summary = RunSummary()
    for code in opts.targets:
        console.info(f"--- {code} ---")
        summary.add(translate_locale(provider, code, opts))
    return summary
