from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__, console
from .config import (
    DEFAULT_LOCALES_PATH,
    DEFAULT_PROVIDER,
    DEFAULT_SOURCE_LANG,
    ProjectConfig,
    Settings,
    load_project_config,
)
from .errors import AiTranslateError, ConfigError, FileReadError, WriteError
from .fileio import read_text_file
from .models import ProviderConfig, TranslationMode, parse_mode
from .orchestrator import RunOptions, resolve_targets, run
from .providers import create_provider, provider_names


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ai-translate",
        description="Translate i18n JSON locale files from a git diff of the source locale using an LLM.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "--diff",
        required=True,
        help="Path to the git diff (.txt) of the source locale JSON (e.g. en.json)",
    )
    p.add_argument(
        "--lang",
        default=None,
        help="Target locale code (e.g. es, fr). Omit to translate every other locale found.",
    )
    p.add_argument("--source-lang", default=None, help=f'Source locale code (default "{DEFAULT_SOURCE_LANG}")')
    p.add_argument(
        "--locales-path",
        default=None,
        help=f"Directory holding the locale JSON files (default {DEFAULT_LOCALES_PATH})",
    )
    p.add_argument(
        "--provider",
        default=None,
        choices=provider_names(),
        help=f"LLM provider (default {DEFAULT_PROVIDER})",
    )
    p.add_argument("--model", default=None, help="Model id (defaults to the provider's own default)")
    p.add_argument("--temperature", type=float, default=None, help="Sampling temperature between 0 and 1")
    p.add_argument(
        "--mode",
        default=None,
        choices=[m.value for m in TranslationMode],
        help="full: the model returns the whole file; delta: only changed keys, merged locally (default full)",
    )
    p.add_argument(
        "--config",
        default=None,
        help="YAML project file (default ./ai_translate.yaml when present)",
    )
    p.add_argument("--dry-run", action="store_true", help="Call the provider but do not write any file")
    return p


def _pick(flag: Optional[str], from_config: Optional[str], default: str) -> str:
    return flag or from_config or default


def _run(args: argparse.Namespace) -> int:
    cfg_path = Path(args.config).expanduser() if args.config else None
    project: ProjectConfig = load_project_config(cfg_path, required=cfg_path is not None)

    provider_name = _pick(args.provider, project.provider, DEFAULT_PROVIDER)
    source_lang = _pick(args.source_lang, project.source_lang, DEFAULT_SOURCE_LANG)
    locales_dir = Path(_pick(args.locales_path, project.locales_path, DEFAULT_LOCALES_PATH)).expanduser()
    mode = parse_mode(args.mode) if args.mode else (project.mode or TranslationMode.FULL)
    provider_config = ProviderConfig(
        model=args.model or project.model,
        temperature=args.temperature if args.temperature is not None else project.temperature,
    )

    # Credentials first: a missing key aborts before anything else is read.
    provider = create_provider(provider_name, Settings.from_env(), provider_config)

    console.info(f"Reading diff from {args.diff}")
    diff = read_text_file(args.diff)

    if args.lang:
        console.info(f"Target locale: {args.lang}")
    else:
        console.info(f"No target locale given, scanning {locales_dir}...")
    targets = resolve_targets(args.lang, locales_dir, source_lang)
    if not targets:
        console.warn(f"No target locale files found in {locales_dir} (excluding {source_lang}.json). Nothing to do.")
        return 0
    console.info(f"Locales: {', '.join(targets)} | provider={provider.name()} mode={mode.value}")

    summary = run(
        provider,
        RunOptions(
            diff=diff,
            locales_dir=locales_dir,
            targets=targets,
            source_lang=source_lang,
            mode=mode,
            locale_names=project.locale_names,
            dry_run=args.dry_run,
        ),
    )

    console.print_summary(summary)
    console.ok("All translations processed.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(argv)

    try:
        return _run(args)
    except (ConfigError, FileReadError) as e:
        console.error(str(e))
        return 1
    except WriteError as e:
        console.error(f"{e} (aborting run)")
        return 1
    except AiTranslateError as e:
        console.error(f"Error in main execution: {e}")
        return 1
    except KeyboardInterrupt:
        console.warn("Cancelled.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
