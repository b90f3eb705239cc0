from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from .errors import ConfigError
from .models import TranslationMode, parse_mode


OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
GEMINI_API_KEY_ENV = "GEMINI_API_KEY"

API_KEY_ENV_BY_PROVIDER: Dict[str, str] = {
    "openai": OPENAI_API_KEY_ENV,
    "gemini": GEMINI_API_KEY_ENV,
}

DEFAULT_PROVIDER = "gemini"
DEFAULT_SOURCE_LANG = "en"
DEFAULT_LOCALES_PATH = "./locales"
DEFAULT_CONFIG_FILENAME = "ai_translate.yaml"


# =========================
# Environment
# =========================

@dataclass(frozen=True)
class Settings:
    """Credentials read once from the process environment at startup."""
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            openai_api_key=(env.get(OPENAI_API_KEY_ENV) or "").strip() or None,
            gemini_api_key=(env.get(GEMINI_API_KEY_ENV) or "").strip() or None,
        )

    def api_key_for(self, provider: str) -> str:
        env_name = API_KEY_ENV_BY_PROVIDER.get(provider)
        if env_name is None:
            raise ConfigError(f"Unknown provider: {provider!r}")
        key = self.openai_api_key if provider == "openai" else self.gemini_api_key
        if not key:
            raise ConfigError(
                f"{env_name} is not set.\n"
                "Export it in your shell before running:\n"
                f'  export {env_name}="YOUR_API_KEY"'
            )
        return key


# =========================
# Project file (YAML)
# =========================

@dataclass(frozen=True)
class ProjectConfig:
    """
    Optional defaults from ai_translate.yaml. Every field may be omitted;
    command-line flags take precedence over anything set here.
    """
    provider: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    mode: Optional[TranslationMode] = None
    source_lang: Optional[str] = None
    locales_path: Optional[str] = None
    locale_names: Dict[str, str] = field(default_factory=dict)


def _as_str(x: object) -> Optional[str]:
    if x is None:
        return None
    s = str(x).strip()
    return s or None


def default_config_path(root_dir: Optional[Path] = None) -> Path:
    return (root_dir or Path.cwd()) / DEFAULT_CONFIG_FILENAME


def parse_project_config(raw: Mapping[str, object]) -> ProjectConfig:
    temperature = raw.get("temperature")
    if temperature is not None:
        try:
            temperature = float(temperature)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise ConfigError(f"temperature must be a number, got {temperature!r}") from None

    mode_raw = raw.get("mode")
    mode = parse_mode(mode_raw) if mode_raw is not None else None

    names_raw = raw.get("locale_names") or {}
    if not isinstance(names_raw, dict):
        raise ConfigError("locale_names must be a mapping of locale code to language name")
    locale_names = {str(k).strip(): str(v).strip() for k, v in names_raw.items() if _as_str(v)}

    return ProjectConfig(
        provider=_as_str(raw.get("provider")),
        model=_as_str(raw.get("model")),
        temperature=temperature,  # type: ignore[arg-type]
        mode=mode,
        source_lang=_as_str(raw.get("source_lang")),
        locales_path=_as_str(raw.get("locales_path")),
        locale_names=locale_names,
    )


def load_project_config(path: Optional[Path] = None, *, required: bool = False) -> ProjectConfig:
    """
    Load the YAML project file.
    - path None: look for ./ai_translate.yaml, silently use defaults when absent
    - required=True: an absent file is an error (explicit --config)
    """
    p = path or default_config_path()
    if not p.exists():
        if required:
            raise ConfigError(f"Config file not found: {p}")
        return ProjectConfig()

    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to parse {p}: {e}") from e

    if obj is None:
        return ProjectConfig()
    if not isinstance(obj, dict):
        raise ConfigError(f"{p}: top level must be a mapping")
    return parse_project_config(obj)
