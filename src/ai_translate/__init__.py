from __future__ import annotations

__version__ = "0.2.0"

from .errors import (
    AiTranslateError,
    ConfigError,
    ContentBlockedError,
    ContextReadError,
    EmptyResponseError,
    FileParseError,
    FileReadError,
    MissingFileError,
    ProviderError,
    ResultParseError,
    TransportError,
    WriteError,
)
from .merge import merge_locale
from .models import LocaleOutcome, OutcomeStatus, ProviderConfig, RunSummary, TranslationMode

__all__ = [
    "__version__",
    "merge_locale",
    "LocaleOutcome",
    "OutcomeStatus",
    "ProviderConfig",
    "RunSummary",
    "TranslationMode",
    "AiTranslateError",
    "ConfigError",
    "ContentBlockedError",
    "ContextReadError",
    "EmptyResponseError",
    "FileParseError",
    "FileReadError",
    "MissingFileError",
    "ProviderError",
    "ResultParseError",
    "TransportError",
    "WriteError",
]
