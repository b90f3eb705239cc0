from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError


LocaleDocument = Dict[str, Any]


# =========================
# Modes
# =========================

class TranslationMode(str, Enum):
    FULL = "full"
    DELTA = "delta"


def parse_mode(value: object) -> TranslationMode:
    s = str(value or "").strip().lower()
    try:
        return TranslationMode(s)
    except ValueError:
        choices = ", ".join(m.value for m in TranslationMode)
        raise ConfigError(f"Unknown mode {value!r} (expected one of: {choices})") from None


# =========================
# Provider config
# =========================

@dataclass(frozen=True)
class ProviderConfig:
    """Per-run model knobs; a provider falls back to its own default for None."""
    model: Optional[str] = None
    temperature: Optional[float] = None

    def __post_init__(self) -> None:
        if self.temperature is None:
            return
        if not 0.0 <= float(self.temperature) <= 1.0:
            raise ConfigError(f"temperature must be within [0, 1], got {self.temperature}")


@dataclass(frozen=True)
class TranslationRequest:
    prompt: str
    context_path: Optional[Path] = None


# =========================
# Run results
# =========================

class OutcomeStatus(str, Enum):
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class LocaleOutcome:
    locale: str
    status: OutcomeStatus
    path: Path
    reason: str = ""
    error: Optional[BaseException] = None

    @classmethod
    def updated(cls, locale: str, path: Path, reason: str = "") -> "LocaleOutcome":
        return cls(locale=locale, status=OutcomeStatus.UPDATED, path=path, reason=reason)

    @classmethod
    def skipped(cls, locale: str, path: Path, reason: str, error: Optional[BaseException] = None) -> "LocaleOutcome":
        return cls(locale=locale, status=OutcomeStatus.SKIPPED, path=path, reason=reason, error=error)

    @classmethod
    def failed(cls, locale: str, path: Path, error: BaseException) -> "LocaleOutcome":
        return cls(locale=locale, status=OutcomeStatus.FAILED, path=path, reason=str(error), error=error)


@dataclass
class RunSummary:
    outcomes: List[LocaleOutcome] = field(default_factory=list)

    def add(self, outcome: LocaleOutcome) -> None:
        self.outcomes.append(outcome)

    def counts(self) -> Dict[str, int]:
        d: Dict[str, int] = {s.value: 0 for s in OutcomeStatus}
        for o in self.outcomes:
            d[o.status.value] += 1
        return d

    @property
    def locales(self) -> List[str]:
        return [o.locale for o in self.outcomes]
