from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union


class AiTranslateError(RuntimeError):
    pass


# =========================
# Setup
# =========================

class ConfigError(AiTranslateError):
    pass


# =========================
# File adapter
# =========================

class FileReadError(AiTranslateError):
    def __init__(self, path: Union[str, Path], message: str):
        super().__init__(message)
        self.path = Path(path)


class MissingFileError(FileReadError):
    pass


class FileParseError(FileReadError):
    pass


class WriteError(AiTranslateError):
    def __init__(self, path: Union[str, Path], message: str):
        super().__init__(message)
        self.path = Path(path)


# =========================
# Providers
# =========================

class ProviderError(AiTranslateError):
    pass


class ContextReadError(ProviderError):
    pass


class TransportError(ProviderError):
    def __init__(self, message: str, *, status: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.body = body


class EmptyResponseError(ProviderError):
    pass


class ContentBlockedError(ProviderError):
    def __init__(self, message: str, *, feedback: Any = None):
        super().__init__(message)
        self.feedback = feedback


# =========================
# Results
# =========================

class ResultParseError(AiTranslateError):
    def __init__(self, message: str, *, raw: str):
        super().__init__(message)
        self.raw = raw
