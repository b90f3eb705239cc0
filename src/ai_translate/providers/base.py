from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from ..errors import ContextReadError, FileReadError, MissingFileError
from ..fileio import read_text_file


@runtime_checkable
class TranslationProvider(Protocol):
    """
    A remote model that turns a prompt (plus the current locale file as
    grounding context) into raw JSON text.

    Implementations unwrap their own response envelopes and raise one of
    ContextReadError / TransportError / EmptyResponseError / ContentBlockedError.
    """

    def name(self) -> str:
        ...

    def translate(self, prompt: str, context_path: Optional[Union[str, Path]] = None) -> str:
        ...


def read_context(context_path: Optional[Union[str, Path]]) -> Optional[str]:
    """Contents of the context file, None when there is none on disk."""
    if context_path is None:
        return None
    try:
        return read_text_file(context_path)
    except MissingFileError:
        return None
    except FileReadError as e:
        raise ContextReadError(f"Failed to read context file {context_path}: {e}") from e


def require_text(text: object) -> Optional[str]:
    """`text` if it is a non-blank string."""
    if isinstance(text, str) and text.strip():
        return text
    return None
