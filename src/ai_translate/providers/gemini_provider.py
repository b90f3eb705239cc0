from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..errors import ContentBlockedError, EmptyResponseError, TransportError
from ..models import ProviderConfig
from .base import read_context, require_text

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.7

# Candidate finish reasons that mean the safety system stopped generation.
_BLOCKING_FINISH_REASONS = {"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII"}


def _enum_name(value: object) -> str:
    if value is None:
        return ""
    name = getattr(value, "name", None)
    if isinstance(name, str):
        return name.upper()
    raw = getattr(value, "value", None)
    if isinstance(raw, str):
        return raw.upper()
    return str(value).upper()


def blocked_feedback(response: Any) -> Optional[Any]:
    """Prompt feedback / finish reason describing a safety block, if any."""
    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None and getattr(feedback, "block_reason", None):
        dump = getattr(feedback, "model_dump", None)
        if callable(dump):
            return dump(mode="json", exclude_none=True)
        return {"block_reason": _enum_name(feedback.block_reason)}

    candidates = getattr(response, "candidates", None) or []
    if candidates:
        reason = _enum_name(getattr(candidates[0], "finish_reason", None))
        if reason in _BLOCKING_FINISH_REASONS:
            return {"finish_reason": reason}
    return None


def extract_text(response: Any) -> Optional[str]:
    return require_text(getattr(response, "text", None))


class GeminiProvider:
    def __init__(
            self,
            *,
            api_key: str,
            config: Optional[ProviderConfig] = None,
            client: Optional[Any] = None,
    ):
        config = config or ProviderConfig()
        self.model = config.model or DEFAULT_MODEL
        self.temperature = DEFAULT_TEMPERATURE if config.temperature is None else config.temperature
        self.client = client if client is not None else genai.Client(api_key=api_key)

    def name(self) -> str:
        return "gemini"

    def _contents(self, prompt: str, context: Optional[str]) -> list:
        parts = [types.Part.from_text(text=prompt)]
        if context:
            parts.append(types.Part.from_bytes(data=context.encode("utf-8"), mime_type="text/plain"))
        return [types.Content(role="user", parts=parts)]

    def translate(self, prompt: str, context_path: Optional[Union[str, Path]] = None) -> str:
        context = read_context(context_path)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=self._contents(prompt, context),
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    response_mime_type="application/json",
                    thinking_config=types.ThinkingConfig(thinking_budget=0),
                ),
            )
        except genai_errors.APIError as e:
            body = json.dumps(e.details, ensure_ascii=False, default=str) if e.details else None
            raise TransportError(
                f"Gemini API error {e.code}: {e.message or body}",
                status=e.code,
                body=body,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            # Covers UnknownApiResponseError and a non-JSON body from a proxy.
            raise TransportError(f"Gemini returned an unreadable response envelope: {e}") from e

        feedback = blocked_feedback(response)
        if feedback is not None:
            raise ContentBlockedError(
                "Gemini API request was blocked. Feedback: "
                + json.dumps(feedback, ensure_ascii=False, default=str),
                feedback=feedback,
            )

        text = extract_text(response)
        if not text:
            raise EmptyResponseError("Gemini API returned an empty or invalid response.")
        return text
