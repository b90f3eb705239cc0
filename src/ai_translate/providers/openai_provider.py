from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

import openai
from openai import OpenAI

from ..errors import ContentBlockedError, EmptyResponseError, TransportError
from ..models import ProviderConfig
from .base import read_context, require_text

DEFAULT_MODEL = "gpt-5-nano"

_PREVIEW_CHARS = 2000


def _field(obj: Any, key: str) -> Any:
    """Attribute or dict access; SDK objects and plain dicts both show up here."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _first(seq: Any) -> Any:
    if isinstance(seq, (list, tuple)) and seq:
        return seq[0]
    return None


def extract_text(response: Any) -> Optional[str]:
    """
    Pull the payload out of a Responses API envelope, falling back to the
    older shapes (`content[0].text`, chat `choices[0].message.content`).
    """
    text = require_text(_field(response, "output_text"))
    if text:
        return text

    for output in _field(response, "output") or []:
        for item in _field(output, "content") or []:
            text = require_text(_field(item, "text"))
            if text:
                return text

    text = require_text(_field(_first(_field(response, "content")), "text"))
    if text:
        return text

    message = _field(_first(_field(response, "choices")), "message")
    return require_text(_field(message, "content"))


def blocked_feedback(response: Any) -> Optional[Any]:
    """Safety-related details when the model refused or the output was filtered."""
    details = _field(response, "incomplete_details")
    if _field(response, "status") == "incomplete" and _field(details, "reason") == "content_filter":
        return {"status": "incomplete", "reason": "content_filter"}

    for output in _field(response, "output") or []:
        for item in _field(output, "content") or []:
            if _field(item, "type") == "refusal":
                return {"refusal": _field(item, "refusal")}
    return None


def _preview(response: Any) -> str:
    dump = getattr(response, "model_dump_json", None)
    try:
        text = dump(indent=2) if callable(dump) else json.dumps(response, indent=2, default=str)
    except (TypeError, ValueError):
        text = repr(response)
    return text[:_PREVIEW_CHARS]


class OpenAIProvider:
    def __init__(
            self,
            *,
            api_key: str,
            config: Optional[ProviderConfig] = None,
            client: Optional[Any] = None,
    ):
        config = config or ProviderConfig()
        self.model = config.model or DEFAULT_MODEL
        # Several current models reject an explicit temperature; only send one on request.
        self.temperature = config.temperature
        self.client = client if client is not None else OpenAI(api_key=api_key, max_retries=0)

    def name(self) -> str:
        return "openai"

    def translate(self, prompt: str, context_path: Optional[Union[str, Path]] = None) -> str:
        context = read_context(context_path)

        input_text = prompt
        if context:
            input_text += (
                "\n\nContext JSON file contents (do not echo this back except as part "
                f"of the final JSON output):\n{context}"
            )

        kwargs: dict = dict(
            model=self.model,
            input=input_text,
            text={"format": {"type": "json_object"}},
        )
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature

        try:
            response = self.client.responses.create(**kwargs)
        except openai.APIStatusError as e:
            body = e.response.text if e.response is not None else None
            raise TransportError(
                f"OpenAI API error {e.status_code}: {body or e.message}",
                status=e.status_code,
                body=body,
            ) from e
        except openai.APIError as e:
            raise TransportError(f"OpenAI request failed: {e}") from e

        feedback = blocked_feedback(response)
        if feedback is not None:
            raise ContentBlockedError(
                f"OpenAI blocked the response: {json.dumps(feedback, ensure_ascii=False, default=str)}",
                feedback=feedback,
            )

        text = extract_text(response)
        if not text:
            raise EmptyResponseError(
                f"OpenAI API returned an empty or invalid response. Preview:\n{_preview(response)}"
            )
        return text
