"""Central OpenAI-compatible client wrapper with structured JSON output."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI

DEFAULT_CHAT_MODEL = "google/gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 180.0

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Provider:
    """Provider configuration for a single OpenAI-compatible endpoint."""

    api_key: str
    base_url: str | None = None


class OpenAIClient:
    """Thin wrapper around one OpenAI-compatible provider.

    Every call is a single attempt; errors from the SDK propagate unchanged.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        default_chat_model: str | None = None,
        timeout: float | None = None,
    ):
        key = self._clean(api_key)
        self._provider = _Provider(api_key=key, base_url=self._clean(base_url)) if key else None
        self.api_key = key
        self.base_url = self._provider.base_url if self._provider else self._clean(base_url)
        self.default_chat_model = self._clean(default_chat_model) or DEFAULT_CHAT_MODEL
        self.timeout = timeout or DEFAULT_TIMEOUT_SECONDS
        self._client: OpenAI | None = None

    @staticmethod
    def _clean(value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None

    @property
    def configured(self) -> bool:
        return self._provider is not None

    @property
    def client(self) -> OpenAI:
        if self._provider is None:
            raise RuntimeError("No API key configured. Set OPENAI_API_KEY for live responses.")
        if self._client is None:
            self._client = OpenAI(
                api_key=self._provider.api_key,
                base_url=self._provider.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def chat(self, messages: List[Dict[str, Any]], model: str | None = None, **kwargs) -> Any:
        """Call the provider chat endpoint once."""
        chosen_model = model or self.default_chat_model
        logger.debug("Chat completion request model=%s base_url=%s", chosen_model, self.base_url)
        return self.client.chat.completions.create(messages=messages, model=chosen_model, **kwargs)

    def complete_json(
        self,
        messages: List[Dict[str, Any]],
        schema_name: str,
        schema: Dict[str, Any],
        model: str | None = None,
        **kwargs,
    ) -> Dict[str, Any]:
        """Request a JSON object matching ``schema`` and return it parsed."""
        response_format = {
            "type": "json_schema",
            "json_schema": {"name": schema_name, "schema": schema, "strict": False},
        }
        resp = self.chat(messages, model=model, response_format=response_format, **kwargs)
        content = extract_content(resp)
        if content is None:
            refusal = extract_refusal(resp)
            if refusal:
                raise ValueError(f"Model refused the request: {refusal}")
            raise ValueError("Model returned no choices")
        if not content.strip():
            raise ValueError("Empty response from model")
        payload = json.loads(strip_code_fence(content))
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
        return payload


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _first_message(resp: Any) -> Any:
    choices = _field(resp, "choices")
    if not choices:
        return None
    return _field(choices[0], "message")


def _join_parts(content: Any) -> str:
    # Some gateways return a list of typed parts instead of a plain string.
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        texts = (_field(part, "text") or _field(part, "content") for part in content)
        return "\n".join(text for text in texts if isinstance(text, str)).strip()
    return str(content)


def extract_content(resp: Any) -> Optional[str]:
    """Return the reply text, or None when there is no choice or the model refused."""
    message = _first_message(resp)
    if message is None or extract_refusal(resp):
        return None
    return _join_parts(_field(message, "content"))


def extract_refusal(resp: Any) -> Optional[str]:
    message = _first_message(resp)
    refusal = _field(message, "refusal") if message is not None else None
    return refusal if isinstance(refusal, str) and refusal.strip() else None


def strip_code_fence(text: str) -> str:
    """Drop a surrounding ```json fence some gateways add despite the schema."""
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    lines = stripped.splitlines()[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()
