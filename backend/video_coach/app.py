"""Backend application factory.

Returns a dictionary of dependencies the Streamlit layer wires into each
coaching session.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from .ai.coach import CoachService
from .ai.openai_client import DEFAULT_CHAT_MODEL, OpenAIClient
from .session import DEFAULT_MAX_UPLOAD_BYTES, CoachController

# Ensure local `.env` values are available when running via Streamlit/CLI.
load_dotenv(Path(__file__).resolve().parents[2] / ".env", override=False)

HACKCLUB_BASE_URL = "https://ai.hackclub.com/proxy/v1"
DEFAULT_TEMPERATURE = 0.4


@dataclass(frozen=True)
class CoachSettings:
    api_key: str | None
    base_url: str | None
    model: str
    temperature: float
    max_upload_bytes: int
    log_level: str


def _read_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _read_float(name: str, default: float, allow_zero: bool = False) -> float:
    raw = _read_env(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if value > 0 or (allow_zero and value == 0):
        return value
    return default


def _resolve_base_url(api_key: str | None, base_url: str | None) -> str | None:
    if base_url:
        return base_url
    if api_key and api_key.startswith("sk-hc-"):
        return HACKCLUB_BASE_URL
    return None


def load_settings() -> CoachSettings:
    api_key = _read_env("OPENAI_API_KEY")
    max_upload_mb = _read_float("VIDEO_COACH_MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_BYTES / (1024 * 1024))
    return CoachSettings(
        api_key=api_key,
        base_url=_resolve_base_url(api_key, _read_env("OPENAI_BASE_URL")),
        model=_read_env("VIDEO_COACH_MODEL") or DEFAULT_CHAT_MODEL,
        temperature=_read_float("VIDEO_COACH_TEMPERATURE", DEFAULT_TEMPERATURE, allow_zero=True),
        max_upload_bytes=int(max_upload_mb * 1024 * 1024),
        log_level=_read_env("VIDEO_COACH_LOG_LEVEL") or "INFO",
    )


def create_app(settings: CoachSettings | None = None) -> Dict[str, Any]:
    """Create the backend dependency container."""
    settings = settings or load_settings()
    ai_client = OpenAIClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        default_chat_model=settings.model,
    )
    coach = CoachService(ai_client, model=settings.model, temperature=settings.temperature)
    return {
        "settings": settings,
        "ai_client": ai_client,
        "coach": coach,
    }


def new_controller(app: Dict[str, Any]) -> CoachController:
    """Fresh per-session controller bound to the shared coach service."""
    return CoachController(app["coach"], max_upload_bytes=app["settings"].max_upload_bytes)
