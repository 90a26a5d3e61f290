"""Boundary calls to the coaching model.

Each call makes exactly one request. Whatever goes wrong on the way (SDK
error, empty body, bad JSON, schema mismatch) surfaces as
``BoundaryCallError``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, TypeVar

from pydantic import BaseModel, ValidationError

from ..contracts import AnalysisContract, ReviewContract, contract_schema
from ..errors import BoundaryCallError
from ..media import MediaPayload
from . import prompts
from .openai_client import OpenAIClient

logger = logging.getLogger(__name__)

ContractT = TypeVar("ContractT", bound=BaseModel)


def _media_part(media: MediaPayload) -> Dict[str, Any]:
    return {"type": "video_url", "video_url": {"url": media.data_url()}}


def _text_part(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}


class CoachService:
    """Analysis and review requests against an OpenAI-compatible gateway."""

    def __init__(self, ai_client: OpenAIClient, model: str | None = None, temperature: float = 0.4):
        self.ai_client = ai_client
        self.model = model or ai_client.default_chat_model
        self.temperature = temperature
        self._analysis_schema = contract_schema(AnalysisContract)
        self._review_schema = contract_schema(ReviewContract)

    def _messages(self, parts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [
            {"role": "system", "content": prompts.SYSTEM_INSTRUCTION},
            {"role": "user", "content": parts},
        ]

    def _request(
        self,
        kind: str,
        parts: List[Dict[str, Any]],
        contract: type[ContractT],
        schema: Dict[str, Any],
    ) -> ContractT:
        try:
            payload = self.ai_client.complete_json(
                self._messages(parts),
                schema_name=contract.__name__,
                schema=schema,
                model=self.model,
                temperature=self.temperature,
            )
            result = contract.model_validate(payload)
        except ValidationError as exc:
            raise BoundaryCallError(f"{kind} response did not match {contract.__name__}") from exc
        except Exception as exc:
            raise BoundaryCallError(f"{kind} request failed: {exc}") from exc
        logger.info("%s completed with model %s", kind, self.model)
        return result

    def analyze(self, media: MediaPayload, context_text: str = "") -> AnalysisContract:
        logger.info("Analyzing %s (%s, %d bytes)", media.name, media.mime_type, media.size)
        parts = [_media_part(media), _text_part(prompts.analysis_prompt(context_text))]
        return self._request("analysis", parts, AnalysisContract, self._analysis_schema)

    def review_video(self, context_summary: str, media: MediaPayload) -> ReviewContract:
        logger.info("Reviewing homework video %s (%d bytes)", media.name, media.size)
        parts = [_media_part(media), _text_part(prompts.video_review_prompt(context_summary))]
        return self._request("video review", parts, ReviewContract, self._review_schema)

    def review_script(self, context_summary: str, script_text: str) -> ReviewContract:
        logger.info("Reviewing homework script (%d chars)", len(script_text))
        parts = [_text_part(prompts.script_review_prompt(context_summary, script_text))]
        return self._request("script review", parts, ReviewContract, self._review_schema)
