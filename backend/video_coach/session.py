"""Session state and the orchestration flow for one coaching session.

``CoachController`` is the only writer of ``SessionState``. Navigation
delegates to the pure transitions in ``stages``; the three submission entry
points wrap a single boundary call each and are guarded by ``busy``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Protocol

from . import stages
from .contracts import AnalysisContract, ReviewContract
from .errors import (
    ANALYSIS_FAILED_MESSAGE,
    EMPTY_SCRIPT_MESSAGE,
    REVIEW_FAILED_MESSAGE,
    BoundaryCallError,
    oversized_message,
)
from .media import MediaPayload, encode_upload, upload_size
from .stages import Stage, StageState

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 9 * 1024 * 1024


class SubmissionMode(str, Enum):
    VIDEO = "video"
    SCRIPT = "script"


class CoachBoundary(Protocol):
    def analyze(self, media: MediaPayload, context_text: str = "") -> AnalysisContract: ...

    def review_video(self, context_summary: str, media: MediaPayload) -> ReviewContract: ...

    def review_script(self, context_summary: str, script_text: str) -> ReviewContract: ...


@dataclass
class SessionState:
    stage: StageState = field(default_factory=StageState)
    analysis: Optional[AnalysisContract] = None
    review: Optional[ReviewContract] = None
    mode: SubmissionMode = SubmissionMode.VIDEO
    context_text: str = ""
    error: Optional[str] = None
    busy: bool = False

    @property
    def current_stage(self) -> Stage:
        return self.stage.current

    @property
    def max_stage(self) -> Stage:
        return self.stage.max_reached


def build_context_summary(analysis: AnalysisContract) -> str:
    """Describe the reference style for the review prompt."""
    rules = "; ".join(rule.rule for rule in analysis.sop)
    structure = " -> ".join(item.purpose for item in analysis.structure)
    return (
        f"Style: {analysis.case_card.name}. "
        f"Key Rules: {rules}. "
        f"Structure: {structure}. "
        f"Pacing: {analysis.dna.pacing}. "
        f"Average Shot Length: {analysis.dna.avg_shot_length}."
    )


class CoachController:
    def __init__(
        self,
        coach: CoachBoundary,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        state: SessionState | None = None,
    ):
        self.coach = coach
        self.max_upload_bytes = max_upload_bytes
        self.state = state or SessionState()

    # Navigation

    def _navigate(self, new_state: StageState) -> None:
        # Errors belong to the view they were raised on.
        if new_state.current != self.state.stage.current:
            self.state.error = None
        self.state.stage = new_state

    def advance(self) -> None:
        self._navigate(stages.advance(self.state.stage))

    def retreat(self) -> None:
        self._navigate(stages.retreat(self.state.stage))

    def jump_to(self, stage: Stage) -> bool:
        """Returns False when ``stage`` is still locked."""
        if stages.is_locked(self.state.stage, stage):
            return False
        self._navigate(stages.jump_to(self.state.stage, stage))
        return True

    # Submission mode

    def select_mode(self, mode: SubmissionMode | str) -> bool:
        if self.state.busy or self.state.current_stage != Stage.ASSIGNMENT:
            return False
        self.state.mode = SubmissionMode(mode)
        return True

    # Boundary-call flows

    def _reject_oversized(self, upload: Any) -> bool:
        size = upload_size(upload)
        if size <= self.max_upload_bytes:
            return False
        logger.info("Rejected upload of %d bytes (limit %d)", size, self.max_upload_bytes)
        self.state.error = oversized_message(self.max_upload_bytes)
        return True

    def start_analysis(self, upload: Any, context_text: str = "") -> bool:
        """Analyze a reference video. Returns True when an analysis was stored."""
        if self.state.busy:
            return False
        if self._reject_oversized(upload):
            return False

        self.state.context_text = context_text
        self.state.error = None
        self.state.busy = True
        try:
            media = encode_upload(upload)
            result = self.coach.analyze(media, context_text)
        except (BoundaryCallError, OSError):
            logger.exception("Reference analysis failed")
            self.state.error = ANALYSIS_FAILED_MESSAGE
            return False
        finally:
            self.state.busy = False

        self.state.analysis = result
        self.state.review = None
        stage = stages.unlock_up_to(self.state.stage, Stage.ASSIGNMENT)
        self.state.stage = stages.jump_to(stage, Stage.VERDICT)
        logger.info("Analysis stored; unlocked up to %s", Stage.ASSIGNMENT.name)
        return True

    def _can_submit_homework(self, mode: SubmissionMode) -> bool:
        state = self.state
        return (
            not state.busy
            and state.analysis is not None
            and state.current_stage == Stage.ASSIGNMENT
            and state.mode == mode
        )

    def context_summary(self) -> str:
        if self.state.analysis is None:
            raise ValueError("No analysis available")
        return build_context_summary(self.state.analysis)

    def submit_video(self, upload: Any) -> bool:
        """Submit a homework video for review. Requires video mode at Assignment."""
        if not self._can_submit_homework(SubmissionMode.VIDEO):
            return False
        if self._reject_oversized(upload):
            return False

        summary = self.context_summary()
        self.state.error = None
        self.state.busy = True
        try:
            media = encode_upload(upload)
            result = self.coach.review_video(summary, media)
        except (BoundaryCallError, OSError):
            logger.exception("Homework video review failed")
            self.state.error = REVIEW_FAILED_MESSAGE
            return False
        finally:
            self.state.busy = False

        self._store_review(result)
        return True

    def submit_script(self, script_text: str) -> bool:
        """Submit a homework script for review. Requires script mode at Assignment."""
        if not self._can_submit_homework(SubmissionMode.SCRIPT):
            return False
        if not script_text or not script_text.strip():
            self.state.error = EMPTY_SCRIPT_MESSAGE
            return False

        summary = self.context_summary()
        self.state.error = None
        self.state.busy = True
        try:
            result = self.coach.review_script(summary, script_text)
        except BoundaryCallError:
            logger.exception("Homework script review failed")
            self.state.error = REVIEW_FAILED_MESSAGE
            return False
        finally:
            self.state.busy = False

        self._store_review(result)
        return True

    def submit_homework(self, upload: Any = None, script_text: str = "") -> bool:
        """Route a submission to the review call matching the selected mode."""
        if self.state.mode == SubmissionMode.SCRIPT:
            return self.submit_script(script_text)
        if upload is None:
            return False
        return self.submit_video(upload)

    def _store_review(self, result: ReviewContract) -> None:
        self.state.review = result
        stage = stages.unlock_up_to(self.state.stage, Stage.REVIEW)
        self.state.stage = stages.jump_to(stage, Stage.REVIEW)
        logger.info("Review stored with score %s", result.score)

    def resubmit(self) -> bool:
        """Drop the current review and go back to the assignment."""
        if self.state.busy or self.state.current_stage != Stage.REVIEW:
            return False
        self.state.review = None
        self.state.error = None
        self.state.stage = stages.jump_to(self.state.stage, Stage.ASSIGNMENT)
        return True
