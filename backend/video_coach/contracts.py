"""Data contracts returned by the coaching model.

Both contracts mirror the JSON the model is asked to produce (camelCase keys)
and are validated with pydantic before they are admitted into session state.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Contract(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CaseCard(_Contract):
    name: str
    platform: str
    duration: str
    target_audience: str
    learning_points: List[str]
    risks: List[str]


class Verdict(_Contract):
    worth_learning: bool
    reasons: List[str]
    alternative: Optional[str] = None


class StructureItem(_Contract):
    segment: str
    timestamp: str
    purpose: str
    psychology: str
    visual_strategy: str


class EditingDNA(_Contract):
    avg_shot_length: str
    pacing: str
    sound_strategy: str


class ShotItem(_Contract):
    id: int
    time_range: str
    duration: str
    visual: str
    audio: str
    action: str


class EditingRule(_Contract):
    rule: str
    how_to: str
    example: str


class ScriptTemplate(_Contract):
    hook: str
    setup: str
    core1: str
    core2: str
    twist: str
    cta: str

    def slots(self) -> list[tuple[str, str]]:
        """Template slots in narrative order."""
        return [(name, getattr(self, name)) for name in SCRIPT_SLOTS]


SCRIPT_SLOTS = ("hook", "setup", "core1", "core2", "twist", "cta")


class RubricItem(_Contract):
    criteria: str
    description: str
    max_score: float


class HomeworkBrief(_Contract):
    goal: str
    constraints: str
    rubric: List[RubricItem]


class AnalysisContract(_Contract):
    """Deconstruction of a reference video."""

    case_card: CaseCard
    verdict: Verdict
    structure: List[StructureItem]
    dna: EditingDNA
    shot_list: List[ShotItem]
    sop: List[EditingRule]
    script_template: ScriptTemplate
    homework: HomeworkBrief


Priority = Literal["High", "Medium", "Low"]


class RevisionItem(_Contract):
    problem: str
    solution: str
    example: str
    priority: Priority


class SuggestedShot(_Contract):
    script_segment: str
    visual_suggestion: str
    shot_type: str
    reasoning: str


class ReviewContract(_Contract):
    """Graded review of a homework submission.

    ``score`` is meant to fall in 0-100 but the range is not enforced here.
    ``suggested_shot_list`` is ``None`` when the model did not provide one,
    which is distinct from an empty list.
    """

    score: float
    feedback: str
    revision_plan: List[RevisionItem]
    suggested_shot_list: Optional[List[SuggestedShot]] = None

    @property
    def has_suggested_shots(self) -> bool:
        return self.suggested_shot_list is not None


def contract_schema(model: type[BaseModel]) -> Dict[str, Any]:
    """JSON schema (camelCase keys) used as the model's response format."""
    return model.model_json_schema(by_alias=True)
