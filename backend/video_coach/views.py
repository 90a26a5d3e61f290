"""Mapping from session stage to the section of a contract to display."""

from __future__ import annotations

from enum import Enum

from .stages import Stage


class ViewSection(str, Enum):
    INTAKE = "intake"
    CASE_VERDICT = "case_verdict"
    STRUCTURE = "structure"
    DNA = "dna"
    SHOT_LIST = "shot_list"
    PLAYBOOK = "playbook"
    ASSIGNMENT = "assignment"
    REVIEW = "review"
    EMPTY = "empty"


_ANALYSIS_SECTIONS = {
    Stage.VERDICT: ViewSection.CASE_VERDICT,
    Stage.STRUCTURE: ViewSection.STRUCTURE,
    Stage.DNA: ViewSection.DNA,
    Stage.EXTRACTABLES: ViewSection.SHOT_LIST,
    Stage.PLAYBOOK: ViewSection.PLAYBOOK,
    Stage.ASSIGNMENT: ViewSection.ASSIGNMENT,
}


def select_view(stage: Stage, has_analysis: bool, has_review: bool) -> ViewSection:
    if stage == Stage.INTAKE:
        return ViewSection.INTAKE
    if stage == Stage.REVIEW:
        return ViewSection.REVIEW if has_review else ViewSection.EMPTY
    section = _ANALYSIS_SECTIONS.get(stage)
    if section is None or not has_analysis:
        return ViewSection.EMPTY
    return section


def shows_progress(stage: Stage) -> bool:
    """The progress bar is hidden on the intake screen."""
    return stage > Stage.INTAKE


def shows_nav_footer(stage: Stage, has_analysis: bool) -> bool:
    return has_analysis and stage > Stage.INTAKE
