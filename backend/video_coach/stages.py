"""Workflow stages and the navigation state machine.

Every transition is a pure function of ``StageState`` that returns a new
value. Transitions clamp instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum


class Stage(IntEnum):
    INTAKE = 0
    VERDICT = 1
    STRUCTURE = 2
    DNA = 3
    EXTRACTABLES = 4
    PLAYBOOK = 5
    ASSIGNMENT = 6
    REVIEW = 7
    LIBRARY = 8

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]


STAGE_LABELS = {
    Stage.INTAKE: "案例建档",
    Stage.VERDICT: "价值判断",
    Stage.STRUCTURE: "结构拆解",
    Stage.DNA: "剪辑DNA",
    Stage.EXTRACTABLES: "素材提取",
    Stage.PLAYBOOK: "流程复制",
    Stage.ASSIGNMENT: "模仿作业",
    Stage.REVIEW: "对比复盘",
    Stage.LIBRARY: "案例库",
}

# Stages shown in the progress bar. Library is reserved and never displayed.
WORKFLOW_STAGES = tuple(stage for stage in Stage if stage != Stage.LIBRARY)

TERMINAL_STAGE = Stage.LIBRARY


@dataclass(frozen=True)
class StageState:
    current: Stage = Stage.INTAKE
    max_reached: Stage = Stage.INTAKE


def advance(state: StageState) -> StageState:
    target = min(state.current + 1, state.max_reached, TERMINAL_STAGE)
    if target <= state.current:
        return state
    return replace(state, current=Stage(target))


def retreat(state: StageState) -> StageState:
    # Intake cannot be re-entered by stepping back.
    if state.current <= Stage.VERDICT:
        return state
    return replace(state, current=Stage(state.current - 1))


def jump_to(state: StageState, stage: Stage) -> StageState:
    if is_locked(state, stage):
        return state
    return replace(state, current=Stage(stage))


def unlock_up_to(state: StageState, stage: Stage) -> StageState:
    if stage <= state.max_reached:
        return state
    return replace(state, max_reached=Stage(stage))


def is_locked(state: StageState, stage: Stage) -> bool:
    return stage > state.max_reached


def can_advance(state: StageState) -> bool:
    return advance(state) != state


def can_retreat(state: StageState) -> bool:
    return retreat(state) != state
