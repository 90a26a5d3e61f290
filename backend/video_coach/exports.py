"""CSV and markdown exports of analysis and review results."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from .contracts import AnalysisContract, ReviewContract, ShotItem

SHOT_LIST_FIELDS = ["id", "time_range", "duration", "visual", "audio", "action"]


def _cell(value: object) -> str:
    return str(value).replace("|", "/").replace("\n", " ")


def shot_list_csv(shots: Sequence[ShotItem]) -> str:
    if not shots:
        return ""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=SHOT_LIST_FIELDS)
    writer.writeheader()
    for shot in shots:
        writer.writerow(
            {
                "id": shot.id,
                "time_range": shot.time_range,
                "duration": shot.duration,
                "visual": shot.visual,
                "audio": shot.audio,
                "action": shot.action,
            }
        )
    return out.getvalue()


def playbook_markdown(analysis: AnalysisContract) -> str:
    lines = [f"# {analysis.case_card.name} 复刻手册", "", "## 填空脚本 (Script Template)", ""]
    for name, value in analysis.script_template.slots():
        lines.append(f"- **{name}**: {value}")
    lines += ["", "## 剪辑 SOP", ""]
    for index, rule in enumerate(analysis.sop, start=1):
        lines.append(f"{index:02d}. **{rule.rule}**: {rule.how_to}")
        lines.append(f"    - 示例: {rule.example}")
    lines += [
        "",
        "## 模仿作业 (Homework)",
        "",
        f"- 目标: {analysis.homework.goal}",
        f"- 限制条件: {analysis.homework.constraints}",
    ]
    for item in analysis.homework.rubric:
        lines.append(f"- {item.criteria} ({item.max_score:g} 分): {item.description}")
    return "\n".join(lines).strip() + "\n"


def review_markdown(review: ReviewContract) -> str:
    lines = [
        f"# 模仿评分: {review.score:g}/100",
        "",
        review.feedback.strip(),
        "",
        "## 优先级修改计划 (Revision Plan)",
        "",
        "| # | Priority | Problem | Solution | Example |",
        "|---|---|---|---|---|",
    ]
    for index, item in enumerate(review.revision_plan, start=1):
        lines.append(
            f"| {index} | {item.priority} | {_cell(item.problem)} | "
            f"{_cell(item.solution)} | {_cell(item.example)} |"
        )
    if review.suggested_shot_list is not None:
        lines += [
            "",
            "## 建议分镜 (Suggested Shot List)",
            "",
            "| Script Segment | Visual | Shot Type | Reasoning |",
            "|---|---|---|---|",
        ]
        for shot in review.suggested_shot_list:
            lines.append(
                f"| {_cell(shot.script_segment)} | {_cell(shot.visual_suggestion)} | "
                f"{_cell(shot.shot_type)} | {_cell(shot.reasoning)} |"
            )
    return "\n".join(lines).strip() + "\n"
