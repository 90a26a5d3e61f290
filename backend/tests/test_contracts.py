"""Shape validation of model responses."""

import pytest
from pydantic import ValidationError

from video_coach.contracts import AnalysisContract, ReviewContract, contract_schema


def test_analysis_parses_camel_case_payload(analysis_payload):
    analysis = AnalysisContract.model_validate(analysis_payload)

    assert analysis.case_card.target_audience == "下班后想快速做饭的上班族"
    assert analysis.dna.avg_shot_length == "1.2s"
    assert [shot.id for shot in analysis.shot_list] == [1, 2]
    assert analysis.homework.rubric[1].max_score == 60
    assert [name for name, _ in analysis.script_template.slots()] == [
        "hook",
        "setup",
        "core1",
        "core2",
        "twist",
        "cta",
    ]


def test_missing_alternative_is_none(analysis_payload):
    analysis = AnalysisContract.model_validate(analysis_payload)
    assert analysis.verdict.alternative is None

    analysis_payload["verdict"]["alternative"] = "换一个教程类视频"
    assert AnalysisContract.model_validate(analysis_payload).verdict.alternative == "换一个教程类视频"


def test_missing_section_fails_validation(analysis_payload):
    del analysis_payload["dna"]
    with pytest.raises(ValidationError):
        AnalysisContract.model_validate(analysis_payload)


def test_suggested_shots_absent_versus_empty(review_payload):
    absent = ReviewContract.model_validate(review_payload)
    assert absent.suggested_shot_list is None
    assert not absent.has_suggested_shots

    review_payload["suggestedShotList"] = []
    empty = ReviewContract.model_validate(review_payload)
    assert empty.suggested_shot_list == []
    assert empty.has_suggested_shots


def test_unknown_priority_is_rejected(review_payload):
    review_payload["revisionPlan"][0]["priority"] = "Urgent"
    with pytest.raises(ValidationError):
        ReviewContract.model_validate(review_payload)


def test_score_range_is_not_enforced(review_payload):
    review_payload["score"] = 140
    assert ReviewContract.model_validate(review_payload).score == 140


def test_schema_uses_wire_names():
    schema = contract_schema(AnalysisContract)
    assert {"caseCard", "shotList", "scriptTemplate"}.issubset(schema["properties"])
    review_schema = contract_schema(ReviewContract)
    assert "suggestedShotList" in review_schema["properties"]
    assert "suggestedShotList" not in review_schema["required"]
