"""Shared sample payloads shaped like real model responses."""

import copy

import pytest

ANALYSIS_PAYLOAD = {
    "caseCard": {
        "name": "三秒钩子美食短片",
        "platform": "抖音",
        "duration": "00:32",
        "targetAudience": "下班后想快速做饭的上班族",
        "learningPoints": ["开场三秒给结果", "卡点切换"],
        "risks": ["音乐版权"],
    },
    "verdict": {
        "worthLearning": True,
        "reasons": ["结构清晰", "节奏可复制"],
    },
    "structure": [
        {
            "segment": "Hook",
            "timestamp": "00:00-00:03",
            "purpose": "引入",
            "psychology": "好奇",
            "visualStrategy": "成品特写",
        },
        {
            "segment": "Body",
            "timestamp": "00:03-00:25",
            "purpose": "展开",
            "psychology": "期待",
            "visualStrategy": "俯拍步骤",
        },
    ],
    "dna": {"avgShotLength": "1.2s", "pacing": "快速", "soundStrategy": "鼓点卡切"},
    "shotList": [
        {
            "id": 1,
            "timeRange": "00:00-00:01",
            "duration": "1s",
            "visual": "成品特写",
            "audio": "鼓点",
            "action": "推近",
        },
        {
            "id": 2,
            "timeRange": "00:01-00:02",
            "duration": "1s",
            "visual": "切菜",
            "audio": "环境声",
            "action": "硬切",
        },
    ],
    "sop": [
        {"rule": "快切", "howTo": "每个镜头不超过1.5秒", "example": "切菜三连"},
        {"rule": "特写转场", "howTo": "用食材特写衔接步骤", "example": "油花特写"},
    ],
    "scriptTemplate": {
        "hook": "先给成品",
        "setup": "说明难度",
        "core1": "步骤一",
        "core2": "步骤二",
        "twist": "意外技巧",
        "cta": "关注获取菜谱",
    },
    "homework": {
        "goal": "用同样结构拍一道家常菜",
        "constraints": "时长不超过30秒",
        "rubric": [
            {"criteria": "钩子", "description": "前三秒展示成品", "maxScore": 40},
            {"criteria": "节奏", "description": "平均镜头低于1.5秒", "maxScore": 60},
        ],
    },
}

REVIEW_PAYLOAD = {
    "score": 72,
    "feedback": "节奏接近原片，但钩子不够强。",
    "revisionPlan": [
        {
            "problem": "开场拖沓",
            "solution": "把成品镜头提前",
            "example": "00:00 直接切入成品特写",
            "priority": "High",
        },
        {
            "problem": "音乐不卡点",
            "solution": "对齐鼓点剪切",
            "example": "00:05 处对齐重拍",
            "priority": "Low",
        },
    ],
}


@pytest.fixture
def analysis_payload():
    return copy.deepcopy(ANALYSIS_PAYLOAD)


@pytest.fixture
def review_payload():
    return copy.deepcopy(REVIEW_PAYLOAD)
