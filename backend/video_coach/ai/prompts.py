"""Prompt text for the coaching model."""

from __future__ import annotations

import textwrap

SYSTEM_INSTRUCTION = textwrap.dedent(
    """
    You are the "Video Editing Learning Coach" (视频剪辑学习教练). Your goal is to help
    beginners learn video editing by deconstructing specific video examples.
    You must be strict, structured, and action-oriented.
    Avoid vague advice. Provide specific timestamps, metrics, and actionable steps.
    Your output must be structured JSON.
    IMPORTANT: All textual content within the JSON (descriptions, lists, feedback, plans)
    MUST be in Simplified Chinese (简体中文).
    """
).strip()


def analysis_prompt(context_text: str) -> str:
    context = context_text.strip() or "No extra context provided."
    return textwrap.dedent(
        f"""
        Analyze this video. The user provided this context: "{context}".

        Perform a deep "Learning Coach" analysis.
        1. Create a Case Card.
        2. Determine if it's worth learning (Verdict).
        3. Break down the Structure (Timeline).
        4. Analyze the Editing DNA (Pacing, Sound).
        5. Create a detailed Shot List (first 10-15 key shots or full video if short).
        6. Extract the SOP (Standard Operating Procedure): the rules to replicate this style.
        7. Create a fill-in-the-blank Script Template based on the video's narrative arc.
        8. Define a Homework Brief for the student to replicate this.

        Return ONLY JSON matching the schema. Ensure all values are in Simplified Chinese.
        """
    ).strip()


def video_review_prompt(context_summary: str) -> str:
    return textwrap.dedent(
        f"""
        The student has submitted a homework video based on a case study.
        Here is the context/style they were supposed to copy: {context_summary}

        Review the video in the attachment (the student's work).
        Compare it to the high standards of the original style described.

        Output a review with a score (0-100), general feedback, and a prioritized
        revision plan (max 10 items). Do not include a suggested shot list.
        Ensure all values are in Simplified Chinese.
        """
    ).strip()


def script_review_prompt(context_summary: str, script_text: str) -> str:
    return textwrap.dedent(
        f"""
        The student has submitted a homework script (not a video) based on a case study.
        Here is the context/style they were supposed to copy: {context_summary}

        Student script:
        \"\"\"
        {{script}}
        \"\"\"

        Review the script against the original style described.
        Output a review with a score (0-100), general feedback, a prioritized revision
        plan (max 10 items), and a suggested shot list that maps script segments to
        visuals, shot types and the reasoning behind each choice.
        Ensure all values are in Simplified Chinese.
        """
    ).strip().replace("{script}", script_text.strip())
