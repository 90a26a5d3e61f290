"""Main Streamlit UI for Video Coach AI (视频私教).

The page walks one stage at a time through the coaching workflow. All state
lives in a per-session ``CoachController``; this module only renders it and
forwards user actions.
"""

from __future__ import annotations

import html
import os
import sys
from pathlib import Path
from typing import Any

import streamlit as st
from dotenv import load_dotenv

# Ensure backend package is importable when running `streamlit run streamlit_app.py`.
ROOT = Path(__file__).resolve().parent
BACKEND_ROOT = ROOT / "backend"
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
load_dotenv(ROOT / ".env", override=False)

SECRET_ENV_KEYS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "VIDEO_COACH_MODEL",
    "VIDEO_COACH_MAX_UPLOAD_MB",
    "VIDEO_COACH_TEMPERATURE",
    "VIDEO_COACH_LOG_LEVEL",
)


def _hydrate_env_from_streamlit_secrets() -> None:
    """Load config from Streamlit Secrets into env when not already set."""
    try:
        secrets = st.secrets.to_dict()
    except Exception:
        return

    openai_block = secrets.get("openai")
    if isinstance(openai_block, dict):
        mapping = {
            "api_key": "OPENAI_API_KEY",
            "base_url": "OPENAI_BASE_URL",
            "model": "VIDEO_COACH_MODEL",
        }
        for secret_key, env_key in mapping.items():
            value = openai_block.get(secret_key)
            if isinstance(value, str) and value.strip() and not os.getenv(env_key):
                os.environ[env_key] = value.strip()

    for key in SECRET_ENV_KEYS:
        value = secrets.get(key)
        if isinstance(value, (str, int, float)) and str(value).strip() and not os.getenv(key):
            os.environ[key] = str(value).strip()


_hydrate_env_from_streamlit_secrets()

from video_coach.app import create_app, new_controller  # noqa: E402
from video_coach.contracts import AnalysisContract, ReviewContract  # noqa: E402
from video_coach.exports import playbook_markdown, review_markdown, shot_list_csv  # noqa: E402
from video_coach.logging_config import setup_logging  # noqa: E402
from video_coach.session import CoachController, SubmissionMode  # noqa: E402
from video_coach.stages import WORKFLOW_STAGES, Stage, can_advance, can_retreat, is_locked  # noqa: E402
from video_coach.views import ViewSection, select_view, shows_nav_footer, shows_progress  # noqa: E402

VIDEO_TYPES = ["mp4", "mov", "m4v", "webm", "mkv"]
MODE_LABELS = {
    SubmissionMode.VIDEO: "上传视频 (Video)",
    SubmissionMode.SCRIPT: "提交脚本 (Script)",
}
PRIORITY_BADGES = {"High": "🔴 High", "Medium": "🟡 Medium", "Low": "🟢 Low"}


@st.cache_resource
def _get_app() -> dict[str, Any]:
    app = create_app()
    setup_logging(app["settings"].log_level)
    return app


def _rerun() -> None:
    st.rerun()


def _controller() -> CoachController:
    if "vc_controller" not in st.session_state:
        st.session_state["vc_controller"] = new_controller(_get_app())
    return st.session_state["vc_controller"]


def _init_state() -> None:
    defaults = {
        "vc_context_input": "",
        "vc_script_input": "",
        "vc_upload_nonce": 0,
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)


def _inject_styles() -> None:
    st.markdown(
        """
        <style>
        .stApp { background: #020617; color: #e2e8f0; }
        .vc-header h1 { font-size: 1.4rem; font-weight: 800; margin: 0; color: #fff; }
        .vc-header p { font-size: 0.8rem; color: #94a3b8; margin: 0; }
        .vc-card {
            background: #1e293b; border: 1px solid #334155; border-radius: 12px;
            padding: 1.1rem 1.3rem; margin-bottom: 1rem;
        }
        .vc-card.good { background: rgba(20, 83, 45, 0.25); border-color: #166534; }
        .vc-card.bad { background: rgba(127, 29, 29, 0.25); border-color: #991b1b; }
        .vc-kicker { font-size: 0.72rem; text-transform: uppercase; color: #94a3b8; font-weight: 700; }
        .vc-big { font-size: 2.2rem; font-weight: 900; color: #fff; }
        .vc-chip {
            display: inline-block; padding: 2px 8px; margin: 2px; border-radius: 6px;
            background: rgba(30, 58, 138, 0.5); border: 1px solid #1e40af; color: #93c5fd;
            font-size: 0.75rem;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _header(configured: bool) -> None:
    mode_text = "Live AI Mode" if configured else "未配置 API Key"
    st.markdown(
        f"""
        <div class="vc-header">
          <h1>Video Coach AI (视频私教)</h1>
          <p>拆解 · 模仿 · 精通 (Deconstruct. Imitate. Master.)  {html.escape(mode_text)}</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def _stage_progress(controller: CoachController) -> None:
    state = controller.state.stage
    cols = st.columns(len(WORKFLOW_STAGES))
    for col, stage in zip(cols, WORKFLOW_STAGES):
        locked = is_locked(state, stage)
        if stage < state.current:
            icon = "✅"
        elif stage == state.current:
            icon = "🔵"
        elif locked:
            icon = "🔒"
        else:
            icon = "⚪"
        if col.button(
            f"{icon} {stage.label}",
            key=f"vc_stage_{stage.value}",
            disabled=locked or controller.state.busy,
            use_container_width=True,
        ):
            controller.jump_to(stage)
            _rerun()


def _nav_footer(controller: CoachController) -> None:
    state = controller.state.stage
    st.divider()
    back_col, info_col, next_col = st.columns([1, 2, 1])
    if back_col.button(
        "上一步 (Back)",
        key="vc_back",
        disabled=not can_retreat(state) or controller.state.busy,
        use_container_width=True,
    ):
        controller.retreat()
        _rerun()
    info_col.caption(f"阶段 {int(state.current)} / {int(Stage.LIBRARY)}")
    if next_col.button(
        "下一步 (Next)",
        key="vc_next",
        type="primary",
        disabled=not can_advance(state) or controller.state.busy,
        use_container_width=True,
    ):
        controller.advance()
        _rerun()


def _intake_view(controller: CoachController) -> None:
    limit_mb = controller.max_upload_bytes / (1024 * 1024)
    st.markdown("## 把爆款视频变成你的专属教材")
    st.caption("上传参考视频。AI 将拆解结构、节奏和剪辑秘密，生成一步步的复刻手册。")

    st.text_area(
        "1. 学习背景（可选）",
        key="vc_context_input",
        height=80,
        placeholder="例如：'我想把这个 Alex Hormozi 风格的短片套用到我的烹饪频道'",
        disabled=controller.state.busy,
    )
    uploaded = st.file_uploader(
        f"2. 上传参考视频 (MP4, WebM, 限 {limit_mb:g}MB)",
        type=VIDEO_TYPES,
        key=f"vc_reference_file_{st.session_state['vc_upload_nonce']}",
        disabled=controller.state.busy,
    )

    if st.button(
        "开始拆解 (Analyze)",
        type="primary",
        disabled=uploaded is None or controller.state.busy,
        use_container_width=True,
    ):
        with st.spinner("正在分析视频 DNA... 提取分镜表、计算节奏指标、生成复刻手册"):
            ok = controller.start_analysis(uploaded, st.session_state["vc_context_input"])
        if ok:
            st.session_state["vc_upload_nonce"] += 1
            _rerun()

    if controller.state.error:
        st.error(controller.state.error)


def _case_verdict_view(data: AnalysisContract) -> None:
    card_col, verdict_col = st.columns(2, gap="large")
    with card_col:
        card = data.case_card
        chips = "".join(f"<span class='vc-chip'>{html.escape(pt)}</span>" for pt in card.learning_points)
        st.markdown(
            f"""
            <div class="vc-card">
              <h3>🎬 案例卡片 (Case Card)</h3>
              <p><span class="vc-kicker">名称</span> {html.escape(card.name)}</p>
              <p><span class="vc-kicker">平台</span> {html.escape(card.platform)}</p>
              <p><span class="vc-kicker">时长</span> {html.escape(card.duration)}</p>
              <p><span class="vc-kicker">目标受众</span> {html.escape(card.target_audience)}</p>
              <p class="vc-kicker">学习要点</p>
              <div>{chips}</div>
            </div>
            """,
            unsafe_allow_html=True,
        )
        if card.risks:
            with st.expander("风险提示 (Risks)"):
                for risk in card.risks:
                    st.markdown(f"- {risk}")

    with verdict_col:
        verdict = data.verdict
        tone = "good" if verdict.worth_learning else "bad"
        headline = "值得学习 (WORTH LEARNING)" if verdict.worth_learning else "跳过 (SKIP)"
        reasons = "".join(f"<li>{html.escape(reason)}</li>" for reason in verdict.reasons)
        alternative = (
            f"<p class='vc-kicker'>替代建议</p><p>{html.escape(verdict.alternative)}</p>"
            if verdict.alternative is not None
            else ""
        )
        st.markdown(
            f"""
            <div class="vc-card {tone}">
              <h3>🎯 教练判定</h3>
              <div class="vc-big">{headline}</div>
              <ul>{reasons}</ul>
              {alternative}
            </div>
            """,
            unsafe_allow_html=True,
        )


def _structure_view(data: AnalysisContract) -> None:
    st.subheader("结构时间轴")
    rows = [
        {
            "时间戳": item.timestamp,
            "段落": item.segment,
            "目的": item.purpose,
            "观众心理": item.psychology,
            "画面策略": item.visual_strategy,
        }
        for item in data.structure
    ]
    st.dataframe(rows, use_container_width=True, hide_index=True)


def _dna_view(data: AnalysisContract) -> None:
    dna = data.dna
    cols = st.columns(3)
    cards = [
        ("⏱ 平均镜头时长", dna.avg_shot_length),
        ("✂️ 剪辑密度/节奏", dna.pacing),
        ("🎵 声音策略", dna.sound_strategy),
    ]
    for col, (title, value) in zip(cols, cards):
        col.markdown(
            f"""
            <div class="vc-card">
              <p class="vc-kicker">{title}</p>
              <p>{html.escape(value)}</p>
            </div>
            """,
            unsafe_allow_html=True,
        )


def _shot_list_view(data: AnalysisContract) -> None:
    st.subheader("分镜表 (Shot List)")
    rows = [
        {
            "编号": shot.id,
            "时间": shot.time_range,
            "时长": shot.duration,
            "画面内容": shot.visual,
            "动作": shot.action,
            "音频": shot.audio,
        }
        for shot in data.shot_list
    ]
    st.dataframe(rows, use_container_width=True, hide_index=True)
    csv_text = shot_list_csv(data.shot_list)
    if csv_text:
        st.download_button(
            "下载分镜表 (CSV)",
            data=csv_text,
            file_name="shot_list.csv",
            mime="text/csv",
            use_container_width=True,
            key="dl_shot_list",
        )


def _playbook_view(data: AnalysisContract) -> None:
    st.subheader("填空脚本 (Script Template)")
    for name, value in data.script_template.slots():
        st.markdown(
            f"""
            <div class="vc-card">
              <p class="vc-kicker">{html.escape(name)}</p>
              <p>{html.escape(value)}</p>
            </div>
            """,
            unsafe_allow_html=True,
        )

    st.subheader("剪辑 SOP (操作规范)")
    for index, rule in enumerate(data.sop, start=1):
        st.markdown(f"**{index:02d}. {rule.rule}**")
        st.caption(rule.how_to)
        st.code(f"示例: {rule.example}", language=None)

    st.download_button(
        "下载复刻手册 (Markdown)",
        data=playbook_markdown(data),
        file_name="playbook.md",
        mime="text/markdown",
        use_container_width=True,
        key="dl_playbook",
    )


def _assignment_view(controller: CoachController) -> None:
    data = controller.state.analysis
    if data is None:
        return
    limit_mb = controller.max_upload_bytes / (1024 * 1024)
    busy = controller.state.busy

    brief_col, rubric_col = st.columns(2, gap="large")
    with brief_col:
        st.markdown("## 任务简报 (Mission Brief)")
        st.markdown("**目标 (Goal)**")
        st.write(data.homework.goal)
        st.markdown("**限制条件 (Constraints)**")
        st.write(data.homework.constraints)
    with rubric_col:
        st.markdown("**评分标准 (Grading Rubric)**")
        for item in data.homework.rubric:
            st.markdown(f"- {item.criteria} `{item.max_score:g} 分`")
            st.caption(item.description)

    st.divider()
    modes = list(SubmissionMode)
    selected = st.radio(
        "提交方式",
        modes,
        index=modes.index(controller.state.mode),
        format_func=lambda mode: MODE_LABELS[mode],
        horizontal=True,
        disabled=busy,
        key="vc_mode_radio",
    )
    if selected != controller.state.mode:
        controller.select_mode(selected)

    if controller.state.mode == SubmissionMode.VIDEO:
        homework = st.file_uploader(
            f"上传模仿作品 (限 {limit_mb:g}MB)",
            type=VIDEO_TYPES,
            key=f"vc_homework_file_{st.session_state['vc_upload_nonce']}",
            disabled=busy,
        )
        submit = st.button(
            "提交作业 (Submit)",
            type="primary",
            disabled=homework is None or busy,
            use_container_width=True,
        )
        if submit:
            with st.spinner("正在批改作业... 教练正在将你的剪辑与原片蓝图进行对比。"):
                ok = controller.submit_homework(upload=homework)
            if ok:
                st.session_state["vc_upload_nonce"] += 1
                _rerun()
    else:
        st.text_area(
            "粘贴你的模仿脚本",
            key="vc_script_input",
            height=220,
            disabled=busy,
        )
        if st.button("提交脚本 (Submit)", type="primary", disabled=busy, use_container_width=True):
            with st.spinner("正在批改脚本并生成建议分镜..."):
                ok = controller.submit_homework(script_text=st.session_state["vc_script_input"])
            if ok:
                _rerun()

    if controller.state.error:
        st.error(controller.state.error)


def _review_view(controller: CoachController, review: ReviewContract) -> None:
    st.markdown(
        f"""
        <div class="vc-card" style="text-align:center">
          <p class="vc-kicker">模仿评分 (Score)</p>
          <div class="vc-big">{review.score:g}<span style="font-size:1rem;color:#64748b">/100</span></div>
          <p><em>"{html.escape(review.feedback)}"</em></p>
        </div>
        """,
        unsafe_allow_html=True,
    )

    st.subheader("优先级修改计划 (Revision Plan)")
    for index, item in enumerate(review.revision_plan, start=1):
        with st.container(border=True):
            st.markdown(f"**{index}. {item.problem}**  {PRIORITY_BADGES.get(item.priority, item.priority)}")
            st.markdown(f"**修改建议:** {item.solution}")
            st.code(f"示例: {item.example}", language=None)

    if review.suggested_shot_list is not None:
        st.subheader("建议分镜 (Suggested Shot List)")
        if review.suggested_shot_list:
            rows = [
                {
                    "脚本段落": shot.script_segment,
                    "画面建议": shot.visual_suggestion,
                    "景别": shot.shot_type,
                    "理由": shot.reasoning,
                }
                for shot in review.suggested_shot_list
            ]
            st.dataframe(rows, use_container_width=True, hide_index=True)
        else:
            st.info("本次批改没有给出建议分镜。")

    dl_col, again_col = st.columns(2)
    dl_col.download_button(
        "下载批改报告 (Markdown)",
        data=review_markdown(review),
        file_name="review.md",
        mime="text/markdown",
        use_container_width=True,
        key="dl_review",
    )
    if again_col.button("上传修改版 (Upload Revised Version)", use_container_width=True, key="vc_resubmit"):
        controller.resubmit()
        _rerun()


def _render_stage(controller: CoachController) -> None:
    state = controller.state
    section = select_view(state.current_stage, state.analysis is not None, state.review is not None)

    if section == ViewSection.INTAKE:
        _intake_view(controller)
    elif section == ViewSection.CASE_VERDICT:
        _case_verdict_view(state.analysis)
    elif section == ViewSection.STRUCTURE:
        _structure_view(state.analysis)
    elif section == ViewSection.DNA:
        _dna_view(state.analysis)
    elif section == ViewSection.SHOT_LIST:
        _shot_list_view(state.analysis)
    elif section == ViewSection.PLAYBOOK:
        _playbook_view(state.analysis)
    elif section == ViewSection.ASSIGNMENT:
        _assignment_view(controller)
    elif section == ViewSection.REVIEW:
        _review_view(controller, state.review)


def main() -> None:
    st.set_page_config(
        page_title="Video Coach AI",
        page_icon="🎬",
        layout="wide",
    )

    _init_state()
    _inject_styles()

    app = _get_app()
    controller = _controller()

    _header(app["ai_client"].configured)

    state = controller.state
    if shows_progress(state.current_stage):
        _stage_progress(controller)

    _render_stage(controller)

    if shows_nav_footer(state.current_stage, state.analysis is not None):
        _nav_footer(controller)


if __name__ == "__main__":
    main()
