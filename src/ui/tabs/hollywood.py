import logging
import traceback

import streamlit as st

from src.export import script_to_markdown
from src.generation import GenerationError, describe_generation_error
from src.ui.state import (
    HOLLYWOOD_INPUT,
    HOLLYWOOD_SCRIPT,
    HOLLYWOOD_TOPICS,
    reset_hollywood,
    workflow,
)

_logger = logging.getLogger(__name__)

HOLLYWOOD_DURATIONS = ["3분", "5분", "8분", "10분", "15분"]


def _run(label: str, call):
    """Run one orchestrator call under a spinner; returns None and records a notice on failure."""
    st.session_state.hollywood_error = None
    try:
        with st.spinner(label):
            return call()
    except GenerationError as exc:
        _logger.warning("Hollywood step failed: %s", exc)
        st.session_state.hollywood_error = describe_generation_error(exc)
    except Exception as exc:  # noqa: BLE001 - surface unexpected failures to the user
        tb = traceback.format_exc()
        st.session_state.hollywood_error = f"예기치 못한 오류가 발생했습니다: {exc}\n\nTRACEBACK:\n{tb}"
    return None


def _render_report() -> None:
    report = st.session_state.hollywood_report
    with st.container(border=True):
        st.markdown("#### 원본 대본 분석")
        col1, col2, col3 = st.columns(3)
        col1.metric("감정", report.detected_emotion)
        col2.metric("타겟", report.target_audience)
        col3.metric("완성도", f"{report.strength_score:g}/10", report.strength_label, delta_color="off")
        st.write(f"**의도:** {report.original_intent}")
        technique = report.recommended_technique
        st.write(f"**추천 기법:** {technique.name}")
        if technique.description:
            st.caption(technique.description)
        for example in technique.examples:
            st.markdown(f"- {example}")
        if report.improvement_areas:
            st.markdown("**개선 포인트**")
            for area in report.improvement_areas:
                st.markdown(f"- {area}")


def _render_input() -> None:
    st.text_area(
        "원본 대본",
        key="hollywood_original",
        height=260,
        placeholder="분석할 기존 대본을 붙여넣으세요...",
    )
    original = st.session_state.hollywood_original
    if st.button("🎬 대본 분석", type="primary", width="stretch", disabled=not (original or "").strip()):
        orchestrator = workflow().orchestrator
        report = _run("원본 대본을 분석하는 중...", lambda: orchestrator.analyze_original_script(original))
        if report is not None:
            st.session_state.hollywood_report = report
            topics = _run(
                "헐리우드 기법으로 주제를 설계하는 중...",
                lambda: orchestrator.suggest_hollywood_topics(report, original),
            )
            if topics:
                st.session_state.hollywood_topics = topics
                st.session_state.hollywood_step = HOLLYWOOD_TOPICS
        st.rerun()


def _render_topics() -> None:
    _render_report()
    st.selectbox("영상 길이", HOLLYWOOD_DURATIONS, index=HOLLYWOOD_DURATIONS.index("8분"), key="hollywood_duration")

    st.markdown("#### 추천 주제")
    for index, topic in enumerate(st.session_state.hollywood_topics):
        with st.container(border=True):
            st.markdown(f"**{topic.title}**")
            st.write(f"🪝 {topic.hook}")
            st.caption(f"기법: {topic.applied_technique} · 바이럴 가능성 {topic.viral_potential:g}/10")
            if topic.reasoning:
                st.caption(topic.reasoning)
            if st.button("이 주제로 대본 작성", key=f"hollywood_topic_{index}", width="stretch"):
                orchestrator = workflow().orchestrator
                script = _run(
                    "삼막 구조 대본을 작성하는 중...",
                    lambda: orchestrator.generate_hollywood_script(
                        topic,
                        st.session_state.hollywood_report,
                        duration=st.session_state.hollywood_duration,
                    ),
                )
                if script is not None:
                    st.session_state.hollywood_script = script
                    st.session_state.hollywood_step = HOLLYWOOD_SCRIPT
                st.rerun()

    if st.button("← 원본 대본 다시 입력", key="hollywood_back_to_input"):
        st.session_state.hollywood_step = HOLLYWOOD_INPUT
        st.rerun()


def _render_script() -> None:
    script = st.session_state.hollywood_script
    st.markdown(f"#### 🎬 {script.technique}")
    st.write(" · ".join(script.key_elements))

    acts = [("1막", script.structure.act1), ("2막", script.structure.act2), ("3막", script.structure.act3)]
    if any(body for _, body in acts):
        for column, (label, body) in zip(st.columns(3), acts):
            with column:
                with st.container(border=True):
                    st.markdown(f"**{label}**")
                    st.write(body or "-")

    with st.container(border=True):
        st.markdown(script_to_markdown(script.full_script))
    with st.expander("복사용 원문"):
        st.code(script.full_script, language=None)

    col1, col2 = st.columns(2)
    if col1.button("← 다른 주제 선택", width="stretch", key="hollywood_back_to_topics"):
        st.session_state.hollywood_step = HOLLYWOOD_TOPICS
        st.rerun()
    if col2.button("🔄 새 대본 분석", width="stretch", key="hollywood_reset"):
        reset_hollywood()
        st.rerun()


def tab_hollywood() -> None:
    st.subheader("헐리우드 스토리텔링")
    st.caption("기존 대본을 분석해 헐리우드식 삼막 구조 대본으로 다시 설계합니다.")

    if st.session_state.hollywood_error:
        st.error(st.session_state.hollywood_error)

    step = st.session_state.hollywood_step
    if step == HOLLYWOOD_TOPICS and st.session_state.hollywood_topics:
        _render_topics()
    elif step == HOLLYWOOD_SCRIPT and st.session_state.hollywood_script is not None:
        _render_script()
    else:
        _render_input()
