import traceback

import streamlit as st

from src.export import build_docx, build_pdf, export_file_name, script_to_markdown
from src.generation import prompts
from src.ui.state import reset_workflow, workflow
from src.workflow import (
    AnalyzingState,
    GeneratingState,
    InputState,
    ResultState,
    SelectingState,
    progress_steps,
)

_STATUS_ICONS = {"completed": "✅", "current": "🔵", "pending": "⚪"}


def _show_unexpected_error(exc: Exception) -> None:
    """Known failures are already turned into notices by the workflow; anything else shows the traceback."""
    if workflow().machine.busy:
        workflow().machine.cancel()
    tb = traceback.format_exc()
    st.error(f"예기치 못한 오류가 발생했습니다: {exc}\n\nTRACEBACK:\n{tb}")


def _render_progress() -> None:
    markers = progress_steps(workflow().state.step)
    for column, (label, status) in zip(st.columns(len(markers)), markers):
        with column:
            text = f"{_STATUS_ICONS[status]} {label}"
            st.markdown(f"**{text}**" if status == "current" else text)


def _render_input(state: InputState) -> None:
    if st.session_state.pending_script_input_text is not None:
        st.session_state.script_input_text = st.session_state.pending_script_input_text
        st.session_state.pending_script_input_text = None
    elif not st.session_state.script_input_text and state.draft:
        # Widget state is dropped while other steps are on screen.
        st.session_state.script_input_text = state.draft

    if st.session_state.active_view_notice:
        st.info(st.session_state.active_view_notice)
        st.session_state.active_view_notice = ""

    st.markdown("#### 아이디어 또는 초안 입력")
    st.text_area(
        "영상 아이디어, 초안, 메모",
        key="script_input_text",
        height=260,
        placeholder="예: 직장인을 위한 10분 아침 루틴, 실제로 해보고 달라진 점...",
    )
    if state.error:
        st.error(state.error)

    text = st.session_state.script_input_text
    if st.button("✨ 분석 시작", type="primary", width="stretch", disabled=not (text or "").strip()):
        try:
            with st.spinner("콘텐츠를 분석하는 중..."):
                workflow().analyze(text)
        except Exception as exc:  # noqa: BLE001 - surface unexpected failures to the user
            _show_unexpected_error(exc)
        else:
            st.rerun()


def _render_selecting(state: SelectingState) -> None:
    analysis = state.analysis
    st.markdown("#### 분석 결과")
    col1, col2 = st.columns(2)
    col1.metric("톤앤매너", analysis.tone)
    col2.metric("타겟 시청자", analysis.target_audience)
    st.write("**핵심 테마:** " + " · ".join(analysis.key_themes))

    st.markdown("#### 영상 설정")
    col1, col2 = st.columns(2)
    with col1:
        st.selectbox("영상 길이", prompts.DURATION_OPTIONS, key="script_duration")
    with col2:
        st.selectbox("영상 스타일", prompts.STYLE_OPTIONS, key="script_style")

    if state.error:
        st.error(state.error)

    st.markdown("#### 추천 주제를 선택하세요")
    for index, topic in enumerate(analysis.suggested_topics):
        with st.container(border=True):
            st.markdown(f"**{index + 1}. {topic.title}**")
            st.caption(topic.reasoning)
            if st.button("이 주제로 대본 작성", key=f"choose_topic_{index}", width="stretch"):
                try:
                    with st.spinner("대본을 작성하는 중..."):
                        workflow().choose_topic(
                            topic,
                            duration=st.session_state.script_duration,
                            style=st.session_state.script_style,
                        )
                except Exception as exc:  # noqa: BLE001 - surface unexpected failures to the user
                    _show_unexpected_error(exc)
                else:
                    st.rerun()

    if st.button("← 입력으로 돌아가기", key="selecting_back"):
        workflow().back()
        st.rerun()


def _render_busy(state) -> None:
    message = "콘텐츠를 분석하는 중..." if isinstance(state, AnalyzingState) else "대본을 작성하는 중..."
    st.info(message)
    if st.button("취소", key="cancel_request"):
        workflow().machine.cancel()
        st.rerun()


def _render_result(state: ResultState) -> None:
    st.markdown(f"#### 📜 {state.topic.title}")
    st.caption(f"톤: {state.analysis.tone} · 타겟: {state.analysis.target_audience}")

    with st.container(border=True):
        st.markdown(script_to_markdown(state.script))

    with st.expander("복사용 원문"):
        st.code(state.script, language=None)

    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "Word 문서 다운로드",
            data=build_docx(state.topic.title, state.script),
            file_name=export_file_name(state.topic.title, "docx"),
            mime="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            width="stretch",
            key="result_docx",
        )
    with col2:
        st.download_button(
            "PDF 다운로드",
            data=build_pdf(state.topic.title, state.script),
            file_name=export_file_name(state.topic.title, "pdf"),
            mime="application/pdf",
            width="stretch",
            key="result_pdf",
        )

    col1, col2 = st.columns(2)
    if col1.button("← 다른 주제 선택", width="stretch", key="result_back"):
        workflow().back()
        st.rerun()
    if col2.button("🔄 처음부터 다시", width="stretch", key="result_reset"):
        reset_workflow()
        st.rerun()


def tab_script_studio() -> None:
    st.subheader("대본 스튜디오")
    st.caption("아이디어를 분석하고, 추천 주제를 고른 뒤, 완성된 유튜브 대본을 받아보세요.")
    _render_progress()
    st.divider()

    state = workflow().state
    if isinstance(state, InputState):
        _render_input(state)
    elif isinstance(state, SelectingState):
        _render_selecting(state)
    elif isinstance(state, (AnalyzingState, GeneratingState)):
        _render_busy(state)
    elif isinstance(state, ResultState):
        _render_result(state)
