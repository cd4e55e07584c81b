import streamlit as st

from src.export import build_docx, build_pdf, export_file_name
from src.outline import outline_to_text
from src.ui.state import current_script, outline_tree, script_ready, workflow

_DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _download_pair(title: str, body: str, key: str) -> None:
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "Word (.docx)",
            data=build_docx(title, body),
            file_name=export_file_name(title, "docx"),
            mime=_DOCX_MIME,
            width="stretch",
            key=f"{key}_docx",
        )
    with col2:
        st.download_button(
            "PDF (.pdf)",
            data=build_pdf(title, body),
            file_name=export_file_name(title, "pdf"),
            mime="application/pdf",
            width="stretch",
            key=f"{key}_pdf",
        )


def tab_export() -> None:
    st.subheader("내보내기")

    st.markdown("#### 완성된 대본")
    if script_ready():
        title = workflow().state.topic.title
        st.write(f"**제목:** {title}")
        _download_pair(title, current_script(), "export_script")
    else:
        st.warning("내보낼 대본이 없습니다.")

    st.markdown("#### 대본 흐름도")
    outline_text = outline_to_text(outline_tree())
    if outline_text:
        _download_pair("대본 흐름도", outline_text, "export_outline")
    else:
        st.warning("흐름도가 비어 있습니다.")

    hollywood = st.session_state.hollywood_script
    if hollywood is not None:
        st.markdown("#### 헐리우드 스토리텔링 대본")
        _download_pair(f"{hollywood.technique} 대본", hollywood.full_script, "export_hollywood")
