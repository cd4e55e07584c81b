import traceback

import streamlit as st

from src.export import export_file_name
from src.generation import GenerationError, describe_generation_error
from src.ui.state import clear_thumbnail, script_ready, workflow
from utils import fetch_thumbnail_image, thumbnail_image_url


def tab_thumbnail() -> None:
    st.subheader("썸네일 기획")
    st.caption("완성된 대본의 주제와 톤으로 썸네일 문구와 이미지를 만들어 보세요.")

    if not script_ready():
        st.warning("먼저 '대본 스튜디오'에서 대본을 완성해주세요.")
        return

    state = workflow().state
    st.write(f"**주제:** {state.topic.title}")
    st.write(f"**톤:** {state.analysis.tone}")

    if st.button("🎨 썸네일 기획하기", type="primary", width="stretch", key="thumbnail_generate_concept"):
        clear_thumbnail()
        try:
            with st.spinner("썸네일 아이디어를 만드는 중..."):
                st.session_state.thumbnail_concept = workflow().orchestrator.generate_thumbnail(
                    state.topic.title,
                    state.analysis.tone,
                )
        except GenerationError as exc:
            st.session_state.thumbnail_error = describe_generation_error(exc)
        except Exception as exc:  # noqa: BLE001 - surface unexpected failures to the user
            tb = traceback.format_exc()
            st.error(f"썸네일 생성 중 오류가 발생했습니다: {exc}\n\nTRACEBACK:\n{tb}")
            return
        st.rerun()

    if st.session_state.thumbnail_error:
        st.error(st.session_state.thumbnail_error)

    concept = st.session_state.thumbnail_concept
    if concept is None:
        return

    with st.container(border=True):
        st.markdown(f"### {concept.title}")
        if concept.subtitle:
            st.markdown(f"*{concept.subtitle}*")
        st.caption("이미지 프롬프트")
        st.code(concept.image_prompt, language=None)

    url = thumbnail_image_url(concept.image_prompt)
    st.image(url, caption="AI 렌더링 미리보기", width="stretch")

    if st.button("PNG로 가져오기", width="stretch", key="thumbnail_fetch_image"):
        with st.spinner("이미지를 내려받는 중..."):
            image_bytes, err = fetch_thumbnail_image(url)
        st.session_state.thumbnail_bytes = image_bytes
        if err:
            st.session_state.thumbnail_error = err
        else:
            st.toast("썸네일 이미지를 가져왔습니다.")
        st.rerun()

    if st.session_state.thumbnail_bytes:
        st.download_button(
            "썸네일 다운로드",
            data=st.session_state.thumbnail_bytes,
            file_name=export_file_name(concept.title, "png"),
            mime="image/png",
            width="stretch",
        )
