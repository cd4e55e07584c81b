import logging

import streamlit as st

from src.ui.state import init_state, require_passcode, reset_hollywood, reset_workflow
from src.ui.tabs.credentials import render_api_key_manager
from src.ui.tabs.export import tab_export
from src.ui.tabs.flow_map import tab_flow_map
from src.ui.tabs.hollywood import tab_hollywood
from src.ui.tabs.script_studio import tab_script_studio
from src.ui.tabs.thumbnail import tab_thumbnail
from utils import get_gemini_text_model


def _sidebar() -> None:
    with st.sidebar:
        render_api_key_manager()
        st.divider()
        st.caption(f"모델: `{get_gemini_text_model()}`")
        if st.button("🏠 처음으로", width="stretch", key="sidebar_reset"):
            reset_workflow()
            reset_hollywood()
            st.rerun()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title="TubeScript Forge", page_icon="🎬", layout="wide")
    require_passcode()
    init_state()

    st.title("🎬 TubeScript Forge")
    st.caption("아이디어 하나로 유튜브 대본 구조, 완성 대본, 썸네일까지 한 번에 만듭니다.")

    _sidebar()

    tabs = st.tabs(
        [
            "✍️ 대본 스튜디오",
            "🗺️ 대본 흐름도",
            "🖼️ 썸네일",
            "🎬 헐리우드 스토리텔링",
            "📦 내보내기",
        ]
    )

    with tabs[0]:
        tab_script_studio()
    with tabs[1]:
        tab_flow_map()
    with tabs[2]:
        tab_thumbnail()
    with tabs[3]:
        tab_hollywood()
    with tabs[4]:
        tab_export()


if __name__ == "__main__":
    main()
