import streamlit as st

from src.credentials import CredentialStore


def _store() -> CredentialStore:
    return st.session_state.credentials


def render_api_key_manager() -> None:
    """Sidebar panel for setting, viewing (masked) and removing the Gemini API key."""
    st.markdown("### 🔑 Gemini API 키")
    store = _store()

    if store:
        st.success(f"설정됨: `{store.masked()}`")
        if st.button("키 삭제", width="stretch", key="api_key_clear"):
            store.clear()
            st.toast("API 키를 삭제했습니다.")
            st.rerun()
    else:
        st.warning("API 키가 설정되지 않았습니다.")

    with st.form("api_key_form", clear_on_submit=True):
        new_key = st.text_input(
            "새 API 키",
            type="password",
            placeholder="AIza...",
            help=(
                "Google AI Studio에서 발급한 키를 입력하세요. "
                + ("서버에 저장되어 새로고침 후에도 유지됩니다." if store.persist else "현재 세션에만 보관됩니다.")
            ),
        )
        submitted = st.form_submit_button("저장", width="stretch")
    if submitted:
        try:
            store.set(new_key)
        except ValueError:
            st.error("API 키를 입력해주세요.")
        else:
            st.toast("API 키를 저장했습니다.")
            st.rerun()

    st.caption("[Google AI Studio에서 키 발급받기](https://aistudio.google.com/app/apikey)")
