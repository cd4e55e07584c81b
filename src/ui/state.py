import streamlit as st

from src.credentials import CredentialStore
from src.generation import GenerationOrchestrator
from src.generation import prompts
from src.outline import OutlineTree, outline_to_prompt_text, starter_outline
from src.workflow import ResultState, ScriptWorkflow, Step

HOLLYWOOD_INPUT = "input"
HOLLYWOOD_TOPICS = "topics"
HOLLYWOOD_SCRIPT = "script"


def _expected_passcode() -> str:
    secret_key = "APP_PASSCODE" if "APP_PASSCODE" in st.secrets else "password"
    return st.secrets.get(secret_key, "")


def passcode_configured() -> bool:
    """The stored API key is only written to disk behind the passcode gate."""
    return bool(_expected_passcode())


def require_passcode() -> None:
    expected = _expected_passcode()
    if not expected:
        return

    st.session_state.setdefault("auth_ok", False)
    if st.session_state.auth_ok:
        return

    st.title("🔒 TubeScript Forge")
    code = st.text_input("비밀번호", type="password")
    if st.button("로그인", type="primary"):
        st.session_state.auth_ok = code == expected
        if not st.session_state.auth_ok:
            st.error("비밀번호가 올바르지 않습니다.")
        st.rerun()
    st.stop()


def init_state() -> None:
    if "credentials" not in st.session_state:
        st.session_state.credentials = CredentialStore(persist=passcode_configured())
    if "orchestrator" not in st.session_state:
        st.session_state.orchestrator = GenerationOrchestrator(st.session_state.credentials)
    if "workflow" not in st.session_state:
        st.session_state.workflow = ScriptWorkflow(st.session_state.orchestrator)
    if "outline_tree" not in st.session_state:
        st.session_state.outline_tree = starter_outline()

    st.session_state.setdefault("script_input_text", "")
    st.session_state.setdefault("pending_script_input_text", None)
    st.session_state.setdefault("script_duration", prompts.DEFAULT_DURATION)
    st.session_state.setdefault("script_style", prompts.DEFAULT_STYLE)
    st.session_state.setdefault("active_view_notice", "")

    st.session_state.setdefault("editing_node_id", None)

    st.session_state.setdefault("thumbnail_concept", None)
    st.session_state.setdefault("thumbnail_bytes", None)
    st.session_state.setdefault("thumbnail_error", None)

    st.session_state.setdefault("hollywood_step", HOLLYWOOD_INPUT)
    st.session_state.setdefault("hollywood_original", "")
    st.session_state.setdefault("hollywood_report", None)
    st.session_state.setdefault("hollywood_topics", ())
    st.session_state.setdefault("hollywood_script", None)
    st.session_state.setdefault("hollywood_error", None)


def workflow() -> ScriptWorkflow:
    return st.session_state.workflow


def outline_tree() -> OutlineTree:
    return st.session_state.outline_tree


def set_outline_tree(tree: OutlineTree) -> None:
    st.session_state.outline_tree = tree


def script_ready() -> bool:
    return isinstance(workflow().state, ResultState)


def current_script() -> str:
    state = workflow().state
    return state.script if isinstance(state, ResultState) else ""


def clear_thumbnail() -> None:
    st.session_state.thumbnail_concept = None
    st.session_state.thumbnail_bytes = None
    st.session_state.thumbnail_error = None


def reset_workflow() -> None:
    workflow().reset()
    st.session_state.pending_script_input_text = ""
    clear_thumbnail()


def use_outline_as_input() -> None:
    """Queue the flattened flow map for the script studio input box."""
    if workflow().state.step is not Step.INPUT:
        workflow().reset()
        clear_thumbnail()
    st.session_state.pending_script_input_text = outline_to_prompt_text(outline_tree())
    st.session_state.active_view_notice = "흐름도 구조를 입력 창으로 보냈습니다. '대본 스튜디오' 탭에서 분석을 시작하세요."


def reset_hollywood() -> None:
    st.session_state.hollywood_step = HOLLYWOOD_INPUT
    st.session_state.hollywood_report = None
    st.session_state.hollywood_topics = ()
    st.session_state.hollywood_script = None
    st.session_state.hollywood_error = None
