import json
import logging

import streamlit as st

from src.outline import OutlineNode, OutlineTree, outline_to_text, starter_outline
from src.ui.state import outline_tree, set_outline_tree, use_outline_as_input

_logger = logging.getLogger(__name__)

_KIND_ICONS = {"point": "🔹", "detail": "▫️"}


# ----------------------------
# Button callbacks (run before the rerun renders)
# ----------------------------
def _toggle(node_id: str) -> None:
    set_outline_tree(outline_tree().toggle_expanded(node_id))


def _add_child(node_id: str) -> None:
    set_outline_tree(outline_tree().add_child(node_id))


def _delete(node_id: str) -> None:
    set_outline_tree(outline_tree().delete_node(node_id))
    if st.session_state.editing_node_id == node_id:
        st.session_state.editing_node_id = None


def _start_editing(node: OutlineNode) -> None:
    st.session_state.editing_node_id = node.id
    st.session_state[f"rename_{node.id}"] = node.title


def _save_title(node_id: str) -> None:
    new_title = st.session_state.get(f"rename_{node_id}", "")
    set_outline_tree(outline_tree().rename_node(node_id, new_title))
    st.session_state.editing_node_id = None


def _cancel_editing() -> None:
    st.session_state.editing_node_id = None


def _restore_template() -> None:
    set_outline_tree(starter_outline())
    st.session_state.editing_node_id = None


# ----------------------------
# Rendering
# ----------------------------
def _render_node(tree: OutlineTree, node: OutlineNode, depth: int) -> None:
    _, toggle_col, title_col, actions_col = st.columns([0.2 * depth + 0.01, 0.4, 6, 1.6])
    with toggle_col:
        if node.children:
            st.button(
                "▼" if node.expanded else "▶",
                key=f"toggle_{node.id}",
                on_click=_toggle,
                args=(node.id,),
            )
    with title_col:
        if st.session_state.editing_node_id == node.id:
            st.text_input("항목 이름", key=f"rename_{node.id}", label_visibility="collapsed")
            save_col, cancel_col = st.columns(2)
            save_col.button("저장", key=f"save_{node.id}", on_click=_save_title, args=(node.id,))
            cancel_col.button("취소", key=f"cancel_{node.id}", on_click=_cancel_editing)
        else:
            icon = "🔒 " if node.locked else _KIND_ICONS.get(node.kind, "")
            label = node.display_title
            st.markdown(f"{icon}**{label}**" if depth == 1 else f"{icon}{label}")
    with actions_col:
        add_col, edit_col, delete_col = st.columns(3)
        add_col.button("➕", key=f"add_{node.id}", on_click=_add_child, args=(node.id,), help="하위 항목 추가")
        editable = not (node.locked or node.is_root)
        edit_col.button(
            "✏️",
            key=f"edit_{node.id}",
            on_click=_start_editing,
            args=(node,),
            disabled=not editable,
            help="이름 수정",
        )
        delete_col.button(
            "🗑️",
            key=f"delete_{node.id}",
            on_click=_delete,
            args=(node.id,),
            disabled=not editable,
            help="삭제",
        )

    if node.expanded:
        for child in tree.children(node.id):
            _render_node(tree, child, depth + 1)


def tab_flow_map() -> None:
    st.subheader("대본 흐름도")
    st.caption("HOOK → INTRO → BODY → OUTRO 구조를 편집하고, 완성된 구조로 대본 작성을 시작하세요.")

    tree = outline_tree()
    with st.container(border=True):
        st.markdown(f"### {tree.root.display_title}")
        for child in tree.children(tree.root.id):
            _render_node(tree, child, 1)
        st.button("➕ 섹션 추가", key="add_root_child", on_click=_add_child, args=(tree.root.id,))

    st.markdown("#### 텍스트 미리보기")
    text = outline_to_text(tree)
    st.code(text or "(비어 있음)", language=None)

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("📝 이 구조로 대본 만들기", type="primary", width="stretch"):
            use_outline_as_input()
            st.toast("흐름도 구조를 입력 창으로 보냈습니다.")
            st.rerun()
    with col2:
        st.download_button(
            "JSON 다운로드",
            data=json.dumps(tree.to_dict(), ensure_ascii=False, indent=2),
            file_name="script_flow_map.json",
            mime="application/json",
            width="stretch",
        )
    with col3:
        st.button("템플릿으로 초기화", width="stretch", on_click=_restore_template)

    uploaded = st.file_uploader("저장한 흐름도 JSON 불러오기", type=["json"], key="flow_map_upload")
    if uploaded is not None and st.button("불러오기", key="flow_map_load"):
        try:
            restored = OutlineTree.from_dict(json.loads(uploaded.getvalue().decode("utf-8")))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            st.error(f"흐름도 파일을 읽을 수 없습니다: {exc}")
        else:
            _logger.info("Restored flow map with %d nodes.", len(restored))
            set_outline_tree(restored)
            st.session_state.editing_node_id = None
            st.toast("흐름도를 불러왔습니다.")
            st.rerun()
