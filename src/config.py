"""Centralised secret / configuration helpers.

All other modules should import ``get_secret`` from here rather than
duplicating the lookup logic.
"""
from __future__ import annotations

import os
from pathlib import Path

DEFAULT_CREDENTIALS_PATH = Path("data/credentials.json")
CREDENTIAL_SLOT = "gemini_api_key"

IMAGE_RENDER_BASE_URL = "https://image.pollinations.ai/prompt/"
THUMBNAIL_WIDTH = 1280
THUMBNAIL_HEIGHT = 720


def _normalize(value: str) -> str:
    """Strip whitespace and surrounding quotes; reject known placeholder strings."""
    v = str(value or "").strip()
    if len(v) >= 2 and v[0] == v[-1] and v[0] in {'"', "'"}:
        v = v[1:-1].strip()
    low = v.lower()
    if low in {"none", "null", ""}:
        return ""
    # Unfilled template placeholders such as PASTE_KEY_HERE or YOUR_API_KEY.
    if low.startswith(("paste_", "paste-", "your_", "your-", "replace_me", "changeme", "xxx")):
        return ""
    if low.endswith(("_here", "-here")):
        return ""
    return v


def get_secret(name: str, default: str = "") -> str:
    """Return a secret value, searching Streamlit secrets then env vars.

    Checks ``name``, ``name.lower()``, and ``name.upper()`` in that order.
    """
    candidates = list(dict.fromkeys([name, name.lower(), name.upper()]))

    try:
        import streamlit as st  # type: ignore

        if hasattr(st, "secrets"):
            for key in candidates:
                if key in st.secrets:
                    v = _normalize(str(st.secrets[key]))
                    if v:
                        return v
    except Exception:
        # st.secrets raises when no secrets.toml exists outside a Streamlit run.
        pass

    for key in candidates:
        v = _normalize(os.getenv(key, ""))
        if v:
            return v

    return _normalize(default)


def credentials_path() -> Path:
    override = get_secret("credentials_path", "")
    return Path(override) if override else DEFAULT_CREDENTIALS_PATH
