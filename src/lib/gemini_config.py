import logging
from functools import lru_cache
from typing import Callable

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

GEMINI_MODEL_OPTIONS = [
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-2.0-flash",
]

_logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def resolve_gemini_model(get_secret: Callable[[str, str], str] | None = None) -> str:
    """Resolve and validate the Gemini text model id from secrets or env.

    `get_secret` should have the same signature as src.config.get_secret.
    """

    reader = get_secret or (lambda name, default="": default)
    model = (reader("gemini_model", DEFAULT_GEMINI_MODEL) or "").strip() or DEFAULT_GEMINI_MODEL

    # Google AI Studio keys start with "AIza"; a key pasted into the model slot
    # otherwise surfaces as an opaque 404 from the API.
    if model.startswith("AIza") or "api_key" in model.lower():
        raise ValueError(
            "Misconfiguration: GEMINI_MODEL is an API key. Set GEMINI_MODEL to a model id like gemini-2.5-flash."
        )
    if any(ch.isspace() for ch in model):
        raise ValueError(f"Invalid GEMINI_MODEL {model!r}: model ids cannot contain whitespace.")

    _logger.info("Gemini text model resolved (model=%s).", model)
    return model
