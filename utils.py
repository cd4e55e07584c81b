import logging
from io import BytesIO
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import requests
from PIL import Image

from src.config import IMAGE_RENDER_BASE_URL, THUMBNAIL_HEIGHT, THUMBNAIL_WIDTH, get_secret
from src.generation.errors import CollaboratorError
from src.lib.gemini_config import resolve_gemini_model

_logger = logging.getLogger(__name__)


# ----------------------------
# Clients
# ----------------------------
def _gemini_client(api_key: str) -> Any:
    from google import genai  # type: ignore

    return genai.Client(api_key=api_key)


def get_gemini_text_model(default: str = "") -> str:
    try:
        return resolve_gemini_model(get_secret)
    except ValueError as exc:
        _logger.warning("Falling back to default Gemini model: %s", exc)
        return default or "gemini-2.5-flash"


def _status_code(exc: Exception) -> Optional[int]:
    code = getattr(exc, "code", None) or getattr(exc, "status_code", None)
    try:
        return int(code) if code is not None else None
    except (TypeError, ValueError):
        return None


# ----------------------------
# Text generation collaborator
# ----------------------------
class GeminiTextGenerator:
    """Thin wrapper over google-genai ``models.generate_content``.

    Returns raw text; parsing and validation belong to the orchestrator.
    Every SDK or transport failure is re-raised as ``CollaboratorError``.
    """

    def __init__(self, api_key: str, model: Optional[str] = None) -> None:
        self.model = model or get_gemini_text_model()
        self._client = _gemini_client(api_key)

    def _generate(self, prompt: str, config: Any = None) -> str:
        try:
            resp = self._client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
            return (getattr(resp, "text", None) or "").strip()
        except Exception as exc:  # noqa: BLE001 - SDK raises APIError and raw httpx errors
            status = _status_code(exc)
            _logger.error("Gemini request failed (model=%s, status=%s): %s", self.model, status, exc)
            raise CollaboratorError(f"{type(exc).__name__}: {exc}", status_code=status) from exc

    def generate_text(self, prompt: str) -> str:
        return self._generate(prompt)

    def generate_json(self, prompt: str, schema: Dict[str, Any]) -> str:
        from google.genai import types  # type: ignore

        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
        )
        return self._generate(prompt, config)


# ----------------------------
# Thumbnail image renderer
# ----------------------------
def thumbnail_image_url(prompt: str, width: int = THUMBNAIL_WIDTH, height: int = THUMBNAIL_HEIGHT) -> str:
    encoded = quote((prompt or "").strip(), safe="")
    return f"{IMAGE_RENDER_BASE_URL}{encoded}?width={width}&height={height}&nologo=true"


def _crop_to_aspect(img: Image.Image, aspect_ratio: str) -> Image.Image:
    ar_map = {"16:9": (16, 9), "9:16": (9, 16), "1:1": (1, 1)}
    w, h = img.size
    a, b = ar_map.get(aspect_ratio, (16, 9))
    target = a / b
    current = w / h

    if abs(current - target) < 0.01:
        return img

    if current > target:
        new_w = int(h * target)
        left = (w - new_w) // 2
        return img.crop((left, 0, left + new_w, h))
    else:
        new_h = int(w / target)
        top = (h - new_h) // 2
        return img.crop((0, top, w, top + new_h))


def fetch_thumbnail_image(url: str, aspect_ratio: str = "16:9", timeout: int = 90) -> Tuple[Optional[bytes], Optional[str]]:
    """Download the rendered thumbnail and return PNG bytes, or an error message."""
    if not (url or "").strip():
        return None, "Image URL is empty."
    try:
        resp = requests.get(url, timeout=timeout)
        if resp.status_code >= 400:
            return None, f"Image renderer error {resp.status_code}"
        img = Image.open(BytesIO(resp.content)).convert("RGB")
    except requests.RequestException as exc:
        return None, f"Image request failed: {exc}"
    except OSError as exc:
        return None, f"Image renderer returned unreadable data: {exc}"

    img = _crop_to_aspect(img, aspect_ratio)
    out = BytesIO()
    img.save(out, format="PNG")
    return out.getvalue(), None
