"""Single-slot credential store for the Gemini API key.

By default the key only lives in memory for the current Streamlit session.
A persistent store also mirrors it to a small JSON file so it survives
browser reloads; that file is shared by everyone using the server, so the
app only persists when the passcode gate is configured. There is no
encryption and no expiry.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from src.config import CREDENTIAL_SLOT, credentials_path

_logger = logging.getLogger(__name__)

# Guards every read and read-modify-write of credential files in this process.
_file_lock = threading.Lock()


def mask_secret(secret: str) -> str:
    if len(secret) <= 8:
        return "••••••••"
    return f"{secret[:4]}{'•' * (len(secret) - 8)}{secret[-4:]}"


class CredentialStore:
    def __init__(
        self,
        path: Optional[Path] = None,
        slot: str = CREDENTIAL_SLOT,
        restore: bool = True,
        persist: bool = False,
    ) -> None:
        self.path = Path(path) if path is not None else credentials_path()
        self.slot = slot
        self.persist = persist
        self._secret: Optional[str] = None
        if restore:
            self.restore()

    def restore(self) -> Optional[str]:
        """Load a previously persisted secret; a session-only store keeps what it has."""
        if not self.persist:
            return self._secret
        self._secret = self._read_slot()
        if self._secret:
            _logger.info("Restored stored credential (prefix=%s***).", self._secret[:4])
        return self._secret

    def get(self) -> Optional[str]:
        return self._secret

    def set(self, secret: str) -> None:
        cleaned = (secret or "").strip()
        if not cleaned:
            raise ValueError("API key must not be empty.")
        self._secret = cleaned
        if self.persist:
            self._write_slot(cleaned)
        _logger.info("Stored new credential (prefix=%s***).", cleaned[:4])

    def clear(self) -> None:
        self._secret = None
        if self.persist:
            with _file_lock:
                data = self._read_file()
                if self.slot in data:
                    del data[self.slot]
                    self._write_file(data)
        _logger.info("Cleared stored credential.")

    def masked(self) -> str:
        return mask_secret(self._secret) if self._secret else ""

    def __bool__(self) -> bool:
        return bool(self._secret)

    def _read_file(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            _logger.warning("Ignoring unreadable credential file at %s.", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_file(self, data: dict) -> None:
        """Replace the file in one step so readers never see half-written JSON."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _read_slot(self) -> Optional[str]:
        with _file_lock:
            data = self._read_file()
        value = str(data.get(self.slot, "") or "").strip()
        return value or None

    def _write_slot(self, secret: str) -> None:
        with _file_lock:
            data = self._read_file()
            data[self.slot] = secret
            self._write_file(data)
