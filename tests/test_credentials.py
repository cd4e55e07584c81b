import json

import pytest

from src.credentials import CredentialStore, mask_secret


def test_set_persists_and_restores(tmp_path) -> None:
    path = tmp_path / "data" / "credentials.json"
    store = CredentialStore(path=path, persist=True)
    assert store.get() is None
    assert not store

    store.set("  AIzaSyExampleKey9876  ")

    assert store.get() == "AIzaSyExampleKey9876"
    assert json.loads(path.read_text(encoding="utf-8")) == {"gemini_api_key": "AIzaSyExampleKey9876"}
    assert CredentialStore(path=path, persist=True).get() == "AIzaSyExampleKey9876"


def test_session_store_does_not_share_key_with_next_visitor(tmp_path) -> None:
    path = tmp_path / "credentials.json"
    first = CredentialStore(path=path)
    first.set("AIzaFirstVisitorKey0001")

    second = CredentialStore(path=path)

    assert first.get() == "AIzaFirstVisitorKey0001"
    assert second.get() is None
    assert not path.exists()


def test_session_store_ignores_persisted_key(tmp_path) -> None:
    path = tmp_path / "credentials.json"
    CredentialStore(path=path, persist=True).set("AIzaOperatorKey00001")

    visitor = CredentialStore(path=path)
    visitor.clear()

    assert visitor.get() is None
    assert CredentialStore(path=path, persist=True).get() == "AIzaOperatorKey00001"


def test_set_rejects_empty_secret(tmp_path) -> None:
    store = CredentialStore(path=tmp_path / "credentials.json", persist=True)

    with pytest.raises(ValueError):
        store.set("   ")
    assert store.get() is None


def test_clear_removes_only_its_slot(tmp_path) -> None:
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"gemini_api_key": "AIzaOld", "other": "keep"}), encoding="utf-8")
    store = CredentialStore(path=path, persist=True)
    assert store.get() == "AIzaOld"

    store.clear()

    assert store.get() is None
    assert json.loads(path.read_text(encoding="utf-8")) == {"other": "keep"}
    assert CredentialStore(path=path, persist=True).get() is None


def test_unreadable_file_restores_as_empty(tmp_path) -> None:
    path = tmp_path / "credentials.json"
    path.write_text("{not json", encoding="utf-8")

    assert CredentialStore(path=path, persist=True).get() is None


def test_overwrite_replaces_previous_value(tmp_path) -> None:
    store = CredentialStore(path=tmp_path / "credentials.json", persist=True)
    store.set("first-secret-value")
    store.set("second-secret-value")

    assert CredentialStore(path=tmp_path / "credentials.json", persist=True).get() == "second-secret-value"


def test_writes_leave_no_temporary_files(tmp_path) -> None:
    path = tmp_path / "credentials.json"
    store = CredentialStore(path=path, persist=True)
    for n in range(5):
        store.set(f"AIzaRotatingKey{n:05d}")
    store.clear()

    assert [p.name for p in tmp_path.iterdir()] == ["credentials.json"]
    assert json.loads(path.read_text(encoding="utf-8")) == {}


def test_failed_write_keeps_previous_file(tmp_path, monkeypatch) -> None:
    path = tmp_path / "credentials.json"
    store = CredentialStore(path=path, persist=True)
    store.set("AIzaStableKey000001")

    def _fail(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("src.credentials.os.replace", _fail)
    with pytest.raises(OSError, match="disk full"):
        store.set("AIzaHalfWrittenKey01")

    assert json.loads(path.read_text(encoding="utf-8")) == {"gemini_api_key": "AIzaStableKey000001"}
    assert [p.name for p in tmp_path.iterdir()] == ["credentials.json"]


def test_masking() -> None:
    assert mask_secret("short") == "••••••••"
    assert mask_secret("AIzaSyABCDEFwxyz") == "AIza••••••••wxyz"


def test_masked_is_empty_without_secret(tmp_path) -> None:
    store = CredentialStore(path=tmp_path / "credentials.json", restore=False)

    assert store.masked() == ""
    store.set("AIzaSyABCDEFwxyz")
    assert store.masked().startswith("AIza")
