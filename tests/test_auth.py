"""Register and login tests."""
import json
import tempfile
from pathlib import Path

import pytest

from credential_record.auth.models import User
from credential_record.auth.store import AuthStore


def test_register_and_login() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = AuthStore(base_dir=Path(tmp))
        user_id = store.register("Alice@Example.com ", "pass1234", "Alice", "Liddell")
        assert user_id == 1
        user = store.login("alice@example.com", "pass1234")
        assert user is not None
        assert user.id == user_id
        assert user.email == "alice@example.com"
        assert user.first_name == "Alice"
        assert len(user.get_salt_bytes()) == 16
        assert len(user.get_password_bytes()) == 16


def test_ids_increase() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = AuthStore(base_dir=Path(tmp))
        assert store.register("a@x.io", "pw") == 1
        assert store.register("b@x.io", "pw") == 2
        assert store.list_ids() == [1, 2]


def test_register_duplicate_or_empty() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = AuthStore(base_dir=Path(tmp))
        assert store.register("bob@x.io", "pw") is not None
        assert store.register("BOB@x.io", "other") is None
        assert store.register("", "pw") is None
        assert store.register("carol@x.io", "") is None


def test_login_wrong_password_or_unknown() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = AuthStore(base_dir=Path(tmp))
        store.register("cat@x.io", "secret")
        assert store.login("cat@x.io", "wrong") is None
        assert store.login("dog@x.io", "secret") is None
        assert store.login("cat@x.io", "secret") is not None


def test_stored_file_has_no_plaintext() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = AuthStore(base_dir=Path(tmp))
        user_id = store.register("eve@x.io", "plaintext-secret")
        text = (Path(tmp) / f"user_{user_id}.json").read_text(encoding="utf-8")
        assert "plaintext-secret" not in text
        row = json.loads(text)
        assert row["salt_b64"] and row["password_b64"]


def test_save_and_get_user() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = AuthStore(base_dir=Path(tmp))
        user_id = store.register("frank@x.io", "pw")
        user = store.get_user(user_id)
        assert user is not None
        user.last_name = "Herbert"
        store.save(user)
        reloaded = store.get_user(user_id)
        assert reloaded is not None
        assert reloaded.last_name == "Herbert"
        assert reloaded.salt == user.salt
        assert store.get_user(999) is None
        with pytest.raises(ValueError):
            store.save(User(email="nobody@x.io"))
