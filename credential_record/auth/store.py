"""User record storage (local JSON; salt and hash stored as base64)."""
import json
import sys
from pathlib import Path
from typing import List, Optional

from credential_record.config import AUTH_DATA_DIR, ensure_dirs
from credential_record.auth.models import User


class AuthStore:
    """User store indexed by email; assigns integer ids and handles register/login."""
    _index_file = "users.json"

    def __init__(self, base_dir: Optional[Path] = None):
        if base_dir is None:
            ensure_dirs()
        self.base_dir = base_dir or AUTH_DATA_DIR
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _index_path(self) -> Path:
        return self.base_dir / self._index_file

    def _user_path(self, user_id: int) -> Path:
        return self.base_dir / f"user_{user_id}.json"

    def _load_index(self) -> dict:
        if not self._index_path().exists():
            return {"by_email": {}, "ids": [], "next_id": 1}
        with open(self._index_path(), "r", encoding="utf-8") as f:
            return json.load(f)

    def _save_index(self, data: dict) -> None:
        with open(self._index_path(), "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def list_ids(self) -> List[int]:
        return self._load_index().get("ids", [])

    def save(self, user: User) -> None:
        """Write a record that already has an id."""
        if user.id is None:
            raise ValueError("user has no id; use register() to create one")
        with open(self._user_path(user.id), "w", encoding="utf-8") as f:
            json.dump(user.to_storage(), f, indent=2, ensure_ascii=False)

    def register(self, email: str, password: str, first_name: str = "", last_name: str = "") -> Optional[int]:
        """Register a new user. Returns the new id, or None if the email is empty or taken."""
        email = email.strip().lower()
        if not email or not password:
            return None
        index = self._load_index()
        if email in index.get("by_email", {}):
            return None
        user_id = index.get("next_id", 1)
        user = User(id=user_id, email=email, first_name=first_name, last_name=last_name, password=password)
        user.ensure_salt()
        user.encrypt_password()
        self.save(user)
        index.setdefault("by_email", {})[email] = user_id
        index.setdefault("ids", []).append(user_id)
        index["next_id"] = user_id + 1
        self._save_index(index)
        print(f"[credential-store] registered user {user_id}", file=sys.stderr, flush=True)
        return user_id

    def login(self, email: str, password: str) -> Optional[User]:
        """Check email and password. Returns the User on success, otherwise None."""
        email = email.strip().lower()
        if not email or not password:
            return None
        user_id = self._load_index().get("by_email", {}).get(email)
        if user_id is None:
            return None
        user = self.get_user(user_id)
        if user is None or not user.check_password(password):
            return None
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        """Load a user by id."""
        path = self._user_path(user_id)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return User.from_storage(json.load(f))
