"""User credential record."""
import base64
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from credential_record.auth.hashing import (
    CredentialError,
    bytes_to_text,
    derive_key,
    generate_salt,
    text_to_bytes,
    verify_password,
)


class User(BaseModel):
    """User record: identity fields plus salt and password (plaintext until encrypt_password)."""
    id: Optional[int] = Field(None, frozen=True, description="Assigned by the store on creation; read-only afterwards")
    email: Optional[str] = Field(None, description="Login email")
    first_name: Optional[str] = Field(None, alias="firstName", description="First name")
    last_name: Optional[str] = Field(None, alias="lastName", description="Last name")
    salt: Optional[str] = Field(None, description="16 salt bytes as ISO-8859-1 text; None or empty until generated")
    password: Optional[str] = Field(None, description="Plaintext, or the derived key as ISO-8859-1 text once hashed")

    model_config = ConfigDict(populate_by_name=True)

    def ensure_salt(self) -> str:
        """Return the salt, generating and caching a new one if none is set."""
        if not self.salt:
            self.salt, _ = generate_salt()
        return self.salt

    def get_salt(self) -> str:
        return self.ensure_salt()

    def get_salt_bytes(self) -> bytes:
        return text_to_bytes(self.ensure_salt())

    def encrypt_password(self) -> None:
        """Replace the plaintext password with its PBKDF2-HMAC-SHA1 derived key.

        Not guarded: calling it again hashes the hash. On CredentialError the
        password field is left as it was.
        """
        if self.password is None:
            raise CredentialError("no password to encrypt")
        key = derive_key(self.password, self.get_salt_bytes())
        self.password = bytes_to_text(key)

    def set_password(self, value: Union[bytes, bytearray, str, None]) -> None:
        """Store raw key bytes, or text that is already byte-encoded (e.g. loaded from storage)."""
        if isinstance(value, (bytes, bytearray)):
            self.password = bytes_to_text(value)
        else:
            self.password = value

    def get_password_bytes(self) -> bytes:
        return text_to_bytes(self.password or "")

    def check_password(self, candidate: str) -> bool:
        """Whether candidate hashes to the stored password. Assumes encrypt_password has run."""
        if not self.salt or not self.password:
            return False
        return verify_password(candidate, self.get_salt_bytes(), self.get_password_bytes())

    def to_storage(self) -> dict:
        """Serializable row; salt and password bytes go out as base64."""
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "salt_b64": base64.b64encode(text_to_bytes(self.salt or "")).decode("ascii"),
            "password_b64": base64.b64encode(self.get_password_bytes()).decode("ascii"),
        }

    @classmethod
    def from_storage(cls, row: dict) -> "User":
        """Rebuild a record from a to_storage() row."""
        user = cls(
            id=row.get("id"),
            email=row.get("email"),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
        )
        if row.get("salt_b64"):
            user.salt = bytes_to_text(base64.b64decode(row["salt_b64"]))
        if row.get("password_b64"):
            user.set_password(base64.b64decode(row["password_b64"]))
        return user
