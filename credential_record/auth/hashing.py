"""Salt generation and PBKDF2-HMAC-SHA1 password hashing.

Salt and derived key are raw bytes; on the record they are kept as text under
a single-byte charset (ISO-8859-1) so that every byte value 0..255 maps to one
code point and decodes back unchanged.
"""
import hashlib
import hmac
import secrets
import sys
from dataclasses import dataclass, field
from typing import Tuple, Union

from credential_record.config import (
    BYTE_CHARSET,
    DERIVED_KEY_LENGTH,
    PBKDF2_ALGORITHM,
    PBKDF2_ITERATIONS,
    SALT_LENGTH,
)


class CredentialError(RuntimeError):
    """Unrecoverable credential failure (missing algorithm, bad key parameters, misuse)."""


def bytes_to_text(raw: bytes) -> str:
    """Bytes -> one character per byte."""
    return bytes(raw).decode(BYTE_CHARSET)


def text_to_bytes(text: str) -> bytes:
    """Inverse of bytes_to_text; characters above U+00FF are rejected."""
    try:
        return text.encode(BYTE_CHARSET)
    except UnicodeEncodeError as e:
        raise CredentialError(f"value is not byte-encoded text: {e.reason}") from e


def generate_salt(length: int = SALT_LENGTH) -> Tuple[str, bytes]:
    """Draw a random salt and return (text, raw), re-drawing until the text decodes back exactly."""
    while True:
        raw = secrets.token_bytes(length)
        try:
            text = raw.decode(BYTE_CHARSET)
            if text.encode(BYTE_CHARSET) == raw:
                return text, raw
        except UnicodeError:
            pass
        print("[credential-salt] salt did not round-trip, drawing again", file=sys.stderr, flush=True)


def derive_key(
    plaintext: str,
    salt: bytes,
    iterations: int = PBKDF2_ITERATIONS,
    key_length: int = DERIVED_KEY_LENGTH,
    algorithm: str = PBKDF2_ALGORITHM,
) -> bytes:
    """PBKDF2-HMAC over the UTF-8 password; raises CredentialError if the primitive is unusable."""
    try:
        secret = plaintext.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CredentialError(f"password is not encodable as UTF-8: {e.reason}") from e
    try:
        return hashlib.pbkdf2_hmac(
            algorithm,
            secret,
            bytes(salt),
            iterations,
            dklen=key_length,
        )
    except (ValueError, TypeError, AttributeError) as e:
        print(f"[credential-hash] key derivation unavailable: {e}", file=sys.stderr, flush=True)
        raise CredentialError(f"PBKDF2-HMAC-{algorithm.upper()} unavailable: {e}") from e


@dataclass(frozen=True)
class PlaintextPassword:
    """Password as typed by the user. Not yet hashed."""
    value: str = field(repr=False)


@dataclass(frozen=True)
class HashedPassword:
    """Derived key bytes for a password and the salt it was derived with."""
    key: bytes = field(repr=False)
    salt: bytes = field(repr=False)

    @property
    def text(self) -> str:
        return bytes_to_text(self.key)


PasswordValue = Union[PlaintextPassword, HashedPassword]


def hash_password(password: PasswordValue, salt: bytes) -> HashedPassword:
    """Hash a plaintext password. Passing an already hashed password is an error."""
    if isinstance(password, HashedPassword):
        raise CredentialError("password is already hashed")
    if not isinstance(password, PlaintextPassword):
        raise CredentialError(f"expected PlaintextPassword, got {type(password).__name__}")
    return HashedPassword(key=derive_key(password.value, salt), salt=bytes(salt))


def verify_password(candidate: str, salt: bytes, expected: bytes) -> bool:
    """Constant-time check of a candidate password against a stored derived key."""
    return hmac.compare_digest(derive_key(candidate, salt), bytes(expected))
