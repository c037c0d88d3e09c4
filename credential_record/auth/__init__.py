"""Credential record, salt generation, password hashing and the reference store."""
from credential_record.auth.hashing import (
    CredentialError,
    HashedPassword,
    PlaintextPassword,
    hash_password,
    verify_password,
)
from credential_record.auth.models import User
from credential_record.auth.store import AuthStore

__all__ = [
    "User",
    "AuthStore",
    "CredentialError",
    "PlaintextPassword",
    "HashedPassword",
    "hash_password",
    "verify_password",
]
