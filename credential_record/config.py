"""Credential hashing parameters and data paths."""
import os
from pathlib import Path

# Project root (one level above the credential_record package)
ROOT_DIR = Path(__file__).resolve().parent.parent
# Data directory for the reference JSON store
DATA_DIR = Path(os.getenv("CREDENTIAL_RECORD_DATA_DIR") or ROOT_DIR / "data")
AUTH_DATA_DIR = DATA_DIR / "auth"  # user records

# Salt
SALT_LENGTH = 16  # bytes

# PBKDF2
PBKDF2_ALGORITHM = "sha1"
PBKDF2_ITERATIONS = 65536
DERIVED_KEY_LENGTH = 16  # 128 bits

# Single-byte charset: every byte value maps to exactly one code point
BYTE_CHARSET = "latin-1"


def ensure_dirs() -> None:
    """Make sure the data directories exist."""
    for d in (DATA_DIR, AUTH_DATA_DIR):
        d.mkdir(parents=True, exist_ok=True)
