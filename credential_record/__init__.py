"""User credential record: per-user salt and PBKDF2 password hashing."""
__version__ = "0.1.0"
