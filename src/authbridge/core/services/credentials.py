"""Credential verification collaborators."""

from dataclasses import dataclass
from typing import Protocol

from loguru import logger
from passlib.context import CryptContext

from src.authbridge.core.store import EntityStore

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    error_message: str | None = None


class CredentialVerifier(Protocol):
    """Opaque pass/fail oracle for a username and secret."""

    def verify(self, login_id: str, secret: str) -> VerificationResult: ...


def hash_password(secret: str) -> str:
    """Hash a secret the way login records store it."""
    return pwd_context.hash(secret)


def verify_password(secret: str, stored: str | None) -> bool:
    """Check ``secret`` against a stored hash; unreadable hashes never match."""
    if not stored:
        return False
    try:
        return pwd_context.verify(secret, stored)
    except ValueError as e:
        logger.warning("Stored password hash could not be verified: {}", e)
        return False


class StoreCredentialVerifier:
    """Verifies credentials against the ``UserLogin`` record of the entity store.

    A login must exist, must be enabled when ``require_enabled`` is set, and
    its stored password hash must match the supplied secret.
    """

    def __init__(self, store: EntityStore, require_enabled: bool = True) -> None:
        self._store = store
        self._require_enabled = require_enabled

    def verify(self, login_id: str, secret: str) -> VerificationResult:
        record = self._store.query_one("UserLogin", user_login_id=login_id)
        if record is None:
            return VerificationResult(False, "User not found.")

        if self._require_enabled and record.get("enabled") == "N":
            logger.info("Rejected credentials for disabled login {}", login_id)
            return VerificationResult(False, "The user login is disabled.")

        stored = record.get("current_password")
        if not verify_password(secret, stored):
            return VerificationResult(False, "The password was incorrect.")

        return VerificationResult(True)
