"""Local accounts: sign-up, sign-in and the current-user pointer.

Users live under ``budgetflow_users`` in the key-value store and the signed-in
user's id under ``budgetflow_current_user``. Emails compare
case-insensitively. Passwords are kept as salted PBKDF2-SHA256 hashes.
"""

from __future__ import annotations

import hashlib
import hmac
import os
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import ValidationError

from .errors import AccountExistsError, InvalidCredentialsError
from .logging_setup import get_logger
from .models import UserRecord
from .storage import CURRENT_USER_KEY, USERS_KEY, KeyValueStore

logger = get_logger("budgetflow.accounts")

_PBKDF2_ITERATIONS = 100_000


@dataclass(frozen=True, slots=True)
class AuthUser:
    """A user as exposed to callers; never carries the password hash."""

    id: str
    email: str
    name: str | None
    created_at: str


def hash_password(password: str, *, salt: str | None = None) -> str:
    salt = salt or os.urandom(16).hex()
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), _PBKDF2_ITERATIONS
    )
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, _, expected = stored.partition("$")
    if not salt or not expected:
        return False
    return hmac.compare_digest(hash_password(password, salt=salt), stored)


def _public(record: UserRecord) -> AuthUser:
    return AuthUser(id=record.id, email=record.email, name=record.name, created_at=record.created_at)


class Accounts:
    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def _read_users(self) -> list[UserRecord]:
        data = self.kv.get_json(USERS_KEY)
        if not isinstance(data, list):
            return []
        users: list[UserRecord] = []
        for obj in data:
            try:
                users.append(UserRecord.model_validate(obj))
            except ValidationError as e:
                logger.warning("Dropping invalid user record: %s", e)
        return users

    def _write_users(self, users: list[UserRecord]) -> None:
        self.kv.set_json(USERS_KEY, [u.model_dump(by_alias=True) for u in users])

    def sign_up(self, name: str, email: str, password: str) -> AuthUser:
        """Register a user and sign them in.

        Raises
        ------
        AccountExistsError
            When an account with the same email (any casing) exists.
        """

        users = self._read_users()
        if any(u.email.lower() == email.lower() for u in users):
            raise AccountExistsError(email)
        record = UserRecord(
            id=str(uuid.uuid4()),
            email=email,
            name=name or None,
            created_at=datetime.now(UTC).isoformat(),
            password_hash=hash_password(password),
        )
        self._write_users([*users, record])
        self.kv.set(CURRENT_USER_KEY, record.id)
        logger.info("Registered user %s", record.id)
        return _public(record)

    def sign_in(self, email: str, password: str) -> AuthUser:
        """Sign in by email and password.

        Raises
        ------
        InvalidCredentialsError
            For an unknown email or a wrong password.
        """

        match = next(
            (u for u in self._read_users() if u.email.lower() == email.lower()),
            None,
        )
        if match is None or not verify_password(password, match.password_hash):
            raise InvalidCredentialsError()
        self.kv.set(CURRENT_USER_KEY, match.id)
        return _public(match)

    def sign_out(self) -> None:
        self.kv.delete(CURRENT_USER_KEY)

    def current_user(self) -> AuthUser | None:
        user_id = self.kv.get(CURRENT_USER_KEY)
        if not user_id:
            return None
        for u in self._read_users():
            if u.id == user_id:
                return _public(u)
        return None


__all__ = [
    "Accounts",
    "AuthUser",
    "hash_password",
    "verify_password",
]
