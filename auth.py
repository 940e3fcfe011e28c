"""
Mock auth provider.

There is no account service: any well-formed email signs in, and an email
containing "admin" gets the admin role. The token and profile are kept in the
secure store under ``token`` and ``user`` and restored once at start-up.
"""
import re
import time
from typing import Optional

import structlog
from pydantic import ValidationError

from errors import InvalidCredentials, RegistrationFailed
from schemas import User
from secure_store import SecureStore

logger = structlog.get_logger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"
MIN_PASSWORD_LENGTH = 6
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def mock_token() -> str:
    return f"mock-jwt-token-{int(time.time() * 1000)}"


class AuthProvider:
    def __init__(self, store: SecureStore):
        self.store = store
        self.user: Optional[User] = None
        self.token: Optional[str] = None

    def restore(self) -> Optional[User]:
        token = self.store.get_item(TOKEN_KEY)
        raw_user = self.store.get_item(USER_KEY)
        if token and raw_user:
            try:
                self.user = User.model_validate_json(raw_user)
                self.token = token
            except ValidationError as e:
                logger.warning("stored_session_invalid", error=str(e))
        return self.user

    def current_user(self) -> Optional[User]:
        return self.user

    def login(self, email: str, password: str) -> User:
        if not EMAIL_RE.match(email or "") or not password:
            raise InvalidCredentials("Invalid email or password")
        user = User(
            id="1",
            email=email,
            name="John Doe",
            role="admin" if "admin" in email else "customer",
        )
        self._start_session(user)
        logger.info("user_logged_in", email=email, role=user.role)
        return user

    def register(self, email: str, password: str, name: str) -> User:
        if not EMAIL_RE.match(email or ""):
            raise RegistrationFailed("Please enter a valid email")
        if not (name or "").strip():
            raise RegistrationFailed("Please enter your name")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise RegistrationFailed(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        user = User(id="1", email=email, name=name.strip(), role="customer")
        self._start_session(user)
        logger.info("user_registered", email=email)
        return user

    def logout(self) -> None:
        self.store.delete_item(TOKEN_KEY)
        self.store.delete_item(USER_KEY)
        self.user = None
        self.token = None

    def _start_session(self, user: User) -> None:
        token = mock_token()
        self.store.set_item(TOKEN_KEY, token)
        self.store.set_item(USER_KEY, user.model_dump_json())
        self.token = token
        self.user = user
