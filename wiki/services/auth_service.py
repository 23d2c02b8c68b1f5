"""
Authentication and identity related use cases.

A browser is either anonymous or authenticated as one user. The state is
whatever the session cookie says. Login and registration produce the next
``SessionState`` from any state, failures raise and leave the caller's state
untouched, and logout always yields ``ANONYMOUS``. The caller writes the
resulting state back to the cookie.

The error taxonomy lives in ``wiki.domain.users`` (the user store raises it)
and is re-exported here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wiki.domain.users import AuthError, DuplicateUsernameError, InvalidCredentialsError, User
from wiki.repositories.memory import UserStore

logger = logging.getLogger(__name__)

__all__ = [
    "ANONYMOUS",
    "AuthError",
    "AuthResult",
    "AuthService",
    "DuplicateUsernameError",
    "InvalidCredentialsError",
    "SessionState",
]


@dataclass(frozen=True)
class SessionState:
    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = SessionState()


@dataclass
class AuthResult:
    user: User
    state: SessionState


@dataclass
class AuthService:
    """Handles login, registration, logout and session owner lookup."""

    users: UserStore

    def state_for(self, session_user_id: Optional[str]) -> SessionState:
        """Map a cookie value to a state; ids that do not resolve count as anonymous."""
        if self.users.get_by_id(session_user_id) is None:
            return ANONYMOUS
        return SessionState(session_user_id)

    def current_user(self, state: SessionState) -> Optional[User]:
        return self.users.get_by_id(state.user_id)

    # -------------------------------------- login --------------------------------------
    def login(self, username: str, password: str) -> AuthResult:
        user = self.users.find_by_credentials(username or "", password or "")
        if user is None:
            logger.info("login failed for username=%r", username)
            raise InvalidCredentialsError("Invalid username or password")
        return AuthResult(user=user, state=SessionState(user.id))

    # -------------------------------------- registro --------------------------------------
    def register(self, username: str, password: str) -> AuthResult:
        """Create the user and authenticate it in the same step."""
        user = self.users.register(username or "", password or "")
        logger.info("registered user id=%s username=%r", user.id, user.username)
        return AuthResult(user=user, state=SessionState(user.id))

    def logout(self, state: SessionState) -> SessionState:
        return ANONYMOUS
