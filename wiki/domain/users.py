"""User record and the authentication error taxonomy."""
from __future__ import annotations

from dataclasses import dataclass


class AuthError(Exception):
    """Base class for authentication-related exceptions."""


class DuplicateUsernameError(AuthError):
    def __init__(self, username: str):
        super().__init__(f"Username {username!r} is already taken")
        self.username = username


class InvalidCredentialsError(AuthError):
    pass


@dataclass(frozen=True)
class User:
    id: str
    username: str
    # Plaintext: hashing is outside the scope of this app.
    password: str
