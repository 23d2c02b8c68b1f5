"""
Configuration helpers for the wiki backend.

Routers and services read a Settings object instead of fetching os.environ
directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_PORT = 3000
DEFAULT_SESSION_KEYS = ("wiki-session-key-1", "wiki-session-key-2")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    session_cookie_name: str
    session_secret_keys: tuple[str, ...]
    session_max_age_seconds: int
    tls_cert_file: str
    tls_key_file: str
    log_level: str

    @property
    def tls_enabled(self) -> bool:
        return bool(self.tls_cert_file or self.tls_key_file)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _keys(value: str | None) -> tuple[str, ...]:
        keys = tuple(k.strip() for k in (value or "").split(",") if k.strip())
        return keys or DEFAULT_SESSION_KEYS

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT"), DEFAULT_PORT),
        session_cookie_name="session",
        session_secret_keys=_keys(os.getenv("SESSION_SECRET_KEYS")),
        session_max_age_seconds=_int(os.getenv("SESSION_MAX_AGE_SECONDS"), 86400),
        tls_cert_file=os.getenv("TLS_CERT_FILE", ""),
        tls_key_file=os.getenv("TLS_KEY_FILE", ""),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
