"""Session helpers (signed tokens, cookies, validation).

The session lives entirely on the client: a timestamped token signed with the
configured keys whose only payload is ``{"userID": ...}``. The newest key
(last in the list) signs; every key in the list is accepted when reading, so
keys can be rotated without logging everybody out.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request, Response
from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from wiki.core.config import get_settings

logger = logging.getLogger(__name__)

SESSION_SALT = "wiki.session"
USER_ID_FIELD = "userID"


def _serializer() -> URLSafeTimedSerializer:
    settings = get_settings()
    return URLSafeTimedSerializer(list(settings.session_secret_keys), salt=SESSION_SALT)


def issue_session(user_id: str) -> str:
    """Sign a new session token carrying ``user_id``."""
    return _serializer().dumps({USER_ID_FIELD: user_id})


def read_session(token: Optional[str], max_age: Optional[int] = None) -> Optional[str]:
    """Return the user id inside ``token``, or None when missing, tampered or expired."""
    if not token:
        return None
    settings = get_settings()
    ttl = settings.session_max_age_seconds if max_age is None else max_age
    try:
        payload = _serializer().loads(token, max_age=ttl)
    except SignatureExpired:
        logger.debug("session cookie expired")
        return None
    except BadData:
        logger.debug("session cookie rejected (bad signature or payload)")
        return None
    if not isinstance(payload, dict):
        return None
    user_id = payload.get(USER_ID_FIELD)
    if user_id is None:
        return None
    return str(user_id)


def current_user_id(request: Request) -> Optional[str]:
    """Return the user id carried by the request's session cookie, if any."""
    settings = get_settings()
    return read_session(request.cookies.get(settings.session_cookie_name))


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    secure_cookie = settings.app_env == "prod"
    response.set_cookie(
        settings.session_cookie_name,
        token,
        httponly=True,
        secure=secure_cookie,
        samesite="lax",
        max_age=settings.session_max_age_seconds,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(get_settings().session_cookie_name, path="/")
