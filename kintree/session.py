"""Viewer session helpers.

Provides:
- JWT creation and verification (PyJWT) for the session cookie
- The FastAPI dependency that hands the viewer identity to route handlers

The registry's own login flow issues the identity; this module only carries
``person_id`` / ``family_id`` from one request to the next so the tree
builders can take the viewer as an explicit argument.
"""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from fastapi import Request, Response

from .models import Viewer

log = logging.getLogger(__name__)

_SESSION_SECRET_ENV = "KINTREE_SESSION_SECRET"
_SESSION_ALGORITHM = "HS256"
_SESSION_LIFETIME_HOURS = 24
_SESSION_COOKIE_NAME = "kintree_session"
_SESSION_REFRESH_FRACTION = 0.5  # issue new token when >50 % of lifetime has passed
_DEV_SECRET = "dev-secret-change-me"

_dev_secret_warned = False


def _get_session_secret() -> str:
    global _dev_secret_warned
    secret = os.environ.get(_SESSION_SECRET_ENV, "")
    if not secret:
        # Anyone can sign a viewer cookie with this; development only.
        if not _dev_secret_warned:
            log.warning("%s is not set; session cookies are signed with a development secret", _SESSION_SECRET_ENV)
            _dev_secret_warned = True
        secret = _DEV_SECRET
    return secret


def create_session_token(
    user_id: str,
    person_id: str | None = None,
    family_id: str | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "person_id": person_id,
        "family_id": family_id,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=_SESSION_LIFETIME_HOURS)).timestamp()),
    }
    return jwt.encode(payload, _get_session_secret(), algorithm=_SESSION_ALGORITHM)


def decode_session_token(token: str) -> dict[str, Any]:
    """Decode and verify a session token.  Raises ``jwt.PyJWTError`` on failure."""
    return jwt.decode(token, _get_session_secret(), algorithms=[_SESSION_ALGORITHM])


def viewer_from_claims(claims: dict[str, Any]) -> Viewer:
    return Viewer(
        user_id=str(claims["sub"]),
        person_id=claims.get("person_id") or None,
        family_id=claims.get("family_id") or None,
    )


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=_SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=_SESSION_LIFETIME_HOURS * 3600,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=_SESSION_COOKIE_NAME, path="/")


def _should_refresh(claims: dict[str, Any]) -> bool:
    """Return True when >50 % of the token lifetime has elapsed."""
    iat = claims.get("iat", 0)
    exp = claims.get("exp", 0)
    if not iat or not exp:
        return False
    lifetime = exp - iat
    if lifetime <= 0:
        return False
    elapsed = time.time() - iat
    return elapsed > (lifetime * _SESSION_REFRESH_FRACTION)


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


def get_viewer(request: Request) -> Optional[Viewer]:
    """Return the viewer set on ``request.state`` by the middleware, or None.

    Anonymous requests are allowed: the root view is public.
    """
    return getattr(request.state, "viewer", None)
