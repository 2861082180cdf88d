"""Request-level session middleware.

Reads the session cookie, validates it, and populates
``request.state.viewer`` (a ``Viewer`` or None). Missing, expired or invalid
cookies leave the request anonymous rather than rejecting it.
"""

from __future__ import annotations

import logging

import jwt as pyjwt
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .session import (
    _SESSION_COOKIE_NAME,
    _should_refresh,
    clear_session_cookie,
    create_session_token,
    decode_session_token,
    set_session_cookie,
    viewer_from_claims,
)

log = logging.getLogger(__name__)


class SessionMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that turns the session cookie into a viewer."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.viewer = None

        token = request.cookies.get(_SESSION_COOKIE_NAME)
        if not token:
            return await call_next(request)

        stale = False
        claims = None
        try:
            claims = decode_session_token(token)
            request.state.viewer = viewer_from_claims(claims)
        except pyjwt.ExpiredSignatureError:
            log.debug("session expired; continuing anonymously")
            stale = True
        except (pyjwt.PyJWTError, KeyError):
            log.info("invalid session cookie; continuing anonymously")
            stale = True

        response = await call_next(request)

        if stale:
            clear_session_cookie(response)
        elif claims is not None and _should_refresh(claims):
            viewer = request.state.viewer
            set_session_cookie(
                response,
                create_session_token(
                    user_id=viewer.user_id,
                    person_id=viewer.person_id,
                    family_id=viewer.family_id,
                ),
            )

        return response
