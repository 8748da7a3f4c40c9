"""Authentication helpers for session tokens and request gating."""

from __future__ import annotations

import secrets
import time
from functools import wraps
from typing import Any, Callable, Optional

from flask import Flask, current_app, g, request

# Session expiry window (seconds).
SESSION_TTL_SECONDS = 24 * 60 * 60


def now_seconds() -> int:
    """Return the current UNIX timestamp in seconds."""
    return int(time.time())


def now_millis() -> int:
    """Return the current UNIX timestamp in milliseconds."""
    return int(time.time() * 1000)


def generate_token(prefix: str = "sess") -> str:
    """Return an unguessable token with the given prefix."""
    return f"{prefix}_{secrets.token_urlsafe(24)}"


def request_token() -> Optional[str]:
    """Read the session token from the Bearer header or the session cookie."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        if token:
            return token
    return request.cookies.get(current_app.config["SESSION_COOKIE_NAME"]) or None


def _guard():
    return current_app.extensions["talent_api"].sessions


def current_session():
    """Return the valid session for this request, or None."""
    return _guard().validate(request_token())


def login_required(view: Callable[..., Any]) -> Callable[..., Any]:
    """Reject the request with Unauthenticated unless a valid session exists.

    The session is exposed to the view as ``g.session``.
    """

    @wraps(view)
    def wrapped(*args: Any, **kwargs: Any) -> Any:
        g.session = _guard().require_session(request_token())
        return view(*args, **kwargs)

    return wrapped


def register_session_cleanup(app: Flask) -> None:
    """Attach a before-request handler that keeps session state tidy."""

    @app.before_request
    def _cleanup_state() -> None:
        current_app.extensions["talent_api"].sessions.prune_expired()
