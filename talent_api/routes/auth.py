"""Staff login, logout and session status routes."""

from __future__ import annotations

from typing import Any, Mapping

from flask import Blueprint, current_app, jsonify, request

from talent_api.storage import get_state
from talent_api.utils.auth import current_session, request_token

bp = Blueprint("auth", __name__)


def request_payload() -> Mapping[str, Any]:
    """Accept either a JSON body or an urlencoded form."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form


@bp.post("/login")
def login():
    """Authenticate by username or email and set the session cookie."""
    payload = request_payload()
    identifier = str(payload.get("username") or "").strip()
    password = str(payload.get("password") or "")

    guard = get_state().sessions
    session = guard.login(identifier, password)

    response = jsonify(success=True, user=session.user_dict(), token=session.token)
    response.set_cookie(
        current_app.config["SESSION_COOKIE_NAME"],
        session.token,
        max_age=guard.ttl_seconds,
        httponly=True,
        secure=current_app.config["SESSION_COOKIE_SECURE"],
        samesite="Lax",
    )
    return response, 200


@bp.post("/logout")
def logout():
    get_state().sessions.destroy(request_token())
    response = jsonify(success=True)
    response.delete_cookie(current_app.config["SESSION_COOKIE_NAME"])
    return response, 200


@bp.get("/auth-status")
def auth_status():
    session = current_session()
    if session is None:
        return jsonify(authenticated=False), 200
    return jsonify(authenticated=True, user=session.user_dict()), 200
