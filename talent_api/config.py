"""Environment-driven configuration for the Flask application."""

from __future__ import annotations

import os
from typing import Any, Dict

UPLOAD_LIMIT_BYTES = 16 * 1024 * 1024  # whole multipart request
RESUME_LIMIT_BYTES = 5 * 1024 * 1024  # 5 MB per resume
FORM_FIELD_LIMIT_BYTES = 1024 * 1024  # per non-file form field


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def load_config() -> Dict[str, Any]:
    """Read settings from the environment into a Flask config mapping."""
    return {
        "UPLOAD_DIR": os.getenv("UPLOAD_DIR", "uploads"),
        "MAX_CONTENT_LENGTH": _env_int("MAX_CONTENT_LENGTH", UPLOAD_LIMIT_BYTES),
        "MAX_RESUME_BYTES": _env_int("MAX_RESUME_BYTES", RESUME_LIMIT_BYTES),
        "MAX_FORM_MEMORY_SIZE": _env_int("MAX_FORM_MEMORY_SIZE", FORM_FIELD_LIMIT_BYTES),
        "CLEANUP_DELAY_SECONDS": _env_int("CLEANUP_DELAY_SECONDS", 60),
        "SESSION_TTL_SECONDS": _env_int("SESSION_TTL_SECONDS", 24 * 60 * 60),
        "SESSION_COOKIE_NAME": os.getenv("SESSION_COOKIE_NAME", "talent_session"),
        "SESSION_COOKIE_SECURE": _env_flag("SESSION_COOKIE_SECURE"),
        "MAIL_BACKEND": os.getenv("MAIL_BACKEND", "console").lower(),
        "MAIL_SERVER": os.getenv("MAIL_SERVER", "smtp.gmail.com"),
        "MAIL_PORT": _env_int("MAIL_PORT", 587),
        "MAIL_USERNAME": os.getenv("MAIL_USERNAME", ""),
        "MAIL_PASSWORD": os.getenv("MAIL_PASSWORD", ""),
        "MAIL_USE_TLS": _env_flag("MAIL_USE_TLS", "true"),
        "MAIL_TIMEOUT": _env_int("MAIL_TIMEOUT", 30),
        "MAIL_SENDER": os.getenv("MAIL_SENDER", "noreply@ittalentsolution.com"),
        "APPLICATION_RECIPIENT": os.getenv(
            "APPLICATION_RECIPIENT", "hr.ittalentsolution@gmail.com"
        ),
        "PUBLIC_DIR": os.path.abspath(os.getenv("PUBLIC_DIR", "public")),
        "SEED_DEMO_JOBS": _env_flag("SEED_DEMO_JOBS", "true"),
        "CORS_ORIGINS": os.getenv("CORS_ORIGINS", "*"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
    }
