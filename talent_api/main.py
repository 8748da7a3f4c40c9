"""Flask application setup and blueprint wiring."""

from __future__ import annotations

import atexit
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from talent_api.config import load_config
from talent_api.errors import register_error_handlers
from talent_api.routes import register_routes
from talent_api.services.cleanup_service import CleanupScheduler
from talent_api.services.mail_service import NotificationChannel
from talent_api.storage import build_state
from talent_api.utils.auth import register_session_cleanup


def create_app(
    config: Optional[Mapping[str, Any]] = None,
    *,
    notifier: Optional[NotificationChannel] = None,
    cleanup: Optional[CleanupScheduler] = None,
) -> Flask:
    """Configure and return the Flask application instance."""
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    state = build_state(app.config, notifier=notifier, cleanup=cleanup)
    app.extensions["talent_api"] = state
    if cleanup is None:
        state.cleanup.start()
        atexit.register(state.cleanup.shutdown)

    register_error_handlers(app)
    register_session_cleanup(app)
    register_routes(app)

    app.logger.info(
        "App ready: %d jobs seeded, mail backend %s",
        len(state.jobs),
        "injected" if notifier is not None else app.config["MAIL_BACKEND"],
    )
    return app
