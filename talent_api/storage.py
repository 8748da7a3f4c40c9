"""In-memory state backing the site, created once per application instance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from flask import current_app

from talent_api.services.account_service import DEFAULT_ACCOUNTS, CredentialStore
from talent_api.services.cleanup_service import CleanupScheduler
from talent_api.services.intake_service import ApplicationIntake
from talent_api.services.job_service import DEMO_JOBS, JobRegistry
from talent_api.services.mail_service import NotificationChannel, channel_from_config
from talent_api.services.session_service import SessionGuard


@dataclass
class AppState:
    credentials: CredentialStore
    sessions: SessionGuard
    jobs: JobRegistry
    intake: ApplicationIntake
    cleanup: CleanupScheduler


def build_state(
    config: Mapping[str, Any],
    *,
    notifier: Optional[NotificationChannel] = None,
    cleanup: Optional[CleanupScheduler] = None,
) -> AppState:
    """Wire the stores together from app config and optional overrides."""
    credentials = CredentialStore.from_plaintext(DEFAULT_ACCOUNTS)
    cleanup = cleanup or CleanupScheduler()
    return AppState(
        credentials=credentials,
        sessions=SessionGuard(credentials, ttl_seconds=config["SESSION_TTL_SECONDS"]),
        jobs=JobRegistry(seed=DEMO_JOBS if config["SEED_DEMO_JOBS"] else ()),
        intake=ApplicationIntake(
            channel=notifier or channel_from_config(config),
            cleanup=cleanup,
            sender=config["MAIL_SENDER"],
            recipient=config["APPLICATION_RECIPIENT"],
            cleanup_delay_seconds=config["CLEANUP_DELAY_SECONDS"],
        ),
        cleanup=cleanup,
    )


def get_state() -> AppState:
    """Return the state attached to the current Flask app."""
    return current_app.extensions["talent_api"]
