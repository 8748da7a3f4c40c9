"""Service layer modules for the IT Talent Solution API."""

from . import (
    account_service,
    cleanup_service,
    intake_service,
    job_service,
    mail_service,
    session_service,
)

__all__ = [
    "account_service",
    "cleanup_service",
    "intake_service",
    "job_service",
    "mail_service",
    "session_service",
]
