"""Application intake: validate, forward by email, then clean up the resume."""

from __future__ import annotations

import logging
from datetime import datetime
from email.message import EmailMessage
from typing import Any, Callable, Mapping, Optional

from talent_api.errors import (
    AppError,
    ConsentRequired,
    DeliveryFailed,
    FileRequired,
    InternalError,
    InvalidFieldValue,
    MissingRequiredField,
)
from talent_api.services.cleanup_service import CleanupScheduler
from talent_api.services.mail_service import NotificationChannel
from talent_api.utils.uploads import StagedFile

_LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ("firstName", "lastName", "email")
# Values copied into email headers.
HEADER_FIELDS = ("firstName", "lastName", "position")
AFFIRMATIVE = {"on", "true", "yes", "1"}

NOT_PROVIDED = "Not provided"
NOT_SPECIFIED = "Not specified"
NONE_PROVIDED = "None provided"

SUCCESS_MESSAGE = "Application submitted successfully!"


def _value(form: Mapping[str, Any], name: str) -> str:
    raw = form.get(name)
    return str(raw).strip() if raw is not None else ""


def consent_given(form: Mapping[str, Any]) -> bool:
    return _value(form, "consent").lower() in AFFIRMATIVE


def validate_application(form: Mapping[str, Any], staged: Optional[StagedFile]) -> None:
    """Raise the first validation failure; performs no side effects."""
    for name in REQUIRED_FIELDS:
        if not _value(form, name):
            raise MissingRequiredField(
                name, "Please fill in all required fields and upload your resume."
            )
    for name in HEADER_FIELDS:
        if any(ch in _value(form, name) for ch in "\r\n"):
            raise InvalidFieldValue(name)
    if staged is None:
        raise FileRequired()
    if not consent_given(form):
        raise ConsentRequired()


def compose_notification(
    form: Mapping[str, Any],
    staged: StagedFile,
    sender: str,
    recipient: str,
    submitted_at: Optional[datetime] = None,
) -> EmailMessage:
    """Build the HR email listing every field, with placeholders for blanks."""
    first = _value(form, "firstName")
    last = _value(form, "lastName")
    position = _value(form, "position")
    submitted = (submitted_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

    def specified(name: str) -> str:
        return _value(form, name) or NOT_SPECIFIED

    body = "\n".join(
        [
            "New job application received from IT Talent Solution website:",
            "",
            "Personal Information:",
            f"- Name: {first} {last}",
            f"- Email: {_value(form, 'email')}",
            f"- Phone: {_value(form, 'phone') or NOT_PROVIDED}",
            "",
            "Professional Information:",
            f"- Position of Interest: {position or NOT_SPECIFIED}",
            f"- Years of Experience: {specified('experience')}",
            f"- Current Salary Range: {specified('currentSalary')}",
            f"- Preferred Location: {specified('location')}",
            f"- Industry Interest: {specified('industry')}",
            "",
            "Cover Letter / Additional Information:",
            _value(form, "coverLetter") or NONE_PROVIDED,
            "",
            f"Resume attached: {staged.original_name}",
            "",
            f"Consent given: {'Yes' if consent_given(form) else 'No'}",
            "",
            f"Submitted on: {submitted}",
        ]
    )

    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient
    message["Subject"] = f"New Job Application - {first} {last} ({position or 'General'})"
    message.set_content(body)

    maintype, _, subtype = (staged.mime_type or "application/octet-stream").partition("/")
    message.add_attachment(
        staged.path.read_bytes(),
        maintype=maintype,
        subtype=subtype or "octet-stream",
        filename=staged.original_name,
    )
    return message


class ApplicationIntake:
    """Runs one submitted application to Delivered or Rejected."""

    def __init__(
        self,
        channel: NotificationChannel,
        cleanup: CleanupScheduler,
        sender: str,
        recipient: str,
        cleanup_delay_seconds: float = 60,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.channel = channel
        self.cleanup = cleanup
        self.sender = sender
        self.recipient = recipient
        self.cleanup_delay_seconds = cleanup_delay_seconds
        self._clock = clock

    def submit(self, form: Mapping[str, Any], staged: Optional[StagedFile]) -> None:
        """Process an application whose resume (if any) is already staged.

        Whatever the outcome, a staged file gets exactly one scheduled
        deletion before this method returns or raises.
        """
        try:
            validate_application(form, staged)
            self._notify(form, staged)
        except AppError as exc:
            _LOGGER.info("Application rejected: %s", exc.reason)
            raise
        finally:
            if staged is not None:
                self.cleanup.schedule_deletion(staged.path, self.cleanup_delay_seconds)

    def _notify(self, form: Mapping[str, Any], staged: StagedFile) -> None:
        try:
            message = compose_notification(
                form, staged, self.sender, self.recipient, submitted_at=self._clock()
            )
        except OSError as exc:
            _LOGGER.error("Could not read staged resume %s: %s", staged.path, exc)
            raise InternalError() from exc

        try:
            self.channel.deliver(message)
        except DeliveryFailed:
            raise
        except Exception as exc:
            _LOGGER.exception("Notification channel raised unexpectedly")
            raise DeliveryFailed() from exc

        _LOGGER.info(
            "Application from %s %s forwarded to %s",
            _value(form, "firstName"),
            _value(form, "lastName"),
            self.recipient,
        )
