"""Outbound notification channel used to forward job applications."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Any, Mapping, Optional

from talent_api.errors import DeliveryFailed

_LOGGER = logging.getLogger(__name__)


class NotificationChannel:
    """Deliver a composed email exactly once; raise DeliveryFailed on error."""

    def deliver(self, message: EmailMessage) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class ConsoleChannel(NotificationChannel):
    """Development backend that logs messages instead of sending them."""

    def deliver(self, message: EmailMessage) -> None:
        attachments = [part.get_filename() for part in message.iter_attachments()]
        _LOGGER.info(
            "Email to %s | subject=%s | attachments=%s\n%s",
            message["To"],
            message["Subject"],
            attachments,
            message.get_body(preferencelist=("plain",)).get_content(),
        )


class SMTPChannel(NotificationChannel):
    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: int = 30,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def deliver(self, message: EmailMessage) -> None:
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            _LOGGER.error("SMTP delivery to %s failed: %s", message["To"], exc)
            raise DeliveryFailed() from exc
        _LOGGER.info("Delivered email %r to %s", message["Subject"], message["To"])


def channel_from_config(config: Mapping[str, Any]) -> NotificationChannel:
    """Build the notification backend named by ``MAIL_BACKEND``."""
    backend = config.get("MAIL_BACKEND", "console")
    if backend == "smtp":
        return SMTPChannel(
            host=config["MAIL_SERVER"],
            port=config["MAIL_PORT"],
            username=config.get("MAIL_USERNAME"),
            password=config.get("MAIL_PASSWORD"),
            use_tls=config.get("MAIL_USE_TLS", True),
            timeout=config.get("MAIL_TIMEOUT", 30),
        )
    if backend == "console":
        return ConsoleChannel()
    raise ValueError(f"Unknown MAIL_BACKEND {backend!r}")
