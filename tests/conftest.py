"""Shared pytest fixtures for an isolated application instance."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import List, Tuple

import pytest

# Ensure the application package is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from talent_api.errors import DeliveryFailed  # noqa: E402
from talent_api.main import create_app  # noqa: E402
from talent_api.services.cleanup_service import CleanupScheduler  # noqa: E402
from talent_api.services.mail_service import NotificationChannel  # noqa: E402

MB = 1024 * 1024


class RecordingChannel(NotificationChannel):
    """Keeps every delivered message; optionally fails each delivery."""

    def __init__(self, error: Exception = None) -> None:
        self.messages = []
        self.error = error

    def deliver(self, message) -> None:
        self.messages.append(message)
        if self.error is not None:
            raise self.error


class RecordingCleanup(CleanupScheduler):
    """Records scheduled deletions instead of running them."""

    def __init__(self) -> None:
        super().__init__()
        self.scheduled: List[Tuple[Path, float]] = []

    def schedule_deletion(self, path, delay_seconds):
        self.scheduled.append((Path(path), delay_seconds))
        return f"cleanup:{path}"


@pytest.fixture
def notifier() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def failing_notifier() -> RecordingChannel:
    return RecordingChannel(error=DeliveryFailed())


@pytest.fixture
def cleanup() -> RecordingCleanup:
    return RecordingCleanup()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "public"
    directory.mkdir()
    (directory / "post-job.html").write_text("<h1>Post a job</h1>", encoding="utf-8")
    return directory


@pytest.fixture
def make_app(upload_dir: Path, public_dir: Path, cleanup: RecordingCleanup):
    def _make(notifier: NotificationChannel, **overrides):
        config = {
            "TESTING": True,
            "UPLOAD_DIR": str(upload_dir),
            "PUBLIC_DIR": str(public_dir),
            "MAIL_BACKEND": "console",
            "SEED_DEMO_JOBS": True,
        }
        config.update(overrides)
        return create_app(config, notifier=notifier, cleanup=cleanup)

    return _make


@pytest.fixture
def app(make_app, notifier: RecordingChannel):
    return make_app(notifier)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def hr_client(client):
    response = client.post("/login", json={"username": "hr", "password": "hr123"})
    assert response.status_code == 200
    return client


def resume_file(size: int = 2 * MB, name: str = "resume.pdf", mime: str = "application/pdf"):
    """Return a (stream, filename, content_type) tuple for multipart uploads."""
    return (io.BytesIO(b"%PDF-1.4\n" + b"0" * max(size - 9, 0)), name, mime)


def application_form(**overrides):
    form = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "phone": "555-0100",
        "position": "Data Engineer",
        "consent": "on",
    }
    form.update(overrides)
    return {key: value for key, value in form.items() if value is not None}
