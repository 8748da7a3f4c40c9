"""Deferred deletion of staged upload files."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Set, Union

from apscheduler.schedulers.background import BackgroundScheduler

_LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def remove_file(path: PathLike) -> bool:
    """Delete a staged file; failures are logged and never raised."""
    try:
        Path(path).unlink()
    except OSError as exc:
        _LOGGER.error("Error deleting file %s: %s", path, exc)
        return False
    _LOGGER.info("Deleted staged file %s", path)
    return True


class CleanupScheduler:
    """Fire-and-forget file deletions run on a background scheduler thread."""

    def __init__(self, scheduler: Optional[BackgroundScheduler] = None) -> None:
        self._scheduler = scheduler or BackgroundScheduler(daemon=True)
        self._pending: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()
            _LOGGER.info("Cleanup scheduler started")

    def schedule_deletion(self, path: PathLike, delay_seconds: float) -> str:
        """Queue one deletion of ``path`` after ``delay_seconds``; returns the job id."""
        key = str(path)
        run_date = datetime.now() + timedelta(seconds=max(delay_seconds, 0))
        with self._lock:
            self._pending.add(key)
        job = self._scheduler.add_job(
            self._run_deletion,
            "date",
            run_date=run_date,
            args=[key],
            id=f"cleanup:{key}",
            misfire_grace_time=None,
            replace_existing=False,
        )
        return job.id

    def pending(self) -> Set[str]:
        with self._lock:
            return set(self._pending)

    def _run_deletion(self, key: str) -> None:
        with self._lock:
            self._pending.discard(key)
        remove_file(key)

    def shutdown(self) -> None:
        """Stop the scheduler and remove files whose deletion had not run yet."""
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        with self._lock:
            leftovers, self._pending = self._pending, set()
        for key in leftovers:
            remove_file(key)
