"""Resume upload acceptance and staging to the temporary upload directory."""

from __future__ import annotations

import logging
import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from werkzeug.datastructures import FileStorage

from talent_api.errors import FileTooLarge, InternalError, UnsupportedFileType
from talent_api.utils.auth import now_millis

_LOGGER = logging.getLogger(__name__)

RESUME_FIELD = "resume"
CHUNK_SIZE = 64 * 1024

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx"}
ALLOWED_MIME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@dataclass(frozen=True)
class StagedFile:
    """A resume written to disk for the duration of one intake."""

    path: Path
    original_name: str
    mime_type: str
    size: int


def has_file(storage: Optional[FileStorage]) -> bool:
    return storage is not None and bool(storage.filename)


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def check_file_type(storage: FileStorage) -> None:
    """Require both an allowed extension and an allowed declared media type."""
    extension = file_extension(storage.filename)
    mime = (storage.mimetype or "").lower()
    if extension not in ALLOWED_EXTENSIONS or mime not in ALLOWED_MIME_TYPES:
        raise UnsupportedFileType()


def staged_filename(original_name: str) -> str:
    """Return a unique on-disk name that keeps the original extension."""
    return f"{RESUME_FIELD}-{now_millis()}-{secrets.randbelow(10**9)}{file_extension(original_name)}"


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError:
        _LOGGER.warning("Could not remove partial upload %s", path, exc_info=True)


def stage_upload(storage: FileStorage, upload_dir: str, max_bytes: int) -> StagedFile:
    """Validate and stream the upload to disk, enforcing the size ceiling.

    Raises UnsupportedFileType or FileTooLarge before the caller ever sees a
    staged file; a partially written file is removed on any failure.
    """
    check_file_type(storage)

    directory = Path(upload_dir)
    path = directory / staged_filename(storage.filename)
    written = 0
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as handle:
            while True:
                chunk = storage.stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise FileTooLarge()
                handle.write(chunk)
    except FileTooLarge:
        _discard(path)
        raise
    except OSError as exc:
        _discard(path)
        _LOGGER.error("Failed to stage upload %r: %s", storage.filename, exc)
        raise InternalError() from exc

    return StagedFile(
        path=path,
        original_name=storage.filename,
        mime_type=storage.mimetype,
        size=written,
    )
