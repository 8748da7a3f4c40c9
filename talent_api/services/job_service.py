"""Append-only in-memory registry of job postings."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from talent_api.errors import MissingRequiredField
from talent_api.services.session_service import Session

_LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "company", "location", "description")
OPTIONAL_FIELDS = ("salary", "jobType", "experience", "skills", "requirements")

# Postings shown on the site before anyone logs in.
DEMO_JOBS = (
    {"title": "Chief Technology Officer", "company": "FinTech Innovations", "location": "New York, NY", "salary": "$250k - $350k", "postedBy": "admin"},
    {"title": "VP of Engineering", "company": "HealthTech Solutions", "location": "San Francisco, CA", "salary": "$200k - $280k", "postedBy": "admin"},
    {"title": "Senior Software Engineer", "company": "TechCorp Inc.", "location": "San Francisco, CA", "salary": "$120k - $160k", "postedBy": "hr"},
    {"title": "Marketing Director", "company": "Growth Solutions", "location": "New York, NY", "salary": "$100k - $140k", "postedBy": "hr"},
    {"title": "Financial Analyst", "company": "InvestPro", "location": "Chicago, IL", "salary": "$80k - $110k", "postedBy": "admin"},
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip()


@dataclass(frozen=True)
class JobPosting:
    id: int
    title: str
    company: str
    location: str
    posted_by: str
    posted_date: datetime
    salary: Optional[str] = None
    job_type: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    status: str = "active"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "salary": self.salary,
            "jobType": self.job_type,
            "experience": self.experience,
            "skills": self.skills,
            "description": self.description,
            "requirements": self.requirements,
            "postedBy": self.posted_by,
            "postedDate": self.posted_date.isoformat(),
            "status": self.status,
        }


class JobRegistry:
    """Ordered postings with identifiers assigned under a single lock."""

    def __init__(self, seed: Iterable[Mapping[str, Any]] = (), clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._jobs: List[JobPosting] = []
        self._next_id = 1
        self._lock = threading.Lock()
        for entry in seed:
            self._append(entry, posted_by=entry["postedBy"])

    def list(self) -> List[JobPosting]:
        with self._lock:
            return list(self._jobs)

    def create(self, session: Session, fields: Mapping[str, Any]) -> JobPosting:
        """Validate and append a posting attributed to the session's user."""
        for name in REQUIRED_FIELDS:
            if not _clean(fields.get(name)):
                raise MissingRequiredField(name)

        with self._lock:
            job = self._append(fields, posted_by=session.username)
        _LOGGER.info("Job %s (%s) posted by %s", job.id, job.title, job.posted_by)
        return job

    def _append(self, fields: Mapping[str, Any], posted_by: str) -> JobPosting:
        job = JobPosting(
            id=self._next_id,
            title=_clean(fields.get("title")),
            company=_clean(fields.get("company")),
            location=_clean(fields.get("location")),
            salary=_clean(fields.get("salary")),
            job_type=_clean(fields.get("jobType")),
            experience=_clean(fields.get("experience")),
            skills=_clean(fields.get("skills")),
            description=_clean(fields.get("description")),
            requirements=_clean(fields.get("requirements")),
            posted_by=posted_by,
            posted_date=self._clock(),
        )
        self._jobs.append(job)
        self._next_id += 1
        return job

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
