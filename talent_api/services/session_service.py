"""Session guard mapping opaque tokens to authenticated staff identities."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from talent_api.errors import InvalidCredentials, Unauthenticated
from talent_api.services.account_service import CredentialStore
from talent_api.utils.auth import SESSION_TTL_SECONDS, generate_token, now_seconds

_LOGGER = logging.getLogger(__name__)

SESSION_SHARDS = 16


@dataclass(frozen=True)
class Session:
    token: str
    account_id: int
    username: str
    email: str
    role: str
    created_at: int
    expires_at: int

    def user_dict(self) -> Dict[str, object]:
        """Public projection returned to clients."""
        return {
            "id": self.account_id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
        }


class SessionGuard:
    """In-memory session table with a fixed TTL counted from login.

    Tokens are spread over independently locked shards, so operations on
    tokens in different shards never wait for each other.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        ttl_seconds: int = SESSION_TTL_SECONDS,
        clock: Callable[[], int] = now_seconds,
        shards: int = SESSION_SHARDS,
    ) -> None:
        self._credentials = credentials
        self._ttl = ttl_seconds
        self._clock = clock
        self._shards: List[Tuple[threading.Lock, Dict[str, Session]]] = [
            (threading.Lock(), {}) for _ in range(max(shards, 1))
        ]

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def shard_for(self, token: str) -> Tuple[threading.Lock, Dict[str, Session]]:
        return self._shards[hash(token) % len(self._shards)]

    def login(self, identifier: str, password: str) -> Session:
        """Authenticate by username or email and open a new session."""
        account = self._credentials.verify(identifier, password)
        if account is None:
            _LOGGER.info("Rejected login attempt for %r", identifier)
            raise InvalidCredentials()

        issued = self._clock()
        session = Session(
            token=generate_token("sess"),
            account_id=account.id,
            username=account.username,
            email=account.email,
            role=account.role,
            created_at=issued,
            expires_at=issued + self._ttl,
        )
        lock, table = self.shard_for(session.token)
        with lock:
            table[session.token] = session
        _LOGGER.info("Opened session for %s (%s)", account.username, account.role)
        return session

    def validate(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        lock, table = self.shard_for(token)
        with lock:
            session = table.get(token)
            if session is None:
                return None
            if session.expires_at <= self._clock():
                table.pop(token, None)
                return None
            return session

    def destroy(self, token: Optional[str]) -> None:
        if not token:
            return
        lock, table = self.shard_for(token)
        with lock:
            session = table.pop(token, None)
        if session is not None:
            _LOGGER.info("Closed session for %s", session.username)

    def require_session(self, token: Optional[str]) -> Session:
        session = self.validate(token)
        if session is None:
            raise Unauthenticated()
        return session

    def prune_expired(self) -> int:
        """Drop every expired session and return how many were removed."""
        current = self._clock()
        removed = 0
        for lock, table in self._shards:
            with lock:
                stale = [token for token, session in table.items() if session.expires_at <= current]
                for token in stale:
                    table.pop(token, None)
            removed += len(stale)
        return removed

    def __len__(self) -> int:
        total = 0
        for lock, table in self._shards:
            with lock:
                total += len(table)
        return total
