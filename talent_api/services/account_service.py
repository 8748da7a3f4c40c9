"""Fixed staff accounts with salted password hashes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from werkzeug.security import check_password_hash, generate_password_hash

ROLES = ("admin", "hr")

# (username, email, password, role)
DEFAULT_ACCOUNTS: Tuple[Tuple[str, str, str, str], ...] = (
    ("admin", "admin@ittalentsolution.com", "admin123", "admin"),
    ("hr", "hr@ittalentsolution.com", "hr123", "hr"),
)


@dataclass(frozen=True)
class Account:
    id: int
    username: str
    email: str
    password_hash: str
    role: str

    def public_dict(self) -> Dict[str, object]:
        return {"id": self.id, "username": self.username, "email": self.email, "role": self.role}


class CredentialStore:
    """Read-only lookup of staff accounts by username or email."""

    def __init__(self, accounts: Iterable[Account]) -> None:
        self._accounts: List[Account] = list(accounts)
        for account in self._accounts:
            if account.role not in ROLES:
                raise ValueError(f"Unknown role {account.role!r} for {account.username}")
        # Verified against when the identifier is unknown so both paths hash once.
        self._dummy_hash = generate_password_hash("not-a-real-password")

    @classmethod
    def from_plaintext(cls, entries: Iterable[Tuple[str, str, str, str]]) -> "CredentialStore":
        """Hash plaintext seed credentials at startup."""
        accounts = [
            Account(
                id=index,
                username=username,
                email=email,
                password_hash=generate_password_hash(password),
                role=role,
            )
            for index, (username, email, password, role) in enumerate(entries, start=1)
        ]
        return cls(accounts)

    def find(self, identifier: str) -> Optional[Account]:
        for account in self._accounts:
            if account.username == identifier or account.email == identifier:
                return account
        return None

    def verify(self, identifier: str, password: str) -> Optional[Account]:
        """Return the matching account when the password checks out."""
        account = self.find(identifier) if identifier else None
        if account is None:
            check_password_hash(self._dummy_hash, password or "")
            return None
        if not check_password_hash(account.password_hash, password or ""):
            return None
        return account
