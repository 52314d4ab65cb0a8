"""Password rotation: maximum age and reuse prevention.

Former passwords are never kept in clear text. Each one is remembered as a
salted Argon2id fingerprint (see :mod:`akwaaba_passwords.kdf`), and a
candidate is checked by re-deriving it with every stored salt.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterator, Optional

from cryptography.hazmat.primitives import constant_time

from akwaaba_passwords.errors import PasswordReuseError
from akwaaba_passwords.kdf import Argon2Params, fingerprint_password, new_salt
from akwaaba_passwords.policy import PolicyLike, resolve_policy

logger = logging.getLogger(__name__)

# Upper bound on remembered fingerprints when the caller gives no limit.
DEFAULT_HISTORY_LIMIT = 24


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def password_expired(
    changed_at: datetime,
    policy: PolicyLike = None,
    *,
    now: Optional[datetime] = None,
) -> bool:
    """Return True once a password set at *changed_at* has reached the policy's maximum age.

    Naive datetimes are treated as UTC. A policy without ``max_age_days``
    never expires passwords; a maximum age of 0 expires them at once.
    """
    active = resolve_policy(policy)
    if active.max_age_days is None:
        return False
    current = _as_aware(now or _utcnow())
    return current - _as_aware(changed_at) >= timedelta(days=active.max_age_days)


def days_until_expiry(
    changed_at: datetime,
    policy: PolicyLike = None,
    *,
    now: Optional[datetime] = None,
) -> Optional[int]:
    active = resolve_policy(policy)
    if active.max_age_days is None:
        return None
    current = _as_aware(now or _utcnow())
    expires_at = _as_aware(changed_at) + timedelta(days=active.max_age_days)
    return max(0, (expires_at - current).days)


@dataclass(frozen=True)
class HistoryEntry:
    salt: bytes
    fingerprint: bytes
    created_at: datetime

    def matches(self, password: str, params: Argon2Params) -> bool:
        candidate = fingerprint_password(password, self.salt, params)
        return constant_time.bytes_eq(candidate, self.fingerprint)


@dataclass
class PasswordHistory:
    """Most recent password fingerprints for one account, newest last.

    Not thread-safe; callers serialize access per account.
    """

    limit: int = DEFAULT_HISTORY_LIMIT
    params: Argon2Params = field(default_factory=Argon2Params)
    _entries: deque[HistoryEntry] = field(default_factory=deque, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise ValueError(f"History limit must be positive, got {self.limit}")
        self._entries = deque(maxlen=self.limit)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def remember(self, password: str, *, at: Optional[datetime] = None) -> HistoryEntry:
        salt = new_salt()
        entry = HistoryEntry(
            salt=salt,
            fingerprint=fingerprint_password(password, salt, self.params),
            created_at=_as_aware(at or _utcnow()),
        )
        if len(self._entries) == self.limit:
            logger.debug("Password history full (%d), dropping oldest fingerprint", self.limit)
        self._entries.append(entry)
        return entry

    def contains(self, password: str, *, last: Optional[int] = None) -> bool:
        """Return True if *password* is among the *last* remembered passwords (all when ``None``)."""
        entries = list(self._entries)
        if last is not None:
            if last <= 0:
                return False
            entries = entries[-last:]
        return any(entry.matches(password, self.params) for entry in entries)


def check_reuse(password: str, history: PasswordHistory, policy: PolicyLike = None) -> bool:
    """Return True if *password* repeats one of the passwords the policy forbids reusing."""
    active = resolve_policy(policy)
    if not active.prevent_reuse:
        return False
    return history.contains(password, last=active.prevent_reuse)


def ensure_not_reused(password: str, history: PasswordHistory, policy: PolicyLike = None) -> None:
    if check_reuse(password, history, policy):
        active = resolve_policy(policy)
        raise PasswordReuseError(f"Password matches one of the last {active.prevent_reuse} passwords")
