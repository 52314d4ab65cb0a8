"""Known-weak passwords and patterns used by the strength evaluator."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Union

PatternLike = Union[str, re.Pattern[str]]

# Checked case-insensitively: entries are stored lowercase and the candidate
# password is lowercased before lookup.
_COMMON_PASSWORDS: frozenset[str] = frozenset(
    {
        "password", "123456", "123456789", "qwerty", "abc123", "password123",
        "admin", "letmein", "welcome", "monkey", "dragon", "master", "sunshine",
        "princess", "qwertyuiop", "admin123", "welcome123", "login", "passw0rd",
        "111111", "123123", "password1", "12345678", "qwerty123", "1234567890",
        "1234567", "qwertyui", "555555", "lovely", "hello123", "freedom",
        "whatever", "qazwsx", "trustno1", "jordan", "harley", "hunter", "buster",
        "thomas", "tigger", "robert", "soccer", "batman", "test", "pass", "123",
        "guest", "info", "adm", "mysql", "user", "administrator", "root", "demo",
        "test123", "guest123",
    }
)

# Anchored at the start of the password; only the word patterns ignore case.
_COMMON_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^12345"),
    re.compile(r"^qwert"),
    re.compile(r"^asdfg"),
    re.compile(r"^zxcvb"),
    re.compile(r"^password", re.IGNORECASE),
    re.compile(r"^admin", re.IGNORECASE),
    re.compile(r"^test", re.IGNORECASE),
    re.compile(r"^demo", re.IGNORECASE),
    re.compile(r"^guest", re.IGNORECASE),
    re.compile(r"^user", re.IGNORECASE),
    re.compile(r"^root", re.IGNORECASE),
    re.compile(r"^123456"),
    re.compile(r"^abcdef"),
    re.compile(r"^qwerty"),
    re.compile(r"^asdfgh"),
    re.compile(r"^zxcvbn"),
    re.compile(r"^123123"),
    re.compile(r"^111111"),
    re.compile(r"^000000"),
    re.compile(r"^999999"),
    re.compile(r"^888888"),
    re.compile(r"^777777"),
    re.compile(r"^666666"),
    re.compile(r"^555555"),
    re.compile(r"^444444"),
    re.compile(r"^333333"),
    re.compile(r"^222222"),
)


def _compile(pattern: PatternLike) -> re.Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


@dataclass(frozen=True)
class PatternSet:
    """Denylist and anchored patterns a password must avoid.

    Instances are immutable and safe to share between threads. Build custom
    sets with :meth:`from_iterables` or grow the defaults with :meth:`extend`.
    """

    common_passwords: frozenset[str]
    common_patterns: tuple[re.Pattern[str], ...]

    @classmethod
    def from_iterables(
        cls,
        passwords: Iterable[str] = (),
        patterns: Iterable[PatternLike] = (),
    ) -> PatternSet:
        return cls(
            common_passwords=frozenset(p.lower() for p in passwords),
            common_patterns=tuple(_compile(p) for p in patterns),
        )

    def extend(
        self,
        passwords: Iterable[str] = (),
        patterns: Iterable[PatternLike] = (),
    ) -> PatternSet:
        """Return a new set with extra denylist entries and patterns."""
        extra = PatternSet.from_iterables(passwords, patterns)
        return PatternSet(
            common_passwords=self.common_passwords | extra.common_passwords,
            common_patterns=self.common_patterns + extra.common_patterns,
        )

    def is_common_password(self, password: str) -> bool:
        return password.lower() in self.common_passwords

    def matches_common_pattern(self, password: str) -> bool:
        return any(pattern.search(password) for pattern in self.common_patterns)


DEFAULT_PATTERNS = PatternSet(
    common_passwords=_COMMON_PASSWORDS,
    common_patterns=_COMMON_PATTERNS,
)
