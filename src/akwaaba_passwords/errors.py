"""Custom exceptions for Akwaaba Passwords."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from akwaaba_passwords.password_strength import StrengthResult


class AkwaabaPasswordError(Exception):
    """Base exception for Akwaaba Passwords."""


class PolicyError(AkwaabaPasswordError, ValueError):
    """Password policy configuration is invalid."""


class WeakPasswordError(AkwaabaPasswordError, ValueError):
    """Raised when a password does not satisfy the active policy."""

    def __init__(self, result: StrengthResult) -> None:
        self.result = result
        self.feedback = list(result.feedback)
        super().__init__("; ".join(self.feedback) or "Password does not meet policy requirements")


class PasswordReuseError(AkwaabaPasswordError):
    """Password matches one of the recently used passwords."""
