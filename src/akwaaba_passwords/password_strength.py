"""Password strength validation and scoring."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from akwaaba_passwords.errors import WeakPasswordError
from akwaaba_passwords.patterns import DEFAULT_PATTERNS, PatternSet
from akwaaba_passwords.policy import MAX_SCORE, MIN_SCORE, PolicyLike, resolve_policy

# Length tiers; each one reached adds a point.
LENGTH_TIERS = (8, 12, 16)
MIN_REASONABLE_LENGTH = 8
RECOMMENDED_PASSWORD_LENGTH = 12
UNIQUE_CHAR_RATIO = 0.6

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_DIGIT_RE = re.compile(r"\d")
_SPECIAL_RE = re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]")
_SEQUENTIAL_RE = re.compile(r"123|abc|qwe|asd|zxc", re.IGNORECASE)
_REPEATED_RE = re.compile(r"(.)\1{2,}")
_KEYBOARD_RE = re.compile(r"qwerty|asdfg|zxcvb", re.IGNORECASE)

_LABELS = {
    0: "Very Weak",
    1: "Weak",
    2: "Fair",
    3: "Strong",
    4: "Very Strong",
}
_COLORS = {
    0: "text-red-600",
    1: "text-orange-600",
    2: "text-yellow-600",
    3: "text-blue-600",
    4: "text-green-600",
}
UNKNOWN_LABEL = "Unknown"
NEUTRAL_COLOR = "text-gray-600"


@dataclass(frozen=True)
class IdentityHint:
    """User details a password must not contain."""

    email: Optional[str] = None
    name: Optional[str] = None


IdentityLike = Union[IdentityHint, Mapping[str, Optional[str]], None]


@dataclass(frozen=True)
class StrengthRequirements:
    min_length: bool
    has_uppercase: bool
    has_lowercase: bool
    has_numbers: bool
    has_special_chars: bool
    no_common_patterns: bool
    no_personal_info: bool


@dataclass(frozen=True)
class StrengthResult:
    score: int  # 0-4
    feedback: tuple[str, ...]
    suggestions: tuple[str, ...]
    meets_requirements: bool
    requirements: StrengthRequirements

    @property
    def label(self) -> str:
        return strength_label(self.score)


@dataclass(frozen=True)
class _CharClasses:
    upper: bool
    lower: bool
    digit: bool
    special: bool

    @classmethod
    def of(cls, password: str) -> _CharClasses:
        return cls(
            upper=bool(_UPPER_RE.search(password)),
            lower=bool(_LOWER_RE.search(password)),
            digit=bool(_DIGIT_RE.search(password)),
            special=bool(_SPECIAL_RE.search(password)),
        )

    @property
    def variety(self) -> int:
        return sum([self.upper, self.lower, self.digit, self.special])


def _resolve_identity(identity: IdentityLike) -> Optional[IdentityHint]:
    if identity is None or isinstance(identity, IdentityHint):
        return identity
    return IdentityHint(email=identity.get("email"), name=identity.get("name"))


def contains_personal_info(password: str, identity: IdentityLike) -> bool:
    """Return True if the password embeds the user's email local-part or a name token."""
    hint = _resolve_identity(identity)
    if hint is None:
        return False

    lowered = password.lower()
    if hint.email:
        local_part = hint.email.lower().split("@")[0]
        if local_part and local_part in lowered:
            return True
    if hint.name:
        for part in hint.name.lower().split():
            if len(part) > 2 and part in lowered:
                return True
    return False


def calculate_score(password: str, patterns: PatternSet = DEFAULT_PATTERNS) -> int:
    """Score a password from 0 (very weak) to 4 (very strong)."""
    score = sum(1 for tier in LENGTH_TIERS if len(password) >= tier)

    variety = _CharClasses.of(password).variety
    if variety >= 3:
        score += 1
    if variety == 4:
        score += 1

    # An empty password has nothing to be unique about.
    if password and len(set(password)) >= len(password) * UNIQUE_CHAR_RATIO:
        score += 1

    if patterns.is_common_password(password):
        score = max(0, score - 2)
    if _SEQUENTIAL_RE.search(password):
        score = max(0, score - 1)
    if _REPEATED_RE.search(password):
        score = max(0, score - 1)
    if _KEYBOARD_RE.search(password):
        score = max(0, score - 1)

    return min(MAX_SCORE, max(MIN_SCORE, score))


def _feedback(password: str, score: int, classes: _CharClasses, is_common: bool) -> list[str]:
    feedback: list[str] = []

    if score <= 1:
        feedback.append("This password is very weak and easily guessable.")
    elif score <= 2:
        feedback.append("This password could be stronger.")

    if len(password) < MIN_REASONABLE_LENGTH:
        feedback.append(f"Password should be at least {MIN_REASONABLE_LENGTH} characters long.")
    elif len(password) < RECOMMENDED_PASSWORD_LENGTH:
        feedback.append(f"Consider using at least {RECOMMENDED_PASSWORD_LENGTH} characters for better security.")

    if not classes.upper:
        feedback.append("Add uppercase letters to increase strength.")
    if not classes.lower:
        feedback.append("Add lowercase letters to increase strength.")
    if not classes.digit:
        feedback.append("Include numbers to make the password stronger.")
    if not classes.special:
        feedback.append("Add special characters for enhanced security.")

    if is_common:
        feedback.append("This is a commonly used password. Choose something unique.")
    if _SEQUENTIAL_RE.search(password):
        feedback.append('Avoid sequential patterns like "123" or "abc".')
    if _REPEATED_RE.search(password):
        feedback.append("Avoid repeating the same character multiple times.")

    return feedback


def _suggestions(password: str, score: int, classes: _CharClasses, is_common: bool) -> list[str]:
    suggestions: list[str] = []

    if score < 3:
        suggestions.extend(
            [
                "Consider using a passphrase instead of a single word.",
                "Mix uppercase and lowercase letters randomly.",
                "Replace some letters with numbers or symbols.",
                "Avoid using personal information like names or birthdays.",
            ]
        )
    if len(password) < RECOMMENDED_PASSWORD_LENGTH:
        suggestions.append("Make your password longer by adding more characters.")
    if not classes.special:
        suggestions.append("Try substituting letters with similar-looking symbols (e.g., @ for a, 3 for e).")
    if is_common:
        suggestions.append("Think of a unique word or phrase that means something to you.")

    return suggestions


def evaluate_password(
    password: str,
    policy: PolicyLike = None,
    identity: IdentityLike = None,
    *,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> StrengthResult:
    """Evaluate *password* against *policy* and return a fresh result.

    *policy* may be a :class:`PasswordPolicy`, a mapping of partial overrides
    or ``None`` for the defaults. *identity* is an optional
    :class:`IdentityHint` (or ``{"email": ..., "name": ...}``) used to reject
    passwords built from the user's own details. Any string is accepted.
    """
    active = resolve_policy(policy)
    classes = _CharClasses.of(password)
    is_common = patterns.is_common_password(password)
    score = calculate_score(password, patterns)

    requirements = StrengthRequirements(
        min_length=len(password) >= active.min_length,
        has_uppercase=classes.upper,
        has_lowercase=classes.lower,
        has_numbers=classes.digit,
        has_special_chars=classes.special,
        no_common_patterns=not is_common and not patterns.matches_common_pattern(password),
        no_personal_info=not contains_personal_info(password, identity),
    )

    meets_requirements = (
        requirements.min_length
        and (not active.require_uppercase or requirements.has_uppercase)
        and (not active.require_lowercase or requirements.has_lowercase)
        and (not active.require_numbers or requirements.has_numbers)
        and (not active.require_special_chars or requirements.has_special_chars)
        and requirements.no_common_patterns
        and requirements.no_personal_info
        and score >= active.min_score
    )

    return StrengthResult(
        score=score,
        feedback=tuple(_feedback(password, score, classes, is_common)),
        suggestions=tuple(_suggestions(password, score, classes, is_common)),
        meets_requirements=meets_requirements,
        requirements=requirements,
    )


def is_acceptable(
    password: str,
    policy: PolicyLike = None,
    identity: IdentityLike = None,
    *,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> bool:
    return evaluate_password(password, policy, identity, patterns=patterns).meets_requirements


def validate_password(
    password: str,
    policy: PolicyLike = None,
    identity: IdentityLike = None,
    *,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> StrengthResult:
    """Evaluate *password* and raise :exc:`WeakPasswordError` if it is not acceptable."""
    result = evaluate_password(password, policy, identity, patterns=patterns)
    if not result.meets_requirements:
        raise WeakPasswordError(result)
    return result


def strength_label(score: int) -> str:
    return _LABELS.get(score, UNKNOWN_LABEL)


def strength_color(score: int) -> str:
    """Return the presentation color token for a score."""
    return _COLORS.get(score, NEUTRAL_COLOR)
