"""Akwaaba Passwords package."""

from importlib.metadata import PackageNotFoundError, version

from akwaaba_passwords.generator import generate_secure_password
from akwaaba_passwords.password_strength import (
    IdentityHint,
    StrengthRequirements,
    StrengthResult,
    evaluate_password,
    is_acceptable,
    strength_color,
    strength_label,
    validate_password,
)
from akwaaba_passwords.patterns import DEFAULT_PATTERNS, PatternSet
from akwaaba_passwords.policy import DEFAULT_POLICY, PasswordPolicy, load_policy, resolve_policy

__all__ = [
    "DEFAULT_PATTERNS",
    "DEFAULT_POLICY",
    "IdentityHint",
    "PasswordPolicy",
    "PatternSet",
    "StrengthRequirements",
    "StrengthResult",
    "__version__",
    "evaluate_password",
    "generate_secure_password",
    "is_acceptable",
    "load_policy",
    "resolve_policy",
    "strength_color",
    "strength_label",
    "validate_password",
]

try:
    __version__ = version("akwaaba-passwords")
except PackageNotFoundError:  # pragma: no cover - happens only from source checkout
    __version__ = "0.0.0-dev"
