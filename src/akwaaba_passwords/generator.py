"""Secure random password generation."""
from __future__ import annotations

import logging
import secrets
import string

logger = logging.getLogger(__name__)

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
CHARSET = UPPERCASE + LOWERCASE + DIGITS + SYMBOLS

DEFAULT_GENERATED_LENGTH = 16
# One guaranteed character per class.
MIN_GENERATED_LENGTH = 4

_rng = secrets.SystemRandom()


def generate_secure_password(length: int = DEFAULT_GENERATED_LENGTH) -> str:
    """Generate a random password containing every character class.

    Lengths below :data:`MIN_GENERATED_LENGTH` are raised to it, so the
    result always holds an uppercase letter, a lowercase letter, a digit
    and a symbol.
    """
    if length < MIN_GENERATED_LENGTH:
        logger.debug("Requested length %d is below %d, raising it", length, MIN_GENERATED_LENGTH)
        length = MIN_GENERATED_LENGTH

    chars = [secrets.choice(group) for group in (UPPERCASE, LOWERCASE, DIGITS, SYMBOLS)]
    chars.extend(secrets.choice(CHARSET) for _ in range(length - len(chars)))
    _rng.shuffle(chars)
    return "".join(chars)
