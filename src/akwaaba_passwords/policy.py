"""Password policy definition and loading."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from akwaaba_passwords.errors import PolicyError

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 4

_FLAG_FIELDS = ("require_uppercase", "require_lowercase", "require_numbers", "require_special_chars")
_COUNT_FIELDS = ("min_length", "min_score", "max_age_days", "prevent_reuse")
_OPTIONAL_FIELDS = ("max_age_days", "prevent_reuse")


@dataclass(frozen=True)
class PasswordPolicy:
    min_length: int = 12
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numbers: bool = True
    require_special_chars: bool = True
    min_score: int = 3  # "Strong"
    max_age_days: Optional[int] = 90
    prevent_reuse: Optional[int] = 5

    def __post_init__(self) -> None:
        for name in _FLAG_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise PolicyError(f"{name} must be true or false, got {value!r}")
        for name in _COUNT_FIELDS:
            value = getattr(self, name)
            if value is None and name in _OPTIONAL_FIELDS:
                continue
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                raise PolicyError(f"{name} must be an integer, got {value!r}")
        if self.min_length < 0:
            raise PolicyError(f"min_length must be non-negative, got {self.min_length}")
        if not MIN_SCORE <= self.min_score <= MAX_SCORE:
            raise PolicyError(f"min_score must be between {MIN_SCORE} and {MAX_SCORE}, got {self.min_score}")
        if self.max_age_days is not None and self.max_age_days < 0:
            raise PolicyError(f"max_age_days must be non-negative, got {self.max_age_days}")
        if self.prevent_reuse is not None and self.prevent_reuse < 0:
            raise PolicyError(f"prevent_reuse must be non-negative, got {self.prevent_reuse}")


DEFAULT_POLICY = PasswordPolicy()

PolicyLike = Union[PasswordPolicy, Mapping[str, Any], None]

# Keys used by the web front end's JSON policy documents.
_CAMEL_CASE_ALIASES = {
    "minLength": "min_length",
    "requireUppercase": "require_uppercase",
    "requireLowercase": "require_lowercase",
    "requireNumbers": "require_numbers",
    "requireSpecialChars": "require_special_chars",
    "minScore": "min_score",
    "maxAge": "max_age_days",
    "preventReuse": "prevent_reuse",
}

_FIELD_NAMES = frozenset(f.name for f in fields(PasswordPolicy))


def _normalize_overrides(overrides: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    unknown: list[str] = []
    seen: dict[str, str] = {}
    for key, value in overrides.items():
        name = _CAMEL_CASE_ALIASES.get(key, key)
        if name not in _FIELD_NAMES:
            unknown.append(str(key))
            continue
        if name in seen:
            raise PolicyError(f"Policy field {name} given twice (as {seen[name]} and {key})")
        seen[name] = key
        # Missing values fall back to the defaults one field at a time.
        if value is None and name not in _OPTIONAL_FIELDS:
            continue
        normalized[name] = value
    if unknown:
        raise PolicyError(f"Unknown policy field(s): {', '.join(sorted(unknown))}")
    return normalized


def resolve_policy(policy: PolicyLike = None, *, base: PasswordPolicy = DEFAULT_POLICY) -> PasswordPolicy:
    """Return a complete policy from *policy*.

    ``None`` yields *base*, a :class:`PasswordPolicy` is returned unchanged
    and a mapping of partial overrides is merged field by field over *base*.
    """
    if policy is None:
        return base
    if isinstance(policy, PasswordPolicy):
        return policy
    if not isinstance(policy, Mapping):
        raise PolicyError(f"Unsupported policy type: {type(policy).__name__}")
    try:
        return replace(base, **_normalize_overrides(policy))
    except TypeError as exc:
        raise PolicyError(str(exc)) from exc


def load_policy(path: Union[str, Path], *, base: PasswordPolicy = DEFAULT_POLICY) -> PasswordPolicy:
    """Load a (possibly partial) policy from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PolicyError(f"Policy file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise PolicyError(f"Policy file {path} must contain a JSON object")

    policy = resolve_policy(data, base=base)
    logger.debug("Loaded password policy from %s (%d override(s))", path, len(data))
    return policy


def policy_as_dict(policy: PasswordPolicy) -> dict[str, Any]:
    return {f.name: getattr(policy, f.name) for f in fields(policy)}
