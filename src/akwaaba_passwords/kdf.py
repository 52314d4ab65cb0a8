"""Password fingerprints using Argon2id."""

from __future__ import annotations

import os
from dataclasses import dataclass

from argon2.low_level import Type, hash_secret_raw

DEFAULT_MEM_COST_KIB = 64 * 1024  # 64 MiB
DEFAULT_TIME_COST = 3
DEFAULT_PARALLELISM = 1
FINGERPRINT_LEN = 32
SALT_LEN = 16


@dataclass(frozen=True)
class Argon2Params:
    mem_cost_kib: int = DEFAULT_MEM_COST_KIB
    time_cost: int = DEFAULT_TIME_COST
    parallelism: int = DEFAULT_PARALLELISM


def new_salt() -> bytes:
    return os.urandom(SALT_LEN)


def fingerprint_password(password: str, salt: bytes, params: Argon2Params) -> bytes:
    """Derive a 256-bit fingerprint of *password* using Argon2id."""

    if len(salt) != SALT_LEN:
        raise ValueError(f"Salt must be {SALT_LEN} bytes long, got {len(salt)}")

    return hash_secret_raw(
        secret=password.encode("utf-8", "surrogatepass"),
        salt=salt,
        time_cost=params.time_cost,
        memory_cost=params.mem_cost_kib,
        parallelism=params.parallelism,
        hash_len=FINGERPRINT_LEN,
        type=Type.ID,
        version=19,
    )
