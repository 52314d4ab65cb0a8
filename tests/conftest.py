import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

from akwaaba_passwords.kdf import Argon2Params  # noqa: E402
from akwaaba_passwords.rotation import PasswordHistory  # noqa: E402


@pytest.fixture
def fast_params() -> Argon2Params:
    # Minimum Argon2id cost keeps the suite fast.
    return Argon2Params(mem_cost_kib=8, time_cost=1, parallelism=1)


@pytest.fixture
def history(fast_params: Argon2Params) -> PasswordHistory:
    return PasswordHistory(limit=10, params=fast_params)
