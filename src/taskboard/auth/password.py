"""Password hashing utilities.

bcrypt with a per-hash random salt. The work factor comes from
settings.bcrypt_rounds (12 by default, ~100ms per hash). Passwords
are truncated to 72 bytes, bcrypt's input limit.

dummy_hash() gives login a hash to check against when the email is
unknown, so both failure paths cost one bcrypt verification.
"""

from functools import lru_cache

import bcrypt

from taskboard.config import settings


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash. Malformed hashes never match."""
    try:
        pw_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def dummy_hash() -> str:
    """A valid hash at the current work factor that no real password matches."""
    return _dummy_hash(settings.bcrypt_rounds)


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    return bcrypt.hashpw(b"taskboard-no-such-user", bcrypt.gensalt(rounds=rounds)).decode("utf-8")
