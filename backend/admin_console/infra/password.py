"""Argon2id hashing for console user passwords.

Only hashes reach the ``users.password`` column: user creation, password
updates and seeding all call :func:`hash_password`.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

# 64 MiB memory, 3 passes, 4 lanes.
_HASHER = PasswordHasher(time_cost=3, memory_cost=64 * 1024, parallelism=4)


def hash_password(plaintext: str) -> str:
    return _HASHER.hash(plaintext)


def verify_password(stored_hash: str, plaintext: str) -> bool:
    """True when ``plaintext`` matches ``stored_hash``; malformed hashes never match."""
    try:
        return _HASHER.verify(stored_hash, plaintext)
    except (VerificationError, InvalidHashError):
        return False
