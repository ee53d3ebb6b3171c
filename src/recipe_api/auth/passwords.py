"""Password hashing with bcrypt.

bcrypt is CPU bound, so the async helpers push the work to a thread and
keep the event loop responsive.
"""

from __future__ import annotations

import asyncio

import bcrypt


DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    """UTF-8 encode ``password`` and cut it to what bcrypt accepts."""
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return a salted bcrypt hash of ``password``.

    Passwords longer than 72 bytes are truncated, here and in
    ``verify_password`` alike.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against a stored bcrypt hash.

    Malformed hashes count as a mismatch.
    """
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        return False


async def hash_password_async(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return await asyncio.to_thread(hash_password, password, rounds)


async def verify_password_async(password: str, hashed: str) -> bool:
    return await asyncio.to_thread(verify_password, password, hashed)
