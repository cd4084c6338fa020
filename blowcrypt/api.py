"""High-level bcrypt helpers: salt generation, hashing and verification."""

from __future__ import annotations

import hmac
import os

from .blowfish import SALT_BYTES, CryptError
from .crypt import crypt_gensalt, crypt_rn

DEFAULT_WORK_FACTOR = 12
"""Work factor used when none is given or the given one is out of range."""

MIN_WORK_FACTOR = 4
MAX_WORK_FACTOR = 31


class BcryptError(RuntimeError):
    """Raised when a salt or a hash cannot be produced."""


def gensalt(factor: int = DEFAULT_WORK_FACTOR) -> str:
    """Return a fresh "$2a$" setting with the given work factor.

    Factors outside 4..31 fall back to 12.
    """
    try:
        data = os.urandom(SALT_BYTES)
    except OSError as exc:
        raise BcryptError("bcrypt: can not generate salt") from exc
    if not MIN_WORK_FACTOR <= factor <= MAX_WORK_FACTOR:
        factor = DEFAULT_WORK_FACTOR
    try:
        return crypt_gensalt("$2a$", factor, data)
    except CryptError as exc:
        raise BcryptError("bcrypt: can not generate salt") from exc


def hashpw(password: str | bytes, salt: str | bytes) -> str:
    """Hash ``password`` with a setting or an existing hash used as the salt."""
    try:
        return crypt_rn(password, salt)
    except CryptError as exc:
        raise BcryptError("bcrypt: can not generate hash") from exc


def _as_bytes(text: str | bytes) -> bytes:
    return text.encode("latin-1") if isinstance(text, str) else bytes(text)


def checkpw(password: str | bytes, hashed: str | bytes) -> bool:
    """Tell whether ``password`` matches ``hashed``, comparing in constant time.

    Raises BcryptError when ``hashed`` is not a usable bcrypt hash.
    """
    computed = hashpw(password, hashed)
    return hmac.compare_digest(_as_bytes(hashed), _as_bytes(computed))


def generate_hash(password: str | bytes, workload: int = DEFAULT_WORK_FACTOR) -> str:
    """Hash ``password`` with a freshly generated salt of the given work factor."""
    return hashpw(password, gensalt(workload))


def validate_password(password: str | bytes, hashed: str | bytes) -> bool:
    """Return True only if ``password`` matches ``hashed``; errors count as a mismatch."""
    try:
        return checkpw(password, hashed)
    except BcryptError:
        return False