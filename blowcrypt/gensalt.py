"""Salt generation for the traditional, extended and MD5-based crypt(3) schemes."""

from __future__ import annotations

from .blowfish import CryptError

CRYPT_ITOA64 = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
"""Alphabet of the traditional crypt(3) base-64 encoding."""


def _encode24(value: int) -> str:
    return "".join(CRYPT_ITOA64[(value >> shift) & 0x3F] for shift in (0, 6, 12, 18))


def gensalt_traditional(prefix: str, count: int, data: bytes) -> str:
    """Return a two-character DES salt from two input bytes; count must be 0 or 25."""
    if len(data) < 2 or (count and count != 25):
        raise CryptError("invalid count or input for a traditional salt")
    return CRYPT_ITOA64[data[0] & 0x3F] + CRYPT_ITOA64[data[1] & 0x3F]


def gensalt_extended(prefix: str, count: int, data: bytes) -> str:
    """Return an extended DES setting; count must be odd and below 2**24 (0 means 725)."""
    if len(data) < 3 or count < 0 or (count and (count > 0xFFFFFF or not count & 1)):
        raise CryptError("invalid count or input for an extended salt")
    count = count or 725
    return "_" + _encode24(count) + _encode24(int.from_bytes(data[:3], "little"))


def gensalt_md5(prefix: str, count: int, data: bytes) -> str:
    """Return an MD5 setting with 4 salt characters, or 8 given six input bytes."""
    if len(data) < 3 or (count and count != 1000):
        raise CryptError("invalid count or input for an MD5 salt")
    salt = "$1$" + _encode24(int.from_bytes(data[:3], "little"))
    if len(data) >= 6:
        salt += _encode24(int.from_bytes(data[3:6], "little"))
    return salt