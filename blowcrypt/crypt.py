"""crypt(3)-style entry points: hashing with failure tokens and salt generation by prefix."""

from __future__ import annotations

from collections.abc import Callable

from .blowfish import CryptError, crypt_blowfish, gensalt_blowfish, output_magic
from .gensalt import (
    CRYPT_ITOA64,
    gensalt_extended,
    gensalt_md5,
    gensalt_traditional,
)

_BLOWFISH_PREFIXES = ("$2a$", "$2b$", "$2y$")

_Generator = Callable[[str, int, bytes], str]


def _as_text(setting: str | bytes) -> str:
    return setting.decode("latin-1") if isinstance(setting, bytes) else setting


def crypt_rn(key: str | bytes, setting: str | bytes) -> str:
    """Hash ``key`` with ``setting`` and return the hash.

    Raises CryptError when the setting is not a supported bcrypt setting.
    """
    return crypt_blowfish(key, _as_text(setting))


def crypt(key: str | bytes, setting: str | bytes) -> str:
    """Hash ``key`` with ``setting``.

    On failure the result is a token that can never match a valid hash:
    "*0", or "*1" when the setting itself starts with "*0".
    """
    text = _as_text(setting)
    try:
        return crypt_rn(key, text)
    except CryptError:
        return output_magic(text)


def _generator_for(prefix: str) -> _Generator:
    if prefix.startswith(_BLOWFISH_PREFIXES):
        return gensalt_blowfish
    if prefix.startswith("$1$"):
        return gensalt_md5
    if prefix.startswith("_"):
        return gensalt_extended
    if not prefix or (
        len(prefix) >= 2 and prefix[0] in CRYPT_ITOA64 and prefix[1] in CRYPT_ITOA64
    ):
        return gensalt_traditional
    raise CryptError(f"unsupported prefix {prefix!r}")


def crypt_gensalt(prefix: str | bytes, count: int, data: bytes | None) -> str:
    """Build a setting for the scheme named by ``prefix`` from random ``data``.

    ``count`` is the scheme's cost parameter; 0 selects the scheme's default.
    Raises CryptError when there is no input, the prefix is unknown, or the
    chosen scheme rejects the count or the input.
    """
    if data is None:
        raise CryptError("no random input given")
    text = _as_text(prefix)
    return _generator_for(text)(text, count, bytes(data))