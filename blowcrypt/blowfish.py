"""Blowfish-based password hashing for the "$2a$", "$2b$", "$2x$" and "$2y$" prefixes."""

from __future__ import annotations

import itertools

from .tables import (
    ATOI64,
    ATOI64_OFFSET,
    FLAGS_BY_SUBTYPE,
    ITOA64,
    MAGIC_WORDS,
    P_INIT,
    ROUNDS,
    initial_state,
)

_MASK = 0xFFFFFFFF

SALT_BYTES = 16
"""Number of random bytes a salt is made from."""

SETTING_LENGTH = 7 + 22
"""Length of a setting: prefix, cost, and 22 salt characters."""

HASH_LENGTH = 7 + 22 + 31
"""Length of a complete hash string."""

_SELF_TEST_KEY = b"8b \xd0\xc1\xd2\xcf\xcc\xd8"
_SELF_TEST_SALT = "$00$abcdefghijklmnopqrstuu"
_SELF_TEST_HASHES = (
    "i1D709vfamulimlGcq0qq3UvuUasvEa",  # subtypes 'a', 'b', 'y'
    "VUrPmXD6q/nVSSp7pNDhCR9071IfIRe",  # subtype 'x'
)
_SELF_TEST_SET_KEY = b"\xff\xa3" b"34" b"\xff\xff\xff\xa3" b"345"


class CryptError(ValueError):
    """Raised when a setting, prefix, count or input is not acceptable."""


def _digit(char: str) -> int:
    code = ord(char) - ATOI64_OFFSET
    if not 0 <= code < len(ATOI64) or ATOI64[code] > 63:
        raise CryptError(f"invalid base-64 character {char!r}")
    return ATOI64[code]


def bf_encode(data: bytes) -> str:
    """Encode bytes with the bcrypt base-64 alphabet, without padding."""
    out: list[str] = []
    for start in range(0, len(data), 3):
        chunk = data[start:start + 3]
        c1 = chunk[0]
        out.append(ITOA64[c1 >> 2])
        c1 = (c1 & 0x03) << 4
        if len(chunk) == 1:
            out.append(ITOA64[c1])
            break
        c2 = chunk[1]
        out.append(ITOA64[c1 | (c2 >> 4)])
        c1 = (c2 & 0x0F) << 2
        if len(chunk) == 2:
            out.append(ITOA64[c1])
            break
        c2 = chunk[2]
        out.append(ITOA64[c1 | (c2 >> 6)])
        out.append(ITOA64[c2 & 0x3F])
    return "".join(out)


def bf_decode(text: str, size: int) -> bytes:
    """Decode ``size`` bytes from bcrypt base-64 text.

    Raises CryptError on an invalid character or when the text runs out.
    """
    digits = map(_digit, text)

    def take() -> int:
        try:
            return next(digits)
        except StopIteration:
            raise CryptError("base-64 text is too short") from None

    out = bytearray()
    while len(out) < size:
        c1 = take()
        c2 = take()
        out.append((c1 << 2) | ((c2 & 0x30) >> 4))
        if len(out) >= size:
            break
        c3 = take()
        out.append(((c2 & 0x0F) << 4) | ((c3 & 0x3C) >> 2))
        if len(out) >= size:
            break
        c4 = take()
        out.append(((c3 & 0x03) << 6) | c4)
    return bytes(out)


def _as_key(key: str | bytes) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else bytes(key)


def set_key(key: str | bytes, flags: int) -> tuple[list[int], list[int]]:
    """Expand a key into the 18-word key schedule.

    Returns the expanded key used in the main loop and the initial P-array.
    Bit 0 of ``flags`` emulates the old sign-extension bug; bit 1 enables the
    anti-collision safety measure.  The key ends at its first NUL byte and is
    repeated, terminator included, to fill 72 bytes.
    """
    data = _as_key(key).split(b"\0", 1)[0] + b"\0"
    stream = itertools.cycle(data)
    use_bug = flags & 1
    safety = (flags & 2) << 15

    sign = diff = 0
    expanded: list[int] = []
    initial: list[int] = []
    for p_word in P_INIT:
        correct = buggy = 0
        for position in range(4):
            char = next(stream)
            extended = (char - 0x100 if char & 0x80 else char) & _MASK
            correct = ((correct << 8) | char) & _MASK
            buggy = ((buggy << 8) | extended) & _MASK
            if position:
                sign |= buggy & 0x80
        diff |= correct ^ buggy
        word = buggy if use_bug else correct
        expanded.append(word)
        initial.append(p_word ^ word)

    diff |= diff >> 16
    diff &= 0xFFFF
    diff += 0xFFFF
    sign <<= 9
    sign &= ~diff & safety
    initial[0] ^= sign
    return expanded, initial


def _encrypt(left, right, p, s0, s1, s2, s3):
    left ^= p[0]
    for i in range(1, ROUNDS + 1, 2):
        right ^= ((((s0[left >> 24] + s1[(left >> 16) & 0xFF])
                    ^ s2[(left >> 8) & 0xFF]) + s3[left & 0xFF]) & _MASK) ^ p[i]
        left ^= ((((s0[right >> 24] + s1[(right >> 16) & 0xFF])
                   ^ s2[(right >> 8) & 0xFF]) + s3[right & 0xFF]) & _MASK) ^ p[i + 1]
    return right ^ p[ROUNDS + 1], left


def _rekey(p: list[int], s: list[list[int]]) -> None:
    s0, s1, s2, s3 = s
    left = right = 0
    for i in range(0, ROUNDS + 2, 2):
        left, right = _encrypt(left, right, p, s0, s1, s2, s3)
        p[i] = left
        p[i + 1] = right
    for box in s:
        for i in range(0, len(box), 2):
            left, right = _encrypt(left, right, p, s0, s1, s2, s3)
            box[i] = left
            box[i + 1] = right


def _parse_setting(setting: str, min_count: int) -> tuple[int, int, list[int]]:
    if (
        len(setting) < 7
        or setting[0] != "$"
        or setting[1] != "2"
        or setting[2] not in FLAGS_BY_SUBTYPE
        or setting[3] != "$"
        or setting[4] not in "0123"
        or setting[5] not in "0123456789"
        or (setting[4] == "3" and setting[5] > "1")
        or setting[6] != "$"
    ):
        raise CryptError(f"unsupported setting {setting[:7]!r}")
    count = 1 << int(setting[4:6])
    if count < min_count:
        raise CryptError("cost is too low")
    raw = bf_decode(setting[7:SETTING_LENGTH], SALT_BYTES)
    salt = [int.from_bytes(raw[i:i + 4], "big") for i in range(0, SALT_BYTES, 4)]
    return FLAGS_BY_SUBTYPE[setting[2]], count, salt


def _bf_crypt(key: bytes, setting: str, min_count: int) -> str:
    flags, count, salt = _parse_setting(setting, min_count)
    expanded, p = set_key(key, flags)
    _, s = initial_state()
    s0, s1, s2, s3 = s

    left = right = 0
    for i in range(0, ROUNDS + 2, 2):
        left ^= salt[i & 2]
        right ^= salt[(i & 2) + 1]
        left, right = _encrypt(left, right, p, s0, s1, s2, s3)
        p[i] = left
        p[i + 1] = right
    for box in s:
        for i in range(0, len(box), 4):
            left ^= salt[2]
            right ^= salt[3]
            left, right = _encrypt(left, right, p, s0, s1, s2, s3)
            box[i] = left
            box[i + 1] = right
            left ^= salt[0]
            right ^= salt[1]
            left, right = _encrypt(left, right, p, s0, s1, s2, s3)
            box[i + 2] = left
            box[i + 3] = right

    salt_cycle = [salt[i % 4] for i in range(ROUNDS + 2)]
    for _ in range(count):
        p[:] = [word ^ k for word, k in zip(p, expanded)]
        _rekey(p, s)
        p[:] = [word ^ k for word, k in zip(p, salt_cycle)]
        _rekey(p, s)

    words: list[int] = []
    for i in range(0, len(MAGIC_WORDS), 2):
        left, right = MAGIC_WORDS[i], MAGIC_WORDS[i + 1]
        for _ in range(64):
            left, right = _encrypt(left, right, p, s0, s1, s2, s3)
        words += (left, right)

    raw = b"".join(word.to_bytes(4, "big") for word in words)
    last = ITOA64[ATOI64[ord(setting[SETTING_LENGTH - 1]) - ATOI64_OFFSET] & 0x30]
    # Only 23 of the 24 output bytes are encoded, for compatibility with existing hashes.
    return setting[:SETTING_LENGTH - 1] + last + bf_encode(raw[:23])


def _self_test(subtype: str) -> bool:
    flags = FLAGS_BY_SUBTYPE[subtype]
    test_setting = "$2" + subtype + _SELF_TEST_SALT
    ok = (_bf_crypt(_SELF_TEST_KEY, test_setting, 1)
          == test_setting + _SELF_TEST_HASHES[flags & 1])
    a_expanded, a_initial = set_key(_SELF_TEST_SET_KEY, 2)
    y_expanded, y_initial = set_key(_SELF_TEST_SET_KEY, 4)
    a_initial[0] ^= 0x10000
    return (ok and a_initial[0] == 0xDB9C59BC and y_expanded[17] == 0x33343500
            and a_expanded == y_expanded and a_initial == y_initial)


def crypt_blowfish(key: str | bytes, setting: str | bytes) -> str:
    """Hash ``key`` with a bcrypt setting or full hash and return the 60-character hash.

    The cost must be at least 4.  A quick self-test runs after each hash.
    """
    if isinstance(setting, bytes):
        setting = setting.decode("latin-1")
    result = _bf_crypt(_as_key(key), setting, 16)
    if not _self_test(setting[2]):
        raise CryptError("self-test failed")
    return result


def gensalt_blowfish(prefix: str, count: int, data: bytes) -> str:
    """Build a bcrypt setting from a prefix, a cost (0 means 5) and 16 random bytes."""
    if (
        len(data) < SALT_BYTES
        or count < 0
        or (count and not 4 <= count <= 31)
        or len(prefix) < 3
        or prefix[0] != "$"
        or prefix[1] != "2"
        or prefix[2] not in "aby"
    ):
        raise CryptError("invalid prefix, count or input for a bcrypt salt")
    count = count or 5
    return f"$2{prefix[2]}${count:02d}$" + bf_encode(bytes(data[:SALT_BYTES]))


def output_magic(setting: str | bytes) -> str:
    """Return the failure token for ``setting``.

    The token is "*0", unless the setting itself starts with "*0", in which
    case it is "*1" so that the failure token never equals the setting.
    """
    if isinstance(setting, bytes):
        setting = setting.decode("latin-1")
    token = ["*", "0"]
    if setting[:1] == "*" and setting[1:2] == "0":
        token[1] = "1"
    return "".join(token)