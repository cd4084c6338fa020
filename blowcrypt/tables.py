"""Constant tables for the bcrypt variant of Blowfish.

The P-array and S-boxes hold the fractional hexadecimal digits of pi, as in
the standard Blowfish key schedule; they are computed once at import.  The
base-64 alphabet used by bcrypt differs from the usual one and has its own
ordering.
"""

from __future__ import annotations

import struct

ROUNDS = 16
"""Number of Blowfish rounds; the P-array holds ROUNDS + 2 words."""

MAGIC_WORDS: tuple[int, ...] = struct.unpack(">6I", b"OrpheanBeholderScryDoubt")
"""The text "OrpheanBeholderScryDoubt" as six big-endian words."""

ITOA64 = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
"""Alphabet of the bcrypt base-64 encoding, by digit value."""

ATOI64_OFFSET = 0x20
"""Character code of the first entry in ATOI64."""


def _build_atoi64() -> tuple[int, ...]:
    table = [64] * 0x60
    for value, char in enumerate(ITOA64):
        table[ord(char) - ATOI64_OFFSET] = value
    return tuple(table)


ATOI64: tuple[int, ...] = _build_atoi64()
"""Digit values for character codes 0x20..0x7f; 64 marks an invalid character."""

FLAGS_BY_SUBTYPE: dict[str, int] = {"a": 2, "b": 4, "x": 1, "y": 4}
"""Key-setup flags for each supported hash subtype letter.

Bit 0 requests emulation of the old sign-extension bug, bit 1 the
anti-collision safety measure.  Subtypes missing here are unsupported.
"""

_P_WORDS = ROUNDS + 2
_S_WORDS = 4 * 256


def _arctan_inverse(x: int, one: int) -> int:
    """Fixed-point arctan(1/x) scaled by ``one``."""
    power = one // x
    total = power
    x_squared = x * x
    divisor = 3
    sign = -1
    while power:
        power //= x_squared
        total += sign * (power // divisor)
        sign = -sign
        divisor += 2
    return total


def _pi_fraction_words(count: int) -> tuple[int, ...]:
    """Return the first ``count`` 32-bit words of the fractional part of pi."""
    bits = 32 * count
    guard = 64
    one = 1 << (bits + guard)
    pi = 4 * (4 * _arctan_inverse(5, one) - _arctan_inverse(239, one))
    fraction = (pi - 3 * one) >> guard
    return struct.unpack(f">{count}I", fraction.to_bytes(bits // 8, "big"))


_PI_WORDS = _pi_fraction_words(_P_WORDS + _S_WORDS)

P_INIT: tuple[int, ...] = _PI_WORDS[:_P_WORDS]
"""Initial P-array."""

S_INIT: tuple[tuple[int, ...], ...] = tuple(
    _PI_WORDS[_P_WORDS + 256 * box:_P_WORDS + 256 * (box + 1)] for box in range(4)
)
"""Initial contents of the four S-boxes."""


def initial_state() -> tuple[list[int], list[list[int]]]:
    """Return fresh, mutable copies of the initial P-array and the four S-boxes."""
    return list(P_INIT), [list(box) for box in S_INIT]