"""Fixed-width unsigned word helpers shared by the SHA-2 engine.

Python integers are unbounded, so every helper here takes the word width
explicitly and reduces its result modulo ``2**bits``.
"""

from __future__ import annotations


MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF


def word_mask(bits: int) -> int:
    """Return the all-ones mask for a ``bits``-wide word."""
    return (1 << bits) - 1


def rotate_right(x: int, n: int, bits: int = 32) -> int:
    """Right-rotate the ``bits``-wide word `x` by `n` bits.

    `n` is taken modulo `bits`, so rotating by a multiple of the width
    returns `x` unchanged.
    """
    mask = word_mask(bits)
    x &= mask
    n %= bits
    if n == 0:
        return x
    return ((x >> n) | (x << (bits - n))) & mask


def shift_right(x: int, n: int, bits: int = 32) -> int:
    """Logical right shift of the ``bits``-wide word `x` by `n` bits."""
    return (x & word_mask(bits)) >> n


def decode_be(data, offset: int, width: int) -> int:
    """Read `width` bytes of `data` at `offset` as a big-endian integer."""
    if offset < 0 or offset + width > len(data):
        raise ValueError(
            f"Cannot decode {width} bytes at offset {offset} "
            f"from a buffer of {len(data)} bytes"
        )
    return int.from_bytes(bytes(data[offset : offset + width]), byteorder="big")


def encode_be(x: int, length: int) -> bytes:
    """Encode `x` big-endian into exactly `length` bytes.

    Bytes above `length` are dropped (the value is truncated to its
    low-order bytes); a short value is zero-extended on the left.
    """
    return (x & word_mask(8 * length)).to_bytes(length, byteorder="big")
