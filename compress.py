"""Forward SHA-2 compression.

This implements the SHA-2 compression loop for both word families. Given the
current working state words `(a, b, c, d, e, f, g, h)`, the round constant
`k`, and the message schedule word `w`, one round computes:

    S1    = sigma1(e)
    ch    = (e & f) ^ (~e & g)
    temp1 = h + S1 + ch + k + w

    S0    = sigma0(a)
    maj   = (a & b) ^ (a & c) ^ (b & c)
    temp2 = S0 + maj

    a' = temp1 + temp2
    e' = d + temp1

    b' = a
    c' = b
    d' = c
    f' = e
    g' = f
    h' = g

For SHA-224/256 the words are 32 bits wide and sigma0/sigma1 rotate by
(2, 13, 22) and (6, 11, 25); for the SHA-384/512 family they are 64 bits wide
and rotate by (28, 34, 39) and (14, 18, 41). All additions are performed
modulo 2**bits.

The message schedule uses the separate mixing functions `sum0`/`sum1`
(rotate, rotate, shift), also defined here.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from variants import SHA256_FAMILY, WordFamily
from words import rotate_right, shift_right


State = Tuple[int, int, int, int, int, int, int, int]


def _rotations(x: int, amounts: Tuple[int, int, int], bits: int) -> int:
    r1, r2, r3 = amounts
    return rotate_right(x, r1, bits) ^ rotate_right(x, r2, bits) ^ rotate_right(x, r3, bits)


def sigma0(x: int, family: WordFamily = SHA256_FAMILY) -> int:
    """Compression-round function applied to `a`."""
    return _rotations(x, family.sigma0, family.bits)


def sigma1(x: int, family: WordFamily = SHA256_FAMILY) -> int:
    """Compression-round function applied to `e`."""
    return _rotations(x, family.sigma1, family.bits)


def sum0(x: int, family: WordFamily = SHA256_FAMILY) -> int:
    """Schedule function applied to `w[i - 15]`."""
    r1, r2, s = family.sum0
    bits = family.bits
    return rotate_right(x, r1, bits) ^ rotate_right(x, r2, bits) ^ shift_right(x, s, bits)


def sum1(x: int, family: WordFamily = SHA256_FAMILY) -> int:
    """Schedule function applied to `w[i - 2]`."""
    r1, r2, s = family.sum1
    bits = family.bits
    return rotate_right(x, r1, bits) ^ rotate_right(x, r2, bits) ^ shift_right(x, s, bits)


def choice(e: int, f: int, g: int, family: WordFamily = SHA256_FAMILY) -> int:
    # ~e is negative for Python ints; mask it back to the word width.
    return ((e & f) ^ (~e & g)) & family.mask


def majority(a: int, b: int, c: int) -> int:
    return (a & b) ^ (a & c) ^ (b & c)


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    k: int,
    family: WordFamily = SHA256_FAMILY,
) -> State:
    """Perform one SHA-2 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Words of the current working state.
    w : int
        Message schedule word `w[i]`.
    k : int
        Round constant `k[i]`.
    family : WordFamily
        Word width and rotation amounts (`SHA256_FAMILY` or `SHA512_FAMILY`).

    Returns
    -------
    (a_new, b_new, c_new, d_new, e_new, f_new, g_new, h_new) : tuple[int, ...]
        Updated working state after one round, reduced modulo 2**bits.
    """
    mask = family.mask
    a &= mask
    b &= mask
    c &= mask
    d &= mask
    e &= mask
    f &= mask
    g &= mask
    h &= mask
    w &= mask
    k &= mask

    temp1 = (h + sigma1(e, family) + choice(e, f, g, family) + k + w) & mask
    temp2 = (sigma0(a, family) + majority(a, b, c)) & mask

    return (
        (temp1 + temp2) & mask,
        a,
        b,
        c,
        (d + temp1) & mask,
        e,
        f,
        g,
    )


def compress_block(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
    family: WordFamily = SHA256_FAMILY,
    trace: Optional[List[State]] = None,
) -> State:
    """Run the full compression loop (64 or 80 rounds) for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial working state words (typically the current hash value).
    ws : Sequence[int]
        The message schedule for this block, one word per round.
    family : WordFamily
        Selects the round count and round constants.
    trace : list, optional
        When given, the working state after every round is appended to it.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Final working state words after the last round.
    """
    if len(ws) != family.rounds:
        raise ValueError(
            f"compress_block expects {family.rounds} message schedule words, got {len(ws)}"
        )

    state = (a, b, c, d, e, f, g, h)
    for i in range(family.rounds):
        state = compression(*state, ws[i], family.k[i], family)
        if trace is not None:
            trace.append(state)

    return state
