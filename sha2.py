"""SHA-2 family hashing built on `compress_block` from `compress.py`.

This module provides:

- `sha224`, `sha256`, `sha384`, `sha512`, `sha512_224`, `sha512_256`:
  compute the digest of arbitrary bytes with one fixed variant.
- `hash_bytes(data, variant)`: the same engine, with the variant given as a
  `Variant` or a name such as ``"sha512/256"``.
- `hash_bits(data, length_bits, variant)`: hash a message whose length is not
  a whole number of bytes.
- The individual pipeline stages (padding, block splitting, schedule
  expansion, state update, finalization) for use by analysis tools.

Every input is processed in one call: full blocks are taken straight from the
input and only the last one or two blocks are padded.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple, Union

from compress import State, compress_block, sum0, sum1
from variants import (
    SHA224,
    SHA256,
    SHA384,
    SHA512,
    SHA512_224,
    SHA512_256,
    Variant,
    WordFamily,
    get_variant,
)
from words import decode_be, encode_be


VariantLike = Union[Variant, str]

_MARKER = 0x80


def _as_bytes(data) -> bytes:
    """Coerce a bytes-like object (or an iterable of byte values) to ``bytes``."""
    if isinstance(data, str):
        raise TypeError("Cannot hash str; encode it to bytes first")
    if isinstance(data, int):
        # bytes(n) would silently build n zero bytes.
        raise TypeError(f"Cannot hash int {data!r}; pass a bytes-like object")
    if isinstance(data, bytes):
        return data
    return bytes(data)


#
# Padding and block segmentation
#

def _finish_tail(tail: bytearray, length_bits: int, family: WordFamily) -> bytes:
    """Zero-fill `tail` (which already ends with the marker bit) and append the length.

    Returns one block, or two when the length suffix no longer fits after
    the marker.
    """
    block_size = family.block_size
    suffix_size = family.length_field_size

    if len(tail) > block_size - suffix_size:
        # No room for the suffix: close this block, start an all-padding one.
        tail.extend(bytes(block_size - len(tail)))
    tail.extend(bytes(block_size - suffix_size - len(tail) % block_size))
    tail.extend(encode_be(length_bits, suffix_size))
    return bytes(tail)


def _pad_tail(tail: bytes, message_length: int, family: WordFamily) -> bytes:
    padded = bytearray(tail)
    padded.append(_MARKER)
    return _finish_tail(padded, message_length * 8, family)


def pad_final_block(tail, message_length: int, variant: VariantLike = SHA256) -> bytes:
    """Pad the final, partially filled block of a message.

    `tail` holds the input bytes left over after the last full block (it may
    be empty) and `message_length` is the length of the whole input in bytes.
    The result is one block when the marker byte and the length suffix fit
    after `tail`, and two blocks otherwise.
    """
    family = get_variant(variant).family
    tail = _as_bytes(tail)
    if len(tail) >= family.block_size:
        raise ValueError(
            f"Final block tail must be shorter than {family.block_size} bytes, got {len(tail)}"
        )

    return _pad_tail(tail, message_length, family)


def _iter_padded_blocks(message: bytes, length_bits: int, family: WordFamily) -> Iterator[bytes]:
    block_size = family.block_size

    # Whole blocks made of complete message bytes pass through untouched.
    full = (length_bits // 8 // block_size) * block_size
    for offset in range(0, full, block_size):
        yield message[offset : offset + block_size]

    remaining_bits = length_bits % 8
    if remaining_bits == 0:
        final = _pad_tail(message[full:], length_bits // 8, family)
    else:
        # The last byte is shared by the message bits and the '1' marker bit.
        tail = bytearray(message[full:])
        keep = (0xFF << (8 - remaining_bits)) & 0xFF
        tail[-1] = (tail[-1] & keep) | (_MARKER >> remaining_bits)
        final = _finish_tail(tail, length_bits, family)

    for offset in range(0, len(final), block_size):
        yield final[offset : offset + block_size]


def iter_blocks(data, variant: VariantLike = SHA256) -> Iterator[bytes]:
    """Yield the padded message `data` block by block."""
    message = _as_bytes(data)
    yield from _iter_padded_blocks(message, len(message) * 8, get_variant(variant).family)


def pad_message(message, variant: VariantLike = SHA256) -> bytes:
    """Pad a raw message to a multiple of the variant's block size.

    Accepts either a ``bytes`` object or an iterable of byte values (0-255).
    """
    return b"".join(iter_blocks(message, variant))


def split_into_blocks(padded, variant: VariantLike = SHA256) -> List[List[int]]:
    """Split a padded message into blocks of the variant's block size.

    Returns a list of blocks, each a list of byte values.
    """
    block_size = get_variant(variant).block_size
    data = list(padded)

    if len(data) % block_size != 0:
        raise ValueError(
            f"Padded message length must be a multiple of {block_size} bytes, got {len(data)}"
        )

    return [data[i : i + block_size] for i in range(0, len(data), block_size)]


#
# Message schedule
#

def expand_message_schedule(w: List[int], variant: VariantLike = SHA256) -> List[int]:
    """Expand an initial schedule W[0..15] to one word per round.

    The input ``w`` must contain at least the first 16 words; any additional
    words are ignored. The caller's list is left untouched.
    """
    family = get_variant(variant).family
    if len(w) < 16:
        raise ValueError(
            f"Message schedule must contain at least 16 words, got {len(w)}"
        )

    mask = family.mask
    schedule = [word & mask for word in w[:16]] + [0] * (family.rounds - 16)
    for i in range(16, family.rounds):
        schedule[i] = (
            schedule[i - 16]
            + sum0(schedule[i - 15], family)
            + schedule[i - 7]
            + sum1(schedule[i - 2], family)
        ) & mask

    return schedule


def init_message_schedule(block, variant: VariantLike = SHA256) -> List[int]:
    """Build the full message schedule for a single block."""
    family = get_variant(variant).family
    block = _as_bytes(block)
    if len(block) != family.block_size:
        raise ValueError(f"Expected {family.block_size}-byte block, got {len(block)}")

    width = family.word_bytes
    first = [decode_be(block, i * width, width) for i in range(16)]
    return expand_message_schedule(first, variant)


#
# Hash state
#

def load_hash_state(H_i, variant: VariantLike = SHA256) -> State:
    """Validate an 8-word chaining value and return it as a tuple."""
    family = get_variant(variant).family
    if not isinstance(H_i, tuple) or len(H_i) != 8:
        raise ValueError(
            f"H_i must be a tuple of 8 integers, got {type(H_i)} "
            f"with length {len(H_i) if hasattr(H_i, '__len__') else 'N/A'}"
        )
    for j, word in enumerate(H_i):
        if not isinstance(word, int) or word < 0 or word > family.mask:
            raise ValueError(f"H_i word {j} is not a {family.bits}-bit integer: {word!r}")
    return H_i


def update_hash_state(H_i: State, working: State, variant: VariantLike = SHA256) -> State:
    """Add the working registers into the chaining value.

        H_{i+1}[j] = (H_i[j] + working[j]) mod 2^bits
    """
    mask = get_variant(variant).family.mask
    return tuple((h + w) & mask for h, w in zip(H_i, working))


def finalize_digest(state: State, variant: VariantLike = SHA256) -> bytes:
    """Convert a final chaining value into the variant's digest.

    Words are written big-endian in order until the digest is full. A word
    that only partly fits contributes its high-order bytes.
    """
    variant = get_variant(variant)
    width = variant.family.word_bytes

    digest = bytearray()
    remaining = variant.digest_size
    for word in state:
        if remaining <= 0:
            break
        take = min(width, remaining)
        digest += encode_be(word, width)[:take]
        remaining -= take

    return bytes(digest)


#
# High-level helpers
#

def hash_before(data, variant: VariantLike = SHA256) -> Tuple[State, List[List[int]]]:
    """Prepare everything needed before compression.

    Returns the variant's initial state and a list of message schedules, one
    per block. With these a custom compression pipeline can be run:

        state0, schedules = hash_before(data, "sha512")
        state = state0
        for ws in schedules:
            state = update_hash_state(state, my_compress(*state, ws), "sha512")
        digest = hash_after(state, "sha512")
    """
    variant = get_variant(variant)
    schedules = [init_message_schedule(block, variant) for block in iter_blocks(data, variant)]
    return variant.initial_hash, schedules


def hash_after(final_state: State, variant: VariantLike = SHA256) -> bytes:
    """Finalize the digest from the state left after the last block."""
    return finalize_digest(load_hash_state(final_state, variant), variant)


def _run(blocks: Iterator[bytes], variant: Variant, traces=None) -> bytes:
    family = variant.family
    state = variant.initial_hash
    for block in blocks:
        ws = init_message_schedule(block, variant)
        trace = None
        if traces is not None:
            trace = []
            traces.append(trace)
        working = compress_block(*state, ws, family=family, trace=trace)
        state = update_hash_state(state, working, variant)
    return finalize_digest(state, variant)


def hash_bytes(data, variant: VariantLike = SHA256) -> bytes:
    """Compute the digest of `data` with the given SHA-2 variant."""
    variant = get_variant(variant)
    return _run(iter_blocks(data, variant), variant)


def hash_with_trace(data, variant: VariantLike = SHA256) -> Tuple[bytes, List[List[State]]]:
    """Compute a digest while recording the working state after every round.

    Returns:
        (digest, traces)
        where traces[block_idx][round_idx] is the (a, ..., h) tuple after that round
    """
    variant = get_variant(variant)
    traces: List[List[State]] = []
    digest = _run(iter_blocks(data, variant), variant, traces)
    return digest, traces


def hash_bits(data, length_bits: int, variant: VariantLike = SHA256) -> bytes:
    """Compute the digest of a message with an explicit bit length.

    The message occupies the high-order bits of the last byte when
    `length_bits` is not a multiple of 8; the remaining low bits are ignored.
    """
    variant = get_variant(variant)
    message = _as_bytes(data)
    if not isinstance(length_bits, int) or isinstance(length_bits, bool):
        raise TypeError(f"length_bits must be an int, got {type(length_bits).__name__}")
    if length_bits < 0:
        raise ValueError(f"length_bits must be non-negative, got {length_bits}")
    if len(message) != (length_bits + 7) // 8:
        raise ValueError(
            f"A {length_bits}-bit message needs {(length_bits + 7) // 8} bytes, got {len(message)}"
        )
    return _run(_iter_padded_blocks(message, length_bits, variant.family), variant)


def sha224(data) -> bytes:
    return hash_bytes(data, SHA224)


def sha256(data) -> bytes:
    return hash_bytes(data, SHA256)


def sha384(data) -> bytes:
    return hash_bytes(data, SHA384)


def sha512(data) -> bytes:
    return hash_bytes(data, SHA512)


def sha512_224(data) -> bytes:
    return hash_bytes(data, SHA512_224)


def sha512_256(data) -> bytes:
    return hash_bytes(data, SHA512_256)
