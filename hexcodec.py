"""Hex-string decoding for expressing expected digests."""

from __future__ import annotations


_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def hex_to_bytes(text: str) -> bytes:
    """Decode a string of hex pairs into bytes.

    Only ``0-9a-fA-F`` are accepted and the length must be even; anything else
    raises ValueError (no whitespace or ``0x`` prefix is skipped).
    """
    if len(text) % 2 != 0:
        raise ValueError(f"Hex string must have an even length, got {len(text)}")
    for i, ch in enumerate(text):
        if ch not in _HEX_DIGITS:
            raise ValueError(f"Invalid hex character {ch!r} at position {i}")
    return bytes(int(text[i : i + 2], 16) for i in range(0, len(text), 2))
