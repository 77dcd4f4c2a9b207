"""Parameter sets for the six SHA-2 variants.

A variant is a fixed configuration: the word family (width, round count,
round constants, rotation amounts) plus its own initial hash values and
digest length. Nothing here changes at runtime.
"""

from __future__ import annotations

from typing import Dict, NamedTuple, Tuple, Union

from constants import (
    H0_SHA224,
    H0_SHA256,
    H0_SHA384,
    H0_SHA512,
    H0_SHA512_224,
    H0_SHA512_256,
    K32,
    K64,
)
from words import word_mask


class WordFamily(NamedTuple):
    """Word width and mixing parameters shared by several variants."""

    bits: int
    rounds: int
    k: Tuple[int, ...]
    # Compression-round rotations.
    sigma0: Tuple[int, int, int]
    sigma1: Tuple[int, int, int]
    # Schedule rotations: (rotr, rotr, shr).
    sum0: Tuple[int, int, int]
    sum1: Tuple[int, int, int]

    @property
    def word_bytes(self) -> int:
        return self.bits // 8

    @property
    def mask(self) -> int:
        return word_mask(self.bits)

    @property
    def block_size(self) -> int:
        """Bytes per message block (16 words)."""
        return 16 * self.word_bytes

    @property
    def length_field_size(self) -> int:
        """Bytes reserved for the bit-length suffix (two words)."""
        return 2 * self.word_bytes


SHA256_FAMILY = WordFamily(
    bits=32,
    rounds=64,
    k=K32,
    sigma0=(2, 13, 22),
    sigma1=(6, 11, 25),
    sum0=(7, 18, 3),
    sum1=(17, 19, 10),
)

SHA512_FAMILY = WordFamily(
    bits=64,
    rounds=80,
    k=K64,
    sigma0=(28, 34, 39),
    sigma1=(14, 18, 41),
    sum0=(1, 8, 7),
    sum1=(19, 61, 6),
)


class Variant(NamedTuple):
    name: str
    family: WordFamily
    initial_hash: Tuple[int, ...]
    digest_size: int

    @property
    def block_size(self) -> int:
        return self.family.block_size

    @property
    def digest_bits(self) -> int:
        return self.digest_size * 8


SHA224 = Variant("sha224", SHA256_FAMILY, H0_SHA224, 28)
SHA256 = Variant("sha256", SHA256_FAMILY, H0_SHA256, 32)
SHA384 = Variant("sha384", SHA512_FAMILY, H0_SHA384, 48)
SHA512 = Variant("sha512", SHA512_FAMILY, H0_SHA512, 64)
SHA512_224 = Variant("sha512_224", SHA512_FAMILY, H0_SHA512_224, 28)
SHA512_256 = Variant("sha512_256", SHA512_FAMILY, H0_SHA512_256, 32)

VARIANTS: Dict[str, Variant] = {
    v.name: v for v in (SHA224, SHA256, SHA384, SHA512, SHA512_224, SHA512_256)
}


def _normalize_name(name: str) -> str:
    # "SHA-512/224", "sha512-224" and "SHA512_224" all map to "sha512_224".
    key = name.strip().lower().replace("-", "")
    key = key.replace("/", "_")
    if key.startswith("sha512") and len(key) == 9 and key[6:].isdigit():
        key = f"sha512_{key[6:]}"
    return key


def get_variant(variant: Union[str, Variant]) -> Variant:
    """Return the `Variant` preset for `variant` (a name or a `Variant`)."""
    if isinstance(variant, Variant):
        return variant
    if not isinstance(variant, str):
        raise TypeError(f"variant must be a name or Variant, got {type(variant)}")

    key = _normalize_name(variant)
    if key not in VARIANTS:
        raise ValueError(
            f"Unknown SHA-2 variant {variant!r}; "
            f"expected one of {', '.join(VARIANTS)}"
        )
    return VARIANTS[key]
