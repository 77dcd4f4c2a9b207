from math import isqrt

import pytest

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
from sha2 import hash_bytes
from variants import (
    SHA224,
    SHA256,
    SHA256_FAMILY,
    SHA384,
    SHA512,
    SHA512_224,
    SHA512_256,
    SHA512_FAMILY,
    VARIANTS,
    Variant,
    get_variant,
)
from words import MASK32, MASK64, decode_be


def _primes(count):
    found = []
    candidate = 2
    while len(found) < count:
        if all(candidate % p for p in found if p * p <= candidate):
            found.append(candidate)
        candidate += 1
    return found


def _icbrt(x):
    """Largest integer r with r**3 <= x."""
    lo, hi = 0, 1 << (x.bit_length() // 3 + 1)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if mid ** 3 <= x:
            lo = mid
        else:
            hi = mid - 1
    return lo


PRIMES = _primes(80)


def test_round_constants_are_cube_root_fractions():
    """K holds the fractional bits of the cube roots of the first 80 primes."""
    assert len(K32) == 64
    assert len(K64) == 80
    for i, p in enumerate(PRIMES):
        assert K64[i] == _icbrt(p << 192) & MASK64
        if i < 64:
            assert K32[i] == _icbrt(p << 96) & MASK32
            assert K64[i] >> 32 == K32[i]


def test_initial_hash_values_are_square_root_fractions():
    for i, p in enumerate(PRIMES[:8]):
        assert H0_SHA512[i] == isqrt(p << 128) & MASK64
        assert H0_SHA256[i] == H0_SHA512[i] >> 32
    for i, p in enumerate(PRIMES[8:16]):
        assert H0_SHA384[i] == isqrt(p << 128) & MASK64
        assert H0_SHA224[i] == H0_SHA384[i] & MASK32


@pytest.mark.parametrize("name,expected", [("SHA-512/224", H0_SHA512_224), ("SHA-512/256", H0_SHA512_256)])
def test_truncated_sha512_initial_values_are_generated(name, expected):
    """SHA-512/t starts from SHA-512 of its own name under a modified IV."""
    generator = Variant(
        "sha512_iv_generator",
        SHA512_FAMILY,
        tuple(h ^ 0xA5A5A5A5A5A5A5A5 for h in H0_SHA512),
        64,
    )
    digest = hash_bytes(name.encode("ascii"), generator)
    assert tuple(decode_be(digest, i * 8, 8) for i in range(8)) == expected


@pytest.mark.parametrize(
    "variant,bits,rounds,block_size,digest_size",
    [
        (SHA224, 32, 64, 64, 28),
        (SHA256, 32, 64, 64, 32),
        (SHA384, 64, 80, 128, 48),
        (SHA512, 64, 80, 128, 64),
        (SHA512_224, 64, 80, 128, 28),
        (SHA512_256, 64, 80, 128, 32),
    ],
)
def test_variant_parameters(variant, bits, rounds, block_size, digest_size):
    assert variant.family.bits == bits
    assert variant.family.rounds == rounds
    assert len(variant.family.k) == rounds
    assert variant.block_size == block_size
    assert variant.family.length_field_size == bits // 4
    assert variant.digest_size == digest_size
    assert variant.digest_bits == digest_size * 8
    assert len(variant.initial_hash) == 8


def test_families():
    assert SHA256_FAMILY.mask == MASK32
    assert SHA512_FAMILY.mask == MASK64
    assert SHA256_FAMILY.word_bytes == 4
    assert SHA512_FAMILY.word_bytes == 8


@pytest.mark.parametrize(
    "name,expected",
    [
        ("sha256", SHA256),
        ("SHA-256", SHA256),
        ("sha224", SHA224),
        (" SHA384 ", SHA384),
        ("sha512", SHA512),
        ("sha512_224", SHA512_224),
        ("SHA-512/224", SHA512_224),
        ("sha512-224", SHA512_224),
        ("SHA512/256", SHA512_256),
        ("sha512_256", SHA512_256),
    ],
)
def test_get_variant_by_name(name, expected):
    assert get_variant(name) is expected


def test_get_variant_passes_variants_through():
    for variant in VARIANTS.values():
        assert get_variant(variant) is variant


@pytest.mark.parametrize("name", ["md5", "sha1", "sha512/384", "sha-3", ""])
def test_get_variant_rejects_unknown_names(name):
    with pytest.raises(ValueError, match="Unknown SHA-2 variant"):
        get_variant(name)


def test_get_variant_rejects_non_strings():
    with pytest.raises(TypeError):
        get_variant(256)
