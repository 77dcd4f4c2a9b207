import pytest

from hexcodec import hex_to_bytes
from words import MASK32, MASK64, decode_be, encode_be, rotate_right, shift_right, word_mask


DATA = bytes([0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08])


@pytest.mark.parametrize(
    "width,expected",
    [
        (1, 0x01),
        (2, 0x0102),
        (4, 0x01020304),
        (8, 0x0102030405060708),
    ],
)
def test_decode_be_reads_big_endian_words(width, expected):
    assert decode_be(DATA, 0, width) == expected


def test_decode_be_honours_offset():
    assert decode_be(DATA, 4, 4) == 0x05060708
    assert decode_be(list(DATA), 6, 2) == 0x0708


@pytest.mark.parametrize("offset,width", [(5, 4), (1, 8), (-1, 1), (8, 1)])
def test_decode_be_rejects_reads_past_the_buffer(offset, width):
    with pytest.raises(ValueError):
        decode_be(DATA, offset, width)


@pytest.mark.parametrize(
    "value,length,expected",
    [
        (0x01, 1, b"\x01"),
        (0x0102, 2, b"\x01\x02"),
        (0x01020304, 4, b"\x01\x02\x03\x04"),
        (0x0102030405060708, 8, DATA),
        # Wider than the value: zero-extended on the left.
        (0x0102030405060708, 10, b"\x00\x00" + DATA),
        (0x0102030405060708, 16, bytes(8) + DATA),
        # Narrower than the value: high-order bytes are dropped.
        (0x0102030405060708, 4, b"\x05\x06\x07\x08"),
        (0x0102, 1, b"\x02"),
        (0, 0, b""),
    ],
)
def test_encode_be(value, length, expected):
    assert encode_be(value, length) == expected


def test_rotate_right_8_bit_walks_a_single_bit_around():
    expected = [0x01, 0x80, 0x40, 0x20, 0x10, 0x08, 0x04, 0x02]
    for n in range(16):
        assert rotate_right(0x01, n, 8) == expected[n % 8]


def test_rotate_right_16_bit():
    assert rotate_right(0x0101, 1, 16) == 0x8080
    assert rotate_right(0x0101, 4, 16) == 0x1010
    assert rotate_right(0x0101, 9, 16) == 0x8080


@pytest.mark.parametrize(
    "n,expected",
    [
        (0, 0xFF000000),
        (2, 0x3FC00000),
        (4, 0x0FF00000),
        (8, 0x00FF0000),
        (24, 0x000000FF),
        (28, 0xF000000F),
        (32, 0xFF000000),
        (34, 0x3FC00000),
    ],
)
def test_rotate_right_32_bit(n, expected):
    assert rotate_right(0xFF000000, n, 32) == expected


def test_rotate_right_32_bit_mixed_pattern():
    assert rotate_right(0x01020304, 8) == 0x04010203
    assert rotate_right(0x01020304, 16) == 0x03040102
    assert rotate_right(0x01020304, 3) == 0x80204060
    assert rotate_right(0x01020304, 7) == 0x08020406


@pytest.mark.parametrize(
    "n,expected",
    [
        (2, 0xC048D159E26AF37B),
        (4, 0xF0123456789ABCDE),
        (6, 0xBC048D159E26AF37),
        (7, 0xDE02468ACF13579B),
        (12, 0xDEF0123456789ABC),
        (64, 0x0123456789ABCDEF),
    ],
)
def test_rotate_right_64_bit(n, expected):
    assert rotate_right(0x0123456789ABCDEF, n, 64) == expected


def test_shift_right_and_masks():
    assert shift_right(0xFFFFFFFF, 4) == 0x0FFFFFFF
    assert shift_right(0x1_0000_0010, 4, 32) == 0x1
    assert word_mask(32) == MASK32
    assert word_mask(64) == MASK64


@pytest.mark.parametrize(
    "text,expected",
    [
        ("", b""),
        ("00ff", b"\x00\xff"),
        ("BA7816bf", b"\xba\x78\x16\xbf"),
        ("0123456789abcdefABCDEF", bytes.fromhex("0123456789abcdefabcdef")),
    ],
)
def test_hex_to_bytes(text, expected):
    assert hex_to_bytes(text) == expected


@pytest.mark.parametrize("text", ["abc", "0g", "0x00", "00 11", "ff\n"])
def test_hex_to_bytes_rejects_malformed_input(text):
    with pytest.raises(ValueError):
        hex_to_bytes(text)
