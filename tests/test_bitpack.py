import pytest

import bitpack
import huffman as huff
from huffman_errors import TruncatedBitSequenceError


@pytest.mark.parametrize("bits, packed, pad_bits", [
    ("", b"", 0),
    ("1", b"\x80", 7),
    ("10100001111", b"\xa1\xe0", 5),
    ("0000000011111111", b"\x00\xff", 0),
])
def test_pack_bits(bits, packed, pad_bits):
    assert bitpack.pack_bits(bits) == (packed, pad_bits)
    assert bitpack.unpack_bits(packed, pad_bits) == bits


def test_pack_bits_rejects_non_binary_characters():
    with pytest.raises(ValueError):
        bitpack.pack_bits("0102")


@pytest.mark.parametrize("packed, pad_bits", [(b"\x00", 8), (b"\x00", -1), (b"", 3)])
def test_unpack_bits_rejects_bad_padding(packed, pad_bits):
    with pytest.raises(ValueError):
        bitpack.unpack_bits(packed, pad_bits)


def test_compress_decompress_round_trip():
    data = b"This is a test" * 100
    packed, pad_bits, root, code_map = bitpack.compress(data)
    assert len(packed) < len(data)
    assert bytes(bitpack.decompress(packed, pad_bits, root)) == data
    assert set(code_map) == set(data)


def test_compress_single_repeated_byte():
    data = b"A" * 10240
    packed, pad_bits, root, code_map = bitpack.compress(data)
    assert code_map == {ord("A"): "0"}
    assert len(packed) == 1280 and pad_bits == 0
    assert bytes(bitpack.decompress(packed, pad_bits, root)) == data


def test_decompress_with_wrong_padding_detects_truncation():
    packed, pad_bits, root, _ = bitpack.compress("aabbbcc")
    assert pad_bits == 5
    with pytest.raises(TruncatedBitSequenceError):
        bitpack.decompress(packed, pad_bits + 1, root)


def test_compress_honours_tie_break():
    _, _, _, fifo = bitpack.compress("ccbbbaa", tie_break=huff.TIE_BREAK_FIFO)
    _, _, _, sym = bitpack.compress("ccbbbaa", tie_break=huff.TIE_BREAK_SYMBOL)
    assert fifo["c"] == "10" and sym["c"] == "11"
