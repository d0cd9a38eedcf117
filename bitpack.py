from typing import Tuple

import huffman as huff


def pack_bits(bitstring: str) -> Tuple[bytes, int]:
    """
    Converts a string of '0'/'1' characters into packed bytes, MSB first
    Returns (packed_bytes, pad_bits) where pad_bits is number of 0 bits added at the end
    """
    out = bytearray()
    acc = 0
    acc_bits = 0

    for ch in bitstring:
        if ch not in "01":
            raise ValueError(f"bit must be '0' or '1', got {ch!r}")
        acc = (acc << 1) | (ch == "1")
        acc_bits += 1
        if acc_bits == 8:
            out.append(acc)
            acc = 0
            acc_bits = 0

    pad_bits = 0
    if acc_bits != 0:
        pad_bits = 8 - acc_bits
        out.append(acc << pad_bits)

    return bytes(out), pad_bits


def unpack_bits(packed: bytes, pad_bits: int) -> str:
    if not 0 <= pad_bits <= 7:
        raise ValueError(f"pad_bits must be between 0 and 7, got {pad_bits}")
    if not packed and pad_bits:
        raise ValueError("pad_bits must be 0 for empty data")

    total_bits = len(packed) * 8 - pad_bits
    bits = "".join(format(byte, "08b") for byte in packed)
    return bits[:total_bits]


def compress(data, tie_break=huff.TIE_BREAK_FIFO):
    """
    Runs the whole pipeline over data and packs the result
    Returns (packed_bytes, pad_bits, root, code_map); root is needed to decompress
    """
    frequency_table = huff.build_frequency_table(data)
    root = huff.build_huffman_tree(frequency_table, tie_break=tie_break)
    code_map = huff.generate_huffman_codes(root)
    packed, pad_bits = pack_bits(huff.huffman_encode(data, code_map))
    return packed, pad_bits, root, code_map


def decompress(packed: bytes, pad_bits: int, root: huff.HuffmanNode) -> list:
    return huff.huffman_decode(unpack_bits(packed, pad_bits), root)
