"""
Interactive Huffman demo

Reads one line of text, then prints the code table, the encoded bit string
and the string decoded back from those bits.

How to run:
  python huffman_demo.py
  python huffman_demo.py --text "aabbbcc" --tie-break symbol
"""

import argparse
import logging
from typing import Dict, List, Optional

import huffman as huff
from huffman_errors import HuffmanError


def format_code_table(code_map: Dict[str, str], frequency_table) -> List[str]:
    lines = []
    for symbol in sorted(code_map):
        lines.append(f"{symbol!r}: {code_map[symbol]}  (freq {frequency_table[symbol]})")
    return lines


def run(text: str, tie_break: str = huff.TIE_BREAK_FIFO) -> str:
    frequency_table = huff.build_frequency_table(text)
    root = huff.build_huffman_tree(frequency_table, tie_break=tie_break)
    code_map = huff.generate_huffman_codes(root)

    print("\nHuffman Codes:")
    for line in format_code_table(code_map, frequency_table):
        print(line)

    encoded = huff.huffman_encode(text, code_map)
    print(f"\nEncoded Binary String: {encoded}")
    print(f"Encoded length: {len(encoded)} bits ({len(text) * 8} bits uncompressed)")

    decoded = "".join(huff.huffman_decode(encoded, root))
    print(f"\nDecoded String: {decoded}")
    return decoded


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Encode and decode one line of text with a Huffman code")
    ap.add_argument("--text", type=str, default=None, help="Text to encode (prompted for when omitted)")
    ap.add_argument("--tie-break", choices=huff.TIE_BREAK_POLICIES, default=huff.TIE_BREAK_FIFO,
                    help="Order in which equal-weight nodes are merged")
    ap.add_argument("--verbose", action="store_true", help="Log pipeline details")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    text = args.text if args.text is not None else input("Enter the string to encode: ")

    try:
        run(text, tie_break=args.tie_break)
    except HuffmanError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
