import logging
import math
from collections import Counter
from types import MappingProxyType

from huffman_errors import (
    EmptyInputError,
    InvalidBitSequenceError,
    TruncatedBitSequenceError,
    UnknownSymbolError,
)
from minheap import MinHeap

logger = logging.getLogger(__name__)

TIE_BREAK_FIFO = "fifo" # equal weights leave the queue in first-occurrence order
TIE_BREAK_SYMBOL = "symbol" # equal weights leave the queue in ascending symbol order
TIE_BREAK_POLICIES = (TIE_BREAK_FIFO, TIE_BREAK_SYMBOL)


class HuffmanNode: # Node for Huffman tree
    __slots__ = ("symbol", "weight", "left", "right")

    def __init__(self, symbol, weight, left=None, right=None):
        self.symbol = symbol # None for internal nodes
        self.weight = weight
        self.left = left
        self.right = right

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol!r}, weight={self.weight})"
        return f"HuffmanNode(weight={self.weight})"


def build_frequency_table(data): # data: str, bytes or any iterable of hashable symbols
    counts = Counter(data)
    if not counts:
        raise EmptyInputError()
    logger.debug("frequency table: %d distinct symbols over %d total", len(counts), sum(counts.values()))
    return MappingProxyType(dict(counts))


def build_huffman_tree(frequency_table, tie_break=TIE_BREAK_FIFO) -> HuffmanNode:
    """
    Build the Huffman tree for a symbol -> weight mapping

    Leaves are loaded into the queue in frequency-table order ("fifo") or in
    ascending symbol order ("symbol"); the queue then pops equal weights in
    that order. The first node popped in each merge becomes the left child.
    A table with one symbol yields that lone leaf as the root.
    """
    if tie_break not in TIE_BREAK_POLICIES:
        raise ValueError(f"tie_break must be one of {TIE_BREAK_POLICIES}, got {tie_break!r}")
    if not frequency_table:
        raise EmptyInputError("cannot build a Huffman tree from an empty frequency table")

    items = list(frequency_table.items())
    if tie_break == TIE_BREAK_SYMBOL:
        items.sort(key=lambda item: item[0])

    leaves = []
    for symbol, weight in items:
        if weight <= 0:
            raise ValueError(f"weight for symbol {symbol!r} must be positive, got {weight}")
        leaves.append(HuffmanNode(symbol, weight))

    priority_queue = MinHeap(leaves)
    merges = 0
    while len(priority_queue) > 1:
        left = priority_queue.extract_min()
        right = priority_queue.extract_min()
        priority_queue.insert(HuffmanNode(None, left.weight + right.weight, left, right))
        merges += 1

    root = priority_queue.extract_min()
    logger.debug("built Huffman tree: %d leaves, %d merges, root weight %d", len(leaves), merges, root.weight)
    return root


def generate_huffman_codes(root: HuffmanNode) -> dict:
    # A lone leaf has no branches; give it a one-bit code so every symbol costs a bit
    if root.is_leaf:
        return {root.symbol: "0"}

    codes = {}
    stack = [(root, "")]
    while stack:
        node, current_code = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = current_code
            continue
        # right pushed first so the left subtree is visited first
        stack.append((node.right, current_code + "1"))
        stack.append((node.left, current_code + "0"))
    return codes


def huffman_encode(data, code_map: dict) -> str:
    try:
        return "".join(code_map[symbol] for symbol in data)
    except KeyError as e:
        raise UnknownSymbolError(e.args[0]) from None


def huffman_decode(bitstring: str, root: HuffmanNode) -> list:
    """
    Walk the tree one bit at a time, emitting a symbol at every leaf

    Returns the decoded symbols as a list. Raises TruncatedBitSequenceError
    when the bits stop partway through a code and InvalidBitSequenceError on
    anything that is not a '0' or '1' on a valid path.
    """
    decoded = []

    if root.is_leaf:
        for position, bit in enumerate(bitstring):
            if bit != "0":
                raise InvalidBitSequenceError(
                    f"unexpected bit {bit!r} at position {position} for a single-symbol code",
                    position=position,
                )
            decoded.append(root.symbol)
        return decoded

    current_node = root
    code_start = 0
    for position, bit in enumerate(bitstring):
        if bit == "0":
            current_node = current_node.left
        elif bit == "1":
            current_node = current_node.right
        else:
            raise InvalidBitSequenceError(f"invalid bit {bit!r} at position {position}", position=position)

        if current_node.is_leaf:
            decoded.append(current_node.symbol)
            current_node = root
            code_start = position + 1

    if current_node is not root:
        raise TruncatedBitSequenceError(len(bitstring), bitstring[code_start:])
    return decoded


def weighted_path_length(root: HuffmanNode) -> int:
    # Equals the length of the encoded bit sequence for the input the tree was built from
    if root.is_leaf:
        return root.weight
    total = 0
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if node.is_leaf:
            total += node.weight * depth
        else:
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
    return total


def average_code_length(code_map, frequency_table) -> float:
    total = sum(frequency_table.values())
    return sum(len(code_map[s]) * f for s, f in frequency_table.items()) / total


def shannon_entropy(frequency_table) -> float: # lower bound on average code length, in bits per symbol
    total = sum(frequency_table.values())
    return -sum((f / total) * math.log2(f / total) for f in frequency_table.values())
