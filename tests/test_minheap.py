import pytest

from huffman import HuffmanNode
from huffman_errors import QueueUnderflowError
from minheap import MinHeap


def _leaves(*pairs):
    return [HuffmanNode(symbol, weight) for symbol, weight in pairs]


def test_extract_min_returns_nodes_in_weight_order():
    heap = MinHeap(_leaves(("a", 5), ("b", 1), ("c", 3), ("d", 4), ("e", 2)))
    out = [heap.extract_min().symbol for _ in range(5)]
    assert out == ["b", "e", "c", "d", "a"]
    assert len(heap) == 0


def test_insert_restores_heap_order():
    heap = MinHeap()
    for node in _leaves(("x", 9), ("y", 7), ("z", 8)):
        heap.insert(node)
    heap.insert(HuffmanNode("w", 1))
    assert heap.peek().symbol == "w"
    assert [heap.extract_min().weight for _ in range(4)] == [1, 7, 8, 9]


def test_equal_weights_extract_in_insertion_order():
    heap = MinHeap(_leaves(("q", 2), ("p", 2), ("r", 2)))
    heap.insert(HuffmanNode("s", 2))
    assert [heap.extract_min().symbol for _ in range(4)] == ["q", "p", "r", "s"]


def test_build_replaces_previous_contents():
    heap = MinHeap(_leaves(("a", 1)))
    heap.build(_leaves(("b", 3), ("c", 2)))
    assert len(heap) == 2
    assert heap.extract_min().symbol == "c"


def test_size_tracks_merge_steps():
    heap = MinHeap(_leaves(("a", 1), ("b", 2), ("c", 3)))
    left, right = heap.extract_min(), heap.extract_min()
    heap.insert(HuffmanNode(None, left.weight + right.weight, left, right))
    assert len(heap) == 2
    assert heap


def test_extract_from_empty_queue_raises():
    heap = MinHeap()
    assert not heap
    with pytest.raises(QueueUnderflowError):
        heap.extract_min()
    with pytest.raises(IndexError):
        heap.peek()
