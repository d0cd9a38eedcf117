import heapq
import itertools

from huffman_errors import QueueUnderflowError


class MinHeap: # priority queue of tree nodes ordered by weight
    """
    Binary min-heap over anything with a ``weight`` attribute

    Entries are stored as (weight, sequence, node) so heapq never compares
    nodes directly. The sequence number grows with every insertion, which
    makes equal weights come out in insertion (FIFO) order.
    """

    def __init__(self, nodes=None):
        self._heap = []
        self._counter = itertools.count()
        if nodes is not None:
            self.build(nodes)

    def build(self, nodes):
        # Bulk load then heapify bottom-up in O(n)
        self._heap = [(node.weight, next(self._counter), node) for node in nodes]
        heapq.heapify(self._heap)

    def insert(self, node):
        heapq.heappush(self._heap, (node.weight, next(self._counter), node)) # sift-up

    def extract_min(self):
        if not self._heap:
            raise QueueUnderflowError()
        return heapq.heappop(self._heap)[2] # sift-down

    def peek(self):
        if not self._heap:
            raise QueueUnderflowError("peek called on an empty priority queue")
        return self._heap[0][2]

    def __len__(self):
        return len(self._heap)

    def __bool__(self):
        return bool(self._heap)
