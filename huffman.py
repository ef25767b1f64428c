import heapq
from collections import Counter
from typing import Any, Dict, Hashable, Iterable, Mapping, NamedTuple, Tuple, Union


class HuffmanError(ValueError):
    """Base class for Huffman tree and codec errors."""


class EmptyInputError(HuffmanError):
    """Raised when a frequency table has no symbol with a positive count."""


class UnknownSymbolError(HuffmanError):
    """Raised when encoding a symbol that has no leaf in the tree.

    :ivar symbol: The offending symbol.
    """

    def __init__(self, symbol):
        super().__init__(f"Symbol not in tree: {symbol!r}")
        self.symbol = symbol


class TruncatedStreamError(HuffmanError):
    """Raised when a bit stream ends in the middle of a code.

    :ivar decoded: Symbols decoded before the stream ran out.
    :type decoded: list
    """

    def __init__(self, message, decoded=None):
        super().__init__(message)
        self.decoded = list(decoded or [])


class InvalidCodeError(HuffmanError):
    """Raised when a bit stream contains a bit that leads nowhere."""


class Leaf(NamedTuple):
    """Leaf of a Huffman tree.

    :ivar symbol: Symbol stored at this leaf.
    :ivar weight: Frequency of ``symbol``.
    """

    symbol: Any
    weight: int


class Internal(NamedTuple):
    """Internal node of a Huffman tree. Always has exactly two children.

    :ivar weight: Sum of both children's weights.
    :ivar left: Child reached with bit 0.
    :ivar right: Child reached with bit 1.
    """

    weight: int
    left: "TreeNode"
    right: "TreeNode"


TreeNode = Union[Leaf, Internal]
Code = Tuple[int, ...]


def build_tree(frequencies: Mapping[Hashable, int]) -> TreeNode:
    """Build a Huffman tree from a symbol frequency table.

    Ties between equal weights are broken by insertion order: leaves are
    numbered in the table's iteration order, and every merged node gets the
    next number. The first node removed from the heap becomes the left child.

    :param frequencies: Mapping from symbol to observed count.
    :type frequencies: Mapping[Hashable, int]
    :returns: Root of the tree; a single :class:`Leaf` when only one symbol
              has a positive count.
    :rtype: TreeNode
    :raises EmptyInputError: If no symbol has a positive count.
    :raises ValueError: If a count is negative.
    """
    heap = []
    seq = 0
    for symbol, freq in frequencies.items():
        if freq < 0:
            raise ValueError(f"Negative frequency for {symbol!r}: {freq}")
        if freq == 0:
            continue
        heap.append((freq, seq, Leaf(symbol, freq)))
        seq += 1

    if not heap:
        raise EmptyInputError("Frequency table has no positive counts")

    heapq.heapify(heap)

    while len(heap) > 1:
        left_weight, _, left = heapq.heappop(heap)
        right_weight, _, right = heapq.heappop(heap)
        weight = left_weight + right_weight
        heapq.heappush(heap, (weight, seq, Internal(weight, left, right)))
        seq += 1

    return heap[0][2]


def codes_from_tree(tree: TreeNode) -> Dict[Any, Code]:
    """Compute the code of every symbol in ``tree``.

    A tree made of a single leaf gives its symbol the one-bit code ``(0,)``.

    :param tree: Root of a Huffman tree.
    :type tree: TreeNode
    :returns: Mapping from symbol to its root-to-leaf bits.
    :rtype: Dict[Any, Tuple[int, ...]]
    """
    if isinstance(tree, Leaf):
        return {tree.symbol: (0,)}

    codes: Dict[Any, Code] = {}
    stack = [(tree, ())]
    while stack:
        node, prefix = stack.pop()
        if isinstance(node, Leaf):
            codes[node.symbol] = prefix
        else:
            stack.append((node.right, prefix + (1,)))
            stack.append((node.left, prefix + (0,)))
    return codes


def count_symbols(data: Iterable[Hashable]) -> Counter:
    """Tally symbol occurrences, keeping first-occurrence order.

    :param data: Symbols to count (iterating ``bytes`` yields ints).
    :type data: Iterable[Hashable]
    :returns: Frequency table.
    :rtype: Counter
    """
    return Counter(data)


def leaves(tree: TreeNode):
    """Yield every leaf of ``tree``, left to right."""
    stack = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)
