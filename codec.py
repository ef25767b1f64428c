from typing import Any, Iterable, List, Optional

from huffman import (
    Code,
    InvalidCodeError,
    Leaf,
    TreeNode,
    TruncatedStreamError,
    UnknownSymbolError,
    codes_from_tree,
)


def encode(tree: TreeNode, symbols: Iterable[Any]) -> List[int]:
    """Encode ``symbols`` into a list of bits using ``tree``.

    :param tree: Huffman tree built by :func:`huffman.build_tree`.
    :type tree: TreeNode
    :param symbols: Symbols to encode, in order.
    :type symbols: Iterable[Any]
    :returns: Concatenated root-to-leaf codes, one int (0 or 1) per bit.
    :rtype: List[int]
    :raises UnknownSymbolError: If a symbol has no leaf in ``tree``.
    """
    codes = codes_from_tree(tree)
    bits: List[int] = []
    for symbol in symbols:
        try:
            code = codes[symbol]
        except KeyError:
            raise UnknownSymbolError(symbol) from None
        bits.extend(code)
    return bits


def decode(
    tree: TreeNode, bits: Iterable[int], count: Optional[int] = None
) -> List[Any]:
    """Decode a bit sequence produced by :func:`encode`.

    Bits are consumed one at a time: 0 descends left, 1 descends right, and
    reaching a leaf emits its symbol and restarts at the root. For a tree
    that is a single leaf every ``0`` bit stands for one symbol.

    :param tree: The tree the bits were encoded with.
    :type tree: TreeNode
    :param bits: Bits to decode.
    :type bits: Iterable[int]
    :param count: Stop after this many symbols and ignore the remaining
                  bits (e.g. byte padding). ``None`` decodes every bit.
    :type count: Optional[int]
    :returns: Decoded symbols.
    :rtype: List[Any]
    :raises TruncatedStreamError: If the bits end in the middle of a code, or
                                  before ``count`` symbols were decoded.
    :raises InvalidCodeError: If a bit is not 0/1 or has no matching branch.
    """
    out: List[Any] = []
    if count is not None and count <= 0:
        return out

    node = tree
    for bit in bits:
        if bit not in (0, 1):
            raise InvalidCodeError(f"Invalid bit value: {bit!r}")
        if isinstance(node, Leaf):
            # single-leaf tree
            if bit != 0:
                raise InvalidCodeError("Invalid Huffman code")
        else:
            node = node.right if bit else node.left
        if isinstance(node, Leaf):
            out.append(node.symbol)
            if count is not None and len(out) >= count:
                return out
            node = tree

    if node is not tree:
        raise TruncatedStreamError(
            f"Bit stream ended mid-code after {len(out)} symbols", out
        )
    if count is not None and len(out) < count:
        raise TruncatedStreamError(
            f"Expected {count} symbols, decoded {len(out)}", out
        )
    return out


def code_to_string(code: Code) -> str:
    """Render a code as a string of ``0``/``1`` characters."""
    return "".join("1" if bit else "0" for bit in code)
