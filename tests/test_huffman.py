import pytest

from huffman import (
    EmptyInputError,
    HuffmanError,
    Internal,
    Leaf,
    build_tree,
    codes_from_tree,
    count_symbols,
    leaves,
)


def _check_shape(node):
    if isinstance(node, Leaf):
        return node.weight
    assert isinstance(node, Internal)
    total = _check_shape(node.left) + _check_shape(node.right)
    assert node.weight == total
    return total


def test_build_empty_table_raises():
    with pytest.raises(EmptyInputError):
        build_tree({})


def test_build_all_zero_counts_raises():
    with pytest.raises(EmptyInputError):
        build_tree({"a": 0, "b": 0})


def test_empty_input_error_is_value_error():
    assert issubclass(EmptyInputError, HuffmanError)
    assert issubclass(EmptyInputError, ValueError)


def test_build_negative_count_raises():
    with pytest.raises(ValueError):
        build_tree({"a": 3, "b": -1})


def test_single_symbol_is_a_leaf():
    tree = build_tree({"A": 5})
    assert tree == Leaf("A", 5)
    assert codes_from_tree(tree) == {"A": (0,)}


def test_zero_count_symbols_are_skipped():
    tree = build_tree({"A": 5, "B": 0})
    assert isinstance(tree, Leaf)
    assert tree.symbol == "A"


def test_concrete_tree_shape(abcd_freqs):
    tree = build_tree(abcd_freqs)
    assert tree.weight == 9
    # C and D merge first, the pair ties with B and B was inserted earlier,
    # so B goes left; the weight-4 node pops before A.
    assert tree.right == Leaf("A", 5)
    assert tree.left.left == Leaf("B", 2)
    assert tree.left.right == Internal(2, Leaf("C", 1), Leaf("D", 1))


def test_concrete_codes(abcd_freqs):
    codes = codes_from_tree(build_tree(abcd_freqs))
    assert codes == {
        "A": (1,),
        "B": (0, 0),
        "C": (0, 1, 0),
        "D": (0, 1, 1),
    }
    assert [len(codes[s]) for s in "ABCD"] == [1, 2, 3, 3]


def test_ties_follow_insertion_order():
    codes = codes_from_tree(build_tree({"x": 1, "y": 1}))
    assert codes == {"x": (0,), "y": (1,)}
    codes = codes_from_tree(build_tree({"y": 1, "x": 1}))
    assert codes == {"y": (0,), "x": (1,)}


def test_build_is_deterministic():
    freqs = {s: (i % 4) + 1 for i, s in enumerate("abcdefghijklmnop")}
    t1 = build_tree(freqs)
    t2 = build_tree(dict(freqs))
    assert t1 == t2
    assert codes_from_tree(t1) == codes_from_tree(t2)


def test_weight_invariant_and_strict_binary_shape():
    freqs = {b: (b * 7919) % 97 + 1 for b in range(256)}
    tree = build_tree(freqs)
    assert tree.weight == sum(freqs.values())
    assert _check_shape(tree) == tree.weight


def test_every_symbol_in_exactly_one_leaf():
    freqs = {"a": 4, "b": 0, "c": 9, "d": 1, "e": 1}
    symbols = [leaf.symbol for leaf in leaves(build_tree(freqs))]
    assert sorted(symbols) == ["a", "c", "d", "e"]


def test_no_code_is_prefix_of_another():
    freqs = count_symbols(b"mississippi river banks are muddy in spring")
    codes = list(codes_from_tree(build_tree(freqs)).values())
    for i, a in enumerate(codes):
        for j, b in enumerate(codes):
            if i != j:
                assert b[:len(a)] != a


def test_count_symbols_keeps_first_occurrence_order():
    freqs = count_symbols(b"banana")
    assert list(freqs.items()) == [(ord("b"), 1), (ord("a"), 3), (ord("n"), 2)]
