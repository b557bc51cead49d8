"""
Construction of reduced decision diagrams for one variable order.

The truth table is first rearranged so that halving it at each depth
matches branching on order[depth]. The diagram is then built bottom-up,
canonicalizing every decision through reduce().
"""

from typing import Sequence

from .nodes import LEAF, Branch, Node, NodeArena, Value


def reduce(var_index: int, high: Node, low: Node, arena: NodeArena = None) -> Node:
    """
    Canonicalize a decision on var_index over two built subtrees.

    Rules, in order:
    1. Both children don't-care: the decision is itself don't-care
    2. One child don't-care: keep the decided side
    3. Structurally equal children: the test cannot affect the outcome
    4. Otherwise allocate a new decision node

    Args:
        var_index: Original index of the tested variable
        high: Subtree for the variable being true
        low: Subtree for the variable being false
        arena: Arena to allocate the new node in, if any

    Returns:
        The canonical node for this decision
    """
    high_dc = high.kind == LEAF and high.is_dont_care
    low_dc = low.kind == LEAF and low.is_dont_care

    if high_dc and low_dc:
        return high
    if high_dc:
        return low
    if low_dc:
        return high
    if high == low:
        return high

    if arena is None:
        return Branch(var_index, high, low)
    return arena.branch(var_index, high, low)


def _check_order(order: Sequence[int], n_vars: int):
    if sorted(order) != list(range(n_vars)):
        raise ValueError(
            f"Variable order {list(order)} is not a permutation of 0..{n_vars - 1}"
        )


def build_diagram(
    outputs: Sequence[Value],
    order: Sequence[int],
    depth: int = 0,
    arena: NodeArena = None,
) -> Node:
    """
    Build the reduced diagram of an already reordered table.

    The first half of `outputs` is the branch where order[depth] is true,
    the second half the branch where it is false.

    Args:
        outputs: 2^k output values, laid out by reorder_table()
        order: The k original variable indices, root first
        depth: Current recursion depth
        arena: Arena receiving every allocated node

    Returns:
        Root of the reduced diagram
    """
    if depth == 0:
        if len(outputs) != 1 << len(order):
            raise ValueError(
                f"Table of {len(outputs)} cells does not match {len(order)} variables"
            )
        _check_order(order, len(order))
    if arena is None:
        arena = NodeArena()

    if len(outputs) == 1:
        return arena.leaf(outputs[0])

    mid = len(outputs) // 2
    high = build_diagram(outputs[:mid], order, depth + 1, arena)
    low = build_diagram(outputs[mid:], order, depth + 1, arena)

    return reduce(order[depth], high, low, arena)


def reorder_table(table: Sequence[Value], n_vars: int, order: Sequence[int]) -> list[Value]:
    """
    Rearrange a table so that recursive halving follows `order`.

    Destination index i is read as a path: bit (n-1-depth) is the branch
    taken at that depth. Each set path bit sets bit (n-1-order[depth]) of
    the source index.

    Args:
        table: Output values in the original row layout
        n_vars: Number of input variables
        order: Original variable indices, root first

    Returns:
        The table in path order for this variable order
    """
    _check_order(order, n_vars)

    reordered = []
    for i in range(len(table)):
        source = 0
        for depth in range(n_vars):
            if (i >> (n_vars - 1 - depth)) & 1:
                source |= 1 << (n_vars - 1 - order[depth])
        reordered.append(table[source])

    return reordered
