"""
Cost model for decision diagrams.

The score of a diagram is the number of return statements a merge-aware
code generator emits for it. The order search minimizes this score, so it
must match what the renderers in export.py produce for every tree.
"""

from .merge import can_merge
from .nodes import BRANCH, LEAF, Node


def optimized_return_count(node: Node) -> int:
    """
    Predict the number of terminal branches after chain merging.

    A mergeable decision shares its fallback with its high child, so it
    adds nothing of its own. Applied at every level, this collapses chains
    of any length one node at a time.
    """
    if node.kind == LEAF:
        return 1

    if can_merge(node):
        return optimized_return_count(node.high)

    return optimized_return_count(node.high) + optimized_return_count(node.low)


def decision_count(node: Node) -> int:
    """Number of decision nodes in a diagram."""
    if node.kind != BRANCH:
        return 0
    return 1 + decision_count(node.high) + decision_count(node.low)


def tested_variables(node: Node) -> set[int]:
    """Original indices of the variables a diagram actually tests."""
    if node.kind != BRANCH:
        return set()
    return {node.var_index} | tested_variables(node.high) | tested_variables(node.low)
