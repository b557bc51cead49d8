"""
Detection of mergeable condition chains.

A code generator can fold nested tests that share one fallback into a
single combined condition:

    if (A) {                      if (A && B) {
      if (B) {                        return 'X';
        return 'X';      ==>      }
      }                           return 'Y';
      return 'Y';
    }
    return 'Y';

The cost model applies the single-level check at every node; renderers
walk the whole chain at once. Both must agree on which nodes merge.
"""

from dataclasses import dataclass
from typing import Optional

from .nodes import BRANCH, LEAF, Leaf, Node


@dataclass
class MergeChain:
    """A run of decisions folded into one combined condition."""

    conditions: list[int]  # Tested variable indices, ascending
    consequence: Node      # First node breaking the chain
    fallback: Leaf         # Shared low terminal of the chain's head

    def __len__(self) -> int:
        return len(self.conditions)


def can_merge(node: Node) -> bool:
    """
    Single-level merge check.

    True when the low child is a terminal and the high child is a decision
    whose own low child is a terminal with the same value.
    """
    return (
        node.kind == BRANCH
        and node.low.kind == LEAF
        and node.high.kind == BRANCH
        and node.high.low.kind == LEAF
        and node.high.low.value == node.low.value
    )


def collect_merge_chain(node: Node) -> Optional[MergeChain]:
    """
    Walk the full merge chain starting at `node`.

    Starting from a decision whose low child is a terminal, follow high
    children while they are decisions falling back to the same value.
    Indices are sorted so that equivalent conditions render identically
    whatever order the diagram tested them in.

    Returns:
        The chain, or None when node is not a decision with a terminal
        low child. A one-element chain is the plain decision itself.
    """
    if node.kind != BRANCH or node.low.kind != LEAF:
        return None

    fallback = node.low
    conditions = []
    current = node

    while (
        current.kind == BRANCH
        and current.low.kind == LEAF
        and current.low.value == fallback.value
    ):
        conditions.append(current.var_index)
        current = current.high

    conditions.sort()
    return MergeChain(conditions=conditions, consequence=current, fallback=fallback)
