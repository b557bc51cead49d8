"""
Node model for reduced decision diagrams.

A diagram is a tree built from two node kinds:
- Leaf: a terminal holding an output value
- Branch: a test on one input variable with a high (true) and low (false) child

Output values are either a Literal taken from the truth table or the
DONT_CARE marker. Both are frozen dataclasses, so comparisons are structural
and a don't-care can never collide with a literal string, including the
text that marks don't-care cells in the input.

Every node carries an explicit `kind` discriminant; consumers dispatch on
`node.kind` rather than on the node's class.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Sequence, Union

LEAF = "leaf"
BRANCH = "branch"


@dataclass(frozen=True)
class Literal:
    """A concrete output value copied from the truth table."""

    text: str
    dont_care: ClassVar[bool] = False

    def __str__(self):
        return self.text


@dataclass(frozen=True)
class DontCare:
    """An unconstrained output; any value satisfies it."""

    dont_care: ClassVar[bool] = True

    def __str__(self):
        return "don't care"


DONT_CARE = DontCare()

Value = Union[Literal, DontCare]


@dataclass(frozen=True)
class Leaf:
    """Terminal node holding an output value."""

    value: Value
    index: int = field(default=-1, compare=False, repr=False)
    kind: str = field(default=LEAF, init=False, repr=False)

    @property
    def is_dont_care(self) -> bool:
        return self.value.dont_care


@dataclass(frozen=True)
class Branch:
    """
    Decision node testing one input variable.

    var_index identifies the original input column, independent of the
    depth at which the variable was tested while building. Equality is
    deep: same variable and recursively equal children. The arena index
    does not take part in comparisons.
    """

    var_index: int
    high: "Node"
    low: "Node"
    index: int = field(default=-1, compare=False, repr=False)
    kind: str = field(default=BRANCH, init=False, repr=False)


Node = Union[Leaf, Branch]


class NodeArena:
    """
    Allocates the nodes of one diagram build.

    Each node receives a stable index in creation order. Renderers key their
    per-traversal labels on these indices instead of on object identity.
    """

    def __init__(self):
        self.nodes: list[Node] = []

    def leaf(self, value: Value) -> Leaf:
        node = Leaf(value, index=len(self.nodes))
        self.nodes.append(node)
        return node

    def branch(self, var_index: int, high: Node, low: Node) -> Branch:
        node = Branch(var_index, high, low, index=len(self.nodes))
        self.nodes.append(node)
        return node

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]


def evaluate(node: Node, assignment: Sequence[bool]) -> Value:
    """
    Follow a diagram from the root for one input assignment.

    Args:
        node: Root of the diagram
        assignment: Truth value per original variable index

    Returns:
        The output value of the terminal that is reached
    """
    while node.kind == BRANCH:
        node = node.high if assignment[node.var_index] else node.low
    return node.value


def variable_name(var_index: int, names: Sequence[str] = ()) -> str:
    """Name for a variable; positional `input[i]` when no name was supplied."""
    if var_index < len(names) and names[var_index]:
        return names[var_index]
    return f"input[{var_index}]"
