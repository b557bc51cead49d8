"""Minimal decision logic generation from truth tables via exhaustive variable order search."""

from .nodes import Literal, DontCare, DONT_CARE, Leaf, Branch, NodeArena, evaluate
from .diagram import reduce, build_diagram, reorder_table
from .merge import MergeChain, can_merge, collect_merge_chain
from .cost import optimized_return_count
from .solver import (
    DecisionTableSolver,
    SearchResult,
    SearchReport,
    permutations,
    analyze_all_diagrams,
    optimal_diagrams,
)
from .truth_tables import (
    DC_INPUT_STRING,
    InvalidTableSizeError,
    parse_outputs,
    decision_table,
)
from .export import to_js_code, to_python_code, to_mermaid, to_dot
from .verify import verify_result, find_counterexample, diagrams_equivalent, count_returns

__all__ = [
    "Literal",
    "DontCare",
    "DONT_CARE",
    "Leaf",
    "Branch",
    "NodeArena",
    "evaluate",
    "reduce",
    "build_diagram",
    "reorder_table",
    "MergeChain",
    "can_merge",
    "collect_merge_chain",
    "optimized_return_count",
    "DecisionTableSolver",
    "SearchResult",
    "SearchReport",
    "permutations",
    "analyze_all_diagrams",
    "optimal_diagrams",
    "DC_INPUT_STRING",
    "InvalidTableSizeError",
    "parse_outputs",
    "decision_table",
    "to_js_code",
    "to_python_code",
    "to_mermaid",
    "to_dot",
    "verify_result",
    "find_counterexample",
    "diagrams_equivalent",
    "count_returns",
]
__version__ = "0.1.0"
