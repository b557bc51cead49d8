"""
Variable order search for decision logic generation.

Builds a reduced decision diagram for every possible order of the input
variables, scores each one with the merge-aware cost model, and keeps the
orders that need the fewest return statements. Ties are kept: several
orders may share the minimum and all of them go on to the renderers.

The search is exhaustive over k! orders, each costing an O(2^k) reorder
and build, so it is meant for tables with a handful of inputs.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

from .cost import decision_count, optimized_return_count, tested_variables
from .diagram import build_diagram, reorder_table
from .nodes import Node, NodeArena, variable_name
from .truth_tables import DC_INPUT_STRING, parse_outputs, validate_table_size


@dataclass(frozen=True)
class SearchResult:
    """Diagram built for one variable order."""

    id: int                 # 1-based, in permutation generation order
    order: tuple[int, ...]  # Original variable indices, root first
    root: Node
    score: int              # Predicted return statements


@dataclass
class SearchReport:
    """All diagrams produced by one search."""

    n_vars: int
    results: list[SearchResult] = field(default_factory=list)

    @property
    def min_score(self) -> int:
        return min(r.score for r in self.results)

    @property
    def optimal(self) -> list[SearchResult]:
        return select_optimal(self.results)


def permutations(n: int) -> Iterator[tuple[int, ...]]:
    """
    Yield every permutation of 0..n-1 exactly once (Heap's algorithm).

    The sequence is deterministic; calling again restarts it. n = 0
    yields the single empty order.
    """
    permutation = list(range(n))
    counters = [0] * n

    yield tuple(permutation)

    i = 1
    while i < n:
        if counters[i] < i:
            k = counters[i] if i % 2 else 0
            permutation[i], permutation[k] = permutation[k], permutation[i]
            counters[i] += 1
            i = 1
            yield tuple(permutation)
        else:
            counters[i] = 0
            i += 1


def select_optimal(results: Sequence[SearchResult]) -> list[SearchResult]:
    """Keep the results sharing the minimum score, in id order."""
    if not results:
        return []
    min_score = min(r.score for r in results)
    return [r for r in results if r.score == min_score]


class DecisionTableSolver:
    """
    Exhaustive variable order search over one truth table.

    The table is validated and converted on construction, so an invalid
    size fails before any diagram is built.
    """

    def __init__(self, table: Sequence[Any], dont_care: str = DC_INPUT_STRING, verbose: bool = False):
        self.outputs = parse_outputs(table, dont_care)
        self.n_vars = validate_table_size(len(self.outputs))
        self.verbose = verbose

    def build(self, order: Sequence[int]) -> Node:
        """Build the reduced diagram for one variable order."""
        table = reorder_table(self.outputs, self.n_vars, order)
        return build_diagram(table, order, arena=NodeArena())

    def analyze(self) -> list[SearchResult]:
        """Build and score the diagram of every variable order."""
        results = []

        for result_id, order in enumerate(permutations(self.n_vars), start=1):
            root = self.build(order)
            score = optimized_return_count(root)
            results.append(SearchResult(id=result_id, order=order, root=root, score=score))

            if self.verbose:
                print(f"    Order #{result_id} {list(order)}: {score} returns", flush=True)

        return results

    def solve(self) -> SearchReport:
        """Run the full search."""
        if self.verbose:
            print(f"  Searching orders of {self.n_vars} inputs...", flush=True)

        report = SearchReport(n_vars=self.n_vars, results=self.analyze())

        if self.verbose:
            print(
                f"  Minimum {report.min_score} returns, "
                f"{len(report.optimal)} of {len(report.results)} orders optimal",
                flush=True,
            )

        return report

    def print_result(self, report: SearchReport, var_names: Sequence[str] = (), show_all: bool = False):
        """Pretty-print a search report."""
        print(f"\n{'=' * 60}")
        print(f"Decision Diagram Search: {report.n_vars} inputs, {len(report.results)} orders")
        print(f"{'=' * 60}")
        print(f"Minimum returns: {report.min_score}")

        shown = report.results if show_all else report.optimal
        title = "All orders" if show_all else "Optimal orders"
        print(f"\n{title} ({len(shown)}):")

        for result in shown:
            order_str = " -> ".join(variable_name(i, var_names) for i in result.order) or "(none)"
            used = len(tested_variables(result.root))
            marker = "*" if result.score == report.min_score else " "
            print(
                f" {marker}#{result.id:<4} {order_str:30} "
                f"{result.score} returns, {decision_count(result.root)} decisions, "
                f"{used} inputs tested"
            )


def analyze_all_diagrams(table: Sequence[Any], dont_care: str = DC_INPUT_STRING) -> list[SearchResult]:
    """
    Build and score a diagram for every variable order of a truth table.

    Args:
        table: 2^k output cells
        dont_care: Cell text that marks a don't-care output

    Returns:
        One result per order, ids starting at 1

    Raises:
        InvalidTableSizeError: if the table length is not a power of two
    """
    return DecisionTableSolver(table, dont_care).analyze()


def optimal_diagrams(table: Sequence[Any], dont_care: str = DC_INPUT_STRING) -> list[SearchResult]:
    """The results of analyze_all_diagrams() that share the minimum score."""
    return select_optimal(analyze_all_diagrams(table, dont_care))
