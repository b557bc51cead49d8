"""
Verification of generated decision diagrams.

- verify_result() checks a diagram against its truth table row by row
- find_counterexample() checks two diagrams for equivalence with a SAT miter
- count_returns() counts return statements the way the code exporters
  emit them, to cross-check the cost model
"""

from typing import Optional, Sequence

from pysat.formula import CNF
from pysat.solvers import Solver

from .merge import collect_merge_chain
from .nodes import BRANCH, LEAF, Node, Value, evaluate, variable_name
from .solver import SearchResult
from .truth_tables import index_to_assignment, validate_table_size


def verify_diagram(root: Node, outputs: Sequence[Value]) -> tuple[bool, list[str]]:
    """
    Check a diagram against every row of a truth table.

    Don't-care rows accept any output. Every other row must evaluate to
    exactly its literal.

    Args:
        root: Diagram to check
        outputs: Parsed output values in the original row layout

    Returns:
        Tuple of (all_correct, list of error messages)
    """
    n_vars = validate_table_size(len(outputs))
    errors = []

    for index, expected in enumerate(outputs):
        if expected.dont_care:
            continue

        assignment = index_to_assignment(index, n_vars)
        actual = evaluate(root, assignment)

        if actual != expected:
            bits = "".join("T" if value else "F" for value in assignment)
            errors.append(f"Row {index} ({bits}): expected {expected}, got {actual}")

    return len(errors) == 0, errors


def verify_result(result: SearchResult, outputs: Sequence[Value]) -> tuple[bool, list[str]]:
    """Check a search result's diagram against its truth table."""
    return verify_diagram(result.root, outputs)


def _leaf_paths(root: Node) -> list[tuple[list[int], Value]]:
    """Every root-to-leaf path as DIMACS literals (variable i is i + 1)."""
    paths = []
    stack = [(root, [])]

    while stack:
        node, path = stack.pop()
        if node.kind == LEAF:
            paths.append((path, node.value))
            continue
        var = node.var_index + 1
        stack.append((node.low, path + [-var]))
        stack.append((node.high, path + [var]))

    return paths


def find_counterexample(
    first: Node,
    second: Node,
    n_vars: int,
    excluded: Sequence[Sequence[bool]] = (),
) -> Optional[tuple[bool, ...]]:
    """
    Search for an input on which two diagrams give different literals.

    Builds a miter: a reach variable per leaf implies that leaf's path
    literals, and a difference variable per pair of leaves with distinct
    literal values implies both reach variables. At least one difference
    must hold. Don't-care leaves are compatible with any value.

    Args:
        first: Root of the first diagram
        second: Root of the second diagram
        n_vars: Number of input variables
        excluded: Assignments to ignore, such as don't-care rows

    Returns:
        A distinguishing assignment (one bool per variable), or None when
        the diagrams agree wherever both are defined

    Raises:
        RuntimeError: if the SAT solver returns no verdict
    """
    for root in (first, second):
        stack = [root]
        while stack:
            node = stack.pop()
            if node.kind == BRANCH:
                if not 0 <= node.var_index < n_vars:
                    raise ValueError(
                        f"Diagram tests variable {node.var_index} outside 0..{n_vars - 1}"
                    )
                stack.extend((node.high, node.low))

    cnf = CNF()
    next_var = n_vars + 1

    def new_var():
        nonlocal next_var
        var = next_var
        next_var += 1
        return var

    def encode(root: Node) -> list[tuple[int, Value]]:
        reach = []
        for path, value in _leaf_paths(root):
            if value.dont_care:
                continue
            r = new_var()
            for lit in path:
                cnf.append([-r, lit])
            reach.append((r, value))
        return reach

    first_reach = encode(first)
    second_reach = encode(second)

    differences = []
    for r1, v1 in first_reach:
        for r2, v2 in second_reach:
            if v1 == v2:
                continue
            d = new_var()
            cnf.append([-d, r1])
            cnf.append([-d, r2])
            differences.append(d)

    if not differences:
        return None

    cnf.append(differences)
    for assignment in excluded:
        if not assignment:
            return None
        cnf.append([-(i + 1) if value else i + 1 for i, value in enumerate(assignment)])

    with Solver(bootstrap_with=cnf) as solver:
        status = solver.solve()
        if status is None:
            raise RuntimeError("SAT solver could not decide diagram equivalence")
        if not status:
            return None
        model = set(solver.get_model())

    return tuple((i + 1) in model for i in range(n_vars))


def diagrams_equivalent(
    first: Node,
    second: Node,
    n_vars: int,
    excluded: Sequence[Sequence[bool]] = (),
) -> bool:
    """True when no input outside `excluded` separates the two diagrams."""
    return find_counterexample(first, second, n_vars, excluded) is None


def count_returns(node: Node) -> int:
    """
    Count return statements as the code exporters emit them.

    A merge chain emits the returns of its consequence plus one shared
    fallback; an unmerged decision emits both sides.
    """
    if node.kind == LEAF:
        return 1

    chain = collect_merge_chain(node)
    if chain is not None:
        return count_returns(chain.consequence) + 1

    return count_returns(node.high) + count_returns(node.low)


def print_verification(results: Sequence[SearchResult], outputs: Sequence[Value], var_names: Sequence[str] = ()) -> bool:
    """Verify each result and print a summary line per diagram."""
    n_vars = validate_table_size(len(outputs))
    all_correct = True

    print("Verification")
    print("=" * 60)

    for result in results:
        correct, errors = verify_result(result, outputs)
        order_str = ", ".join(variable_name(i, var_names) for i in result.order)
        status = "PASSED" if correct else "FAILED"
        print(f"  #{result.id:<4} [{order_str}] {status}")
        for err in errors:
            print(f"      {err}")
        all_correct = all_correct and correct

    if len(results) > 1:
        dont_care_rows = [
            index_to_assignment(index, n_vars)
            for index, value in enumerate(outputs)
            if value.dont_care
        ]
        reference = results[0]
        for result in results[1:]:
            counterexample = find_counterexample(
                reference.root, result.root, n_vars, dont_care_rows
            )
            if counterexample is not None:
                bits = "".join("T" if value else "F" for value in counterexample)
                print(f"  #{reference.id} and #{result.id} differ on {bits}")
                all_correct = False

    print("-" * 60)
    print(f"All correct: {all_correct}")
    return all_correct
