import itertools
import math

import pytest

from decision_optimization import solver as solver_module
from decision_optimization.nodes import DONT_CARE, Branch, Leaf, Literal, evaluate
from decision_optimization.solver import (
    DecisionTableSolver,
    SearchReport,
    analyze_all_diagrams,
    optimal_diagrams,
    permutations,
    select_optimal,
)
from decision_optimization.truth_tables import (
    InvalidTableSizeError,
    index_to_assignment,
    parse_outputs,
)


def leaf(text):
    return Leaf(Literal(text))


def iter_leaves(node):
    if node.kind == "leaf":
        yield node
    else:
        yield from iter_leaves(node.high)
        yield from iter_leaves(node.low)


@pytest.mark.parametrize("n", range(6))
def test_permutations_are_complete_and_distinct(n):
    orders = list(permutations(n))
    assert len(orders) == math.factorial(n)
    assert len(set(orders)) == len(orders)
    assert set(orders) == set(itertools.permutations(range(n)))
    assert orders[0] == tuple(range(n))


def test_permutations_are_restartable():
    assert list(permutations(4)) == list(permutations(4))
    assert list(permutations(3)) == [
        (0, 1, 2),
        (1, 0, 2),
        (2, 0, 1),
        (0, 2, 1),
        (1, 2, 0),
        (2, 1, 0),
    ]


def test_analyze_assigns_sequential_ids():
    results = analyze_all_diagrams(list("ABCDEFGH"))
    assert [r.id for r in results] == list(range(1, 7))
    assert [r.order for r in results] == list(permutations(3))


def test_single_variable_scenario():
    results = analyze_all_diagrams(["A", "A", "B", "B"])
    assert [r.score for r in results] == [2, 2]
    for result in results:
        assert result.root == Branch(0, leaf("A"), leaf("B"))

    optimal = optimal_diagrams(["A", "A", "B", "B"])
    assert [r.id for r in optimal] == [1, 2]


def test_constant_table_scenario():
    for result in analyze_all_diagrams(["X"] * 4):
        assert result.root == leaf("X")
        assert result.score == 1


def test_single_cell_table():
    (result,) = analyze_all_diagrams(["Z"])
    assert result.order == ()
    assert result.root == leaf("Z")
    assert result.score == 1


@pytest.mark.parametrize("position", range(4))
def test_dont_care_scenario(position):
    table = ["A", "B", "B", "B"] if position else ["B", "A", "A", "A"]
    table[position] = "don't care"
    results = analyze_all_diagrams(table)

    for result in optimal_diagrams(table):
        assert all(not node.is_dont_care for node in iter_leaves(result.root))

    # The don't-care cell is absorbed: the score equals that of the best filled-in table
    filled = [
        min(r.score for r in analyze_all_diagrams(table[:position] + [value] + table[position + 1:]))
        for value in ("A", "B")
    ]
    assert min(r.score for r in results) == min(filled)


def test_dont_care_half_table_is_absorbed():
    table = ["A", "B", "don't care", "don't care"]
    for result in analyze_all_diagrams(table):
        assert result.root == Branch(1, leaf("A"), leaf("B"))


def test_invalid_size_fails_before_building(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("diagram construction attempted")

    monkeypatch.setattr(solver_module, "build_diagram", fail)
    monkeypatch.setattr(solver_module, "reorder_table", fail)

    with pytest.raises(InvalidTableSizeError) as excinfo:
        analyze_all_diagrams(["A", "B", "C"])
    assert excinfo.value.length == 3
    assert "3" in str(excinfo.value)

    with pytest.raises(InvalidTableSizeError):
        DecisionTableSolver([])


def test_order_invariance_of_semantics(random_tables):
    for table in random_tables:
        outputs = parse_outputs(table)
        n_vars = len(outputs).bit_length() - 1
        for result in analyze_all_diagrams(table):
            for index, expected in enumerate(outputs):
                if expected.dont_care:
                    continue
                assert evaluate(result.root, index_to_assignment(index, n_vars)) == expected


def test_optimal_keeps_only_minimum_scores():
    table = ["T", "F", "F", "F", "F", "F", "F", "T"]
    results = analyze_all_diagrams(table)
    optimal = optimal_diagrams(table)
    best = min(r.score for r in results)

    assert optimal
    assert all(r.score == best for r in optimal)
    assert [r.id for r in optimal] == [r.id for r in results if r.score == best]


def test_select_optimal_empty():
    assert select_optimal([]) == []


def test_solver_report_and_print(capsys):
    solver = DecisionTableSolver(["T", "F", "F", "F"], verbose=True)
    report = solver.solve()

    assert isinstance(report, SearchReport)
    assert report.n_vars == 2
    assert report.min_score == 2
    assert len(report.optimal) == 2

    solver.print_result(report, var_names=["x", "y"])
    out = capsys.readouterr().out
    assert "Order #1 [0, 1]: 2 returns" in out
    assert "Minimum returns: 2" in out
    assert "x -> y" in out
    assert "y -> x" in out


def test_outputs_keep_dont_care_marker():
    solver = DecisionTableSolver(["-", "A"], dont_care="-")
    assert solver.outputs == [DONT_CARE, Literal("A")]
    assert solver.n_vars == 1
