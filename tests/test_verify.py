import pytest

from decision_optimization import verify as verify_module
from decision_optimization.nodes import Branch, Leaf, Literal, evaluate
from decision_optimization.solver import DecisionTableSolver, analyze_all_diagrams, optimal_diagrams
from decision_optimization.truth_tables import index_to_assignment, parse_outputs
from decision_optimization.verify import (
    count_returns,
    diagrams_equivalent,
    find_counterexample,
    print_verification,
    verify_diagram,
    verify_result,
)


def leaf(text):
    return Leaf(Literal(text))


def test_verify_result_passes_for_every_order(random_tables):
    for table in random_tables:
        outputs = parse_outputs(table)
        for result in analyze_all_diagrams(table):
            correct, errors = verify_result(result, outputs)
            assert correct, errors


def test_verify_diagram_reports_wrong_rows():
    outputs = parse_outputs(["A", "A", "B", "B"])
    correct, errors = verify_diagram(Branch(1, leaf("A"), leaf("B")), outputs)
    assert not correct
    assert errors == [
        "Row 1 (TF): expected A, got B",
        "Row 2 (FT): expected B, got A",
    ]


def test_verify_diagram_ignores_dont_care_rows():
    outputs = parse_outputs(["A", "don't care", "B", "B"])
    correct, errors = verify_diagram(Branch(0, leaf("A"), leaf("B")), outputs)
    assert correct and errors == []


def test_counterexample_between_different_diagrams():
    first = Branch(0, leaf("A"), leaf("B"))
    second = Branch(1, leaf("A"), leaf("B"))
    assignment = find_counterexample(first, second, 2)

    assert assignment is not None
    assert len(assignment) == 2
    assert evaluate(first, assignment) != evaluate(second, assignment)
    assert not diagrams_equivalent(first, second, 2)


def test_no_counterexample_between_optimal_orders():
    for table in (["T", "F", "F", "F"], ["A", "B", "B", "A", "C", "C", "A", "B"]):
        results = analyze_all_diagrams(table)
        n_vars = len(table).bit_length() - 1
        for result in results[1:]:
            assert find_counterexample(results[0].root, result.root, n_vars) is None


def test_dont_care_rows_can_be_excluded():
    # Both diagrams honour ["A", don't care, "B", "B"] but differ on row 1
    first = Branch(0, leaf("A"), leaf("B"))
    second = Branch(1, Branch(0, leaf("A"), leaf("B")), leaf("B"))

    assert find_counterexample(first, second, 2) == index_to_assignment(1, 2)
    assert diagrams_equivalent(first, second, 2, excluded=[index_to_assignment(1, 2)])


def test_counterexample_rejects_out_of_range_variables():
    with pytest.raises(ValueError):
        find_counterexample(Branch(3, leaf("A"), leaf("B")), leaf("A"), 2)


def test_constant_diagrams():
    assert diagrams_equivalent(leaf("A"), leaf("A"), 0)
    assert find_counterexample(leaf("A"), leaf("B"), 0) == ()


def test_count_returns_matches_score():
    for result in analyze_all_diagrams(["A", "B", "B", "B", "C", "B", "A", "A"]):
        assert count_returns(result.root) == result.score


def test_print_verification(capsys):
    solver = DecisionTableSolver(["A", "don't care", "B", "B"])
    results = optimal_diagrams(["A", "don't care", "B", "B"])

    assert print_verification(results, solver.outputs, var_names=["x", "y"])
    out = capsys.readouterr().out
    assert "#1    [x, y] PASSED" in out
    assert "All correct: True" in out


class UndecidedSolver:
    def __init__(self, bootstrap_with=None):
        self.clauses = bootstrap_with

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def solve(self):
        return None


def test_undecided_solver_raises(monkeypatch):
    monkeypatch.setattr(verify_module, "Solver", UndecidedSolver)
    with pytest.raises(RuntimeError):
        find_counterexample(leaf("A"), leaf("B"), 0)
