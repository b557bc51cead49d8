import pytest

from decision_optimization.nodes import DONT_CARE, Literal
from decision_optimization.truth_tables import (
    DC_INPUT_STRING,
    InvalidTableSizeError,
    assignment_to_index,
    decision_table,
    index_to_assignment,
    parse_outputs,
    validate_table_size,
)


@pytest.mark.parametrize("length, n_vars", [(1, 0), (2, 1), (4, 2), (8, 3), (64, 6)])
def test_validate_table_size(length, n_vars):
    assert validate_table_size(length) == n_vars


@pytest.mark.parametrize("length", [0, 3, 5, 6, 12])
def test_validate_table_size_rejects(length):
    with pytest.raises(InvalidTableSizeError) as excinfo:
        validate_table_size(length)
    assert excinfo.value.length == length
    assert f"({length})" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_parse_outputs_translates_dont_care():
    values = parse_outputs(["A", DC_INPUT_STRING, 3, True])
    assert values == [Literal("A"), DONT_CARE, Literal("3"), Literal("True")]


def test_parse_outputs_custom_marker_and_nested_rows():
    values = parse_outputs([["A", "-"], ["don't care", "B"]], dont_care="-")
    assert values == [Literal("A"), DONT_CARE, Literal("don't care"), Literal("B")]


def test_decision_table_layout():
    assert decision_table(0) == [[]]
    assert decision_table(1) == [[True], [False]]
    assert decision_table(2, "T", "F") == [
        ["T", "T"],
        ["T", "F"],
        ["F", "T"],
        ["F", "F"],
    ]
    assert len(decision_table(4)) == 16


def test_assignment_index_round_trip():
    for index in range(8):
        assignment = index_to_assignment(index, 3)
        assert assignment_to_index(assignment) == index
    assert index_to_assignment(0, 3) == (True, True, True)
    assert index_to_assignment(6, 3) == (False, False, True)
