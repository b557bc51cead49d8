"""
Truth table ingestion and generation.

A truth table is the output column of a decision table: one cell per
combination of n boolean inputs, 2^n cells in total. Row 0 is the
all-true combination. Bit (n-1-j) of a row index is 0 when input j is
true and 1 when it is false, so the first half of the table is the half
where input 0 is true.

Cells are opaque strings. The reserved DC_INPUT_STRING marks a don't-care
cell and is translated to DONT_CARE on ingestion.
"""

from typing import Any, Sequence

from .nodes import DONT_CARE, DontCare, Literal, Value

# Cell text that marks a don't-care output
DC_INPUT_STRING = "don't care"


class InvalidTableSizeError(ValueError):
    """Raised when a truth table does not hold 2^n cells."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"Table length ({length}) must be a power of two (1, 2, 4, 8, ...)"
        )


def validate_table_size(length: int) -> int:
    """
    Check that a table length is a power of two.

    Returns:
        The number of input variables, log2(length)

    Raises:
        InvalidTableSizeError: if length is zero or not a power of two
    """
    if length <= 0 or length & (length - 1):
        raise InvalidTableSizeError(length)
    return length.bit_length() - 1


def parse_outputs(table: Sequence[Any], dont_care: str = DC_INPUT_STRING) -> list[Value]:
    """
    Convert raw cells into output values.

    Nested rows (a 2-D range) are flattened row-major. Every other cell is
    converted with str(); the don't-care marker becomes DONT_CARE and all
    other text becomes a Literal.

    Args:
        table: Raw cells, possibly nested one level per row
        dont_care: Cell text that marks a don't-care output

    Returns:
        Flat list of output values
    """
    values = []
    for cell in table:
        if isinstance(cell, (list, tuple)):
            values.extend(parse_outputs(cell, dont_care))
        elif isinstance(cell, (Literal, DontCare)):
            values.append(cell)
        else:
            text = str(cell)
            values.append(DONT_CARE if text == dont_care else Literal(text))
    return values


def index_to_assignment(index: int, n_vars: int) -> tuple[bool, ...]:
    """Convert a row index to the truth value of each input (input 0 first)."""
    return tuple(not ((index >> (n_vars - 1 - j)) & 1) for j in range(n_vars))


def assignment_to_index(assignment: Sequence[bool]) -> int:
    """Convert per-input truth values back to a row index."""
    n_vars = len(assignment)
    index = 0
    for j, value in enumerate(assignment):
        if not value:
            index |= 1 << (n_vars - 1 - j)
    return index


def decision_table(n: int, true_value: Any = True, false_value: Any = False) -> list[list[Any]]:
    """
    Generate the input columns of a complete decision table.

    Rows follow the same layout as the output column, so row i of the
    result lines up with cell i of a truth table.

    Args:
        n: Number of inputs; the table has 2^n rows
        true_value: Cell used for a true input
        false_value: Cell used for a false input

    Returns:
        2^n rows of n cells each, or [[]] when n <= 0
    """
    if n <= 0:
        return [[]]

    return [
        [true_value if value else false_value for value in index_to_assignment(i, n)]
        for i in range(2 ** n)
    ]


def print_truth_table(n: int, outputs: Sequence[Value] = None, var_names: Sequence[str] = ()):
    """Print the input combinations, and the outputs if given."""
    names = [var_names[j] if j < len(var_names) else f"in{j}" for j in range(n)]
    width = max([len(name) for name in names] + [1])

    header = f"{'Row':>5} | " + " ".join(f"{name:>{width}}" for name in names)
    if outputs is not None:
        header += " | Output"
    print(header)
    print("-" * len(header))

    for i, row in enumerate(decision_table(n, "T", "F")):
        line = f"{i:>5} | " + " ".join(f"{cell:>{width}}" for cell in row)
        if outputs is not None:
            line += f" | {outputs[i]}"
        print(line)
