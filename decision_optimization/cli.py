"""Command-line interface for decision logic generation."""

import argparse
import csv
import sys

from .solver import DecisionTableSolver
from .truth_tables import DC_INPUT_STRING, print_truth_table
from .export import DEFAULT_FUNC_NAME, to_js_code, to_python_code, to_mermaid, to_dot
from .verify import print_verification

EXPORTERS = {
    "js": to_js_code,
    "python": to_python_code,
    "mermaid": to_mermaid,
    "dot": to_dot,
}


def split_row(line: str) -> list[str]:
    """
    Split one line of a table file into cells.

    Lines containing a comma are CSV, lines containing a tab are
    tab-separated, and anything else is split on spaces (double-quote a
    cell that contains spaces). Empty cells are kept, except trailing
    ones at the end of the line.
    """
    if "," in line:
        delimiter = ","
    elif "\t" in line:
        delimiter = "\t"
    else:
        delimiter = " "
        line = line.strip()

    if not line.strip():
        return []

    (row,) = csv.reader([line], delimiter=delimiter, skipinitialspace=True)
    cells = [cell.strip() for cell in row]
    while cells and not cells[-1]:
        cells.pop()
    return cells


def read_cells(path: str) -> list[str]:
    """Read output cells from a table file ('-' for stdin), row-major."""
    if path == "-":
        text = sys.stdin.read()
    else:
        with open(path, newline="") as f:
            text = f.read()

    return [cell for line in text.splitlines() for cell in split_row(line)]


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate minimal decision logic from a truth table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  decision-optimize A A B B                 Search all orders of a 2-input table
  decision-optimize A A B B -f js --args x y
                                            Output as JavaScript function(s)
  decision-optimize -f mermaid -i table.csv Output Mermaid flowchart(s)
  decision-optimize --truth-table 3         Show the input rows for 3 inputs
  decision-optimize --verify A "don't care" B B
                                            Check optimal diagrams against the table
        """,
    )

    parser.add_argument(
        "values",
        nargs="*",
        help="Output column of the truth table (2^n cells, row 0 = all inputs true)",
    )
    parser.add_argument(
        "--file", "-i",
        help="Read output cells from a CSV, tab or space separated file ('-' for stdin)",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "js", "python", "mermaid", "dot"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--name",
        default=DEFAULT_FUNC_NAME,
        help=f"Function name / start label (default: {DEFAULT_FUNC_NAME})",
    )
    parser.add_argument(
        "--args",
        nargs="+",
        default=[],
        metavar="NAME",
        help="Argument names, one per input variable",
    )
    parser.add_argument(
        "--dont-care",
        default=DC_INPUT_STRING,
        help=f"Cell text marking a don't-care output (default: {DC_INPUT_STRING!r})",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Include every variable order, not just the optimal ones",
    )
    parser.add_argument(
        "--truth-table",
        type=int,
        metavar="N",
        help="Print the input rows of an N-input decision table and exit",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Verify the optimal diagrams against the truth table",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    if args.truth_table is not None:
        print_truth_table(args.truth_table, var_names=args.args)
        return 0

    # Progress output would corrupt generated code
    quiet = args.format != "text"

    try:
        cells = read_cells(args.file) if args.file else args.values
        solver = DecisionTableSolver(
            cells,
            dont_care=args.dont_care,
            verbose=args.verbose and not quiet,
        )

        if not quiet:
            print("Decision Logic Optimizer")
            print("=" * 40)
            print(f"Inputs: {solver.n_vars}, cells: {len(solver.outputs)}")
            print()

        report = solver.solve()
        results = report.results if args.all else report.optimal

        if quiet:
            rendered = EXPORTERS[args.format](results, func_name=args.name, arg_names=args.args)
            print("\n\n".join(rendered))
        else:
            solver.print_result(report, var_names=args.args, show_all=args.all)

        if args.verify:
            print(file=sys.stderr if quiet else sys.stdout)
            stdout = sys.stdout
            if quiet:
                sys.stdout = sys.stderr
            try:
                correct = print_verification(report.optimal, solver.outputs, var_names=args.args)
            finally:
                sys.stdout = stdout
            if not correct:
                return 1

        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
