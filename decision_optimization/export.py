"""
Export optimal decision diagrams to code and flowcharts.

Every exporter takes the list of search results to render and returns one
string per distinct rendering. Results whose bodies come out textually
identical (ignoring the ID header) are emitted once, under the lowest id.
"""

from typing import Callable, Sequence

from .merge import collect_merge_chain
from .nodes import LEAF, Node, Value, variable_name
from .solver import SearchResult

DEFAULT_FUNC_NAME = "decideLogic"


def dedupe_renderings(
    results: Sequence[SearchResult],
    render: Callable[[Node], str],
) -> list[tuple[int, str]]:
    """
    Render each result and drop repeated bodies.

    Args:
        results: Search results, in id order
        render: Produces the body text for a diagram root

    Returns:
        (id, body) pairs for the first result of each distinct body
    """
    seen: dict[str, int] = {}
    unique = []

    for result in sorted(results, key=lambda r: r.id):
        body = render(result.root)
        if body in seen:
            continue
        seen[body] = result.id
        unique.append((result.id, body))

    return unique


def _condition(var_indices: Sequence[int], arg_names: Sequence[str], joiner: str) -> str:
    return joiner.join(variable_name(i, arg_names) for i in var_indices)


# JavaScript


def js_value(value: Value) -> str:
    """JavaScript expression for an output value."""
    if value.dont_care:
        return "null"
    escaped = value.text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _js_body(node: Node, arg_names: Sequence[str], indent: int) -> str:
    spaces = "  " * indent

    if node.kind == LEAF:
        return f"{spaces}return {js_value(node.value)};\n"

    chain = collect_merge_chain(node)
    if chain is not None:
        lines = f"{spaces}if ({_condition(chain.conditions, arg_names, ' && ')}) {{\n"
        lines += _js_body(chain.consequence, arg_names, indent + 1)
        lines += f"{spaces}}}\n"
        lines += f"{spaces}return {js_value(chain.fallback.value)};\n"
        return lines

    lines = f"{spaces}if ({variable_name(node.var_index, arg_names)}) {{\n"
    lines += _js_body(node.high, arg_names, indent + 1)
    lines += f"{spaces}}}\n"
    lines += _js_body(node.low, arg_names, indent)
    return lines


def to_js_code(
    results: Sequence[SearchResult],
    func_name: str = DEFAULT_FUNC_NAME,
    arg_names: Sequence[str] = (),
) -> list[str]:
    """
    Export diagrams as JavaScript functions.

    Args:
        results: Search results to render
        func_name: Name of the generated function
        arg_names: Parameter names, by variable index. Variables without a
            name are read from a rest parameter as input[i].

    Returns:
        One function per distinct body, headed by an ID comment
    """
    arg_names = list(arg_names)
    params = ", ".join(arg_names) if arg_names else "...input"

    functions = []
    for result_id, body in dedupe_renderings(results, lambda root: _js_body(root, arg_names, 1)):
        functions.append(f"// ID: {result_id}\nfunction {func_name}({params}) {{\n{body}}}")

    return functions


# Python


def py_value(value: Value) -> str:
    """Python expression for an output value."""
    if value.dont_care:
        return "None"
    return repr(value.text)


def _py_body(node: Node, arg_names: Sequence[str], indent: int) -> str:
    spaces = "    " * indent

    if node.kind == LEAF:
        return f"{spaces}return {py_value(node.value)}\n"

    chain = collect_merge_chain(node)
    if chain is not None:
        lines = f"{spaces}if {_condition(chain.conditions, arg_names, ' and ')}:\n"
        lines += _py_body(chain.consequence, arg_names, indent + 1)
        lines += f"{spaces}return {py_value(chain.fallback.value)}\n"
        return lines

    lines = f"{spaces}if {variable_name(node.var_index, arg_names)}:\n"
    lines += _py_body(node.high, arg_names, indent + 1)
    lines += _py_body(node.low, arg_names, indent)
    return lines


def to_python_code(
    results: Sequence[SearchResult],
    func_name: str = DEFAULT_FUNC_NAME,
    arg_names: Sequence[str] = (),
) -> list[str]:
    """
    Export diagrams as Python functions.

    Same layout as to_js_code(); unnamed variables come from *input.
    """
    arg_names = list(arg_names)
    params = ", ".join(arg_names) if arg_names else "*input"

    functions = []
    for result_id, body in dedupe_renderings(results, lambda root: _py_body(root, arg_names, 1)):
        functions.append(f"# ID: {result_id}\ndef {func_name}({params}):\n{body}")

    return functions


# Flowcharts


class _NodeLabels:
    """Local labels N0, N1, ... in first-seen order, keyed by arena index."""

    def __init__(self):
        self.labels: dict[int, str] = {}

    def __getitem__(self, node: Node) -> str:
        if node.index < 0:
            raise ValueError(f"{node!r} was not allocated in a NodeArena")
        if node.index not in self.labels:
            self.labels[node.index] = f"N{len(self.labels)}"
        return self.labels[node.index]


def flowchart_elements(root: Node, arg_names: Sequence[str] = ()) -> tuple[str, list[tuple]]:
    """
    Walk a diagram into flowchart elements.

    Merge chains of two or more conditions collapse into one decision with
    the combined label; the intermediate decisions are skipped entirely.

    Returns:
        (root label, elements) where each element is one of
        ("value", label, Value), ("decision", label, text) or
        ("edge", source, target, taken) with taken True or False
    """
    labels = _NodeLabels()
    visited = set()
    elements = []

    def traverse(node: Node):
        if node.index in visited:
            return
        visited.add(node.index)

        node_id = labels[node]

        if node.kind == LEAF:
            elements.append(("value", node_id, node.value))
            return

        chain = collect_merge_chain(node)
        if chain is not None and len(chain) > 1:
            text = _condition(chain.conditions, arg_names, " && ")
            high, low = chain.consequence, chain.fallback
        else:
            text = variable_name(node.var_index, arg_names)
            high, low = node.high, node.low

        elements.append(("decision", node_id, text))

        high_id = labels[high]
        traverse(high)
        elements.append(("edge", node_id, high_id, True))

        low_id = labels[low]
        traverse(low)
        elements.append(("edge", node_id, low_id, False))

    root_id = labels[root]
    traverse(root)
    return root_id, elements


def _mermaid_escape(text: str) -> str:
    return text.replace('"', "#quot;")


def _mermaid_body(root: Node, func_name: str, arg_names: Sequence[str]) -> str:
    root_id, elements = flowchart_elements(root, arg_names)

    lines = ["graph TD"]
    lines.append(f'    Start(["{_mermaid_escape(func_name or "Start")}"]) --> {root_id}')

    for element in elements:
        if element[0] == "value":
            _, node_id, value = element
            value_str = "null" if value.dont_care else f'"{_mermaid_escape(value.text)}"'
            lines.append(f"    {node_id}[{value_str}]")
        elif element[0] == "decision":
            _, node_id, text = element
            lines.append(f'    {node_id}{{"{_mermaid_escape(text)}"}}')
        else:
            _, source, target, taken = element
            if taken:
                lines.append(f"    {source} -->|True| {target}")
            else:
                lines.append(f"    {source} -.->|False| {target}")

    return "\n".join(lines)


def to_mermaid(
    results: Sequence[SearchResult],
    func_name: str = DEFAULT_FUNC_NAME,
    arg_names: Sequence[str] = (),
) -> list[str]:
    """
    Export diagrams as Mermaid flowcharts.

    Args:
        results: Search results to render
        func_name: Label of the start node ("Start" when empty)
        arg_names: Condition names, by variable index

    Returns:
        One graph per distinct body, headed by a %% ID comment
    """
    arg_names = list(arg_names)
    graphs = []
    for result_id, body in dedupe_renderings(
        results, lambda root: _mermaid_body(root, func_name, arg_names)
    ):
        graphs.append(f"%% ID: {result_id}\n{body}")

    return graphs


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _dot_body(root: Node, func_name: str, arg_names: Sequence[str]) -> str:
    root_id, elements = flowchart_elements(root, arg_names)

    lines = [f'digraph "{_dot_escape(func_name or "Start")}" {{']
    lines.append("    rankdir=TB;")
    lines.append(f'    Start [shape=oval, style=filled, fillcolor=lightgray, label="{_dot_escape(func_name or "Start")}"];')
    lines.append(f"    Start -> {root_id};")

    for element in elements:
        if element[0] == "value":
            _, node_id, value = element
            label = "null" if value.dont_care else _dot_escape(value.text)
            lines.append(f'    {node_id} [shape=box, style=filled, fillcolor=lightpink, label="{label}"];')
        elif element[0] == "decision":
            _, node_id, text = element
            lines.append(f'    {node_id} [shape=diamond, style=filled, fillcolor=lightblue, label="{_dot_escape(text)}"];')
        else:
            _, source, target, taken = element
            if taken:
                lines.append(f'    {source} -> {target} [label="True"];')
            else:
                lines.append(f'    {source} -> {target} [label="False", style=dotted];')

    lines.append("}")
    return "\n".join(lines)


def to_dot(
    results: Sequence[SearchResult],
    func_name: str = DEFAULT_FUNC_NAME,
    arg_names: Sequence[str] = (),
) -> list[str]:
    """
    Export diagrams as Graphviz DOT flowcharts.

    Render with: dot -Tsvg logic.dot -o logic.svg

    Same element layout as to_mermaid(): diamonds for conditions, boxes
    for output values, solid True edges and dotted False edges.
    """
    arg_names = list(arg_names)
    graphs = []
    for result_id, body in dedupe_renderings(
        results, lambda root: _dot_body(root, func_name, arg_names)
    ):
        graphs.append(f"// ID: {result_id}\n{body}")

    return graphs
