"""CLI commands: build, layout, inspect."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

from jsongraph.config import BuildOptions, load_config
from jsongraph.exceptions import DocumentTooDeepError, ParseError
from jsongraph.cli._format import print_json, print_lines, print_table, shorten
from jsongraph.graph.builder import build_graph
from jsongraph.graph.model import FieldsLabel, JsonGraph, JsonNode
from jsongraph.layout.engine import layout_graph
from jsongraph.parsing import parse_json

FileArg = Annotated[str, typer.Argument(help="JSON file to read, or '-' for stdin")]
MaxLabelOpt = Annotated[
    int | None,
    typer.Option("--max-label-chars", help="Truncate primitive labels past this length"),
]
RecurseEmptyOpt = Annotated[
    bool | None,
    typer.Option("--recurse-empty/--inline-empty", help="Give empty object properties their own node"),
]
OutputOpt = Annotated[str | None, typer.Option("--output", help="Write JSON to file")]


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        print(f"Error: '{source}' is not a file")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _build_options(max_label_chars: int | None, recurse_empty: bool | None) -> BuildOptions:
    """Project defaults from pyproject.toml, overridden by CLI flags."""
    base = load_config().build
    return BuildOptions(
        max_label_chars=base.max_label_chars if max_label_chars is None else max_label_chars,
        recurse_empty_containers=base.recurse_empty_containers if recurse_empty is None else recurse_empty,
    )


def _load_graph(source: str, options: BuildOptions) -> JsonGraph:
    text = _read_text(source)
    if not text.strip():
        return JsonGraph()
    try:
        value = parse_json(text)
    except ParseError as e:
        print(f"Error: {e.message}")
        raise typer.Exit(1) from e
    except DocumentTooDeepError as e:
        print(f"Error: {e.message} (depth limit, not a syntax error)")
        raise typer.Exit(1) from e
    return build_graph(value, options)


def _label_text(node: JsonNode) -> str:
    if isinstance(node.label, FieldsLabel):
        return ", ".join(row.display_text for row in node.label.rows) or "{}"
    return node.label.text


def build(
    file: FileArg,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    output: OutputOpt = None,
    max_label_chars: MaxLabelOpt = None,
    recurse_empty: RecurseEmptyOpt = None,
):
    """Build the node/edge graph for a JSON document."""
    graph = _load_graph(file, _build_options(max_label_chars, recurse_empty))

    if as_json or output:
        print_json("build", graph.to_dict(), output)
        return

    print(f"\nGraph: {len(graph.nodes)} nodes | {len(graph.edges)} edges\n")
    rows = [
        [n.id, n.kind.value, str(n.outgoing_handle_count), shorten(_label_text(n))]
        for n in graph.nodes
    ]
    print_lines(print_table(["Node", "Kind", "Handles", "Label"], rows))

    if graph.edges:
        print()
        edge_rows = [
            [e.source, str(e.source_handle_index), e.target, e.label or "—"]
            for e in graph.edges
        ]
        print_lines(print_table(["Source", "Handle", "Target", "Label"], edge_rows))


def layout(
    file: FileArg,
    output: OutputOpt = None,
    max_label_chars: MaxLabelOpt = None,
    recurse_empty: RecurseEmptyOpt = None,
):
    """Build and lay out the graph, printing positioned nodes as JSON."""
    config = load_config()
    graph = _load_graph(file, _build_options(max_label_chars, recurse_empty))
    positioned = layout_graph(graph, config.layout)

    data = positioned.to_dict()
    data["width"] = positioned.width
    data["height"] = positioned.height
    print_json("layout", data, output)


def inspect(
    file: FileArg,
    max_depth: Annotated[int, typer.Option("--max-depth", help="Stop expanding below this depth")] = 8,
    max_label_chars: MaxLabelOpt = None,
    recurse_empty: RecurseEmptyOpt = None,
):
    """Show the graph as a tree, with edge labels and handle indices."""
    from rich.console import Console
    from rich.markup import escape
    from rich.tree import Tree

    graph = _load_graph(file, _build_options(max_label_chars, recurse_empty))
    console = Console()

    if not graph.nodes:
        console.print("(empty graph)")
        return

    def describe(node: JsonNode) -> str:
        return f"[bold]{node.id}[/bold] [dim]{node.kind.value}[/dim] {escape(shorten(_label_text(node), 60))}"

    top = Tree(f"{len(graph.nodes)} nodes, {len(graph.edges)} edges, {len(graph.roots)} roots")
    stack = [(top.add(describe(root)), root.id, 0) for root in graph.roots]
    stack.reverse()
    children: dict[str, list] = {}
    for edge in graph.edges:
        children.setdefault(edge.source, []).append(edge)

    # Explicit stack: JSON nesting depth is unbounded
    while stack:
        branch, node_id, depth = stack.pop()
        out = sorted(children.get(node_id, []), key=lambda e: e.source_handle_index)
        if out and depth >= max_depth:
            branch.add(f"[dim]… {len(out)} more[/dim]")
            continue
        pending = []
        for edge in out:
            child = graph.node(edge.target)
            text = f"[cyan]{escape(edge.label or '')}[/cyan] [dim]#{edge.source_handle_index}[/dim] → {describe(child)}"
            pending.append((branch.add(text), child.id, depth + 1))
        stack.extend(reversed(pending))

    console.print(top)
