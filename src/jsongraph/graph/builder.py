"""Transform a parsed JSON value into a node/edge graph.

Traversal uses an explicit work list, so input depth is bounded by memory
rather than the interpreter's recursion limit.

Arrays are transparent: they never become nodes. Each element is attached
directly to the array's logical parent, and the edge label grows an index
suffix per array level (``tags[1][0]``). A top-level array therefore yields
several unconnected roots.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from jsongraph.config import BuildOptions
from jsongraph.graph._helpers import (
    color_for,
    describe_value,
    extend_label,
    make_edge,
    render_literal,
    truncate,
)
from jsongraph.graph.model import (
    ColorTag,
    FieldRow,
    FieldsLabel,
    GraphEdge,
    JsonGraph,
    JsonNode,
    NodeKind,
    SimpleLabel,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _WorkItem:
    value: Any
    parent_id: str | None
    edge_label: str | None


@dataclass
class _BuildContext:
    """Mutable state for one build call. Discarded when the build returns."""

    options: BuildOptions
    counter: int = 0
    nodes: list[JsonNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    children: dict[str, list[str]] = field(default_factory=lambda: defaultdict(list))

    def next_id(self, parent_id: str | None) -> str:
        prefix = "node" if parent_id is not None else "root"
        node_id = f"{prefix}-{self.counter}"
        self.counter += 1
        return node_id

    def attach(self, parent_id: str, child_id: str, label: str | None) -> None:
        """Register *child_id* under *parent_id* and emit the edge."""
        siblings = self.children[parent_id]
        handle_index = len(siblings)
        siblings.append(child_id)
        self.edges.append(make_edge(parent_id, child_id, handle_index, label))


def build_graph(value: Any, options: BuildOptions | None = None) -> JsonGraph:
    """Build the node/edge graph for a parsed JSON value.

    Args:
        value: Anything ``json.loads`` can return
        options: Truncation and empty-container policy

    Returns:
        JsonGraph with nodes in id-allocation (depth-first pre-order) order

    Raises:
        TypeError: If *value* contains something that is not a JSON value

    Example:
        >>> g = build_graph({"a": [1, 2]})
        >>> [n.id for n in g.nodes]
        ['root-0', 'node-1', 'node-2']
        >>> [e.label for e in g.edges]
        ['a[0]', 'a[1]']
    """
    ctx = _BuildContext(options=options or BuildOptions())
    stack: list[_WorkItem] = [_WorkItem(value, None, None)]

    while stack:
        item = stack.pop()
        if isinstance(item.value, list):
            # Reverse push so elements pop in index order
            for i in range(len(item.value) - 1, -1, -1):
                stack.append(_WorkItem(item.value[i], item.parent_id, extend_label(item.edge_label, i)))
            continue
        stack.extend(reversed(_visit(ctx, item)))

    nodes = [
        JsonNode(
            id=n.id,
            kind=n.kind,
            label=n.label,
            has_incoming_edge=n.has_incoming_edge,
            outgoing_handle_count=len(ctx.children.get(n.id, ())),
        )
        for n in ctx.nodes
    ]
    logger.debug("Built graph: %d nodes, %d edges", len(nodes), len(ctx.edges))
    return JsonGraph(nodes=tuple(nodes), edges=tuple(ctx.edges))


def _visit(ctx: _BuildContext, item: _WorkItem) -> list[_WorkItem]:
    """Create the node for a non-array value. Returns child work in order."""
    node_id = ctx.next_id(item.parent_id)
    if item.parent_id is not None:
        ctx.attach(item.parent_id, node_id, item.edge_label)

    value = item.value
    pending: list[_WorkItem] = []

    if value is None:
        kind = NodeKind.NULL
        label = SimpleLabel("null", ColorTag.NULL)
    elif isinstance(value, dict):
        kind = NodeKind.OBJECT
        rows = []
        for key, prop in value.items():
            key = str(key)
            text, color = describe_value(prop)
            rows.append(FieldRow(key, text, color))
            if _should_recurse(prop, ctx.options):
                pending.append(_WorkItem(prop, node_id, key))
        label = FieldsLabel(tuple(rows))
    else:
        color = color_for(value)
        kind = NodeKind.PRIMITIVE
        label = SimpleLabel(truncate(render_literal(value), ctx.options.max_label_chars), color)

    ctx.nodes.append(
        JsonNode(
            id=node_id,
            kind=kind,
            label=label,
            has_incoming_edge=item.parent_id is not None,
        )
    )
    return pending


def _should_recurse(value: Any, options: BuildOptions) -> bool:
    if not isinstance(value, (dict, list)):
        return False
    return bool(value) or options.recurse_empty_containers
