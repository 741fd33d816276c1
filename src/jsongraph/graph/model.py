"""Graph model produced by the builder and consumed by the layout engine.

All records are frozen. Layout never mutates a ``JsonNode``; it wraps it in a
``PositionedNode`` that carries the same identity plus a position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class NodeKind(str, Enum):
    """What a node stands for. Arrays never get a node of their own."""

    NULL = "null"
    PRIMITIVE = "primitive"
    OBJECT = "object"


class ColorTag(str, Enum):
    """Semantic color class for a displayed value.

    Values are the CSS classes the rendering surface applies.
    """

    NULL = "text-muted-foreground"
    STRING = "text-chart-2"
    NUMERIC = "text-chart-3"
    OBJECT = "text-chart-4"


@dataclass(frozen=True)
class SimpleLabel:
    """Single-line label for Null and Primitive nodes."""

    text: str
    color: ColorTag

    def to_dict(self) -> dict[str, Any]:
        return {"type": "simple", "text": self.text, "color": self.color.value}


@dataclass(frozen=True)
class FieldRow:
    """One ``key: value`` row of an Object node."""

    key: str
    value_text: str
    color: ColorTag

    @property
    def display_text(self) -> str:
        return f"{self.key}: {self.value_text}"


@dataclass(frozen=True)
class FieldsLabel:
    """Object node label: one row per own property, in key order."""

    rows: tuple[FieldRow, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "fields",
            "rows": [
                {"key": row.key, "value": row.value_text, "color": row.color.value}
                for row in self.rows
            ],
        }


NodeLabel = Union[SimpleLabel, FieldsLabel]


@dataclass(frozen=True)
class JsonNode:
    """One visual box: a JSON object, null, or primitive value.

    Attributes:
        id: Unique within one build, derived from traversal order
        kind: NULL, PRIMITIVE or OBJECT
        label: SimpleLabel for NULL/PRIMITIVE, FieldsLabel for OBJECT
        has_incoming_edge: False only for traversal roots
        outgoing_handle_count: Number of direct graph children
    """

    id: str
    kind: NodeKind
    label: NodeLabel
    has_incoming_edge: bool
    outgoing_handle_count: int = 0

    @property
    def source_handles(self) -> list[str]:
        """Handle ids, one per child, in discovery order."""
        return [source_handle_id(self.id, i) for i in range(self.outgoing_handle_count)]

    @property
    def target_handle(self) -> str | None:
        return target_handle_id(self.id) if self.has_incoming_edge else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "label": self.label.to_dict(),
            "hasIncomingEdge": self.has_incoming_edge,
            "outgoingHandleCount": self.outgoing_handle_count,
        }


@dataclass(frozen=True)
class GraphEdge:
    """Directed parent -> child connection.

    ``source_handle_index`` is the child's 0-based discovery position on the
    source node, which is also the handle the edge attaches to.
    """

    id: str
    source: str
    target: str
    source_handle_index: int
    label: str | None = None

    @property
    def source_handle(self) -> str:
        return source_handle_id(self.source, self.source_handle_index)

    @property
    def target_handle(self) -> str:
        return target_handle_id(self.target)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "sourceHandleIndex": self.source_handle_index,
            "sourceHandle": self.source_handle,
            "targetHandle": self.target_handle,
            "label": self.label,
        }


@dataclass(frozen=True)
class JsonGraph:
    """Immutable node/edge set for one input value."""

    nodes: tuple[JsonNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()
    _index: dict[str, JsonNode] = field(default_factory=dict, init=False, repr=False, compare=False)
    _out: dict[str, list[GraphEdge]] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._index.update((n.id, n) for n in self.nodes)
        for edge in self.edges:
            self._out.setdefault(edge.source, []).append(edge)
        for out in self._out.values():
            out.sort(key=lambda e: e.source_handle_index)

    def node(self, node_id: str) -> JsonNode:
        return self._index[node_id]

    @property
    def roots(self) -> list[JsonNode]:
        return [n for n in self.nodes if not n.has_incoming_edge]

    def children(self, node_id: str) -> list[GraphEdge]:
        """Outgoing edges of *node_id*, sorted by handle index."""
        return list(self._out.get(node_id, ()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


def source_handle_id(node_id: str, index: int) -> str:
    return f"{node_id}-source-{index}"


def target_handle_id(node_id: str) -> str:
    return f"{node_id}-target"
