"""Graph model and builder."""

from jsongraph.graph._helpers import ValueClass, classify_value, describe_value
from jsongraph.graph.builder import build_graph
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

__all__ = [
    "ColorTag",
    "FieldRow",
    "FieldsLabel",
    "GraphEdge",
    "JsonGraph",
    "JsonNode",
    "NodeKind",
    "SimpleLabel",
    "ValueClass",
    "build_graph",
    "classify_value",
    "describe_value",
]
