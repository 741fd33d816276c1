"""jsongraph - Turn any JSON value into a laid-out node/edge graph."""

from jsongraph.config import BuildOptions, JsonGraphConfig, LayoutOptions, load_config
from jsongraph.exceptions import (
    DocumentTooDeepError,
    GraphInvariantError,
    ParseError,
    RepairFailedError,
)
from jsongraph.graph import (
    ColorTag,
    FieldRow,
    FieldsLabel,
    GraphEdge,
    JsonGraph,
    JsonNode,
    NodeKind,
    SimpleLabel,
    build_graph,
)
from jsongraph.layout import (
    JsonGraphLayout,
    NodeBox,
    PositionedNode,
    find_overlaps,
    layout,
    layout_graph,
)
from jsongraph.parsing import parse_json
from jsongraph.pipeline import visualize, visualize_value

__all__ = [
    # Pipeline
    "visualize",
    "visualize_value",
    "parse_json",
    # Graph
    "build_graph",
    "JsonGraph",
    "JsonNode",
    "GraphEdge",
    "NodeKind",
    "ColorTag",
    "SimpleLabel",
    "FieldRow",
    "FieldsLabel",
    # Layout
    "layout",
    "layout_graph",
    "JsonGraphLayout",
    "PositionedNode",
    "NodeBox",
    "find_overlaps",
    # Config
    "BuildOptions",
    "LayoutOptions",
    "JsonGraphConfig",
    "load_config",
    # Errors
    "ParseError",
    "RepairFailedError",
    "DocumentTooDeepError",
    "GraphInvariantError",
]
