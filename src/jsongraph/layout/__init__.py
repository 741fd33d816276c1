"""Layered layout for JSON graphs.

Usage:
    from jsongraph.layout import layout_graph

    positioned = layout_graph(build_graph(value))
    overlaps = find_overlaps(positioned.boxes)  # [] for any builder output
"""

from jsongraph.layout.engine import (
    JsonGraphLayout,
    PositionedNode,
    assign_ranks,
    count_crossings,
    layout,
    layout_graph,
    order_ranks,
)
from jsongraph.layout.estimator import NodeSize, NodeSizeEstimator, estimate_node_size
from jsongraph.layout.geometry import NodeBox, find_backward_edges, find_overlaps, format_overlaps

__all__ = [
    "JsonGraphLayout",
    "NodeBox",
    "NodeSize",
    "NodeSizeEstimator",
    "PositionedNode",
    "assign_ranks",
    "count_crossings",
    "estimate_node_size",
    "find_backward_edges",
    "find_overlaps",
    "format_overlaps",
    "layout",
    "layout_graph",
    "order_ranks",
]
