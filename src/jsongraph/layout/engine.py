"""Layered left-to-right layout for JSON graphs.

Runs a small Sugiyama-style pipeline over a NetworkX DiGraph:

1. Rank: longest-path layering, every edge points to a higher rank.
2. Order: barycenter sweeps between adjacent ranks to cut crossings,
   starting from discovery order (which is already crossing-free for
   builder output).
3. Y: sequential placement per rank with a fixed gap, centring sibling runs
   on their parent and parents on their children.
4. X: one column per rank, each as wide as its widest box plus a fixed gap.

Positions are computed as box centres and converted to top-left corners at
the end. Everything is deterministic; ties are broken by discovery order.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from jsongraph.config import LayoutOptions
from jsongraph.exceptions import GraphInvariantError
from jsongraph.graph.model import GraphEdge, JsonGraph, JsonNode, NodeKind, NodeLabel
from jsongraph.layout.estimator import NodeSize, NodeSizeEstimator
from jsongraph.layout.geometry import NodeBox

logger = logging.getLogger(__name__)

SizeFunction = Callable[[JsonNode], NodeSize]


# =============================================================================
# Result types
# =============================================================================


@dataclass(frozen=True)
class PositionedNode:
    """A JsonNode plus its placed, top-left anchored box."""

    node: JsonNode
    x: float
    y: float
    width: float
    height: float
    rank: int

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def kind(self) -> NodeKind:
        return self.node.kind

    @property
    def label(self) -> NodeLabel:
        return self.node.label

    @property
    def has_incoming_edge(self) -> bool:
        return self.node.has_incoming_edge

    @property
    def outgoing_handle_count(self) -> int:
        return self.node.outgoing_handle_count

    @property
    def box(self) -> NodeBox:
        return NodeBox(self.id, self.x, self.y, self.width, self.height)

    def to_dict(self) -> dict[str, Any]:
        data = self.node.to_dict()
        data.update(x=self.x, y=self.y, width=self.width, height=self.height)
        return data


@dataclass(frozen=True)
class JsonGraphLayout:
    """Positioned nodes plus the unchanged edges."""

    nodes: tuple[PositionedNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()
    _index: dict[str, PositionedNode] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._index.update((n.id, n) for n in self.nodes)

    def node(self, node_id: str) -> PositionedNode:
        return self._index[node_id]

    @property
    def boxes(self) -> list[NodeBox]:
        return [n.box for n in self.nodes]

    @property
    def width(self) -> float:
        return max((n.x + n.width for n in self.nodes), default=0.0)

    @property
    def height(self) -> float:
        return max((n.y + n.height for n in self.nodes), default=0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# =============================================================================
# Graph construction
# =============================================================================


def to_nx_graph(nodes: Sequence[JsonNode], edges: Iterable[GraphEdge]) -> nx.DiGraph:
    """Build a DiGraph with discovery order and handle indices as attributes.

    Raises:
        GraphInvariantError: On duplicate node ids or edges naming unknown nodes
    """
    G = nx.DiGraph()
    for index, node in enumerate(nodes):
        if node.id in G:
            raise GraphInvariantError(f"Duplicate node id '{node.id}'")
        G.add_node(node.id, order=index)
    for edge in edges:
        for end in (edge.source, edge.target):
            if end not in G:
                raise GraphInvariantError(f"Edge '{edge.id}' references unknown node '{end}'")
        G.add_edge(edge.source, edge.target, handle=edge.source_handle_index)
    return G


# =============================================================================
# Phase 1: ranks
# =============================================================================


def assign_ranks(G: nx.DiGraph) -> dict[str, int]:
    """Longest-path layering: sources get rank 0, every edge goes up a rank.

    Raises:
        GraphInvariantError: If the graph has a cycle
    """
    try:
        topo = list(nx.topological_sort(G))
    except nx.NetworkXUnfeasible as e:
        raise GraphInvariantError("Graph has a cycle; JSON graphs must be acyclic") from e

    ranks: dict[str, int] = {}
    for v in topo:
        ranks[v] = max((ranks[u] + 1 for u in G.predecessors(v)), default=0)
    return ranks


# =============================================================================
# Phase 2: ordering within ranks
# =============================================================================


def _initial_layers(G: nx.DiGraph, ranks: dict[str, int]) -> list[list[str]]:
    count = max(ranks.values(), default=-1) + 1
    layers: list[list[str]] = [[] for _ in range(count)]
    for v in sorted(G.nodes, key=lambda v: G.nodes[v]["order"]):
        layers[ranks[v]].append(v)
    return layers


def _port_position(G: nx.DiGraph, u: str, v: str, index: dict[str, int]) -> float:
    """Position of the edge u->v on u's side, offset by its handle slot."""
    handles = G.out_degree(u)
    return index[u] + (G.edges[u, v]["handle"] + 1) / (handles + 1)


def count_crossings(G: nx.DiGraph, layers: list[list[str]]) -> int:
    """Count edge crossings between adjacent ranks.

    Edges leaving the same handle or entering the same node never cross.
    Counting is an inversion count over edges sorted by source position.
    """
    total = 0
    for upper, lower in zip(layers, layers[1:]):
        up_index = {v: i for i, v in enumerate(upper)}
        low_index = {v: i for i, v in enumerate(lower)}
        segments = sorted(
            (_port_position(G, u, v, up_index), low_index[v])
            for u in upper
            for v in G.successors(u)
            if v in low_index
        )
        seen: list[int] = []
        for _, target in segments:
            total += len(seen) - bisect.bisect_right(seen, target)
            bisect.insort(seen, target)
    return total


def _reorder(layer: list[str], neighbor_positions: Callable[[str], list[float]]) -> list[str]:
    """Sort a layer by barycenter. Nodes with no neighbors keep their slot."""
    keyed = []
    for i, v in enumerate(layer):
        positions = neighbor_positions(v)
        bary = sum(positions) / len(positions) if positions else float(i)
        keyed.append((bary, i, v))
    keyed.sort()
    return [v for _, _, v in keyed]


def order_ranks(G: nx.DiGraph, ranks: dict[str, int], passes: int = 4) -> list[list[str]]:
    """Order nodes within each rank to reduce crossings.

    Returns the best ordering seen (fewest crossings), starting from
    discovery order.
    """
    layers = _initial_layers(G, ranks)
    best = [list(layer) for layer in layers]
    best_crossings = count_crossings(G, best)

    for _ in range(passes):
        if best_crossings == 0:
            break
        for r in range(1, len(layers)):
            index = {v: i for i, v in enumerate(layers[r - 1])}
            layers[r] = _reorder(
                layers[r],
                lambda v: [_port_position(G, u, v, index) for u in G.predecessors(v) if u in index],
            )
        for r in range(len(layers) - 2, -1, -1):
            index = {v: i for i, v in enumerate(layers[r + 1])}
            layers[r] = _reorder(
                layers[r],
                lambda v: [float(index[w]) for w in G.successors(v) if w in index],
            )
        crossings = count_crossings(G, layers)
        if crossings < best_crossings:
            best = [list(layer) for layer in layers]
            best_crossings = crossings

    logger.debug("Ordering: %d ranks, %d crossings", len(best), best_crossings)
    return best


# =============================================================================
# Phase 3-4: coordinates
# =============================================================================


def _place_rank(
    layer: list[str],
    desired: dict[str, float | None],
    sizes: dict[str, NodeSize],
    gap: float,
) -> dict[str, float]:
    """Assign centre y to each node of one rank, in order, without overlap.

    Consecutive nodes that want the same centre are placed as one block
    centred on it. A block never starts above the previous block's bottom
    plus *gap*.
    """
    centers: dict[str, float] = {}
    prev_bottom: float | None = None
    i = 0
    while i < len(layer):
        want = desired[layer[i]]
        j = i + 1
        while want is not None and j < len(layer) and desired[layer[j]] == want:
            j += 1
        block = layer[i:j]
        block_height = sum(sizes[v].height for v in block) + gap * (len(block) - 1)

        if prev_bottom is None:
            top = want - block_height / 2 if want is not None else 0.0
        elif want is None:
            top = prev_bottom + gap
        else:
            top = max(want - block_height / 2, prev_bottom + gap)

        for v in block:
            centers[v] = top + sizes[v].height / 2
            top += sizes[v].height + gap
        prev_bottom = top - gap
        i = j
    return centers


def _assign_y(
    G: nx.DiGraph,
    layers: list[list[str]],
    sizes: dict[str, NodeSize],
    gap: float,
) -> dict[str, float]:
    cy: dict[str, float] = {}

    # Down: stack rank 0, then centre each rank on its predecessors
    for layer in layers:
        desired: dict[str, float | None] = {}
        for v in layer:
            preds = [cy[u] for u in G.predecessors(v)]
            desired[v] = sum(preds) / len(preds) if preds else None
        cy.update(_place_rank(layer, desired, sizes, gap))

    # Up: centre parents on the span of their children
    for layer in reversed(layers[:-1]):
        desired = {}
        for v in layer:
            succs = list(G.successors(v))
            if succs:
                top = min(cy[w] - sizes[w].height / 2 for w in succs)
                bottom = max(cy[w] + sizes[w].height / 2 for w in succs)
                desired[v] = (top + bottom) / 2
            else:
                desired[v] = cy[v]
        cy.update(_place_rank(layer, desired, sizes, gap))

    return cy


def _assign_x(layers: list[list[str]], sizes: dict[str, NodeSize], gap: float) -> dict[str, float]:
    cx: dict[str, float] = {}
    left = 0.0
    for layer in layers:
        rank_width = max(sizes[v].width for v in layer)
        for v in layer:
            cx[v] = left + rank_width / 2
        left += rank_width + gap
    return cx


# =============================================================================
# Entry points
# =============================================================================


def layout(
    nodes: Sequence[JsonNode],
    edges: Sequence[GraphEdge],
    options: LayoutOptions | None = None,
    *,
    size_of: SizeFunction | None = None,
) -> JsonGraphLayout:
    """Assign a non-overlapping position to every node.

    Args:
        nodes: Nodes in discovery order
        edges: Parent -> child edges (passed through unchanged)
        options: Spacing and sizing constants
        size_of: Override for size estimation (defaults to NodeSizeEstimator)

    Returns:
        JsonGraphLayout with nodes in input order

    Raises:
        GraphInvariantError: If edges reference unknown ids or form a cycle
    """
    opts = options or LayoutOptions()
    if size_of is None:
        size_of = NodeSizeEstimator(opts).estimate

    G = to_nx_graph(nodes, edges)
    if not nodes:
        return JsonGraphLayout(nodes=(), edges=tuple(edges))

    sizes = {n.id: size_of(n) for n in nodes}
    ranks = assign_ranks(G)
    layers = order_ranks(G, ranks, passes=opts.ordering_passes)
    cy = _assign_y(G, layers, sizes, opts.node_sep)
    cx = _assign_x(layers, sizes, opts.rank_sep)

    # Centre -> top-left, then shift so the topmost box starts at y=0
    tops = {v: cy[v] - sizes[v].height / 2 for v in cy}
    offset = min(tops.values())

    positioned = tuple(
        PositionedNode(
            node=n,
            x=cx[n.id] - sizes[n.id].width / 2,
            y=tops[n.id] - offset,
            width=sizes[n.id].width,
            height=sizes[n.id].height,
            rank=ranks[n.id],
        )
        for n in nodes
    )
    logger.debug("Laid out %d nodes in %d ranks", len(positioned), len(layers))
    return JsonGraphLayout(nodes=positioned, edges=tuple(edges))


def layout_graph(
    graph: JsonGraph,
    options: LayoutOptions | None = None,
    *,
    size_of: SizeFunction | None = None,
) -> JsonGraphLayout:
    """Lay out a built JsonGraph. See ``layout``."""
    return layout(graph.nodes, graph.edges, options, size_of=size_of)
