"""One-shot text/value -> positioned graph.

Every call rebuilds from scratch; nothing is cached between calls.
"""

from __future__ import annotations

from typing import Any

from jsongraph.config import BuildOptions, LayoutOptions
from jsongraph.graph.builder import build_graph
from jsongraph.layout.engine import JsonGraphLayout, layout_graph
from jsongraph.parsing import Repairer, parse_json


def visualize_value(
    value: Any,
    *,
    build_options: BuildOptions | None = None,
    layout_options: LayoutOptions | None = None,
) -> JsonGraphLayout:
    """Build and lay out the graph for an already-parsed JSON value."""
    return layout_graph(build_graph(value, build_options), layout_options)


def visualize(
    text: str,
    *,
    repair: Repairer | None = None,
    build_options: BuildOptions | None = None,
    layout_options: LayoutOptions | None = None,
) -> JsonGraphLayout:
    """Parse JSON text, build its graph, and lay it out.

    Blank text (empty or whitespace only) yields an empty layout without
    parsing or repairing.

    Raises:
        ParseError: If the text is not valid JSON and no repairer was given
        RepairFailedError: If a repair pass was tried and failed
        DocumentTooDeepError: If the text nests deeper than the decoder can follow
    """
    if not text.strip():
        return JsonGraphLayout(nodes=(), edges=())
    value = parse_json(text, repair=repair)
    return visualize_value(value, build_options=build_options, layout_options=layout_options)
