"""Node size estimation from label content.

The renderer measures real text only after layout, so the layout engine
works from a character-count estimate. Widths are clamped to a fixed band
and heights have a floor, so an empty object or a one-character value still
gets a box big enough to read and click.
"""

from __future__ import annotations

from dataclasses import dataclass

from jsongraph.config import LayoutOptions
from jsongraph.graph.model import FieldsLabel, JsonNode, SimpleLabel


@dataclass(frozen=True)
class NodeSize:
    width: float
    height: float


class NodeSizeEstimator:
    """Estimates box sizes to match the renderer's node component."""

    def __init__(self, options: LayoutOptions | None = None):
        self.options = options or LayoutOptions()

    def estimate(self, node: JsonNode) -> NodeSize:
        """Estimate (width, height) for one node.

        Simple labels are one line. Field labels are one line per row, and the
        widest row sets the width.
        """
        num_lines, max_chars = self._measure(node)
        opts = self.options
        width = max(opts.min_width, min(opts.max_width, max_chars * opts.char_width + opts.width_padding))
        height = max(opts.min_height, num_lines * opts.line_height + opts.height_padding)
        return NodeSize(width, height)

    def _measure(self, node: JsonNode) -> tuple[int, int]:
        label = node.label
        if isinstance(label, SimpleLabel):
            return 1, len(label.text)
        if isinstance(label, FieldsLabel):
            if not label.rows:
                return 0, 0
            return len(label.rows), max(len(row.display_text) for row in label.rows)
        raise TypeError(f"Unknown label type: {type(label).__name__}")


def estimate_node_size(node: JsonNode, options: LayoutOptions | None = None) -> NodeSize:
    """Convenience function to estimate one node's size.

    Args:
        node: The node to measure
        options: Size constants (defaults to LayoutOptions())

    Returns:
        NodeSize with width and height in content units
    """
    return NodeSizeEstimator(options).estimate(node)
