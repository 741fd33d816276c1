"""Bounding-box geometry for placed nodes.

Used by the layout engine's consumers (and tests) to check that placement
left no two boxes overlapping and that every edge runs left to right.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsongraph.layout.engine import JsonGraphLayout


@dataclass(frozen=True)
class NodeBox:
    """Node bounding box, top-left anchored."""

    id: str
    x: float  # Left edge
    y: float  # Top edge
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def overlaps(self, other: NodeBox) -> bool:
        """True if the boxes share interior area. Touching edges don't count."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


def find_overlaps(boxes: list[NodeBox]) -> list[tuple[str, str]]:
    """Return id pairs of all overlapping boxes.

    Sweeps along x so only boxes with intersecting x-extents are compared.
    """
    ordered = sorted(boxes, key=lambda b: (b.x, b.id))
    pairs: list[tuple[str, str]] = []
    active: list[NodeBox] = []
    for box in ordered:
        active = [b for b in active if b.right > box.x]
        for other in active:
            if other.overlaps(box):
                pairs.append((other.id, box.id))
        active.append(box)
    return pairs


def find_backward_edges(layout: JsonGraphLayout) -> list[str]:
    """Edge ids whose source does not sit in a strictly lower rank than the target."""
    ranks = {n.id: n.rank for n in layout.nodes}
    return [e.id for e in layout.edges if ranks[e.source] >= ranks[e.target]]


def format_overlaps(pairs: list[tuple[str, str]], boxes: dict[str, NodeBox]) -> str:
    """Format overlap pairs for display in test failures."""
    lines = []
    for a, b in pairs:
        ba, bb = boxes[a], boxes[b]
        lines.append(
            f"  {a} ({ba.x:.1f},{ba.y:.1f} {ba.width:.0f}x{ba.height:.0f}) overlaps "
            f"{b} ({bb.x:.1f},{bb.y:.1f} {bb.width:.0f}x{bb.height:.0f})"
        )
    return "\n".join(lines)
