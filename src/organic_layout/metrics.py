"""
Layout quality metrics.

Provides quick checks of a finished layout:
- Overlaps: Nodes sharing one position
- Edge crossings: Number of intersecting edges
- Edge lengths: Mean and variance of link lengths
- Bounding box: Extent of the placed nodes

All metrics work on positioned nodes from any layout mode and ignore
links whose endpoints are not among the nodes.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

from .types import Node, Position
from .validation import filter_links


def overlapping_nodes(nodes: Sequence[Node]) -> list[list[str]]:
    """
    Find groups of nodes placed on the same position.

    Args:
        nodes: Positioned nodes

    Returns:
        Id groups (each with at least two ids) in first-seen order
    """
    by_position: dict[Position, list[str]] = {}
    for node in nodes:
        by_position.setdefault((node.x, node.y), []).append(node.id)
    return [ids for ids in by_position.values() if len(ids) > 1]


def edge_crossings(nodes: Sequence[Node], links: Sequence[Any]) -> int:
    """
    Count the number of edge crossings in the layout.

    Two edges cross if their line segments intersect (excluding
    shared endpoints).

    Time Complexity: O(m^2) where m = number of edges
    """
    coords = {node.id: (node.x, node.y) for node in nodes}
    pairs = filter_links(links, coords)
    crossings = 0

    for i in range(len(pairs)):
        s1, t1 = pairs[i]
        for j in range(i + 1, len(pairs)):
            s2, t2 = pairs[j]
            # Skip if edges share an endpoint
            if s1 in (s2, t2) or t1 in (s2, t2):
                continue
            if _segments_intersect(coords[s1], coords[t1], coords[s2], coords[t2]):
                crossings += 1

    return crossings


def _segments_intersect(p1: Position, p2: Position, p3: Position, p4: Position) -> bool:
    """Check if line segments (p1,p2) and (p3,p4) intersect."""

    def ccw(a: Position, b: Position, c: Position) -> bool:
        return (c[1] - a[1]) * (b[0] - a[0]) > (b[1] - a[1]) * (c[0] - a[0])

    return ccw(p1, p3, p4) != ccw(p2, p3, p4) and ccw(p1, p2, p3) != ccw(p1, p2, p4)


def edge_lengths(nodes: Sequence[Node], links: Sequence[Any]) -> list[float]:
    """Get the Euclidean length of every valid link."""
    coords = {node.id: (node.x, node.y) for node in nodes}
    lengths = []
    for src, tgt in filter_links(links, coords):
        dx = coords[src][0] - coords[tgt][0]
        dy = coords[src][1] - coords[tgt][1]
        lengths.append(math.sqrt(dx * dx + dy * dy))
    return lengths


def mean_edge_length(nodes: Sequence[Node], links: Sequence[Any]) -> float:
    """Get the mean link length (0.0 without links)."""
    lengths = edge_lengths(nodes, links)
    if not lengths:
        return 0.0
    return sum(lengths) / len(lengths)


def edge_length_variance(nodes: Sequence[Node], links: Sequence[Any]) -> float:
    """
    Compute the variance of edge lengths.

    Lower variance indicates more uniform edge lengths.
    """
    lengths = edge_lengths(nodes, links)
    if not lengths:
        return 0.0

    mean = sum(lengths) / len(lengths)
    return sum((length - mean) ** 2 for length in lengths) / len(lengths)


def bounding_box(nodes: Sequence[Node]) -> tuple[float, float, float, float]:
    """
    Get (min_x, min_y, max_x, max_y) of the node positions.

    Returns (0, 0, 0, 0) for an empty sequence.
    """
    if not nodes:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [node.x for node in nodes]
    ys = [node.y for node in nodes]
    return (min(xs), min(ys), max(xs), max(ys))


__all__ = [
    "overlapping_nodes",
    "edge_crossings",
    "edge_lengths",
    "mean_edge_length",
    "edge_length_variance",
    "bounding_box",
]
