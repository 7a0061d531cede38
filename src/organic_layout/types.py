"""
Common types for diagram layout.

This module provides the fundamental types shared by every layout mode:
- Node: Diagram node identified by a string id, annotated with a position
- Link: Directed edge between two node ids
- HandleSide: Side of a node where edges attach
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Callable, Optional, TypedDict, Union


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout iterations have begun
    - tick: Fired once per iteration (for progress reporting)
    - end: Layout has finished
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    iteration: int
    temperature: float
    speed: Optional[float]
    listener: Optional[Callable[[], None]]


class HandleSide(str, Enum):
    """Side of a node where the rendering layer draws an edge anchor."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> HandleSide:
        """Get the opposite side."""
        opposites = {
            HandleSide.TOP: HandleSide.BOTTOM,
            HandleSide.BOTTOM: HandleSide.TOP,
            HandleSide.LEFT: HandleSide.RIGHT,
            HandleSide.RIGHT: HandleSide.LEFT,
        }
        return opposites[self]


class Node:
    """
    Diagram node with an opaque id and, after layout, a position.

    Attributes:
        id: Stable node identifier
        x: X coordinate (top-left of the node's cell)
        y: Y coordinate
        target_position: Side accepting incoming edges (set by layout)
        source_position: Side emitting outgoing edges (set by layout)
    """

    def __init__(self, id: str, **kwargs: Any) -> None:
        """Initialize node with an id and optional extra properties."""
        if id is None:
            raise ValueError("Node id cannot be None")

        self.id: str = str(id)
        self.x: float = kwargs.get("x", 0.0)
        self.y: float = kwargs.get("y", 0.0)
        self.target_position: Optional[HandleSide] = kwargs.get("target_position")
        self.source_position: Optional[HandleSide] = kwargs.get("source_position")

        # Copy any additional custom properties (label, data, type, ...)
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @property
    def position(self) -> tuple[float, float]:
        """Get the node position as an (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """
        Export the node as a plain mapping for the rendering layer.

        Extra properties supplied at construction are carried through.
        """
        result: dict[str, Any] = {
            key: value
            for key, value in vars(self).items()
            if key not in ("id", "x", "y", "target_position", "source_position")
        }
        result["id"] = self.id
        result["position"] = {"x": self.x, "y": self.y}
        if self.source_position is not None:
            result["sourcePosition"] = self.source_position.value
        if self.target_position is not None:
            result["targetPosition"] = self.target_position.value
        return result

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, x={self.x:.2f}, y={self.y:.2f})"


class Link:
    """
    Directed edge between two nodes.

    Attributes:
        source: Source node id
        target: Target node id
    """

    def __init__(
        self,
        source: Union[Node, str],
        target: Union[Node, str],
        **kwargs: Any,
    ) -> None:
        """
        Initialize link between two nodes.

        Args:
            source: Source node or node id (required)
            target: Target node or node id (required)

        Raises:
            ValueError: If source or target is None
        """
        if source is None:
            raise ValueError("Link source cannot be None")
        if target is None:
            raise ValueError("Link target cannot be None")

        self.source: str = source.id if isinstance(source, Node) else str(source)
        self.target: str = target.id if isinstance(target, Node) else str(target)

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @property
    def pair(self) -> tuple[str, str]:
        """Get the (source, target) id pair."""
        return (self.source, self.target)

    def __repr__(self) -> str:
        return f"Link({self.source!r} -> {self.target!r})"


# Type aliases for the input API
NodeLike = Union[Node, dict[str, Any], str, Any]
"""Input type for nodes: Node objects, dicts with 'id', bare ids, or objects with .id."""

LinkLike = Union[Link, dict[str, Any], tuple[str, str], Any]
"""Input type for links: Link objects, dicts, (source, target) tuples, or objects."""

Position = tuple[float, float]
"""Continuous (x, y) coordinate."""

Cell = tuple[int, int]
"""Integer grid cell (qx, qy)."""


__all__ = [
    "EventType",
    "Event",
    "HandleSide",
    "Node",
    "Link",
    "NodeLike",
    "LinkLike",
    "Position",
    "Cell",
]
