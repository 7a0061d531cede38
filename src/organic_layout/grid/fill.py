"""
Topology-blind grid fill.

Places nodes row-major into a square-ish grid. Links are ignored. Used as
a cheap fallback when structure does not matter.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Sequence

from ..base import StaticLayout
from ..config import FillConfig
from ..types import Event, HandleSide, LinkLike, NodeLike


class GridLayout(StaticLayout):
    """
    Row-major grid layout with ceil(sqrt(n)) columns.

    Example:
        layout = GridLayout(nodes=["a", "b", "c", "d", "e"])
        layout.run()
        # a(0, 0) b(200, 0) c(400, 0)
        # d(0, 80) e(200, 80)
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        config: Optional[FillConfig] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize grid layout.

        Args:
            nodes: Nodes to place
            links: Links (not used for positioning, but stored for consistency)
            config: Column and row pitch. Defaults to FillConfig().
            on_start: Callback for start event
            on_end: Callback for end event
        """
        super().__init__(nodes=nodes, links=links, on_start=on_start, on_end=on_end)
        self._config: FillConfig = config if config is not None else FillConfig()

    @property
    def config(self) -> FillConfig:
        """Get the grid pitch parameters."""
        return self._config

    @property
    def columns(self) -> int:
        """Get the number of columns for the current node count."""
        return math.ceil(math.sqrt(len(self._nodes)))

    def _compute(self, **kwargs: Any) -> None:
        """Fill rows left to right, top to bottom."""
        cols = self.columns
        for i, node in enumerate(self._nodes):
            row, col = divmod(i, cols)
            node.x = col * self._config.spacing_x
            node.y = row * self._config.spacing_y

        self._set_handles(target=HandleSide.TOP)


__all__ = ["GridLayout"]
