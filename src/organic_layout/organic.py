"""
Organic grid layout.

Composes the three stages of the organic mode:
1. Topology analysis (linked/unlinked split, connected components)
2. Spring simulation of the linked nodes
3. Grid placement of linked nodes, then spiral fill of unlinked nodes
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Optional, Sequence

from .base import StaticLayout
from .config import GridConfig, SpringConfig
from .force import SpringSimulation
from .grid import GridResolver
from .topology import Topology, analyze_topology
from .types import Cell, Event, EventType, HandleSide, LinkLike, NodeLike, Position

logger = logging.getLogger(__name__)


class OrganicLayout(StaticLayout):
    """
    Force-directed layout snapped onto a uniform grid.

    Every node ends on its own grid cell (unless the free-cell search is
    exhausted, which is reported with a GridExhaustedWarning). Anchors are
    annotated top (incoming) and bottom (outgoing).

    Example:
        layout = OrganicLayout(
            nodes=["n1", "n2", "n3", "n4"],
            links=[("n1", "n2"), ("n3", "n4")],
            random_seed=42,
        )
        layout.run()

        for node in layout.nodes:
            print(node.id, node.position)
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        spring: Optional[SpringConfig] = None,
        grid: Optional[GridConfig] = None,
        random_seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize organic layout.

        Args:
            nodes: Nodes to place
            links: Links; those referencing unknown ids are ignored
            spring: Simulation parameters. Defaults to SpringConfig().
            grid: Placement parameters. Defaults to GridConfig().
            random_seed: Seed for a private random source
            rng: Explicit random source for the simulation's initial jitter
            on_start: Callback for start event
            on_tick: Callback for each simulation tick
            on_end: Callback for end event
        """
        super().__init__(
            nodes=nodes,
            links=links,
            random_seed=random_seed,
            rng=rng,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._spring: SpringConfig = spring if spring is not None else SpringConfig()
        self._grid: GridConfig = grid if grid is not None else GridConfig()

        # Results of the last run
        self._topology: Optional[Topology] = None
        self._simulated: dict[str, Position] = {}
        self._cells: dict[str, Cell] = {}

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def spring(self) -> SpringConfig:
        """Get the simulation parameters."""
        return self._spring

    @property
    def grid(self) -> GridConfig:
        """Get the placement parameters."""
        return self._grid

    @property
    def topology(self) -> Optional[Topology]:
        """Get the topology computed by the last run."""
        return self._topology

    @property
    def simulated_positions(self) -> dict[str, Position]:
        """Get continuous positions of linked nodes from the last run."""
        return self._simulated

    @property
    def cells(self) -> dict[str, Cell]:
        """Get the grid cell claimed by each node in the last run."""
        return self._cells

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def _compute(self, stacklevel: int = 2, **kwargs: Any) -> None:
        """
        Analyze, simulate, and snap to the grid.

        Args:
            stacklevel: Frame that GridExhaustedWarning is attributed to,
                counted from run() as for warnings.warn (2 is the caller of run)
        """
        topology = analyze_topology(self._node_ids(), self._links)
        self._topology = topology

        logger.debug(
            "Organic layout: %d linked, %d unlinked, %d components",
            len(topology.linked),
            len(topology.unlinked),
            len(topology.components),
        )

        simulation = SpringSimulation(
            nodes=topology.linked,
            links=topology.valid_links,
            components=topology.components,
            config=self._spring,
            rng=self.rng,
        )
        if EventType.tick in self._events:
            simulation.on("tick", self._events[EventType.tick])
        simulation.run()
        self._simulated = simulation.positions

        resolver = GridResolver(self._grid)
        self._cells = resolver.place(
            self._simulated, topology.unlinked, stacklevel=stacklevel + 2
        )
        display = resolver.to_display_positions(self._cells)

        for node in self._nodes:
            node.x, node.y = display[node.id]

        self._set_handles(target=HandleSide.TOP)


__all__ = ["OrganicLayout"]
