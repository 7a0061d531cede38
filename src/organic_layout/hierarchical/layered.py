"""
Left-to-right layered layout backed by networkx.

Ranks come from the topological generations of the graph's condensation,
so cyclic graphs are accepted: every strongly connected component shares
one rank. Nodes within a rank keep their input order and each rank is
centered vertically against the tallest one.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

import networkx as nx

from ..base import StaticLayout
from ..config import HierarchicalConfig
from ..types import Event, HandleSide, LinkLike, NodeLike


class HierarchicalLayout(StaticLayout):
    """
    Layered layout with ranks running left to right.

    Anchors are annotated left (incoming) and right (outgoing).

    Example:
        layout = HierarchicalLayout(
            nodes=["a", "b", "c"],
            links=[("a", "b"), ("a", "c")],
        )
        layout.run()
        # a in rank 0, b and c stacked in rank 1
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        config: Optional[HierarchicalConfig] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize hierarchical layout.

        Args:
            nodes: Nodes to place
            links: Directed links; those referencing unknown ids are ignored
            config: Node footprint and separations. Defaults to HierarchicalConfig().
            on_start: Callback for start event
            on_end: Callback for end event
        """
        super().__init__(nodes=nodes, links=links, on_start=on_start, on_end=on_end)
        self._config: HierarchicalConfig = (
            config if config is not None else HierarchicalConfig()
        )
        self._ranks: dict[str, int] = {}

    @property
    def config(self) -> HierarchicalConfig:
        """Get the layered layout parameters."""
        return self._config

    @property
    def ranks(self) -> dict[str, int]:
        """Get the rank assigned to each node by the last run."""
        return self._ranks

    def to_networkx(self) -> nx.DiGraph:
        """Build a DiGraph of the nodes and valid links, in input order."""
        graph = nx.DiGraph()
        graph.add_nodes_from(self._node_ids())
        graph.add_edges_from(
            (src, tgt) for src, tgt in self._valid_links() if src != tgt
        )
        return graph

    def _compute(self, **kwargs: Any) -> None:
        """Rank nodes, then stack each rank vertically."""
        cfg = self._config
        graph = self.to_networkx()

        condensed = nx.condensation(graph)
        mapping: dict[str, int] = condensed.graph["mapping"]
        component_rank: dict[int, int] = {}
        for rank, generation in enumerate(nx.topological_generations(condensed)):
            for component in generation:
                component_rank[component] = rank

        self._ranks = {node_id: component_rank[mapping[node_id]] for node_id in graph}

        layers: dict[int, list[str]] = {}
        for node_id in graph:
            layers.setdefault(self._ranks[node_id], []).append(node_id)

        pitch_x = cfg.node_width + cfg.rank_separation
        pitch_y = cfg.node_height + cfg.node_separation
        tallest = max(len(layer) for layer in layers.values())

        coords: dict[str, tuple[float, float]] = {}
        for rank, layer in layers.items():
            offset = (tallest - len(layer)) * pitch_y / 2
            for i, node_id in enumerate(layer):
                coords[node_id] = (rank * pitch_x, offset + i * pitch_y)

        for node in self._nodes:
            node.x, node.y = coords[node.id]

        self._set_handles(target=HandleSide.LEFT)


__all__ = ["HierarchicalLayout"]
