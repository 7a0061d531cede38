"""
Connectivity analysis for diagram graphs.

Splits the nodes of a graph into linked nodes (endpoints of at least one
valid link) and unlinked nodes, and partitions the linked nodes into
connected components using breadth-first search.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from .validation import filter_links


@dataclass
class Topology:
    """
    Result of analyzing one graph.

    Attributes:
        adjacency: Node id -> neighbour ids (undirected, link order)
        linked: Linked node ids in input order
        unlinked: Unlinked node ids in input order
        components: Linked node ids grouped by connected component,
            ordered by the input position of each component's first node
        valid_links: (source, target) pairs whose endpoints both exist
    """

    adjacency: dict[str, list[str]] = field(default_factory=dict)
    linked: list[str] = field(default_factory=list)
    unlinked: list[str] = field(default_factory=list)
    components: list[list[str]] = field(default_factory=list)
    valid_links: list[tuple[str, str]] = field(default_factory=list)

    def is_linked(self, node_id: str) -> bool:
        """Check whether a node takes part in at least one valid link."""
        return bool(self.adjacency.get(node_id))

    def component_of(self, node_id: str) -> int:
        """
        Get the index of the component containing a linked node.

        Raises:
            KeyError: If the node is unlinked or unknown
        """
        for i, component in enumerate(self.components):
            if node_id in component:
                return i
        raise KeyError(node_id)


def build_adjacency(
    node_ids: Sequence[str],
    links: Iterable[tuple[str, str]],
) -> dict[str, list[str]]:
    """
    Build an undirected adjacency list.

    Both directions are added for every link. Links with an endpoint
    outside ``node_ids`` are skipped.

    Args:
        node_ids: Node ids in input order
        links: (source, target) pairs

    Returns:
        Mapping of every node id to its neighbour ids
    """
    adj: dict[str, list[str]] = {node_id: [] for node_id in node_ids}
    for src, tgt in links:
        if src in adj and tgt in adj:
            adj[src].append(tgt)
            adj[tgt].append(src)  # Always add reverse for connectivity
    return adj


def analyze_topology(
    node_ids: Sequence[str],
    links: Iterable[Any],
) -> Topology:
    """
    Classify nodes and find connected components among linked nodes.

    Args:
        node_ids: Node ids in input order
        links: Link objects, dicts with source/target, or (source, target) pairs

    Returns:
        Topology with the linked/unlinked split and the components

    Example:
        >>> topo = analyze_topology(["n1", "n2", "n3", "n4"],
        ...                         [("n1", "n2"), ("n3", "n4")])
        >>> topo.components
        [['n1', 'n2'], ['n3', 'n4']]
    """
    # Repeated ids describe one node
    node_ids = list(dict.fromkeys(node_ids))
    valid = filter_links(links, node_ids)
    adj = build_adjacency(node_ids, valid)

    linked = [node_id for node_id in node_ids if adj[node_id]]
    unlinked = [node_id for node_id in node_ids if not adj[node_id]]

    visited: set[str] = set()
    components: list[list[str]] = []

    for start in linked:
        if start in visited:
            continue

        # BFS to find all nodes in this component
        component: list[str] = []
        queue: deque[str] = deque([start])
        visited.add(start)

        while queue:
            node = queue.popleft()
            component.append(node)

            for neighbor in adj[node]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        components.append(component)

    return Topology(
        adjacency=adj,
        linked=linked,
        unlinked=unlinked,
        components=components,
        valid_links=valid,
    )


__all__ = [
    "Topology",
    "build_adjacency",
    "analyze_topology",
]
