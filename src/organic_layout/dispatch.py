"""
Layout dispatcher.

Single entry point used by the diagram editor when the user asks for an
automatic re-layout. Selects one of three modes and returns the nodes
annotated with positions and anchor sides.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Optional, Sequence, Union

from .base import BaseLayout
from .config import FillConfig, GridConfig, HierarchicalConfig, SpringConfig
from .grid import GridLayout
from .hierarchical import HierarchicalLayout
from .organic import OrganicLayout
from .types import LinkLike, Node, NodeLike
from .validation import InvalidLayoutModeError

logger = logging.getLogger(__name__)


class LayoutMode(str, Enum):
    """Named layout modes."""

    HIERARCHICAL = "hierarchical"
    GRID = "grid"
    ORGANIC = "organic"


def resolve_mode(mode: Union[LayoutMode, str]) -> LayoutMode:
    """
    Convert a mode name to a LayoutMode.

    Raises:
        InvalidLayoutModeError: If the name is not a known mode
    """
    try:
        return LayoutMode(mode)
    except ValueError:
        known = ", ".join(m.value for m in LayoutMode)
        raise InvalidLayoutModeError(
            f"Unknown layout mode {mode!r}; expected one of: {known}"
        ) from None


def create_layout(
    mode: Union[LayoutMode, str],
    nodes: Sequence[NodeLike],
    links: Sequence[LinkLike] = (),
    *,
    spring: Optional[SpringConfig] = None,
    grid: Optional[GridConfig] = None,
    fill: Optional[FillConfig] = None,
    hierarchical: Optional[HierarchicalConfig] = None,
    random_seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> BaseLayout:
    """
    Build the layout object for a mode without running it.

    Args:
        mode: Layout mode or its name
        nodes: Nodes to place
        links: Links between nodes
        spring: Simulation parameters (organic mode)
        grid: Placement parameters (organic mode)
        fill: Grid pitch (grid mode)
        hierarchical: Rank geometry (hierarchical mode)
        random_seed: Seed for the organic simulation
        rng: Explicit random source for the organic simulation

    Returns:
        An unrun layout
    """
    resolved = resolve_mode(mode)
    if resolved is LayoutMode.HIERARCHICAL:
        return HierarchicalLayout(nodes=nodes, links=links, config=hierarchical)
    if resolved is LayoutMode.GRID:
        return GridLayout(nodes=nodes, links=links, config=fill)
    return OrganicLayout(
        nodes=nodes,
        links=links,
        spring=spring,
        grid=grid,
        random_seed=random_seed,
        rng=rng,
    )


def auto_layout(
    nodes: Sequence[NodeLike],
    links: Sequence[LinkLike] = (),
    mode: Union[LayoutMode, str] = LayoutMode.ORGANIC,
    *,
    spring: Optional[SpringConfig] = None,
    grid: Optional[GridConfig] = None,
    fill: Optional[FillConfig] = None,
    hierarchical: Optional[HierarchicalConfig] = None,
    random_seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> list[Node]:
    """
    Lay out a diagram.

    Links that reference unknown node ids are ignored. An empty node list
    returns an empty result without building any layout.

    Args:
        nodes: Nodes to place (Node objects, dicts with 'id', bare ids)
        links: Links ((source, target) pairs, dicts, or Link objects)
        mode: "organic" (default), "grid", or "hierarchical"
        spring: Simulation parameters (organic mode)
        grid: Placement parameters (organic mode)
        fill: Grid pitch (grid mode)
        hierarchical: Rank geometry (hierarchical mode)
        random_seed: Seed for the organic simulation
        rng: Explicit random source for the organic simulation

    Returns:
        Nodes in input order with x, y, target_position and source_position set

    Raises:
        InvalidLayoutModeError: If mode is not a known mode

    Example:
        >>> placed = auto_layout(["a", "b"], [("a", "b")], random_seed=1)
        >>> [node.id for node in placed]
        ['a', 'b']
    """
    resolved = resolve_mode(mode)
    if not nodes:
        return []

    layout = create_layout(
        resolved,
        nodes,
        links,
        spring=spring,
        grid=grid,
        fill=fill,
        hierarchical=hierarchical,
        random_seed=random_seed,
        rng=rng,
    )
    logger.debug(
        "Running %s layout on %d nodes and %d links",
        resolved.value,
        len(layout.nodes),
        len(layout.links),
    )
    # Attribute exhaustion warnings to the caller of auto_layout
    layout.run(stacklevel=3)
    return layout.nodes


__all__ = [
    "LayoutMode",
    "resolve_mode",
    "create_layout",
    "auto_layout",
]
