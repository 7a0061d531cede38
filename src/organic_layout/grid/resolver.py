"""
Snapping of continuous positions onto a collision-free uniform grid.

Linked nodes claim the cell nearest to their simulated position, closest
to the origin first, so central nodes keep their preferred cell. When a
cell is taken, an expanding square-ring search finds the nearest free
one. Unlinked nodes then spiral-fill the remaining cells outward from the
origin.
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Iterator, Mapping, Optional, Sequence

from ..config import GridConfig
from ..types import Cell, Position
from ..validation import GridExhaustedWarning

logger = logging.getLogger(__name__)


def ring_offsets(radius: int) -> Iterator[Cell]:
    """
    Yield the offsets of the square ring at a Chebyshev radius.

    Cells are produced column by column (dx from -r to r), each column top
    to bottom (dy from -r to r), skipping the interior already covered by
    smaller radii. Radius 0 yields only (0, 0); radius r > 0 yields 8r cells.

    Example:
        >>> list(ring_offsets(1))
        [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]
    """
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if abs(dx) == radius or abs(dy) == radius:
                yield (dx, dy)


class GridResolver:
    """
    Sparse occupancy grid with deterministic free-cell search.

    One resolver holds the occupancy of one layout call. Placement is a
    pure function of the positions it is given, so injecting fixed
    positions always yields the same cells.

    Example:
        resolver = GridResolver()
        cells = resolver.place({"a": (0.0, 0.0), "b": (10.0, 5.0)}, ["c"])
        coords = resolver.to_display_positions(cells)
    """

    def __init__(self, config: Optional[GridConfig] = None) -> None:
        self._config: GridConfig = config if config is not None else GridConfig()
        self._occupied: dict[Cell, str] = {}
        self._exhausted: list[str] = []

    @property
    def config(self) -> GridConfig:
        """Get the grid parameters."""
        return self._config

    @property
    def occupied(self) -> dict[Cell, str]:
        """Get the cell -> node id occupancy map."""
        return self._occupied

    @property
    def exhausted(self) -> list[str]:
        """Get ids of nodes placed on an occupied cell after a failed search."""
        return self._exhausted

    def is_free(self, cell: Cell) -> bool:
        """Check whether a cell is unoccupied."""
        return cell not in self._occupied

    def to_cell(self, position: Position) -> Cell:
        """Get the nearest cell to a continuous position (rounding half up)."""
        x, y = position
        return (
            math.floor(x / self._config.cell_width + 0.5),
            math.floor(y / self._config.cell_height + 0.5),
        )

    def to_display(self, cell: Cell) -> Position:
        """Get display coordinates of a cell."""
        qx, qy = cell
        return (qx * self._config.cell_width, qy * self._config.cell_height)

    def find_free(self, center: Cell) -> Optional[Cell]:
        """
        Find the nearest free cell around a center.

        Returns:
            The first free cell in ring order, or None if every ring up to
            the radius cap is full.
        """
        cx, cy = center
        for radius in range(self._config.max_search_radius):
            for dx, dy in ring_offsets(radius):
                cell = (cx + dx, cy + dy)
                if cell not in self._occupied:
                    return cell
        return None

    def claim(self, node_id: str, target: Cell, *, stacklevel: int = 2) -> Cell:
        """
        Claim the free cell nearest to target for a node.

        If the search is exhausted the target cell is claimed anyway and a
        GridExhaustedWarning is issued; the layout then contains an overlap.
        ``stacklevel`` has the meaning it has for ``warnings.warn``.
        """
        cell = self.find_free(target)
        if cell is None:
            warnings.warn(
                f"No free grid cell within radius {self._config.max_search_radius} "
                f"of {target} for node {node_id!r}; placing it on an occupied cell.",
                GridExhaustedWarning,
                stacklevel=stacklevel,
            )
            self._exhausted.append(node_id)
            cell = target
        self._occupied[cell] = node_id
        return cell

    def place(
        self,
        positions: Mapping[str, Position],
        unlinked: Sequence[str] = (),
        *,
        stacklevel: int = 2,
    ) -> dict[str, Cell]:
        """
        Assign a cell to every linked and unlinked node.

        Args:
            positions: Simulated position of each linked node. Iteration
                order breaks ties between equally distant nodes.
            unlinked: Unlinked node ids in input order
            stacklevel: Frame that exhaustion warnings are attributed to,
                as for warnings.warn (2 is the caller of place)

        Returns:
            Node id -> claimed cell
        """
        cells: dict[str, Cell] = {}

        # Nodes nearest the origin get first claim on their preferred cell
        ordered = sorted(
            positions.items(),
            key=lambda item: item[1][0] * item[1][0] + item[1][1] * item[1][1],
        )
        for node_id, position in ordered:
            target = self.to_cell(position)
            cells[node_id] = self.claim(node_id, target, stacklevel=stacklevel + 1)

        for node_id in unlinked:
            cells[node_id] = self.claim(node_id, (0, 0), stacklevel=stacklevel + 1)

        logger.debug(
            "Placed %d linked and %d unlinked nodes on %d cells",
            len(positions),
            len(unlinked),
            len(self._occupied),
        )
        return cells

    def to_display_positions(self, cells: Mapping[str, Cell]) -> dict[str, Position]:
        """Convert claimed cells to display coordinates."""
        return {node_id: self.to_display(cell) for node_id, cell in cells.items()}


__all__ = [
    "ring_offsets",
    "GridResolver",
]
