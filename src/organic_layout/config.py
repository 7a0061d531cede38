"""
Tunable parameters for each layout mode.

Defaults reproduce the editor's stock behavior. Every record is frozen and
validated on construction, so an instance can be shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .validation import (
    validate_iterations,
    validate_non_negative,
    validate_pitch,
    validate_search_radius,
    validate_unit_interval,
)


@dataclass(frozen=True)
class SpringConfig:
    """
    Parameters of the spring simulation.

    Attributes:
        iterations: Fixed number of simulation steps
        spring_constant: Linear attraction per unit of edge length
        centering: Pull of every node toward the origin
        cohesion: Pull of component members toward their live centroid
        initial_temperature: Starting annealing temperature
        cooling_factor: Geometric temperature decay per step
        velocity_cap: Speed limit per unit of temperature
        damping: Velocity retained after each step (friction)
        ring_scale: Initial ring radius growth per sqrt(node count)
        ring_offset: Minimum initial ring radius
        jitter: Span of the uniform perturbation of initial positions
        min_velocity: Optional early stop when total speed drops below it
    """

    iterations: int = 100
    spring_constant: float = 0.25
    centering: float = 0.1
    cohesion: float = 0.05
    initial_temperature: float = 4.0
    cooling_factor: float = 0.96
    velocity_cap: float = 50.0
    damping: float = 0.3
    ring_scale: float = 390.0
    ring_offset: float = 3500.0
    jitter: float = 100.0
    min_velocity: Optional[float] = None

    def __post_init__(self) -> None:
        validate_iterations(self.iterations)
        validate_unit_interval("cooling_factor", self.cooling_factor)
        validate_unit_interval("damping", self.damping)
        for name in (
            "spring_constant",
            "centering",
            "cohesion",
            "initial_temperature",
            "velocity_cap",
            "ring_scale",
            "ring_offset",
            "jitter",
        ):
            validate_non_negative(name, getattr(self, name))
        if self.min_velocity is not None:
            validate_non_negative("min_velocity", self.min_velocity)


@dataclass(frozen=True)
class GridConfig:
    """
    Parameters of grid placement.

    Attributes:
        cell_width: Horizontal cell pitch (node footprint plus margin)
        cell_height: Vertical cell pitch, leaves room for top/bottom anchors
        max_search_radius: Ring radii 0..max_search_radius-1 are scanned
    """

    cell_width: float = 220.0
    cell_height: float = 160.0
    max_search_radius: int = 100

    def __post_init__(self) -> None:
        validate_pitch(cell_width=self.cell_width, cell_height=self.cell_height)
        validate_search_radius(self.max_search_radius)

    @property
    def cell_size(self) -> tuple[float, float]:
        """Get cell size as (width, height)."""
        return (self.cell_width, self.cell_height)


@dataclass(frozen=True)
class FillConfig:
    """
    Parameters of the topology-blind grid fill.

    Attributes:
        spacing_x: Column pitch
        spacing_y: Row pitch
    """

    spacing_x: float = 200.0
    spacing_y: float = 80.0

    def __post_init__(self) -> None:
        validate_pitch(spacing_x=self.spacing_x, spacing_y=self.spacing_y)


@dataclass(frozen=True)
class HierarchicalConfig:
    """
    Parameters of the left-to-right layered layout.

    Attributes:
        node_width: Width reserved for each node
        node_height: Height reserved for each node
        rank_separation: Horizontal gap between consecutive ranks
        node_separation: Vertical gap between nodes in one rank
    """

    node_width: float = 172.0
    node_height: float = 48.0
    rank_separation: float = 30.0
    node_separation: float = 10.0

    def __post_init__(self) -> None:
        validate_pitch(node_width=self.node_width, node_height=self.node_height)
        validate_non_negative("rank_separation", self.rank_separation)
        validate_non_negative("node_separation", self.node_separation)


__all__ = [
    "SpringConfig",
    "GridConfig",
    "FillConfig",
    "HierarchicalConfig",
]
