"""
Damped spring simulation for linked diagram nodes.

Nodes start on a large ring and are pulled together by three forces:
- Linear springs along every link (not inverse-square)
- A restoring force toward the origin
- Cohesion of each multi-node component toward its live centroid

Speed per step is capped by an annealing temperature that cools
geometrically, and velocity is damped after every step. The iteration
count is fixed: there is no convergence test unless ``min_velocity`` is
configured, so badly conditioned graphs may end before they settle.
"""

from __future__ import annotations

import math
import random
from typing import Any, Callable, Optional, Sequence

import numpy as np
from typing_extensions import Self

from ..base import IterativeLayout
from ..config import SpringConfig
from ..topology import analyze_topology
from ..types import Event, EventType, LinkLike, NodeLike, Position

# One mass point per linked node, addressed by a stable slot index
MASS_POINT = np.dtype(
    [
        ("x", np.float64),
        ("y", np.float64),
        ("vx", np.float64),
        ("vy", np.float64),
    ]
)


class SpringSimulation(IterativeLayout):
    """
    Spring simulation over the linked nodes of a diagram.

    Every node is assigned a slot in a numpy structured array of mass
    points (x, y, vx, vy). Each force pass reads and writes the same
    arena, so links and components are stored as slot indices.

    Example:
        sim = SpringSimulation(
            nodes=["a", "b", "c"],
            links=[("a", "b"), ("b", "c")],
            random_seed=7,
        )
        sim.run()
        print(sim.positions["a"])
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        components: Optional[Sequence[Sequence[str]]] = None,
        config: Optional[SpringConfig] = None,
        random_seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize the simulation.

        Args:
            nodes: Linked nodes to simulate
            links: Links between them; links to unknown ids are ignored
            components: Connected components as id lists. If None, they
                are computed from the links.
            config: Force constants and schedule. Defaults to SpringConfig().
            random_seed: Seed for a private random source
            rng: Explicit random source for the initial jitter
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
        """
        self._config: SpringConfig = config if config is not None else SpringConfig()
        super().__init__(
            nodes=nodes,
            links=links,
            random_seed=random_seed,
            rng=rng,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
            temperature=self._config.initial_temperature,
            cooling_factor=self._config.cooling_factor,
            iterations=self._config.iterations,
        )
        self._components: Optional[list[list[str]]] = (
            [list(c) for c in components] if components is not None else None
        )

        # Internal state
        self._points: Optional[np.ndarray] = None
        self._slots: dict[str, int] = {}
        self._sources: Optional[np.ndarray] = None
        self._targets: Optional[np.ndarray] = None
        self._clusters: list[np.ndarray] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> SpringConfig:
        """Get the simulation parameters."""
        return self._config

    @property
    def points(self) -> Optional[np.ndarray]:
        """Get the mass-point arena (None before run())."""
        return self._points

    @property
    def positions(self) -> dict[str, Position]:
        """Get the simulated position of every node, keyed by id."""
        if self._points is None:
            return {}
        return {
            node_id: (float(self._points["x"][i]), float(self._points["y"][i]))
            for node_id, i in self._slots.items()
        }

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def run(self, **kwargs: Any) -> Self:
        """
        Seed the ring, run the fixed iteration budget and store positions.

        An empty node list returns immediately without firing events.

        Returns:
            self for chaining
        """
        if not self._nodes:
            self._points = None
            return self

        self._prepare()
        self._reseed()
        self._points = self._seed_ring()

        self.trigger({"type": EventType.start, "temperature": self._initial_temperature})
        self.kick()

        for node in self._nodes:
            i = self._slots[node.id]
            node.x = float(self._points["x"][i])
            node.y = float(self._points["y"][i])

        self.trigger({"type": EventType.end, "iteration": self._iteration})
        return self

    def _prepare(self) -> None:
        """Assign slots and translate links and components to slot indices."""
        self._slots = {}
        for node in self._nodes:
            if node.id not in self._slots:
                self._slots[node.id] = len(self._slots)

        valid = self._valid_links()
        self._sources = np.array([self._slots[s] for s, _ in valid], dtype=np.intp)
        self._targets = np.array([self._slots[t] for _, t in valid], dtype=np.intp)

        components = self._components
        if components is None:
            components = analyze_topology(list(self._slots), valid).components

        # Single-node components feel no cohesion
        self._clusters = [
            np.array([self._slots[node_id] for node_id in component], dtype=np.intp)
            for component in components
            if len(component) > 1
        ]

    def _seed_ring(self) -> np.ndarray:
        """
        Place nodes at evenly spaced angles on a ring, with a small jitter.

        The radius grows with sqrt(n) and has a floor, so small graphs do
        not start bunched around the origin.
        """
        cfg = self._config
        n = len(self._slots)
        radius = math.sqrt(n) * cfg.ring_scale + cfg.ring_offset
        half = cfg.jitter / 2
        rng = self.rng

        points = np.zeros(n, dtype=MASS_POINT)
        for i in range(n):
            angle = (i / n) * 2 * math.pi
            points["x"][i] = math.cos(angle) * radius + rng.uniform(-half, half)
            points["y"][i] = math.sin(angle) * radius + rng.uniform(-half, half)
        return points

    def tick(self) -> bool:
        """
        Perform one iteration of the simulation.

        Returns:
            True if min_velocity is configured and total speed fell below it.
        """
        # These are set in run() before tick() is called
        assert self._points is not None
        assert self._sources is not None
        assert self._targets is not None

        cfg = self._config
        x = self._points["x"]
        y = self._points["y"]
        vx = self._points["vx"]
        vy = self._points["vy"]

        # Spring attraction along links
        if len(self._sources):
            src = self._sources
            tgt = self._targets
            dx = x[tgt] - x[src]
            dy = y[tgt] - y[src]
            dist = np.sqrt(dx * dx + dy * dy) + 1.0
            force = dist * cfg.spring_constant
            fx = (dx / dist) * force
            fy = (dy / dist) * force
            np.add.at(vx, src, fx)
            np.add.at(vy, src, fy)
            np.add.at(vx, tgt, -fx)
            np.add.at(vy, tgt, -fy)

        # Centering toward the origin
        vx -= x * cfg.centering
        vy -= y * cfg.centering

        # Cluster cohesion toward each component's live centroid
        for idx in self._clusters:
            cx = x[idx].mean()
            cy = y[idx].mean()
            vx[idx] += (cx - x[idx]) * cfg.cohesion
            vy[idx] += (cy - y[idx]) * cfg.cohesion

        # Integrate with the speed capped by the current temperature
        speed = np.hypot(vx, vy)
        cap = self._temperature * cfg.velocity_cap
        scale = np.zeros_like(speed)
        moving = speed > 0
        scale[moving] = np.minimum(speed[moving], cap) / speed[moving]
        x += vx * scale
        y += vy * scale

        # Friction
        vx *= cfg.damping
        vy *= cfg.damping

        total_speed = float(speed.sum())
        self.trigger({
            "type": EventType.tick,
            "iteration": self._iteration,
            "temperature": self._temperature,
            "speed": total_speed,
        })

        return cfg.min_velocity is not None and total_speed < cfg.min_velocity


__all__ = ["MASS_POINT", "SpringSimulation"]
