"""
Tests for the spring simulation.
"""

import math
import random

import pytest

from organic_layout import MASS_POINT, EventType, SpringConfig, SpringSimulation


class ConstantRandom(random.Random):
    """Random source whose every draw is the middle of the range."""

    def random(self):
        return 0.5


def ring_radius(n, config=SpringConfig()):
    return math.sqrt(n) * config.ring_scale + config.ring_offset


# =============================================================================
# Initialization
# =============================================================================


class TestRingSeeding:
    """Tests for the initial ring placement."""

    def test_zero_iterations_leaves_nodes_on_ring(self):
        """Without jitter or iterations nodes sit on evenly spaced angles."""
        config = SpringConfig(iterations=0, jitter=0)
        sim = SpringSimulation(nodes=["a", "b", "c", "d"], config=config, random_seed=1)
        sim.run()

        radius = ring_radius(4, config)
        expected = {
            "a": (radius, 0.0),
            "b": (0.0, radius),
            "c": (-radius, 0.0),
            "d": (0.0, -radius),
        }
        for node_id, (ex, ey) in expected.items():
            x, y = sim.positions[node_id]
            assert x == pytest.approx(ex, abs=1e-6)
            assert y == pytest.approx(ey, abs=1e-6)

    def test_ring_grows_with_node_count(self):
        """Larger graphs start on a larger ring."""
        config = SpringConfig(iterations=0, jitter=0)
        small = SpringSimulation(nodes=["a", "b"], config=config).run()
        large = SpringSimulation(nodes=[f"n{i}" for i in range(50)], config=config).run()

        assert large.positions["n0"][0] > small.positions["a"][0]
        assert small.positions["a"][0] > config.ring_offset

    def test_jitter_bounded(self):
        """Jitter perturbs each coordinate by at most half its span."""
        config = SpringConfig(iterations=0, jitter=100)
        sim = SpringSimulation(nodes=["a"], config=config, random_seed=5).run()

        x, y = sim.positions["a"]
        assert abs(x - ring_radius(1, config)) <= 50
        assert abs(y) <= 50

    def test_constant_random_source_gives_no_offset(self):
        """A mid-range random source puts nodes exactly on the ring."""
        config = SpringConfig(iterations=0)
        sim = SpringSimulation(nodes=["a"], config=config, rng=ConstantRandom()).run()

        x, y = sim.positions["a"]
        assert x == pytest.approx(ring_radius(1, config))
        assert y == pytest.approx(0.0)

    def test_arena_layout(self):
        """Mass points live in one structured array, one slot per node."""
        sim = SpringSimulation(nodes=["a", "b", "c"], links=[("a", "b")], random_seed=2)
        sim.run()

        assert sim.points is not None
        assert sim.points.dtype == MASS_POINT
        assert len(sim.points) == 3


# =============================================================================
# Dynamics
# =============================================================================


class TestSimulationDynamics:
    """Tests for the forces and the annealing schedule."""

    def test_linked_pair_pulled_together(self):
        """A linked pair ends closer together and closer to the origin."""
        config = SpringConfig(jitter=0)
        sim = SpringSimulation(nodes=["a", "b"], links=[("a", "b")], config=config)
        sim.run()

        (ax, ay), (bx, by) = sim.positions["a"], sim.positions["b"]
        radius = ring_radius(2, config)
        assert math.hypot(ax - bx, ay - by) < 2 * radius
        assert math.hypot(ax, ay) < radius
        assert math.hypot(bx, by) < radius

    def test_symmetric_start_stays_symmetric(self):
        """Opposite nodes on the ring move as mirror images."""
        config = SpringConfig(jitter=0)
        sim = SpringSimulation(nodes=["a", "b"], links=[("a", "b")], config=config)
        sim.run()

        ax, _ = sim.positions["a"]
        bx, _ = sim.positions["b"]
        assert ax == pytest.approx(-bx, abs=1e-6)

    def test_isolated_node_drifts_to_origin(self):
        """Centering alone moves a node toward the origin."""
        config = SpringConfig(jitter=0, iterations=10)
        sim = SpringSimulation(nodes=["a"], config=config).run()

        x, _ = sim.positions["a"]
        assert 0 <= x < ring_radius(1, config)

    def test_components_computed_when_missing(self):
        """Components are derived from the links when not supplied."""
        sim = SpringSimulation(
            nodes=["a", "b", "c", "d"],
            links=[("a", "b"), ("c", "d")],
            random_seed=4,
        )
        sim.run()
        assert set(sim.positions) == {"a", "b", "c", "d"}

    def test_links_to_unknown_nodes_ignored(self):
        """Dangling links do not break the simulation."""
        sim = SpringSimulation(nodes=["a", "b"], links=[("a", "ghost"), ("a", "b")])
        sim.run()
        assert set(sim.positions) == {"a", "b"}

    def test_writes_positions_to_nodes(self):
        """Simulated positions are copied onto the node objects."""
        sim = SpringSimulation(nodes=["a", "b"], links=[("a", "b")], random_seed=9)
        sim.run()
        for node in sim.nodes:
            assert (node.x, node.y) == sim.positions[node.id]

    def test_same_seed_same_result(self):
        """Two runs with equal seeds agree exactly."""
        kwargs = {"nodes": ["a", "b", "c"], "links": [("a", "b"), ("b", "c")]}
        first = SpringSimulation(random_seed=11, **kwargs).run().positions
        second = SpringSimulation(random_seed=11, **kwargs).run().positions
        assert first == second


class TestSingleStep:
    """
    One iteration checked against hand-computed values.

    Four nodes on a ring of radius 100 without jitter: a=(100, 0),
    b=(0, 100), c=(-100, 0), d=(0, -100). The chain a-b-c has its centroid
    at (0, 100/3), off the origin, so cohesion and centering differ; d is
    an isolated singleton and feels centering only.
    """

    def run_one_step(self, **overrides):
        config = SpringConfig(iterations=1, jitter=0, ring_scale=0, ring_offset=100, **overrides)
        sim = SpringSimulation(
            nodes=["a", "b", "c", "d"],
            links=[("a", "b"), ("b", "c")],
            config=config,
        )
        return sim.run()

    def assert_points(self, sim, expected, field_x, field_y):
        for node_id, (ex, ey) in expected.items():
            i = ["a", "b", "c", "d"].index(node_id)
            assert sim.points[field_x][i] == pytest.approx(ex, abs=1e-9)
            assert sim.points[field_y][i] == pytest.approx(ey, abs=1e-9)

    def test_positions_after_one_step(self):
        """
        Velocities before the step (spring, then centering, then cohesion):
        a = (-25, 25) + (-10, 0) + (-5, 5/3)
        b = (0, -50) + (0, -10) + (0, -10/3)
        c = (25, 25) + (10, 0) + (5, 5/3)
        d = (0, 0) + (0, 10)
        All speeds are below the cap of 4 * 50.
        """
        sim = self.run_one_step()
        self.assert_points(
            sim,
            {
                "a": (60.0, 80.0 / 3),
                "b": (0.0, 110.0 / 3),
                "c": (-60.0, 80.0 / 3),
                "d": (0.0, -90.0),
            },
            "x",
            "y",
        )

    def test_velocities_damped_after_one_step(self):
        sim = self.run_one_step()
        self.assert_points(
            sim,
            {
                "a": (-12.0, 8.0),
                "b": (0.0, -19.0),
                "c": (12.0, 8.0),
                "d": (0.0, 3.0),
            },
            "vx",
            "vy",
        )

    def test_cohesion_moves_chain_toward_centroid(self):
        """Without cohesion a would end at (65, 25)."""
        with_cohesion = self.run_one_step()
        without = self.run_one_step(cohesion=0.0)

        assert without.positions["a"] == pytest.approx((65.0, 25.0))
        assert with_cohesion.positions["a"] == pytest.approx((60.0, 80.0 / 3))
        assert with_cohesion.positions["d"] == pytest.approx(without.positions["d"])

    def test_speed_capped_by_temperature(self):
        """
        A pair at (100, 0) and (-100, 0) with temperature 0.01: the cap is
        0.01 * 50 = 0.5 while the velocity is (-50) + (-10) + (-5) = -65,
        so each node moves exactly 0.5 and keeps 0.3 of its raw velocity.
        """
        config = SpringConfig(
            iterations=1,
            jitter=0,
            ring_scale=0,
            ring_offset=100,
            initial_temperature=0.01,
        )
        sim = SpringSimulation(nodes=["a", "b"], links=[("a", "b")], config=config).run()

        assert sim.positions["a"] == pytest.approx((99.5, 0.0), abs=1e-9)
        assert sim.positions["b"] == pytest.approx((-99.5, 0.0), abs=1e-9)
        assert sim.points["vx"][0] == pytest.approx(-19.5)
        assert sim.points["vx"][1] == pytest.approx(19.5)


class TestSimulationSchedule:
    """Tests for iteration count, events and early stopping."""

    def test_fixed_iteration_count(self):
        """Without a stopping criterion every iteration runs."""
        ticks = []
        sim = SpringSimulation(
            nodes=["a", "b"],
            links=[("a", "b")],
            config=SpringConfig(iterations=12),
            on_tick=lambda e: ticks.append(e),
        )
        sim.run()

        assert len(ticks) == 12
        assert sim.iteration == 12

    def test_geometric_cooling(self):
        """Temperature starts at its initial value and decays by the factor."""
        temperatures = []
        sim = SpringSimulation(
            nodes=["a", "b"],
            links=[("a", "b")],
            config=SpringConfig(iterations=3),
        )
        sim.on("tick", lambda e: temperatures.append(e["temperature"]))
        sim.run()

        assert temperatures == pytest.approx([4.0, 3.84, 3.6864])

    def test_early_stop_on_min_velocity(self):
        """A stopping threshold above any speed ends after one tick."""
        sim = SpringSimulation(
            nodes=["a", "b"],
            links=[("a", "b")],
            config=SpringConfig(min_velocity=1e12),
        )
        sim.run()
        assert sim.iteration == 1

    def test_start_and_end_events(self):
        """start and end fire once per run."""
        events = []
        sim = SpringSimulation(
            nodes=["a"],
            config=SpringConfig(iterations=2),
            on_start=lambda e: events.append(e["type"]),
            on_end=lambda e: events.append(e["type"]),
        )
        sim.run()
        assert events == [EventType.start, EventType.end]

    def test_empty_simulation(self):
        """No nodes: nothing runs and no events fire."""
        events = []
        sim = SpringSimulation(
            nodes=[],
            on_start=lambda e: events.append(e),
            on_tick=lambda e: events.append(e),
        )
        sim.run()

        assert events == []
        assert sim.positions == {}
        assert sim.iteration == 0
