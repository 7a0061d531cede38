"""Tests for input validation and parameter records."""

import dataclasses

import pytest

from organic_layout import (
    FillConfig,
    GridConfig,
    HierarchicalConfig,
    Link,
    SpringConfig,
)
from organic_layout.validation import (
    GridExhaustedWarning,
    InvalidCellSizeError,
    LayoutWarning,
    ValidationError,
    filter_links,
    link_endpoints,
    validate_iterations,
    validate_pitch,
    validate_search_radius,
    validate_unit_interval,
)


class TestPitchValidation:
    """Tests for grid pitch and footprint validation."""

    def test_valid_pitch(self):
        assert validate_pitch(cell_width=220, cell_height=160) == (220.0, 160.0)

    def test_negative_extent_names_field(self):
        with pytest.raises(InvalidCellSizeError, match="cell_width must be a finite value > 0"):
            validate_pitch(cell_width=-1, cell_height=160)

    def test_zero_extent_raises(self):
        with pytest.raises(InvalidCellSizeError, match="spacing_y"):
            validate_pitch(spacing_x=200, spacing_y=0)

    def test_infinite_extent_raises(self):
        with pytest.raises(InvalidCellSizeError):
            validate_pitch(node_width=float("inf"))


class TestScalarValidation:
    """Tests for scalar parameter validation."""

    def test_iterations(self):
        assert validate_iterations(0) == 0
        with pytest.raises(ValidationError, match="iterations must be >= 0"):
            validate_iterations(-1)

    def test_unit_interval(self):
        assert validate_unit_interval("damping", 0.3) == 0.3
        with pytest.raises(ValidationError, match=r"damping must be in \[0, 1\]"):
            validate_unit_interval("damping", 1.5)

    def test_search_radius(self):
        assert validate_search_radius(1) == 1
        with pytest.raises(ValidationError):
            validate_search_radius(0)

    def test_errors_are_value_errors(self):
        assert issubclass(ValidationError, ValueError)
        assert issubclass(InvalidCellSizeError, ValidationError)

    def test_warning_hierarchy(self):
        assert issubclass(GridExhaustedWarning, LayoutWarning)
        assert issubclass(LayoutWarning, UserWarning)


class TestFilterLinks:
    """Tests for dropping links to unknown nodes."""

    def test_keeps_valid_links_in_order(self):
        links = [("a", "b"), ("b", "ghost"), {"source": "b", "target": "a"}, Link("a", "a")]
        assert filter_links(links, ["a", "b"]) == [("a", "b"), ("b", "a"), ("a", "a")]

    def test_incomplete_links_dropped(self):
        links = [{"source": "a"}, ("a",), object()]
        assert filter_links(links, ["a"]) == []

    def test_objects_with_attributes(self):
        class Edge:
            source = "a"
            target = "b"

        assert filter_links([Edge()], ["a", "b"]) == [("a", "b")]


class TestLinkEndpoints:
    """Tests for endpoint extraction from each accepted link shape."""

    @pytest.mark.parametrize(
        "link",
        [("a", "b"), ["a", "b"], {"source": "a", "target": "b"}, Link("a", "b")],
    )
    def test_complete_links(self, link):
        assert link_endpoints(link) == ("a", "b")

    @pytest.mark.parametrize(
        "link",
        [("a",), ("a", None), {"source": "a"}, {"target": None}, object()],
    )
    def test_incomplete_links(self, link):
        assert link_endpoints(link) is None


class TestConfigs:
    """Tests for parameter records."""

    def test_spring_defaults(self):
        cfg = SpringConfig()
        assert cfg.iterations == 100
        assert cfg.spring_constant == 0.25
        assert cfg.centering == 0.1
        assert cfg.cohesion == 0.05
        assert cfg.initial_temperature == 4.0
        assert cfg.cooling_factor == 0.96
        assert cfg.velocity_cap == 50.0
        assert cfg.damping == 0.3
        assert cfg.min_velocity is None

    def test_spring_rejects_bad_values(self):
        with pytest.raises(ValidationError):
            SpringConfig(damping=1.5)
        with pytest.raises(ValidationError):
            SpringConfig(iterations=-5)
        with pytest.raises(ValidationError):
            SpringConfig(spring_constant=-0.1)
        with pytest.raises(ValidationError):
            SpringConfig(min_velocity=-1.0)

    def test_grid_defaults(self):
        cfg = GridConfig()
        assert cfg.cell_size == (220.0, 160.0)
        assert cfg.max_search_radius == 100

    def test_grid_rejects_bad_values(self):
        with pytest.raises(InvalidCellSizeError):
            GridConfig(cell_width=0)
        with pytest.raises(ValidationError):
            GridConfig(max_search_radius=0)

    def test_other_configs_reject_bad_sizes(self):
        with pytest.raises(InvalidCellSizeError):
            FillConfig(spacing_x=-10)
        with pytest.raises(InvalidCellSizeError):
            HierarchicalConfig(node_height=0)
        with pytest.raises(ValidationError):
            HierarchicalConfig(rank_separation=-1)

    def test_configs_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            SpringConfig().iterations = 5  # type: ignore[misc]
