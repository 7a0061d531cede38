"""
Input validation utilities for diagram layout.

Provides centralized validation for layout parameters and the warning
classes used to report degenerate (but recoverable) layout conditions.
Configuration errors raise descriptive exceptions; graph defects never do:
links that reference unknown node ids are filtered out instead.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidCellSizeError(ValidationError):
    """Raised when grid cell dimensions are invalid."""

    pass


class InvalidLayoutModeError(ValidationError):
    """Raised when an unknown layout mode is requested."""

    pass


class LayoutWarning(UserWarning):
    """Base warning for layouts that completed with degraded quality."""

    pass


class GridExhaustedWarning(LayoutWarning):
    """Issued when the free-cell search gives up and a cell is shared."""

    pass


def validate_pitch(**extents: float) -> tuple[float, ...]:
    """
    Validate the extents of a grid pitch or node footprint.

    Each keyword names one extent, e.g.
    ``validate_pitch(cell_width=220, cell_height=160)``.

    Returns:
        The extents as floats, in keyword order

    Raises:
        InvalidCellSizeError: If any extent is zero, negative or not finite
    """
    checked = []
    for name, value in extents.items():
        value = float(value)
        if not math.isfinite(value) or value <= 0:
            raise InvalidCellSizeError(f"{name} must be a finite value > 0, got {value}")
        checked.append(value)
    return tuple(checked)


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is not negative.

    Zero is allowed: the simulation then only seeds the initial ring.

    Raises:
        ValidationError: If iterations < 0
    """
    if iterations < 0:
        raise ValidationError(f"iterations must be >= 0, got {iterations}")
    return iterations


def validate_unit_interval(name: str, value: float) -> float:
    """
    Validate a factor lies in [0, 1].

    Raises:
        ValidationError: If value not in [0, 1]
    """
    if value < 0 or value > 1:
        raise ValidationError(f"{name} must be in [0, 1], got {value}")
    return value


def validate_non_negative(name: str, value: float) -> float:
    """
    Validate a constant is >= 0.

    Raises:
        ValidationError: If value < 0
    """
    if value < 0:
        raise ValidationError(f"{name} must be >= 0, got {value}")
    return value


def validate_search_radius(radius: int) -> int:
    """
    Validate the free-cell search radius cap.

    Raises:
        ValidationError: If radius < 1
    """
    if radius < 1:
        raise ValidationError(f"max_search_radius must be >= 1, got {radius}")
    return radius


def filter_links(
    links: Iterable[Any],
    node_ids: Iterable[str],
) -> list[tuple[str, str]]:
    """
    Keep only links whose endpoints both reference known node ids.

    Args:
        links: Link objects, dicts with source/target, or (source, target) pairs
        node_ids: Ids of the nodes being laid out

    Returns:
        (source, target) pairs in input order
    """
    known = set(node_ids)
    valid: list[tuple[str, str]] = []
    for link in links:
        pair = link_endpoints(link)
        if pair is not None and pair[0] in known and pair[1] in known:
            valid.append(pair)
    return valid


def link_endpoints(link: Any) -> Optional[tuple[str, str]]:
    """
    Extract the (source, target) ids of a link in any accepted shape.

    Returns:
        The id pair, or None if either endpoint is missing
    """
    src = _get_endpoint(link, "source", 0)
    tgt = _get_endpoint(link, "target", 1)
    if src is None or tgt is None:
        return None
    return (src, tgt)


def _get_endpoint(obj: Any, attr: str, position: int) -> Optional[str]:
    """Extract an endpoint id from a Link, dict, pair, or object."""
    if isinstance(obj, dict):
        val = obj.get(attr)
    elif isinstance(obj, (tuple, list)):
        val = obj[position] if len(obj) > position else None
    else:
        val = getattr(obj, attr, None)

    if val is None:
        return None
    if hasattr(val, "id"):
        return str(val.id)
    return str(val)


__all__ = [
    "ValidationError",
    "InvalidCellSizeError",
    "InvalidLayoutModeError",
    "LayoutWarning",
    "GridExhaustedWarning",
    "validate_pitch",
    "validate_iterations",
    "validate_unit_interval",
    "validate_non_negative",
    "validate_search_radius",
    "link_endpoints",
    "filter_links",
]
