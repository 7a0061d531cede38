"""
Grid placement.

This module provides:
- GridResolver: Collision-free snapping with an expanding ring search
- ring_offsets: Deterministic square-ring scan order
- GridLayout: Topology-blind row-major grid fill
"""

from .fill import GridLayout
from .resolver import GridResolver, ring_offsets

__all__ = [
    "GridLayout",
    "GridResolver",
    "ring_offsets",
]
