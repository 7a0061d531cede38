"""
Force-directed simulation used by the organic layout.

- SpringSimulation: Damped, annealed spring simulation over linked nodes
"""

from .simulation import MASS_POINT, SpringSimulation

__all__ = [
    "MASS_POINT",
    "SpringSimulation",
]
