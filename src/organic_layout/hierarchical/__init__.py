"""
Hierarchical layout.

- HierarchicalLayout: Left-to-right ranks computed with networkx
"""

from .layered import HierarchicalLayout

__all__ = [
    "HierarchicalLayout",
]
