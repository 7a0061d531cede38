"""
organic-layout: Automatic layout for node-link diagram editors.

Places the nodes of a diagram onto 2D coordinates given only node ids and
links, and annotates each node with the sides its edge anchors sit on.

Available modes:
- organic: Spring simulation snapped onto a collision-free grid
- grid: Topology-blind row-major grid fill
- hierarchical: Left-to-right layered layout (networkx)
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    IterativeLayout,
    StaticLayout,
)

# Parameters
from .config import (
    FillConfig,
    GridConfig,
    HierarchicalConfig,
    SpringConfig,
)

# Dispatcher
from .dispatch import (
    LayoutMode,
    auto_layout,
    create_layout,
    resolve_mode,
)

# Force simulation
from .force import MASS_POINT, SpringSimulation

# Grid placement
from .grid import (
    GridLayout,
    GridResolver,
    ring_offsets,
)

# Hierarchical layout
from .hierarchical import HierarchicalLayout

# Metrics for layout quality evaluation
from .metrics import (
    bounding_box,
    edge_crossings,
    edge_length_variance,
    edge_lengths,
    mean_edge_length,
    overlapping_nodes,
)

# Organic layout
from .organic import OrganicLayout

# Connectivity analysis
from .topology import (
    Topology,
    analyze_topology,
    build_adjacency,
)
from .types import (
    Cell,
    Event,
    EventType,
    HandleSide,
    Link,
    LinkLike,
    Node,
    NodeLike,
    Position,
)

# Validation utilities
from .validation import (
    GridExhaustedWarning,
    InvalidCellSizeError,
    InvalidLayoutModeError,
    LayoutWarning,
    ValidationError,
    filter_links,
    link_endpoints,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Node",
    "Link",
    "HandleSide",
    "EventType",
    "Event",
    "NodeLike",
    "LinkLike",
    "Position",
    "Cell",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
    # Parameters
    "SpringConfig",
    "GridConfig",
    "FillConfig",
    "HierarchicalConfig",
    # Topology
    "Topology",
    "analyze_topology",
    "build_adjacency",
    # Force simulation
    "MASS_POINT",
    "SpringSimulation",
    # Grid placement
    "GridResolver",
    "GridLayout",
    "ring_offsets",
    # Layout modes
    "OrganicLayout",
    "HierarchicalLayout",
    # Dispatcher
    "LayoutMode",
    "auto_layout",
    "create_layout",
    "resolve_mode",
    # Metrics
    "overlapping_nodes",
    "edge_crossings",
    "edge_lengths",
    "mean_edge_length",
    "edge_length_variance",
    "bounding_box",
    # Validation
    "ValidationError",
    "InvalidCellSizeError",
    "InvalidLayoutModeError",
    "LayoutWarning",
    "GridExhaustedWarning",
    "filter_links",
    "link_endpoints",
]
