"""
sfdp: Spring-electric force-directed graph layout in Python.

This package computes 2D/3D (or any dimension) coordinates for the nodes of
a graph given as an adjacency matrix, by iterating the flat Yifan Hu
spring-electric force model until the layout stabilizes.

Available pieces:
- force: The layout engine (SpringElectricLayout, layout, layout_inplace)
- basic: Seeded random start positions
- geometry: Coordinate-vector helpers over numpy arrays
- validation: Configuration errors and input checks
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    IterativeLayout,
)

# Start positions
from .basic import make_rng, random_positions

# Force-directed layout
from .force import (
    SpringElectricLayout,
    layout,
    layout_inplace,
)

# Geometry helpers
from .geometry import distance_floor, norm

# Shared types
from .types import (
    AdjacencyLike,
    Event,
    EventType,
    IterationState,
    LayoutParameters,
    LayoutStatus,
    PositionsLike,
    UpdateMode,
)

# Validation utilities
from .validation import (
    ConfigurationError,
    GraphStructureWarning,
    InvalidAdjacencyError,
    InvalidParameterError,
    InvalidPositionsError,
    validate_adjacency,
    validate_parameters,
    validate_positions,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "EventType",
    "Event",
    "LayoutStatus",
    "UpdateMode",
    "LayoutParameters",
    "IterationState",
    # Type aliases for API
    "AdjacencyLike",
    "PositionsLike",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    # Force-directed layout
    "SpringElectricLayout",
    "layout",
    "layout_inplace",
    # Start positions
    "random_positions",
    "make_rng",
    # Geometry
    "norm",
    "distance_floor",
    # Validation
    "ConfigurationError",
    "InvalidAdjacencyError",
    "InvalidPositionsError",
    "InvalidParameterError",
    "GraphStructureWarning",
    "validate_adjacency",
    "validate_positions",
    "validate_parameters",
]
