"""
Coordinate-vector helpers.

Points are rows of a numpy array, so addition, subtraction and scalar
scaling are plain array arithmetic. Dimension and scalar precision are
whatever the caller's array carries; the helpers here only add the
Euclidean norm and the guarded unit-direction computation the force model
needs.
"""

from __future__ import annotations

from typing import Any

import numpy as np


def norm(vectors: np.ndarray) -> np.ndarray:
    """Euclidean norm along the last axis."""
    return np.sqrt(np.sum(vectors * vectors, axis=-1))


def distance_floor(dtype: Any) -> float:
    """
    Smallest separation used as a divisor for the given precision.

    sqrt(eps) keeps C*K^2 / d and d^2 / K comfortably inside the range of
    the type, so clamped forces stay finite.
    """
    return float(np.sqrt(np.finfo(dtype).eps))


def unit_directions(deltas: np.ndarray, distances: np.ndarray, floor: float) -> np.ndarray:
    """
    Normalize difference vectors, treating coincident points as direction zero.

    Args:
        deltas: Difference vectors, shape (..., d)
        distances: Their norms, shape (...)
        floor: Minimum divisor (see distance_floor)

    Returns:
        Array of unit vectors (zero where the delta is zero)
    """
    return deltas / np.maximum(distances, floor)[..., np.newaxis]


__all__ = [
    "norm",
    "distance_floor",
    "unit_directions",
]
