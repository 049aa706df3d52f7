"""
Input validation utilities for the layout engine.

Provides centralized validation functions for the adjacency matrix, start
positions and scalar layout parameters. Every problem is reported as a
ConfigurationError subclass at construction time, before any sweep runs.
"""

from __future__ import annotations

import math
import warnings
from typing import Any, Optional, Union

import numpy as np

from .types import LayoutParameters, UpdateMode


class ConfigurationError(ValueError):
    """Base exception for invalid layout configuration."""

    pass


class InvalidAdjacencyError(ConfigurationError):
    """Raised when the adjacency matrix is malformed."""

    pass


class InvalidPositionsError(ConfigurationError):
    """Raised when start positions don't match the graph or are non-finite."""

    pass


class InvalidParameterError(ConfigurationError):
    """Raised when a scalar layout parameter is out of range."""

    pass


class GraphStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match algorithm assumptions."""

    pass


def validate_adjacency(adjacency: Any, stacklevel: int = 2) -> np.ndarray:
    """
    Normalize an adjacency relation into a read-only boolean matrix.

    Dense inputs (ndarrays, nested lists) go through numpy.asarray; sparse
    matrices are densified through their toarray() method. Only truthiness
    of entries is kept, weights are dropped.

    Args:
        adjacency: N x N relation over node indices
        stacklevel: Passed to warnings.warn for structure warnings

    Returns:
        Read-only (N, N) boolean array with a False diagonal

    Raises:
        InvalidAdjacencyError: If the input is not a square 2-D matrix
    """
    if adjacency is None:
        raise InvalidAdjacencyError("Adjacency matrix is required, got None")

    try:
        if hasattr(adjacency, "toarray"):
            arr = np.asarray(adjacency.toarray())
        else:
            arr = np.asarray(adjacency)
    except ValueError as exc:
        raise InvalidAdjacencyError(f"Adjacency matrix is not rectangular: {exc}") from exc

    if arr.ndim != 2:
        raise InvalidAdjacencyError(
            f"Adjacency matrix must be 2-dimensional, got {arr.ndim} dimension(s)"
        )
    rows, cols = arr.shape
    if rows != cols:
        raise InvalidAdjacencyError(f"Adjacency matrix must be square, got {rows}x{cols}")

    mask = arr.astype(bool)

    if np.any(np.diagonal(mask)):
        warnings.warn(
            "Adjacency matrix has self-loops on its diagonal. "
            "They carry no force and will be ignored.",
            GraphStructureWarning,
            stacklevel=stacklevel,
        )
        mask = mask.copy()
        np.fill_diagonal(mask, False)

    if not np.array_equal(mask, mask.T):
        warnings.warn(
            "Adjacency matrix is not symmetric. "
            "Node i is attracted to j only when entry (i, j) is set; "
            "results may be lopsided.",
            GraphStructureWarning,
            stacklevel=stacklevel,
        )

    mask.setflags(write=False)
    return mask


def validate_dimension(dim: int) -> int:
    """
    Validate the coordinate dimension.

    Raises:
        InvalidParameterError: If dim < 1
    """
    try:
        integral = not isinstance(dim, bool) and int(dim) == dim
    except (TypeError, ValueError):
        integral = False
    if not integral:
        raise InvalidParameterError(f"dim must be an integer, got {dim!r}")
    if dim < 1:
        raise InvalidParameterError(f"dim must be >= 1, got {dim}")
    return int(dim)


def validate_dtype(dtype: Any) -> np.dtype:
    """
    Validate the scalar precision of coordinates.

    Raises:
        InvalidParameterError: If dtype is not a floating point type
    """
    try:
        dt = np.dtype(dtype)
    except TypeError as exc:
        raise InvalidParameterError(f"dtype {dtype!r} is not a numpy dtype") from exc
    if not np.issubdtype(dt, np.floating):
        raise InvalidParameterError(f"dtype must be a floating point type, got {dt}")
    return dt


def validate_positions(
    positions: Any,
    node_count: int,
    dim: Optional[int] = None,
    dtype: Any = np.float64,
) -> np.ndarray:
    """
    Validate start positions against the graph and copy them.

    Args:
        positions: Sequence of N points or an (N, d) array
        node_count: Number of nodes in the graph
        dim: Expected coordinate dimension (None accepts any width)
        dtype: Floating point type of the returned array

    Returns:
        Fresh (N, d) array of the requested dtype

    Raises:
        InvalidPositionsError: If shape or values don't fit
    """
    try:
        arr = np.array(positions, dtype=dtype)
    except (TypeError, ValueError) as exc:
        raise InvalidPositionsError(f"Start positions are not numeric points: {exc}") from exc

    if arr.size == 0 and node_count == 0:
        return arr.reshape(0, dim if dim is not None else 2)

    if arr.ndim != 2:
        raise InvalidPositionsError(
            f"Start positions must be a sequence of points (2-D), got {arr.ndim} dimension(s)"
        )
    if arr.shape[0] != node_count:
        raise InvalidPositionsError(
            f"Got {arr.shape[0]} start positions for {node_count} nodes"
        )
    if dim is not None and arr.shape[1] != dim:
        raise InvalidPositionsError(
            f"Start positions have {arr.shape[1]} coordinates, expected dim={dim}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidPositionsError("Start positions contain NaN or infinite coordinates")

    return arr


def validate_positive(name: str, value: float) -> float:
    """
    Validate a strictly positive, finite scalar.

    Raises:
        InvalidParameterError: If value <= 0 or not finite
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be positive and finite, got {value}")
    return value


def validate_finite(name: str, value: float) -> float:
    """
    Validate a finite scalar.

    Raises:
        InvalidParameterError: If value is NaN or infinite
    """
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    return value


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is positive.

    Args:
        iterations: Number of iterations

    Returns:
        Validated iteration count

    Raises:
        InvalidParameterError: If iterations < 1
    """
    if iterations < 1:
        raise InvalidParameterError(f"iterations must be >= 1, got {iterations}")
    return int(iterations)


def validate_step_ratio(step_ratio: float) -> float:
    """
    Validate the cooldown factor lies strictly between 0 and 1.

    Raises:
        InvalidParameterError: If step_ratio not in (0, 1)
    """
    step_ratio = float(step_ratio)
    if not 0.0 < step_ratio < 1.0:
        raise InvalidParameterError(f"step_ratio must be in (0, 1), got {step_ratio}")
    return step_ratio


def validate_update_mode(update: Union[UpdateMode, str]) -> UpdateMode:
    """
    Resolve an update mode from an UpdateMode or its string value.

    Raises:
        InvalidParameterError: If the mode is unknown
    """
    if isinstance(update, UpdateMode):
        return update
    try:
        return UpdateMode(str(update).lower().replace("_", "-"))
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in UpdateMode)
        raise InvalidParameterError(
            f"Unknown update mode {update!r}, expected one of: {choices}"
        ) from exc


def validate_parameters(
    tol: float = 1.0,
    C: float = 0.2,
    K: float = 1.0,
    iterations: int = 100,
    step_ratio: float = 0.9,
) -> LayoutParameters:
    """
    Validate scalar options and freeze them into LayoutParameters.

    Raises:
        InvalidParameterError: If any parameter is out of range
    """
    return LayoutParameters(
        tol=validate_positive("tol", tol),
        C=validate_finite("C", C),
        K=validate_positive("K", K),
        iterations=validate_iterations(iterations),
        step_ratio=validate_step_ratio(step_ratio),
    )


__all__ = [
    "ConfigurationError",
    "InvalidAdjacencyError",
    "InvalidPositionsError",
    "InvalidParameterError",
    "GraphStructureWarning",
    "validate_adjacency",
    "validate_dimension",
    "validate_dtype",
    "validate_positions",
    "validate_positive",
    "validate_finite",
    "validate_iterations",
    "validate_step_ratio",
    "validate_update_mode",
    "validate_parameters",
]
