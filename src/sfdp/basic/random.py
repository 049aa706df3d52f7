"""
Random initial placement.

Samples start positions uniformly per axis from [-1, 1). The random source
is an explicit numpy Generator (or a seed for one), so runs are
reproducible and nothing touches global random state.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from ..validation import InvalidParameterError, validate_dimension, validate_dtype


def make_rng(
    rng: Optional[np.random.Generator] = None,
    random_seed: Optional[int] = None,
) -> np.random.Generator:
    """
    Resolve the random source for a layout.

    An explicit generator wins; otherwise a fresh generator is seeded with
    random_seed (None gives OS entropy).

    Raises:
        InvalidParameterError: If both rng and random_seed are given
    """
    if rng is not None:
        if random_seed is not None:
            raise InvalidParameterError("Pass either rng or random_seed, not both")
        return rng
    return np.random.default_rng(random_seed)


def random_positions(
    n: int,
    dim: int = 2,
    *,
    rng: Optional[np.random.Generator] = None,
    random_seed: Optional[int] = None,
    dtype: Any = np.float64,
    low: float = -1.0,
    high: float = 1.0,
) -> np.ndarray:
    """
    Place n points uniformly at random inside [low, high)^dim.

    Args:
        n: Number of points
        dim: Coordinate dimension
        rng: Random generator to draw from
        random_seed: Seed for a fresh generator (ignored if rng is given)
        dtype: Floating point type of the result
        low: Lower bound per axis
        high: Upper bound per axis

    Returns:
        Array of shape (n, dim)

    Example:
        >>> rng = np.random.default_rng(7)
        >>> random_positions(4, 3, rng=rng).shape
        (4, 3)
    """
    if n < 0:
        raise InvalidParameterError(f"n must be >= 0, got {n}")
    if not high > low:
        raise InvalidParameterError(f"high must be greater than low, got [{low}, {high})")
    dim = validate_dimension(dim)
    dt = validate_dtype(dtype)
    generator = make_rng(rng, random_seed)

    return generator.uniform(low, high, size=(n, dim)).astype(dt, copy=False)


__all__ = ["make_rng", "random_positions"]
