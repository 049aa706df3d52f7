"""
Basic placement utilities.

- random_positions: Uniform random start positions for iterative layouts
"""

from .random import make_rng, random_positions

__all__ = ["make_rng", "random_positions"]
