"""
Termination test for the sweep loop.
"""

from __future__ import annotations

import numpy as np

from ..geometry import norm
from ..types import IterationState, LayoutParameters, LayoutStatus


def within_tolerance(
    positions: np.ndarray,
    previous: np.ndarray,
    threshold: float,
) -> bool:
    """True if every node moved strictly less than threshold."""
    return bool(np.all(norm(positions - previous) < threshold))


def check_status(state: IterationState, parameters: LayoutParameters) -> LayoutStatus:
    """
    Classify a state as running, converged or exhausted.

    The first evaluation after begin() is always RUNNING so that at least one
    sweep executes. The budget is checked before positional stability, so a
    run that settles on its very last sweep reports EXHAUSTED.

    The check has no side effects: evaluating the same state again gives the
    same answer.
    """
    if state.started:
        return LayoutStatus.RUNNING
    if state.iteration >= parameters.iterations:
        return LayoutStatus.EXHAUSTED
    if within_tolerance(state.positions, state.previous, parameters.threshold):
        return LayoutStatus.CONVERGED
    return LayoutStatus.RUNNING


__all__ = [
    "within_tolerance",
    "check_status",
]
