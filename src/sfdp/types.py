"""
Common types for the spring-electric layout engine.

This module provides the fundamental types shared by the engine modules:
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
- LayoutStatus: Convergence state machine states
- UpdateMode: How a sweep applies node moves (Jacobi or Gauss-Seidel)
- LayoutParameters: Frozen scalar configuration of a run
- IterationState: Per-iteration engine state passed between steps
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, Optional, Sequence, TypedDict, Union

import numpy as np


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout iterations have begun
    - tick: Fired once per sweep (for animation)
    - end: Layout has converged, exhausted its budget, or stopped
    """

    start = 0
    tick = 1
    end = 2


class LayoutStatus(Enum):
    """
    States of the convergence state machine.

    RUNNING is the only non-terminal state. EXHAUSTED means the iteration
    budget was spent without the positions settling; it is a normal
    termination mode, not an error.
    """

    RUNNING = "running"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"

    @property
    def finished(self) -> bool:
        return self is not LayoutStatus.RUNNING


class UpdateMode(Enum):
    """
    Consistency semantics of a single sweep.

    - JACOBI: every net force is computed from the positions frozen at the
      start of the sweep, then all nodes move together.
    - GAUSS_SEIDEL: nodes are visited in index order and each move is
      written immediately, so node i sees the already moved nodes j < i.
    """

    JACOBI = "jacobi"
    GAUSS_SEIDEL = "gauss-seidel"


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    iteration: int
    energy: float
    step: float
    status: LayoutStatus


@dataclass(frozen=True)
class LayoutParameters:
    """
    Immutable scalar bundle for one layout run.

    Attributes:
        tol: Relative movement tolerance; a sweep in which no node moves
            K * tol or more counts as converged
        C: Repulsion scale relative to attraction
        K: Optimal edge length / scale constant
        iterations: Maximum number of sweeps
        step_ratio: Cooldown factor t of the adaptive step control
    """

    tol: float = 1.0
    C: float = 0.2
    K: float = 1.0
    iterations: int = 100
    step_ratio: float = 0.9

    @property
    def threshold(self) -> float:
        """Displacement below which a node counts as settled (K * tol)."""
        return self.K * self.tol


@dataclass(frozen=True, eq=False)
class IterationState:
    """
    Engine state between two sweeps.

    States are never mutated; advancing produces a new state holding fresh
    position arrays. The arrays of states built by the engine are
    read-only, so a caller may keep older states around (e.g. for
    animation frames).

    Attributes:
        step: Current step size (strictly positive)
        energy: Total energy of the last sweep (+inf before the first one)
        progress: Consecutive sweeps with decreasing energy
        iteration: Number of completed sweeps
        positions: Node positions after the last sweep, shape (N, d)
        previous: Node positions before the last sweep, shape (N, d)
        started: True until the first sweep has run
    """

    step: float
    energy: float
    progress: int
    iteration: int
    positions: np.ndarray
    previous: np.ndarray
    started: bool = True

    def __repr__(self) -> str:
        return (
            f"IterationState(iteration={self.iteration}, step={self.step:.4g}, "
            f"energy={self.energy:.4g}, progress={self.progress})"
        )


# Type aliases for the input API
AdjacencyLike = Union[np.ndarray, Sequence[Sequence[Any]], Any]
"""Input type for adjacency: ndarrays, nested sequences, or sparse matrices with toarray()."""

PositionsLike = Union[np.ndarray, Sequence[Sequence[float]]]
"""Input type for positions: an (N, d) array or a sequence of N points."""

EventCallback = Callable[[Optional[Event]], None]


__all__ = [
    "EventType",
    "Event",
    "LayoutStatus",
    "UpdateMode",
    "LayoutParameters",
    "IterationState",
    # Pythonic API type aliases
    "AdjacencyLike",
    "PositionsLike",
    "EventCallback",
]
