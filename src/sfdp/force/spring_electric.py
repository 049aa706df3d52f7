"""
Flat spring-electric force-directed layout (Yifan Hu).

Based on the paper:
"Efficient and High Quality Force-Directed Graph Drawing" by Yifan Hu (2005)

This is the single-level force iteration only: no coarsening hierarchy and
no Barnes-Hut approximation. Each sweep computes the net force on every
node (see force.model for the force laws), moves every node a fixed step
along its force direction, and records the total energy. The step adapts to
the energy trend (force.step_control) and the loop ends when no node moves
K * tol or more, or when the iteration budget is spent (force.convergence).

The loop can be driven three ways:
- layout(...) / layout_inplace(...): construct, run, return coordinates
- SpringElectricLayout.run(): full run with start/tick/end events
- begin() / advance() / is_finished(): caller-owned, one sweep at a time
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from typing_extensions import Self

import numpy as np

from ..base import IterativeLayout
from ..types import (
    AdjacencyLike,
    EventCallback,
    EventType,
    IterationState,
    LayoutParameters,
    LayoutStatus,
    PositionsLike,
    UpdateMode,
)
from ..validation import (
    GraphStructureWarning,
    InvalidPositionsError,
    validate_parameters,
    validate_update_mode,
)
from .convergence import check_status
from .model import sweep_gauss_seidel, sweep_jacobi
from .step_control import DEFAULT_STEP_RATIO, update_step


class SpringElectricLayout(IterativeLayout):
    """
    Spring-electric force-directed graph layout.

    Adjacent nodes attract with ||xi - xj||^2 / K, all other pairs repel
    with -C * K^2 / ||xi - xj||. Sweeps repeat until every node moves less
    than K * tol, or until `iterations` sweeps have run.

    Sweeps use Jacobi updates by default: all forces are read from the
    positions at the start of the sweep. Pass update="gauss-seidel" to move
    nodes one at a time in index order instead.

    Example:
        adjacency = [
            [0, 1, 0],
            [1, 0, 1],
            [0, 1, 0],
        ]
        layout = SpringElectricLayout(adjacency, dim=2, random_seed=1)
        layout.run()

        print(layout.status, layout.iteration)
        for i, (x, y) in enumerate(layout.positions):
            print(f"Node {i}: ({x:.3f}, {y:.3f})")
    """

    def __init__(
        self,
        adjacency: AdjacencyLike,
        dim: Optional[int] = None,
        *,
        start_positions: Optional[PositionsLike] = None,
        tol: float = 1.0,
        C: float = 0.2,
        K: float = 1.0,
        iterations: int = 100,
        step_ratio: float = DEFAULT_STEP_RATIO,
        update: Union[UpdateMode, str] = UpdateMode.JACOBI,
        dtype: Any = np.float64,
        random_seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize spring-electric layout.

        Args:
            adjacency: N x N adjacency matrix; only truthiness is used
            dim: Coordinate dimension (default: width of start_positions, or 2)
            start_positions: Explicit initial coordinates, shape (N, dim).
                Sampled uniformly from [-1, 1) per axis when omitted.
            tol: Minimum relative movement; converged once no node moves
                K * tol or more in a sweep. Default 1.0.
            C: Repulsion scale relative to attraction. Default 0.2.
            K: Optimal edge length / scale constant. Default 1.0.
            iterations: Maximum number of sweeps. Default 100.
            step_ratio: Cooldown factor t of the adaptive step. Default 0.9.
            update: UpdateMode (or "jacobi" / "gauss-seidel")
            dtype: Floating point precision of the coordinates
            random_seed: Seed for sampling start positions
            rng: numpy Generator for sampling start positions
            on_start: Callback for start event
            on_tick: Callback for tick event (once per sweep)
            on_end: Callback for end event

        Raises:
            ConfigurationError: On any invalid input. Nothing is laid out.
        """
        self._parameters: LayoutParameters = validate_parameters(
            tol=tol, C=C, K=K, iterations=iterations, step_ratio=step_ratio
        )
        self._update: UpdateMode = validate_update_mode(update)

        super().__init__(
            adjacency,
            dim,
            start_positions=start_positions,
            dtype=dtype,
            random_seed=random_seed,
            rng=rng,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )

        # Internal state (created by run() or the first tick())
        self._state: Optional[IterationState] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def parameters(self) -> LayoutParameters:
        """Get the frozen scalar parameters."""
        return self._parameters

    @property
    def tol(self) -> float:
        """Get movement tolerance relative to K."""
        return self._parameters.tol

    @property
    def C(self) -> float:
        """Get repulsion scale C."""
        return self._parameters.C

    @property
    def K(self) -> float:
        """Get optimal edge length K."""
        return self._parameters.K

    @property
    def iterations(self) -> int:
        """Get maximum number of sweeps."""
        return self._parameters.iterations

    @property
    def step_ratio(self) -> float:
        """Get step decay/growth ratio t."""
        return self._parameters.step_ratio

    @property
    def update(self) -> UpdateMode:
        """Get the sweep update mode."""
        return self._update

    @property
    def state(self) -> Optional[IterationState]:
        """Get the state of the internal loop (None before the first tick)."""
        return self._state

    @property
    def status(self) -> LayoutStatus:
        """Get where the internal loop stands."""
        if self._state is None:
            return LayoutStatus.RUNNING
        return self.check_status(self._state)

    @property
    def iteration(self) -> int:
        """Get the number of sweeps run so far."""
        return self._state.iteration if self._state is not None else 0

    @property
    def energy(self) -> float:
        """Get the energy of the last sweep (inf before the first)."""
        return self._state.energy if self._state is not None else float("inf")

    @property
    def step(self) -> float:
        """Get the step size the next sweep will use."""
        return self._state.step if self._state is not None else 1.0

    # -------------------------------------------------------------------------
    # Step-wise protocol
    # -------------------------------------------------------------------------

    def begin(self) -> IterationState:
        """
        Create the initial state from the current positions.

        step = 1, energy = +inf, progress = 0, iteration = 0. The returned
        state owns a read-only copy of the positions; the layout itself is
        untouched.
        """
        positions = _frozen(self._positions)
        return IterationState(
            step=1.0,
            energy=float("inf"),
            progress=0,
            iteration=0,
            positions=positions,
            previous=positions,
            started=True,
        )

    def advance(self, state: IterationState) -> IterationState:
        """
        Run one sweep and return the following state.

        The step used is the one carried by `state`; the step controller
        then derives the next step from the new energy. `state` itself is
        not modified.
        """
        if self._update is UpdateMode.GAUSS_SEIDEL:
            sweep = sweep_gauss_seidel
        else:
            sweep = sweep_jacobi

        params = self._parameters
        positions, energy = sweep(state.positions, self._adjacency, params.C, params.K, state.step)
        positions.setflags(write=False)
        step, progress = update_step(
            state.step, energy, state.energy, state.progress, params.step_ratio
        )

        return IterationState(
            step=step,
            energy=energy,
            progress=progress,
            iteration=state.iteration + 1,
            positions=positions,
            previous=state.positions,
            started=False,
        )

    def check_status(self, state: IterationState) -> LayoutStatus:
        """Classify `state` as RUNNING, CONVERGED or EXHAUSTED."""
        return check_status(state, self._parameters)

    def is_finished(self, state: IterationState) -> bool:
        """True once `state` is CONVERGED or EXHAUSTED."""
        return self.check_status(state).finished

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def run(self, **kwargs: Any) -> Self:
        """
        Run sweeps until converged or exhausted.

        Each call starts a fresh loop (step 1, infinite energy) from the
        current positions, so a second run() continues from the first
        result.

        Returns:
            self for chaining
        """
        self._state = self.begin()
        self.trigger({"type": EventType.start, "iteration": 0, "step": self._state.step})

        self.kick()

        self.trigger(
            {
                "type": EventType.end,
                "iteration": self._state.iteration,
                "energy": self._state.energy,
                "step": self._state.step,
                "status": self.status,
            }
        )
        return self

    def tick(self) -> bool:
        """
        Perform one sweep of the layout.

        Returns:
            True if the layout has converged or exhausted its budget.
        """
        if self._state is None:
            self._state = self.begin()
        if self.is_finished(self._state):
            return True

        self._state = self.advance(self._state)
        self._positions = self._state.positions.copy()

        status = self.check_status(self._state)
        self.trigger(
            {
                "type": EventType.tick,
                "iteration": self._state.iteration,
                "energy": self._state.energy,
                "step": self._state.step,
                "status": status,
            }
        )
        return status.finished


def _build(adjacency: AdjacencyLike, **options: Any) -> SpringElectricLayout:
    """
    Construct an engine for layout() and layout_inplace().

    Structure warnings raised while validating the adjacency are re-issued
    against the caller of those functions.
    """
    caught: list[warnings.WarningMessage] = []
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", GraphStructureWarning)
            return SpringElectricLayout(adjacency, **options)
    finally:
        for record in caught:
            warnings.warn(record.message, record.category, stacklevel=3)


def _frozen(positions: np.ndarray) -> np.ndarray:
    """Read-only copy of a position array."""
    frozen = positions.copy()
    frozen.setflags(write=False)
    return frozen


def layout(
    adjacency: AdjacencyLike,
    dim: Optional[int] = None,
    **options: Any,
) -> np.ndarray:
    """
    Lay out a graph and return the final coordinates.

    Args:
        adjacency: N x N adjacency matrix
        dim: Coordinate dimension (default 2, or the width of start_positions)
        **options: Any SpringElectricLayout keyword argument

    Returns:
        Array of shape (N, dim)
    """
    engine = _build(adjacency, dim=dim, **options)
    return engine.run().positions.copy()


def layout_inplace(
    adjacency: AdjacencyLike,
    start_positions: np.ndarray,
    **options: Any,
) -> np.ndarray:
    """
    Lay out a graph starting from, and writing back into, `start_positions`.

    Args:
        adjacency: N x N adjacency matrix
        start_positions: Floating point array of shape (N, dim); overwritten
        **options: Any SpringElectricLayout keyword argument except
            start_positions and dtype

    Returns:
        `start_positions`, now holding the final coordinates
    """
    if not isinstance(start_positions, np.ndarray):
        raise InvalidPositionsError(
            f"layout_inplace needs a numpy array to write into, got {type(start_positions).__name__}"
        )
    engine = _build(
        adjacency,
        start_positions=start_positions,
        dtype=start_positions.dtype,
        **options,
    )
    start_positions[...] = engine.run().positions
    return start_positions


__all__ = ["SpringElectricLayout", "layout", "layout_inplace"]
