"""
Base classes for adjacency-driven layout algorithms.

This module provides abstract base classes that define the common interface
and shared functionality for layout engines:

- BaseLayout: Abstract base with event system, adjacency/position management
- IterativeLayout: For animated layouts with a tick loop (force-directed)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from typing_extensions import Self

import numpy as np

from .basic.random import make_rng, random_positions
from .types import (
    AdjacencyLike,
    Event,
    EventCallback,
    EventType,
    PositionsLike,
)
from .validation import (
    validate_adjacency,
    validate_dimension,
    validate_dtype,
    validate_positions,
)


class BaseLayout(ABC):
    """
    Abstract base class for layout algorithms over an adjacency matrix.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Adjacency normalization and validation
    - Start position materialization (explicit or seeded random)

    Example:
        layout = SomeLayout(adjacency, dim=2, random_seed=42)
        layout.run()

        # Access results via properties
        for i, point in enumerate(layout.positions):
            print(f"Node {i}: {point}")
    """

    def __init__(
        self,
        adjacency: AdjacencyLike,
        dim: Optional[int] = None,
        *,
        start_positions: Optional[PositionsLike] = None,
        dtype: Any = np.float64,
        random_seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            adjacency: N x N adjacency matrix (dense, nested lists, or sparse)
            dim: Coordinate dimension. Defaults to the width of
                start_positions, or 2 when positions are sampled.
            start_positions: Explicit initial coordinates, shape (N, dim)
            dtype: Floating point precision of the coordinates
            random_seed: Seed for sampling start positions
            rng: numpy Generator for sampling start positions
            on_start: Callback for start event
            on_tick: Callback for tick event (iterative layouts)
            on_end: Callback for end event

        Raises:
            ConfigurationError: If adjacency, positions or dim are invalid.
        """
        # validate_adjacency <- BaseLayout <- IterativeLayout <- layout class <- caller
        self._adjacency: np.ndarray = validate_adjacency(adjacency, stacklevel=5)
        self._dtype: np.dtype = validate_dtype(dtype)
        self._random_seed: Optional[int] = random_seed
        self._events: dict[EventType, EventCallback] = {}

        n = self._adjacency.shape[0]
        if dim is not None:
            dim = validate_dimension(dim)

        if start_positions is not None:
            self._positions: np.ndarray = validate_positions(
                start_positions, n, dim, self._dtype
            )
        else:
            self._positions = random_positions(
                n,
                dim if dim is not None else 2,
                rng=make_rng(rng, random_seed),
                dtype=self._dtype,
            )
        self._dim: int = int(self._positions.shape[1])

        # Register event callbacks
        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def adjacency(self) -> np.ndarray:
        """Get the read-only boolean adjacency matrix."""
        return self._adjacency

    @property
    def node_count(self) -> int:
        """Get the number of nodes N."""
        return int(self._adjacency.shape[0])

    @property
    def dim(self) -> int:
        """Get the coordinate dimension."""
        return self._dim

    @property
    def dtype(self) -> np.dtype:
        """Get the coordinate precision."""
        return self._dtype

    @property
    def positions(self) -> np.ndarray:
        """Get the current positions, shape (N, dim)."""
        return self._positions

    @property
    def random_seed(self) -> Optional[int]:
        """Get random seed used for start positions."""
        return self._random_seed

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        This is the main entry point. Implementations should:
        1. Reset their iteration state
        2. Run the layout algorithm
        3. Fire appropriate events

        Returns:
            self (for chaining)
        """
        pass


class IterativeLayout(BaseLayout):
    """
    Base class for iterative/animated layout algorithms.

    Provides:
    - Iteration budget
    - Tick-based iteration loop
    - Stopping at iteration boundaries

    Example:
        layout = SomeForceLayout(adjacency, iterations=300)
        layout.on("tick", lambda event: redraw(layout.positions))
        layout.run()
    """

    def __init__(
        self,
        adjacency: AdjacencyLike,
        dim: Optional[int] = None,
        *,
        start_positions: Optional[PositionsLike] = None,
        dtype: Any = np.float64,
        random_seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize iterative layout.

        Args:
            adjacency: N x N adjacency matrix
            dim: Coordinate dimension
            start_positions: Explicit initial coordinates
            dtype: Floating point precision of the coordinates
            random_seed: Seed for sampling start positions
            rng: numpy Generator for sampling start positions
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event

        Raises:
            ConfigurationError: If any argument is invalid.
        """
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
        self._running: bool = False

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def iterations(self) -> int:
        """Get the iteration budget kick() loops over."""
        pass

    @property
    def running(self) -> bool:
        """True while kick() is looping."""
        return self._running

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True if converged/done, False if more iterations needed.
        """
        pass

    def kick(self) -> None:
        """Run tick() repeatedly until done, the budget is spent, or stop() is called."""
        self._running = True
        for _ in range(self.iterations):
            if not self._running or self.tick():
                break
        self._running = False

    def stop(self) -> Self:
        """Stop the layout at the next iteration boundary."""
        self._running = False
        return self


__all__ = [
    "BaseLayout",
    "IterativeLayout",
]
