"""
Adaptive step length control.

After each sweep the step is updated from the energy trend: five
consecutive improvements grow the step by 1/t, any sweep that fails to
lower the energy shrinks it by t.
"""

from __future__ import annotations

import sys

# Cooldown factor t
DEFAULT_STEP_RATIO = 0.9

# Consecutive improvements needed before the step grows
PROGRESS_THRESHOLD = 5

_MIN_STEP = sys.float_info.min


def update_step(
    step: float,
    energy: float,
    previous_energy: float,
    progress: int,
    ratio: float = DEFAULT_STEP_RATIO,
) -> tuple[float, int]:
    """
    Compute the step and progress counter for the next sweep.

    Args:
        step: Current step size
        energy: Energy of the sweep just finished
        previous_energy: Energy of the sweep before it (+inf at the start)
        progress: Consecutive improvements so far
        ratio: Cooldown factor t in (0, 1)

    Returns:
        Tuple of (new step, new progress). The step is never below the
        smallest positive float.
    """
    if energy < previous_energy:
        progress += 1
        if progress >= PROGRESS_THRESHOLD:
            progress = 0
            step = step / ratio
    else:
        progress = 0
        step = ratio * step
    return max(step, _MIN_STEP), progress


__all__ = [
    "DEFAULT_STEP_RATIO",
    "PROGRESS_THRESHOLD",
    "update_step",
]
