"""
Force-directed graph layout.

This module provides the flat spring-electric (Yifan Hu) layout engine:
- SpringElectricLayout: Iterative engine with adaptive step control
- layout / layout_inplace: One-call wrappers returning coordinates
- model: Force laws and sweep kernels
- step_control: Adaptive step length
- convergence: Termination test
"""

from .convergence import check_status, within_tolerance
from .model import (
    attractive_force,
    net_force,
    net_forces,
    repulsive_force,
    sweep_gauss_seidel,
    sweep_jacobi,
)
from .spring_electric import SpringElectricLayout, layout, layout_inplace
from .step_control import DEFAULT_STEP_RATIO, PROGRESS_THRESHOLD, update_step

__all__ = [
    "SpringElectricLayout",
    "layout",
    "layout_inplace",
    "attractive_force",
    "repulsive_force",
    "net_force",
    "net_forces",
    "sweep_jacobi",
    "sweep_gauss_seidel",
    "update_step",
    "DEFAULT_STEP_RATIO",
    "PROGRESS_THRESHOLD",
    "check_status",
    "within_tolerance",
]
