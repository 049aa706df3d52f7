"""
Spring-electric force model and sweep kernels.

Using the spring-electric model suggested by Yifan Hu
(http://yifanhu.net/PUB/graph_draw_small.pdf), forces are calculated as:

    f_attr(i, j)  = ||xi - xj||^2 / K        if i and j are adjacent
    f_repln(i, j) = -C * K^2 / ||xi - xj||   if i != j are not adjacent

Unlike the general model, which sums attraction and repulsion for adjacent
pairs, exactly one of the two laws applies to each ordered pair (i, j).
Adjacent nodes never repel each other.

The force on node i from node j points along the unit vector from i toward
j, so a positive magnitude pulls i toward j and a negative one pushes it
away. Separations are floored at distance_floor(dtype) before dividing;
coincident nodes have a zero direction and exert no force on each other.
"""

from __future__ import annotations

import numpy as np

from ..geometry import distance_floor, norm, unit_directions


def _attraction(distances: np.ndarray, K: float) -> np.ndarray:
    return distances * distances / K


def _repulsion(distances: np.ndarray, C: float, K: float, floor: float) -> np.ndarray:
    return -C * K * K / np.maximum(distances, floor)


def attractive_force(p: np.ndarray, q: np.ndarray, K: float) -> float:
    """Attractive force magnitude between two adjacent points."""
    return float(_attraction(norm(np.asarray(p) - np.asarray(q)), K))


def repulsive_force(p: np.ndarray, q: np.ndarray, C: float, K: float) -> float:
    """Repulsive force magnitude (negative) between two non-adjacent points."""
    delta = np.asarray(p) - np.asarray(q)
    return float(_repulsion(norm(delta), C, K, distance_floor(delta.dtype)))


def force_magnitudes(
    distances: np.ndarray,
    adjacent: np.ndarray,
    C: float,
    K: float,
    floor: float,
) -> np.ndarray:
    """
    Select the force law per pair.

    Args:
        distances: Pairwise separations
        adjacent: Boolean mask of the same shape, True for edges
        C: Repulsion scale
        K: Optimal edge length
        floor: Minimum divisor for the repulsive law

    Returns:
        Signed force magnitudes (positive attracts, negative repels)
    """
    return np.where(
        adjacent, _attraction(distances, K), _repulsion(distances, C, K, floor)
    )


def net_force(
    positions: np.ndarray,
    i: int,
    adjacent: np.ndarray,
    C: float,
    K: float,
) -> np.ndarray:
    """
    Net force on a single node.

    Args:
        positions: Current positions, shape (N, d)
        i: Node index
        adjacent: Row i of the adjacency mask, shape (N,)
        C: Repulsion scale
        K: Optimal edge length

    Returns:
        Force vector of shape (d,)
    """
    floor = distance_floor(positions.dtype)
    deltas = positions - positions[i]
    distances = norm(deltas)
    magnitudes = force_magnitudes(distances, adjacent, C, K, floor)
    magnitudes[i] = 0.0
    return magnitudes @ unit_directions(deltas, distances, floor)


def net_forces(
    positions: np.ndarray,
    adjacency: np.ndarray,
    C: float,
    K: float,
) -> np.ndarray:
    """
    Net force on every node, all read from the same snapshot.

    Args:
        positions: Snapshot of positions, shape (N, d)
        adjacency: Boolean adjacency mask, shape (N, N)
        C: Repulsion scale
        K: Optimal edge length

    Returns:
        Force vectors, shape (N, d)
    """
    n = positions.shape[0]
    if n == 0:
        return np.zeros_like(positions)

    floor = distance_floor(positions.dtype)
    # deltas[i, j] = x_j - x_i
    deltas = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
    distances = norm(deltas)
    magnitudes = force_magnitudes(distances, adjacency, C, K, floor)
    np.fill_diagonal(magnitudes, 0.0)
    return np.einsum("ij,ijk->ik", magnitudes, unit_directions(deltas, distances, floor))


def sweep_jacobi(
    positions: np.ndarray,
    adjacency: np.ndarray,
    C: float,
    K: float,
    step: float,
) -> tuple[np.ndarray, float]:
    """
    One sweep with every force taken from the frozen input snapshot.

    Each node moves by step along its normalized net force; a node with zero
    net force stays put.

    Returns:
        Tuple of (new positions array, total energy of the sweep)
    """
    forces = net_forces(positions, adjacency, C, K)
    lengths = norm(forces)
    scale = np.zeros_like(lengths)
    np.divide(step, lengths, out=scale, where=lengths > 0)
    moved = positions + forces * scale[:, np.newaxis]
    return moved, float(np.sum(lengths * lengths))


def sweep_gauss_seidel(
    positions: np.ndarray,
    adjacency: np.ndarray,
    C: float,
    K: float,
    step: float,
) -> tuple[np.ndarray, float]:
    """
    One sweep visiting nodes in index order and moving each immediately.

    The input array is left untouched; moves are written into a copy, so the
    force on node i already sees the new positions of nodes j < i.

    Returns:
        Tuple of (new positions array, total energy of the sweep)
    """
    moved = positions.copy()
    energy = 0.0
    for i in range(moved.shape[0]):
        force = net_force(moved, i, adjacency[i], C, K)
        length = float(norm(force))
        if length > 0:
            moved[i] = moved[i] + step * (force / length)
        energy += length * length
    return moved, energy


__all__ = [
    "attractive_force",
    "repulsive_force",
    "force_magnitudes",
    "net_force",
    "net_forces",
    "sweep_jacobi",
    "sweep_gauss_seidel",
]
