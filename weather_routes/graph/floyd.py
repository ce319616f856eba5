"""All-pairs shortest paths using the Floyd-Warshall algorithm.

This module works on plain numpy matrices indexed by dense city
indices. Name resolution, logging and result objects live in
``adapters/graph/floyd_solver.py``.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from ..domain.models import CenterPolicy

NO_SUCCESSOR = -1


def floyd_warshall(adjacency: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Compute the distance and successor matrices of a weighted digraph.

    Parameters
    ----------
    adjacency:
        ``N x N`` matrix of non-negative travel times with a zero
        diagonal; ``inf`` marks a missing edge. It is not modified.

    Returns
    -------
    numpy.ndarray, numpy.ndarray
        ``distances[i, j]`` is the length of a shortest path from ``i``
        to ``j`` (``inf`` if there is none). ``successors[i, j]`` is the
        next hop from ``i`` towards ``j`` on that path, or
        ``NO_SUCCESSOR`` when ``i == j`` or ``j`` is unreachable.

    Pivots are taken in index order and a path is only replaced by a
    strictly shorter one, so among equal-cost routes the one found
    through the earliest pivot is kept.
    """
    distances = np.array(adjacency, dtype=np.float64, copy=True)
    n = distances.shape[0]

    successors = np.full((n, n), NO_SUCCESSOR, dtype=np.intp)
    direct = np.isfinite(distances)
    np.fill_diagonal(direct, False)
    successors[direct] = np.broadcast_to(np.arange(n), (n, n))[direct]

    for k in range(n):
        # Row and column k cannot improve while pivoting on k (zero diagonal),
        # so relaxing the whole matrix at once matches the scalar i/j loop.
        through_k = distances[:, k, np.newaxis] + distances[np.newaxis, k, :]
        # inf + x stays inf and never passes the strict comparison.
        improved = through_k < distances
        if not improved.any():
            continue
        distances[improved] = through_k[improved]
        successors[improved] = np.broadcast_to(successors[:, k, np.newaxis], (n, n))[
            improved
        ]

    return distances, successors


def reconstruct_path(successors: np.ndarray, origin: int, target: int) -> List[int]:
    """Follow the successor matrix from ``origin`` to ``target``.

    Returns the list of indices (both ends included), ``[origin]`` when
    both are the same, and an empty list when ``target`` is unreachable
    or the walk does not arrive within ``N - 1`` hops.
    """
    if origin == target:
        return [origin]

    n = successors.shape[0]
    path = [origin]
    current = origin
    for _ in range(n - 1):
        current = int(successors[current, target])
        if current == NO_SUCCESSOR:
            return []
        path.append(current)
        if current == target:
            return path

    return []


def eccentricities(distances: np.ndarray) -> np.ndarray:
    """Largest finite distance from each city to any other city.

    Unreachable peers are ignored; a city that reaches nobody gets 0.
    """
    n = distances.shape[0]
    if n == 0:
        return np.zeros(0, dtype=np.float64)

    finite = np.where(np.isfinite(distances), distances, 0.0)
    np.fill_diagonal(finite, 0.0)
    return finite.max(axis=1)


def reaches_all(distances: np.ndarray) -> np.ndarray:
    """Boolean mask of the cities with a finite distance to every city."""
    return np.isfinite(distances).all(axis=1)


def center_index(
    distances: np.ndarray, policy: CenterPolicy = CenterPolicy.STRICT
) -> Optional[int]:
    """Index of the city with the smallest eccentricity.

    Ties go to the lowest index. Under ``CenterPolicy.STRICT`` only
    cities that reach every other city are candidates, and ``None`` is
    returned when there are none. Under ``CenterPolicy.REACHABLE_ONLY``
    every city is a candidate.
    """
    n = distances.shape[0]
    if n == 0:
        return None

    scores = eccentricities(distances)
    if policy is CenterPolicy.STRICT:
        eligible = reaches_all(distances)
        if not eligible.any():
            return None
        scores = np.where(eligible, scores, np.inf)

    return int(np.argmin(scores))
