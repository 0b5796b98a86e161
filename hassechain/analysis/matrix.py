"""
Dense transition matrices and power iteration.

All matrices are square ``float32`` arrays. Row ``i`` / column ``j`` refer to
vertex ``i + 1`` / ``j + 1`` of the source graph.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence
import numpy as np
from hassechain.graph import Graph, check_target

log = logging.getLogger(__name__)

DTYPE = np.float32
CONVERGENCE_TOLERANCE = 0.01
MAX_ITERATIONS = 100


class AllocationFailure(MemoryError):
    """Raised when a matrix cannot be allocated."""


@dataclass(frozen=True)
class PowerResult:
    matrix: np.ndarray
    iterations: int  # exponent of ``matrix``
    converged: bool
    difference: float  # summed |M_k - M_{k-1}| at the last step


def empty_matrix(n: int) -> np.ndarray:
    try:
        return np.zeros((n, n), dtype=DTYPE)
    except MemoryError as e:
        raise AllocationFailure(f"cannot allocate a {n}x{n} matrix") from e


def build_transition_matrix(graph: Graph) -> np.ndarray:
    """``M[i, j]`` is the weight of edge ``i+1 -> j+1``; a repeated edge keeps its last weight."""
    matrix = empty_matrix(graph.vertex_count)
    for source, edge in graph:
        matrix[source - 1, check_target(graph, source, edge.target)] = edge.weight
    return matrix


def multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    try:
        return a.astype(DTYPE, copy=False) @ b.astype(DTYPE, copy=False)
    except MemoryError as e:
        raise AllocationFailure(f"cannot allocate product of {a.shape} and {b.shape}") from e


def matrix_difference(m: np.ndarray, n: np.ndarray) -> float:
    """Sum of absolute element-wise differences."""
    return float(np.abs(m - n).sum(dtype=DTYPE))


def power_until_convergence(
    matrix: np.ndarray,
    tolerance: float = CONVERGENCE_TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> PowerResult:
    """Raise ``matrix`` to successive powers until two consecutive powers agree.

    Stops as soon as ``matrix_difference(M^k, M^(k-1)) <= tolerance`` or once
    ``k == max_iterations``. Periodic chains never settle, so non-convergence
    is reported through ``PowerResult.converged`` instead of an exception.
    """
    base = np.asarray(matrix, dtype=DTYPE)
    power = base.copy()
    k, diff = 1, float("inf")
    while k < max_iterations:
        nxt = multiply(power, base)
        k += 1
        diff = matrix_difference(nxt, power)
        power = nxt
        if diff <= tolerance:
            log.debug("Powers converged at k=%d (difference %.6f)", k, diff)
            return PowerResult(power, k, True, diff)
    log.debug("Powers did not converge within %d iterations (difference %.6f)", max_iterations, diff)
    return PowerResult(power, k, False, diff)


def sub_chain(matrix: np.ndarray, members: Sequence[int]) -> np.ndarray:
    """Class-local transition matrix for 1-based ``members``, in member order."""
    idx = [m - 1 for m in members]
    return np.ascontiguousarray(matrix[np.ix_(idx, idx)], dtype=DTYPE)


def distribution_after(matrix: np.ndarray, initial: Sequence[float], steps: int) -> np.ndarray:
    """Distribution after ``steps`` transitions from ``initial`` (row vector times M^steps)."""
    if steps < 0:
        raise ValueError("steps must be non-negative")
    pi = np.asarray(initial, dtype=DTYPE)
    if pi.shape != (matrix.shape[0],):
        raise ValueError(f"initial distribution has shape {pi.shape}, expected ({matrix.shape[0]},)")
    base = np.asarray(matrix, dtype=DTYPE)
    for _ in range(steps):
        pi = pi @ base
    return pi
