from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple
import numpy as np
import pyarrow as pa
from hassechain.analysis.matrix import CONVERGENCE_TOLERANCE, MAX_ITERATIONS, power_until_convergence, sub_chain
from hassechain.mining.persistence import ChainCharacteristics
from hassechain.mining.scc import Partition

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StationaryResult:
    class_index: int
    members: Tuple[int, ...]
    distribution: np.ndarray  # aligned with ``members``
    iterations: int
    converged: bool

    def as_dict(self) -> Dict[int, float]:
        return {m: float(p) for m, p in zip(self.members, self.distribution)}


def class_stationary(matrix: np.ndarray, partition: Partition, class_index: int, tolerance: float = CONVERGENCE_TOLERANCE, max_iterations: int = MAX_ITERATIONS) -> StationaryResult:
    """Row 0 of the converged power of the class's sub-chain."""
    cls = partition[class_index]
    result = power_until_convergence(sub_chain(matrix, cls.members), tolerance, max_iterations)
    if not result.converged:
        log.warning("%s did not converge within %d iterations (difference %.4f); reporting last approximation", cls.name, max_iterations, result.difference)
    return StationaryResult(class_index, cls.members, result.matrix[0].copy(), result.iterations, result.converged)


def stationary_distributions(
    matrix: np.ndarray,
    partition: Partition,
    characteristics: ChainCharacteristics,
    tolerance: float = CONVERGENCE_TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> Dict[int, StationaryResult]:
    return {i: class_stationary(matrix, partition, i, tolerance, max_iterations) for i in characteristics.persistent_classes()}


def stationary_to_arrow(results: Mapping[int, StationaryResult], partition: Partition) -> pa.Table:
    schema = pa.schema([("class_id", pa.int32()), ("name", pa.string()), ("vertex", pa.int32()), ("probability", pa.float64()), ("iterations", pa.int32()), ("converged", pa.bool_())])
    rows = [
        {"class_id": i, "name": partition[i].name, "vertex": m, "probability": float(p), "iterations": r.iterations, "converged": r.converged}
        for i, r in results.items() for m, p in zip(r.members, r.distribution)
    ]
    return pa.Table.from_pylist(rows, schema=schema)
