from __future__ import annotations
import logging
from typing import Dict, List, Sequence
import numpy as np
from hassechain.analysis.matrix import multiply, sub_chain
from hassechain.mining.persistence import ChainCharacteristics
from hassechain.mining.scc import Partition

log = logging.getLogger(__name__)


def gcd(values: Sequence[int]) -> int:
    """Euclidean GCD reduced pairwise over ``values``; 0 for an empty sequence."""
    if not values: return 0
    result = values[0]
    for b in values[1:]:
        a = result
        while b:
            a, b = b, a % b
        result = a
    return result


def return_times(sub_matrix: np.ndarray) -> List[int]:
    """Exponents k in 1..n for which some diagonal entry of ``sub_matrix^k`` is positive."""
    n = sub_matrix.shape[0]
    times = []
    power = sub_matrix.copy()
    for k in range(1, n + 1):
        # strict > 0: any non-zero return probability counts, however small
        if (np.diagonal(power) > 0).any():
            times.append(k)
        if k < n:
            power = multiply(power, sub_matrix)
    return times


def period(sub_matrix: np.ndarray) -> int:
    return gcd(return_times(sub_matrix))


def class_periods(matrix: np.ndarray, partition: Partition, characteristics: ChainCharacteristics) -> Dict[int, int]:
    """Period of every persistent class, keyed by class index."""
    periods = {}
    for i in characteristics.persistent_classes():
        periods[i] = period(sub_chain(matrix, partition[i].members))
        log.debug("%s has period %d", partition[i].name, periods[i])
    return periods
