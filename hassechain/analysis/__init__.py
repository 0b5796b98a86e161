"""
hassechain.analysis: Numerical chain analysis on dense float32 matrices.

- **matrix**: transition matrix construction, products, power iteration
- **stationary**: per-class stationary distributions from converged powers
- **periodicity**: return-time GCD of each persistent class
"""

from .matrix import (
    AllocationFailure,
    PowerResult,
    build_transition_matrix,
    distribution_after,
    empty_matrix,
    matrix_difference,
    multiply,
    power_until_convergence,
    sub_chain,
)
from .periodicity import class_periods, gcd, period, return_times
from .stationary import StationaryResult, class_stationary, stationary_distributions, stationary_to_arrow

__all__ = [
    "AllocationFailure",
    "PowerResult",
    "build_transition_matrix",
    "distribution_after",
    "empty_matrix",
    "matrix_difference",
    "multiply",
    "power_until_convergence",
    "sub_chain",
    "class_periods",
    "gcd",
    "period",
    "return_times",
    "StationaryResult",
    "class_stationary",
    "stationary_distributions",
    "stationary_to_arrow",
]
