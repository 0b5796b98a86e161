"""Numeric policy for chain analysis."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisConfig:
    """Tolerances and bounds shared by the validator and the matrix engine.

    ``convergence_tolerance`` bounds the summed absolute difference between
    consecutive matrix powers; ``max_iterations`` is the largest exponent
    tried before powering is reported as non-convergent.
    """

    convergence_tolerance: float = 0.01
    max_iterations: int = 100
    stochastic_tolerance: float = 0.01  # allowed deviation of a row sum from 1

    def __post_init__(self) -> None:
        if self.convergence_tolerance < 0:
            raise ValueError(f"convergence_tolerance must be non-negative, got {self.convergence_tolerance}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if not 0 <= self.stochastic_tolerance < 1:
            raise ValueError(f"stochastic_tolerance must be in [0, 1), got {self.stochastic_tolerance}")


DEFAULT_CONFIG = AnalysisConfig()
