"""
hassechain.datasets: Reference chains and synthetic generators.

Every generator returns a ``pd.DataFrame`` with columns ``source``,
``target`` and ``probability`` (1-based states), ready for
``HasseChain.load``.

- **scenarios**: small hand-written chains with known classes and periods
- **synthetic**: seeded layered and random chains with ground truth
"""

from .scenarios import two_cycle_with_absorbing, transient_into_absorbing, linear_with_shortcut, symmetric_pair
from .synthetic import generate_layered_chain, generate_random_chain

__all__ = [
    # Scenarios
    "two_cycle_with_absorbing",
    "transient_into_absorbing",
    "linear_with_shortcut",
    "symmetric_pair",
    # Synthetic
    "generate_layered_chain",
    "generate_random_chain",
]
