"""
Seeded synthetic chains with known class structure.
"""
from __future__ import annotations
import pandas as pd
import numpy as np
from typing import Dict, List, Tuple

COLUMNS = ["source", "target", "probability"]


def _weighted_rows(rng: np.random.Generator, source: int, targets: List[int]) -> List[Tuple[int, int, float]]:
    weights = rng.dirichlet(np.ones(len(targets)))
    # absorb rounding drift into the last weight so the row sums to 1
    weights[-1] = max(0.0, 1.0 - weights[:-1].sum())
    return [(source, int(t), float(w)) for t, w in zip(targets, weights)]


def generate_layered_chain(
    n_classes: int = 3,
    states_per_class: int = 4,
    n_transient: int = 3,
    seed: int = 42,
) -> Tuple[pd.DataFrame, Dict]:
    """
    Generate a chain with ``n_classes`` closed classes and ``n_transient``
    transient states that drain into them.

    Structure:
    - Persistent class c: states c*k+1 .. (c+1)*k, wired as a directed cycle
      plus random extra edges inside the class, so each class is strongly
      connected and closed.
    - Transient states follow the persistent ones. Each one links to a few
      states of a random persistent class and, except the last, to the next
      transient state. No edge ever points back, so every transient state is
      a class of its own.
    """
    rng = np.random.default_rng(seed)
    k = states_per_class
    persistent_sets = [list(range(c * k + 1, (c + 1) * k + 1)) for c in range(n_classes)]
    first_transient = n_classes * k + 1
    transient = list(range(first_transient, first_transient + n_transient))

    rows: List[Tuple[int, int, float]] = []

    # 1. Closed classes: a cycle guarantees strong connectivity
    for members in persistent_sets:
        for i, s in enumerate(members):
            targets = {members[(i + 1) % k]}
            n_extra = rng.integers(0, k)
            targets.update(int(t) for t in rng.choice(members, size=n_extra, replace=False))
            rows += _weighted_rows(rng, s, sorted(targets))

    # 2. Transient states: forward-only edges into the closed classes
    for j, t in enumerate(transient):
        target_class = persistent_sets[rng.integers(0, n_classes)]
        targets = {int(x) for x in rng.choice(target_class, size=min(2, k), replace=False)}
        if j + 1 < n_transient:
            targets.add(transient[j + 1])
        rows += _weighted_rows(rng, t, sorted(targets))

    df = pd.DataFrame(rows, columns=COLUMNS)
    metadata = {
        "persistent_sets": persistent_sets,
        "transient_states": transient,
        "n_states": n_classes * k + n_transient,
        "n_classes_expected": n_classes + n_transient,
    }
    return df, metadata


def generate_random_chain(n_states: int = 10, density: float = 0.3, seed: int = 42) -> pd.DataFrame:
    """Random row-stochastic chain; each state keeps each possible edge with probability ``density``."""
    if not 0 < density <= 1: raise ValueError("density must be in (0, 1]")
    rng = np.random.default_rng(seed)
    rows: List[Tuple[int, int, float]] = []
    for s in range(1, n_states + 1):
        targets = [t for t in range(1, n_states + 1) if rng.random() < density]
        if not targets:
            targets = [int(rng.integers(1, n_states + 1))]
        rows += _weighted_rows(rng, s, targets)
    return pd.DataFrame(rows, columns=COLUMNS)
