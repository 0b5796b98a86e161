from __future__ import annotations
import pandas as pd

COLUMNS = ["source", "target", "probability"]

def two_cycle_with_absorbing() -> pd.DataFrame:
    """1 <-> 2 plus an absorbing 3: classes {1,2} (period 2) and {3}, no links."""
    return pd.DataFrame([(1, 2, 1.0), (2, 1, 1.0), (3, 3, 1.0)], columns=COLUMNS)

def transient_into_absorbing() -> pd.DataFrame:
    """1 -> 2 -> 2: {1} is transient and drains into the absorbing {2}."""
    return pd.DataFrame([(1, 2, 1.0), (2, 2, 1.0)], columns=COLUMNS)

def linear_with_shortcut() -> pd.DataFrame:
    """Classes {1} -> {2} -> {3} with a redundant {1} -> {3} shortcut."""
    return pd.DataFrame([(1, 2, 0.5), (1, 3, 0.5), (2, 3, 1.0), (3, 3, 1.0)], columns=COLUMNS)

def symmetric_pair() -> pd.DataFrame:
    """1 <-> 2: irreducible with period 2, so plain powering oscillates."""
    return pd.DataFrame([(1, 2, 1.0), (2, 1, 1.0)], columns=COLUMNS)
