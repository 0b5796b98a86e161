from .api import HasseChain
from .config import AnalysisConfig, DEFAULT_CONFIG
from .core.connection import DuckDBConnection
from .graph import Graph, Edge, InvalidGraph, read_graph
from .mining import ChainClass, Partition, Link, ChainCharacteristics, decompose, condense, transitive_reduction, classify
from .analysis import (
    AllocationFailure,
    PowerResult,
    StationaryResult,
    build_transition_matrix,
    power_until_convergence,
    sub_chain,
    stationary_distributions,
    period,
    gcd,
)
from .rendering import graph_to_mermaid, hasse_to_mermaid
from .report import ChainReport, format_report
from .datasets import (
    two_cycle_with_absorbing,
    transient_into_absorbing,
    linear_with_shortcut,
    symmetric_pair,
    generate_layered_chain,
    generate_random_chain,
)

def load(data, **kwargs) -> HasseChain:
    engine = HasseChain()
    engine.load(data, **kwargs)
    return engine

def connect(database=":memory:", **kwargs) -> HasseChain:
    return HasseChain(database=database, **kwargs)

__all__ = [
    "HasseChain",
    "load",
    "connect",
    "AnalysisConfig",
    "DEFAULT_CONFIG",
    "DuckDBConnection",
    "Graph",
    "Edge",
    "InvalidGraph",
    "read_graph",
    # Decomposition
    "ChainClass",
    "Partition",
    "Link",
    "ChainCharacteristics",
    "decompose",
    "condense",
    "transitive_reduction",
    "classify",
    # Numerics
    "AllocationFailure",
    "PowerResult",
    "StationaryResult",
    "build_transition_matrix",
    "power_until_convergence",
    "sub_chain",
    "stationary_distributions",
    "period",
    "gcd",
    # Rendering
    "graph_to_mermaid",
    "hasse_to_mermaid",
    "ChainReport",
    "format_report",
    # Datasets
    "two_cycle_with_absorbing",
    "transient_into_absorbing",
    "linear_with_shortcut",
    "symmetric_pair",
    "generate_layered_chain",
    "generate_random_chain",
]
