from .scc import ChainClass, Partition, decompose
from .condensation import Link, condense, transitive_reduction, reachability, is_acyclic, links_to_arrow
from .persistence import ChainCharacteristics, classify

__all__ = [
    "ChainClass",
    "Partition",
    "decompose",
    "Link",
    "condense",
    "transitive_reduction",
    "reachability",
    "is_acyclic",
    "links_to_arrow",
    "ChainCharacteristics",
    "classify",
]
