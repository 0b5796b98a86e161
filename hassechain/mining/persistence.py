from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple
import pyarrow as pa
from hassechain.mining.condensation import Link
from hassechain.mining.scc import Partition


@dataclass(frozen=True)
class ChainCharacteristics:
    persistent: Tuple[bool, ...]
    absorbing_states: Tuple[int, ...]  # vertex ids of single-member persistent classes
    is_irreducible: bool

    @property
    def has_absorbing_state(self) -> bool:
        return bool(self.absorbing_states)

    def persistent_classes(self) -> List[int]:
        return [i for i, p in enumerate(self.persistent) if p]

    def transient_classes(self) -> List[int]:
        return [i for i, p in enumerate(self.persistent) if not p]

    def to_arrow(self, partition: Partition) -> pa.Table:
        schema = pa.schema([("class_id", pa.int32()), ("name", pa.string()), ("persistent", pa.bool_()), ("absorbing", pa.bool_()), ("members", pa.list_(pa.int32()))])
        rows = [
            {"class_id": c.index, "name": c.name, "persistent": self.persistent[c.index], "absorbing": self.persistent[c.index] and c.size == 1, "members": list(c.members)}
            for c in partition
        ]
        return pa.Table.from_pylist(rows, schema=schema)


def classify(partition: Partition, links: Sequence[Link]) -> ChainCharacteristics:
    """A class is transient iff some link of the direct condensation leaves it."""
    persistent = [True] * len(partition)
    for a, _ in links:
        persistent[a] = False
    absorbing = tuple(c.members[0] for c in partition if persistent[c.index] and c.size == 1)
    return ChainCharacteristics(persistent=tuple(persistent), absorbing_states=absorbing, is_irreducible=len(partition) == 1)
