from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple, Union
import pyarrow as pa

log = logging.getLogger(__name__)

STOCHASTIC_TOLERANCE = 0.01


class InvalidGraph(ValueError):
    """Raised when a graph violates its structural invariants."""


@dataclass(frozen=True)
class Edge:
    target: int
    weight: float


def check_target(graph, source: int, target: int) -> int:
    """Return the 0-based index of ``target`` or raise InvalidGraph."""
    if not 1 <= target <= graph.vertex_count:
        raise InvalidGraph(f"vertex {source} has an edge to {target}, outside [1, {graph.vertex_count}]")
    return target - 1


class Graph:
    """Directed weighted graph over vertices 1..vertex_count.

    Each vertex owns an ordered sequence of outgoing edges. Edge order is
    significant: it drives class numbering during decomposition.
    """

    def __init__(self, vertex_count: int):
        if vertex_count <= 0:
            raise InvalidGraph(f"vertex_count must be positive, got {vertex_count}")
        self.vertex_count = int(vertex_count)
        self._adjacency: List[List[Edge]] = [[] for _ in range(self.vertex_count)]

    @classmethod
    def from_edges(cls, vertex_count: int, edges: Iterable[Tuple[int, int, float]]) -> Graph:
        graph = cls(vertex_count)
        for source, target, weight in edges:
            graph.add_edge(source, target, weight)
        return graph

    @classmethod
    def from_adjacency(cls, adjacency: Sequence[Sequence[Tuple[int, float]]], validate: bool = True) -> Graph:
        """Build a graph from per-vertex ``(target, weight)`` lists.

        With ``validate=False`` destinations are stored as given; consumers
        such as :func:`hassechain.mining.scc.decompose` reject them later.
        """
        graph = cls(len(adjacency))
        for source, row in enumerate(adjacency, start=1):
            for target, weight in row:
                graph.add_edge(source, target, weight, validate=validate)
        return graph

    def add_edge(self, source: int, target: int, weight: float, validate: bool = True) -> None:
        if not 1 <= source <= self.vertex_count:
            raise InvalidGraph(f"source vertex {source} outside [1, {self.vertex_count}]")
        if validate:
            check_target(self, source, target)
        if weight < 0:
            raise InvalidGraph(f"edge {source} -> {target} has negative weight {weight}")
        self._adjacency[source - 1].append(Edge(int(target), float(weight)))

    def edges(self, vertex: int) -> Tuple[Edge, ...]:
        return tuple(self._adjacency[vertex - 1])

    def out_weight(self, vertex: int) -> float:
        return sum(e.weight for e in self._adjacency[vertex - 1])

    @property
    def edge_count(self) -> int:
        return sum(len(row) for row in self._adjacency)

    def __iter__(self) -> Iterator[Tuple[int, Edge]]:
        for source, row in enumerate(self._adjacency, start=1):
            for edge in row:
                yield source, edge

    def __len__(self) -> int:
        return self.vertex_count

    def stochastic_violations(self, tolerance: float = STOCHASTIC_TOLERANCE) -> List[Tuple[int, float]]:
        """Vertices whose outgoing weights do not sum to 1 within ``tolerance``."""
        bad = []
        for v in range(1, self.vertex_count + 1):
            total = self.out_weight(v)
            if total < 1.0 - tolerance or total > 1.0 + tolerance:
                bad.append((v, total))
        return bad

    def is_stochastic(self, tolerance: float = STOCHASTIC_TOLERANCE) -> bool:
        violations = self.stochastic_violations(tolerance)
        for v, total in violations:
            log.warning("Outgoing probabilities of vertex %d sum to %.4f", v, total)
        return not violations

    def to_arrow(self) -> pa.Table:
        rows = [{"seq": i, "source": s, "target": e.target, "probability": e.weight} for i, (s, e) in enumerate(self)]
        schema = pa.schema([("seq", pa.int64()), ("source", pa.int32()), ("target", pa.int32()), ("probability", pa.float64())])
        return pa.Table.from_pylist(rows, schema=schema)

    def __repr__(self) -> str:
        return f"Graph(vertex_count={self.vertex_count}, edges={self.edge_count})"


def read_graph(path: Union[str, Path]) -> Graph:
    """Read the plain-text edge format.

    The first token is the vertex count; every following line holds
    ``source target probability``.
    """
    tokens = Path(path).read_text().split()
    if not tokens:
        raise InvalidGraph(f"{path}: empty file")
    try:
        vertex_count = int(tokens[0])
    except ValueError:
        raise InvalidGraph(f"{path}: cannot read vertex count from {tokens[0]!r}") from None
    body = tokens[1:]
    if len(body) % 3:
        raise InvalidGraph(f"{path}: trailing incomplete edge {body[-(len(body) % 3):]}")
    graph = Graph(vertex_count)
    for i in range(0, len(body), 3):
        try:
            source, target, weight = int(body[i]), int(body[i + 1]), float(body[i + 2])
        except ValueError:
            raise InvalidGraph(f"{path}: malformed edge {' '.join(body[i:i + 3])!r}") from None
        graph.add_edge(source, target, weight)
    log.debug("Read %r from %s", graph, path)
    return graph
