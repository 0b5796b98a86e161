from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple
import pyarrow as pa
from hassechain.graph import Graph, check_target

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainClass:
    """A strongly connected class; ``members`` are 1-based vertex ids, ascending."""
    index: int
    members: Tuple[int, ...]

    @property
    def name(self) -> str:
        return f"C{self.index + 1}"

    @property
    def size(self) -> int:
        return len(self.members)

    def __contains__(self, vertex: int) -> bool:
        return vertex in self.members


@dataclass(frozen=True)
class Partition:
    classes: Tuple[ChainClass, ...]
    vertex_to_class: Tuple[int, ...]  # 0-based vertex index -> class index

    def class_of(self, vertex: int) -> int:
        return self.vertex_to_class[vertex - 1]

    @property
    def vertex_count(self) -> int:
        return len(self.vertex_to_class)

    def names(self) -> List[str]:
        return [c.name for c in self.classes]

    def __len__(self) -> int:
        return len(self.classes)

    def __iter__(self) -> Iterator[ChainClass]:
        return iter(self.classes)

    def __getitem__(self, index: int) -> ChainClass:
        return self.classes[index]

    def to_arrow(self) -> pa.Table:
        schema = pa.schema([("class_id", pa.int32()), ("name", pa.string()), ("size", pa.int32()), ("members", pa.list_(pa.int32()))])
        rows = [{"class_id": c.index, "name": c.name, "size": c.size, "members": list(c.members)} for c in self.classes]
        return pa.Table.from_pylist(rows, schema=schema)


def _tarjan(graph: Graph) -> Tuple[List[List[int]], List[int]]:
    """Tarjan's SCC algorithm over 0-based vertex indices, iterative.

    Each frame of ``call_stack`` is ``[vertex, next_edge_position]``; when a
    frame is exhausted its low-link is folded into the parent frame, which is
    exactly what the recursive return would do.
    """
    n = graph.vertex_count
    adj = [[check_target(graph, v + 1, e.target) for e in graph.edges(v + 1)] for v in range(n)]
    index = [-1] * n
    lowlink = [-1] * n
    on_stack = [False] * n
    stack: List[int] = []
    sccs: List[List[int]] = []
    vertex_to_class = [-1] * n
    counter = 0

    for start in range(n):
        if index[start] != -1:
            continue
        index[start] = lowlink[start] = counter
        counter += 1
        stack.append(start)
        on_stack[start] = True
        call_stack = [[start, 0]]
        while call_stack:
            frame = call_stack[-1]
            v, ni = frame
            neighbors = adj[v]
            if ni < len(neighbors):
                w = neighbors[ni]
                frame[1] = ni + 1
                if index[w] == -1:
                    index[w] = lowlink[w] = counter
                    counter += 1
                    stack.append(w)
                    on_stack[w] = True
                    call_stack.append([w, 0])
                elif on_stack[w]:
                    lowlink[v] = min(lowlink[v], index[w])
                continue

            if lowlink[v] == index[v]:
                scc = []
                while True:
                    w = stack.pop()
                    on_stack[w] = False
                    vertex_to_class[w] = len(sccs)
                    scc.append(w)
                    if w == v:
                        break
                log.debug("Class C%d closed at vertex %d with %d members", len(sccs) + 1, v + 1, len(scc))
                sccs.append(scc)

            call_stack.pop()
            if call_stack:
                parent = call_stack[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[v])

    return sccs, vertex_to_class


def decompose(graph: Graph) -> Partition:
    """Partition ``graph`` into its strongly connected classes.

    Classes are numbered in the order their roots complete, with the outer
    traversal visiting vertices in ascending order and following each
    vertex's edges in adjacency order.
    """
    sccs, vertex_to_class = _tarjan(graph)
    classes = tuple(ChainClass(i, tuple(sorted(v + 1 for v in scc))) for i, scc in enumerate(sccs))
    log.debug("Decomposed %d vertices into %d classes", graph.vertex_count, len(classes))
    return Partition(classes=classes, vertex_to_class=tuple(vertex_to_class))
