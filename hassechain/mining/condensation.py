from __future__ import annotations
from typing import Dict, List, NamedTuple, Optional, Sequence, Set
import pyarrow as pa
from hassechain.graph import Graph, check_target
from hassechain.mining.scc import Partition


class Link(NamedTuple):
    from_class: int
    to_class: int


def condense(partition: Partition, graph: Graph) -> List[Link]:
    """Inter-class links induced by the graph's edges, deduplicated.

    Links come out in the order they are first seen: vertices ascending,
    then each vertex's edges in adjacency order.
    """
    links: List[Link] = []
    seen: Set[Link] = set()
    for source, edge in graph:
        a = partition.vertex_to_class[source - 1]
        b = partition.vertex_to_class[check_target(graph, source, edge.target)]
        if a == b: continue
        link = Link(a, b)
        if link not in seen:
            seen.add(link)
            links.append(link)
    return links


def _successors(links: Sequence[Link]) -> Dict[int, List[int]]:
    succ: Dict[int, List[int]] = {}
    for a, b in links:
        succ.setdefault(a, []).append(b)
    return succ


def is_acyclic(links: Sequence[Link]) -> bool:
    succ = _successors(links)
    nodes = set(succ) | {b for _, b in links}
    indegree = {n: 0 for n in nodes}
    for _, b in links: indegree[b] += 1
    ready = [n for n, d in indegree.items() if d == 0]
    visited = 0
    while ready:
        n = ready.pop()
        visited += 1
        for m in succ.get(n, []):
            indegree[m] -= 1
            if indegree[m] == 0: ready.append(m)
    return visited == len(nodes)


def reachability(links: Sequence[Link]) -> Dict[int, Set[int]]:
    """Classes reachable from each class through one or more links."""
    succ = _successors(links)
    nodes = set(succ) | {b for _, b in links}
    closure: Dict[int, Set[int]] = {}
    for start in nodes:
        reached: Set[int] = set()
        todo = list(succ.get(start, []))
        while todo:
            n = todo.pop()
            if n in reached: continue
            reached.add(n)
            todo.extend(succ.get(n, []))
        closure[start] = reached
    return closure


def transitive_reduction(links: Sequence[Link]) -> List[Link]:
    """Drop every link a -> b for which a already reaches b through a longer path.

    The input must be acyclic, which holds for any condensation. The result
    is a subset of ``links`` in the same order; for a DAG it is unique.
    """
    if not is_acyclic(links):
        raise ValueError("transitive reduction requires an acyclic link set")
    succ = _successors(links)
    closure = reachability(links)
    return [Link(a, b) for a, b in links if not any(c != b and b in closure[c] for c in succ[a])]


def links_to_arrow(links: Sequence[Link], partition: Optional[Partition] = None) -> pa.Table:
    schema = pa.schema([("from_class", pa.int32()), ("to_class", pa.int32()), ("from_name", pa.string()), ("to_name", pa.string())])
    rows = [
        {"from_class": a, "to_class": b, "from_name": partition[a].name if partition else f"C{a + 1}", "to_name": partition[b].name if partition else f"C{b + 1}"}
        for a, b in links
    ]
    return pa.Table.from_pylist(rows, schema=schema)
