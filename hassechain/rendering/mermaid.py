"""
Mermaid flowchart text for the state graph and its Hasse diagram.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Sequence, Union
from hassechain.graph import Graph
from hassechain.mining.condensation import Link
from hassechain.mining.scc import Partition

log = logging.getLogger(__name__)

GRAPH_HEADER = "---\nconfig:\n layout: elk\n theme: neo\n look: neo\n---\n"


def vertex_id(vertex: int) -> str:
    """Spreadsheet-style label: 1 -> 'A', 26 -> 'Z', 27 -> 'AA'."""
    if vertex < 1:
        raise ValueError(f"vertex ids start at 1, got {vertex}")
    letters = []
    n = vertex - 1
    while n >= 0:
        letters.append(chr(ord("A") + n % 26))
        n = n // 26 - 1
    return "".join(reversed(letters))


def graph_to_mermaid(graph: Graph) -> str:
    lines = ["flowchart LR"]
    lines += [f"{vertex_id(v)}(({v}))" for v in range(1, graph.vertex_count + 1)]
    lines += [f"{vertex_id(s)} -->|{e.weight:.4f}|{vertex_id(e.target)}" for s, e in graph]
    return GRAPH_HEADER + "\n".join(lines) + "\n"


def hasse_to_mermaid(partition: Partition, links: Sequence[Link]) -> str:
    lines = ["flowchart LR"]
    for c in partition:
        members = ",".join(str(m) for m in c.members)
        lines.append(f'{c.name}["{c.name} {{{members}}}"]')
    lines += [f"{partition[a].name} --> {partition[b].name}" for a, b in links]
    return "\n".join(lines) + "\n"


def write_mermaid(text: str, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    log.info("Mermaid diagram written to %s", path)
    return path
