from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple
from hassechain.analysis.stationary import StationaryResult
from hassechain.mining.condensation import Link
from hassechain.mining.persistence import ChainCharacteristics
from hassechain.mining.scc import Partition


@dataclass(frozen=True)
class ChainReport:
    """Every result of one analysis run."""
    partition: Partition
    links: Tuple[Link, ...]
    hasse_links: Tuple[Link, ...]
    characteristics: ChainCharacteristics
    stationary: Dict[int, StationaryResult]
    periods: Dict[int, int]
    stochastic_violations: Tuple[Tuple[int, float], ...] = ()

    @property
    def is_markov(self) -> bool:
        return not self.stochastic_violations

    def to_dict(self) -> dict:
        p = self.partition
        return {
            "classes": {c.name: list(c.members) for c in p},
            "links": [(p[a].name, p[b].name) for a, b in self.links],
            "hasse_links": [(p[a].name, p[b].name) for a, b in self.hasse_links],
            "persistent": {c.name: self.characteristics.persistent[c.index] for c in p},
            "absorbing_states": list(self.characteristics.absorbing_states),
            "is_irreducible": self.characteristics.is_irreducible,
            "stationary": {p[i].name: {"distribution": r.as_dict(), "iterations": r.iterations, "converged": r.converged} for i, r in self.stationary.items()},
            "periods": {p[i].name: k for i, k in self.periods.items()},
        }


def _links_block(title: str, links, partition: Partition) -> List[str]:
    if not links:
        return [f"{title}: none (every class is closed)"]
    return [f"{title}:"] + [f"  {partition[a].name} -> {partition[b].name}" for a, b in links]


def format_report(report: ChainReport) -> str:
    p, ch = report.partition, report.characteristics
    out = ["Strongly connected classes:"]
    out += [f"  {c.name}: {{{', '.join(str(m) for m in c.members)}}}" for c in p]
    out += _links_block("Links between classes", report.links, p)
    out += _links_block("Hasse diagram links", report.hasse_links, p)
    out.append("Class properties:")
    out += [f"  {c.name} is {'persistent' if ch.persistent[c.index] else 'transient'}" for c in p]
    if ch.has_absorbing_state:
        out.append("Absorbing states:")
        out += [f"  state {v} (class {p[p.class_of(v)].name})" for v in ch.absorbing_states]
    else:
        out.append("No absorbing states.")
    out.append("The chain is irreducible." if ch.is_irreducible else "The chain is not irreducible.")
    if report.stationary:
        out.append("Stationary distributions:")
        for i, r in report.stationary.items():
            probs = ", ".join(f"{m}: {x:.4f}" for m, x in r.as_dict().items())
            status = f"converged after {r.iterations} iterations" if r.converged else f"no convergence after {r.iterations} iterations"
            out.append(f"  {p[i].name} [{probs}] ({status})")
    if report.periods:
        out.append("Periods:")
        out += [f"  {p[i].name}: {k}{' (aperiodic)' if k == 1 else ''}" for i, k in report.periods.items()]
    if report.stochastic_violations:
        out.append("Warning: not a Markov graph, rows off by more than the tolerance:")
        out += [f"  vertex {v} sums to {s:.4f}" for v, s in report.stochastic_violations]
    return "\n".join(out)
