from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
import narwhals as nw
import numpy as np
import pyarrow as pa
from hassechain.analysis.matrix import build_transition_matrix, distribution_after
from hassechain.analysis.periodicity import class_periods
from hassechain.analysis.stationary import StationaryResult, stationary_distributions, stationary_to_arrow
from hassechain.config import AnalysisConfig, DEFAULT_CONFIG
from hassechain.core.connection import DuckDBConnection
from hassechain.core.ingestion import graph_from_table, load_edges, load_transition_matrix
from hassechain.graph import Graph, read_graph
from hassechain.mining.condensation import Link, condense, links_to_arrow, transitive_reduction
from hassechain.mining.persistence import ChainCharacteristics, classify
from hassechain.mining.scc import Partition, decompose
from hassechain.rendering.mermaid import graph_to_mermaid, hasse_to_mermaid
from hassechain.report import ChainReport

log = logging.getLogger(__name__)

class HasseChain:
    """Unified engine for Markov chain class analysis."""

    def __init__(
        self,
        database: Union[str, Path] = ":memory:",
        memory_limit: Optional[str] = None,
        threads: Optional[int] = None,
        config: Optional[AnalysisConfig] = None,
    ) -> None:
        self.conn = DuckDBConnection(database=database, memory_limit=memory_limit, threads=threads)
        self.table_name = "edges"
        self.config = config or DEFAULT_CONFIG
        self.vertex_count: Optional[int] = None
        self._reset()

    def _reset(self):
        self._graph, self._partition, self._links, self._hasse, self._characteristics, self._matrix = None, None, None, None, None, None

    def load(self, data: Any, **kwargs) -> HasseChain:
        if isinstance(data, (str, Path)) and Path(data).suffix == ".txt": return self.read(data)
        self.load_edges(data, **kwargs)
        return self

    def load_edges(self, *args, vertex_count: Optional[int] = None, **kwargs) -> int:
        n = load_edges(self.conn, *args, table_name=self.table_name, **kwargs)
        if vertex_count is not None or not kwargs.get("append"):
            self.vertex_count = vertex_count
        elif self.vertex_count is not None:
            # a known count (text header, matrix size) is a lower bound once edges are appended
            self.vertex_count = max(self.vertex_count, self.conn.max_vertex(self.table_name))
        self._reset()
        return n

    def load_transition_matrix(self, df: Any) -> int:
        frame = nw.from_native(df)
        if isinstance(frame, nw.LazyFrame): frame = frame.collect()
        n = load_transition_matrix(self.conn, frame.to_native(), table_name=self.table_name)
        self.vertex_count = frame.shape[0]
        self._reset()
        return n

    def read(self, path: Union[str, Path]) -> HasseChain:
        """Load the plain-text format; its header fixes the vertex count."""
        graph = read_graph(path)
        load_edges(self.conn, graph.to_arrow(), table_name=self.table_name)
        self.vertex_count = graph.vertex_count
        self._reset()
        self._graph = graph
        return self

    def graph(self) -> Graph:
        if self._graph is None:
            if not self.conn.table_exists(self.table_name): raise RuntimeError("Load edges first.")
            self._graph = graph_from_table(self.conn, self.table_name, self.vertex_count)
            log.info("Built %r from table %s", self._graph, self.table_name)
        return self._graph

    def validate(self, tolerance: Optional[float] = None) -> pa.Table:
        """Vertices whose outgoing probabilities do not sum to 1."""
        tol = self.config.stochastic_tolerance if tolerance is None else tolerance
        bad = self.graph().stochastic_violations(tol)
        for v, total in bad: log.warning("Outgoing probabilities of vertex %d sum to %.4f", v, total)
        schema = pa.schema([("vertex", pa.int32()), ("total", pa.float64())])
        return pa.Table.from_pylist([{"vertex": v, "total": t} for v, t in bad], schema=schema)

    def is_markov(self, tolerance: Optional[float] = None) -> bool:
        return self.validate(tolerance).num_rows == 0

    def partition(self) -> Partition:
        if self._partition is None: self._partition = decompose(self.graph())
        return self._partition

    def classes(self) -> pa.Table:
        return self.partition().to_arrow()

    def links(self, reduced: bool = False) -> List[Link]:
        if self._links is None: self._links = condense(self.partition(), self.graph())
        if not reduced: return list(self._links)
        if self._hasse is None: self._hasse = transitive_reduction(self._links)
        return list(self._hasse)

    def links_table(self, reduced: bool = False) -> pa.Table:
        return links_to_arrow(self.links(reduced=reduced), self.partition())

    def characteristics(self) -> ChainCharacteristics:
        if self._characteristics is None: self._characteristics = classify(self.partition(), self.links())
        return self._characteristics

    def classification(self) -> pa.Table:
        return self.characteristics().to_arrow(self.partition())

    def transition_matrix(self) -> np.ndarray:
        if self._matrix is None: self._matrix = build_transition_matrix(self.graph())
        return self._matrix.copy()

    def stationary(self) -> Dict[int, StationaryResult]:
        return stationary_distributions(self.transition_matrix(), self.partition(), self.characteristics(), self.config.convergence_tolerance, self.config.max_iterations)

    def stationary_table(self) -> pa.Table:
        return stationary_to_arrow(self.stationary(), self.partition())

    def periods(self) -> Dict[int, int]:
        return class_periods(self.transition_matrix(), self.partition(), self.characteristics())

    def distribution(self, initial: Sequence[float], steps: int) -> np.ndarray:
        return distribution_after(self.transition_matrix(), initial, steps)

    def analyze(self) -> ChainReport:
        graph = self.graph()
        report = ChainReport(
            partition=self.partition(),
            links=tuple(self.links()),
            hasse_links=tuple(self.links(reduced=True)),
            characteristics=self.characteristics(),
            stationary=self.stationary(),
            periods=self.periods(),
            stochastic_violations=tuple(graph.stochastic_violations(self.config.stochastic_tolerance)),
        )
        log.info("Analysed %d states: %d classes, %d links, %d persistent", graph.vertex_count, len(report.partition), len(report.links), len(report.characteristics.persistent_classes()))
        return report

    def mermaid(self) -> str:
        return graph_to_mermaid(self.graph())

    def hasse_mermaid(self, reduced: bool = True) -> str:
        return hasse_to_mermaid(self.partition(), self.links(reduced=reduced))

    def sql(self, query: str) -> pa.Table: return self.conn.query(query)
    def close(self): self.conn.close()
    def __enter__(self): return self
    def __exit__(self, *_): self.close()
    def __repr__(self) -> str: return f"HasseChain(database={self.conn.database!r})"
