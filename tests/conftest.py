# ---------------------------------------------------------------------------
# Tests configuration
# ---------------------------------------------------------------------------

import pytest
import pandas as pd

from hassechain.core.connection import DuckDBConnection
from hassechain.graph import Graph


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def conn():
    """In-memory DuckDB connection for each test."""
    db = DuckDBConnection()  # :memory:
    yield db
    db.close()


@pytest.fixture
def edges_df():
    """Five-state chain used across ingestion and API tests.

    1 -> {2, 3}, 2 <-> 3, 4 -> {4, 5}, 5 -> 4
    Classes: {2,3} closed, {4,5} closed, {1} transient into {2,3}.
    """
    data = [
        (1, 2, 0.5), (1, 3, 0.5),
        (2, 3, 1.0),
        (3, 2, 0.4), (3, 3, 0.6),
        (4, 4, 0.5), (4, 5, 0.5),
        (5, 4, 1.0),
    ]
    return pd.DataFrame(data, columns=["source", "target", "probability"])


@pytest.fixture
def edges_polars(edges_df):
    """Polars version of the five-state chain."""
    import polars as pl
    return pl.from_pandas(edges_df)


@pytest.fixture
def five_state_graph(edges_df):
    return Graph.from_edges(5, edges_df.itertuples(index=False, name=None))


@pytest.fixture
def chain_file(tmp_path):
    """Plain-text edge file: vertex count, then one edge per line."""
    path = tmp_path / "chain.txt"
    path.write_text("4\n1 1 0.95\n1 2 0.04\n1 3 0.01\n2 2 0.9\n2 3 0.05\n2 4 0.05\n3 3 0.8\n3 4 0.2\n4 1 1.0\n")
    return path


@pytest.fixture
def loaded_chain(edges_df):
    """HasseChain instance with the five-state chain loaded."""
    from hassechain.api import HasseChain
    chain = HasseChain()
    chain.load_edges(edges_df)
    yield chain
    chain.close()


@pytest.fixture
def make_graph():
    """Build a Graph from a (source, target, probability) frame."""
    def _make(df, vertex_count=None):
        rows = list(df[["source", "target", "probability"]].itertuples(index=False, name=None))
        n = vertex_count or int(max(df["source"].max(), df["target"].max()))
        return Graph.from_edges(n, rows)
    return _make
