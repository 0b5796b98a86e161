from __future__ import annotations
from typing import Any, Optional
from pathlib import Path
import numpy as np
import pyarrow as pa
import duckdb
import narwhals as nw
from hassechain.core.connection import DuckDBConnection
from hassechain.graph import Graph, InvalidGraph, read_graph

EDGE_SCHEMA = pa.schema([("source", pa.int32()), ("target", pa.int32()), ("probability", pa.float64())])

def _to_eager(source):
    try: df = nw.from_native(source)
    except TypeError: raise ValueError(f"Unsupported edge source: {type(source).__name__}") from None
    return df.collect() if isinstance(df, nw.LazyFrame) else df

def _register_df(conn, df, source_col, target_col, weight_col):
    missing = [c for c in (source_col, target_col, weight_col) if c not in df.columns]
    if missing: raise ValueError(f"Missing columns: {missing}")
    df = df.select(nw.col(source_col).alias("source"), nw.col(target_col).alias("target"), nw.col(weight_col).alias("probability"))
    df = df.drop_nulls().with_row_index("seq")
    conn.register("_tmp_edges_raw", df.to_arrow())
    try:
        conn.execute("CREATE OR REPLACE TEMP TABLE _tmp_edges AS SELECT seq::BIGINT AS seq, source::INTEGER AS source, target::INTEGER AS target, probability::DOUBLE AS probability FROM _tmp_edges_raw ORDER BY seq")
    except duckdb.Error as e:
        raise ValueError(f"Cannot convert edge columns: {e}") from e
    finally:
        conn.unregister("_tmp_edges_raw")

def _read_file(conn, path: Path):
    p = str(path).replace("'", "''")
    if path.suffix == ".txt": return read_graph(path).to_arrow()
    if path.suffix == ".csv": sql = f"SELECT * FROM read_csv_auto('{p}')"
    elif path.suffix == ".parquet": sql = f"SELECT * FROM read_parquet('{p}')"
    else: raise ValueError(f"Unsupported file type: {path.suffix or path.name}")
    try:
        return conn.query(sql)
    except duckdb.Error as e:
        raise ValueError(f"Cannot read {path}: {e}") from e

def _handle_table_upsert(conn, table_name, append):
    if not append or not conn.table_exists(table_name):
        conn.execute(f"CREATE OR REPLACE TABLE {table_name} AS SELECT * FROM _tmp_edges ORDER BY seq")
    else:
        offset = conn.next_seq(table_name)
        conn.execute(f"INSERT INTO {table_name} SELECT seq + {offset}, source, target, probability FROM _tmp_edges ORDER BY seq")

def load_edges(conn: DuckDBConnection, source: Any, source_col="source", target_col="target", weight_col="probability", table_name="edges", append=False) -> int:
    """Load ``(source, target, probability)`` rows into ``table_name``.

    ``source`` may be any frame narwhals understands (pandas, polars, pyarrow)
    or a path to a ``.csv``, ``.parquet`` or plain-text ``.txt`` edge file.
    Row order is kept in the ``seq`` column; appends continue the sequence.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        raw = _read_file(conn, path)
        if path.suffix == ".txt": source_col, target_col, weight_col = "source", "target", "probability"
        source = raw
    _register_df(conn, _to_eager(source), source_col, target_col, weight_col)
    _handle_table_upsert(conn, table_name, append)
    return conn.edge_count(table_name)

def load_transition_matrix(conn: DuckDBConnection, df: Any, table_name="edges", append=False) -> int:
    """Unpivot a dense square frame into edges; row ``i`` / column ``j`` is state ``i+1`` / ``j+1``."""
    values = _to_eager(df).to_numpy().astype(np.float64)
    if values.ndim != 2 or values.shape[0] != values.shape[1]:
        raise ValueError(f"Transition matrix must be square, got shape {values.shape}")
    rows, cols = np.nonzero(values)
    edges = pa.table({"source": (rows + 1).astype(np.int32), "target": (cols + 1).astype(np.int32), "probability": values[rows, cols]}, schema=EDGE_SCHEMA)
    return load_edges(conn, edges, table_name=table_name, append=append)

def graph_from_table(conn: DuckDBConnection, table_name="edges", vertex_count: Optional[int] = None) -> Graph:
    """Rebuild a Graph from the edge table, edges in ``seq`` order."""
    rows = conn.rows(f"SELECT source, target, probability FROM {table_name} ORDER BY seq")
    if vertex_count is None:
        if not rows: raise InvalidGraph(f"Table {table_name!r} holds no edges")
        vertex_count = conn.max_vertex(table_name)
    return Graph.from_edges(vertex_count, rows)
