"""Tests for edge ingestion."""

import pytest
import pandas as pd
import numpy as np
import pyarrow as pa

from hassechain.core.ingestion import graph_from_table, load_edges, load_transition_matrix
from hassechain.graph import Edge, InvalidGraph


class TestLoadEdges:

    def test_basic_load(self, conn, edges_df):
        assert load_edges(conn, edges_df) == len(edges_df)
        assert conn.table_exists("edges")

    def test_schema(self, conn, edges_df):
        load_edges(conn, edges_df)
        cols = conn.query("SELECT * FROM edges LIMIT 0").column_names
        assert cols == ["seq", "source", "target", "probability"]

    def test_row_order_kept(self, conn, edges_df):
        load_edges(conn, edges_df)
        rows = conn.rows("SELECT source, target, probability FROM edges ORDER BY seq")
        assert rows == list(edges_df.itertuples(index=False, name=None))

    def test_column_names_normalised(self, conn):
        df = pd.DataFrame({"from": [1, 2], "to": [2, 1], "p": [1.0, 1.0]})
        load_edges(conn, df, source_col="from", target_col="to", weight_col="p")
        assert conn.rows("SELECT source, target FROM edges ORDER BY seq") == [(1, 2), (2, 1)]

    def test_custom_table_name(self, conn, edges_df):
        load_edges(conn, edges_df, table_name="chain")
        assert conn.table_exists("chain")
        assert not conn.table_exists("edges")

    def test_append_continues_sequence(self, conn, edges_df):
        load_edges(conn, edges_df)
        count = load_edges(conn, edges_df, append=True)
        assert count == 2 * len(edges_df)
        seqs = [r[0] for r in conn.rows("SELECT seq FROM edges ORDER BY seq")]
        assert seqs == list(range(2 * len(edges_df)))

    def test_append_to_missing_table_creates_it(self, conn, edges_df):
        assert load_edges(conn, edges_df, append=True) == len(edges_df)

    def test_replace_mode(self, conn, edges_df):
        load_edges(conn, edges_df)
        assert load_edges(conn, edges_df.head(2)) == 2

    def test_missing_column_raises(self, conn):
        df = pd.DataFrame({"a": [1], "b": [2]})
        with pytest.raises(ValueError, match="Missing columns"):
            load_edges(conn, df)

    def test_null_rows_dropped(self, conn):
        df = pd.DataFrame({
            "source": [1, 1, np.nan, 2],
            "target": [2, np.nan, 1, 2],
            "probability": [1.0, 0.5, 0.5, np.nan],
        })
        assert load_edges(conn, df) == 1

    def test_from_csv(self, conn, edges_df, tmp_path):
        path = tmp_path / "edges.csv"
        edges_df.to_csv(path, index=False)
        assert load_edges(conn, path) == len(edges_df)

    def test_from_parquet(self, conn, edges_df, tmp_path):
        path = tmp_path / "edges.parquet"
        edges_df.to_parquet(path, index=False)
        assert load_edges(conn, str(path)) == len(edges_df)

    def test_from_text_file(self, conn, chain_file):
        assert load_edges(conn, chain_file) == 9
        assert conn.rows("SELECT source, target, probability FROM edges ORDER BY seq LIMIT 2") == [(1, 1, 0.95), (1, 2, 0.04)]

    def test_text_file_ignores_column_arguments(self, conn, chain_file):
        assert load_edges(conn, chain_file, source_col="a", target_col="b", weight_col="c") == 9

    def test_invalid_text_file(self, conn, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("2\n1 3 1.0\n")
        with pytest.raises(InvalidGraph):
            load_edges(conn, path)

    def test_missing_csv_raises_value_error(self, conn, tmp_path):
        with pytest.raises(ValueError, match="Cannot read"):
            load_edges(conn, tmp_path / "missing.csv")

    def test_missing_parquet_raises_value_error(self, conn, tmp_path):
        with pytest.raises(ValueError, match="Cannot read"):
            load_edges(conn, tmp_path / "missing.parquet")

    def test_non_numeric_cell_raises_value_error(self, conn, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("source,target,probability\n1,x,1.0\n")
        with pytest.raises(ValueError, match="Cannot convert"):
            load_edges(conn, path)
        assert not conn.table_exists("edges")

    def test_unsupported_file_type_raises(self, conn, tmp_path):
        f = tmp_path / "edges.xlsx"
        f.write_text("dummy")
        with pytest.raises(ValueError, match="Unsupported file type"):
            load_edges(conn, f)

    def test_unsupported_object_raises(self, conn):
        with pytest.raises(ValueError, match="Unsupported edge source"):
            load_edges(conn, [(1, 2, 1.0)])

    def test_from_arrow(self, conn, edges_df):
        assert load_edges(conn, pa.Table.from_pandas(edges_df)) == len(edges_df)

    def test_from_polars(self, conn, edges_polars):
        assert load_edges(conn, edges_polars) == 8

    def test_from_polars_lazy(self, conn, edges_polars):
        assert load_edges(conn, edges_polars.lazy()) == 8


class TestLoadTransitionMatrix:

    def test_dense_frame(self, conn):
        df = pd.DataFrame([[0.0, 1.0, 0.0], [0.5, 0.0, 0.5], [0.0, 0.0, 1.0]], columns=["s1", "s2", "s3"])
        assert load_transition_matrix(conn, df) == 4
        rows = conn.rows("SELECT source, target, probability FROM edges ORDER BY seq")
        assert rows == [(1, 2, 1.0), (2, 1, 0.5), (2, 3, 0.5), (3, 3, 1.0)]

    def test_polars_frame(self, conn):
        import polars as pl
        df = pl.DataFrame({"a": [0.5, 1.0], "b": [0.5, 0.0]})
        assert load_transition_matrix(conn, df) == 3

    def test_non_square_raises(self, conn):
        df = pd.DataFrame({"a": [1.0], "b": [0.0]})
        with pytest.raises(ValueError, match="square"):
            load_transition_matrix(conn, df)


class TestGraphFromTable:

    def test_round_trip(self, conn, edges_df, five_state_graph):
        load_edges(conn, edges_df)
        g = graph_from_table(conn)
        assert g.vertex_count == 5
        assert list(g) == list(five_state_graph)

    def test_vertex_count_inferred_from_targets(self, conn):
        load_edges(conn, pd.DataFrame({"source": [1], "target": [4], "probability": [1.0]}))
        assert graph_from_table(conn).vertex_count == 4

    def test_explicit_vertex_count(self, conn):
        load_edges(conn, pd.DataFrame({"source": [1], "target": [1], "probability": [1.0]}))
        g = graph_from_table(conn, vertex_count=3)
        assert g.vertex_count == 3
        assert g.edges(1) == (Edge(1, 1.0),)

    def test_explicit_vertex_count_too_small(self, conn, edges_df):
        load_edges(conn, edges_df)
        with pytest.raises(InvalidGraph):
            graph_from_table(conn, vertex_count=3)

    def test_empty_table(self, conn):
        empty = pd.DataFrame({"source": [], "target": [], "probability": []}).astype({"source": "int64", "target": "int64", "probability": "float64"})
        load_edges(conn, empty)
        with pytest.raises(InvalidGraph, match="no edges"):
            graph_from_table(conn)

    def test_appended_edges_follow_originals(self, conn, edges_df):
        load_edges(conn, edges_df)
        load_edges(conn, pd.DataFrame({"source": [5], "target": [5], "probability": [0.0]}), append=True)
        g = graph_from_table(conn)
        assert g.edges(5) == (Edge(4, 1.0), Edge(5, 0.0))
