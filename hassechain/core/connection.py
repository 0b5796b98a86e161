"""DuckDB session holding a chain's edge tables."""
from __future__ import annotations
import duckdb
from pathlib import Path
from typing import Union, Optional, Any
import pyarrow as pa

class DuckDBConnection:
    """Connection wrapper; edge tables carry ``(seq, source, target, probability)``."""
    def __init__(
        self,
        database: Union[str, Path] = ":memory:",
        memory_limit: Optional[str] = None,
        threads: Optional[int] = None,
    ):
        self.database = str(database)
        self.conn = duckdb.connect(self.database)
        if memory_limit: self.conn.execute(f"SET memory_limit='{memory_limit}'")
        if threads: self.conn.execute(f"SET threads={threads}")

    def execute(self, query: str, params: Optional[Union[list, dict]] = None) -> duckdb.DuckDBPyConnection:
        return self.conn.execute(query, params)

    def query(self, query: str, params: Optional[Union[list, dict]] = None) -> pa.Table:
        result = self.execute(query, params).arrow()
        # newer duckdb releases hand back a RecordBatchReader
        return result.read_all() if hasattr(result, "read_all") else result

    def rows(self, query: str, params: Optional[Union[list, dict]] = None) -> list:
        return self.execute(query, params).fetchall()

    def table_exists(self, table_name: str) -> bool:
        try:
            self.conn.execute(f"SELECT 1 FROM {table_name} LIMIT 0")
            return True
        except (duckdb.CatalogException, duckdb.ParserException):
            return False

    def edge_count(self, table_name: str) -> int:
        return self.conn.execute(f"SELECT COUNT(*) FROM {table_name}").fetchone()[0]

    def next_seq(self, table_name: str) -> int:
        """Sequence number an appended edge should start from."""
        return self.conn.execute(f"SELECT COALESCE(MAX(seq) + 1, 0) FROM {table_name}").fetchone()[0]

    def max_vertex(self, table_name: str) -> int:
        """Largest vertex id on either end of an edge; 0 for an empty table."""
        return self.conn.execute(f"SELECT COALESCE(GREATEST(MAX(source), MAX(target)), 0) FROM {table_name}").fetchone()[0]

    def register(self, name: str, data: Any):
        self.conn.register(name, data)

    def unregister(self, name: str):
        self.conn.unregister(name)

    def close(self):
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()
