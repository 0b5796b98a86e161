from .mermaid import vertex_id, graph_to_mermaid, hasse_to_mermaid, write_mermaid

__all__ = ["vertex_id", "graph_to_mermaid", "hasse_to_mermaid", "write_mermaid"]
