"""
Graph Metrics — summary statistics for the transaction graph.

Time Complexity: O(V + E)
Memory: O(V + E) for the NetworkX projection
"""

from typing import Any, Dict

import networkx as nx

from core.graph.graph_builder import TransactionGraph


def compute_graph_summary(graph: TransactionGraph) -> Dict[str, Any]:
    """Return basic graph-level metrics."""
    G = graph.to_networkx()
    simple = nx.DiGraph(G)
    has_nodes = simple.number_of_nodes() > 0
    return {
        "total_nodes": G.number_of_nodes(),
        "total_edges": G.number_of_edges(),
        "unique_edges": simple.number_of_edges(),
        "density": round(nx.density(simple), 4) if has_nodes else 0.0,
        "num_weakly_connected_components": (
            nx.number_weakly_connected_components(simple) if has_nodes else 0
        ),
    }
