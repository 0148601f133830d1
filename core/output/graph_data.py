"""
Graph snapshot for the dashboard.

Nodes carry the account aggregates plus scoring results; edges are one per
transaction. Pure projection, nothing here feeds back into scoring.

Time Complexity: O(V + E)
Memory: O(V + E)
"""

from typing import Any, Dict

from core.graph.graph_builder import TransactionGraph


def build_graph_data(
    graph: TransactionGraph,
    scores: Dict[str, Any],
    final_scores: Dict[str, float],
) -> Dict[str, Any]:
    nodes = []
    for account_id, node in graph.accounts.items():
        score_data = scores.get(account_id)
        nodes.append(
            {
                "id": account_id,
                **node.to_dict(),
                "suspicious": account_id in final_scores,
                "score": final_scores.get(account_id, 0.0),
                "detected_patterns": list(score_data.detected_patterns) if score_data else [],
                "ring_id": score_data.primary_ring_id if score_data else None,
            }
        )

    edges = []
    for index, tx in enumerate(graph.transactions, 1):
        edges.append(
            {
                "id": tx.transaction_id or f"TX_{index}",
                "source": tx.sender_id,
                "target": tx.receiver_id,
                "amount": float(tx.amount),
                "timestamp": tx.timestamp.isoformat(),
                "transaction_type": tx.transaction_type,
            }
        )

    return {"nodes": nodes, "edges": edges}
