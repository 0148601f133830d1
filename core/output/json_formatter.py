"""
JSON Output Formatter.

Produces the report structure:
{
    "suspicious_accounts": [...],
    "fraud_rings": [...],
    "summary": {...},
    "graph_data": {"nodes": [...], "edges": [...]}
}

Time Complexity: O(V log V) for sorting
Memory: O(V + R)
"""

from typing import Any, Dict, List


def build_suspicious_accounts(
    scores: Dict[str, Any],
    final_scores: Dict[str, float],
) -> List[Dict[str, Any]]:
    """Scored accounts, highest suspicion first; ties keep encounter order."""
    suspicious_accounts: List[Dict[str, Any]] = []
    for account_id, data in scores.items():
        if account_id not in final_scores:
            continue
        suspicious_accounts.append(
            {
                "account_id": account_id,
                "suspicion_score": final_scores[account_id],
                "detected_patterns": list(data.detected_patterns),
                "ring_id": data.primary_ring_id,
            }
        )

    # sorted() is stable, also with reverse=True
    return sorted(suspicious_accounts, key=lambda x: x["suspicion_score"], reverse=True)


def format_output(
    suspicious_accounts: List[Dict[str, Any]],
    rings: List[Dict[str, Any]],
    summary: Dict[str, Any],
    graph_data: Dict[str, Any],
) -> Dict[str, Any]:
    """Build the final JSON-compatible output dict."""
    return {
        "suspicious_accounts": suspicious_accounts,
        "fraud_rings": rings,
        "summary": summary,
        "graph_data": graph_data,
    }
