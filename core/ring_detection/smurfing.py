"""
Smurfing Detection Module — Fan-In / Fan-Out Structuring.

Detects bursts within a sliding window (default 72 h):

Fan-In (Aggregator):
  - ≥10 distinct senders → 1 receiver within the window

Fan-Out (Disperser):
  - 1 sender → ≥10 distinct receivers within the window

Transactions are sorted by timestamp, then grouped per hub. For each hub the
window is anchored at every transaction in turn and the scan stops at the
first transaction past the window end. Only the first qualifying window is
reported, so a hub yields at most one fan-in and one fan-out ring.

Time Complexity: O(n log n + n × k), k = transactions per window
Memory: O(n) for the sorted frame
"""

import logging
from typing import Any, Dict, List, Tuple

import pandas as pd

from app.config import SMURFING_MIN_COUNTERPARTIES, SMURFING_WINDOW_HOURS
from core.graph.graph_builder import TransactionGraph

logger = logging.getLogger(__name__)


def _sorted_transactions(graph: TransactionGraph) -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "sender_id": [tx.sender_id for tx in graph.transactions],
            "receiver_id": [tx.receiver_id for tx in graph.transactions],
            "timestamp": [tx.timestamp for tx in graph.transactions],
        },
        columns=["sender_id", "receiver_id", "timestamp"],
    )
    # mergesort is stable: equal timestamps keep input order
    return df.sort_values("timestamp", kind="mergesort")


def _scan_hubs(
    df: pd.DataFrame,
    hub_col: str,
    counterparty_col: str,
    window_hours: float,
    min_counterparties: int,
) -> List[Dict[str, Any]]:
    window_delta = pd.Timedelta(hours=window_hours)
    rings: List[Dict[str, Any]] = []

    for hub, group in df.groupby(hub_col, sort=False):
        # A self-transfer does not add a counterparty.
        others = group[group[counterparty_col] != hub]
        if others[counterparty_col].nunique() < min_counterparties:
            continue

        timestamps = list(others["timestamp"])
        counterparties = list(others[counterparty_col])

        for i in range(len(timestamps)):
            window_end = timestamps[i] + window_delta
            window_parties: Dict[str, None] = {}
            for j in range(i, len(timestamps)):
                if timestamps[j] > window_end:
                    break
                window_parties.setdefault(counterparties[j], None)

            if len(window_parties) >= min_counterparties:
                rings.append({"member_accounts": [str(hub), *window_parties]})
                break

    return rings


def detect_smurfing(
    graph: TransactionGraph,
    window_hours: float = SMURFING_WINDOW_HOURS,
    min_counterparties: int = SMURFING_MIN_COUNTERPARTIES,
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Detect smurfing patterns (fan-in aggregators and fan-out dispersers).

    Returns:
        (fan_in_rings, fan_out_rings)
    """
    df = _sorted_transactions(graph)
    fan_in = _scan_hubs(df, "receiver_id", "sender_id", window_hours, min_counterparties)
    fan_out = _scan_hubs(df, "sender_id", "receiver_id", window_hours, min_counterparties)
    logger.debug("Smurfing detection: %d fan-in, %d fan-out", len(fan_in), len(fan_out))
    return fan_in, fan_out
