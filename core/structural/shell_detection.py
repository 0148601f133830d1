"""
Shell Chain Detection Module.

Finds relay chains of 4–6 accounts in which every intermediate account is a
low-activity shell: its total transaction count (sent + received) across the
batch lies in [SHELL_MIN_TRANSACTIONS, SHELL_MAX_TRANSACTIONS].

Every qualifying path reached by the depth-first walk is recorded, at every
length from SHELL_MIN_CHAIN_LENGTH up to SHELL_MAX_CHAIN_LENGTH. Chains are then
deduplicated on their sorted member set, keeping the first one discovered.

Time Complexity: O(V × d^L) worst case, L = SHELL_MAX_CHAIN_LENGTH
Memory: O(chains × chain_length)
"""

import logging
from typing import Any, Dict, List

from app.config import (
    SHELL_MAX_CHAIN_LENGTH,
    SHELL_MAX_TRANSACTIONS,
    SHELL_MIN_CHAIN_LENGTH,
    SHELL_MIN_TRANSACTIONS,
)
from core.graph.graph_builder import TransactionGraph
from core.structural.cycle_detection import dedupe_by_members

logger = logging.getLogger(__name__)


def is_shell_account(
    graph: TransactionGraph,
    account_id: str,
    min_transactions: int = SHELL_MIN_TRANSACTIONS,
    max_transactions: int = SHELL_MAX_TRANSACTIONS,
) -> bool:
    if account_id not in graph.accounts:
        return False
    return min_transactions <= graph.transaction_count(account_id) <= max_transactions


def detect_shell_chains(
    graph: TransactionGraph,
    min_length: int = SHELL_MIN_CHAIN_LENGTH,
    max_length: int = SHELL_MAX_CHAIN_LENGTH,
) -> List[Dict[str, Any]]:
    """
    Detect shell relay chains.

    Returns:
        List of rings {"member_accounts": [entry, *intermediates, exit]}.
    """
    found: List[List[str]] = []

    def _walk(current: str, path: List[str]) -> None:
        if len(path) >= max_length:
            return
        for neighbor in graph.successors(current):
            if neighbor in path:
                continue
            new_path = path + [neighbor]
            if len(new_path) >= min_length:
                intermediates = new_path[1:-1]
                if all(is_shell_account(graph, n) for n in intermediates):
                    found.append(new_path)
            _walk(neighbor, new_path)

    for account in graph.accounts:
        _walk(account, [account])

    chains = dedupe_by_members(found)
    logger.debug("Shell detection: %d raw, %d unique", len(found), len(chains))
    return [{"member_accounts": chain} for chain in chains]
