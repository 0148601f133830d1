"""
Cycle Detection Module — Circular Fund Routing.

Finds simple directed cycles of 3–6 accounts (money returning to its origin).

Every account is used as a start node for a depth-first walk over outgoing
transactions. The walk never revisits an account already on the current path
and stops extending once the path holds MAX_CYCLE_LENGTH accounts, so it always
terminates.

Cycles are deduplicated on their sorted member set: rotations of the same cycle,
and distinct orderings over the same accounts, collapse into the first one
discovered. Scoring only consumes membership.

Time Complexity: O(V × d^L) worst case, d = out-degree, L = MAX_CYCLE_LENGTH
Memory: O(C × L) for discovered cycles
"""

import logging
from typing import Dict, List, Tuple

from app.config import MAX_CYCLE_LENGTH, MIN_CYCLE_LENGTH
from core.graph.graph_builder import TransactionGraph

logger = logging.getLogger(__name__)


def canonical_key(members: List[str]) -> Tuple[str, ...]:
    """Order-insensitive key for a group of accounts."""
    return tuple(sorted(members))


def dedupe_by_members(groups: List[List[str]]) -> List[List[str]]:
    """Keep the first group seen for each distinct member set."""
    unique: Dict[Tuple[str, ...], List[str]] = {}
    for group in groups:
        unique.setdefault(canonical_key(group), group)
    return list(unique.values())


def detect_cycles(
    graph: TransactionGraph,
    min_length: int = MIN_CYCLE_LENGTH,
    max_length: int = MAX_CYCLE_LENGTH,
) -> List[List[str]]:
    """
    Detect bounded-length directed cycles.

    Returns:
        List of cycles, each a list of account ids in traversal order
        (the closing account is not repeated).
    """
    found: List[List[str]] = []

    def _walk(start: str, current: str, path: List[str]) -> None:
        path.append(current)
        for neighbor in graph.successors(current):
            if neighbor == start:
                if len(path) >= min_length:
                    found.append(list(path))
            elif neighbor not in path and len(path) < max_length:
                _walk(start, neighbor, path)
        path.pop()

    for account in graph.accounts:
        _walk(account, account, [])

    cycles = dedupe_by_members(found)
    logger.debug("Cycle detection: %d raw, %d unique", len(found), len(cycles))
    return cycles
