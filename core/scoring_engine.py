"""
Suspicion Scoring Engine.

Turns detector output into rings and per-account suspicion scores.

Fixed contributions per ring membership:
  +40  cycle member            (pattern cycle_length_<N>)
  +25  fan-in member           (pattern fan_in)
  +25  fan-out member          (pattern fan_out)
  +15  shell chain member      (pattern shell_layer)
  +5   high velocity           (pattern high_velocity, no ring)

Rings are numbered RING_001, RING_002, … in generation order: cycles, then
fan-in, then fan-out, then shell. The counter belongs to a single run.

Final score = raw / SCORE_REFERENCE_MAX × 100, rounded to one decimal.
SCORE_REFERENCE_MAX is a fixed ceiling, so overlapping patterns can push the
score past 100; CLAMP_SUSPICION_SCORES (default on) caps it at 100.

Time Complexity: O(V + R × M), R = rings, M = ring size
Memory: O(V + R)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from app.config import (
    CLAMP_SUSPICION_SCORES,
    HIGH_VELOCITY_MIN_TRANSACTIONS,
    HIGH_VELOCITY_RATE_PER_HOUR,
    SCORE_CYCLE,
    SCORE_FAN_IN,
    SCORE_FAN_OUT,
    SCORE_HIGH_VELOCITY,
    SCORE_REFERENCE_MAX,
    SCORE_SHELL,
)
from core.graph.graph_builder import AccountNode, TransactionGraph
from core.output.graph_data import build_graph_data
from core.output.json_formatter import build_suspicious_accounts, format_output
from core.output.summary_builder import build_summary
from core.risk.ring_risk import finalize_ring_risks
from utils.time_utils import get_duration_hours

logger = logging.getLogger(__name__)


@dataclass
class Ring:
    ring_id: str
    member_accounts: List[str]
    pattern_type: str
    risk_score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ring_id": self.ring_id,
            "member_accounts": list(self.member_accounts),
            "pattern_type": self.pattern_type,
            "risk_score": self.risk_score,
        }


@dataclass
class AccountScore:
    raw_score: float = 0.0
    # dicts used as insertion-ordered sets
    detected_patterns: Dict[str, None] = field(default_factory=dict)
    ring_ids: Dict[str, None] = field(default_factory=dict)

    def add(self, contribution: float, pattern: str, ring_id: Optional[str] = None) -> None:
        self.raw_score += contribution
        self.detected_patterns.setdefault(pattern, None)
        if ring_id is not None:
            self.ring_ids.setdefault(ring_id, None)

    @property
    def primary_ring_id(self) -> Optional[str]:
        return next(iter(self.ring_ids), None)


def format_ring_id(number: int) -> str:
    return f"RING_{number:03d}"


def _members(item: Any) -> List[str]:
    if isinstance(item, dict):
        return list(item["member_accounts"])
    return list(item)


def assemble_rings(
    cycles: List[List[str]],
    fan_in_rings: List[Dict[str, Any]],
    fan_out_rings: List[Dict[str, Any]],
    shell_rings: List[Dict[str, Any]],
    scores: Dict[str, AccountScore],
) -> List[Ring]:
    """
    Allocate ring ids and add fixed per-membership contributions.

    Mutates `scores` in place and returns the rings in generation order.
    """
    weights = {
        "cycle": SCORE_CYCLE,
        "fan_in": SCORE_FAN_IN,
        "fan_out": SCORE_FAN_OUT,
        "shell": SCORE_SHELL,
    }
    groups = [
        ("cycle", cycles, lambda members: f"cycle_length_{len(members)}"),
        ("fan_in", fan_in_rings, lambda members: "fan_in"),
        ("fan_out", fan_out_rings, lambda members: "fan_out"),
        ("shell", shell_rings, lambda members: "shell_layer"),
    ]

    rings: List[Ring] = []
    next_number = 1
    for pattern_type, items, label_for in groups:
        for item in items:
            members = _members(item)
            ring_id = format_ring_id(next_number)
            next_number += 1

            label = label_for(members)
            for account in members:
                scores.setdefault(account, AccountScore()).add(
                    weights[pattern_type], label, ring_id
                )
            rings.append(Ring(ring_id, members, pattern_type))

    return rings


def is_high_velocity(
    node: AccountNode,
    min_transactions: int = HIGH_VELOCITY_MIN_TRANSACTIONS,
    rate_per_hour: float = HIGH_VELOCITY_RATE_PER_HOUR,
) -> bool:
    duration_hours = get_duration_hours(node.first_tx, node.last_tx)
    if duration_hours <= 0:
        return node.transaction_count > min_transactions
    return node.transaction_count / max(duration_hours, 1) > rate_per_hour


def apply_high_velocity(
    graph: TransactionGraph,
    scores: Dict[str, AccountScore],
    contribution: float = SCORE_HIGH_VELOCITY,
) -> int:
    """Add the high-velocity bonus; returns the number of accounts flagged."""
    flagged = 0
    for account_id, node in graph.accounts.items():
        if is_high_velocity(node):
            scores.setdefault(account_id, AccountScore()).add(contribution, "high_velocity")
            flagged += 1
    return flagged


def compute_scores(
    graph: TransactionGraph,
    cycles: List[List[str]],
    fan_in_rings: List[Dict[str, Any]],
    fan_out_rings: List[Dict[str, Any]],
    shell_rings: List[Dict[str, Any]],
) -> Tuple[Dict[str, AccountScore], List[Ring]]:
    """
    Compute raw suspicion scores and assemble rings.

    Returns:
        ({account_id: AccountScore}, rings)
    """
    scores: Dict[str, AccountScore] = {}
    rings = assemble_rings(cycles, fan_in_rings, fan_out_rings, shell_rings, scores)
    flagged = apply_high_velocity(graph, scores)
    logger.debug("Scoring: %d rings, %d high-velocity accounts", len(rings), flagged)
    return scores, rings


def normalize_score(
    raw_score: float,
    reference_max: float = SCORE_REFERENCE_MAX,
    clamp: bool = CLAMP_SUSPICION_SCORES,
) -> float:
    score = raw_score / reference_max * 100
    if clamp:
        score = min(100.0, score)
    return round(score, 1)


def normalize_scores(
    scores: Dict[str, AccountScore],
    reference_max: float = SCORE_REFERENCE_MAX,
    clamp: bool = CLAMP_SUSPICION_SCORES,
) -> Dict[str, float]:
    """Final suspicion score for every account with a nonzero raw score."""
    return {
        account_id: normalize_score(data.raw_score, reference_max, clamp)
        for account_id, data in scores.items()
        if data.raw_score != 0
    }


class ScoringEngine:
    """Builds the final report from the graph and raw detector output."""

    def __init__(
        self,
        reference_max: float = SCORE_REFERENCE_MAX,
        clamp: bool = CLAMP_SUSPICION_SCORES,
    ):
        self.reference_max = reference_max
        self.clamp = clamp

    def run(
        self,
        graph: TransactionGraph,
        cycles: List[List[str]],
        fan_in_rings: List[Dict[str, Any]],
        fan_out_rings: List[Dict[str, Any]],
        shell_rings: List[Dict[str, Any]],
        processing_time_seconds: float = 0.0,
    ) -> Dict[str, Any]:
        scores, rings = compute_scores(
            graph, cycles, fan_in_rings, fan_out_rings, shell_rings
        )
        final_scores = normalize_scores(scores, self.reference_max, self.clamp)

        suspicious_accounts = build_suspicious_accounts(scores, final_scores)
        finalize_ring_risks(rings, final_scores)

        summary = build_summary(
            total_accounts=graph.number_of_accounts,
            suspicious_count=len(suspicious_accounts),
            rings_count=len(rings),
            processing_time=processing_time_seconds,
        )
        graph_data = build_graph_data(graph, scores, final_scores)

        return format_output(
            suspicious_accounts=suspicious_accounts,
            rings=[ring.to_dict() for ring in rings],
            summary=summary,
            graph_data=graph_data,
        )
