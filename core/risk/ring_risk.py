"""
Ring Risk Computation.

Ring risk = mean final suspicion score of the ring's members, rounded to one
decimal. Members without a computed score are left out of both the sum and
the count.
"""

from typing import Dict, List, Sequence


def compute_ring_risk(members: Sequence[str], final_scores: Dict[str, float]) -> float:
    member_scores = [final_scores[m] for m in members if m in final_scores]
    if not member_scores:
        return 0.0
    return round(sum(member_scores) / len(member_scores), 1)


def finalize_ring_risks(rings: List, final_scores: Dict[str, float]) -> List:
    """Set risk_score on every ring from its members' final scores."""
    for ring in rings:
        ring.risk_score = compute_ring_risk(ring.member_accounts, final_scores)
    return rings
