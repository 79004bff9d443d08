"""Scoring of reviewer candidates.

A higher score means the reviewer should be picked sooner. The score is the
sum of five terms:

- approval recency: days since the last approval, capped at 30
- review recency: days since the last review of any kind, capped at 30
- balance: how far the reviewer's approval count is below the team average
- workload: penalty for each open review request
- overload: flat penalty once pending requests reach the configured maximum

Reviewers who never reviewed count as inactive for the full 30 days, not
longer, so a member who was away for months does not monopolize the queue.
"""

from typing import Dict, Iterable, Optional

from ..models import ReviewerStats, ScoreBreakdown, ScoreResult, Weights

RECENCY_CAP_DAYS = 30
WORKLOAD_MULTIPLIER = 10
OVERLOAD_PENALTY = 1000


def capped_days(days: Optional[int], cap: int = RECENCY_CAP_DAYS) -> int:
    """Cap a day counter; None (never) counts as the cap."""
    if days is None:
        return cap
    return min(days, cap)


def average_of(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for no values."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def average_approvals(stats: Dict[str, ReviewerStats], pool: Iterable[str]) -> float:
    """Mean approval count across the pool (unknown logins count as zero)."""
    return average_of(
        stats[login].total_approvals if login in stats else 0
        for login in pool
    )


def average_reviews(stats: Dict[str, ReviewerStats], pool: Iterable[str]) -> float:
    """Mean review count across the pool (unknown logins count as zero)."""
    return average_of(
        stats[login].total_reviews if login in stats else 0
        for login in pool
    )


def score_reviewer(
    identity: str,
    stats: ReviewerStats,
    avg_approvals: float,
    weights: Weights,
    max_pending_reviews: int
) -> ScoreResult:
    """Compute the score of a single reviewer.

    Weights are not validated here; negative weights yield consistent but
    meaningless scores.

    Args:
        identity: Reviewer login
        stats: Aggregated statistics of the reviewer
        avg_approvals: Mean approval count across the candidate pool
        weights: Scoring weights
        max_pending_reviews: Pending request count that triggers the overload penalty

    Returns:
        ScoreResult with total score and per-term breakdown
    """
    pending = stats.pending_reviews

    breakdown = ScoreBreakdown(
        approval_recency=capped_days(stats.days_since_last_approval) * weights.approvals,
        review_recency=capped_days(stats.days_since_last_review) * weights.recency,
        balance=(avg_approvals - stats.total_approvals) * weights.balance,
        workload=-pending * weights.workload * WORKLOAD_MULTIPLIER,
        overload=-OVERLOAD_PENALTY if pending >= max_pending_reviews else 0,
    )

    score = (breakdown.approval_recency + breakdown.review_recency + breakdown.balance
             + breakdown.workload + breakdown.overload)

    return ScoreResult(reviewer=identity, score=score, stats=stats, breakdown=breakdown)
