"""Reviewer statistics, scoring and selection."""

from .aggregation import aggregate_stats, count_pending_reviews, days_since, recent_history
from .core import ReviewerSelector
from .eligibility import candidate_pool, eligible_reviewers
from .scoring import (
    OVERLOAD_PENALTY,
    RECENCY_CAP_DAYS,
    WORKLOAD_MULTIPLIER,
    average_approvals,
    average_reviews,
    score_reviewer,
)

__all__ = [
    'ReviewerSelector',
    'aggregate_stats',
    'count_pending_reviews',
    'days_since',
    'recent_history',
    'candidate_pool',
    'eligible_reviewers',
    'score_reviewer',
    'average_approvals',
    'average_reviews',
    'RECENCY_CAP_DAYS',
    'WORKLOAD_MULTIPLIER',
    'OVERLOAD_PENALTY',
]
