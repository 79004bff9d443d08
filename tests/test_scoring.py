"""
Unit tests for reviewer scoring
"""

import pytest

from pr_reviewer.models import ReviewerStats, Weights
from pr_reviewer.selector.scoring import (
    OVERLOAD_PENALTY,
    RECENCY_CAP_DAYS,
    average_approvals,
    average_reviews,
    capped_days,
    score_reviewer,
)


def score(stats, avg=0.0, weights=None, max_pending=3):
    return score_reviewer('alice', stats, avg, weights or Weights(), max_pending)


class TestScoreFormula:
    """Test cases for the weighted score."""

    def test_breakdown_terms(self):
        """Test each additive term with default weights."""
        stats = ReviewerStats(total_approvals=1, days_since_last_approval=4,
                              days_since_last_review=2, pending_reviews=1)

        result = score(stats, avg=2.0)

        assert result.breakdown.approval_recency == 12.0   # 4 * 3
        assert result.breakdown.review_recency == 2.0      # 2 * 1
        assert result.breakdown.balance == 2.0             # (2 - 1) * 2
        assert result.breakdown.workload == -10.0          # 1 * 1 * 10
        assert result.breakdown.overload == 0
        assert result.score == pytest.approx(6.0)

    def test_score_is_sum_of_breakdown(self):
        stats = ReviewerStats(total_approvals=3, days_since_last_approval=10,
                              days_since_last_review=1, pending_reviews=4)

        result = score(stats, avg=1.5)

        assert result.score == pytest.approx(sum(result.breakdown.as_dict().values()))

    def test_result_carries_identity_and_stats(self):
        stats = ReviewerStats(total_reviews=5)
        result = score_reviewer('bob', stats, 0.0, Weights(), 3)
        assert result.reviewer == 'bob'
        assert result.stats is stats

    def test_below_average_gets_bonus(self):
        assert score(ReviewerStats(total_approvals=0), avg=2.0).breakdown.balance > 0

    def test_above_average_gets_penalty(self):
        assert score(ReviewerStats(total_approvals=4), avg=2.0).breakdown.balance < 0

    def test_custom_weights(self):
        stats = ReviewerStats(days_since_last_approval=5, days_since_last_review=5)
        weights = Weights(recency=0.0, balance=0.0, approvals=1.0, workload=0.0)
        assert score(stats, weights=weights).score == 5.0


class TestRecencyCap:
    """Test cases for the 30-day recency ceiling."""

    def test_capped_days(self):
        assert capped_days(None) == RECENCY_CAP_DAYS
        assert capped_days(400) == RECENCY_CAP_DAYS
        assert capped_days(12) == 12

    def test_never_approved_equals_thirty_days(self):
        never = score(ReviewerStats(days_since_last_approval=None))
        thirty = score(ReviewerStats(days_since_last_approval=30))
        assert never.breakdown.approval_recency == thirty.breakdown.approval_recency

    def test_never_reviewed_equals_thirty_days(self):
        never = score(ReviewerStats(days_since_last_review=None))
        thirty = score(ReviewerStats(days_since_last_review=30))
        assert never.breakdown.review_recency == thirty.breakdown.review_recency

    def test_year_long_absence_scores_like_a_month(self):
        year = score(ReviewerStats(days_since_last_approval=365, days_since_last_review=365))
        month = score(ReviewerStats(days_since_last_approval=30, days_since_last_review=30))
        assert year.score == month.score

    def test_monotonic_in_days_since_last_approval(self):
        """Test that more days since the last approval never lowers the score."""
        previous = None
        for days in [0, 1, 5, 29, 30, 31, 100, None]:
            current = score(ReviewerStats(days_since_last_approval=days, days_since_last_review=3)).score
            if previous is not None:
                assert current >= previous
            previous = current


class TestOverload:
    """Test cases for the workload and overload penalties."""

    def test_penalty_at_threshold(self):
        result = score(ReviewerStats(pending_reviews=3), max_pending=3)
        assert result.breakdown.overload == -OVERLOAD_PENALTY

    def test_no_penalty_below_threshold(self):
        result = score(ReviewerStats(pending_reviews=2), max_pending=3)
        assert result.breakdown.overload == 0

    def test_overloaded_ranks_below_otherwise_equal_reviewer(self):
        busy = score(ReviewerStats(pending_reviews=3), max_pending=3)
        free = score(ReviewerStats(pending_reviews=2), max_pending=3)
        assert free.score > busy.score

    def test_overload_dominates_best_possible_terms(self):
        busy = score(ReviewerStats(pending_reviews=4), avg=5.0, max_pending=3)
        idle = score(ReviewerStats(total_approvals=5, days_since_last_approval=0,
                                   days_since_last_review=0, pending_reviews=2), avg=5.0, max_pending=3)
        assert idle.score > busy.score


class TestAverages:
    """Test cases for pool averages."""

    def test_average_approvals(self):
        stats = {'a': ReviewerStats(total_approvals=2), 'b': ReviewerStats(total_approvals=1)}
        assert average_approvals(stats, ['a', 'b']) == 1.5

    def test_unknown_members_count_as_zero(self):
        stats = {'a': ReviewerStats(total_approvals=2)}
        assert average_approvals(stats, ['a', 'b']) == 1.0

    def test_empty_pool(self):
        assert average_approvals({}, []) == 0.0
        assert average_reviews({}, []) == 0.0

    def test_average_reviews(self):
        stats = {'a': ReviewerStats(total_reviews=4), 'b': ReviewerStats(total_reviews=0)}
        assert average_reviews(stats, ['a', 'b']) == 2.0
