"""Reviewer selection: eligibility, scoring and ranking."""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Union

from ..models import (
    OpenPullRequest,
    PullRequest,
    ReviewerStats,
    ScoreResult,
    SelectorConfig,
    is_bot_identity,
)
from .aggregation import aggregate_stats, recent_history
from .eligibility import candidate_pool, eligible_reviewers
from .scoring import average_approvals, average_reviews, score_reviewer


class ReviewerSelector:
    """Ranks team members by how much they should review next.

    The selector works on immutable snapshots of PR data. The statistics
    table is built once per instance; selection never modifies it.

    Usage:
        selector = ReviewerSelector(history, open_prs, config.to_selector_config(),
                                    is_unavailable=availability.is_unavailable)
        result = selector.select_reviewer(author='alice')
        if result is None:
            ...  # no eligible reviewers
    """

    def __init__(
        self,
        pr_history: Sequence[PullRequest],
        open_prs: Sequence[OpenPullRequest],
        config: SelectorConfig,
        is_unavailable: Callable[[str], bool] = None,
        is_bot: Callable[[str], bool] = is_bot_identity,
        now: datetime = None
    ):
        """Initialize the selector.

        Args:
            pr_history: Closed pull requests with reviews
            open_prs: Currently open pull requests
            config: Selector configuration
            is_unavailable: Predicate for members marked unavailable
            is_bot: Predicate identifying bot accounts
            now: Reference time for recency (defaults to current UTC time)
        """
        self.config = config
        self.is_unavailable = is_unavailable or (lambda login: False)
        self.is_bot = is_bot
        self.now = now or datetime.now(timezone.utc)

        self.pr_history = recent_history(pr_history, config.lookback_prs)
        self.open_prs = list(open_prs)

        self._stats = aggregate_stats(
            self.pr_history, self.open_prs, config.team, now=self.now, is_bot=is_bot
        )

    def get_stats(self) -> Dict[str, ReviewerStats]:
        """Return a copy of the full statistics table."""
        return {login: replace(entry) for login, entry in self._stats.items()}

    def _pool(self) -> List[str]:
        return [login for login in candidate_pool(self.config.team, self._stats)
                if not self.is_bot(login)]

    def _balance_pool(self, author: Optional[str] = None) -> List[str]:
        """Identities the averages are taken over.

        The configured team when there is one, otherwise the reviewers
        eligible for a PR by author.
        """
        if self.config.team:
            return self._pool()
        return self.get_eligible_reviewers(author)

    def get_average_approvals(self, author: Optional[str] = None) -> float:
        """Mean approval count across the team or the eligible reviewers."""
        return average_approvals(self._stats, self._balance_pool(author))

    def get_average_reviews(self, author: Optional[str] = None) -> float:
        """Mean review count across the team or the eligible reviewers."""
        return average_reviews(self._stats, self._balance_pool(author))

    def get_eligible_reviewers(self, author: Optional[str] = None) -> List[str]:
        """Return reviewers who may be elected for a PR by author."""
        return eligible_reviewers(
            candidate_pool(self.config.team, self._stats),
            author=author,
            excluded=self.config.excluded,
            is_unavailable=self.is_unavailable,
            is_bot=self.is_bot,
        )

    def rank_reviewers(self, author: Optional[str] = None) -> List[ScoreResult]:
        """Score every eligible reviewer and sort them, best first.

        Equal scores keep the order of the candidate pool.
        """
        eligible = self.get_eligible_reviewers(author)
        if self.config.team:
            avg_approvals = average_approvals(self._stats, self._pool())
        else:
            avg_approvals = average_approvals(self._stats, eligible)

        results = [
            score_reviewer(
                login,
                replace(self._stats.get(login) or ReviewerStats()),
                avg_approvals,
                self.config.weights,
                self.config.max_pending_reviews,
            )
            for login in eligible
        ]

        # sorted() is stable with reverse=True as well
        return sorted(results, key=lambda result: result.score, reverse=True)

    def select_reviewer(self, author: Optional[str] = None,
                        count: int = 1) -> Union[ScoreResult, List[ScoreResult], None]:
        """Select the best reviewer, or the top `count` reviewers.

        Args:
            author: PR author (excluded from the result); None for the general queue
            count: Number of reviewers to return

        Returns:
            A single ScoreResult when count is 1, a list of at most count
            results otherwise, or None when nobody is eligible

        Raises:
            ValueError: If count is less than 1
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")

        ranked = self.rank_reviewers(author)

        if not ranked:
            logging.info("No eligible reviewers found")
            return None

        logging.debug(f"Ranked {len(ranked)} eligible reviewer(s), top: {ranked[0].reviewer} ({ranked[0].score:.1f})")

        if count == 1:
            return ranked[0]
        return ranked[:count]

    def get_reviewer_queue(self, author: Optional[str] = None,
                           count: int = 5) -> Optional[List[ScoreResult]]:
        """Return the upcoming reviewers as a list, regardless of count."""
        ranked = self.select_reviewer(author, count)
        if isinstance(ranked, ScoreResult):
            return [ranked]
        return ranked

    def calculate_review_stats(self) -> Dict[str, ReviewerStats]:
        """Statistics for the team (or everyone known when no team is configured)."""
        return {
            login: replace(self._stats[login])
            for login in self._pool()
            if login in self._stats
        }
