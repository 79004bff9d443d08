"""Aggregation of pull request history into per-reviewer statistics."""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..models import (
    APPROVED,
    OpenPullRequest,
    PullRequest,
    ReviewerStats,
    is_bot_identity,
)


def recent_history(pr_history: Sequence[PullRequest], lookback_prs: Optional[int]) -> List[PullRequest]:
    """Keep only the most recently closed PRs.

    Args:
        pr_history: Closed pull requests in any order
        lookback_prs: Number of PRs to keep (None keeps everything)

    Returns:
        PRs sorted by close date, most recent first, limited to lookback_prs
    """
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    ordered = sorted(pr_history, key=lambda pr: pr.closed_at or epoch, reverse=True)
    if lookback_prs is None:
        return ordered
    return ordered[:lookback_prs]


def days_since(date: Optional[datetime], now: datetime) -> Optional[int]:
    """Whole days between date and now, or None if date was never set."""
    if date is None:
        return None
    return max(0, (now - date).days)


def count_pending_reviews(open_prs: Iterable[OpenPullRequest],
                          is_bot: Callable[[str], bool] = is_bot_identity) -> Dict[str, int]:
    """Count outstanding review requests per reviewer across open PRs."""
    pending = defaultdict(int)
    for pr in open_prs:
        for login in pr.review_requests:
            if login and not is_bot(login):
                pending[login] += 1
    return dict(pending)


def aggregate_stats(
    pr_history: Sequence[PullRequest],
    open_prs: Sequence[OpenPullRequest],
    team: Iterable[str],
    now: datetime = None,
    is_bot: Callable[[str], bool] = is_bot_identity
) -> Dict[str, ReviewerStats]:
    """Build the statistics table used for scoring.

    Every non-bot team member gets an entry even without any history.
    Reviewers outside the team are added when they show up in reviews or
    review requests of the history.

    Args:
        pr_history: Closed pull requests with their reviews
        open_prs: Currently open pull requests
        team: Configured team members
        now: Reference time for the day counters (defaults to current UTC time)
        is_bot: Predicate identifying bot accounts

    Returns:
        Dictionary mapping reviewer login to ReviewerStats
    """
    now = now or datetime.now(timezone.utc)
    stats: Dict[str, ReviewerStats] = {}

    for member in team:
        if member and not is_bot(member) and member not in stats:
            stats[member] = ReviewerStats()

    for pr in pr_history:
        for review in pr.reviews:
            reviewer = review.author
            if not reviewer or is_bot(reviewer):
                continue

            entry = stats.setdefault(reviewer, ReviewerStats())
            entry.total_reviews += 1

            review_date = review.submitted_at or pr.closed_at
            if review_date is not None:
                if entry.last_review_date is None or review_date > entry.last_review_date:
                    entry.last_review_date = review_date

            if review.state == APPROVED:
                entry.total_approvals += 1
                if review_date is not None:
                    if entry.last_approval_date is None or review_date > entry.last_approval_date:
                        entry.last_approval_date = review_date

        # Requested but never reviewed still makes a reviewer known
        for login in pr.review_requests:
            if login and not is_bot(login):
                stats.setdefault(login, ReviewerStats())

    pending = count_pending_reviews(open_prs, is_bot)
    for login, entry in stats.items():
        entry.days_since_last_review = days_since(entry.last_review_date, now)
        entry.days_since_last_approval = days_since(entry.last_approval_date, now)
        entry.pending_reviews = pending.get(login, 0)

    logging.debug(f"Aggregated stats for {len(stats)} reviewer(s) from {len(pr_history)} PR(s)")
    return stats
