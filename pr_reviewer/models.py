"""Data models for reviewer election."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Tuple

APPROVED = 'APPROVED'
CHANGES_REQUESTED = 'CHANGES_REQUESTED'
COMMENTED = 'COMMENTED'
DISMISSED = 'DISMISSED'

BOT_SUFFIX = '[bot]'


def is_bot_identity(login: str) -> bool:
    """Check whether a login belongs to a bot account (e.g. 'dependabot[bot]')."""
    return bool(login) and login.endswith(BOT_SUFFIX)


def parse_timestamp(value) -> Optional[datetime]:
    """Parse a GitHub ISO-8601 timestamp into an aware datetime.

    Args:
        value: Timestamp string (e.g. '2024-05-01T12:00:00Z'), date, datetime or None

    Returns:
        Timezone-aware datetime, or None if the value is empty
    """
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        # Plain dates (e.g. hand-written YAML) mean midnight UTC
        parsed = datetime(value.year, value.month, value.day)
    else:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class ReviewEvent:
    """A single review submitted on a pull request."""
    author: str
    state: str
    submitted_at: Optional[datetime] = None


@dataclass(frozen=True)
class PullRequest:
    """A closed pull request with its review history."""
    number: int
    author: str
    closed_at: Optional[datetime] = None
    reviews: Tuple[ReviewEvent, ...] = ()
    review_requests: Tuple[str, ...] = ()
    title: str = ''


@dataclass(frozen=True)
class OpenPullRequest:
    """An open pull request and the reviewers it is still waiting on."""
    number: int
    author: str
    review_requests: Tuple[str, ...] = ()
    title: str = ''
    state: str = 'OPEN'
    url: str = ''


@dataclass
class ReviewerStats:
    """Review activity for a single reviewer.

    ``None`` for the ``days_since_*`` fields means the reviewer never
    reviewed (or approved) within the analyzed history.
    """
    total_reviews: int = 0
    total_approvals: int = 0
    last_review_date: Optional[datetime] = None
    last_approval_date: Optional[datetime] = None
    days_since_last_review: Optional[int] = None
    days_since_last_approval: Optional[int] = None
    pending_reviews: int = 0


@dataclass(frozen=True)
class ScoreBreakdown:
    """Individual additive terms of a reviewer score."""
    approval_recency: float = 0.0
    review_recency: float = 0.0
    balance: float = 0.0
    workload: float = 0.0
    overload: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            'approval_recency': self.approval_recency,
            'review_recency': self.review_recency,
            'balance': self.balance,
            'workload': self.workload,
            'overload': self.overload,
        }


@dataclass(frozen=True)
class ScoreResult:
    """Score of one eligible reviewer, highest score is picked first."""
    reviewer: str
    score: float
    stats: ReviewerStats
    breakdown: ScoreBreakdown


@dataclass(frozen=True)
class Weights:
    """Weights of the scoring terms. All values are expected to be non-negative."""
    recency: float = 1.0
    balance: float = 2.0
    approvals: float = 3.0
    workload: float = 1.0

    def as_dict(self) -> Dict[str, float]:
        return {
            'recency': self.recency,
            'balance': self.balance,
            'approvals': self.approvals,
            'workload': self.workload,
        }


@dataclass(frozen=True)
class SelectorConfig:
    """Settings the selector needs for one election."""
    team: Tuple[str, ...] = ()
    excluded: Tuple[str, ...] = ()
    max_pending_reviews: int = 3
    weights: Weights = field(default_factory=Weights)
    lookback_prs: Optional[int] = None

    @classmethod
    def create(cls, team: List[str] = None, excluded: List[str] = None,
               max_pending_reviews: int = 3, weights: Weights = None,
               lookback_prs: int = None) -> 'SelectorConfig':
        """Build a config from plain lists."""
        return cls(
            team=tuple(team or ()),
            excluded=tuple(excluded or ()),
            max_pending_reviews=max_pending_reviews,
            weights=weights or Weights(),
            lookback_prs=lookback_prs,
        )
