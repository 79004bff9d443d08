"""
Shared fixtures for the test suite
"""

from datetime import datetime, timedelta, timezone

import pytest

from pr_reviewer.models import OpenPullRequest, PullRequest, ReviewEvent

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    """Timestamp N days before the fixed reference time."""
    return NOW - timedelta(days=days)


def make_pr(number, author, closed_days_ago, reviews=(), review_requests=()):
    """Build a closed PullRequest from (reviewer, state, days_ago) tuples."""
    return PullRequest(
        number=number,
        author=author,
        closed_at=days_ago(closed_days_ago),
        reviews=tuple(
            ReviewEvent(author=reviewer, state=state,
                        submitted_at=days_ago(submitted) if submitted is not None else None)
            for reviewer, state, submitted in reviews
        ),
        review_requests=tuple(review_requests),
    )


def make_open_pr(number, author, review_requests=()):
    return OpenPullRequest(number=number, author=author, review_requests=tuple(review_requests))


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def team():
    return ['alice', 'bob', 'charlie', 'david']


@pytest.fixture
def pr_history():
    """Three closed PRs: bob approved two, alice one, charlie only commented."""
    return [
        make_pr(3, 'alice', 1, reviews=[('bob', 'APPROVED', 1)]),
        make_pr(2, 'bob', 3, reviews=[('charlie', 'COMMENTED', 3), ('alice', 'APPROVED', 3)]),
        make_pr(1, 'charlie', 5, reviews=[('bob', 'APPROVED', 5)]),
    ]


@pytest.fixture
def open_prs():
    """One open PR waiting for bob."""
    return [make_open_pr(4, 'charlie', review_requests=['bob'])]
