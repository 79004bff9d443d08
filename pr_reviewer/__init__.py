"""Fair code reviewer election for GitHub pull requests."""

__version__ = '1.0.0'

from .models import (
    PullRequest,
    ReviewEvent,
    OpenPullRequest,
    ReviewerStats,
    ScoreBreakdown,
    ScoreResult,
    SelectorConfig,
    Weights,
    is_bot_identity,
)
from .availability import AvailabilityStore
from .config import ReviewConfig
from .selector import ReviewerSelector, aggregate_stats, eligible_reviewers, score_reviewer
from .api_client import GitHubAPIClient
from .cache import ReviewCache
from .github import GitHubDataSource
from .output import OutputFormatter

__all__ = [
    'PullRequest',
    'ReviewEvent',
    'OpenPullRequest',
    'ReviewerStats',
    'ScoreBreakdown',
    'ScoreResult',
    'SelectorConfig',
    'Weights',
    'is_bot_identity',
    'AvailabilityStore',
    'ReviewConfig',
    'ReviewerSelector',
    'aggregate_stats',
    'eligible_reviewers',
    'score_reviewer',
    'GitHubAPIClient',
    'ReviewCache',
    'GitHubDataSource',
    'OutputFormatter',
]
