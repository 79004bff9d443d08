"""Command implementations for the pr-reviewer CLI."""

from .elect import elect
from .init import init
from .mine import mine
from .next import next_reviewers
from .stats import stats
from .unavailable import unavailable
from .version import version

__all__ = [
    'elect',
    'init',
    'mine',
    'next_reviewers',
    'stats',
    'unavailable',
    'version',
]
