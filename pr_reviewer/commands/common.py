"""Helpers shared by the CLI commands."""

import sys
from typing import List, Sequence

from ..api_client import GitHubAPIClient
from ..cache import ReviewCache
from ..config import ReviewConfig
from ..github import GitHubDataSource
from ..models import OpenPullRequest, PullRequest
from ..output import OutputFormatter
from ..selector import ReviewerSelector


def load_config(args) -> ReviewConfig:
    """Load the configuration file named on the command line (or the default)."""
    return ReviewConfig(getattr(args, 'config', None))


def build_data_source(args) -> GitHubDataSource:
    """Create the GitHub data source for the repository given on the command line."""
    cache = ReviewCache(enabled=not getattr(args, 'no_cache', False))
    return GitHubDataSource(
        repo=getattr(args, 'repo', None),
        client=GitHubAPIClient(),
        cache=cache,
    )


def build_selector(config: ReviewConfig, pr_history: Sequence[PullRequest],
                   open_prs: Sequence[OpenPullRequest]) -> ReviewerSelector:
    """Create a selector from validated configuration and fetched PR data."""
    availability = config.availability
    return ReviewerSelector(
        pr_history,
        open_prs,
        config.to_selector_config(),
        is_unavailable=availability.is_unavailable,
    )


def formatter_for(config: ReviewConfig) -> OutputFormatter:
    return OutputFormatter(max_pending_reviews=config.get('max_pending_reviews') or 3,
                           use_color=sys.stdout.isatty())


def confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question on the terminal."""
    hint = "[Y/n]" if default else "[y/N]"
    answer = input(f"{message} {hint}: ").strip().lower()
    if not answer:
        return default
    return answer in ('y', 'yes')


def ask(message: str, default: str = '') -> str:
    """Ask for free text, returning the default on empty input."""
    suffix = f" [default: {default}]" if default != '' else ''
    answer = input(f"{message}{suffix}: ").strip()
    return answer or default


def ask_number(message: str, default: float, minimum: float = 0,
               maximum: float = None, integer: bool = True):
    """Ask for a number until a valid one is entered."""
    while True:
        answer = ask(message, str(default))
        try:
            value = int(answer) if integer else float(answer)
        except ValueError:
            print(f"Please enter a {'whole ' if integer else ''}number")
            continue

        if value < minimum or (maximum is not None and value > maximum):
            limit = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
            print(f"Please enter a value {limit}")
            continue
        return value


def parse_logins(text: str) -> List[str]:
    """Split a comma-separated list of logins, dropping '@' and blanks."""
    return [login.strip().lstrip('@') for login in text.split(',') if login.strip().lstrip('@')]
