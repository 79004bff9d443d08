"""GitHub data source: pull request history, open PRs and reviewer assignment."""

import os
import re
import logging
import subprocess
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from concurrent.futures import ThreadPoolExecutor

import requests

from .api_client import GitHubAPIClient
from .cache import ReviewCache
from .exceptions import GitHubAPIError, RepositoryNotFoundError
from .models import (
    OpenPullRequest,
    PullRequest,
    ReviewEvent,
    is_bot_identity,
    parse_timestamp,
)

REMOTE_PATTERN = re.compile(r'github\.com[:/](?P<repo>[^/\s]+/[^/\s]+?)(?:\.git)?/?$')


def _login(user: Optional[Dict]) -> str:
    """Login of a GitHub user object (deleted users come back as null)."""
    return (user or {}).get('login') or ''


def parse_review(data: Dict) -> ReviewEvent:
    """Convert a review from the REST API into a ReviewEvent."""
    return ReviewEvent(
        author=_login(data.get('user')),
        state=data.get('state') or '',
        submitted_at=parse_timestamp(data.get('submitted_at')),
    )


def parse_pull_request(data: Dict, reviews: List[Dict]) -> PullRequest:
    """Convert a closed pull request and its reviews into a PullRequest."""
    return PullRequest(
        number=data['number'],
        author=_login(data.get('user')),
        closed_at=parse_timestamp(data.get('closed_at')),
        reviews=tuple(parse_review(review) for review in reviews or []),
        review_requests=tuple(_login(user) for user in data.get('requested_reviewers') or []),
        title=data.get('title', ''),
    )


def parse_open_pull_request(data: Dict) -> OpenPullRequest:
    """Convert a pull request from the REST API into an OpenPullRequest."""
    if data.get('merged_at') or data.get('merged'):
        state = 'MERGED'
    else:
        state = (data.get('state') or 'open').upper()

    return OpenPullRequest(
        number=data['number'],
        author=_login(data.get('user')),
        review_requests=tuple(_login(user) for user in data.get('requested_reviewers') or []),
        title=data.get('title', ''),
        state=state,
        url=data.get('html_url', ''),
    )


def parse_remote_url(remote_url: str) -> Optional[str]:
    """Extract 'owner/name' from an https or ssh GitHub remote URL."""
    match = REMOTE_PATTERN.search(remote_url.strip())
    return match.group('repo') if match else None


def _run_git(*args: str) -> str:
    result = subprocess.run(['git', *args], capture_output=True, text=True, check=True)
    return result.stdout.strip()


def detect_repository() -> str:
    """Determine the repository from GITHUB_REPO or the 'origin' remote.

    Raises:
        RepositoryNotFoundError: If no GitHub repository could be determined
    """
    repo = os.environ.get('GITHUB_REPO')
    if repo:
        return repo.strip()

    try:
        remote_url = _run_git('remote', 'get-url', 'origin')
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        raise RepositoryNotFoundError(
            "Not in a GitHub repository (set GITHUB_REPO=owner/name to override)"
        ) from e

    repo = parse_remote_url(remote_url)
    if not repo:
        raise RepositoryNotFoundError(f"Remote 'origin' is not a GitHub repository: {remote_url}")
    return repo


class GitHubDataSource:
    """Fetches pull request data for one repository."""

    def __init__(self, repo: str = None, client: GitHubAPIClient = None,
                 cache: ReviewCache = None, max_workers: int = 10):
        """Initialize the data source.

        Args:
            repo: Repository in 'owner/name' format (detected from git if None)
            client: API client (a new one is created if None)
            cache: Cache for reviews of closed PRs (disabled if None)
            max_workers: Parallel requests when fetching reviews
        """
        self.repo = repo or detect_repository()
        self.client = client or GitHubAPIClient()
        self.cache = cache if cache is not None else ReviewCache(enabled=False)
        self.max_workers = max_workers
        logging.info(f"Using repository {self.repo}")

    @property
    def pulls_path(self) -> str:
        return f"/repos/{self.repo}/pulls"

    def get_current_branch(self) -> Optional[str]:
        """Name of the checked out branch, None outside a git checkout."""
        try:
            return _run_git('branch', '--show-current') or None
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            logging.warning(f"Unable to get current branch: {e}")
            return None

    def get_reviews(self, pr_number: int, use_cache: bool = True) -> List[Dict]:
        """Fetch all reviews of a PR (cached for closed PRs)."""
        if use_cache:
            cached = self.cache.get_reviews(self.repo, pr_number)
            if cached is not None:
                return cached

        reviews = self.client.get_paginated(f"{self.pulls_path}/{pr_number}/reviews")

        if use_cache:
            self.cache.put_reviews(self.repo, pr_number, reviews)
        return reviews

    def get_pr_history(self, days: int = 30, limit: int = 200) -> List[PullRequest]:
        """Fetch PRs closed within the last N days, with their reviews.

        Args:
            days: Size of the lookback window in days
            limit: Maximum number of closed PRs to inspect

        Returns:
            List of PullRequest, most recently updated first
        """
        cutoff = datetime.now(timezone.utc) - timedelta(days=days)
        logging.info(f"Fetching PRs closed since {cutoff.strftime('%Y-%m-%d')}")

        def updated_after_cutoff(page: List[Dict]) -> bool:
            # PRs are sorted by update time and a PR cannot close after its last update
            last_updated = parse_timestamp(page[-1].get('updated_at'))
            return last_updated is None or last_updated >= cutoff

        closed = self.client.get_paginated(self.pulls_path, {
            'state': 'closed',
            'sort': 'updated',
            'direction': 'desc'
        }, should_continue=updated_after_cutoff, max_items=limit)

        recent = [
            pr for pr in closed
            if pr.get('closed_at') and parse_timestamp(pr['closed_at']) >= cutoff
        ]
        logging.info(f"Found {len(recent)} PRs closed in the last {days} days (from {len(closed)} fetched)")

        if not recent:
            return []

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(recent))) as executor:
            reviews = list(executor.map(lambda pr: self.get_reviews(pr['number']), recent))

        self.cache.save()
        return [parse_pull_request(pr, pr_reviews) for pr, pr_reviews in zip(recent, reviews)]

    def get_open_prs(self) -> List[OpenPullRequest]:
        """Fetch all open PRs with their pending review requests."""
        prs = self.client.get_paginated(self.pulls_path, {
            'state': 'open',
            'sort': 'updated',
            'direction': 'desc'
        })
        logging.info(f"Found {len(prs)} open PRs")
        return [parse_open_pull_request(pr) for pr in prs]

    def get_pr(self, pr_number: int) -> Optional[OpenPullRequest]:
        """Fetch a single PR, None if it does not exist."""
        data = self.client.get_json(f"{self.pulls_path}/{pr_number}")
        if data is None:
            logging.warning(f"PR #{pr_number} not found in {self.repo}")
            return None
        return parse_open_pull_request(data)

    def get_current_pr(self) -> Optional[OpenPullRequest]:
        """Find the open PR whose head is the current branch."""
        branch = self.get_current_branch()
        if not branch:
            return None

        owner = self.repo.split('/')[0]
        prs = self.client.get_paginated(self.pulls_path, {
            'state': 'open',
            'head': f"{owner}:{branch}"
        })
        if not prs:
            logging.info(f"No open PR found for branch {branch}")
            return None
        return parse_open_pull_request(prs[0])

    def assign_reviewer(self, pr_number: int, reviewer: str) -> bool:
        """Request a review from a user.

        Returns:
            True if GitHub accepted the review request
        """
        try:
            self.client.post(f"{self.pulls_path}/{pr_number}/requested_reviewers",
                             {'reviewers': [reviewer]})
        except (GitHubAPIError, requests.RequestException) as e:
            logging.error(f"Error assigning {reviewer} to PR #{pr_number}: {e}")
            return False

        logging.info(f"Requested review from {reviewer} on PR #{pr_number}")
        return True

    def get_team_members(self, days: int = 90, limit: int = 300) -> List[str]:
        """Collect everyone who authored, reviewed or was asked to review recently."""
        members = set()
        for pr in self.get_pr_history(days, limit):
            members.add(pr.author)
            members.update(pr.review_requests)
            members.update(review.author for review in pr.reviews)

        return sorted(m for m in members if m and not is_bot_identity(m))

    def get_current_user(self) -> Optional[str]:
        """Login of the authenticated user, None if unknown."""
        try:
            data = self.client.get_json('/user')
        except (GitHubAPIError, requests.RequestException) as e:
            logging.error(f"Error fetching current user: {e}")
            return None
        return _login(data) or None

    def get_user_prs(self, username: str) -> List[Dict]:
        """Open PRs in this repository authored by a user, most recently updated first."""
        prs = self.client.get_paginated(self.pulls_path, {
            'state': 'open',
            'sort': 'updated',
            'direction': 'desc'
        })
        return [
            self._summarize(pr, self.repo)
            for pr in prs
            if _login(pr.get('user')) == username
        ]

    def get_prs_to_review(self, username: str) -> List[Dict]:
        """Open PRs in any repository that request a review from the user."""
        items = self.client.get_paginated('/search/issues', {
            'q': f'is:pr is:open review-requested:{username}',
            'sort': 'updated',
            'order': 'desc'
        }, max_items=100)
        return [self._summarize(item, _repository_from_url(item.get('repository_url', ''))) for item in items]

    @staticmethod
    def _summarize(pr: Dict, repository: str) -> Dict:
        return {
            'number': pr['number'],
            'title': pr.get('title', ''),
            'url': pr.get('html_url', ''),
            'repository': repository,
            'author': _login(pr.get('user')),
            'updated_at': parse_timestamp(pr.get('updated_at')),
        }


def _repository_from_url(repository_url: str) -> str:
    """'https://api.github.com/repos/owner/name' -> 'owner/name'."""
    parts = repository_url.rstrip('/').split('/')
    return '/'.join(parts[-2:]) if len(parts) >= 2 else 'unknown'
