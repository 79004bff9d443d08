"""GitHub API client for making requests and handling pagination."""

import os
import logging
from typing import Dict, List, Optional, Callable
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import GitHubAPIError

GITHUB_API_URL = "https://api.github.com"


class GitHubAPIClient:
    """Handles GitHub API requests with retry logic and pagination."""

    def __init__(self, token: str = None, base_url: str = GITHUB_API_URL):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            base_url: API root URL (GitHub Enterprise installations differ)
        """
        # Use provided token or fall back to environment variable
        self.token = token or os.environ.get('GITHUB_TOKEN')
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()

        # Reviews of up to 10 PRs are fetched concurrently
        adapter = HTTPAdapter(
            pool_connections=20,
            pool_maxsize=20,
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504]
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        self.session.headers.update({'Accept': 'application/vnd.github.v3+json'})
        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Rate limits will be much lower and reviewers cannot be assigned.")
            logging.warning("Set GITHUB_TOKEN environment variable or add it to a .env file.")

    def url(self, path: str) -> str:
        """Build an absolute API URL from a path like '/repos/owner/name/pulls'."""
        if path.startswith('http'):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _check_response(self, response: requests.Response) -> None:
        """Raise for rate limiting and other HTTP errors."""
        if response.status_code == 403:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text
            logging.error(f"Rate limit exceeded or access denied. Response: {detail}")
            raise GitHubAPIError(f"GitHub API access denied (403): {detail}", status_code=403)

        response.raise_for_status()

    def get_paginated(self, url: str, params: Dict = None,
                      should_continue: Optional[Callable[[List[Dict]], bool]] = None,
                      max_items: int = None) -> List[Dict]:
        """Fetch all pages of a paginated GitHub API endpoint.

        Args:
            url: The API endpoint URL or path
            params: Query parameters
            should_continue: Optional callback function that takes a page of results and returns
                           False to stop pagination early, True to continue
            max_items: Stop once this many items were fetched

        Returns:
            List of all items from all pages
        """
        url = self.url(url)
        results = []
        page = 1
        per_page = 100

        params = dict(params or {})
        params['per_page'] = per_page

        while True:
            params['page'] = page
            logging.debug(f"Fetching page {page} from {url}")
            response = self.session.get(url, params=params)
            self._check_response(response)
            data = response.json()

            # Search endpoints wrap results in 'items'
            if isinstance(data, dict):
                data = data.get('items', [])

            if not data:
                break

            results.extend(data)

            if max_items is not None and len(results) >= max_items:
                results = results[:max_items]
                break

            # Check early termination callback
            if should_continue and not should_continue(data):
                logging.debug(f"Early termination triggered at page {page}")
                break

            # Check if there are more pages
            if len(data) < per_page:
                break

            page += 1

        logging.debug(f"Fetched {len(results)} total items from {url}")
        return results

    def get(self, url: str, params: Dict = None) -> requests.Response:
        """Make a single GET request to the GitHub API.

        Args:
            url: The API endpoint URL or path
            params: Query parameters

        Returns:
            Response object
        """
        return self.session.get(self.url(url), params=params)

    def get_json(self, url: str, params: Dict = None) -> Optional[Dict]:
        """GET a single resource.

        Returns:
            Decoded JSON, or None if the resource does not exist (404)
        """
        response = self.get(url, params)
        if response.status_code == 404:
            return None
        self._check_response(response)
        return response.json()

    def post(self, url: str, payload: Dict) -> Dict:
        """POST a JSON payload to the GitHub API.

        Args:
            url: The API endpoint URL or path
            payload: Request body

        Returns:
            Decoded JSON response
        """
        response = self.session.post(self.url(url), json=payload)
        self._check_response(response)
        return response.json()
