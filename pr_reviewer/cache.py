"""On-disk cache for reviews of closed pull requests.

Reviews of a closed PR no longer change, so they are fetched once and kept
in a JSON file next to the configuration.
"""

import os
import json
import logging
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional

DEFAULT_CACHE_FILE = '.pr-reviewer-cache.json'
CACHE_FORMAT_VERSION = 1


class ReviewCache:
    """Stores raw review payloads keyed by repository and PR number."""

    def __init__(self, cache_file: str = DEFAULT_CACHE_FILE, enabled: bool = True):
        """Initialize the review cache.

        Args:
            cache_file: Path to the cache file
            enabled: Whether reviews are read from and written to the cache
        """
        self.cache_file = cache_file
        self.enabled = enabled
        self._lock = Lock()
        self._dirty = False
        self.entries: Dict[str, Dict] = self._load() if enabled else {}

    @staticmethod
    def key(repo: str, pr_number: int) -> str:
        return f"{repo.lower()}#{pr_number}"

    def _load(self) -> Dict[str, Dict]:
        if not os.path.exists(self.cache_file):
            return {}

        try:
            with open(self.cache_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logging.warning(f"Ignoring unreadable review cache {self.cache_file}: {e}")
            return {}

        if not isinstance(data, dict) or data.get('version') != CACHE_FORMAT_VERSION:
            logging.info(f"Discarding review cache {self.cache_file} written by another version")
            return {}

        entries = data.get('reviews') or {}
        logging.info(f"Loaded reviews of {len(entries)} PRs from {self.cache_file}")
        return entries

    def get_reviews(self, repo: str, pr_number: int) -> Optional[List[Dict]]:
        """Cached reviews of a PR, None on a miss."""
        if not self.enabled:
            return None

        entry = self.entries.get(self.key(repo, pr_number))
        if entry is None:
            return None
        logging.debug(f"Using reviews of {repo}#{pr_number} cached at {entry.get('fetched_at')}")
        return entry['reviews']

    def put_reviews(self, repo: str, pr_number: int, reviews: List[Dict]):
        """Remember the reviews of a closed PR (safe to call from worker threads)."""
        if not self.enabled:
            return

        with self._lock:
            self.entries[self.key(repo, pr_number)] = {
                'fetched_at': datetime.now(timezone.utc).isoformat(),
                'reviews': reviews,
            }
            self._dirty = True

    def save(self):
        """Write the cache file if anything was added since the last save."""
        if not self.enabled or not self._dirty:
            return

        with self._lock:
            payload = {'version': CACHE_FORMAT_VERSION, 'reviews': self.entries}
            try:
                with open(self.cache_file, 'w', encoding='utf-8') as f:
                    json.dump(payload, f, indent=2)
            except IOError as e:
                logging.warning(f"Failed to save review cache: {e}")
                return
            self._dirty = False
        logging.info(f"Saved reviews of {len(self.entries)} PRs to {self.cache_file}")

    def __contains__(self, item) -> bool:
        repo, pr_number = item
        return self.key(repo, pr_number) in self.entries

    def __len__(self) -> int:
        return len(self.entries)
