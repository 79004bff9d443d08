"""
Unit tests for the review cache
"""

import json

import pytest

from pr_reviewer.cache import CACHE_FORMAT_VERSION, ReviewCache


class TestReviewCache:
    """Test cases for caching reviews of closed PRs."""

    @pytest.fixture
    def cache_file(self, tmp_path):
        return str(tmp_path / 'cache.json')

    @pytest.fixture
    def cache(self, cache_file):
        return ReviewCache(cache_file)

    def test_key_is_case_insensitive(self):
        assert ReviewCache.key('Owner/Repo', 3) == ReviewCache.key('owner/repo', 3)
        assert ReviewCache.key('owner/repo', 3) != ReviewCache.key('owner/repo', 4)

    def test_put_and_get(self, cache):
        reviews = [{'id': 1}, {'id': 2}]
        cache.put_reviews('owner/repo', 5, reviews)

        assert ('owner/repo', 5) in cache
        assert cache.get_reviews('owner/repo', 5) == reviews
        assert len(cache) == 1

    def test_miss(self, cache):
        assert cache.get_reviews('owner/repo', 5) is None

    def test_save_and_load(self, cache, cache_file):
        cache.put_reviews('owner/repo', 5, [{'id': 1}])
        cache.save()

        reloaded = ReviewCache(cache_file)

        assert reloaded.get_reviews('owner/repo', 5) == [{'id': 1}]

    def test_file_format(self, cache, cache_file):
        cache.put_reviews('owner/repo', 5, [])
        cache.save()

        with open(cache_file) as f:
            data = json.load(f)
        assert data['version'] == CACHE_FORMAT_VERSION
        assert 'fetched_at' in data['reviews']['owner/repo#5']

    def test_unchanged_cache_is_not_written(self, cache, cache_file, tmp_path):
        cache.save()
        assert not (tmp_path / 'cache.json').exists()

    def test_disabled(self, cache_file, tmp_path):
        cache = ReviewCache(cache_file, enabled=False)
        cache.put_reviews('owner/repo', 5, [{'id': 1}])
        cache.save()

        assert cache.get_reviews('owner/repo', 5) is None
        assert not (tmp_path / 'cache.json').exists()

    def test_corrupt_file_is_ignored(self, cache_file):
        with open(cache_file, 'w') as f:
            f.write('{not json')

        assert len(ReviewCache(cache_file)) == 0

    def test_other_version_is_discarded(self, cache_file):
        with open(cache_file, 'w') as f:
            json.dump({'version': CACHE_FORMAT_VERSION + 1, 'reviews': {'owner/repo#1': {'reviews': []}}}, f)

        assert len(ReviewCache(cache_file)) == 0
