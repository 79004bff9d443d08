"""
Unit tests for ReviewerSelector
"""

import pytest

from pr_reviewer.models import ScoreResult, SelectorConfig, Weights
from pr_reviewer.selector import ReviewerSelector
from pr_reviewer.selector.scoring import OVERLOAD_PENALTY
from conftest import make_open_pr, make_pr


class TestSelectReviewer:
    """Test cases for electing reviewers."""

    @pytest.fixture
    def config(self, team):
        return SelectorConfig.create(team=team, excluded=['dependabot[bot]'], max_pending_reviews=3)

    @pytest.fixture
    def selector(self, pr_history, open_prs, config, now):
        return ReviewerSelector(pr_history, open_prs, config, now=now)

    def test_author_outside_team_keeps_full_pool(self, selector):
        assert selector.get_eligible_reviewers('eve') == ['alice', 'bob', 'charlie', 'david']

    def test_reviewer_without_recent_approvals_wins(self, selector):
        """Test that charlie or david (no approvals) beat bob (2) and alice (1)."""
        result = selector.select_reviewer('eve')

        assert isinstance(result, ScoreResult)
        assert result.reviewer in ('charlie', 'david')

    def test_ranking_order(self, selector):
        ranked = selector.select_reviewer('eve', count=4)

        assert [r.reviewer for r in ranked] == ['david', 'charlie', 'alice', 'bob']

    def test_expected_scores(self, selector):
        """Test the scores with default weights (average approvals 0.75)."""
        scores = {r.reviewer: r.score for r in selector.select_reviewer('eve', count=4)}

        assert scores['david'] == pytest.approx(90 + 30 + 1.5)
        assert scores['charlie'] == pytest.approx(90 + 3 + 1.5)
        assert scores['alice'] == pytest.approx(9 + 3 - 0.5)
        assert scores['bob'] == pytest.approx(3 + 1 - 2.5 - 10)

    def test_never_returns_author(self, selector, team):
        for author in team:
            ranked = selector.select_reviewer(author, count=10)
            assert author not in [r.reviewer for r in ranked]

    def test_count_one_returns_single_result(self, selector):
        assert isinstance(selector.select_reviewer('eve', count=1), ScoreResult)

    def test_count_limits_list(self, selector):
        ranked = selector.select_reviewer('eve', count=2)
        assert isinstance(ranked, list)
        assert len(ranked) == 2

    @pytest.mark.parametrize("count", [0, -2])
    def test_count_below_one_rejected(self, selector, count):
        with pytest.raises(ValueError):
            selector.select_reviewer('eve', count=count)
        with pytest.raises(ValueError):
            selector.get_reviewer_queue('eve', count)

    def test_count_larger_than_pool(self, selector):
        assert len(selector.select_reviewer('alice', count=10)) == 3

    def test_single_and_list_paths_agree(self, selector):
        single = selector.select_reviewer('eve', count=1)
        ranked = selector.select_reviewer('eve', count=3)
        assert single == ranked[0]

    def test_idempotent(self, pr_history, open_prs, config, now):
        first = ReviewerSelector(pr_history, open_prs, config, now=now).select_reviewer('eve', count=4)
        second = ReviewerSelector(pr_history, open_prs, config, now=now).select_reviewer('eve', count=4)
        assert first == second

    def test_selection_does_not_mutate_stats(self, selector):
        before = selector.get_stats()
        result = selector.select_reviewer('eve')
        result.stats.total_approvals += 100
        assert selector.get_stats() == before

    def test_unavailable_reviewer_is_skipped(self, pr_history, open_prs, config, now):
        selector = ReviewerSelector(pr_history, open_prs, config,
                                    is_unavailable=lambda login: login == 'david', now=now)
        assert selector.select_reviewer('eve').reviewer == 'charlie'

    def test_excluded_reviewer_is_skipped(self, pr_history, open_prs, team, now):
        config = SelectorConfig.create(team=team, excluded=['david', 'charlie'])
        selector = ReviewerSelector(pr_history, open_prs, config, now=now)
        assert selector.select_reviewer('eve').reviewer == 'alice'

    def test_equal_scores_keep_team_order(self, now):
        config = SelectorConfig.create(team=['zed', 'amy', 'kim'])
        selector = ReviewerSelector([], [], config, now=now)

        ranked = selector.select_reviewer(None, count=3)

        assert [r.reviewer for r in ranked] == ['zed', 'amy', 'kim']


class TestOverloadedReviewer:
    """Test cases for the overload penalty in the ranking."""

    def test_overloaded_reviewer_is_not_top(self, pr_history, team, now):
        """Test that charlie with 4 pending reviews (max 3) is demoted."""
        open_prs = [make_open_pr(n, 'alice', ['charlie']) for n in range(10, 14)]
        config = SelectorConfig.create(team=team, max_pending_reviews=3,
                                       weights=Weights(recency=5.0, balance=5.0, approvals=5.0, workload=0.0))
        selector = ReviewerSelector(pr_history, open_prs, config, now=now)

        ranked = selector.select_reviewer('eve', count=4)
        charlie = next(r for r in ranked if r.reviewer == 'charlie')

        assert ranked[0].reviewer != 'charlie'
        assert ranked[-1].reviewer == 'charlie'
        assert charlie.breakdown.overload == -OVERLOAD_PENALTY

    def test_overloaded_reviewer_still_ranked(self, now):
        """Test that overload demotes but does not remove a reviewer."""
        open_prs = [make_open_pr(n, 'bob', ['alice']) for n in range(1, 4)]
        config = SelectorConfig.create(team=['alice'], max_pending_reviews=3)
        selector = ReviewerSelector([], open_prs, config, now=now)

        assert selector.select_reviewer('bob').reviewer == 'alice'


class TestEmptyPool:
    """Test cases for the 'no eligible reviewers' outcome."""

    def test_empty_team_and_history(self, now):
        selector = ReviewerSelector([], [], SelectorConfig(), now=now)

        assert selector.select_reviewer('alice') is None
        assert selector.select_reviewer(None, count=5) is None
        assert selector.get_reviewer_queue(None, 5) is None

    def test_only_member_is_author(self, now):
        selector = ReviewerSelector([], [], SelectorConfig.create(team=['alice']), now=now)
        assert selector.select_reviewer('alice') is None

    def test_everyone_unavailable(self, team, now):
        selector = ReviewerSelector([], [], SelectorConfig.create(team=team),
                                    is_unavailable=lambda login: True, now=now)
        assert selector.select_reviewer(None) is None


class TestImplicitTeam:
    """Test cases for selection without a configured team."""

    def test_history_defines_pool(self, pr_history, open_prs, now):
        selector = ReviewerSelector(pr_history, open_prs, SelectorConfig(), now=now)

        eligible = selector.get_eligible_reviewers('alice')

        assert set(eligible) == {'bob', 'charlie'}

    def test_bots_never_selected(self, now):
        history = [make_pr(1, 'alice', 1, reviews=[('dependabot[bot]', 'APPROVED', 1), ('bob', 'APPROVED', 1)])]
        selector = ReviewerSelector(history, [], SelectorConfig(), now=now)

        ranked = selector.get_reviewer_queue(None, 10)

        assert [r.reviewer for r in ranked] == ['bob']
        assert 'dependabot[bot]' not in selector.calculate_review_stats()

    def test_average_ignores_author(self, now):
        """Test that the author's approvals do not shift the balance of the others."""
        history = [
            make_pr(number, 'dave', 1, reviews=[('alice', 'APPROVED', 1)], review_requests=['bob', 'charlie'])
            for number in range(1, 7)
        ]
        selector = ReviewerSelector(history, [], SelectorConfig(), now=now)

        ranked = selector.select_reviewer('alice', count=5)

        assert selector.get_average_approvals('alice') == 0
        assert {r.reviewer: r.breakdown.balance for r in ranked} == {'bob': 0, 'charlie': 0}

    def test_average_with_team_uses_whole_team(self, pr_history, open_prs, team, now):
        selector = ReviewerSelector(pr_history, open_prs, SelectorConfig.create(team=team), now=now)

        assert selector.get_average_approvals('bob') == pytest.approx(0.75)


class TestLookbackWindow:
    """Test cases for the PR-count lookback window."""

    def test_only_recent_prs_count(self, pr_history, team, now):
        config = SelectorConfig.create(team=team, lookback_prs=1)
        selector = ReviewerSelector(pr_history, [], config, now=now)

        stats = selector.calculate_review_stats()

        assert [pr.number for pr in selector.pr_history] == [3]
        assert stats['bob'].total_approvals == 1
        assert stats['alice'].total_approvals == 0


class TestStatsView:
    """Test cases for the statistics helpers."""

    @pytest.fixture
    def selector(self, pr_history, open_prs, team, now):
        return ReviewerSelector(pr_history, open_prs, SelectorConfig.create(team=team), now=now)

    def test_calculate_review_stats_limited_to_team(self, pr_history, open_prs, now):
        history = list(pr_history) + [make_pr(9, 'alice', 2, reviews=[('zoe', 'APPROVED', 2)])]
        selector = ReviewerSelector(history, open_prs, SelectorConfig.create(team=['alice', 'bob']), now=now)

        assert set(selector.calculate_review_stats()) == {'alice', 'bob'}

    def test_averages(self, selector):
        assert selector.get_average_approvals() == pytest.approx(0.75)
        assert selector.get_average_reviews() == pytest.approx(1.0)

    def test_queue_always_list(self, selector):
        queue = selector.get_reviewer_queue(None, 1)
        assert isinstance(queue, list)
        assert len(queue) == 1
