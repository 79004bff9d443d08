"""Eligibility filtering of reviewer candidates."""

from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..models import ReviewerStats, is_bot_identity


def candidate_pool(team: Sequence[str], stats: Dict[str, ReviewerStats]) -> List[str]:
    """Return the configured team, or every known reviewer if no team is configured."""
    if team:
        return list(team)
    return list(stats.keys())


def eligible_reviewers(
    identities: Iterable[str],
    author: Optional[str] = None,
    excluded: Iterable[str] = (),
    is_unavailable: Callable[[str], bool] = None,
    is_bot: Callable[[str], bool] = is_bot_identity
) -> List[str]:
    """Filter the candidate pool down to reviewers who may be elected.

    Args:
        identities: Candidate pool in priority order
        author: PR author to exclude (None means no author exclusion)
        excluded: Logins that are never elected
        is_unavailable: Predicate for members marked unavailable
        is_bot: Predicate identifying bot accounts

    Returns:
        Eligible logins in pool order, without duplicates
    """
    excluded = set(excluded)
    seen = set()
    eligible = []

    for login in identities:
        if not login or login in seen:
            continue
        seen.add(login)

        if author is not None and login == author:
            continue
        if login in excluded:
            continue
        if is_unavailable is not None and is_unavailable(login):
            continue
        if is_bot(login):
            continue

        eligible.append(login)

    return eligible
