"""Output formatting and display of election results."""

from datetime import datetime
from typing import Dict, List, Optional

from .models import OpenPullRequest, ReviewerStats, ScoreResult
from .selector.scoring import RECENCY_CAP_DAYS


# ANSI color codes
GREEN = '\033[92m'
YELLOW = '\033[93m'
RED = '\033[91m'
CYAN = '\033[96m'
GRAY = '\033[90m'
BOLD = '\033[1m'
RESET = '\033[0m'

MEDALS = ['🥇', '🥈', '🥉']


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{RESET}"


def format_days_ago(days: Optional[int]) -> str:
    """Human readable day counter ('Never', 'Today', '3d ago')."""
    if days is None:
        return 'Never'
    if days == 0:
        return 'Today'
    return f"{days}d ago"


class OutputFormatter:
    """Formats and prints election results, queues and statistics."""

    def __init__(self, max_pending_reviews: int = 3, use_color: bool = True):
        """Initialize the output formatter.

        Args:
            max_pending_reviews: Threshold used to flag overloaded reviewers
            use_color: Whether to emit ANSI color codes
        """
        self.max_pending_reviews = max_pending_reviews
        self.use_color = use_color

    def _c(self, text, color: str) -> str:
        text = str(text)
        return colorize(text, color) if self.use_color else text

    def _header(self, title: str):
        print("\n" + "="*80)
        print(title)
        print("="*80)

    def success(self, message: str):
        print(self._c(f"✅ {message}", GREEN))

    def warning(self, message: str):
        print(self._c(message, YELLOW))

    def error(self, message: str):
        print(self._c(f"❌ {message}", RED))

    def print_no_eligible_reviewers(self):
        """Explain why nobody could be elected."""
        self.error("No eligible reviewers found")
        print(self._c("\nPossible reasons:", YELLOW))
        print(self._c("- All team members are unavailable", YELLOW))
        print(self._c("- No team members configured and no review history", YELLOW))
        print(self._c("- The PR author is the only team member", YELLOW))

    def print_election(self, result: ScoreResult, pr: OpenPullRequest,
                       avg_reviews: float, avg_approvals: float):
        """Print the elected reviewer for a PR."""
        stats = result.stats
        self._header(f"SELECTED REVIEWER: {self._c('@' + result.reviewer, GREEN)}")
        print(f"{self._c('PR:', BOLD)} #{pr.number} - {pr.title}")
        print(f"{self._c('Author:', BOLD)} @{pr.author}")
        print()
        print(self._c("Review Stats:", GRAY))
        print(f"  Last reviewed:   {format_days_ago(stats.days_since_last_review)}")
        print(f"  Last approval:   {format_days_ago(stats.days_since_last_approval)}")
        print(f"  Total reviews:   {stats.total_reviews} (avg: {avg_reviews:.1f})")
        print(f"  Approvals:       {stats.total_approvals} (avg: {avg_approvals:.1f})")
        print(f"  Pending reviews: {stats.pending_reviews}")
        print(f"  Score:           {result.score:.1f}")

    def _approval_status(self, stats: ReviewerStats) -> str:
        days = stats.days_since_last_approval
        if days is None:
            return self._c("No recent approvals", RED)
        if days == 0:
            return self._c("Approved today", GREEN)
        return self._c(f"Last approval: {days}d ago", YELLOW)

    def print_queue(self, queue: List[ScoreResult], verbose: bool = False):
        """Print upcoming reviewers, best first.

        Args:
            queue: Ranked score results
            verbose: Whether to show the score breakdown and scoring rules
        """
        self._header("NEXT REVIEWERS IN QUEUE")

        for index, item in enumerate(queue):
            rank = MEDALS[index] if index < len(MEDALS) else f"{index + 1}."
            stats = item.stats
            print(f"\n{rank} {self._c('@' + item.reviewer, GREEN)} {self._c(f'(score: {item.score:.1f})', GRAY)}")
            print(f"   {self._approval_status(stats)}")
            print(self._c(f"   {stats.total_approvals} approvals | {stats.total_reviews} reviews | "
                          f"{stats.pending_reviews} pending", GRAY))

            if verbose:
                breakdown = item.breakdown
                print(self._c(
                    f"   approval recency {breakdown.approval_recency:+.1f} | "
                    f"review recency {breakdown.review_recency:+.1f} | "
                    f"balance {breakdown.balance:+.1f} | "
                    f"workload {breakdown.workload:+.1f} | "
                    f"overload {breakdown.overload:+.1f}", GRAY))

        if verbose:
            print(self._c("\nScoring:", GRAY))
            print(self._c(f"• Days since last approval and last review count up to {RECENCY_CAP_DAYS} days", GRAY))
            print(self._c("• Reviewers with fewer approvals than the team average get a bonus", GRAY))
            print(self._c("• Every pending review lowers the score", GRAY))
            print(self._c(f"• Heavy penalty at {self.max_pending_reviews}+ pending reviews", GRAY))

    def _status(self, login: str, stats: ReviewerStats, unavailable: Dict[str, Optional[datetime]]) -> str:
        if login in unavailable:
            return self._c("Unavailable", RED)
        if stats.pending_reviews >= self.max_pending_reviews:
            return self._c("Overloaded", RED)
        if stats.total_approvals == 0:
            return self._c("Next up", CYAN)
        return self._c("Available", GREEN)

    def print_stats(self, stats: Dict[str, ReviewerStats], days: int, prs_analyzed: int,
                    unavailable: Dict[str, Optional[datetime]] = None):
        """Print the review statistics table.

        Args:
            stats: Reviewer statistics keyed by login
            days: Size of the analyzed window in days
            prs_analyzed: Number of closed PRs that went into the statistics
            unavailable: Currently unavailable members and their return dates
        """
        unavailable = unavailable or {}
        self._header(f"REVIEW STATISTICS (LAST {days} DAYS)")

        # Fewest approvals first
        rows = sorted(stats.items(), key=lambda item: item[1].total_approvals)

        print(f"\n{'Reviewer':<20} {'Approvals':<10} {'Reviews':<10} {'Pending':<10} {'Last Approval':<15} {'Status'}")
        print(f"{'-'*80}")

        for login, entry in rows:
            if entry.pending_reviews > 2:
                pending_color = RED
            elif entry.pending_reviews > 0:
                pending_color = YELLOW
            else:
                pending_color = GRAY
            pending = self._c(f"{entry.pending_reviews:<10}", pending_color)
            last_approval = f"{format_days_ago(entry.days_since_last_approval):<15}"
            print(f"{'@' + login:<20} {entry.total_approvals:<10} {entry.total_reviews:<10} "
                  f"{pending} {last_approval} {self._status(login, entry, unavailable)}")

        total_approvals = sum(entry.total_approvals for entry in stats.values())
        average = total_approvals / len(stats) if stats else 0.0

        print(self._c("\n📊 Summary:", GRAY))
        print(self._c(f"   Total approvals: {total_approvals}", GRAY))
        print(self._c(f"   Team members: {len(stats)}", GRAY))
        print(self._c(f"   Average approvals per person: {average:.1f}", GRAY))
        print(self._c(f"   PRs analyzed: {prs_analyzed}", GRAY))

        if unavailable:
            self.print_unavailable(unavailable)

    def print_unavailable(self, unavailable: Dict[str, Optional[datetime]]):
        """List members who are currently unavailable."""
        print(self._c("\n⚠️  Unavailable reviewers:", RED))
        for login, until in unavailable.items():
            suffix = f" until {until.strftime('%b %d, %Y')}" if until else ""
            print(self._c(f"   - @{login}{suffix}", RED))

    def print_config_summary(self, config: Dict):
        """Print the saved configuration."""
        weights = config.get('weights') or {}
        print(self._c("\nConfiguration summary:", GRAY))
        print(self._c(f"  • {len(config.get('team') or [])} team members", GRAY))
        print(self._c(f"  • {config.get('history_days')} days of history", GRAY))
        print(self._c(f"  • Max {config.get('max_pending_reviews')} pending reviews", GRAY))
        print(self._c("  • Weights: " + ", ".join(f"{name}={value}" for name, value in weights.items()), GRAY))

    def format_pr_choice(self, pr: Dict, mode: str) -> str:
        """One-line description of a PR for the 'mine' listing."""
        title = pr['title'] if len(pr['title']) <= 50 else pr['title'][:47] + '...'
        number = self._c(f"#{pr['number']}", BOLD)
        if mode == 'created':
            detail = f"({pr['repository']})"
        else:
            detail = f"by {pr['author']} in {pr['repository']}"
        return f"{number} {title} {self._c(detail, GRAY)}"

    def print_pr_list(self, prs: List[Dict], mode: str):
        """Print a numbered list of PRs.

        Args:
            prs: PR summaries from GitHubDataSource
            mode: 'created' for the user's own PRs, 'reviewing' for review requests
        """
        title = "Created by you" if mode == 'created' else "Awaiting your review"
        print(self._c(f"\n📋 Pull Requests - {title}\n", CYAN))

        if not prs:
            print(self._c("No PRs found in this category.", GRAY))
            return

        for index, pr in enumerate(prs, start=1):
            print(f"{index:>3}. {self.format_pr_choice(pr, mode)}")
