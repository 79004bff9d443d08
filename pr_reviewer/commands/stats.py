"""Show review statistics for the team."""

from .common import build_data_source, build_selector, formatter_for, load_config


def stats(args, config=None, source=None) -> int:
    """Print per-reviewer statistics for the last N days.

    Args:
        args: Parsed command line arguments (days)
        config: Configuration (loaded from file if None)
        source: GitHub data source (created from args if None)

    Returns:
        Process exit status
    """
    config = config or load_config(args)
    config.validate()
    output = formatter_for(config)

    days = args.days if args.days is not None else config.get('history_days')
    if days < 1:
        output.error("--days must be at least 1")
        return 1

    source = source or build_data_source(args)

    print("Gathering review statistics...")
    history = source.get_pr_history(days)
    if not history:
        output.warning(f"No PR history found for the last {days} days")
        return 0

    open_prs = source.get_open_prs()
    selector = build_selector(config, history, open_prs)

    output.print_stats(
        selector.calculate_review_stats(),
        days,
        prs_analyzed=len(selector.pr_history),
        unavailable=config.availability.active_entries(),
    )
    return 0
