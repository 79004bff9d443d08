"""Show who is next in the review queue."""

from .common import build_data_source, build_selector, formatter_for, load_config


def next_reviewers(args, config=None, source=None) -> int:
    """Dry run: rank reviewers without excluding any author.

    Args:
        args: Parsed command line arguments (count, verbose)
        config: Configuration (loaded from file if None)
        source: GitHub data source (created from args if None)

    Returns:
        Process exit status
    """
    config = config or load_config(args)
    config.validate()
    output = formatter_for(config)

    if args.count < 1:
        output.error("--count must be at least 1")
        return 1

    source = source or build_data_source(args)

    print("Analyzing review queue...")
    history = source.get_pr_history(config.get('history_days'))
    open_prs = source.get_open_prs()

    selector = build_selector(config, history, open_prs)
    queue = selector.get_reviewer_queue(None, args.count)

    if not queue:
        output.print_no_eligible_reviewers()
        return 0

    output.print_queue(queue, verbose=args.verbose)
    return 0
