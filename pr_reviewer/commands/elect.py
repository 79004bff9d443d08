"""Elect a reviewer for a pull request."""

import logging

from .common import build_data_source, build_selector, confirm, formatter_for, load_config


def elect(args, config=None, source=None) -> int:
    """Elect one reviewer for the given PR (or the PR of the current branch).

    Args:
        args: Parsed command line arguments (pr, auto_assign)
        config: Configuration (loaded from file if None)
        source: GitHub data source (created from args if None)

    Returns:
        Process exit status
    """
    config = config or load_config(args)
    config.validate()
    output = formatter_for(config)
    source = source or build_data_source(args)

    if args.pr:
        pr = source.get_pr(args.pr)
        if pr is None:
            output.error(f"PR #{args.pr} not found")
            return 1
    else:
        pr = source.get_current_pr()
        if pr is None:
            output.error("No PR found for current branch")
            output.warning("\nTip: Create a PR first or use --pr to specify the PR number")
            return 1

    if pr.state != 'OPEN':
        output.error(f"PR #{pr.number} is not open")
        return 1

    print("Analyzing review history...")
    history = source.get_pr_history(config.get('history_days'))
    open_prs = source.get_open_prs()

    selector = build_selector(config, history, open_prs)
    result = selector.select_reviewer(pr.author)

    if result is None:
        output.print_no_eligible_reviewers()
        return 0

    logging.info(f"Elected {result.reviewer} for PR #{pr.number} (score {result.score:.1f})")
    output.print_election(result, pr, selector.get_average_reviews(pr.author),
                          selector.get_average_approvals(pr.author))

    should_assign = args.auto_assign or confirm("\nWould you like to assign this reviewer now?")
    if not should_assign:
        return 0

    if source.assign_reviewer(pr.number, result.reviewer):
        output.success(f"Assigned @{result.reviewer} to PR #{pr.number}")
        return 0

    output.error("Failed to assign reviewer")
    return 1
