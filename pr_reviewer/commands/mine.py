"""Browse your own PRs and the PRs waiting for your review."""

import webbrowser

from .common import build_data_source, formatter_for, load_config


def mine(args, config=None, source=None) -> int:
    """Interactive list of PRs created by or awaiting review from the current user.

    Args:
        args: Parsed command line arguments
        config: Configuration (loaded from file if None)
        source: GitHub data source (created from args if None)

    Returns:
        Process exit status
    """
    config = config or load_config(args)
    output = formatter_for(config)
    source = source or build_data_source(args)

    username = source.get_current_user()
    if not username:
        output.error("Could not determine current user")
        return 1

    prs_by_mode = {
        'created': source.get_user_prs(username),
        'reviewing': source.get_prs_to_review(username),
    }
    mode = 'created'

    while True:
        prs = prs_by_mode[mode]
        output.print_pr_list(prs, mode)

        other = 'PRs to review' if mode == 'created' else 'PRs you created'
        try:
            choice = input(f"\nNumber to open, 's' to switch to {other}, 'q' to exit: ").strip().lower()
        except EOFError:
            choice = 'q'

        if choice in ('q', 'quit', 'exit', ''):
            print("Exited")
            return 0
        if choice == 's':
            mode = 'reviewing' if mode == 'created' else 'created'
            continue
        if choice.isdigit() and 1 <= int(choice) <= len(prs):
            url = prs[int(choice) - 1]['url']
            webbrowser.open(url)
            output.success(f"Opened {url} in browser")
            continue

        output.warning(f"Invalid choice: {choice}")
