"""Interactive creation of the configuration file."""

from ..config import DEFAULT_WEIGHTS
from .common import ask, ask_number, build_data_source, confirm, formatter_for, load_config, parse_logins


def init(args, config=None, source=None) -> int:
    """Detect team members from PR history and write .pr-reviewer.yml.

    Args:
        args: Parsed command line arguments (force)
        config: Configuration (loaded from file if None)
        source: GitHub data source (created from args if None)

    Returns:
        Process exit status
    """
    config = config or load_config(args)
    output = formatter_for(config)

    if config.exists() and not args.force:
        if not confirm("Configuration file already exists. Overwrite?"):
            output.warning("Initialization cancelled")
            return 0

    source = source or build_data_source(args)

    print("Detecting team members from PR history...")
    detected = source.get_team_members()
    print(f"Detected {len(detected)} team members from recent PR history\n")

    team = [member for member in detected
            if confirm(f"Include @{member} in the reviewer rotation?", default=True)]
    team.extend(member for member in parse_logins(ask("Add additional team members (comma-separated usernames)"))
                if member not in team)

    if not team:
        output.error("Please select at least one team member")
        return 1

    history_days = ask_number("Number of days of PR history to consider", 30, minimum=1, maximum=365)
    max_pending = ask_number("Maximum pending reviews before deprioritizing a reviewer", 3, minimum=1)

    weights = dict(DEFAULT_WEIGHTS)
    if confirm("Would you like to customize scoring weights?"):
        prompts = {
            'recency': "Weight for recency (days since last review)",
            'balance': "Weight for approval count balance",
            'approvals': "Weight for days since last approval",
            'workload': "Weight for current workload (pending reviews)",
        }
        for name, message in prompts.items():
            weights[name] = ask_number(message, weights[name], minimum=0, integer=False)

    new_config = config.get_defaults()
    new_config.update({
        'team': team,
        'history_days': history_days,
        'max_pending_reviews': max_pending,
        'weights': weights,
        # Settings init does not ask for are kept from the existing file
        'excluded': config.get('excluded'),
        'lookback_prs': config.get('lookback_prs'),
        'unavailable': config.get('unavailable') or {},
    })
    config.save(new_config)

    output.success(f"Configuration saved to {config.config_path}")
    output.print_config_summary(config.get())
    print("\nYou're all set! Try these commands:")
    print("  pr-reviewer next      - See who's next in the queue")
    print("  pr-reviewer elect     - Elect a reviewer for the current PR")
    print("  pr-reviewer stats     - View review statistics")
    return 0
