"""Mark team members as unavailable or available again."""

from datetime import datetime, timezone

from ..availability import normalize_login
from .common import formatter_for, load_config


def parse_until(value: str) -> datetime:
    """Parse a YYYY-MM-DD date as midnight UTC.

    Raises:
        ValueError: If the date is not in YYYY-MM-DD format
    """
    return datetime.strptime(value.strip(), '%Y-%m-%d').replace(tzinfo=timezone.utc)


def unavailable(args, config=None) -> int:
    """Update the availability of one team member.

    Args:
        args: Parsed command line arguments (username, until, remove)
        config: Configuration (loaded from file if None)

    Returns:
        Process exit status
    """
    config = config or load_config(args)
    output = formatter_for(config)
    username = normalize_login(args.username)
    availability = config.availability

    if args.remove:
        if availability.mark_available(username):
            config.save()
            output.success(f"@{username} marked as available")
        else:
            output.warning(f"@{username} was not marked as unavailable")
        return 0

    until = None
    if args.until:
        try:
            until = parse_until(args.until)
        except ValueError:
            output.error("Invalid date format. Please use YYYY-MM-DD")
            return 1
        if until < datetime.now(timezone.utc):
            output.error("Date must be in the future")
            return 1

    availability.mark_unavailable(username, until)
    config.save()

    if until:
        output.success(f"@{username} marked as unavailable until {until.strftime('%b %d, %Y')}")
    else:
        output.success(f"@{username} marked as unavailable indefinitely")
    print("\nUse --remove to mark as available again")
    return 0
