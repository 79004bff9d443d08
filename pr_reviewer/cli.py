"""Command line interface for fair reviewer election."""

import argparse
import logging
import os
import sys
from typing import List

import requests
from dotenv import load_dotenv

from . import __version__
from .commands import elect, init, mine, next_reviewers, stats, unavailable, version
from .exceptions import ReviewerError
from .output import RED, colorize


def setup_logging():
    """Configure logging (can be overridden by LOG_LEVEL environment variable)."""
    log_level = os.environ.get('LOG_LEVEL', 'WARNING').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all sub-commands."""
    parser = argparse.ArgumentParser(
        prog='pr-reviewer',
        description='PR reviewer election tool for fair code review rotation'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', help='Path to the configuration file (default: .pr-reviewer.yml)')
    parser.add_argument('--repo', help='Repository in owner/name format (default: detected from git)')
    parser.add_argument('--no-cache', action='store_true', help='Do not cache reviews of closed PRs')

    subparsers = parser.add_subparsers(dest='command', metavar='command')
    subparsers.required = True

    parser_elect = subparsers.add_parser('elect', help='Elect a reviewer for a PR')
    parser_elect.add_argument('-p', '--pr', type=int, help='PR number to elect a reviewer for')
    parser_elect.add_argument('-a', '--auto-assign', action='store_true',
                              help='Automatically assign the elected reviewer')
    parser_elect.set_defaults(handler=elect)

    parser_stats = subparsers.add_parser('stats', help='Show review statistics')
    parser_stats.add_argument('-d', '--days', type=int,
                              help='Number of days to show stats for (default: history_days from config)')
    parser_stats.set_defaults(handler=stats)

    parser_next = subparsers.add_parser('next', help="Show who's next in line for review (dry run)")
    parser_next.add_argument('-n', '--count', type=int, default=3, help='Number of reviewers to show')
    parser_next.add_argument('-v', '--verbose', action='store_true', help='Show detailed score breakdown')
    parser_next.set_defaults(handler=next_reviewers)

    parser_unavailable = subparsers.add_parser('unavailable', help='Mark a team member as unavailable')
    parser_unavailable.add_argument('username', help='GitHub login of the team member')
    parser_unavailable.add_argument('-u', '--until', help='Date until unavailable (YYYY-MM-DD)')
    parser_unavailable.add_argument('-r', '--remove', action='store_true', help='Remove unavailability')
    parser_unavailable.set_defaults(handler=unavailable)

    parser_init = subparsers.add_parser('init', help='Initialize review configuration')
    parser_init.add_argument('-f', '--force', action='store_true', help='Overwrite existing configuration')
    parser_init.set_defaults(handler=init)

    parser_mine = subparsers.add_parser('mine', help='Browse your PRs and PRs awaiting your review')
    parser_mine.set_defaults(handler=mine)

    parser_version = subparsers.add_parser('version', help='Show version information')
    parser_version.set_defaults(handler=version)

    return parser


def main(argv: List[str] = None) -> int:
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()
    setup_logging()

    args = build_parser().parse_args(argv)
    logging.debug(f"Running command '{args.command}'")

    try:
        return args.handler(args)
    except (ReviewerError, requests.RequestException) as e:
        logging.error(f"Command '{args.command}' failed: {e}", exc_info=logging.getLogger().isEnabledFor(logging.DEBUG))
        print(colorize(f"Error: {e}", RED), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nCancelled")
        return 130


if __name__ == '__main__':
    sys.exit(main())
