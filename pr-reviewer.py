#!/usr/bin/env python3
"""
PR Reviewer Election
Elects a fair code reviewer for a pull request based on recent review activity.
"""

import sys

from pr_reviewer.cli import main


if __name__ == "__main__":
    sys.exit(main())
