"""Print version information."""

import platform

from .. import __version__


def version(args=None) -> int:
    print(f"pr-reviewer v{__version__}")
    print("\nFair reviewer election for pull requests")
    print(f"\nPython:   {platform.python_version()}")
    print(f"Platform: {platform.system().lower()}")
    return 0
