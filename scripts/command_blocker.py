#!/usr/bin/env python3
"""PreToolUse hook entry point for the command blocker."""

import sys

try:
    from scripts.command_blocker_impl.hook import main
except ImportError:  # When executed as a script from the scripts/ directory.
    from command_blocker_impl.hook import main  # type: ignore[no-redef]

if __name__ == "__main__":
    sys.exit(main())
