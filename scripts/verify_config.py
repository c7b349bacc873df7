#!/usr/bin/env python3
"""Verify user and project scope config files for the command blocker."""

import sys
from pathlib import Path

try:
    from scripts.command_blocker_impl.config import (
        ValidationResult,
        user_config_path,
        validate_config_file,
    )
except ImportError:  # When executed as a script from the scripts/ directory.
    from command_blocker_impl.config import (  # type: ignore[no-redef]
        ValidationResult,
        user_config_path,
        validate_config_file,
    )

_USER_CONFIG = user_config_path()
_PROJECT_CONFIG = Path(".command-blocker.json")

_HEADER = "Command Blocker Config"
_SEPARATOR = "═" * len(_HEADER)


def _print_header() -> None:
    print(_HEADER)
    print(_SEPARATOR)


def _print_valid_config(scope: str, path: Path, result: ValidationResult) -> None:
    print(f"\n✓ {scope} config: {path}")
    if result.summary:
        print("  Extensions:")
        for i, line in enumerate(result.summary, 1):
            print(f"    {i}. {line}")
    else:
        print("  Extensions: (none)")


def _print_invalid_config(scope: str, path: Path, errors: list[str]) -> None:
    print(f"\n✗ {scope} config: {path}", file=sys.stderr)
    print("  Errors:", file=sys.stderr)
    error_num = 1
    for error in errors:
        for part in error.split("; "):
            print(f"    {error_num}. {part}", file=sys.stderr)
            error_num += 1


def main() -> int:
    """Verify config files and print results."""
    has_errors = False
    configs_checked: list[tuple[str, Path, ValidationResult]] = []

    _print_header()

    for scope, path in (("User", _USER_CONFIG), ("Project", _PROJECT_CONFIG)):
        if not path.exists():
            continue
        result = validate_config_file(str(path))
        configs_checked.append((scope, path.resolve(), result))
        if result.errors:
            has_errors = True

    if not configs_checked:
        print("\nNo config files found. Using built-in policy only.")
        return 0

    for scope, path, result in configs_checked:
        if result.errors:
            _print_invalid_config(scope, path, result.errors)
        else:
            _print_valid_config(scope, path, result)

    if has_errors:
        print("\nConfig validation failed.", file=sys.stderr)
        return 1

    print("\nAll configs valid.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
