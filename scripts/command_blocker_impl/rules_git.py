"""Git command analysis rules for the command blocker.

Git is governed by an allow-list: the read-only subcommands are enumerable,
write operations are not.
"""

import re

from .config import DEFAULT_POLICY, Policy
from .shell import parse_command

# Places where git can run without being the first word of the command.
_GIT_CONTEXT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\$\([^)]*git[^)]*\)"),
    re.compile(r"`[^`]*git[^`]*`"),
    re.compile(r"[\"'][^\"']*git[^\"']*[\"']"),
    re.compile(r"[;&|]{1,2}\s*git"),
    re.compile(r"git\s*&"),
    re.compile(r"git\s*[<>]"),
)

_GIT_PHRASE = re.compile(r"git\s+[^\s;&|`]*")


def _is_read_only(text: str, allowed: tuple[str, ...]) -> bool:
    return any(text.startswith(prefix) for prefix in allowed)


def _embedded_git_phrases(command: str) -> list[str]:
    """Return every `git <subcommand>` phrase when git hides in shell syntax."""
    if not any(pattern.search(command) for pattern in _GIT_CONTEXT_PATTERNS):
        return []
    return [match.group(0) for match in _GIT_PHRASE.finditer(command)]


def check_git(command: object, policy: Policy = DEFAULT_POLICY) -> str | None:
    if not isinstance(command, str):
        return None

    message = policy.blocked_commands["git"]
    allowed = policy.allowed_git_commands
    invocation = parse_command(command)

    inner = invocation.inner
    if inner is not None and "git" in inner:
        if not _is_read_only(inner.strip(), allowed):
            return message

    if invocation.actual_first == "git":
        if not _is_read_only(command.strip(), allowed):
            return message

    # `git status | grep x` stays allowed: only git phrases are checked, never
    # what the pipe feeds.
    for phrase in _embedded_git_phrases(command):
        if not _is_read_only(phrase, allowed):
            return message

    return None
