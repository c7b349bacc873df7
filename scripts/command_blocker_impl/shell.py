"""Best-effort command tokenizing for the command blocker.

This is not a shell parser. Commands are split on whitespace and scanned as
text; the classifiers layer regexes on top of these views.
"""

import re
from dataclasses import dataclass

_WRAPPERS = frozenset({"exec", "eval"})

# Characters that cannot be part of a path-shaped argument token.
_PATH_TOKEN_SEPARATORS = re.compile(r"[\s;&|<>()`'\"=$]+")


@dataclass(frozen=True)
class CommandInvocation:
    """Derived views of a raw command string."""

    raw: str
    words: tuple[str, ...]
    first: str
    actual_first: str
    inner: str | None


def _split_words(command: str) -> tuple[str, ...]:
    return tuple(command.strip().split())


def _actual_first_word(words: tuple[str, ...]) -> str:
    """Return the first word, skipping a leading `VAR=value ...` prefix."""
    if not words:
        return ""
    first = words[0]
    if "=" not in first:
        return first
    for word in words[1:]:
        if "=" not in word:
            return word
    return first


def _unwrap_wrapper(words: tuple[str, ...]) -> str | None:
    """Return the command wrapped by `exec`/`eval`, or None."""
    if not words or words[0] not in _WRAPPERS:
        return None
    return " ".join(words[1:])


def parse_command(command: str) -> CommandInvocation:
    words = _split_words(command)
    return CommandInvocation(
        raw=command,
        words=words,
        first=words[0] if words else "",
        actual_first=_actual_first_word(words),
        inner=_unwrap_wrapper(words),
    )


def _is_lookup(command: str) -> bool:
    # `which node` / `whereis python` only locate binaries.
    return "which" in command or "whereis" in command


def _path_tokens(command: str) -> list[str]:
    """Split a command into bare tokens that may name files.

    Quotes, substitutions, operators and `=` all act as separators so that
    `cat ".env"`, `$(cat .env)` and `--env-file=.env` all yield `.env`.
    """
    return [tok for tok in _PATH_TOKEN_SEPARATORS.split(command) if tok]
