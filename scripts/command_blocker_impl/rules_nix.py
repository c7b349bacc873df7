"""Flake reference rules for `nix run` / `nix build`."""

import re

from .config import DEFAULT_POLICY, Policy
from .patterns import TRUSTED_FLAKE_PREFIXES
from .shell import parse_command

_NIX_ACTIONS = frozenset({"run", "build"})

_BARE_REFERENCE = re.compile(r"^[a-zA-Z0-9._-]+$")

# Shell spans that can hide a nix invocation.
_NIX_SPAN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\$\([^)]*nix[^)]*\)"),
    re.compile(r"`[^`]*nix[^`]*`"),
    re.compile(r"[\"'][^\"']*nix[^\"']*[\"']"),
)

_NIX_PHRASE = re.compile(r"nix\s+(run|build)\s+([^\s;&|`\"']*)")


def _is_untrusted_reference(ref: str, registries: frozenset[str]) -> bool:
    """Return True for flake references that resolve to an unpinned local path.

    Bare names are treated as local directories unless they are known
    registry entries, so `my-flake#app` is denied but `nixpkgs#hello` is not.
    """
    if not ref or ref.startswith(TRUSTED_FLAKE_PREFIXES):
        return False
    if ref.startswith(("./", "../", "/")):
        return True
    name = ref.split("#")[0]
    return bool(_BARE_REFERENCE.match(name)) and name not in registries


def _nix_indices(words: tuple[str, ...]) -> list[int]:
    return [i for i, word in enumerate(words) if word == "nix" or word.endswith("/nix")]


def _flake_argument(words: tuple[str, ...], start: int) -> str | None:
    """Return the first positional argument at or after `start`."""
    for word in words[start:]:
        if not word.startswith("-"):
            return word
    return None


def check_nix(command: object, policy: Policy = DEFAULT_POLICY) -> str | None:
    if not isinstance(command, str):
        return None

    message = policy.blocked_commands["nix"]
    registries = policy.flake_registries
    invocation = parse_command(command)

    inner = invocation.inner
    if inner is not None and "nix" in inner:
        reason = check_nix(inner, policy)
        if reason:
            return reason

    words = invocation.words
    for idx in _nix_indices(words):
        if idx + 1 >= len(words) or words[idx + 1] not in _NIX_ACTIONS:
            continue
        ref = _flake_argument(words, idx + 2)
        if ref and _is_untrusted_reference(ref, registries):
            return message

    for pattern in _NIX_SPAN_PATTERNS:
        for span in pattern.finditer(command):
            phrase = _NIX_PHRASE.search(span.group(0))
            if phrase and _is_untrusted_reference(phrase.group(2), registries):
                return message

    return None
