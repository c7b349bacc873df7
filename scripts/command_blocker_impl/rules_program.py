"""Deny-list rules for interpreters and package managers."""

import re

from .config import DEFAULT_POLICY, Policy
from .patterns import SPECIALIZED_COMMANDS, VENV_PYTHON_PATTERNS
from .shell import _is_lookup, parse_command


def _obfuscation_patterns(token: str) -> list[re.Pattern[str]]:
    """Regexes that find `token` hidden behind shell syntax."""
    t = re.escape(token)
    escaped = "".join(re.escape(ch) + r"\\?" for ch in token)
    return [
        re.compile(rf"\b{t}\b"),
        re.compile(rf"\$\([^)]*\b{t}\b[^)]*\)"),
        re.compile(rf"`[^`]*\b{t}\b[^`]*`"),
        re.compile(rf"[\"'][^\"']*\b{t}\b[^\"']*[\"']"),
        re.compile(rf"[;&|]{{1,2}}\s*\b{t}\b"),
        re.compile(rf"\b{t}\b\s*&"),
        re.compile(rf"\b{t}\b\s*[<>]"),
        re.compile(rf"\b{escaped}\b"),
    ]


def _is_venv_python(text: str) -> bool:
    return any(pattern.search(text) for pattern in VENV_PYTHON_PATTERNS)


def _invokes(token: str, command: str, actual_first: str) -> bool:
    if token.startswith("python") and _is_venv_python(actual_first):
        return False

    for pattern in _obfuscation_patterns(token):
        if not pattern.search(command):
            continue
        # The venv check runs against the whole command: `cd x & .venv/bin/python`.
        if token.startswith("python") and _is_venv_python(command):
            continue
        return True
    return False


def check_program(command: object, policy: Policy = DEFAULT_POLICY) -> str | None:
    """Return the canned message for the first blocked program `command` runs."""
    if not isinstance(command, str):
        return None

    invocation = parse_command(command)
    lookup = _is_lookup(command)

    for token, message in policy.blocked_commands.items():
        if token in SPECIALIZED_COMMANDS:
            continue

        env_prefixed = rf"^[A-Z_][A-Z0-9_]*=.*\b{re.escape(token)}\b"
        if re.match(env_prefixed, command, flags=re.IGNORECASE):
            return message

        if invocation.inner is not None and token in invocation.inner:
            return message

        if invocation.actual_first == token:
            return message

        if not lookup and _invokes(token, command, invocation.actual_first):
            return message

    return None
