"""Protected file rules: lockfiles for edits, secret files for reads."""

import re

from .config import DEFAULT_POLICY, Policy
from .shell import _path_tokens


def _strip_suffixes(path: str) -> str:
    return path.split("?")[0].split("#")[0]


def _file_name(file_path: str) -> str:
    return _strip_suffixes(re.split(r"[/\\]", file_path)[-1])


def check_read_only_file(
    file_path: object, policy: Policy = DEFAULT_POLICY
) -> str | None:
    """Return the lockfile message if `file_path` names a generated lockfile."""
    if not isinstance(file_path, str) or not file_path:
        return None
    return policy.read_only_files.get(_file_name(file_path))


def check_secret_file(file_path: object, policy: Policy = DEFAULT_POLICY) -> str | None:
    """Return the secret-file message if `file_path` names a credential file.

    Entries without a slash match the basename exactly. Entries with a slash
    (`.kube/config`) match a trailing run of path segments.
    """
    if not isinstance(file_path, str) or not file_path:
        return None

    message = policy.secret_files.get(_file_name(file_path))
    if message:
        return message

    normalized = _strip_suffixes(file_path.replace("\\", "/"))
    for subpath, message in policy.secret_files.items():
        if "/" not in subpath:
            continue
        if normalized == subpath or normalized.endswith("/" + subpath):
            return message
    return None


def check_command_paths(command: object, policy: Policy = DEFAULT_POLICY) -> str | None:
    """Return the secret-file message for the first secret path in `command`."""
    if not isinstance(command, str):
        return None
    for token in _path_tokens(command):
        reason = check_secret_file(token, policy)
        if reason:
            return reason
    return None
