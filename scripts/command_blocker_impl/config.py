"""Config loading, parsing, and validation for policy extensions."""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .patterns import (
    ALLOWED_GIT_COMMANDS,
    BLOCKED_COMMAND_MESSAGES,
    FLAKE_REGISTRIES,
    READ_ONLY_FILES,
    SECRET_FILES,
)


class ConfigError(Exception):
    """Raised when config file is invalid."""


@dataclass(frozen=True)
class Policy:
    """Read-only tables consulted by the classifiers."""

    blocked_commands: Mapping[str, str]
    read_only_files: Mapping[str, str]
    secret_files: Mapping[str, str]
    allowed_git_commands: tuple[str, ...]
    flake_registries: frozenset[str]


DEFAULT_POLICY = Policy(
    blocked_commands=BLOCKED_COMMAND_MESSAGES,
    read_only_files=READ_ONLY_FILES,
    secret_files=SECRET_FILES,
    allowed_git_commands=ALLOWED_GIT_COMMANDS,
    flake_registries=FLAKE_REGISTRIES,
)


@dataclass
class Config:
    """Loaded configuration extending the built-in policy."""

    version: int
    allowed_git_commands: list[str] = field(default_factory=list)
    read_only_files: dict[str, str] = field(default_factory=dict)
    secret_files: dict[str, str] = field(default_factory=dict)
    flake_registries: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.allowed_git_commands
            or self.read_only_files
            or self.secret_files
            or self.flake_registries
        )

    def to_policy(self, base: Policy = DEFAULT_POLICY) -> Policy:
        """Return a new policy with this config layered over `base`.

        Built-in entries always win so their messages stay fixed.
        """
        allowed = list(base.allowed_git_commands)
        for prefix in self.allowed_git_commands:
            if prefix not in allowed:
                allowed.append(prefix)

        return Policy(
            blocked_commands=base.blocked_commands,
            read_only_files=MappingProxyType(
                {**self.read_only_files, **base.read_only_files}
            ),
            secret_files=MappingProxyType({**self.secret_files, **base.secret_files}),
            allowed_git_commands=tuple(allowed),
            flake_registries=base.flake_registries | frozenset(self.flake_registries),
        )


@dataclass
class ValidationResult:
    """Result of config file validation."""

    errors: list[str]
    summary: list[str]  # Empty if errors exist


_REGISTRY_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
_MAX_REASON_LENGTH = 256


def _validate_reason_map(data: object, key: str, *, allow_subpath: bool) -> list[str]:
    if not isinstance(data, dict):
        return [f"'{key}' must be an object"]

    errors: list[str] = []
    for name, reason in data.items():
        if not name:
            errors.append(f"{key}: file name must not be empty")
        elif "\\" in name or (not allow_subpath and "/" in name):
            errors.append(f"{key}[{name!r}]: must be a bare file name")
        elif name.startswith("/"):
            errors.append(f"{key}[{name!r}]: must be a relative path")

        if not isinstance(reason, str):
            errors.append(f"{key}[{name!r}]: reason must be a string")
        elif not reason:
            errors.append(f"{key}[{name!r}]: reason must not be empty")
        elif len(reason) > _MAX_REASON_LENGTH:
            errors.append(
                f"{key}[{name!r}]: reason exceeds max length of {_MAX_REASON_LENGTH}"
            )
    return errors


def _validate_config(data: dict) -> Config:
    """Validate config dict and return Config object."""
    if "version" not in data:
        raise ConfigError("missing required field 'version'")

    version = data["version"]
    if not isinstance(version, int) or isinstance(version, bool):
        raise ConfigError("'version' must be an integer")
    if version != 1:
        raise ConfigError(f"unsupported version {version}, expected 1")

    errors: list[str] = []

    allowed_git = data.get("allowed_git_commands", [])
    if not isinstance(allowed_git, list):
        errors.append("'allowed_git_commands' must be an array")
    else:
        for i, prefix in enumerate(allowed_git):
            if not isinstance(prefix, str):
                errors.append(f"allowed_git_commands[{i}]: must be a string")
            elif not prefix.startswith("git ") or not prefix[4:].strip():
                errors.append(
                    f"allowed_git_commands[{i}]: must start with 'git <subcommand>'"
                )

    read_only = data.get("read_only_files", {})
    errors.extend(
        _validate_reason_map(read_only, "read_only_files", allow_subpath=False)
    )

    secrets = data.get("secret_files", {})
    errors.extend(_validate_reason_map(secrets, "secret_files", allow_subpath=True))

    registries = data.get("flake_registries", [])
    if not isinstance(registries, list):
        errors.append("'flake_registries' must be an array")
    else:
        for i, name in enumerate(registries):
            if not isinstance(name, str):
                errors.append(f"flake_registries[{i}]: must be a string")
            elif not _REGISTRY_PATTERN.match(name):
                errors.append(
                    f"flake_registries[{i}]: must match pattern ^[A-Za-z0-9._-]+$"
                )

    if errors:
        raise ConfigError("; ".join(errors))

    return Config(
        version=version,
        allowed_git_commands=list(allowed_git),
        read_only_files=dict(read_only),
        secret_files=dict(secrets),
        flake_registries=list(registries),
    )


def _load_single_config(path: Path) -> Config | None:
    """Load and validate a single config file.

    Returns None if file doesn't exist, is invalid, or has errors.
    """
    if not path.exists():
        return None

    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return None

    if not content.strip():
        return None

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return None

    if not isinstance(data, dict):
        return None

    try:
        return _validate_config(data)
    except ConfigError:
        return None


def _merge_configs(user_config: Config | None, project_config: Config | None) -> Config:
    """Merge user and project configs.

    Project entries override user entries with the same file name; lists are
    unioned in user-then-project order.
    """
    if user_config is None and project_config is None:
        return Config(version=1)

    if user_config is None:
        return project_config  # type: ignore[return-value]

    if project_config is None:
        return user_config

    def _union(first: list[str], second: list[str]) -> list[str]:
        merged = list(first)
        merged.extend(item for item in second if item not in merged)
        return merged

    return Config(
        version=1,
        allowed_git_commands=_union(
            user_config.allowed_git_commands, project_config.allowed_git_commands
        ),
        read_only_files={
            **user_config.read_only_files,
            **project_config.read_only_files,
        },
        secret_files={**user_config.secret_files, **project_config.secret_files},
        flake_registries=_union(
            user_config.flake_registries, project_config.flake_registries
        ),
    )


def user_config_path() -> Path:
    return Path.home() / ".command-blocker" / "config.json"


def load_config(cwd: str | None = None) -> Config | None:
    """Load config with scope merging.

    Loads from two scopes:
    1. User scope: ~/.command-blocker/config.json (always loaded if exists)
    2. Project scope: .command-blocker.json in cwd (loaded if exists)

    Returns None only if both scopes have no valid config.
    All errors are silent; the built-in policy applies unchanged.
    """
    user_config = _load_single_config(user_config_path())

    project_config: Config | None = None
    if cwd:
        project_config = _load_single_config(Path(cwd) / ".command-blocker.json")

    if user_config is None and project_config is None:
        return None

    return _merge_configs(user_config, project_config)


def load_policy(cwd: str | None = None) -> Policy:
    config = load_config(cwd)
    if config is None or config.is_empty():
        return DEFAULT_POLICY
    return config.to_policy()


def _summarize(config: Config) -> list[str]:
    summary: list[str] = []
    for prefix in config.allowed_git_commands:
        summary.append(f"allow: {prefix}")
    for name in config.read_only_files:
        summary.append(f"read-only: {name}")
    for name in config.secret_files:
        summary.append(f"secret: {name}")
    for name in config.flake_registries:
        summary.append(f"registry: {name}")
    return summary


def validate_config_file(path: str) -> ValidationResult:
    """Validate a config file and return result with errors and a summary."""
    config_path = Path(path).expanduser()

    if not config_path.exists():
        return ValidationResult(errors=[f"file not found: {path}"], summary=[])

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        return ValidationResult(errors=[f"cannot read file: {e}"], summary=[])

    if not content.strip():
        return ValidationResult(errors=["config file is empty"], summary=[])

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        return ValidationResult(errors=[f"invalid JSON: {e}"], summary=[])

    if not isinstance(data, dict):
        return ValidationResult(errors=["config must be a JSON object"], summary=[])

    try:
        config = _validate_config(data)
        return ValidationResult(errors=[], summary=_summarize(config))
    except ConfigError as e:
        return ValidationResult(errors=[str(e)], summary=[])
