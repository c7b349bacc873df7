"""Static policy tables for the command blocker.

Every denial reuses one of the messages below verbatim; nothing is templated.
"""

import re
from types import MappingProxyType

BLOCKED_COMMAND_MESSAGES = MappingProxyType(
    {
        "node": (
            "`node` is blocked to ensure reproducible builds. Use `bun` (faster, "
            "more reliable) or `bunx` for running scripts. Example: `bun run dev` "
            "instead of `node server.js`"
        ),
        "npm": (
            "`npm` is blocked to ensure reproducible builds. Use `bun` (faster, "
            "more reliable) instead. Examples: `bun install` instead of "
            "`npm install`, `bun run build` instead of `npm run build`"
        ),
        "npx": (
            "`npx` is blocked to ensure reproducible builds. Use `bunx` (faster, "
            "more reliable) instead. Examples: `bunx create-react-app my-app` "
            "instead of `npx create-react-app my-app`"
        ),
        "pip": (
            "`pip` is blocked to ensure reproducible builds. Use `uv` or `uvx` for "
            "dependency management. Example: `uv add requests` instead of "
            "`pip install requests`"
        ),
        "python": (
            "`python` is blocked to ensure environment isolation. Use `uv` for "
            "dependency management or `uvx` for running tools. Virtual environment "
            "python (e.g., `.venv/bin/python`) is allowed. Example: "
            "`uv run python script.py`"
        ),
        "python2": (
            "`python2` is blocked (Python 2 is deprecated). Use `uv` with Python 3 "
            "for modern dependency management. Virtual environment python2 "
            "commands are allowed if needed. Example: "
            "`uv run --python 3.8 python script.py`"
        ),
        "python3": (
            "`python3` is blocked to ensure environment isolation. Use `uv` for "
            "dependency management or `uvx` for running tools. Virtual environment "
            "python3 (e.g., `.venv/bin/python3`) is allowed. Example: "
            "`uv run python3 script.py`"
        ),
        "git": (
            "`git` write operations are blocked to prevent agents from managing "
            "version control. Only read-only commands are allowed: `git status`, "
            "`git diff`, `git show`, `git log`, `git rev-parse`."
        ),
        "nix": (
            "Local flake paths without `path:` prefix are blocked to ensure "
            "reproducible builds. Use `path:` for local flakes (includes "
            "uncommitted changes), `github:` for remote repos, or `git+https:` for "
            "git URLs. Examples: `nix run path:./my-flake#output`, "
            "`nix run github:user/repo#output`"
        ),
    }
)

# Tokens with their own classifier instead of the generic deny scan.
SPECIALIZED_COMMANDS = frozenset({"git", "nix"})

READ_ONLY_FILES = MappingProxyType(
    {
        "flake.lock": (
            "`flake.lock` editing is blocked to ensure reproducible builds. This "
            "auto-generated file pins exact dependency versions for Nix flakes. "
            "Use `nix flake update` to safely update dependencies."
        ),
        "package-lock.json": (
            "`package-lock.json` editing is blocked to ensure reproducible builds. "
            "This auto-generated file ensures consistent npm installs. Use "
            "`bun install` or `bun update` to modify dependencies."
        ),
        "bun.lockb": (
            "`bun.lockb` editing is blocked to ensure reproducible builds. This "
            "auto-generated binary lockfile ensures consistent Bun installs. Use "
            "`bun install` or `bun update` to modify dependencies."
        ),
        "yarn.lock": (
            "`yarn.lock` editing is blocked to ensure reproducible builds. This "
            "auto-generated file ensures consistent Yarn installs. Use "
            "`yarn install` or `yarn upgrade` to modify dependencies."
        ),
        "pnpm-lock.yaml": (
            "`pnpm-lock.yaml` editing is blocked to ensure reproducible builds. "
            "This auto-generated file ensures consistent pnpm installs. Use "
            "`pnpm install` or `pnpm update` to modify dependencies."
        ),
        "poetry.lock": (
            "`poetry.lock` editing is blocked to ensure reproducible builds. This "
            "auto-generated file pins exact dependency versions for Poetry. Use "
            "`poetry install` or `poetry update` to modify dependencies."
        ),
        "uv.lock": (
            "`uv.lock` editing is blocked to ensure reproducible builds. This "
            "auto-generated file ensures consistent Python environments. Use "
            "`uv sync` or `uv lock` to modify dependencies."
        ),
        "Cargo.lock": (
            "`Cargo.lock` editing is blocked to ensure reproducible builds. This "
            "auto-generated file pins exact dependency versions for Rust. Use "
            "`cargo update` to safely update dependencies."
        ),
        "Gemfile.lock": (
            "`Gemfile.lock` editing is blocked to ensure reproducible builds. This "
            "auto-generated file ensures consistent Ruby environments. Use "
            "`bundle install` or `bundle update` to modify dependencies."
        ),
    }
)

# Keys containing "/" are matched as path suffixes, the rest as basenames.
SECRET_FILES = MappingProxyType(
    {
        ".env": (
            "`.env` reading is blocked to keep secrets out of the conversation. "
            "Environment files hold API keys and credentials. Document required "
            "variables in `.env.example` and read that instead."
        ),
        ".env.local": (
            "`.env.local` reading is blocked to keep secrets out of the "
            "conversation. Local environment overrides hold API keys and "
            "credentials. Read `.env.example` to learn the variable names instead."
        ),
        ".env.production": (
            "`.env.production` reading is blocked to keep secrets out of the "
            "conversation. Production environment files hold live credentials. "
            "Read `.env.example` to learn the variable names instead."
        ),
        ".netrc": (
            "`.netrc` reading is blocked to keep secrets out of the conversation. "
            "This file stores machine login passwords. Use a credential helper "
            "such as `gh auth status` to check authentication instead."
        ),
        ".pgpass": (
            "`.pgpass` reading is blocked to keep secrets out of the conversation. "
            "This file stores PostgreSQL passwords. Use `pg_isready` to check "
            "database connectivity instead."
        ),
        "id_rsa": (
            "`id_rsa` reading is blocked to keep secrets out of the conversation. "
            "Private SSH keys must never leave the machine. Read the public key "
            "`id_rsa.pub` or run `ssh-add -l` instead."
        ),
        "id_ed25519": (
            "`id_ed25519` reading is blocked to keep secrets out of the "
            "conversation. Private SSH keys must never leave the machine. Read the "
            "public key `id_ed25519.pub` or run `ssh-add -l` instead."
        ),
        "id_ecdsa": (
            "`id_ecdsa` reading is blocked to keep secrets out of the "
            "conversation. Private SSH keys must never leave the machine. Read the "
            "public key `id_ecdsa.pub` or run `ssh-add -l` instead."
        ),
        "id_dsa": (
            "`id_dsa` reading is blocked to keep secrets out of the conversation. "
            "Private SSH keys must never leave the machine. Read the public key "
            "`id_dsa.pub` or run `ssh-add -l` instead."
        ),
        ".aws/credentials": (
            "`.aws/credentials` reading is blocked to keep secrets out of the "
            "conversation. This file stores AWS access keys. Use "
            "`aws sts get-caller-identity` to check the active identity instead."
        ),
        ".kube/config": (
            "`.kube/config` reading is blocked to keep secrets out of the "
            "conversation. This file stores cluster tokens and certificates. Use "
            "`kubectl config current-context` to inspect the context instead."
        ),
        ".docker/config.json": (
            "`.docker/config.json` reading is blocked to keep secrets out of the "
            "conversation. This file stores registry auth tokens. Use "
            "`docker info` to inspect the daemon configuration instead."
        ),
        ".config/gh/hosts.yml": (
            "`.config/gh/hosts.yml` reading is blocked to keep secrets out of the "
            "conversation. This file stores GitHub OAuth tokens. Use "
            "`gh auth status` to check authentication instead."
        ),
    }
)

ALLOWED_GIT_COMMANDS: tuple[str, ...] = (
    "git diff",
    "git log",
    "git rev-parse",
    "git show",
    "git status",
)

TRUSTED_FLAKE_PREFIXES: tuple[str, ...] = ("path:", "github:", "git+https:")

# Entries of the global flake registry that resolve to pinned remote flakes.
FLAKE_REGISTRIES = frozenset(
    {
        "nixpkgs",
        "nixos-hardware",
        "home-manager",
        "nix-darwin",
        "flake-utils",
        "templates",
    }
)

VENV_PYTHON_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"[./\\]*\.venv[/\\]bin[/\\]python\d*"),
    re.compile(r"[./\\]*venv[/\\]bin[/\\]python\d*"),
    re.compile(r"[./\\]*env[/\\]bin[/\\]python\d*"),
    re.compile(r"uv run python\d*"),
    re.compile(r"uvx python\d*"),
)
