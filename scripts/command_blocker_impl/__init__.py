"""Tool-use policy engine for the command blocker hook."""

from .hook import (
    PolicyViolation,
    before_tool_execute,
    check_tool_use,
    on_before_execute,
)

__all__ = [
    "PolicyViolation",
    "before_tool_execute",
    "check_tool_use",
    "on_before_execute",
]
