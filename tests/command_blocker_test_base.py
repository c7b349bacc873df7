"""Shared helpers for command blocker tests."""

import io
import json
from unittest import mock

from scripts import command_blocker

from . import TempDirTestCase


class CommandBlockerTestCase(TempDirTestCase):
    """Base test case with helpers for running the hook entry point."""

    def _run_hook(
        self,
        tool_name: str,
        tool_input: dict,
        *,
        cwd: str | None = None,
        session_id: str | None = None,
    ) -> dict | None:
        """Run the hook and return parsed output or None."""
        input_data: dict = {"tool_name": tool_name, "tool_input": tool_input}
        if cwd is not None:
            input_data["cwd"] = cwd
        if session_id is not None:
            input_data["session_id"] = session_id
        with mock.patch("sys.stdin", io.StringIO(json.dumps(input_data))):
            with mock.patch("sys.stdout", new_callable=io.StringIO) as mock_stdout:
                result = command_blocker.main()
                output = mock_stdout.getvalue()

        self.assertEqual(result, 0)
        if output.strip():
            parsed: dict = json.loads(output)
            return parsed
        return None

    def _run_bash(self, command: str, **kwargs) -> dict | None:
        return self._run_hook("Bash", {"command": command}, **kwargs)

    def _assert_denied(self, output: dict | None, reason: str | None = None) -> None:
        self.assertIsNotNone(output, "Expected the tool call to be denied")
        assert output is not None
        hook_output = output.get("hookSpecificOutput", {})
        self.assertEqual(hook_output.get("permissionDecision"), "deny")
        if reason is not None:
            self.assertEqual(hook_output.get("permissionDecisionReason"), reason)

    def _assert_blocked(self, command: str, reason: str | None = None) -> None:
        """Assert that a Bash command is denied, optionally with an exact reason."""
        output = self._run_bash(command)
        self.assertIsNotNone(output, f"Expected {command!r} to be blocked")
        self._assert_denied(output, reason)

    def _assert_allowed(self, command: str) -> None:
        """Assert that a Bash command is allowed (no output)."""
        output = self._run_bash(command)
        self.assertIsNone(output, f"Expected {command!r} to be allowed, got {output}")
