"""Tests for hook input handling and strict mode."""

import io
import json
import os
from unittest import mock

from scripts import command_blocker
from scripts.command_blocker_impl.patterns import BLOCKED_COMMAND_MESSAGES

from .command_blocker_test_base import CommandBlockerTestCase


class EdgeCasesTests(CommandBlockerTestCase):
    """Test edge cases and error handling."""

    def _run_raw(self, raw: str) -> str:
        with mock.patch("sys.stdin", io.StringIO(raw)):
            with mock.patch("sys.stdout", new_callable=io.StringIO) as mock_stdout:
                result = command_blocker.main()
                output = mock_stdout.getvalue()
        self.assertEqual(result, 0)
        return output

    def test_invalid_json_input_allows(self) -> None:
        """Invalid JSON input should allow the tool call (fail open)."""
        self.assertEqual(self._run_raw("not valid json"), "")

    def test_non_dict_input_allows(self) -> None:
        self.assertEqual(self._run_raw(json.dumps([1, 2, 3])), "")

    def test_unknown_tool_allows(self) -> None:
        output = self._run_hook("WebFetch", {"command": "node --version"})
        self.assertIsNone(output)

    def test_non_string_tool_name_allows(self) -> None:
        self.assertEqual(self._run_raw(json.dumps({"tool_name": 5})), "")

    def test_missing_tool_input_allows(self) -> None:
        self.assertEqual(self._run_raw(json.dumps({"tool_name": "Bash"})), "")

    def test_non_dict_tool_input_allows(self) -> None:
        raw = json.dumps({"tool_name": "Bash", "tool_input": ["command"]})
        self.assertEqual(self._run_raw(raw), "")

    def test_empty_command_allows(self) -> None:
        self._assert_allowed("")

    def test_non_string_command_allows(self) -> None:
        self.assertIsNone(self._run_hook("Bash", {"command": {"x": 1}}))

    def test_missing_file_path_allows(self) -> None:
        self.assertIsNone(self._run_hook("Edit", {}))
        self.assertIsNone(self._run_hook("Write", {"file_path": ""}))

    def test_reason_is_canned_message_verbatim(self) -> None:
        output = self._run_bash("python script.py")
        self._assert_denied(output, BLOCKED_COMMAND_MESSAGES["python"])
        assert output is not None
        self.assertEqual(output["hookSpecificOutput"]["hookEventName"], "PreToolUse")

    def test_multiedit_checked_like_edit(self) -> None:
        output = self._run_hook("MultiEdit", {"file_path": "poetry.lock"})
        self._assert_denied(output)

    def test_invalid_project_config_uses_builtin_policy(self) -> None:
        project = self.tmpdir / "project"
        project.mkdir()
        (project / ".command-blocker.json").write_text(
            '{"version": 999}', encoding="utf-8"
        )
        self.assertIsNone(self._run_bash("ls -la", cwd=str(project)))
        self._assert_denied(self._run_bash("npm install", cwd=str(project)))


class StrictModeTests(CommandBlockerTestCase):
    def setUp(self) -> None:
        super().setUp()
        self._env_patch = mock.patch.dict(os.environ, {"COMMAND_BLOCKER_STRICT": "1"})
        self._env_patch.start()

    def tearDown(self) -> None:
        self._env_patch.stop()
        super().tearDown()

    def _run_raw(self, raw: str) -> dict | None:
        with mock.patch("sys.stdin", io.StringIO(raw)):
            with mock.patch("sys.stdout", new_callable=io.StringIO) as mock_stdout:
                command_blocker.main()
                output = mock_stdout.getvalue()
        return json.loads(output) if output.strip() else None

    def test_invalid_json_denied(self) -> None:
        output = self._run_raw("not valid json")
        self._assert_denied(output, "Invalid hook input.")

    def test_non_dict_tool_input_denied(self) -> None:
        raw = json.dumps({"tool_name": "Bash", "tool_input": "ls"})
        self._assert_denied(self._run_raw(raw), "Invalid hook input.")

    def test_malformed_command_still_allowed(self) -> None:
        self.assertIsNone(self._run_hook("Bash", {"command": None}))

    def test_strict_mode_falsey_value(self) -> None:
        with mock.patch.dict(os.environ, {"COMMAND_BLOCKER_STRICT": "off"}):
            self.assertIsNone(self._run_raw("not valid json"))
