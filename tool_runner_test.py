# Copyright 2026 The Pigweed Authors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License. You may obtain a copy of
# the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations under
# the License.
"""Tests for gpush.tool_runner."""

from pathlib import Path
import subprocess
import sys
import unittest
from typing import Any

from gpush import tool_runner
from gpush.tool_runner import ToolRunner


class TestBasicSubprocessRunner(unittest.TestCase):
    """Tests for tool_runner.BasicSubprocessRunner."""

    def test_captures_output(self):
        runner = tool_runner.BasicSubprocessRunner()
        result = runner(sys.executable, ('-c', 'print("hello world")'))
        self.assertEqual(result.returncode, 0)
        self.assertIn('hello world', result.stdout.decode())

    def test_nonzero_exit_does_not_raise(self):
        runner = tool_runner.BasicSubprocessRunner()
        result = runner(sys.executable, ('-c', 'raise SystemExit(3)'))
        self.assertEqual(result.returncode, 3)

    def test_missing_tool_raises_os_error(self):
        runner = tool_runner.BasicSubprocessRunner()
        with self.assertRaises(OSError):
            runner('gpush-this-tool-does-not-exist', ())


class FakeTool(ToolRunner):
    def __init__(self) -> None:
        self.received_args: list[str] = []
        self.received_kwargs: dict[str, Any] = {}

    def _run_tool(
        self, tool: str, args, **kwargs
    ) -> subprocess.CompletedProcess:
        self.received_args = list(args)
        self.received_kwargs = kwargs

        return subprocess.CompletedProcess(
            args=[tool, *args],
            returncode=0,
            stderr=b'',
            stdout=b'',
        )


class ToolRunnerCallTest(unittest.TestCase):
    """Tests argument forwarding to ToolRunner implementations."""

    def test_output_captured_by_default(self):
        tool = FakeTool()
        tool('git', ('status',))

        self.assertEqual(tool.received_args, ['status'])
        self.assertEqual(
            tool.received_kwargs,
            {'stdout': subprocess.PIPE, 'stderr': subprocess.PIPE},
        )

    def test_output_inherited_on_request(self):
        tool = FakeTool()
        tool('git', ('push',), capture_output=False, cwd='/tmp')

        self.assertEqual(
            tool.received_kwargs,
            {'stdout': None, 'stderr': None, 'cwd': '/tmp'},
        )

    def test_paths_become_strings(self):
        tool = FakeTool()
        tool('git', ('-C', Path('/dev/null/repo'), 'status'))
        self.assertEqual(
            tool.received_args,
            ['-C', str(Path('/dev/null/repo')), 'status'],
        )


if __name__ == '__main__':
    unittest.main()
