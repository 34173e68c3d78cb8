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
"""The handful of Git queries gpush needs, plus the push itself."""

import logging
from pathlib import Path
import shlex
from typing import Iterable, Sequence

from gpush.errors import GpushError, LaunchError
from gpush.tool_runner import ToolRunner

_LOG = logging.getLogger(__name__)


class GitError(GpushError):
    """A Git-raised exception."""

    def __init__(
        self, args: Iterable[str], message: str, returncode: int
    ) -> None:
        super().__init__(f'`git {shlex.join(args)}` failed: {message}')
        self.returncode = returncode


class _GitTool:
    def __init__(self, tool_runner: ToolRunner, working_dir: Path) -> None:
        self._run_tool = tool_runner
        self._working_dir = working_dir

    def __call__(self, *args: str) -> str:
        cmd = ('-C', str(self._working_dir), *args)
        _LOG.debug('git %s', shlex.join(cmd))
        try:
            proc = self._run_tool(tool='git', args=cmd)
        except OSError as err:
            raise LaunchError('git', err) from err

        if proc.returncode != 0:
            if not proc.stderr:
                message = '(no output)'
            else:
                message = proc.stderr.decode().strip()
            raise GitError(cmd, message, proc.returncode)

        return '' if not proc.stdout else proc.stdout.decode().strip()


class GitRepo:
    """A Git working tree that gpush queries and pushes from."""

    def __init__(self, root: Path, tool_runner: ToolRunner):
        self._root = root.resolve()
        self._run_tool = tool_runner
        self._git = _GitTool(tool_runner, self._root)

    def root(self) -> Path:
        return self._root

    def symbolic_ref(self, ref: str) -> str | None:
        """Returns the ref that ``ref`` points to, if it is a symbolic ref.

        For example ``HEAD`` usually resolves to ``refs/heads/<branch>``.

        Returns:
            The full name of the target ref, or None if ``ref`` is not a
            symbolic ref (or does not exist).
        """
        try:
            return self._git('symbolic-ref', '-q', ref) or None
        except GitError:
            return None

    def ref_exists(self, ref: str) -> bool:
        """Returns True if ``ref`` names a valid object."""
        try:
            self._git('rev-parse', '--verify', '-q', ref)
        except GitError:
            return False
        return True

    def config_value(self, key: str) -> str | None:
        """Returns a single config value, or None if it is not set."""
        try:
            return self._git('config', '--get', key)
        except GitError as err:
            # git config exits with 1 when the key is missing.
            if err.returncode == 1:
                return None
            raise

    def config_entries(self, pattern: str) -> list[tuple[str, str]]:
        """Lists every config entry whose key matches ``pattern``.

        Entries come back in the order git reads them (system, global, then
        local), so later entries override earlier ones.

        Arguments:
            pattern: A regular expression matched against the full key name.

        Returns:
            A list of ``(key, value)`` pairs. Keys without a value map to ''.
        """
        try:
            output = self._git('config', '-z', '--get-regexp', pattern)
        except GitError as err:
            if err.returncode == 1:
                return []
            raise

        entries = []
        for record in output.split('\0'):
            if not record:
                continue
            key, _, value = record.partition('\n')
            entries.append((key, value))
        return entries

    def commit_subject(self, commit: str = 'HEAD') -> str:
        """Returns the first line of the commit message of ``commit``."""
        return self._git('log', '-n1', '--format=%s', commit)

    def push(self, args: Sequence[str]) -> int:
        """Runs ``git push`` with its output going straight to the terminal.

        Raises:
            LaunchError: git could not be started.
            GitError: git was killed by a signal.

        Returns:
            The exit code of git.
        """
        cmd = ('-C', str(self._root), *args)
        _LOG.debug('git %s', shlex.join(cmd))
        try:
            proc = self._run_tool(tool='git', args=cmd, capture_output=False)
        except OSError as err:
            raise LaunchError('git', err) from err

        if proc.returncode < 0:
            raise GitError(
                cmd, f'killed by signal {-proc.returncode}', proc.returncode
            )
        return proc.returncode
