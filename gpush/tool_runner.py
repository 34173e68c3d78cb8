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
"""Runs external tools (in practice, git) on behalf of gpush."""

import abc
from pathlib import Path
from typing import Iterable

import subprocess


class ToolRunner(abc.ABC):
    """Starts a tool and waits for it to exit.

    gpush talks to git in two ways: short queries whose output is parsed,
    and the final ``git push`` whose progress output belongs on the user's
    terminal. ``capture_output`` picks between the two. Tests replace the
    runner with one that answers from canned results.
    """

    def __call__(
        self,
        tool: str,
        args: Iterable[str | Path],
        capture_output: bool = True,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """Runs ``tool`` with ``args`` converted to strings.

        Arguments:
            tool: The program to run.
            args: Its arguments.
            capture_output: Collect stdout and stderr into the result. If
                False, both streams are inherited from gpush.
            **kwargs: Extra ``subprocess.run()`` arguments, such as ``cwd``.

        Raises:
            OSError: The tool could not be started.

        Returns:
            The finished process. A nonzero exit is not an error here.
        """
        stream = subprocess.PIPE if capture_output else None
        return self._run_tool(
            tool,
            [str(arg) for arg in args],
            stdout=stream,
            stderr=stream,
            **kwargs,
        )

    @abc.abstractmethod
    def _run_tool(
        self, tool: str, args: list[str], **kwargs
    ) -> subprocess.CompletedProcess:
        """Runs the tool. ``kwargs`` always include ``stdout``/``stderr``."""


class BasicSubprocessRunner(ToolRunner):
    """Runs tools with subprocess.run()."""

    def _run_tool(
        self, tool: str, args: list[str], **kwargs
    ) -> subprocess.CompletedProcess:
        return subprocess.run([tool, *args], check=False, **kwargs)
