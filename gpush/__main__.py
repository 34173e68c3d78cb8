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
"""The gpush command line tool."""

import logging
from pathlib import Path
import sys
from typing import Sequence

from gpush import aliases, arguments, log, push, target
from gpush.errors import GpushError
from gpush.git_repo import GitRepo
from gpush.tool_runner import BasicSubprocessRunner, ToolRunner

_LOG = logging.getLogger(__name__)


def _main(
    argv: Sequence[str],
    tool_runner: ToolRunner,
    alias_file: Path | None,
) -> int:
    repo = GitRepo(Path.cwd(), tool_runner)

    alias_table = aliases.load(alias_file, repo)
    config = arguments.parse(argv, alias_table)

    if config.show_help:
        print(arguments.USAGE, end='')
        return 0

    if config.show_aliases:
        print(alias_table.describe())
        return 0

    resolved = target.resolve(config.ref_from, config.ref_to, repo)
    return push.run(config, resolved, repo)


def main(
    argv: Sequence[str] | None = None,
    tool_runner: ToolRunner | None = None,
    alias_file: Path | None = None,
) -> int:
    """Entry point for the gpush command.

    Returns:
        0 on success, git's exit code if git push fails, or 1 if gpush itself
        gave up.
    """
    if argv is None:
        argv = sys.argv[1:]
    if tool_runner is None:
        tool_runner = BasicSubprocessRunner()

    log.install(arguments.log_level(argv))

    try:
        return _main(argv, tool_runner, alias_file)
    except GpushError as err:
        _LOG.error('%s', err)
        return err.exit_code
    except KeyboardInterrupt:
        return 130


if __name__ == '__main__':
    sys.exit(main())
