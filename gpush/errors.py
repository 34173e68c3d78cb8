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
"""Errors raised by gpush.

Every error is fatal. ``gpush.__main__`` logs the message and exits with
``exit_code``.
"""


class GpushError(Exception):
    """Base class for all gpush failures."""

    exit_code = 1


class UsageError(GpushError):
    """The command line is invalid or self-contradictory."""


class ConfigError(GpushError):
    """The gpush.* git configuration is invalid."""


class ResolutionError(GpushError):
    """The destination branch could not be determined."""


class LaunchError(GpushError):
    """An external tool could not be started."""

    def __init__(self, tool: str, reason: OSError) -> None:
        super().__init__(f'failed to run {tool}: {reason}')
        self.tool = tool
