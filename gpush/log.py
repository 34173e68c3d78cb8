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
"""Tools for configuring Python logging for gpush."""

import logging
from typing import NamedTuple

import gpush.color

# Between DEBUG and INFO: shown with --verbose, hidden by default.
LOGLEVEL_VERBOSE = 15


class _LogLevel(NamedTuple):
    level: int
    color: str
    ascii: str


# Shorten all the log levels to 3 characters for column-aligned logs.
_LOG_LEVELS = (
    _LogLevel(logging.CRITICAL, 'bold_red', 'CRT'),
    _LogLevel(logging.ERROR,    'red',      'ERR'),
    _LogLevel(logging.WARNING,  'yellow',   'WRN'),
    _LogLevel(logging.INFO,     'magenta',  'INF'),
    _LogLevel(LOGLEVEL_VERBOSE, 'green',    'VRB'),
    _LogLevel(logging.DEBUG,    'blue',     'DBG'),
)  # yapf: disable

_STDERR_HANDLER = logging.StreamHandler()


def level_for(quiet: bool = False, verbose: bool = False,
              debug: bool = False) -> int:
    """Maps the command line verbosity flags to a log level."""
    if debug:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    if verbose:
        return LOGLEVEL_VERBOSE
    return logging.INFO


def install(level: int = logging.INFO, use_color: bool | None = None) -> None:
    """Configures the root logger to write gpush messages to stderr."""

    colors = gpush.color.colors(use_color)

    formatter = logging.Formatter('%(levelname)s %(message)s')

    # The root logger passes everything through; the handler does the
    # filtering, so install() can be called again to change the level.
    logging.getLogger().setLevel(1)

    _STDERR_HANDLER.setLevel(level)
    _STDERR_HANDLER.setFormatter(formatter)
    logging.getLogger().addHandler(_STDERR_HANDLER)

    for log_level in _LOG_LEVELS:
        colorize = getattr(colors, log_level.color)
        logging.addLevelName(log_level.level, colorize(log_level.ascii))
