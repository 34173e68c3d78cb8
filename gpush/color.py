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
"""ANSI color helpers for log output."""

import os
import sys
from typing import Callable


def _make_color(*codes: int) -> Callable[[object], str]:
    # The reset is unbalanced with respect to the codes; '0' erases them all.
    start = ''.join(f'\033[{code}m' for code in codes)
    reset = '\033[0m'

    return lambda msg: f'{start}{msg}{reset}'


class Color:
    """Helpers to surround text with ANSI color escapes."""

    red = _make_color(31, 1)
    bold_red = _make_color(30, 41)
    yellow = _make_color(33, 1)
    green = _make_color(32)
    blue = _make_color(34, 1)
    magenta = _make_color(35, 1)
    bold_white = _make_color(37, 1)


class _NoColor:
    """Same interface as Color, but leaves text alone."""

    def __getattr__(self, _: str) -> Callable[[object], str]:
        return str


def _color_enabled() -> bool:
    override = os.environ.get('GPUSH_USE_COLOR')
    if override is not None:
        return override.strip().lower() in ('1', 'true', 'yes', 'on')
    if 'NO_COLOR' in os.environ:
        return False
    return sys.stderr.isatty()


def colors(enabled: bool | None = None) -> Color | _NoColor:
    """Returns an object with color helpers, or no-op helpers.

    Arguments:
        enabled: Force colors on or off. When None, colors are used if
            GPUSH_USE_COLOR asks for them, or if NO_COLOR is unset and stderr
            is a terminal.
    """
    if enabled is None:
        enabled = _color_enabled()
    return Color() if enabled else _NoColor()
