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
"""Reviewer and CC aliases.

Aliases come from two places, read in this order:

1. An alias file named ``gpush.aliases`` next to the gpush program (or the
   file named by ``GPUSH_ALIASES``), with lines like::

       alice, al = alice@example.com   # comment
       team = alice@example.com,bob@example.com

2. Git config entries named ``gpush.alias.<key>``. These override aliases
   from the file with the same key.

The same git config scan also picks up ``gpush.remote``.
"""

from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
import re
import sys
from typing import Iterable, Mapping

from gpush.errors import ConfigError
from gpush.git_repo import GitRepo
from gpush.log import LOGLEVEL_VERBOSE

_LOG = logging.getLogger(__name__)

ALIAS_FILE_NAME = 'gpush.aliases'
ALIAS_FILE_ENV = 'GPUSH_ALIASES'

_COMMENT = re.compile(r'(#|//).*$')
_ALIAS_LINE = re.compile(r'^(?P<keys>[^=]+)=(?P<value>.+)$')
_ALIAS_KEY = re.compile(r'^[^\s=,]+$')

_CONFIG_PATTERN = r'^gpush\.'
_CONFIG_ALIAS_PREFIX = 'gpush.alias.'
_CONFIG_REMOTE = 'gpush.remote'
_RETIRED_CONFIG_KEYS = ('gpush.ref-from', 'gpush.ref-to')


def _split_identities(value: str) -> list[str]:
    identities = [part.strip() for part in value.split(',')]
    return [identity for identity in identities if identity]


@dataclass(frozen=True)
class AliasTable:
    """Maps alias keys to reviewer identities.

    Attributes:
        aliases: Alias key to raw value; the value may list several
            comma-separated identities.
        remote: The remote named by ``gpush.remote``, if set.
    """

    aliases: Mapping[str, str] = field(default_factory=dict)
    remote: str | None = None

    def lookup(self, name: str) -> list[str]:
        """Expands ``name`` to the identities it stands for.

        Names that are not aliases are returned as the only identity.
        """
        value = self.aliases.get(name)
        if value is None:
            return [name]

        identities = _split_identities(value)
        _LOG.log(
            LOGLEVEL_VERBOSE,
            'Alias %s resolved to %s',
            name,
            ', '.join(identities),
        )
        return identities

    def keys(self) -> list[str]:
        return sorted(self.aliases)

    def describe(self) -> str:
        """Lists every alias and what it expands to, one per line."""
        if not self.aliases:
            return 'No aliases defined.'

        width = max(len(key) for key in self.aliases)
        lines = []
        for key in self.keys():
            identities = _split_identities(self.aliases[key])
            lines.append(f'{key:<{width}} = {", ".join(identities)}')
        return '\n'.join(lines)


def default_alias_file() -> Path:
    """Returns where the alias file is expected to live."""
    override = os.environ.get(ALIAS_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return Path(sys.argv[0]).resolve().parent / ALIAS_FILE_NAME


def parse_alias_lines(lines: Iterable[str]) -> dict[str, str]:
    """Parses ``key[,key...] = value`` lines; malformed lines are skipped."""
    aliases: dict[str, str] = {}

    for line_number, line in enumerate(lines, 1):
        line = _COMMENT.sub('', line).strip()
        if not line:
            continue

        match = _ALIAS_LINE.match(line)
        if not match:
            _LOG.debug('Skipping alias line %d: no "="', line_number)
            continue

        keys = [key.strip() for key in match.group('keys').split(',')]
        value = match.group('value').strip()
        if not value or not all(_ALIAS_KEY.match(key) for key in keys):
            _LOG.debug('Skipping malformed alias line %d', line_number)
            continue

        for key in keys:
            aliases[key] = value

    return aliases


def read_alias_file(path: Path) -> dict[str, str]:
    if not path.is_file():
        _LOG.debug('No alias file at %s', path)
        return {}

    _LOG.debug('Reading aliases from %s', path)
    with path.open(encoding='utf-8') as alias_file:
        return parse_alias_lines(alias_file)


def load(alias_file: Path | None, repo: GitRepo) -> AliasTable:
    """Builds the alias table from the alias file and git config.

    Arguments:
        alias_file: Path of the alias file, or None to use the default.
        repo: Repository whose (layered) git config is consulted.

    Raises:
        ConfigError: A retired gpush.* config key is set.
    """
    if alias_file is None:
        alias_file = default_alias_file()

    aliases = read_alias_file(alias_file)
    remote = None

    for key, value in repo.config_entries(_CONFIG_PATTERN):
        if key in _RETIRED_CONFIG_KEYS:
            raise ConfigError(
                f'the {key} config setting is no longer supported; '
                'pass [from]:[to] on the command line instead'
            )
        if key == _CONFIG_REMOTE:
            remote = value
        elif key.startswith(_CONFIG_ALIAS_PREFIX):
            name = key[len(_CONFIG_ALIAS_PREFIX) :]
            if name in aliases:
                _LOG.debug('git config overrides alias %s', name)
            aliases[name] = value
        else:
            _LOG.debug('Ignoring unknown config setting %s', key)

    return AliasTable(aliases=aliases, remote=remote)
