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
"""Command line parsing for gpush.

The gpush command line is too irregular for argparse: ``+name`` and
``=name`` tokens add reviewers and CCs, a ``from:to`` token picks the refs,
and anything unrecognized is handed to ``git push``. Tokens are classified
one at a time, left to right.
"""

from dataclasses import dataclass, field
import enum
import logging
import re
from typing import Sequence

from gpush import log
from gpush.aliases import AliasTable
from gpush.errors import UsageError

_LOG = logging.getLogger(__name__)

DEFAULT_REMOTE = 'gerrit'
DEFAULT_REF_FROM = 'HEAD'

FOR_PREFIX = 'refs/for/'
DRAFTS_PREFIX = 'refs/drafts/'

_HELP_FLAGS = frozenset(('-?', '--?', '-h', '--help'))
_REFSPEC = re.compile(r'^(?P<ref_from>[^:]*):(?P<ref_to>[^:]*)$')

# A (log level, message) pair, logged once parsing succeeds.
_Notice = tuple[int, str]

USAGE = '''\
usage: gpush [options] [[from]:[to]] [+reviewer]... [=cc]... [-- git-args...]

Pushes commits to Gerrit for review.

  [from]:[to]         Push <from> (default HEAD) for review on branch <to>
                      (default: the branch <from> tracks).
  +name               Add a reviewer. Aliases are expanded.
  =name               CC someone. Aliases are expanded.
  -- git-args...      Pass the remaining arguments to git push unchanged.

options:
  -d, --draft         Push as a draft.
  -p, --publish       Push for review even if the commit looks like a WIP.
  -r, --remote NAME   Push to NAME instead of "gerrit" (or gpush.remote).
  -n, --dry-run       Do everything except actually send the commits.
  -v, --verbose       Say more about what is happening.
  -q, --quiet         Only report errors.
      --debug         Also show the git commands gpush runs.
      --aliases       List the known aliases and exit.
  -h, --help          Show this message and exit.

Other options starting with "-" are passed to git push.

Without --draft or --publish, the change is pushed as a draft when the
commit subject contains the word WIP, contains "***", or is a single
repeated character.

Aliases are read from gpush.aliases next to this program ("key[,key] = value"
lines) and from "gpush.alias.<key>" git config settings.
'''


class Draft(enum.Enum):
    """Whether the change should be pushed as a draft."""

    UNSET = 'unset'
    DRAFT = 'draft'
    PUBLISH = 'publish'


@dataclass
class ParsedConfig:
    """Everything gpush learned from the command line."""

    draft: Draft = Draft.UNSET
    dry_run: bool = False
    verbose: bool = False
    quiet: bool = False
    debug: bool = False
    remote: str = DEFAULT_REMOTE
    ref_from: str = DEFAULT_REF_FROM
    ref_to: str = ''
    reviewers: list[str] = field(default_factory=list)
    ccs: list[str] = field(default_factory=list)
    passthrough: list[str] = field(default_factory=list)
    show_aliases: bool = False
    show_help: bool = False


def log_level(tokens: Sequence[str]) -> int:
    """Picks a log level from the verbosity flags, before full parsing.

    Logging has to be set up before aliases are loaded, which in turn happens
    before the command line is parsed.
    """
    quiet = verbose = debug = False
    for token in tokens:
        if token == '--':
            break
        if token in ('-q', '--quiet'):
            quiet = True
        elif token in ('-v', '--verbose'):
            verbose = True
        elif token == '--debug':
            debug = True
    return log.level_for(quiet=quiet, verbose=verbose, debug=debug)


def _expand(token: str, alias_table: AliasTable) -> list[str]:
    name = token[1:]
    if not name:
        raise UsageError(f'"{token}" must be followed by a name or alias')
    return alias_table.lookup(name)


def parse(tokens: Sequence[str], alias_table: AliasTable) -> ParsedConfig:
    """Parses the gpush command line.

    Arguments:
        tokens: The command line arguments, without the program name.
        alias_table: Used to expand ``+name`` and ``=name`` tokens.

    Raises:
        UsageError: The command line is invalid.

    Returns:
        The parsed configuration. ``ref_to`` is empty if the destination
        branch must be derived from the tracking branch.
    """
    config = ParsedConfig()
    if alias_table.remote:
        config.remote = alias_table.remote

    notices: list[_Notice] = []
    remote_locked = False
    ref_locked = False

    remaining = list(tokens)
    while remaining:
        token = remaining.pop(0)

        if token in ('-v', '--verbose'):
            config.verbose = True
        elif token in ('-q', '--quiet'):
            config.quiet = True
        elif token == '--debug':
            config.debug = True
            config.verbose = True
        elif token in ('-n', '--dry-run'):
            config.dry_run = True
        elif token in ('-d', '--draft'):
            config.draft = Draft.DRAFT
        elif token in ('-p', '--publish'):
            config.draft = Draft.PUBLISH
        elif token in ('-r', '--remote'):
            if not remaining or remaining[0].startswith('-'):
                raise UsageError(f'{token} requires a remote name')
            config.remote = remaining.pop(0)
            remote_locked = True
        elif token == '--aliases':
            config.show_aliases = True
            return config
        elif token in _HELP_FLAGS:
            config.show_help = True
            return config
        elif token == '--':
            config.passthrough.extend(remaining)
            break
        elif token.startswith('+'):
            config.reviewers.extend(_expand(token, alias_table))
        elif token.startswith('='):
            config.ccs.extend(_expand(token, alias_table))
        elif token.startswith('-'):
            config.passthrough.append(token)
        else:
            match = _REFSPEC.match(token)
            if match and not ref_locked:
                if match.group('ref_from'):
                    config.ref_from = match.group('ref_from')
                if match.group('ref_to'):
                    config.ref_to = match.group('ref_to')
                ref_locked = True
            elif not match and not remote_locked:
                notices.append(
                    (
                        logging.WARNING,
                        'Passing the remote as a bare argument is '
                        f'deprecated; use -r {token} instead',
                    )
                )
                config.remote = token
                remote_locked = True
            else:
                config.passthrough.append(token)

    if config.quiet and config.verbose:
        raise UsageError('--quiet and --verbose cannot be used together')

    _normalize_ref_to(config, notices)

    if not config.quiet:
        for level, message in notices:
            _LOG.log(level, message)

    return config


def _normalize_ref_to(config: ParsedConfig, notices: list[_Notice]) -> None:
    """Strips refs/for/ and refs/drafts/ from the destination branch."""
    if config.ref_to.startswith(FOR_PREFIX):
        config.ref_to = config.ref_to[len(FOR_PREFIX) :]
        if config.draft is Draft.PUBLISH:
            raise UsageError(
                f'{FOR_PREFIX}{config.ref_to} cannot be combined with '
                '--publish; pass just the branch name'
            )
        notices.append(
            (logging.INFO, f'The {FOR_PREFIX} prefix is not needed')
        )
    elif config.ref_to.startswith(DRAFTS_PREFIX):
        config.ref_to = config.ref_to[len(DRAFTS_PREFIX) :]
        if config.draft is Draft.PUBLISH:
            raise UsageError(
                f'{DRAFTS_PREFIX}{config.ref_to} contradicts --publish'
            )
        if config.draft is Draft.DRAFT:
            notices.append(
                (
                    logging.INFO,
                    f'The {DRAFTS_PREFIX} prefix is redundant with --draft',
                )
            )
        else:
            config.draft = Draft.DRAFT
            notices.append(
                (
                    logging.INFO,
                    f'Pushing as a draft; use --draft instead of the '
                    f'{DRAFTS_PREFIX} prefix',
                )
            )
