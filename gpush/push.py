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
"""Build and run the git push command for a change."""

import logging
import re
import shlex

from gpush.arguments import Draft, ParsedConfig
from gpush.git_repo import GitRepo
from gpush.log import LOGLEVEL_VERBOSE
from gpush.target import ResolvedTarget

_LOG = logging.getLogger(__name__)

_WIP_WORD = re.compile(r'\bWIP\b', re.IGNORECASE)
_STARS = re.compile(r'\*{3,}')
_ONE_REPEATED_CHARACTER = re.compile(r'(.)\1*', re.DOTALL)


def is_work_in_progress(subject: str) -> bool:
    """Returns True if a commit subject looks like unfinished work.

    A subject is a WIP if it contains the word "WIP" in any case, contains
    "***" or more asterisks, or consists of a single repeated character
    ("xxxx", or just "x").
    """
    return bool(
        _WIP_WORD.search(subject)
        or _STARS.search(subject)
        or _ONE_REPEATED_CHARACTER.fullmatch(subject)
    )


def wants_draft(draft: Draft, subject: str | None) -> bool:
    """Decides between a draft and a regular push."""
    if draft is Draft.DRAFT:
        return True
    if draft is Draft.PUBLISH:
        return False
    return subject is not None and is_work_in_progress(subject)


def _receive_pack(reviewers: list[str], ccs: list[str]) -> str:
    options = ['git receive-pack']
    options.extend(f'--reviewer={reviewer}' for reviewer in reviewers)
    options.extend(f'--cc={cc}' for cc in ccs)
    return '--receive-pack=' + ' '.join(options)


def build_command(
    config: ParsedConfig, target: ResolvedTarget, draft: bool
) -> list[str]:
    """Returns the git arguments (starting with "push") for this change."""
    cmd = ['push']

    if config.verbose:
        cmd.append('--verbose')
    if config.quiet:
        cmd.append('--quiet')
    if config.dry_run:
        cmd.append('--dry-run')

    if config.reviewers or config.ccs:
        cmd.append(_receive_pack(config.reviewers, config.ccs))

    cmd.extend(config.passthrough)

    destination = 'drafts' if draft else 'for'
    cmd.append(config.remote)
    cmd.append(f'{target.ref_from}:refs/{destination}/{target.ref_to}')
    return cmd


def run(config: ParsedConfig, target: ResolvedTarget, repo: GitRepo) -> int:
    """Pushes the change and returns the exit code of git push.

    Raises:
        LaunchError: git could not be started.
        GitError: The commit subject could not be read.
    """
    subject = None
    if config.draft is Draft.UNSET:
        subject = repo.commit_subject(target.ref_from)

    draft = wants_draft(config.draft, subject)
    if draft and config.draft is Draft.UNSET:
        _LOG.info('Pushing as a draft since the subject is "%s"', subject)

    cmd = build_command(config, target, draft)
    _LOG.log(LOGLEVEL_VERBOSE, 'Running git %s', shlex.join(cmd))

    returncode = repo.push(cmd)
    if returncode != 0:
        _LOG.debug('git push exited with %d', returncode)
    return returncode
