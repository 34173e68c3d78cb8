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
"""Work out which branch a change is pushed for review on."""

from dataclasses import dataclass
import logging
import re

from gpush.errors import ResolutionError
from gpush.git_repo import GitRepo
from gpush.log import LOGLEVEL_VERBOSE

_LOG = logging.getLogger(__name__)

HEADS_PREFIX = 'refs/heads/'

# Matches the start of a revision suffix such as HEAD~2 or HEAD^.
_REV_SUFFIX = re.compile(r'[~^]')


@dataclass(frozen=True)
class ResolvedTarget:
    ref_from: str
    ref_to: str


def _strip_heads(ref: str) -> str:
    if ref.startswith(HEADS_PREFIX):
        return ref[len(HEADS_PREFIX) :]
    return ref


def tracking_branch(ref_from: str, repo: GitRepo) -> str:
    """Returns the short name of the branch that ``ref_from`` tracks.

    ``ref_from`` may carry a revision suffix (``feature~1``) or be a symbolic
    ref such as ``HEAD``; both are reduced to a local branch first.

    Raises:
        ResolutionError: ``ref_from`` is not a local branch, or the branch
            has no upstream configured.
    """
    ref = _REV_SUFFIX.split(ref_from, maxsplit=1)[0]

    target = repo.symbolic_ref(ref) if ref else None
    if target:
        _LOG.debug('%s points to %s', ref, target)
        ref = target

    branch = _strip_heads(ref)
    if not branch or not repo.ref_exists(f'{HEADS_PREFIX}{branch}'):
        raise ResolutionError(
            f'cannot detect tracking branch for {ref_from}: '
            f'{branch or ref_from} is not a local branch; '
            'pass the destination explicitly as [from]:<to>'
        )

    merge = repo.config_value(f'branch.{branch}.merge')
    if not merge:
        raise ResolutionError(
            f'cannot detect tracking branch for {ref_from}: '
            f'branch.{branch}.merge is not set; '
            'pass the destination explicitly as [from]:<to>'
        )

    return _strip_heads(merge)


def resolve(ref_from: str, ref_to: str, repo: GitRepo) -> ResolvedTarget:
    """Fills in the destination branch if the command line left it out."""
    if ref_to:
        return ResolvedTarget(ref_from, ref_to)

    ref_to = tracking_branch(ref_from, repo)
    _LOG.log(LOGLEVEL_VERBOSE, '%s tracks %s', ref_from, ref_to)
    return ResolvedTarget(ref_from, ref_to)
