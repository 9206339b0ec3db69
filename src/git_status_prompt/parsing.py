"""Pure parsers for git output and repository state files.

Nothing here touches the filesystem or spawns processes; callers pass in raw
text and get structured results back.
"""

import re
from collections.abc import Iterable

from git_status_prompt.types import BranchInfo, MergeInfo, RebaseInfo, SyncStatus

MERGE_MESSAGE_PATTERN = re.compile(r"^Merge (.*)(branch|tag|commit) '(.*)'( into .*)?$")
HEADS_PREFIX = "refs/heads/"

AHEAD_MARKER = "<"
BEHIND_MARKER = ">"


def parse_merge_message(text: str) -> MergeInfo | None:
    """Extract the merged ref and target branch from MERGE_MSG contents.

    Args:
        text: Full contents of the merge message file

    Returns:
        None when the first line is not a merge subject. Otherwise a MergeInfo,
        with empty fields when the subject does not follow git's default
        "Merge branch 'x' into y" wording.
    """
    lines = text.splitlines()
    if not lines:
        return None

    subject = lines[0]
    if not subject.startswith("Merge"):
        return None

    match = MERGE_MESSAGE_PATTERN.match(subject)
    if match is None:
        return MergeInfo(ref="", into="")

    return MergeInfo(ref=match.group(3), into=match.group(4) or "")


def parse_rebase_state(head_name: str, onto: str) -> RebaseInfo:
    """Build RebaseInfo from the `head-name` and `onto` file contents."""
    branch = head_name.strip()
    if branch.startswith(HEADS_PREFIX):
        branch = branch[len(HEADS_PREFIX) :]
    return RebaseInfo(branch=branch, onto=onto.strip())


def parse_branch_upstream_pairs(output: str) -> list[BranchInfo]:
    """Parse `for-each-ref` output of tab-separated branch/upstream pairs.

    Lines without a tab (older formats separated by a space) are split on the
    first space instead.
    """
    branches: list[BranchInfo] = []
    for line in output.splitlines():
        if not line.strip():
            continue

        separator = "\t" if "\t" in line else " "
        name, _, upstream = line.partition(separator)
        upstream = upstream.strip()
        branches.append(BranchInfo(name=name.strip(), upstream=upstream or None))

    return branches


def find_branch(branches: Iterable[BranchInfo], name: str) -> BranchInfo | None:
    """Return the first branch whose local name equals `name`."""
    for branch in branches:
        if branch.name == name:
            return branch
    return None


def count_divergence(lines: Iterable[str]) -> SyncStatus:
    """Count `rev-list --left-right` entries.

    Entries marked `<` are reachable only from the local (left) side, entries
    marked `>` only from the upstream (right) side.
    """
    ahead = 0
    behind = 0
    for line in lines:
        entry = line.strip()
        if entry.startswith(AHEAD_MARKER):
            ahead += 1
        elif entry.startswith(BEHIND_MARKER):
            behind += 1
    return SyncStatus(behind=behind, ahead=ahead)
