"""Production implementation of RepoInspector using subprocess."""

import logging
import subprocess
from pathlib import Path

from git_status_prompt.gateway.inspector.abc import RebaseFiles, RepoInspector
from git_status_prompt.parsing import parse_branch_upstream_pairs
from git_status_prompt.types import BranchInfo

logger = logging.getLogger(__name__)

BRANCH_UPSTREAM_FORMAT = "--format=%(refname:short)%09%(upstream:short)"
REBASE_DIR_NAMES = ("rebase-merge", "rebase-apply")
# ls-files only lists paths below the cwd unless given the top-level pathspec
TOP_LEVEL_PATHSPEC = ":/"


class RealRepoInspector(RepoInspector):
    """Runs git commands in `cwd`, one at a time, with no timeout."""

    def __init__(self, cwd: Path) -> None:
        self._cwd = cwd

    def _run_git(self, args: list[str]) -> subprocess.CompletedProcess[str] | None:
        """Run git and return the completed process, or None if git is missing."""
        cmd = ["git", *args]
        logger.debug("Running %s in %s", " ".join(cmd), self._cwd)
        try:
            result = subprocess.run(
                cmd,
                cwd=self._cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug("Could not run git: %s", e)
            return None

        if result.returncode != 0:
            logger.debug(
                "git %s exited %d: %s", args[0], result.returncode, result.stderr.strip()
            )
        return result

    def _git_output(self, args: list[str]) -> str | None:
        """Return stdout of a successful git command, None on any failure."""
        result = self._run_git(args)
        if result is None or result.returncode != 0:
            return None
        return result.stdout

    def _git_succeeds(self, args: list[str]) -> bool:
        result = self._run_git(args)
        return result is not None and result.returncode == 0

    def _git_reports_difference(self, args: list[str]) -> bool:
        """True only for exit status 1; other failures carry no signal."""
        result = self._run_git(args)
        return result is not None and result.returncode == 1

    def _git_dir(self) -> Path | None:
        output = self._git_output(["rev-parse", "--absolute-git-dir"])
        if output is None or not output.strip():
            return None
        return Path(output.strip())

    def is_valid(self) -> bool:
        output = self._git_output(["rev-parse", "--is-inside-work-tree"])
        return output is not None and output.strip() == "true"

    def has_commits(self) -> bool:
        return self._git_succeeds(["rev-parse", "--verify", "--quiet", "HEAD"])

    def current_branch(self) -> str | None:
        output = self._git_output(["rev-parse", "--abbrev-ref", "HEAD"])
        if output is None or not output.strip():
            return None
        return output.strip()

    def branch_upstream_pairs(self) -> list[BranchInfo]:
        output = self._git_output(["for-each-ref", BRANCH_UPSTREAM_FORMAT, "refs/heads"])
        if output is None:
            return []
        return parse_branch_upstream_pairs(output)

    def has_any_changes(self) -> bool:
        output = self._git_output(
            ["ls-files", "--others", "--modified", "--exclude-standard", "--", TOP_LEVEL_PATHSPEC]
        )
        return bool(output and output.strip())

    def is_tracked_dirty(self) -> bool:
        return self._git_reports_difference(["diff", "--no-ext-diff", "--quiet", "--exit-code"])

    def has_untracked(self) -> bool:
        output = self._git_output(
            ["ls-files", "--others", "--exclude-standard", "--", TOP_LEVEL_PATHSPEC]
        )
        return bool(output and output.strip())

    def is_staged_dirty(self) -> bool:
        return self._git_reports_difference(["diff-index", "--cached", "--quiet", "HEAD", "--"])

    def has_stash(self) -> bool:
        return self._git_succeeds(["rev-parse", "--verify", "--quiet", "refs/stash"])

    def divergence(self, local: str, remote: str) -> list[str] | None:
        output = self._git_output(["rev-list", "--left-right", f"{local}...{remote}", "--"])
        if output is None:
            return None
        return [line for line in output.splitlines() if line.strip()]

    def merge_message(self) -> str | None:
        git_dir = self._git_dir()
        if git_dir is None:
            return None

        if not (git_dir / "MERGE_HEAD").is_file():
            return None

        msg_path = git_dir / "MERGE_MSG"
        if not msg_path.is_file():
            return ""
        return msg_path.read_text(encoding="utf-8", errors="replace")

    def rebase_files(self) -> RebaseFiles | None:
        git_dir = self._git_dir()
        if git_dir is None:
            return None

        for dir_name in REBASE_DIR_NAMES:
            rebase_dir = git_dir / dir_name
            if not rebase_dir.is_dir():
                continue
            return RebaseFiles(
                head_name=_read_state_file(rebase_dir / "head-name"),
                onto=_read_state_file(rebase_dir / "onto"),
            )

        return None


def _read_state_file(path: Path) -> str:
    """Read a rebase state file, treating a missing file as empty."""
    if not path.is_file():
        return ""
    return path.read_text(encoding="utf-8", errors="replace")
