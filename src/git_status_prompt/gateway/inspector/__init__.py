"""Repository inspector gateway."""

from git_status_prompt.gateway.inspector.abc import RebaseFiles, RepoInspector
from git_status_prompt.gateway.inspector.fake import FakeRepoInspector
from git_status_prompt.gateway.inspector.real import RealRepoInspector

__all__ = [
    "RebaseFiles",
    "RepoInspector",
    "RealRepoInspector",
    "FakeRepoInspector",
]
