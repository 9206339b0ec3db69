"""PromptContext - dependency injection container for prompt rendering."""

import os
from dataclasses import dataclass
from pathlib import Path

from git_status_prompt.gateway.inspector.abc import RepoInspector
from git_status_prompt.gateway.inspector.fake import FakeRepoInspector
from git_status_prompt.gateway.inspector.real import RealRepoInspector
from git_status_prompt.theme import Theme, default_theme, load_theme, resolve_config_path


@dataclass(frozen=True)
class PromptContext:
    """Context container for prompt rendering.

    All git access goes through `inspector`, so tests can swap in a fake.
    """

    cwd: Path
    inspector: RepoInspector
    theme: Theme

    @staticmethod
    def for_test(
        *,
        cwd: Path | None = None,
        inspector: RepoInspector | None = None,
        theme: Theme | None = None,
    ) -> "PromptContext":
        """Create a context backed by fakes unless overridden."""
        return PromptContext(
            cwd=cwd if cwd is not None else Path("/fake/repo"),
            inspector=inspector if inspector is not None else FakeRepoInspector(),
            theme=theme if theme is not None else default_theme(),
        )


def _current_directory() -> Path:
    """Return the working directory, falling back to $PWD if it was deleted."""
    try:
        return Path.cwd()
    except FileNotFoundError:
        return Path(os.environ.get("PWD", "/"))


def create_context(*, config_path: Path | None) -> PromptContext:
    """Create the production context for the process working directory.

    Raises:
        ThemeConfigError: If the resolved config file is invalid
    """
    cwd = _current_directory()
    resolved = resolve_config_path(config_path, os.environ, Path.home())
    return PromptContext(
        cwd=cwd,
        inspector=RealRepoInspector(cwd),
        theme=load_theme(resolved),
    )
