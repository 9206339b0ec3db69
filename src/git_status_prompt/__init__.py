"""git-status-prompt: colorized git working tree summary for shell prompts.

See `git-status-prompt --help` for the command line interface.
"""

from git_status_prompt.ansi import strip_ansi, visible_width
from git_status_prompt.formatter import render_prompt, render_status

__all__ = [
    "render_prompt",
    "render_status",
    "strip_ansi",
    "visible_width",
]
