import logging
import sys
from pathlib import Path
from typing import TextIO

import click

from git_status_prompt.ansi import strip_ansi, visible_width
from git_status_prompt.context import PromptContext, create_context
from git_status_prompt.formatter import render_prompt
from git_status_prompt.theme import ThemeConfigError

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(package_name="git-status-prompt")
@click.option("--debug", is_flag=True, help="Enable debug logging on stderr")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Print a colorized git status summary for the shell prompt.

    Without a subcommand, renders the prompt for the current directory.
    """
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s - %(levelname)s - %(message)s",
            stream=sys.stderr,
        )

    if ctx.invoked_subcommand is None:
        ctx.invoke(render_cmd)


@click.command("render")
@click.option("--plain", is_flag=True, help="Strip color escapes from the output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Theme file (defaults to $GIT_STATUS_PROMPT_CONFIG or the XDG config dir)",
)
@click.pass_context
def render_cmd(ctx: click.Context, plain: bool, config_path: Path | None) -> None:
    """Render the prompt for the current directory.

    Prints nothing outside a git repository. No trailing newline is written.
    """
    # Only create context if not already provided (e.g., by tests)
    prompt_ctx = ctx.obj
    if not isinstance(prompt_ctx, PromptContext):
        try:
            prompt_ctx = create_context(config_path=config_path)
        except ThemeConfigError as e:
            raise click.ClickException(str(e)) from e

    output = render_prompt(prompt_ctx.inspector, prompt_ctx.theme)
    if plain:
        output = strip_ansi(output)
    # Prompts capture stdout through a pipe; keep the escapes regardless
    click.echo(output, nl=False, color=True)


@click.command("strip")
@click.argument("source", type=click.File("r"), default="-")
def strip_cmd(source: TextIO) -> None:
    """Copy SOURCE (stdin by default) to stdout with color escapes removed."""
    text = source.read()
    click.echo(strip_ansi(text), nl=False)


@click.command("width")
@click.argument("source", type=click.File("r"), default="-")
def width_cmd(source: TextIO) -> None:
    """Print the visible width of SOURCE, ignoring escapes and the final newline."""
    text = source.read()
    click.echo(visible_width(text.rstrip("\n")))


cli.add_command(render_cmd)
cli.add_command(strip_cmd)
cli.add_command(width_cmd)


def main() -> None:
    """CLI entry point used by the `git-status-prompt` console script."""
    cli()
