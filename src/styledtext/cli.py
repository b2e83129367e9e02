"""CLI entry point for styledtext. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from styledtext.markup import MarkupError
from styledtext.measure import cleantext, textwidth
from styledtext.reshape import reshape_text
from styledtext.style import apply_style
from styledtext.theme import load_theme

logger = logging.getLogger(__name__)


def _read_input(text: str | None) -> str:
    """Use *text* if given, otherwise read all of stdin."""
    if text is not None:
        return text
    return sys.stdin.read().rstrip("\n")


@click.group(invoke_without_command=True)
@click.option(
    "--theme",
    "theme_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON theme file (defaults to $STYLEDTEXT_THEME)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    help="Logging level",
)
@click.pass_context
def main(ctx, theme_path, log_level):
    """Render markup to ANSI and reflow styled text."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_theme(theme_path)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--theme") from e
    logger.debug("Using theme from %s", theme_path or "environment/defaults")
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("text", required=False)
@click.pass_obj
def render(theme, text):
    """Compile markup into ANSI escape sequences."""
    try:
        click.echo(apply_style(_read_input(text), theme), color=True)
    except MarkupError as e:
        raise click.UsageError(str(e)) from e


@main.command()
@click.argument("text", required=False)
@click.option("--width", "-w", type=int, default=80, show_default=True, help="Target width")
@click.pass_obj
def reshape(theme, text, width):
    """Wrap styled text to a column width."""
    try:
        click.echo(reshape_text(_read_input(text), width, theme=theme), color=True)
    except MarkupError as e:
        raise click.UsageError(str(e)) from e


@main.command()
@click.argument("text", required=False)
def strip(text):
    """Remove markup and ANSI sequences."""
    try:
        click.echo(cleantext(_read_input(text)))
    except MarkupError as e:
        raise click.UsageError(str(e)) from e


@main.command()
@click.argument("text", required=False)
def width(text):
    """Print the visible width of each line."""
    for line in _read_input(text).split("\n"):
        click.echo(textwidth(line))


if __name__ == "__main__":
    main()
