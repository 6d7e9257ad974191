"""Click group for the mddocs command line.

A mistyped sub-command or a bad TARGET usually means the user wants to see
what mddocs accepts, so these errors are followed by the help page of the
command that rejected the input.
"""

from typing import Any

import click


def _exit_with_help(ctx: click.Context, message: str, exit_code: int) -> None:
    click.echo(f"Error: {message}\n", err=True)
    click.echo(ctx.get_help(), err=True)
    ctx.exit(exit_code)


class MddocsGroup(click.Group):
    """Group that prints the relevant help page after usage errors."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            # e.ctx is the sub-command's context when the sub-command failed
            _exit_with_help(e.ctx or ctx, e.format_message(), e.exit_code)
            return None

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        try:
            return super().resolve_command(ctx, args)
        except click.BadParameter:
            raise
        except click.UsageError as e:
            _exit_with_help(ctx, e.format_message(), 1)
            return None, None, []


MddocsGroup.group_class = MddocsGroup
