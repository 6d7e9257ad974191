"""Markdown document assembly for a single command.

This module renders one CommandNode into a complete markdown document.
Sections are written in a fixed order and each is included only when the
command has something to put in it:

    ## <path>               always
    <short>                 always
    <intro header>          root command only
    ### Synopsis            always
    ```usage```             runnable commands
    ### Examples            example text present
    ### Arguments           annotated positional arguments present
    ### Flags               own flags present
    ### Flags inherited...  inherited flags present
    ### SEE ALSO            parent or visible sub-commands present
    ###### Auto generated   unless suppressed

Philosophy:
- Simple string formatting (no Jinja2)
- Pure: node in, text out, no file system access
- Self-contained and regeneratable
"""

import io
from datetime import date
from typing import TextIO

from mddocs.links import LinkHandler, identity, link
from mddocs.models import CommandNode

DEFAULT_TOOL_NAME = "mddocs"

# Project links and badges shown at the top of the root page
DEFAULT_INTRO_HEADER = """\
[Readme](README.md) |
[Contribution Guidelines](CONTRIBUTING.md) |
[Changelog](CHANGELOG.md)

[![Docs](https://img.shields.io/badge/docs-mddocs-blue.svg)](README.md)
[![License](https://img.shields.io/badge/license-MIT-red.svg)](./LICENSE)"""

# English month abbreviations, independent of the process locale
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# Width of the argument name column in the Arguments section
ARGUMENT_NAME_WIDTH = 11


def positional_args(node: CommandNode) -> list[str]:
    """Return the positional argument names declared in a command's usage template.

    Example:
        >>> positional_args(CommandNode(name="validate", use="validate PATH"))
        ['PATH']
    """
    args = node.use.split(" ")
    if len(args) <= 1:
        return []
    return args[1:]


def format_positional_arg(node: CommandNode, arg: str) -> str:
    """Format one line of the Arguments section, or "" if arg has no annotation."""
    description = node.annotations.get(arg)
    if description is None:
        return ""
    return f"{arg:<{ARGUMENT_NAME_WIDTH}} {description}\n"


def format_date(day: date) -> str:
    """Format a date as D-Mon-YYYY (e.g. 2-Jan-2006)."""
    return f"{day.day}-{MONTH_ABBREVIATIONS[day.month - 1]}-{day.year}"


def resolve_footer_suppression(node: CommandNode) -> bool:
    """Whether the generated-by footer is suppressed for node.

    Suppression set on any ancestor applies to all of its descendants;
    suppression set on a descendant never affects its ancestors.
    """
    return any(ancestor.disable_auto_gen_tag for ancestor in node.lineage())


class DocumentAssembler:
    """Renders CommandNode objects into markdown documents.

    Example:
        >>> assembler = DocumentAssembler(tool_name="circleci-docs")
        >>> markdown = assembler.assemble(node, suppress_footer=True)
    """

    def __init__(
        self, tool_name: str = DEFAULT_TOOL_NAME, intro_header: str = DEFAULT_INTRO_HEADER
    ):
        """Initialize assembler.

        Args:
            tool_name: Name shown in the generated-by footer
            intro_header: Boilerplate (links, badges) shown on the root page;
                an empty string leaves it out
        """
        self.tool_name = tool_name
        self.intro_header = intro_header

    def assemble(
        self,
        node: CommandNode,
        link_handler: LinkHandler = identity,
        suppress_footer: bool | None = None,
        today: date | None = None,
    ) -> str:
        """Render a command into a markdown document.

        Args:
            node: Command to document
            link_handler: Rewrites document filenames into link targets
            suppress_footer: Resolved footer suppression. When None it is
                resolved from the command and its ancestors.
            today: Date shown in the footer (defaults to today)

        Returns:
            The markdown document
        """
        if suppress_footer is None:
            suppress_footer = resolve_footer_suppression(node)

        buf = io.StringIO()
        name = node.command_path

        buf.write(f"## {name}\n\n")
        buf.write(f"{node.short}\n\n")

        if node.is_root and self.intro_header:
            buf.write(f"{self.intro_header}\n\n")

        buf.write("### Synopsis\n\n")
        buf.write(f"{node.description}\n\n")

        if node.runnable:
            buf.write(f"```\n{node.use_line}\n```\n\n")

        if node.example:
            buf.write("### Examples\n\n")
            buf.write(f"```\n{node.example}\n```\n\n")

        self._write_arguments(buf, node)
        self._write_flags(buf, node)

        if node.has_see_also():
            self._write_see_also(buf, node, link_handler)

        if not suppress_footer:
            day = today or date.today()
            buf.write(f"###### Auto generated by {self.tool_name} on {format_date(day)}\n")

        return buf.getvalue()

    def _write_arguments(self, buf: TextIO, node: CommandNode) -> None:
        lines = [format_positional_arg(node, arg) for arg in positional_args(node)]
        lines = [line for line in lines if line]
        if not lines:
            return

        buf.write("### Arguments\n\n```\n")
        buf.writelines(lines)
        buf.write("```\n\n")

    def _write_flags(self, buf: TextIO, node: CommandNode) -> None:
        if node.flags.has_available_flags():
            buf.write("### Flags\n\n```\n")
            node.flags.write_defaults(buf)
            buf.write("```\n\n")

        if node.inherited_flags.has_available_flags():
            buf.write("### Flags inherited from parent commands\n\n```\n")
            node.inherited_flags.write_defaults(buf)
            buf.write("```\n\n")

    def _write_see_also(self, buf: TextIO, node: CommandNode, link_handler: LinkHandler) -> None:
        buf.write("### SEE ALSO\n\n")

        # Parent bullet always comes first
        if node.parent is not None:
            parent = node.parent
            buf.write(
                f"* [{parent.command_path}]({link(parent.path, link_handler)})"
                f"\t - {parent.short}\n"
            )

        for child in sorted(node.visible_children(), key=lambda c: c.name):
            child_path = f"{node.command_path} {child.name}"
            buf.write(f"* [{child_path}]({link(child_path, link_handler)})\t - {child.short}\n")

        buf.write("\n")


def render_document(
    node: CommandNode,
    link_handler: LinkHandler = identity,
    *,
    suppress_footer: bool | None = None,
    tool_name: str = DEFAULT_TOOL_NAME,
    intro_header: str = DEFAULT_INTRO_HEADER,
    today: date | None = None,
) -> str:
    """Render a command into a markdown document.

    Convenience wrapper around DocumentAssembler.assemble().
    """
    assembler = DocumentAssembler(tool_name=tool_name, intro_header=intro_header)
    return assembler.assemble(
        node, link_handler, suppress_footer=suppress_footer, today=today
    )


__all__ = [
    "ARGUMENT_NAME_WIDTH",
    "DEFAULT_INTRO_HEADER",
    "DEFAULT_TOOL_NAME",
    "DocumentAssembler",
    "format_date",
    "format_positional_arg",
    "positional_args",
    "render_document",
    "resolve_footer_suppression",
]
