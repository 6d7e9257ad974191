"""Markdown generation for whole command trees.

This module walks a command tree and writes one markdown document per
visible command:
- Resolve footer suppression top-down before rendering
- Render each command to text (mddocs.assembler)
- Write text to a stream or to a file in the output directory

Sub-commands are written before their parent. The first I/O failure aborts
the walk; documents already written stay on disk.

Example Usage:
    >>> generator = MarkdownGenerator(tool_name="circleci-docs")
    >>> written = generator.generate_tree(root, "docs")
    >>> print(f"Generated {len(written)} files")
"""

import logging
from datetime import date
from pathlib import Path
from typing import TextIO

from mddocs.assembler import (
    DEFAULT_INTRO_HEADER,
    DEFAULT_TOOL_NAME,
    DocumentAssembler,
    resolve_footer_suppression,
)
from mddocs.config import DocsConfig
from mddocs.links import (
    FilePrepender,
    LinkHandler,
    empty,
    filename,
    front_matter_prepender,
    identity,
    prefix_link_handler,
)
from mddocs.models import CommandNode

logger = logging.getLogger(__name__)

SuppressionMap = dict[tuple[str, ...], bool]


class DocGenerationError(Exception):
    """Raised when a document cannot be written."""

    pass


def resolve_suppression_map(root: CommandNode) -> SuppressionMap:
    """Resolve footer suppression for every visible command under root.

    Folds disable_auto_gen_tag down from the top of the tree (including
    ancestors of root), so each command is suppressed when it or any
    ancestor disables the tag.

    Returns:
        Command path tuple -> whether the footer is suppressed
    """
    resolved: SuppressionMap = {}
    inherited = any(node.disable_auto_gen_tag for node in root.lineage()[:-1])

    def visit(node: CommandNode, inherited: bool) -> None:
        suppressed = inherited or node.disable_auto_gen_tag
        resolved[tuple(node.path)] = suppressed
        for child in node.visible_children():
            visit(child, suppressed)

    visit(root, inherited)
    return resolved


def gen_markdown(
    node: CommandNode,
    stream: TextIO,
    link_handler: LinkHandler = identity,
    *,
    tool_name: str = DEFAULT_TOOL_NAME,
    intro_header: str = DEFAULT_INTRO_HEADER,
    today: date | None = None,
) -> None:
    """Write the markdown document for a single command to a text stream.

    Raises:
        DocGenerationError: If writing to the stream fails
    """
    assembler = DocumentAssembler(tool_name=tool_name, intro_header=intro_header)
    document = assembler.assemble(
        node, link_handler, suppress_footer=resolve_footer_suppression(node), today=today
    )
    try:
        stream.write(document)
    except OSError as e:
        raise DocGenerationError(f"Failed to write document for '{node.command_path}': {e}") from e


def gen_markdown_tree(
    node: CommandNode,
    directory: str | Path,
    prepender: FilePrepender = empty,
    link_handler: LinkHandler = identity,
    *,
    tool_name: str = DEFAULT_TOOL_NAME,
    intro_header: str = DEFAULT_INTRO_HEADER,
    today: date | None = None,
) -> list[Path]:
    """Write markdown documents for a command and all visible descendants.

    Args:
        node: Root of the tree to document
        directory: Existing output directory
        prepender: Text to write before each document, given the target
            file path
        link_handler: Rewrites document filenames into link targets
        tool_name: Name shown in the generated-by footer
        intro_header: Boilerplate shown on the root page
        today: Date shown in the footer (defaults to today)

    Returns:
        Paths of the written files, sub-commands before their parents

    Raises:
        DocGenerationError: On the first file that cannot be created or
            written. Files written before the failure are left in place.
    """
    assembler = DocumentAssembler(tool_name=tool_name, intro_header=intro_header)
    suppression = resolve_suppression_map(node)
    written: list[Path] = []
    _write_tree(node, Path(directory), prepender, link_handler, assembler, suppression, today, written)
    return written


def _write_tree(
    node: CommandNode,
    directory: Path,
    prepender: FilePrepender,
    link_handler: LinkHandler,
    assembler: DocumentAssembler,
    suppression: SuppressionMap,
    today: date | None,
    written: list[Path],
) -> None:
    for child in node.visible_children():
        _write_tree(child, directory, prepender, link_handler, assembler, suppression, today, written)

    target = directory / filename(node.path)
    document = assembler.assemble(
        node, link_handler, suppress_footer=suppression[tuple(node.path)], today=today
    )

    try:
        with open(target, "w", encoding="utf-8") as f:
            f.write(prepender(str(target)))
            f.write(document)
    except OSError as e:
        raise DocGenerationError(f"Failed to write {target}: {e}") from e

    logger.debug(f"Wrote {target}")
    written.append(target)


class MarkdownGenerator:
    """Generates command documentation with a fixed set of options.

    Binds the footer, intro header, link handler and prepender so callers
    can render single documents or whole trees with one object.
    """

    def __init__(
        self,
        tool_name: str = DEFAULT_TOOL_NAME,
        intro_header: str = DEFAULT_INTRO_HEADER,
        link_handler: LinkHandler = identity,
        prepender: FilePrepender = empty,
        today: date | None = None,
    ):
        self.tool_name = tool_name
        self.intro_header = intro_header
        self.link_handler = link_handler
        self.prepender = prepender
        self.today = today

    @classmethod
    def from_config(cls, config: DocsConfig, today: date | None = None) -> "MarkdownGenerator":
        """Create a generator from loaded configuration.

        Raises:
            ConfigError: If the configured intro header file cannot be read
        """
        link_handler = identity
        if config.link_prefix or config.strip_link_extension:
            link_handler = prefix_link_handler(config.link_prefix, config.strip_link_extension)

        prepender = empty
        if config.front_matter:
            prepender = front_matter_prepender(config.front_matter, today=today)

        return cls(
            tool_name=config.tool_name,
            intro_header=config.resolve_intro_header(),
            link_handler=link_handler,
            prepender=prepender,
            today=today,
        )

    def render(self, node: CommandNode) -> str:
        assembler = DocumentAssembler(tool_name=self.tool_name, intro_header=self.intro_header)
        return assembler.assemble(node, self.link_handler, today=self.today)

    def generate(self, node: CommandNode, stream: TextIO) -> None:
        gen_markdown(
            node,
            stream,
            self.link_handler,
            tool_name=self.tool_name,
            intro_header=self.intro_header,
            today=self.today,
        )

    def generate_tree(self, node: CommandNode, directory: str | Path) -> list[Path]:
        """Generate the whole tree, creating the output directory if needed.

        Raises:
            DocGenerationError: If the directory or any document cannot be written
        """
        output_dir = Path(directory)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DocGenerationError(f"Failed to create output directory {output_dir}: {e}") from e

        logger.info(f"Generating documentation for '{node.command_path}' into {output_dir}")
        return gen_markdown_tree(
            node,
            output_dir,
            self.prepender,
            self.link_handler,
            tool_name=self.tool_name,
            intro_header=self.intro_header,
            today=self.today,
        )


__all__ = [
    "DocGenerationError",
    "MarkdownGenerator",
    "gen_markdown",
    "gen_markdown_tree",
    "resolve_suppression_map",
]
