"""mddocs - markdown reference docs for command-line programs

Philosophy:
- Ruthless simplicity
- Brick architecture (self-contained modules)
- Render first, write second
- Fail fast on I/O errors, skip malformed metadata quietly

mddocs walks a tree of command descriptions (built by hand or read from a
Click application) and writes one cross-linked markdown page per visible
command.
"""

from mddocs.assembler import render_document
from mddocs.flags import Flag, FlagList
from mddocs.generator import (
    DocGenerationError,
    MarkdownGenerator,
    gen_markdown,
    gen_markdown_tree,
)
from mddocs.links import filename, link
from mddocs.models import CommandNode, FlagSet

__version__ = "0.1.0"
__all__ = [
    "CommandNode",
    "DocGenerationError",
    "Flag",
    "FlagList",
    "FlagSet",
    "MarkdownGenerator",
    "__version__",
    "filename",
    "gen_markdown",
    "gen_markdown_tree",
    "link",
    "render_document",
]
