"""Filenames and hyperlinks for command documents.

A command's document filename is a pure function of its path:

    >>> filename(["circleci", "config", "validate"])
    'circleci_config_validate.md'

Links embedded in documents go through a caller-supplied transform so that
pages can be relocated (URL prefixes, dropped extensions) without changing
the files written to disk. File prependers produce the text written ahead
of each document, keyed by the target file.
"""

from collections.abc import Callable, Sequence
from datetime import date
from pathlib import Path

LinkHandler = Callable[[str], str]
FilePrepender = Callable[[str], str]

MARKDOWN_EXTENSION = ".md"

DEFAULT_FRONT_MATTER = """---
title: "{title}"
slug: {slug}
date: {date}
---

"""


def identity(value: str) -> str:
    return value


def empty(value: str) -> str:
    return ""


def filename(path: Sequence[str] | str) -> str:
    """Return the document filename for a command path.

    Args:
        path: Command names from the root, or a space-separated command path

    Returns:
        Path segments joined with "_" plus ".md"
    """
    if isinstance(path, str):
        path = path.split(" ")
    return "_".join(path) + MARKDOWN_EXTENSION


def link(path: Sequence[str] | str, transform: LinkHandler = identity) -> str:
    """Return the hyperlink target for a command path."""
    return transform(filename(path))


def prefix_link_handler(prefix: str, strip_extension: bool = False) -> LinkHandler:
    """Build a link handler that relocates document links.

    Args:
        prefix: Text put in front of every link (e.g. "/commands/")
        strip_extension: Drop the trailing ".md" (for sites with pretty URLs)

    Example:
        >>> handler = prefix_link_handler("/commands/", strip_extension=True)
        >>> handler("circleci_version.md")
        '/commands/circleci_version'
    """

    def handler(name: str) -> str:
        if strip_extension and name.endswith(MARKDOWN_EXTENSION):
            name = name[: -len(MARKDOWN_EXTENSION)]
        return prefix + name

    return handler


def front_matter_prepender(
    template: str = DEFAULT_FRONT_MATTER, today: date | None = None
) -> FilePrepender:
    """Build a prepender writing a front-matter block before each document.

    The template may use {title} ("circleci config"), {slug}
    ("circleci_config"), {basename} ("circleci_config.md") and {date}
    (ISO date of the generation run).
    """
    run_date = today or date.today()

    def prepender(target: str) -> str:
        basename = Path(target).name
        slug = basename.removesuffix(MARKDOWN_EXTENSION)
        return template.format(
            title=slug.replace("_", " "),
            slug=slug,
            basename=basename,
            date=run_date.isoformat(),
        )

    return prepender


__all__ = [
    "DEFAULT_FRONT_MATTER",
    "FilePrepender",
    "LinkHandler",
    "empty",
    "filename",
    "front_matter_prepender",
    "identity",
    "link",
    "prefix_link_handler",
]
