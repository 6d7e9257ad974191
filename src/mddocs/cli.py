"""mddocs command-line interface.

Commands:
    generate    Write one markdown page per command of a Click application
    show        Print the markdown page of a single command

Examples:
    $ mddocs generate mytool.cli:main --output-dir docs/commands
    $ mddocs show mytool.cli:main config validate
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from mddocs import __version__
from mddocs.click_adapter import TargetError, from_click, load_target
from mddocs.click_group import MddocsGroup
from mddocs.config import ConfigError, ConfigManager, DocsConfig
from mddocs.generator import DocGenerationError, MarkdownGenerator
from mddocs.links import DEFAULT_FRONT_MATTER
from mddocs.models import CommandNode
from mddocs.overlay import MetadataOverlay

logger = logging.getLogger(__name__)


def _build_tree(
    target: str, config: DocsConfig, name: str | None, app_dir: str | None = None
) -> CommandNode:
    """Load the Click application and convert it into a command tree.

    Raises:
        TargetError: If the target cannot be loaded
    """
    command = load_target(target, app_dir)
    overlay = None
    if config.overlay_dir:
        overlay = MetadataOverlay(config.resolve_path(config.overlay_dir))

    root = from_click(command, overlay, name=name)
    if config.disable_auto_gen_tag:
        root.disable_auto_gen_tag = True
    return root


def _show_summary(root: CommandNode, written: list[Path]) -> None:
    console = Console()
    table = Table(title=f"Documentation for {root.command_path}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("File", style="cyan")
    for index, path in enumerate(written, start=1):
        table.add_row(str(index), str(path))
    console.print(table)
    console.print(f"[green]✓[/green] Generated {len(written)} file(s)")


@click.group(cls=MddocsGroup)
@click.version_option(version=__version__, prog_name="mddocs")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Generate markdown reference documentation for Click applications.

    TARGET arguments name a Click command as package.module:attribute.

    \b
    EXAMPLES:
        $ mddocs generate mytool.cli:main -o docs/commands
        $ mddocs show mytool.cli:main config validate

    \b
    CONFIGURATION:
        Config file: ./mddocs.toml (or --config PATH)
        Keys: tool_name, output_dir, link_prefix, strip_link_extension,
              intro_header, intro_header_file, front_matter, overlay_dir,
              disable_auto_gen_tag
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")


@main.command(name="generate")
@click.argument("target")
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, resolve_path=True),
    help="Directory for generated documentation (default: docs)",
)
@click.option("--name", help="Name of the root command (default: the Click command name)")
@click.option("--link-prefix", help="Prefix added to every link (e.g. /commands/)")
@click.option("--strip-extension", is_flag=True, help="Drop .md from links")
@click.option("--front-matter", is_flag=True, help="Write a front-matter block before each page")
@click.option(
    "--overlay-dir",
    type=click.Path(file_okay=False, resolve_path=True),
    help="Directory of per-command YAML metadata",
)
@click.option(
    "--intro-header-file",
    type=click.Path(dir_okay=False, exists=True, resolve_path=True),
    help="File whose text is shown at the top of the root page",
)
@click.option("--no-intro-header", is_flag=True, help="Leave out the links block on the root page")
@click.option("--tool-name", help="Name shown in the generated-by footer")
@click.option("--no-auto-gen-tag", is_flag=True, help="Leave out the generated-by footer")
@click.option("--config", "config_path", help="Path to mddocs.toml")
@click.option(
    "--app-dir",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Directory TARGET is imported from",
)
def generate(
    target: str,
    output_dir: str | None,
    name: str | None,
    link_prefix: str | None,
    strip_extension: bool,
    front_matter: bool,
    overlay_dir: str | None,
    intro_header_file: str | None,
    no_intro_header: bool,
    tool_name: str | None,
    no_auto_gen_tag: bool,
    config_path: str | None,
    app_dir: str,
) -> None:
    """Write one markdown page per command of a Click application.

    Sub-command pages link back to their parent and parents link to their
    sub-commands. Pages are named after the command path, e.g.
    mytool_config_validate.md.

    \b
    Examples:
        $ mddocs generate mytool.cli:main
        $ mddocs generate mytool.cli:main -o site/commands --link-prefix /commands/ --strip-extension
    """
    try:
        config = ConfigManager.load_config(config_path)
        ConfigManager.merge_cli_values(
            config,
            output_dir=output_dir,
            link_prefix=link_prefix,
            strip_link_extension=True if strip_extension else None,
            overlay_dir=overlay_dir,
            intro_header_file=intro_header_file,
            tool_name=tool_name,
            disable_auto_gen_tag=True if no_auto_gen_tag else None,
        )
        if front_matter and not config.front_matter:
            config.front_matter = DEFAULT_FRONT_MATTER
        if no_intro_header:
            config.intro_header = ""
            config.intro_header_file = None

        root = _build_tree(target, config, name, app_dir)
        generator = MarkdownGenerator.from_config(config)
        written = generator.generate_tree(root, config.resolve_path(config.output_dir))
    except (ConfigError, TargetError, DocGenerationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _show_summary(root, written)


@main.command(name="show")
@click.argument("target")
@click.argument("subcommand", nargs=-1)
@click.option("--name", help="Name of the root command (default: the Click command name)")
@click.option(
    "--overlay-dir",
    type=click.Path(file_okay=False, resolve_path=True),
    help="Directory of per-command YAML metadata",
)
@click.option("--tool-name", help="Name shown in the generated-by footer")
@click.option("--no-auto-gen-tag", is_flag=True, help="Leave out the generated-by footer")
@click.option("--config", "config_path", help="Path to mddocs.toml")
@click.option(
    "--app-dir",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Directory TARGET is imported from",
)
def show(
    target: str,
    subcommand: tuple[str, ...],
    name: str | None,
    overlay_dir: str | None,
    tool_name: str | None,
    no_auto_gen_tag: bool,
    config_path: str | None,
    app_dir: str,
) -> None:
    """Print the markdown page of a single command.

    \b
    Examples:
        $ mddocs show mytool.cli:main
        $ mddocs show mytool.cli:main config validate
    """
    try:
        config = ConfigManager.load_config(config_path)
        ConfigManager.merge_cli_values(
            config,
            overlay_dir=overlay_dir,
            tool_name=tool_name,
            disable_auto_gen_tag=True if no_auto_gen_tag else None,
        )
        root = _build_tree(target, config, name, app_dir)
        node = root.find(subcommand)
        if node is None:
            raise TargetError(f"Unknown command: {' '.join([root.name, *subcommand])}")

        MarkdownGenerator.from_config(config).generate(node, sys.stdout)
    except (ConfigError, TargetError, DocGenerationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
