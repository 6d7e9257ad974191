"""
Shared test fixtures and configuration for mddocs tests.

This module provides common fixtures used across all test types:
- Hand-built command trees
- A small Click application
- A fixed generation date
"""

from datetime import date

import click
import pytest

from mddocs.flags import Flag, FlagList
from mddocs.models import CommandNode

# ============================================================================
# DATE FIXTURES
# ============================================================================


@pytest.fixture
def fixed_date():
    """Generation date used for deterministic footers."""
    return date(2006, 1, 2)


# ============================================================================
# COMMAND TREE FIXTURES
# ============================================================================


@pytest.fixture
def circleci_tree():
    """Root "circleci" command with a single runnable "version" child."""
    root = CommandNode(name="circleci", short="CLI tool")
    root.add_command(
        CommandNode(name="version", short="Print version", runnable=True)
    )
    return root


@pytest.fixture
def config_tree():
    """A deeper tree with flags, arguments, and commands that are not documented.

    circleci
    ├── config
    │   ├── validate PATH   (runnable, annotated, own + inherited flags)
    │   └── pack            (hidden)
    ├── orb                 (deprecated)
    ├── topics              (additional help topic)
    └── version             (runnable)
    """
    root = CommandNode(
        name="circleci",
        short="CLI tool",
        long="Use CircleCI from the command line.",
        flags=FlagList([Flag(name="help", shorthand="h", usage="help for circleci")]),
    )
    config = CommandNode(name="config", short="Operate on build config files")
    validate = CommandNode(
        name="validate",
        short="Check that the config file is well formed",
        use="validate PATH",
        runnable=True,
        example="circleci config validate .circleci/config.yml",
        annotations={"PATH": "The path to your config (use \"-\" for STDIN)"},
        flags=FlagList(
            [
                Flag(name="org-slug", value_type="string", usage="organization slug"),
                Flag(name="help", shorthand="h", usage="help for validate"),
            ]
        ),
        inherited_flags=FlagList(
            [Flag(name="token", value_type="string", usage="your token for using CircleCI")]
        ),
    )
    pack = CommandNode(name="pack", short="Pack up your config", runnable=True, hidden=True)
    config.add_command(validate, pack)

    root.add_command(
        config,
        CommandNode(name="orb", short="Operate on orbs", runnable=True, deprecated=True),
        CommandNode(name="topics", short="More help", additional_help_topic=True),
        CommandNode(name="version", short="Print version", runnable=True),
    )
    return root


@pytest.fixture
def click_app():
    """A small Click application shaped like the config_tree fixture."""

    @click.group(name="circleci")
    def cli():
        """CLI tool"""

    @cli.command()
    def version():
        """Print version"""

    @cli.group()
    def config():
        """Operate on build config files"""

    @config.command()
    @click.argument("path")
    @click.option("--org-slug", "-o", default="", help="organization slug")
    @click.option("--retries", type=int, default=3, help="number of attempts")
    @click.option("--debug", is_flag=True, hidden=True, help="debug output")
    def validate(path, org_slug, retries, debug):
        """Check that the config file is well formed.

        Validates PATH against the schema.
        """

    @cli.command(hidden=True)
    def secret():
        """Not documented"""

    @cli.command(name="help")
    def help_command():
        """Show help"""

    return cli
