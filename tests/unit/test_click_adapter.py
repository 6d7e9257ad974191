"""Unit tests for click_adapter module."""

import io
import sys

import click
import pytest

from mddocs.click_adapter import TargetError, from_click, load_target
from mddocs.overlay import MetadataOverlay


def flag_listing(node) -> str:
    buf = io.StringIO()
    node.flags.write_defaults(buf)
    return buf.getvalue()


class TestFromClick:
    """Tests for building command trees from Click."""

    def test_root(self, click_app):
        root = from_click(click_app)
        assert root.name == "circleci"
        assert root.short == "CLI tool"
        assert root.is_root
        assert not root.runnable

    def test_name_override(self, click_app):
        assert from_click(click_app, name="cci").path == ["cci"]

    def test_children(self, click_app):
        root = from_click(click_app)
        assert [c.name for c in root.children] == ["config", "help", "secret", "version"]
        assert [c.name for c in root.visible_children()] == ["config", "version"]

    def test_help_command_is_not_documented(self, click_app):
        root = from_click(click_app)
        assert not root.find(["help"]).is_available

    def test_hidden_command(self, click_app):
        assert from_click(click_app).find(["secret"]).hidden

    def test_leaf_command(self, click_app):
        validate = from_click(click_app).find(["config", "validate"])
        assert validate.path == ["circleci", "config", "validate"]
        assert validate.short == "Check that the config file is well formed."
        assert validate.long == (
            "Check that the config file is well formed.\n\nValidates PATH against the schema."
        )
        assert validate.use == "validate PATH"
        assert validate.runnable
        assert validate.use_line == "circleci config validate PATH [flags]"

    def test_group_without_own_behaviour_is_not_runnable(self, click_app):
        config = from_click(click_app).find(["config"])
        assert not config.runnable
        assert not config.additional_help_topic
        assert config.is_visible

    def test_group_invoked_without_command_is_runnable(self):
        @click.group(invoke_without_command=True)
        def tool():
            """Tool"""

        assert from_click(tool).runnable

    def test_empty_group_is_help_topic(self):
        @click.group()
        def tool():
            """Tool"""

        tool.add_command(click.Group(name="topics", help="More help"))
        topics = from_click(tool).find(["topics"])
        assert topics.additional_help_topic
        assert not topics.is_visible

    def test_flags(self, click_app):
        validate = from_click(click_app).find(["config", "validate"])
        assert flag_listing(validate) == (
            "  -o, --org-slug string   organization slug\n"
            "      --retries int       number of attempts (default 3)\n"
            "      --help              Show this message and exit.\n"
        )
        assert not validate.inherited_flags.has_available_flags()

    def test_multiple_option_type(self):
        @click.command()
        @click.option("--tag", multiple=True, help="tags")
        def tool(tag):
            """Tool"""

        assert "      --tag strings   tags\n" in flag_listing(from_click(tool))

    def test_no_help_option(self):
        @click.command(add_help_option=False)
        def tool():
            """Tool"""

        node = from_click(tool)
        assert not node.flags.has_available_flags()
        assert node.use_line == "tool"

    def test_clean_help_drops_rewrap_markers(self):
        @click.command()
        def tool():
            """Do things.

            \b
            EXAMPLES:
                $ tool
            \f
            Internal notes.
            """

        long = from_click(tool).long
        assert "\b" not in long
        assert "EXAMPLES:\n    $ tool" in long
        assert "Internal" not in long

    def test_overlay(self, click_app, tmp_path):
        (tmp_path / "circleci_config_validate.yaml").write_text(
            "example: circleci config validate config.yml\n"
            "arguments:\n"
            "  path: The path to your config\n"
        )
        validate = from_click(click_app, MetadataOverlay(tmp_path)).find(["config", "validate"])
        assert validate.example == "circleci config validate config.yml"
        assert validate.annotations["PATH"] == "The path to your config"

    def test_without_overlay(self, click_app):
        validate = from_click(click_app).find(["config", "validate"])
        assert validate.example == ""
        assert validate.annotations == {}


class TestLoadTarget:
    """Tests for load_target()."""

    def test_module_and_attribute(self):
        from mddocs.cli import main

        assert load_target("mddocs.cli:main") is main

    def test_default_attribute(self):
        from mddocs.cli import main

        assert load_target("mddocs.cli") is main

    def test_missing_module(self):
        with pytest.raises(TargetError, match="Cannot import module"):
            load_target("mddocs_no_such_module:cli")

    def test_missing_attribute(self):
        with pytest.raises(TargetError, match="No Click command found"):
            load_target("mddocs.cli:nothing_here")

    def test_not_a_command(self):
        with pytest.raises(TargetError, match="is not a Click command"):
            load_target("mddocs.links:filename")

    def test_empty_module(self):
        with pytest.raises(TargetError, match="Invalid target"):
            load_target(":main")

    def test_module_from_app_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "path", list(sys.path))
        (tmp_path / "mddocs_sample_app.py").write_text(
            "import click\n\n\n@click.command()\ndef main():\n    \"\"\"Sample tool\"\"\"\n"
        )
        command = load_target("mddocs_sample_app:main", app_dir=tmp_path)
        assert isinstance(command, click.Command)
        assert command.name == "main"
        assert sys.path[0] == str(tmp_path.resolve())

    def test_module_that_fails_on_import(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "path", list(sys.path))
        (tmp_path / "mddocs_broken_app.py").write_text("raise RuntimeError('no settings')\n")
        with pytest.raises(TargetError, match="no settings") as exc_info:
            load_target("mddocs_broken_app:cli", app_dir=tmp_path)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_module_with_syntax_error(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "path", list(sys.path))
        (tmp_path / "mddocs_invalid_app.py").write_text("def main(:\n")
        with pytest.raises(TargetError, match="Cannot import module 'mddocs_invalid_app'"):
            load_target("mddocs_invalid_app:main", app_dir=tmp_path)
