"""Command tree extraction from Click applications.

This module builds a CommandNode tree from Click commands using runtime
inspection: help text, positional arguments, options and sub-commands.
Text Click cannot carry (examples, argument descriptions) comes from an
optional MetadataOverlay.

Philosophy:
- Runtime inspection of Click commands
- Standard library + Click only
- Self-contained and regeneratable
"""

import importlib
import inspect
import logging
import sys
from pathlib import Path

import click

from mddocs.flags import Flag, FlagList
from mddocs.models import CommandNode
from mddocs.overlay import CommandOverlay, MetadataOverlay

logger = logging.getLogger(__name__)

# Sub-commands with these names only repeat --help output
HELP_COMMAND_NAMES = frozenset({"help"})

# Fallback attribute names tried when a target has no ":attribute" part
DEFAULT_TARGET_ATTRIBUTES = ("cli", "main")

SHORT_HELP_LIMIT = 150

_TYPE_NAMES = {
    "text": "string",
    "path": "string",
    "filename": "string",
    "choice": "string",
    "uuid": "string",
    "datetime": "string",
    "integer": "int",
    "integer range": "int",
    "float": "float",
    "float range": "float",
    "boolean": "bool",
}


class TargetError(Exception):
    """Raised when a Click application cannot be loaded."""

    pass


def load_target(target: str, app_dir: str | Path | None = None) -> click.Command:
    """Import a Click command from a "package.module:attribute" reference.

    Args:
        target: Module path, optionally followed by ":" and a (dotted)
            attribute name. Without an attribute, "cli" and then "main" are
            tried.
        app_dir: Directory put first on sys.path so modules that are not
            installed can be imported

    Returns:
        The Click command

    Raises:
        TargetError: If the module cannot be imported or raises while
            importing, or the attribute is missing or not a Click command
    """
    module_path, _, attribute = target.partition(":")
    if not module_path:
        raise TargetError(f"Invalid target '{target}': expected 'package.module:attribute'")

    if app_dir is not None:
        search_dir = str(Path(app_dir).resolve())
        if search_dir not in sys.path:
            sys.path.insert(0, search_dir)
        importlib.invalidate_caches()

    try:
        module = importlib.import_module(module_path)
    except Exception as e:
        raise TargetError(f"Cannot import module '{module_path}': {e}") from e

    candidates = [attribute] if attribute else list(DEFAULT_TARGET_ATTRIBUTES)
    for candidate in candidates:
        obj = module
        try:
            for part in candidate.split("."):
                obj = getattr(obj, part)
        except AttributeError:
            continue
        if isinstance(obj, click.Command):
            return obj
        raise TargetError(f"'{module_path}:{candidate}' is not a Click command")

    raise TargetError(f"No Click command found in '{target}' (tried {', '.join(candidates)})")


def from_click(
    command: click.Command,
    overlay: MetadataOverlay | None = None,
    *,
    name: str | None = None,
    parent: CommandNode | None = None,
) -> CommandNode:
    """Build a CommandNode tree from a Click command.

    Args:
        command: Click command or group
        overlay: Source of example text and argument descriptions
        name: Name to use instead of command.name (e.g. the program name)
        parent: Parent node; the returned node is not attached to it

    Returns:
        CommandNode for command, with sub-commands attached
    """
    name = name or command.name or ""
    ctx = click.Context(command, info_name=name)

    arguments = [p for p in command.params if isinstance(p, click.Argument)]
    use = " ".join([name] + [arg.human_readable_name for arg in arguments])

    node = CommandNode(
        name=name,
        short=command.get_short_help_str(limit=SHORT_HELP_LIMIT),
        long=_clean_help(command.help),
        use=use,
        flags=_extract_flags(command, ctx),
        runnable=_is_runnable(command),
        hidden=command.hidden,
        deprecated=bool(command.deprecated),
    )
    node.parent = parent

    extra = overlay.load(node.path) if overlay is not None else CommandOverlay()
    node.example = extra.example
    node.annotations = _match_annotations(arguments, extra.arguments)

    if isinstance(command, click.Group):
        for sub_name in command.list_commands(ctx):
            sub_command = command.get_command(ctx, sub_name)
            if sub_command is None:
                continue
            child = from_click(sub_command, overlay, name=sub_name, parent=node)
            if sub_name in HELP_COMMAND_NAMES:
                child.hidden = True
            node.add_command(child)

    node.additional_help_topic = _is_help_topic(node)
    logger.debug(f"Extracted command '{node.command_path}'")
    return node


def _is_runnable(command: click.Command) -> bool:
    """Groups only do something of their own when invoked without a sub-command."""
    if command.callback is None:
        return False
    if isinstance(command, click.Group):
        return command.invoke_without_command
    return True


def _is_help_topic(node: CommandNode) -> bool:
    """A command that does nothing and has no real sub-commands is help text only."""
    if node.runnable or node.deprecated or node.hidden:
        return False
    return all(_is_help_topic(child) for child in node.children)


def _clean_help(text: str | None) -> str:
    if not text:
        return ""
    # Click hides everything after a form feed and uses \b as a rewrap marker
    text = inspect.cleandoc(text.split("\f")[0])
    return "\n".join(line for line in text.splitlines() if line.strip() != "\b").strip()


def _match_annotations(arguments: list[click.Argument], described: dict[str, str]) -> dict[str, str]:
    """Key argument descriptions by the names used in the usage template.

    Descriptions may be keyed by the usage name ("PATH") or by the Python
    parameter name ("path").
    """
    annotations = dict(described)
    for arg in arguments:
        usage_name = arg.human_readable_name
        if usage_name not in annotations and arg.name in described:
            annotations[usage_name] = described[arg.name]
    return annotations


def _extract_flags(command: click.Command, ctx: click.Context) -> FlagList:
    flags = FlagList()
    for param in command.get_params(ctx):
        if isinstance(param, click.Option):
            flags.add(_flag_from_option(param))
    return flags


def _flag_from_option(option: click.Option) -> Flag:
    long_names = [opt for opt in option.opts if opt.startswith("--")]
    short_names = [opt for opt in option.opts if len(opt) == 2 and opt.startswith("-")]

    if long_names:
        flag_name = long_names[0][2:]
    else:
        flag_name = (option.name or "").replace("_", "-")

    default = option.default
    if callable(default) or not isinstance(default, str | int | float | list | tuple):
        default = None

    return Flag(
        name=flag_name,
        shorthand=short_names[0][1:] if short_names else "",
        value_type=_value_type(option),
        default=default,
        usage=option.help or "",
        hidden=option.hidden,
    )


def _value_type(option: click.Option) -> str:
    if option.is_flag:
        return ""
    type_name = _TYPE_NAMES.get(option.type.name, "string")
    if option.multiple:
        return f"{type_name}s"
    return type_name


__all__ = ["TargetError", "from_click", "load_target"]
