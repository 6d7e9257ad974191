"""Data models for command documentation.

This module defines the read-only view of a command tree that the
document assembler and tree walker consume. Nodes can be built by hand or
by an adapter (see mddocs.click_adapter); generation never mutates them.

Philosophy:
- Ruthlessly simple dataclasses
- Flags behind a small capability protocol
- Self-contained and regeneratable
"""

from dataclasses import dataclass, field
from typing import Protocol, TextIO, runtime_checkable

from mddocs.flags import FlagList


@runtime_checkable
class FlagSet(Protocol):
    """Capability interface for a command's flags.

    Implemented by mddocs.flags.FlagList, or by whatever component owns the
    real flag definitions.
    """

    def has_available_flags(self) -> bool: ...

    def write_defaults(self, buf: TextIO) -> None: ...


@dataclass(eq=False)
class CommandNode:
    """One command in a command tree.

    Attributes:
        name: Command name (e.g. "validate")
        short: One-line description
        long: Full description; falls back to short when empty
        use: Usage template; the first token is the command name and the
            remaining tokens name positional arguments (e.g. "validate PATH")
        usage_line: Explicit invocation line. When empty it is derived from
            the parent path and use.
        example: Multi-line example text
        annotations: Positional argument name -> one-line description
        flags: Flags defined on this command
        inherited_flags: Flags inherited from ancestors
        runnable: Whether the command does something when invoked
        hidden: Hidden commands are not documented
        deprecated: Deprecated commands are not documented
        additional_help_topic: Help-only entries are not documented
        disable_auto_gen_tag: Suppress the generated-by footer for this
            command and its descendants
        children: Sub-commands, in declaration order
        parent: Parent command, None for the root
    """

    name: str
    short: str = ""
    long: str = ""
    use: str = ""
    usage_line: str = ""
    example: str = ""
    annotations: dict[str, str] = field(default_factory=dict)
    flags: FlagSet = field(default_factory=FlagList)
    inherited_flags: FlagSet = field(default_factory=FlagList)
    runnable: bool = False
    hidden: bool = False
    deprecated: bool = False
    additional_help_topic: bool = False
    disable_auto_gen_tag: bool = False
    children: list["CommandNode"] = field(default_factory=list)
    parent: "CommandNode | None" = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.use:
            self.use = self.name
        for child in self.children:
            child.parent = self

    def add_command(self, *commands: "CommandNode") -> None:
        """Attach sub-commands to this command."""
        for command in commands:
            command.parent = self
            self.children.append(command)

    @property
    def path(self) -> list[str]:
        """Names from the root down to this command."""
        return [node.name for node in self.lineage()]

    @property
    def command_path(self) -> str:
        return " ".join(self.path)

    @property
    def description(self) -> str:
        return self.long or self.short

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_available(self) -> bool:
        return not (self.hidden or self.deprecated)

    @property
    def is_visible(self) -> bool:
        """Whether this command gets a document of its own."""
        return self.is_available and not self.additional_help_topic

    @property
    def use_line(self) -> str:
        """Full invocation line, e.g. "circleci config validate PATH [flags]"."""
        if self.usage_line:
            return self.usage_line

        line = self.use
        if self.parent is not None:
            line = f"{self.parent.command_path} {self.use}"
        if self.has_available_flags() and "[flags]" not in line:
            line += " [flags]"
        return line

    def has_available_flags(self) -> bool:
        return self.flags.has_available_flags() or self.inherited_flags.has_available_flags()

    def lineage(self) -> list["CommandNode"]:
        """Ancestors from the root down to and including this command."""
        chain = []
        node: CommandNode | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    def visible_children(self) -> list["CommandNode"]:
        """Documented sub-commands, in declaration order."""
        return [child for child in self.children if child.is_visible]

    def has_see_also(self) -> bool:
        return self.parent is not None or bool(self.visible_children())

    def find(self, names: list[str] | tuple[str, ...]) -> "CommandNode | None":
        """Look up a descendant by its names relative to this command."""
        node = self
        for name in names:
            match = next((child for child in node.children if child.name == name), None)
            if match is None:
                return None
            node = match
        return node

    def walk(self):
        """Yield this command and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


__all__ = ["CommandNode", "FlagSet"]
