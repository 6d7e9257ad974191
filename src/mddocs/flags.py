"""Flag listings for command documentation.

This module provides a concrete flag set that renders its defaults as an
aligned two-column listing, the same shape most CLI frameworks print in
their help output:

      -o, --output string   Output directory (default "docs")
      -h, --help            help for docs

Hidden flags are never listed. Any object with ``has_available_flags`` and
``write_defaults`` can stand in for a FlagList (see mddocs.models.FlagSet).
"""

from dataclasses import dataclass, field
from typing import Any, TextIO


@dataclass
class Flag:
    """A single command flag.

    Attributes:
        name: Long name without leading dashes (e.g. "output")
        shorthand: One-letter short name without the dash, or ""
        value_type: Value type shown after the name ("string", "int").
            Empty for boolean switches.
        default: Default value; zero values are not shown
        usage: One-line help text
        hidden: Hidden flags are left out of the listing
    """

    name: str
    shorthand: str = ""
    value_type: str = ""
    default: Any = None
    usage: str = ""
    hidden: bool = False

    def has_default(self) -> bool:
        """Whether the default differs from the zero value of its type."""
        if self.default is None or self.default is False:
            return False
        if isinstance(self.default, str | list | tuple | dict):
            return len(self.default) > 0
        return self.default != 0

    def format_default(self) -> str:
        if isinstance(self.default, bool):
            return "true" if self.default else "false"
        if isinstance(self.default, str):
            return f'"{self.default}"'
        if isinstance(self.default, list | tuple):
            return "[" + ",".join(str(v) for v in self.default) + "]"
        return str(self.default)


@dataclass
class FlagList:
    """An ordered collection of flags belonging to one command."""

    flags: list[Flag] = field(default_factory=list)

    def add(self, flag: Flag) -> None:
        self.flags.append(flag)

    def visible(self) -> list[Flag]:
        return [flag for flag in self.flags if not flag.hidden]

    def has_available_flags(self) -> bool:
        return bool(self.visible())

    def write_defaults(self, buf: TextIO) -> None:
        """Write one aligned line per visible flag to buf."""
        entries = []
        for flag in self.visible():
            if flag.shorthand:
                head = f"  -{flag.shorthand}, --{flag.name}"
            else:
                head = f"      --{flag.name}"
            if flag.value_type:
                head += f" {flag.value_type}"

            usage = flag.usage
            if flag.has_default():
                usage += f" (default {flag.format_default()})"
            entries.append((head, usage))

        if not entries:
            return

        width = max(len(head) for head, _ in entries)
        continuation = "\n" + " " * (width + 3)
        for head, usage in entries:
            padding = " " * (width - len(head) + 3)
            buf.write(f"{head}{padding}{usage.replace(chr(10), continuation)}\n")


__all__ = ["Flag", "FlagList"]
