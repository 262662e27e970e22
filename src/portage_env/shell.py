"""Command dispatch for the ``epenv`` tool.

The shell takes an already-split argument list, looks the first word up
in a dispatch table, and returns the command's output as a string.  It
never prints and never exits: the caller decides how to display output
and which exit status to use.

Supported commands:
    - ``list`` — one ``<name>: <count> packages`` line per mapping.
    - ``set <atom>`` — parse the atom and verify no mapping holds it yet.

Failures are raised, not returned as text, because every failure is
fatal to the invocation.
"""

from collections.abc import Callable
from typing import TypeAlias

from portage_env.atom import parse_atom
from portage_env.registry import MappingRegistry

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]


class CommandError(Exception):
    """Raised for an unknown command or missing arguments."""


class Shell:
    """Command interpreter over a loaded mapping registry."""

    def __init__(self, *, registry: MappingRegistry) -> None:
        """Create a shell bound to *registry*."""
        self._registry = registry
        self._commands: dict[str, _Handler] = {
            "list": self._cmd_list,
            "set": self._cmd_set,
        }

    @property
    def commands(self) -> list[str]:
        """Return the supported command names, sorted."""
        return sorted(self._commands)

    def execute(self, argv: list[str]) -> str:
        """Run the command named by ``argv[0]`` with the remaining arguments.

        Args:
            argv: Command name followed by its arguments.  An empty list
                is a no-op.

        Returns:
            The command output (possibly empty).

        Raises:
            CommandError: If the command is unknown or lacks arguments.
            AtomParseError: If ``set`` is given a malformed atom.
            AtomConflictError: If ``set`` finds the atom in a mapping.

        """
        if not argv:
            return ""
        name, *args = argv
        handler = self._commands.get(name)
        if handler is None:
            msg = f"Unknown command '{name}'"
            raise CommandError(msg)
        return handler(args)

    def _cmd_list(self, _args: list[str]) -> str:
        """Summarise every mapping."""
        return "\n".join(f"{name}: {count} packages" for name, count in self._registry.summary())

    def _cmd_set(self, args: list[str]) -> str:
        """Check that an atom can be assigned without a conflict."""
        if not args:
            msg = "Usage: set <atom>"
            raise CommandError(msg)
        atom = parse_atom(args[0])
        self._registry.check_unique(atom)
        return f"Atom '{atom}' is not assigned to any environment mapping"
