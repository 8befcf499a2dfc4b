"""Command discovery.

Every public module under colour_checker/commands/ that defines a
module-level `command` (a Command) becomes a colour-tool subcommand,
keyed by Command.name. Modules are imported on first lookup.
"""

import importlib
import pkgutil
from functools import cache

import colour_checker.commands
from colour_checker.core.types import Command


@cache
def all_commands() -> dict[str, Command]:
    """Import every command module and map command name to Command."""
    found: dict[str, Command] = {}
    for info in pkgutil.iter_modules(colour_checker.commands.__path__, prefix='colour_checker.commands.'):
        if info.name.rpartition('.')[2].startswith('_'):
            continue
        cmd = getattr(importlib.import_module(info.name), 'command', None)
        if isinstance(cmd, Command):
            found[cmd.name] = cmd
    return found


def get(name: str) -> Command:
    """Get a command by name."""
    commands = all_commands()
    if name not in commands:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(commands))}')
    return commands[name]
