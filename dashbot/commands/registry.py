"""Command registry – name → compiled command definition."""

from __future__ import annotations

import logging

from dashbot.commands.base import CommandDefinition

logger = logging.getLogger(__name__)


class CommandRegistry:
    def __init__(self) -> None:
        self._commands: dict[str, CommandDefinition] = {}

    def register(self, definition: CommandDefinition) -> None:
        """Add *definition*; a later registration under the same name replaces it."""
        name = definition.name
        if not name or name != name.lower() or any(c.isspace() for c in name):
            raise ValueError(f"Invalid command name: {name!r}")
        if not callable(definition.handler):
            raise ValueError(f"Command {name!r} has no callable handler")

        if name in self._commands:
            logger.warning("Command %r re-registered, replacing previous definition", name)
        self._commands[name] = definition
        logger.debug("Registered command %r", name)

    def lookup(self, name: str) -> CommandDefinition | None:
        return self._commands.get(name)

    def all(self) -> list[CommandDefinition]:
        """Definitions in registration order."""
        return list(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands
