"""Built-in chat commands."""

from __future__ import annotations

import logging

from dashbot.commands.base import CommandContext, CommandDefinition
from dashbot.commands.hello import hello_command
from dashbot.commands.help import help_command
from dashbot.commands.ping import ping_command
from dashbot.commands.play import play_command
from dashbot.commands.registry import CommandRegistry
from dashbot.commands.stop import stop_command
from dashbot.services.error_sink import ErrorSink

logger = logging.getLogger(__name__)

BUILTIN_COMMANDS: tuple[CommandDefinition, ...] = (
    ping_command,
    hello_command,
    help_command,
    play_command,
    stop_command,
)


async def register_builtins(
    registry: CommandRegistry,
    error_sink: ErrorSink,
    definitions: tuple[CommandDefinition, ...] = BUILTIN_COMMANDS,
) -> CommandRegistry:
    """Register *definitions*; a bad one is recorded and skipped."""
    for definition in definitions:
        try:
            registry.register(definition)
        except Exception as exc:
            await error_sink.record("Failed to register commands", exc)
    logger.info("Registered %d commands", len(registry))
    return registry


__all__ = [
    "BUILTIN_COMMANDS",
    "CommandContext",
    "CommandDefinition",
    "CommandRegistry",
    "register_builtins",
]
