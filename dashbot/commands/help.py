"""help – list the commands that are both enabled and installed."""

from __future__ import annotations

import logging

from aiogram import html

from dashbot.commands.base import CommandContext, CommandDefinition
from dashbot.services.config_store import get_prefix
from dashbot.utils.text import truncate

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LEN = 200


async def render_help(ctx: CommandContext) -> str:
    """Build the help text.

    Only commands present in the registry *and* persisted as enabled are
    listed, in persisted order.
    """
    prefix = await get_prefix(ctx.store)
    records = await ctx.store.list_commands()

    lines = [
        "<b>Available Commands</b>",
        f"Here are the commands you can use with the prefix "
        f"<code>{html.quote(prefix)}</code>:",
        "",
    ]
    for record in records:
        if not record.enabled:
            continue
        definition = ctx.registry.lookup(record.name)
        if definition is None:
            continue
        description = record.description or definition.description or "No description available"
        description = truncate(description, MAX_DESCRIPTION_LEN)
        lines.append(f"<b>{html.quote(prefix + record.name)}</b> — {html.quote(description)}")

    return "\n".join(lines)


async def _execute(ctx: CommandContext, args: list[str]) -> None:
    try:
        text = await render_help(ctx)
    except Exception:
        logger.exception("Error generating help")
        await ctx.message.reply("Sorry, I had trouble generating the help information.")
        return
    await ctx.message.reply(text)


help_command = CommandDefinition(
    name="help",
    description="Shows available commands",
    handler=_execute,
)
