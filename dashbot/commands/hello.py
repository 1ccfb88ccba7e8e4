"""hello – greet the invoking user."""

from __future__ import annotations

from aiogram import html

from dashbot.commands.base import CommandContext, CommandDefinition


async def _execute(ctx: CommandContext, args: list[str]) -> None:
    user = ctx.message.from_user
    name = user.full_name if user else "there"
    await ctx.message.reply(f"Hello {html.quote(name)}! 👋")


hello_command = CommandDefinition(
    name="hello",
    description="Greets the user",
    handler=_execute,
)
