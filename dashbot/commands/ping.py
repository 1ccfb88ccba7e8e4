"""ping – round-trip latency check."""

from __future__ import annotations

from dashbot.commands.base import CommandContext, CommandDefinition


async def _execute(ctx: CommandContext, args: list[str]) -> None:
    sent = await ctx.message.reply("Calculating ping...")
    latency_ms = int((sent.date - ctx.message.date).total_seconds() * 1000)
    await sent.edit_text(f"Pong! 🏓 Latency is {latency_ms}ms")


ping_command = CommandDefinition(
    name="ping",
    description="Replies with Pong!",
    handler=_execute,
)
