"""stop – end the chat's playback session."""

from __future__ import annotations

from dashbot.commands.base import CommandContext, CommandDefinition


async def _execute(ctx: CommandContext, args: list[str]) -> None:
    if ctx.player is None:
        await ctx.message.reply("Playback is not available right now.")
        return

    track = await ctx.player.stop(ctx.message.chat.id)
    if track is None:
        await ctx.message.reply("Nothing is playing right now!")
        return
    await ctx.message.reply("🛑 Playback stopped.")


stop_command = CommandDefinition(
    name="stop",
    description="Stops the current playback",
    handler=_execute,
)
