"""play – send an audio track from a URL and remember it as now playing."""

from __future__ import annotations

import re

from aiogram import html
from aiogram.types import URLInputFile

from dashbot.commands.base import CommandContext, CommandDefinition

_URL_RE = re.compile(r"^https?://\S+$", re.IGNORECASE)


async def _execute(ctx: CommandContext, args: list[str]) -> None:
    message = ctx.message
    if not args:
        await message.reply("I need a link to an audio file to play!")
        return

    url = args[0]
    if not _URL_RE.match(url):
        await message.reply("That doesn't look like a link. Send me an http(s) URL to an audio file.")
        return

    if ctx.player is None:
        await message.reply("Playback is not available right now.")
        return

    status = await message.reply("🔍 Fetching track...")
    try:
        await message.reply_audio(URLInputFile(url))
        await ctx.player.start(message.chat.id, url)
    except Exception as exc:
        await ctx.error_sink.record("Error in play command", exc)
        await status.edit_text("❌ Could not play that track.")
        return

    await status.edit_text(f"🎵 Now playing: {html.quote(url)}")


play_command = CommandDefinition(
    name="play",
    description="Plays an audio track from a URL",
    handler=_execute,
)
