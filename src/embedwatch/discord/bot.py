"""Discord client that feeds embed announcements into the relay."""

from __future__ import annotations

from collections.abc import Iterable

import discord

from embedwatch.discord.discovery import discover_channels
from embedwatch.logging import get_logger
from embedwatch.relay.ingest import IngestionHandler, IngestOutcome
from embedwatch.relay.models import IncomingMessage, RawField

log = get_logger("embedwatch.discord.bot")


def message_to_event(message: discord.Message) -> IncomingMessage:
    """Reduce a discord.Message to the fields the relay reads."""
    embeds = tuple(
        tuple(
            RawField(name=f.name or "", value=f.value, inline=bool(f.inline))
            for f in embed.fields
        )
        for embed in message.embeds
    )
    return IncomingMessage(
        author_id=str(message.author.id),
        channel_id=str(message.channel.id),
        embeds=embeds,
        channel_name=getattr(message.channel, "name", "") or "",
    )


class EmbedWatchBot(discord.Client):
    """EmbedWatch Discord bot."""

    def __init__(
        self,
        *,
        ingestion: IngestionHandler,
        category_ids: Iterable[str],
    ) -> None:
        """Initialize the bot.

        Args:
            ingestion: Handler receiving every message event.
            category_ids: Categories whose text channels are monitored.
        """
        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        intents.message_content = True

        super().__init__(intents=intents)

        self._ingestion = ingestion
        self._category_ids = list(category_ids)

    async def on_ready(self) -> None:
        """Called when the bot is fully ready; (re)discovers monitored channels."""
        if self.user is not None:
            self._ingestion.set_self_user_id(str(self.user.id))
        log.info("bot_ready", user=str(self.user), guilds=len(self.guilds))

        channels = await discover_channels(self, self._category_ids)
        self._ingestion.set_monitored_channels(channels)
        log.info("monitoring_active", channels=len(channels))

    async def on_message(self, message: discord.Message) -> IngestOutcome:
        """Handle incoming messages."""
        # Ignore own messages before touching anything else
        if self.user is not None and message.author.id == self.user.id:
            return IngestOutcome.IGNORED_SELF
        return self._ingestion.handle(message_to_event(message))
