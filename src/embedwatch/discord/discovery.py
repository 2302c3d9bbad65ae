"""Startup discovery of the channels to monitor."""

from __future__ import annotations

from collections.abc import Iterable

import discord

from embedwatch.logging import get_logger
from embedwatch.relay.models import MonitoredChannel

log = get_logger("embedwatch.discord.discovery")


async def _resolve_channel(client: discord.Client, channel_id: int) -> object:
    channel = client.get_channel(channel_id)
    if channel is None:
        channel = await client.fetch_channel(channel_id)
    return channel


async def discover_channels(
    client: discord.Client,
    category_ids: Iterable[str],
) -> list[MonitoredChannel]:
    """Collect the text channels under each configured category.

    Categories that cannot be fetched (any discord.py error, including
    unknown channel types), or that are not categories, are
    logged and skipped; discovery continues with the rest.
    """
    found: dict[str, MonitoredChannel] = {}

    for category_id in category_ids:
        try:
            category = await _resolve_channel(client, int(category_id))
        except ValueError:
            log.error("category_id_invalid", category_id=category_id)
            continue
        except discord.DiscordException as e:
            log.error("category_fetch_failed", category_id=category_id, error=str(e))
            continue

        if not isinstance(category, discord.CategoryChannel):
            log.error("category_not_found", category_id=category_id)
            continue

        log.info("category_found", category_id=category_id, category_name=category.name)
        for channel in category.text_channels:
            monitored = MonitoredChannel(channel_id=str(channel.id), name=channel.name)
            found[monitored.channel_id] = monitored
            log.info(
                "channel_monitored",
                channel_id=monitored.channel_id,
                channel_name=monitored.name,
            )

    log.info("discovery_complete", monitored_channels=len(found))
    return list(found.values())
