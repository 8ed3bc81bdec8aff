"""Discord bot adapter.

``VanityBot`` owns the key-value store client for the lifetime of the
gateway connection and closes it on shutdown.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import discord
from discord.ext import commands

from ...store import KVStoreClient

logger = logging.getLogger(__name__)


class VanityBot(commands.Bot):
    """A slash-command-only bot with no gateway intents and no caches."""

    def __init__(
        self,
        store: KVStoreClient,
        *,
        watching: str,
        application_id: Optional[int] = None,
        **options: Any,
    ) -> None:
        super().__init__(
            command_prefix="/",
            intents=discord.Intents.none(),
            member_cache_flags=discord.MemberCacheFlags.none(),
            chunk_guilds_at_startup=False,
            activity=discord.Activity(type=discord.ActivityType.watching, name=watching),
            application_id=application_id,
            **options,
        )
        self.store = store

    async def on_ready(self) -> None:
        logger.info("VIP vanity bot connected as %s", self.user)
        try:
            synced = await self.tree.sync()
            logger.info("Synced %d commands", len(synced))
        except Exception as exc:  # pragma: no cover - logging only
            logger.exception("Failed to sync commands: %s", exc)

    async def close(self) -> None:
        try:
            await self.store.aclose()
        finally:
            await super().close()
