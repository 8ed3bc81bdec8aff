"""Discord bot entry point for the VIP vanity service."""
from __future__ import annotations

import logging
from typing import Optional

import discord
from discord import app_commands

from .adapters.discord import VanityBot, defer_interaction, respond_to_claim
from .config import BotConfig
from .service import VanityService
from .store import KVStoreClient
from .telemetry_decorator import track_command

logger = logging.getLogger(__name__)


def build_bot(config: BotConfig, store: Optional[KVStoreClient] = None) -> VanityBot:
    store = store or KVStoreClient(config.settings, config.store_token)
    service = VanityService(store, config.settings)
    bot = VanityBot(
        store,
        watching=config.settings.presence_watching,
        application_id=config.application_id,
    )
    setattr(bot, "vanity_service", service)

    @app_commands.command(name="vanity", description="Claim a vanity link for your public user id")
    @track_command
    @app_commands.describe(
        sb_user_id="Your public user id (lowercase hex)",
        vanity="Vanity name, letters and numbers only, up to 32 characters",
    )
    async def vanity_command(
        interaction: discord.Interaction,
        sb_user_id: str,
        vanity: str,
    ) -> None:
        result = await service.claim(
            sb_user_id,
            vanity,
            interaction.user.id,
            acknowledge=lambda: defer_interaction(interaction),
        )
        await respond_to_claim(interaction, result)

    bot.tree.add_command(vanity_command)
    return bot


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = BotConfig.from_env()
    logging.getLogger().setLevel(config.log_level)
    logger.info("Starting the VIP vanity bot with discord.py %s", discord.__version__)
    bot = build_bot(config)
    bot.run(config.discord_token, log_handler=None)


__all__ = ["build_bot", "main"]
