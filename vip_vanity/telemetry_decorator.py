"""Discord command logging decorator."""
from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable

import discord

logger = logging.getLogger(__name__)


def track_command(func: Callable) -> Callable:
    """Decorator to log Discord command usage and duration."""

    @functools.wraps(func)
    async def wrapper(interaction: discord.Interaction, *args, **kwargs) -> Any:
        command_name = func.__name__
        user_id = str(interaction.user.id)
        guild_id = str(interaction.guild_id) if interaction.guild_id else "dm"
        start_time = time.monotonic()
        success = False

        try:
            result = await func(interaction, *args, **kwargs)
            success = True
            return result

        except Exception as e:
            logger.error(
                "Command %s failed for user %s: %s: %s",
                command_name,
                user_id,
                type(e).__name__,
                e,
            )
            raise

        finally:
            duration_ms = (time.monotonic() - start_time) * 1000
            logger.info(
                "Command %s by %s in %s finished in %.1fms (success=%s)",
                command_name,
                user_id,
                guild_id,
                duration_ms,
                success,
            )

    return wrapper
