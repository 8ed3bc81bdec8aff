"""Discord interaction helpers for the vanity command.

These keep the wire-level details of deferring and following up out of
the command body so the reply flow can be unit tested with fakes.
"""

from __future__ import annotations

import logging

import discord

from ...models import ClaimResult

logger = logging.getLogger(__name__)


_MAX_MESSAGE_LENGTH = 1900


def _clamp_text(text: str) -> str:
    """Ensure Discord-compatible message length."""

    if len(text) <= _MAX_MESSAGE_LENGTH:
        return text
    return text[: _MAX_MESSAGE_LENGTH - 1].rstrip() + "…"


async def defer_interaction(interaction: discord.Interaction) -> None:
    """Acknowledge the interaction with an ephemeral "thinking" state."""

    try:
        await interaction.response.defer(ephemeral=True, thinking=True)
    except discord.HTTPException:
        logger.exception("Failed to defer interaction %s", interaction.id)


async def respond_to_claim(interaction: discord.Interaction, result: ClaimResult) -> None:
    """Deliver the single user-facing reply for a claim.

    Rejections answer the interaction directly; every other outcome arrives
    after a deferral and is sent as a follow-up.
    """

    content = _clamp_text(result.message)
    try:
        if result.acknowledged:
            await interaction.followup.send(content, ephemeral=True)
        else:
            await interaction.response.send_message(content, ephemeral=True)
    except discord.HTTPException:
        logger.exception("Failed to send %s reply", result.outcome.value)


__all__ = ["_clamp_text", "defer_interaction", "respond_to_claim"]
