"""Discord adapter: bot class and interaction helpers."""

from __future__ import annotations

from .bot import VanityBot
from .handlers import defer_interaction, respond_to_claim

__all__ = ["VanityBot", "defer_interaction", "respond_to_claim"]
