"""Vanity claim orchestration: validate, resolve ownership, write."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from .config import Settings
from .models import ClaimOutcome, ClaimRequest, ClaimResult
from .store import ClaimError, KVStoreClient, TransientError
from .validation import ValidationError

logger = logging.getLogger(__name__)

Acknowledge = Callable[[], Awaitable[None]]

TRY_AGAIN_MESSAGE = "Something went wrong while saving your vanity. Please try again later."


class VanityService:
    """Runs the claim procedure for one command at a time.

    The service holds no per-request state, so concurrent commands can share
    one instance. Two requesters racing for the same alias can both pass the
    ownership check; the later write wins.
    """

    def __init__(self, store: KVStoreClient, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    async def claim(
        self,
        public_id: str,
        alias: str,
        requester_id: int,
        *,
        acknowledge: Optional[Acknowledge] = None,
    ) -> ClaimResult:
        """Claim ``alias`` for ``requester_id`` and point it at ``public_id``.

        ``acknowledge`` is awaited once input validation passes and before
        any store traffic, so callers can defer their reply.
        """
        try:
            request = ClaimRequest.parse(public_id, alias, requester_id)
        except ValidationError as exc:
            logger.info("Rejected vanity claim from %s: %s", requester_id, exc)
            return ClaimResult(ClaimOutcome.REJECTED, str(exc))

        if acknowledge is not None:
            await acknowledge()

        try:
            return await self._reconcile(request)
        except Exception:
            logger.exception("Unexpected error while claiming vanity %s", request.alias)
            return ClaimResult(ClaimOutcome.FAILED, TRY_AGAIN_MESSAGE, request=request)

    async def _reconcile(self, request: ClaimRequest) -> ClaimResult:
        try:
            owner_id = await self.store.resolve_owner(request.alias)
        except TransientError:
            return ClaimResult(ClaimOutcome.FAILED, TRY_AGAIN_MESSAGE, request=request)

        if owner_id is not None and owner_id != request.requester_id:
            logger.info(
                "Vanity %s requested by %s is owned by %s",
                request.alias,
                request.requester_id,
                owner_id,
            )
            return ClaimResult(
                ClaimOutcome.CONFLICT,
                f"This vanity is already taken by <@{owner_id}>.",
                request=request,
                owner_id=owner_id,
            )

        try:
            await self.store.write_claim(request.alias, request.public_id, request.requester_id)
        except ClaimError:
            return ClaimResult(
                ClaimOutcome.FAILED, TRY_AGAIN_MESSAGE, request=request, owner_id=owner_id
            )

        logger.info(
            "Vanity %s now maps to %s (owner %s)",
            request.alias,
            request.public_id,
            request.requester_id,
        )
        link = self.settings.lookup_url(request.public_id)
        return ClaimResult(
            ClaimOutcome.CLAIMED,
            f"Vanity `{request.alias}` associated with user id "
            f"[`{request.public_id}`]({link}) has been successfully added.",
            request=request,
            owner_id=request.requester_id,
        )


__all__ = ["TRY_AGAIN_MESSAGE", "VanityService"]
