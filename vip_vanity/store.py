"""Cloudflare Workers KV client for vanity ownership lookups and writes."""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .config import Settings

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the key-value store cannot complete a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransientError(StoreError):
    """The ownership read failed in a way that says nothing about the alias."""


class ClaimError(StoreError):
    """The value write was not acknowledged with an OK status."""


def _bearer(token: str) -> str:
    if token.lower().startswith("bearer "):
        return token
    return f"Bearer {token}"


def _decode_owner(document: Any) -> int:
    result = document.get("result") if isinstance(document, dict) else None
    if not isinstance(result, dict):
        raise ValueError("metadata response has no result object")
    raw = result.get("id")
    # bool is an int subclass; json true/false is never a valid id
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise ValueError(f"metadata owner id has unexpected type {type(raw).__name__}")
    if isinstance(raw, str) and not (raw.isascii() and raw.isdigit()):
        raise ValueError(f"metadata owner id {raw!r} is not a decimal number")
    owner_id = int(raw)
    if owner_id < 0:
        raise ValueError(f"metadata owner id {owner_id} is negative")
    return owner_id


class KVStoreClient:
    """Reads alias ownership metadata and writes alias records.

    Every call goes to the network; nothing is cached because ownership may
    change between commands.
    """

    def __init__(
        self,
        settings: Settings,
        api_token: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._settings = settings
        self._headers = {"Authorization": _bearer(api_token)}
        self._client = client or httpx.AsyncClient(timeout=settings.store_timeout_seconds)

    def metadata_url(self, alias: str) -> str:
        return self._settings.metadata_url + alias

    def value_url(self, alias: str) -> str:
        return self._settings.values_url + alias

    async def aclose(self) -> None:
        await self._client.aclose()

    async def resolve_owner(self, alias: str) -> Optional[int]:
        """Return the Discord id owning ``alias``, or ``None`` if unclaimed.

        Raises ``TransientError`` for any response other than 200 or 404, for
        transport failures and for bodies that do not carry an owner id.
        """
        try:
            response = await self._client.get(self.metadata_url(alias), headers=self._headers)
        except httpx.HTTPError as exc:
            logger.error("Metadata request for %s failed: %s", alias, exc)
            raise TransientError(f"metadata request failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        if response.status_code != httpx.codes.OK:
            logger.error(
                "Metadata request for %s returned unexpected status %d",
                alias,
                response.status_code,
            )
            raise TransientError(
                f"metadata request returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return _decode_owner(response.json())
        except ValueError as exc:
            logger.error("Failed to decode metadata response for %s: %s", alias, exc)
            raise TransientError(
                f"invalid metadata response: {exc}", status_code=response.status_code
            ) from exc

    async def write_claim(self, alias: str, public_id: str, requester_id: int) -> None:
        """Store ``public_id`` under ``alias`` with ``requester_id`` as owner.

        The body is multipart form data with ``value`` and ``metadata``
        fields. Raises ``ClaimError`` unless the store answers 200.
        """
        fields = {
            "value": (None, public_id),
            "metadata": (None, f'{{"id":"{requester_id}"}}'),
        }
        try:
            response = await self._client.put(
                self.value_url(alias), headers=self._headers, files=fields
            )
        except httpx.HTTPError as exc:
            logger.error("Value request for %s failed: %s", alias, exc)
            raise ClaimError(f"value request failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            logger.warning(
                "Received code %d after running a value request for %s",
                response.status_code,
                alias,
            )
            raise ClaimError(
                f"value request returned {response.status_code}",
                status_code=response.status_code,
            )
        logger.debug("Stored vanity %s for owner %s", alias, requester_id)


__all__ = ["ClaimError", "KVStoreClient", "StoreError", "TransientError"]
