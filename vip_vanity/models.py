"""Core data models for vanity claims."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .validation import normalize_alias, validate


class ClaimOutcome(str, Enum):
    """Terminal states of a single claim command."""

    REJECTED = "rejected"
    CONFLICT = "conflict"
    CLAIMED = "claimed"
    FAILED = "failed"


@dataclass(frozen=True)
class ClaimRequest:
    """A validated request to map ``alias`` to ``public_id``.

    ``requester_id`` is the Discord account id of the invoking user; it is
    what the store records as the alias owner.
    """

    alias: str
    public_id: str
    requester_id: int

    @classmethod
    def parse(cls, public_id: str, alias: str, requester_id: int) -> "ClaimRequest":
        """Validate raw command input and build a request.

        Raises ``ValidationError`` on malformed input.
        """
        validate(public_id, alias)
        return cls(
            alias=normalize_alias(alias),
            public_id=public_id,
            requester_id=int(requester_id),
        )


@dataclass(frozen=True)
class ClaimResult:
    """Outcome of one claim command plus the text to show the user."""

    outcome: ClaimOutcome
    message: str
    request: Optional[ClaimRequest] = None
    owner_id: Optional[int] = None

    @property
    def acknowledged(self) -> bool:
        """Whether the interaction was deferred before this result."""
        return self.outcome is not ClaimOutcome.REJECTED


__all__ = ["ClaimOutcome", "ClaimRequest", "ClaimResult"]
