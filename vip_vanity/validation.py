"""Format checks for the public user id and vanity alias."""
from __future__ import annotations

import re

PUBLIC_ID_PATTERN = re.compile(r"^[0-9a-f]+$")
ALIAS_PATTERN = re.compile(r"^[0-9a-zA-Z]{1,32}$")


class ValidationError(ValueError):
    """Raised when user-supplied command input is malformed."""


class InvalidUserID(ValidationError):
    def __init__(self) -> None:
        super().__init__("Provided user id is not a valid public user id.")


class InvalidAlias(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Provided vanity is not in a valid format. "
            "Use letters and numbers only up to 32 characters."
        )


def normalize_alias(alias: str) -> str:
    return alias.lower()


def validate(public_id: str, alias: str) -> None:
    """Raise a ``ValidationError`` if either token is malformed.

    The public id is checked first so a request with two bad inputs always
    reports the user id.
    """

    # fullmatch so a trailing newline cannot slip past ``$``
    if not PUBLIC_ID_PATTERN.fullmatch(public_id or ""):
        raise InvalidUserID()
    if not ALIAS_PATTERN.fullmatch(normalize_alias(alias or "")):
        raise InvalidAlias()


__all__ = [
    "ALIAS_PATTERN",
    "InvalidAlias",
    "InvalidUserID",
    "PUBLIC_ID_PATTERN",
    "ValidationError",
    "normalize_alias",
    "validate",
]
