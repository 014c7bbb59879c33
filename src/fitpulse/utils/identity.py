"""Voter identity normalization."""

from __future__ import annotations

from typing import Final

MAX_IDENTITY_LENGTH: Final[int] = 320


def normalize_identity(identity: str) -> str:
    """Return the stable storage key for a voter's email address.

    Surrounding whitespace is dropped and the address is lowercased. Every
    other character is kept as-is, so distinct addresses such as
    ``a.b@x.com`` and ``ab@x.com`` never share a key.

    Raises:
        ValueError: If ``identity`` is not a plausible email address.
    """
    if not isinstance(identity, str):
        raise ValueError("Voter identity must be a string")

    key = identity.strip().lower()
    if not key:
        raise ValueError("Voter identity is empty")
    if len(key) > MAX_IDENTITY_LENGTH:
        raise ValueError("Voter identity is too long")
    if any(ch.isspace() for ch in key):
        raise ValueError("Voter identity must not contain whitespace")

    local, sep, domain = key.partition("@")
    if not sep or not local or not domain or "@" in domain:
        raise ValueError("Voter identity must be an email address")
    return key
