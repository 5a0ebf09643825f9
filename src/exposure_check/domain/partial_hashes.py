"""Prefix helpers for the k-anonymity style lookups."""

from __future__ import annotations

PARTIAL_HASH_LENGTH = 10


def partial_hash(full_hash: str) -> str:
    """Return the leading characters of a hash that may be sent to the server."""

    return full_hash[:PARTIAL_HASH_LENGTH]


def unique_partial_hashes(full_hashes: list[str]) -> tuple[str, ...]:
    """Return prefixes for many hashes, deduplicated and in first-seen order."""

    return tuple(dict.fromkeys(partial_hash(value) for value in full_hashes))
