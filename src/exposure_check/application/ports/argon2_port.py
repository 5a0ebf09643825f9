"""Port for the Argon2 derivation used to anonymize legacy hashes."""

from __future__ import annotations

from typing import Protocol


class Argon2DerivationError(ValueError):
    """Raised when an Argon2 derivation cannot be performed for the given inputs."""


class Argon2DeriverPort(Protocol):
    """Argon2 derivation contract."""

    def derive_encoded(self, *, secret: str, salt_spec: str) -> str:
        """Return the encoded `$argon2{d|i}$v=19$...` string for one secret."""

    def derive_credential_hash(self, *, secret: str, salt_spec: str) -> str:
        """Return the hex encoding of the raw derived bytes for one secret."""
