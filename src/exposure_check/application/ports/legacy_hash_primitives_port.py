"""Port for library-backed legacy hash primitives."""

from __future__ import annotations

from typing import Protocol


class LegacyHashPrimitivesPort(Protocol):
    """Expensive or library-backed primitives used by the hash engine.

    Implementations raise ValueError when a salt is not valid for the primitive.
    """

    def bcrypt(self, *, password: str, salt: str) -> str:
        """Return the BCrypt hash for a `$2a$`/`$2b$`/`$2y$` salt string."""

    def posix_crypt(self, *, password: str, salt: str) -> str:
        """Return the crypt(3) output selected by the salt prefix."""

    def nt_hash(self, *, password: str) -> str:
        """Return the lowercase hex NTLM hash (MD4 over UTF-16LE)."""
