"""Port for the remote exposure API used by the check services."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from exposure_check.domain.password_type import PasswordType


@dataclass(frozen=True)
class PasswordHashSpecification:
    """One legacy hash the client must compute for an account.

    `hash_type` is None when the server sent a code this client does not know.
    """

    hash_type: PasswordType | None
    salt: str = ""


@dataclass(frozen=True)
class AccountRecord:
    """Account lookup result keyed by the SHA256 of the username."""

    salt: str
    password_hashes_required: tuple[PasswordHashSpecification, ...]
    last_breach_date: datetime | None


@dataclass(frozen=True)
class PasswordCandidate:
    """Full password digests returned for a submitted set of prefixes."""

    md5: str
    sha1: str
    sha256: str
    revealed_in_exposure: bool = False
    relative_exposure_frequency: int = 0
    exposure_count: int = 0


@dataclass(frozen=True)
class ExposuresResult:
    """Exposure ids known for one username."""

    count: int
    exposures: tuple[str, ...]


@dataclass(frozen=True)
class ExposureDetails:
    """Descriptive metadata for one exposure."""

    id: str
    title: str | None
    entries: int
    date: datetime | None
    category: str | None
    password_type: str | None
    exposed_data: tuple[str, ...]
    date_added: datetime | None
    source_urls: tuple[str, ...]
    domains_affected: int


class ExposureApiPort(Protocol):
    """Exposure API contract; every method returns None for "record not found"."""

    def get_account(self, *, username_hash: str) -> AccountRecord | None:
        """Return account salt and required hash specs for a SHA256 username hash."""

    def get_credential_candidates(self, *, partial_hashes: Sequence[str]) -> list[str] | None:
        """Return full credential hashes that start with any submitted prefix."""

    def get_password_candidates(
        self,
        *,
        partial_md5: str,
        partial_sha1: str,
        partial_sha256: str,
    ) -> list[PasswordCandidate] | None:
        """Return compromised password candidates matching the submitted prefixes."""

    def get_exposures(self, *, username: str) -> ExposuresResult | None:
        """Return exposure ids recorded for one username."""

    def get_exposure_details(self, *, exposure_id: str) -> ExposureDetails | None:
        """Return details for one exposure id."""
