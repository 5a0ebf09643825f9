"""Credential exposure check: account lookup, freshness check, hashing, prefix query."""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from exposure_check.application.ports.exposure_api_port import ExposureApiPort
from exposure_check.application.services.credential_hash_service import CredentialHashService
from exposure_check.domain import legacy_hashes
from exposure_check.domain.password_type import PasswordType

logger = logging.getLogger(__name__)


class CredentialsCheckOutcome(StrEnum):
    """Terminal states of one credentials check."""

    NOT_FOUND = "not_found"
    STALE = "stale"
    NO_QUERY = "no_query"
    NO_MATCH = "no_match"
    MATCH = "match"


@dataclass(frozen=True)
class CredentialsCheckResult:
    """Credentials check result model."""

    outcome: CredentialsCheckOutcome
    hashes_computed: int = 0

    @property
    def compromised(self) -> bool:
        return self.outcome is CredentialsCheckOutcome.MATCH


class CredentialsCheckService:
    """Check a username/password pair while revealing only credential hash prefixes."""

    def __init__(
        self,
        *,
        api: ExposureApiPort,
        credential_hashes: CredentialHashService,
    ) -> None:
        self._api = api
        self._credential_hashes = credential_hashes

    def check(
        self,
        *,
        username: str,
        password: str,
        last_check_date: datetime | None = None,
        excluded_hash_types: Collection[PasswordType] | None = None,
    ) -> CredentialsCheckResult:
        """Run the check; only the MATCH outcome means the credentials are compromised.

        When `last_check_date` is later than the account's last breach date nothing
        new can have appeared, so no hash is computed and no second request is made.
        Naive datetimes are treated as UTC.
        """

        username = legacy_hashes.replace_unpaired_surrogates(username)
        password = legacy_hashes.replace_unpaired_surrogates(password)
        account = self._api.get_account(username_hash=legacy_hashes.sha256(username))
        if account is None:
            logger.info("credentials_check_finished outcome=%s", CredentialsCheckOutcome.NOT_FOUND)
            return CredentialsCheckResult(outcome=CredentialsCheckOutcome.NOT_FOUND)

        if (
            last_check_date is not None
            and account.last_breach_date is not None
            and _as_utc(last_check_date) > _as_utc(account.last_breach_date)
        ):
            logger.info("credentials_check_finished outcome=%s", CredentialsCheckOutcome.STALE)
            return CredentialsCheckResult(outcome=CredentialsCheckOutcome.STALE)

        batch = self._credential_hashes.calculate(
            username=username,
            password=password,
            account_salt=account.salt,
            specifications=account.password_hashes_required,
            excluded_hash_types=excluded_hash_types or (),
        )
        hashes_computed = len(batch.credential_hashes)
        if batch.is_empty:
            logger.info("credentials_check_finished outcome=%s", CredentialsCheckOutcome.NO_QUERY)
            return CredentialsCheckResult(outcome=CredentialsCheckOutcome.NO_QUERY)

        logger.info(
            "credentials_query_started partial_hashes=%s bcrypt_computations=%s",
            len(batch.partial_hashes),
            batch.bcrypt_computations,
        )
        candidates = self._api.get_credential_candidates(partial_hashes=batch.partial_hashes)
        local_hashes = set(batch.credential_hashes)
        if candidates and any(candidate in local_hashes for candidate in candidates):
            logger.info("credentials_check_finished outcome=%s", CredentialsCheckOutcome.MATCH)
            return CredentialsCheckResult(
                outcome=CredentialsCheckOutcome.MATCH,
                hashes_computed=hashes_computed,
            )

        logger.info("credentials_check_finished outcome=%s", CredentialsCheckOutcome.NO_MATCH)
        return CredentialsCheckResult(
            outcome=CredentialsCheckOutcome.NO_MATCH,
            hashes_computed=hashes_computed,
        )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
