"""Turn an account's required legacy hash specs into anonymized credential hashes."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass

from exposure_check.application.ports.argon2_port import (
    Argon2DerivationError,
    Argon2DeriverPort,
)
from exposure_check.application.ports.exposure_api_port import PasswordHashSpecification
from exposure_check.application.services.password_hash_engine import PasswordHashEngine
from exposure_check.domain.partial_hashes import unique_partial_hashes
from exposure_check.domain.password_type import PasswordType

MAX_HASH_SPECIFICATIONS = 50
MAX_BCRYPT_COMPUTATIONS = 2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CredentialHashBatch:
    """Credential hashes computed for one check and the prefixes to transmit."""

    credential_hashes: tuple[str, ...]
    partial_hashes: tuple[str, ...]
    bcrypt_computations: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.credential_hashes


class CredentialHashService:
    """Compute `Argon2(username + "$" + legacyHash, accountSalt)` for each required spec."""

    def __init__(self, *, engine: PasswordHashEngine, argon2: Argon2DeriverPort) -> None:
        self._engine = engine
        self._argon2 = argon2

    def calculate(
        self,
        *,
        username: str,
        password: str,
        account_salt: str,
        specifications: Sequence[PasswordHashSpecification],
        excluded_hash_types: Collection[PasswordType] = (),
    ) -> CredentialHashBatch:
        """Compute credential hashes in spec order, honoring exclusions and the BCrypt cap.

        Only the first 50 specs are considered. After two BCrypt computations any
        further BCrypt spec is skipped; other algorithms are still processed.
        """

        excluded = frozenset(excluded_hash_types)
        bcrypt_computations = 0
        credential_hashes: list[str] = []

        for specification in specifications[:MAX_HASH_SPECIFICATIONS]:
            hash_type = specification.hash_type
            if hash_type is None or hash_type in excluded:
                continue

            if hash_type is PasswordType.BCrypt:
                if bcrypt_computations >= MAX_BCRYPT_COMPUTATIONS:
                    logger.info("bcrypt_spec_skipped limit=%s", MAX_BCRYPT_COMPUTATIONS)
                    continue
                bcrypt_computations += 1

            legacy_hash = self._engine.compute(
                password=password,
                salt=specification.salt,
                password_type=hash_type,
            )
            if legacy_hash is None:
                continue

            try:
                credential_hash = self._argon2.derive_credential_hash(
                    secret=f"{username}${legacy_hash}",
                    salt_spec=account_salt,
                )
            except Argon2DerivationError as error:
                logger.warning(
                    "credential_hash_skipped hash_type=%s reason=%s",
                    hash_type.name,
                    error,
                )
                continue
            credential_hashes.append(credential_hash)

        return CredentialHashBatch(
            credential_hashes=tuple(credential_hashes),
            partial_hashes=unique_partial_hashes(credential_hashes),
            bcrypt_computations=bcrypt_computations,
        )
