"""Password exposure check over MD5/SHA1/SHA256 prefixes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from exposure_check.application.ports.exposure_api_port import ExposureApiPort
from exposure_check.domain import legacy_hashes
from exposure_check.domain.partial_hashes import partial_hash

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PasswordExposure:
    """Exposure metadata for a compromised password."""

    revealed_in_exposure: bool
    relative_exposure_frequency: int
    exposure_count: int


class PasswordCheckService:
    """Check a bare password against the global compromised password set."""

    def __init__(self, *, api: ExposureApiPort) -> None:
        self._api = api

    def check(self, *, password: str) -> PasswordExposure | None:
        """Return exposure metadata when the password is compromised, otherwise None.

        A candidate matches when any one of its three digests equals the local one.
        """

        password = legacy_hashes.replace_unpaired_surrogates(password)
        md5 = legacy_hashes.md5(password)
        sha1 = legacy_hashes.sha1(password)
        sha256 = legacy_hashes.sha256(password)

        candidates = self._api.get_password_candidates(
            partial_md5=partial_hash(md5),
            partial_sha1=partial_hash(sha1),
            partial_sha256=partial_hash(sha256),
        )
        for candidate in candidates or ():
            if candidate.md5 == md5 or candidate.sha1 == sha1 or candidate.sha256 == sha256:
                logger.info("password_check_finished compromised=true")
                return PasswordExposure(
                    revealed_in_exposure=candidate.revealed_in_exposure,
                    relative_exposure_frequency=candidate.relative_exposure_frequency,
                    exposure_count=candidate.exposure_count,
                )

        logger.info("password_check_finished compromised=false")
        return None
