"""Public exposure client composing the HTTP adapter and the check services."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime

from exposure_check.application.ports.exposure_api_port import ExposureDetails, ExposuresResult
from exposure_check.application.services.credential_hash_service import CredentialHashService
from exposure_check.application.services.credentials_check_service import (
    CredentialsCheckResult,
    CredentialsCheckService,
)
from exposure_check.application.services.password_check_service import (
    PasswordCheckService,
    PasswordExposure,
)
from exposure_check.application.services.password_hash_engine import PasswordHashEngine
from exposure_check.config.settings import Settings, load_settings
from exposure_check.domain.password_type import PasswordType
from exposure_check.infrastructure.http.exposure_api_client import (
    ExposureApiHttpClient,
    ExposureApiHttpTransportPort,
)
from exposure_check.infrastructure.security.argon2_codec import Argon2CredentialDeriver
from exposure_check.infrastructure.security.legacy_hash_primitives import (
    LibraryLegacyHashPrimitives,
)


class ExposureClient:
    """Check credentials and passwords against the exposure database.

    Only truncated hash prefixes are sent to the server; exact matching against the
    returned candidates happens locally. Transport and protocol failures raise
    `ExposureApiError`; every other anomaly degrades to a negative result.
    """

    def __init__(
        self,
        *,
        api_key: str,
        api_secret: str,
        base_url: str | None = None,
        timeout_ms: int = 0,
        transport: ExposureApiHttpTransportPort | None = None,
    ) -> None:
        self._api = ExposureApiHttpClient(
            api_key=api_key,
            api_secret=api_secret,
            base_url=base_url,
            timeout_ms=timeout_ms,
            transport=transport,
        )
        hash_engine = PasswordHashEngine(primitives=LibraryLegacyHashPrimitives())
        self._credentials_check = CredentialsCheckService(
            api=self._api,
            credential_hashes=CredentialHashService(
                engine=hash_engine,
                argon2=Argon2CredentialDeriver(),
            ),
        )
        self._password_check = PasswordCheckService(api=self._api)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: ExposureApiHttpTransportPort | None = None,
    ) -> ExposureClient:
        """Build a client from environment settings."""

        resolved = settings or load_settings()
        return cls(
            api_key=resolved.api_key,
            api_secret=resolved.api_secret,
            base_url=str(resolved.api_base_url),
            timeout_ms=resolved.api_timeout_ms,
            transport=transport,
        )

    @property
    def request_timeout_ms(self) -> int:
        """Timeout for connect and read of every request; 0 blocks indefinitely."""

        return self._api.timeout_ms

    @request_timeout_ms.setter
    def request_timeout_ms(self, value: int) -> None:
        self._api.timeout_ms = value

    def check_credentials(self, username: str, password: str) -> bool:
        """Return True when the username/password pair is known to be compromised."""

        return self.check_credentials_ex(username, password)

    def check_credentials_ex(
        self,
        username: str,
        password: str,
        last_check_date: datetime | None = None,
        excluded_hash_types: Collection[PasswordType] | None = None,
    ) -> bool:
        """Credentials check with freshness short-circuit and algorithm exclusions.

        If `last_check_date` is after the account's last breach date no hashes are
        computed and no credentials request is made. `excluded_hash_types` lets the
        caller skip expensive algorithms such as BCrypt.
        """

        return self.check_credentials_detailed(
            username,
            password,
            last_check_date=last_check_date,
            excluded_hash_types=excluded_hash_types,
        ).compromised

    def check_credentials_detailed(
        self,
        username: str,
        password: str,
        *,
        last_check_date: datetime | None = None,
        excluded_hash_types: Collection[PasswordType] | None = None,
    ) -> CredentialsCheckResult:
        """Same as `check_credentials_ex` but reports the terminal state."""

        return self._credentials_check.check(
            username=username,
            password=password,
            last_check_date=last_check_date,
            excluded_hash_types=excluded_hash_types,
        )

    def check_password(self, password: str) -> bool:
        """Return True when the password is in the compromised password set."""

        return self.check_password_ex(password) is not None

    def check_password_ex(self, password: str) -> PasswordExposure | None:
        """Return exposure metadata for a compromised password, otherwise None."""

        return self._password_check.check(password=password)

    def get_exposures_for_user(self, username: str) -> ExposuresResult:
        """Return exposure ids for a username; unknown usernames yield an empty result."""

        result = self._api.get_exposures(username=username)
        if result is None:
            return ExposuresResult(count=0, exposures=())
        return result

    def get_exposure_details(self, exposure_id: str) -> ExposureDetails | None:
        """Return details for one exposure, or None when the id is unknown."""

        return self._api.get_exposure_details(exposure_id=exposure_id)
