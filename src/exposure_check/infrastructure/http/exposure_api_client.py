"""Concrete exposure API HTTP adapter for account, credential and password lookups."""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar
from urllib.error import HTTPError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from pydantic import BaseModel, ValidationError

from exposure_check.application.dto.api_models import (
    AccountsResponse,
    CredentialCandidatesResponse,
    ExposureDetailsResponse,
    ExposuresResponse,
    PasswordCandidatesResponse,
)
from exposure_check.application.ports.exposure_api_port import (
    AccountRecord,
    ExposureApiPort,
    ExposureDetails,
    ExposuresResult,
    PasswordCandidate,
)

DEFAULT_BASE_URL = "https://api.enzoic.com/v1"
ACCOUNTS_API_PATH = "/accounts"
CREDENTIALS_API_PATH = "/credentials"
PASSWORDS_API_PATH = "/passwords"
EXPOSURES_API_PATH = "/exposures"

_ModelT = TypeVar("_ModelT", bound=BaseModel)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExposureApiHttpResponse:
    """Normalized HTTP response data returned by transport implementations."""

    status_code: int
    body_bytes: bytes


class ExposureApiHttpTransportPort(Protocol):
    """Transport protocol used by the exposure API adapter."""

    def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        timeout_seconds: float | None,
    ) -> ExposureApiHttpResponse:
        """Execute one HTTP request and return normalized response data."""


class ExposureApiError(RuntimeError):
    """Raised when the exposure API answers with an unexpected status or payload."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ExposureApiTransportError(ExposureApiError):
    """Raised when the exposure API cannot be reached or the request times out."""


class UrllibExposureApiTransport:
    """urllib-based blocking transport implementation for exposure API calls."""

    def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        timeout_seconds: float | None,
    ) -> ExposureApiHttpResponse:
        """Execute HTTP request and normalize HTTP error statuses into responses."""

        request = Request(url=url, headers=headers, method=method)
        try:
            with urlopen(request, timeout=timeout_seconds) as response:
                status_code = int(response.getcode())
                payload = response.read()
                return ExposureApiHttpResponse(status_code=status_code, body_bytes=payload)
        except HTTPError as error:
            payload = error.read()
            return ExposureApiHttpResponse(status_code=int(error.code), body_bytes=payload)
        except OSError as error:
            raise ExposureApiTransportError(f"transport connection failure: {error}") from error


class ExposureApiHttpClient(ExposureApiPort):
    """Exposure REST API adapter; HTTP 404 is reported as None, never as an error."""

    def __init__(
        self,
        *,
        api_key: str,
        api_secret: str,
        base_url: str | None = None,
        timeout_ms: int = 0,
        transport: ExposureApiHttpTransportPort | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("API key cannot be empty")
        if not api_secret:
            raise ValueError("API secret cannot be empty")
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._authorization = _basic_authorization(api_key=api_key, api_secret=api_secret)
        self._transport = transport or UrllibExposureApiTransport()
        self.timeout_ms = timeout_ms

    @property
    def timeout_ms(self) -> int:
        """Connect/read timeout applied to every request; 0 blocks indefinitely."""

        return self._timeout_ms

    @timeout_ms.setter
    def timeout_ms(self, value: int) -> None:
        if value < 0:
            raise ValueError("timeout_ms cannot be negative")
        self._timeout_ms = value

    def get_account(self, *, username_hash: str) -> AccountRecord | None:
        """Fetch account salt and required hash specs."""

        response = self._get_model(
            operation="get_account",
            path=ACCOUNTS_API_PATH,
            query=[("username", username_hash)],
            model=AccountsResponse,
        )
        return response.to_record() if response is not None else None

    def get_credential_candidates(self, *, partial_hashes: Sequence[str]) -> list[str] | None:
        """Fetch full credential hashes for a batch of prefixes in one request."""

        response = self._get_model(
            operation="get_credential_candidates",
            path=CREDENTIALS_API_PATH,
            query=[("partialHashes", value) for value in partial_hashes],
            model=CredentialCandidatesResponse,
        )
        return list(response.candidate_hashes) if response is not None else None

    def get_password_candidates(
        self,
        *,
        partial_md5: str,
        partial_sha1: str,
        partial_sha256: str,
    ) -> list[PasswordCandidate] | None:
        """Fetch compromised password candidates for the three digest prefixes."""

        response = self._get_model(
            operation="get_password_candidates",
            path=PASSWORDS_API_PATH,
            query=[
                ("partial_md5", partial_md5),
                ("partial_sha1", partial_sha1),
                ("partial_sha256", partial_sha256),
            ],
            model=PasswordCandidatesResponse,
        )
        if response is None:
            return None
        return [candidate.to_record() for candidate in response.candidates]

    def get_exposures(self, *, username: str) -> ExposuresResult | None:
        response = self._get_model(
            operation="get_exposures",
            path=EXPOSURES_API_PATH,
            query=[("username", username)],
            model=ExposuresResponse,
        )
        return response.to_record() if response is not None else None

    def get_exposure_details(self, *, exposure_id: str) -> ExposureDetails | None:
        response = self._get_model(
            operation="get_exposure_details",
            path=EXPOSURES_API_PATH,
            query=[("id", exposure_id)],
            model=ExposureDetailsResponse,
        )
        return response.to_record() if response is not None else None

    def _get_model(
        self,
        *,
        operation: str,
        path: str,
        query: list[tuple[str, str]],
        model: type[_ModelT],
    ) -> _ModelT | None:
        payload = self._get_json(operation=operation, path=path, query=query)
        if payload is None:
            return None
        try:
            return model.model_validate(payload)
        except ValidationError as error:
            raise ExposureApiError(f"{operation} returned an unexpected payload") from error

    def _get_json(
        self,
        *,
        operation: str,
        path: str,
        query: list[tuple[str, str]],
    ) -> dict[str, object] | None:
        url = f"{self._base_url}{path}"
        if query:
            url = f"{url}?{urlencode(query)}"
        headers = {
            "Authorization": self._authorization,
            "Accept": "application/json",
        }
        timeout_seconds = self._timeout_ms / 1000 if self._timeout_ms > 0 else None

        try:
            response = self._transport.request(
                method="GET",
                url=url,
                headers=headers,
                timeout_seconds=timeout_seconds,
            )
        except ExposureApiError:
            raise
        except Exception as error:  # noqa: BLE001
            raise ExposureApiTransportError(f"{operation} transport failure") from error

        if response.status_code == 404:
            logger.debug("exposure_api_not_found operation=%s", operation)
            return None
        if response.status_code != 200:
            details = _decode_error_payload(response.body_bytes)
            raise ExposureApiError(
                f"{operation} failed with status {response.status_code}: {details}",
                status_code=response.status_code,
                body=details,
            )

        try:
            decoded = json.loads(response.body_bytes.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            raise ExposureApiError(
                f"{operation} returned invalid JSON payload",
                status_code=response.status_code,
            ) from error
        if not isinstance(decoded, dict):
            raise ExposureApiError(
                f"{operation} returned non-object JSON payload",
                status_code=response.status_code,
            )
        return decoded


def _basic_authorization(*, api_key: str, api_secret: str) -> str:
    token = base64.b64encode(f"{api_key}:{api_secret}".encode()).decode("ascii")
    return f"basic {token}"


def _decode_error_payload(payload: bytes) -> str:
    if not payload:
        return "empty response body"
    try:
        decoded = payload.decode("utf-8")
    except UnicodeDecodeError:
        return "<binary>"
    return decoded[:200]
