from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from datetime import UTC, datetime
from urllib.parse import parse_qsl, urlsplit

import pytest

from exposure_check.domain.password_type import PasswordType
from exposure_check.infrastructure.http.exposure_api_client import (
    ExposureApiError,
    ExposureApiHttpClient,
    ExposureApiHttpResponse,
    ExposureApiTransportError,
)


@dataclass
class _QueuedTransport:
    responses: list[ExposureApiHttpResponse]
    error: Exception | None = None

    def __post_init__(self) -> None:
        self.calls: list[dict[str, object]] = []

    def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        timeout_seconds: float | None,
    ) -> ExposureApiHttpResponse:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": headers,
                "timeout_seconds": timeout_seconds,
            }
        )
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


def _json_response(payload: object, status_code: int = 200) -> ExposureApiHttpResponse:
    return ExposureApiHttpResponse(
        status_code=status_code,
        body_bytes=json.dumps(payload).encode("utf-8"),
    )


def _client(transport: _QueuedTransport, **kwargs: object) -> ExposureApiHttpClient:
    return ExposureApiHttpClient(
        api_key="api-key",
        api_secret="api-secret",
        base_url="https://exposures.example.org/v1/",
        transport=transport,
        **kwargs,  # type: ignore[arg-type]
    )


def test_get_account_sends_basic_auth_and_parses_specs() -> None:
    transport = _QueuedTransport(
        responses=[
            _json_response(
                {
                    "salt": "$argon2d$v=19$m=1024,t=3,p=2$c2FsdHlzYWx0",
                    "passwordHashesRequired": [
                        {"hashType": 7, "salt": "]G@"},
                        {"hashType": 1},
                        {"hashType": 1234, "salt": "x"},
                    ],
                    "lastBreachDate": "2024-03-01T00:00:00.000Z",
                    "unexpected": "ignored",
                }
            )
        ]
    )

    account = _client(transport).get_account(username_hash="abc123")

    assert account is not None
    assert account.salt == "$argon2d$v=19$m=1024,t=3,p=2$c2FsdHlzYWx0"
    specs = account.password_hashes_required
    assert [spec.hash_type for spec in specs] == [
        PasswordType.vBulletinPost3_8_5,
        PasswordType.MD5,
        None,
    ]
    assert specs[1].salt == ""
    assert account.last_breach_date == datetime(2024, 3, 1, tzinfo=UTC)

    call = transport.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://exposures.example.org/v1/accounts?username=abc123"
    headers = call["headers"]
    assert isinstance(headers, dict)
    expected_token = base64.b64encode(b"api-key:api-secret").decode("ascii")
    assert headers["Authorization"] == f"basic {expected_token}"
    assert headers["Accept"] == "application/json"
    assert call["timeout_seconds"] is None


def test_credentials_query_repeats_partial_hashes_parameter() -> None:
    transport = _QueuedTransport(
        responses=[_json_response({"candidateHashes": ["aaaaaaaaaa01", "bbbbbbbbbb02"]})]
    )

    candidates = _client(transport).get_credential_candidates(
        partial_hashes=["aaaaaaaaaa", "bbbbbbbbbb"]
    )

    assert candidates == ["aaaaaaaaaa01", "bbbbbbbbbb02"]
    parts = urlsplit(str(transport.calls[0]["url"]))
    assert parts.path == "/v1/credentials"
    assert parse_qsl(parts.query) == [
        ("partialHashes", "aaaaaaaaaa"),
        ("partialHashes", "bbbbbbbbbb"),
    ]


def test_password_candidates_are_parsed() -> None:
    transport = _QueuedTransport(
        responses=[
            _json_response(
                {
                    "candidates": [
                        {
                            "md5": "e10adc3949ba59abbe56e057f20f883e",
                            "sha1": "7c4a8d09ca3762af61e59520943dc26494f8941b",
                            "sha256": "8d969eef6e",
                            "revealedInExposure": True,
                            "relativeExposureFrequency": 9,
                            "exposureCount": 42,
                        }
                    ]
                }
            )
        ]
    )

    candidates = _client(transport).get_password_candidates(
        partial_md5="e10adc3949",
        partial_sha1="7c4a8d09ca",
        partial_sha256="8d969eef6e",
    )

    assert candidates is not None
    assert candidates[0].revealed_in_exposure is True
    assert candidates[0].relative_exposure_frequency == 9
    assert candidates[0].exposure_count == 42
    parts = urlsplit(str(transport.calls[0]["url"]))
    assert parts.path == "/v1/passwords"
    assert dict(parse_qsl(parts.query)) == {
        "partial_md5": "e10adc3949",
        "partial_sha1": "7c4a8d09ca",
        "partial_sha256": "8d969eef6e",
    }


def test_exposures_and_details_endpoints() -> None:
    transport = _QueuedTransport(
        responses=[
            _json_response({"count": 2, "exposures": ["5820469ffdb8780510b329cc", "58258f5"]}),
            _json_response(
                {
                    "id": "5820469ffdb8780510b329cc",
                    "title": "last.fm",
                    "entries": 81967007,
                    "date": "2012-03-01T00:00:00.000Z",
                    "category": "Music",
                    "passwordType": "MD5",
                    "exposedData": ["Emails", "Passwords"],
                    "dateAdded": "2016-11-07T09:17:19.000Z",
                    "sourceURLs": [],
                    "domainsAffected": 1219053,
                }
            ),
        ]
    )
    client = _client(transport)

    exposures = client.get_exposures(username="eicar")
    details = client.get_exposure_details(exposure_id="5820469ffdb8780510b329cc")

    assert exposures is not None
    assert exposures.count == 2
    assert exposures.exposures == ("5820469ffdb8780510b329cc", "58258f5")
    assert details is not None
    assert details.title == "last.fm"
    assert details.exposed_data == ("Emails", "Passwords")
    assert details.domains_affected == 1219053
    assert transport.calls[0]["url"] == "https://exposures.example.org/v1/exposures?username=eicar"
    assert (
        transport.calls[1]["url"]
        == "https://exposures.example.org/v1/exposures?id=5820469ffdb8780510b329cc"
    )


def test_not_found_is_reported_as_none() -> None:
    transport = _QueuedTransport(
        responses=[ExposureApiHttpResponse(status_code=404, body_bytes=b"Not found")]
    )

    assert _client(transport).get_account(username_hash="abc123") is None


def test_unexpected_status_raises_with_status_and_body() -> None:
    transport = _QueuedTransport(
        responses=[ExposureApiHttpResponse(status_code=500, body_bytes=b"boom")]
    )

    with pytest.raises(ExposureApiError) as error:
        _client(transport).get_credential_candidates(partial_hashes=["aaaaaaaaaa"])

    assert error.value.status_code == 500
    assert error.value.body == "boom"


def test_unauthorized_raises_api_error() -> None:
    transport = _QueuedTransport(
        responses=[ExposureApiHttpResponse(status_code=401, body_bytes=b"")]
    )

    with pytest.raises(ExposureApiError) as error:
        _client(transport).get_exposures(username="eicar")

    assert error.value.status_code == 401


def test_invalid_json_raises_api_error() -> None:
    transport = _QueuedTransport(
        responses=[ExposureApiHttpResponse(status_code=200, body_bytes=b"{not-json")]
    )

    with pytest.raises(ExposureApiError, match="invalid JSON"):
        _client(transport).get_account(username_hash="abc123")


def test_payload_with_wrong_shape_raises_api_error() -> None:
    transport = _QueuedTransport(responses=[_json_response({"candidateHashes": "nope"})])

    with pytest.raises(ExposureApiError, match="unexpected payload"):
        _client(transport).get_credential_candidates(partial_hashes=["aaaaaaaaaa"])


def test_transport_failure_is_wrapped() -> None:
    transport = _QueuedTransport(responses=[], error=TimeoutError("timed out"))

    with pytest.raises(ExposureApiTransportError):
        _client(transport).get_account(username_hash="abc123")


def test_timeout_is_converted_to_seconds() -> None:
    transport = _QueuedTransport(responses=[_json_response({"count": 0, "exposures": []})])
    client = _client(transport, timeout_ms=2500)

    client.get_exposures(username="eicar")

    assert transport.calls[0]["timeout_seconds"] == 2.5


@pytest.mark.parametrize(("api_key", "api_secret"), [("", "secret"), ("key", "")])
def test_empty_credentials_are_rejected(api_key: str, api_secret: str) -> None:
    with pytest.raises(ValueError):
        ExposureApiHttpClient(api_key=api_key, api_secret=api_secret)


def test_negative_timeout_is_rejected() -> None:
    client = _client(_QueuedTransport(responses=[]))

    with pytest.raises(ValueError):
        client.timeout_ms = -1
