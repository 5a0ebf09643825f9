from __future__ import annotations

import io
import json
from dataclasses import dataclass

import pytest

from apps.exposure_cli.main import (
    EXIT_API_FAILURE,
    EXIT_COMPROMISED,
    EXIT_NOT_COMPROMISED,
    build_parser,
    main,
)
from exposure_check.client import ExposureClient
from exposure_check.domain.password_type import PasswordType
from exposure_check.infrastructure.http.exposure_api_client import ExposureApiHttpResponse


@dataclass
class _QueuedTransport:
    responses: list[ExposureApiHttpResponse]

    def __post_init__(self) -> None:
        self.urls: list[str] = []

    def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        timeout_seconds: float | None,
    ) -> ExposureApiHttpResponse:
        self.urls.append(url)
        return self.responses.pop(0)


def _json(payload: object, status_code: int = 200) -> ExposureApiHttpResponse:
    return ExposureApiHttpResponse(
        status_code=status_code,
        body_bytes=json.dumps(payload).encode("utf-8"),
    )


def _run(argv: list[str], transport: _QueuedTransport, password: str = "123456") -> tuple[int, str]:
    out = io.StringIO()
    exit_code = main(
        argv,
        client_factory=lambda: ExposureClient(
            api_key="api-key",
            api_secret="api-secret",
            base_url="https://exposures.example.org/v1",
            transport=transport,
        ),
        password_reader=lambda prompt: password,
        out=out,
    )
    return exit_code, out.getvalue()


def test_password_command_reports_compromised_password() -> None:
    transport = _QueuedTransport(
        responses=[
            _json(
                {
                    "candidates": [
                        {
                            "md5": "e10adc3949ba59abbe56e057f20f883e",
                            "sha1": "",
                            "sha256": "",
                            "revealedInExposure": True,
                            "relativeExposureFrequency": 33,
                            "exposureCount": 100,
                        }
                    ]
                }
            )
        ]
    )

    exit_code, output = _run(["password"], transport)

    assert exit_code == EXIT_COMPROMISED
    assert "compromised: true" in output
    assert "exposure_count: 100" in output
    assert "123456" not in output


def test_password_command_not_found_exits_zero() -> None:
    transport = _QueuedTransport(
        responses=[ExposureApiHttpResponse(status_code=404, body_bytes=b"")]
    )

    exit_code, output = _run(["password"], transport)

    assert exit_code == EXIT_NOT_COMPROMISED
    assert output.strip() == "compromised: false"


def test_credentials_command_unknown_account_exits_zero() -> None:
    transport = _QueuedTransport(
        responses=[ExposureApiHttpResponse(status_code=404, body_bytes=b"")]
    )

    exit_code, output = _run(["credentials", "--username", "user@example.org"], transport)

    assert exit_code == EXIT_NOT_COMPROMISED
    assert output.strip() == "compromised: false"
    assert len(transport.urls) == 1


def test_exposures_command_prints_ids() -> None:
    transport = _QueuedTransport(responses=[_json({"count": 1, "exposures": ["58258f5"]})])

    exit_code, output = _run(["exposures", "--username", "eicar"], transport)

    assert exit_code == EXIT_COMPROMISED
    assert json.loads(output) == {"count": 1, "exposures": ["58258f5"]}


def test_api_failure_exits_with_two(capsys: pytest.CaptureFixture[str]) -> None:
    transport = _QueuedTransport(
        responses=[ExposureApiHttpResponse(status_code=500, body_bytes=b"boom")]
    )

    exit_code, _ = _run(["password"], transport)

    assert exit_code == EXIT_API_FAILURE
    assert "error:" in capsys.readouterr().err


def test_exclude_accepts_names_and_codes() -> None:
    args = build_parser().parse_args(
        ["credentials", "--username", "u", "--exclude", "BCrypt", "--exclude", "16"]
    )

    assert args.exclude == [PasswordType.BCrypt, PasswordType.MD5Crypt]


def test_unknown_exclude_value_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as error:
        build_parser().parse_args(["credentials", "--username", "u", "--exclude", "Nope"])

    assert error.value.code == 2
