"""exposure-check command line entrypoint."""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TextIO

from exposure_check.client import ExposureClient
from exposure_check.config.settings import load_settings
from exposure_check.domain.password_type import PasswordType
from exposure_check.infrastructure.http.exposure_api_client import ExposureApiError
from exposure_check.infrastructure.logging import configure_logging

EXIT_NOT_COMPROMISED = 0
EXIT_COMPROMISED = 1
EXIT_API_FAILURE = 2

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], ExposureClient]
PasswordReader = Callable[[str], str]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""

    parser = argparse.ArgumentParser(
        prog="exposure-check",
        description="Check passwords and credentials against the exposure database.",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("password", help="check whether a password is compromised")

    credentials = subcommands.add_parser(
        "credentials",
        help="check whether a username/password pair is compromised",
    )
    credentials.add_argument("--username", required=True)
    credentials.add_argument(
        "--last-check-date",
        type=datetime.fromisoformat,
        default=None,
        help="ISO-8601 timestamp of the previous check for this account",
    )
    credentials.add_argument(
        "--exclude",
        action="append",
        type=_parse_password_type,
        default=[],
        metavar="HASH_TYPE",
        help="hash type name or code to skip (repeatable)",
    )

    exposures = subcommands.add_parser("exposures", help="list exposures for a username")
    exposures.add_argument("--username", required=True)
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    client_factory: ClientFactory | None = None,
    password_reader: PasswordReader = getpass.getpass,
    out: TextIO | None = None,
) -> int:
    """Run one exposure-check command and return the process exit code."""

    args = build_parser().parse_args(argv)
    stream = out or sys.stdout

    if client_factory is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)
        client = ExposureClient.from_settings(settings)
    else:
        client = client_factory()

    try:
        if args.command == "password":
            return _run_password(client, password_reader=password_reader, out=stream)
        if args.command == "credentials":
            return _run_credentials(
                client,
                username=args.username,
                last_check_date=args.last_check_date,
                excluded_hash_types=args.exclude,
                password_reader=password_reader,
                out=stream,
            )
        return _run_exposures(client, username=args.username, out=stream)
    except ExposureApiError as error:
        logger.error(
            "exposure_check_failed command=%s status_code=%s error=%s",
            args.command,
            error.status_code,
            error,
        )
        print(f"error: {error}", file=sys.stderr)
        return EXIT_API_FAILURE


def _run_password(client: ExposureClient, *, password_reader: PasswordReader, out: TextIO) -> int:
    exposure = client.check_password_ex(password_reader("Password: "))
    if exposure is None:
        print("compromised: false", file=out)
        return EXIT_NOT_COMPROMISED

    print("compromised: true", file=out)
    print(f"revealed_in_exposure: {str(exposure.revealed_in_exposure).lower()}", file=out)
    print(f"relative_exposure_frequency: {exposure.relative_exposure_frequency}", file=out)
    print(f"exposure_count: {exposure.exposure_count}", file=out)
    return EXIT_COMPROMISED


def _run_credentials(
    client: ExposureClient,
    *,
    username: str,
    last_check_date: datetime | None,
    excluded_hash_types: list[PasswordType],
    password_reader: PasswordReader,
    out: TextIO,
) -> int:
    compromised = client.check_credentials_ex(
        username,
        password_reader("Password: "),
        last_check_date=last_check_date,
        excluded_hash_types=excluded_hash_types,
    )
    print(f"compromised: {str(compromised).lower()}", file=out)
    return EXIT_COMPROMISED if compromised else EXIT_NOT_COMPROMISED


def _run_exposures(client: ExposureClient, *, username: str, out: TextIO) -> int:
    result = client.get_exposures_for_user(username)
    print(json.dumps({"count": result.count, "exposures": list(result.exposures)}), file=out)
    return EXIT_COMPROMISED if result.count > 0 else EXIT_NOT_COMPROMISED


def _parse_password_type(value: str) -> PasswordType:
    if value.isdigit():
        password_type = PasswordType.from_code(int(value))
    else:
        password_type = PasswordType.__members__.get(value)
    if password_type is None:
        raise argparse.ArgumentTypeError(f"unknown hash type: {value}")
    return password_type


if __name__ == "__main__":
    raise SystemExit(main())
