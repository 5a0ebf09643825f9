"""Argon2 parameter codec used to anonymize legacy hashes before transmission."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret

from exposure_check.application.ports.argon2_port import (
    Argon2DerivationError,
    Argon2DeriverPort,
)

ARGON2_VERSION = 19
_SETTINGS_PREFIX = "$argon2"
_ARGON2I_PREFIX = "$argon2i"
_ENCODED_COMPONENT_COUNT = 5
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Argon2Parameters:
    """Derivation parameters decoded from an account salt string."""

    salt: bytes
    variant: Type = Type.D
    iterations: int = 3
    memory_cost: int = 1024
    parallelism: int = 2
    hash_length: int = 20


def parse_salt_spec(salt_spec: str) -> Argon2Parameters:
    """Decode a raw salt or a self-describing `$argon2...` salt into parameters.

    A salt that does not start with `$argon2` is used verbatim with the defaults.
    Parameter values that are not 32-bit integers are ignored one by one so the
    remaining fields still apply.
    """

    raw_salt = salt_spec.encode("utf-8", errors="replace")
    if not salt_spec.startswith(_SETTINGS_PREFIX):
        return Argon2Parameters(salt=raw_salt)

    variant = Type.I if salt_spec.startswith(_ARGON2I_PREFIX) else Type.D
    components = salt_spec.split("$")
    while components and not components[-1]:
        components.pop()
    if len(components) != _ENCODED_COMPONENT_COUNT:
        return Argon2Parameters(salt=raw_salt, variant=variant)

    values = {"t": 3, "m": 1024, "p": 2, "l": 20}
    for parameter in components[3].split(","):
        key, _, raw_value = parameter.partition("=")
        if key not in values:
            continue
        if not _INTEGER_PATTERN.fullmatch(raw_value):
            logger.debug("argon2_parameter_ignored key=%s", key)
            continue
        value = int(raw_value)
        if not _INT32_MIN <= value <= _INT32_MAX:
            logger.debug("argon2_parameter_ignored key=%s reason=out_of_range", key)
            continue
        values[key] = value

    try:
        salt = _b64decode_unpadded(components[4])
    except (binascii.Error, ValueError) as error:
        raise Argon2DerivationError("argon2 salt is not valid base64") from error

    return Argon2Parameters(
        salt=salt,
        variant=variant,
        iterations=values["t"],
        memory_cost=values["m"],
        parallelism=values["p"],
        hash_length=values["l"],
    )


def credential_hash_from_encoded(encoded: str) -> str:
    """Return hex of the raw hash bytes that follow the final `$` of an encoded hash."""

    raw_hash = encoded[encoded.rfind("$") + 1 :]
    return _b64decode_unpadded(raw_hash).hex()


class Argon2CredentialDeriver(Argon2DeriverPort):
    """argon2-cffi implementation of the credential hash derivation."""

    def derive_encoded(self, *, secret: str, salt_spec: str) -> str:
        """Derive and return the standard encoded Argon2 string."""

        parameters = parse_salt_spec(salt_spec)
        try:
            encoded = hash_secret(
                secret=secret.encode("utf-8", errors="replace"),
                salt=parameters.salt,
                time_cost=parameters.iterations,
                memory_cost=parameters.memory_cost,
                parallelism=parameters.parallelism,
                hash_len=parameters.hash_length,
                type=parameters.variant,
                version=ARGON2_VERSION,
            )
        except (HashingError, OverflowError, ValueError) as error:
            raise Argon2DerivationError(f"argon2 derivation failed: {error}") from error
        return encoded.decode("ascii")

    def derive_credential_hash(self, *, secret: str, salt_spec: str) -> str:
        return credential_hash_from_encoded(self.derive_encoded(secret=secret, salt_spec=salt_spec))


def _b64decode_unpadded(value: str) -> bytes:
    padding = "=" * (-len(value) % 4)
    return base64.b64decode(value + padding, validate=True)
