"""bcrypt/passlib adapter for the legacy hash primitives that need a library."""

from __future__ import annotations

import re

import bcrypt as bcrypt_library
from passlib.hash import des_crypt, md5_crypt, nthash, sha256_crypt, sha512_crypt

from exposure_check.application.ports.legacy_hash_primitives_port import (
    LegacyHashPrimitivesPort,
)

_BCRYPT_Y_PREFIX = "$2y$"
_BCRYPT_A_PREFIX = "$2a$"
_BCRYPT_MAX_PASSWORD_BYTES = 72

_SHA_CRYPT_PATTERN = re.compile(r"^\$([56])\$(?:rounds=(\d+)\$)?([./0-9A-Za-z]{1,16})")
_MD5_CRYPT_PATTERN = re.compile(r"^\$1\$([./0-9A-Za-z]{1,8})")
_DES_CRYPT_PATTERN = re.compile(r"^[./0-9A-Za-z]{2}")
_SHA_CRYPT_DEFAULT_ROUNDS = 5000
_SHA_CRYPT_MIN_ROUNDS = 1000
_SHA_CRYPT_MAX_ROUNDS = 999_999_999


class LibraryLegacyHashPrimitives(LegacyHashPrimitivesPort):
    """Legacy primitives backed by bcrypt and passlib."""

    def bcrypt(self, *, password: str, salt: str) -> str:
        """Hash with BCrypt, rewriting `$2y$` salts to `$2a$` and restoring the prefix."""

        y_version = salt.startswith(_BCRYPT_Y_PREFIX)
        checked_salt = _BCRYPT_A_PREFIX + salt[4:] if y_version else salt

        encoded = password.encode("utf-8", errors="replace")[:_BCRYPT_MAX_PASSWORD_BYTES]
        hashed = bcrypt_library.hashpw(encoded, checked_salt.encode("ascii")).decode("ascii")

        if y_version:
            return _BCRYPT_Y_PREFIX + hashed[4:]
        return hashed

    def posix_crypt(self, *, password: str, salt: str) -> str:
        """Dispatch on the salt prefix the way crypt(3) does."""

        if salt.startswith(("$5$", "$6$")):
            return _sha_crypt(password=password, salt=salt)
        if salt.startswith("$1$"):
            return _md5_crypt(password=password, salt=salt)
        return _des_crypt(password=password, salt=salt)

    def nt_hash(self, *, password: str) -> str:
        return nthash.hash(password)


def _sha_crypt(*, password: str, salt: str) -> str:
    match = _SHA_CRYPT_PATTERN.match(salt)
    if match is None:
        raise ValueError("invalid SHA-crypt salt")
    variant, raw_rounds, salt_chars = match.groups()

    rounds = _SHA_CRYPT_DEFAULT_ROUNDS
    if raw_rounds is not None:
        rounds = max(_SHA_CRYPT_MIN_ROUNDS, min(_SHA_CRYPT_MAX_ROUNDS, int(raw_rounds)))

    handler = sha512_crypt if variant == "6" else sha256_crypt
    hashed = handler.using(salt=salt_chars, rounds=rounds).hash(password)
    checksum = hashed.rsplit("$", 1)[1]

    # rounds=N is echoed only when the caller's salt carried it.
    rounds_component = f"rounds={rounds}$" if raw_rounds is not None else ""
    return f"${variant}${rounds_component}{salt_chars}${checksum}"


def _md5_crypt(*, password: str, salt: str) -> str:
    match = _MD5_CRYPT_PATTERN.match(salt)
    if match is None:
        raise ValueError("invalid MD5-crypt salt")
    return md5_crypt.using(salt=match.group(1)).hash(password)


def _des_crypt(*, password: str, salt: str) -> str:
    match = _DES_CRYPT_PATTERN.match(salt)
    if match is None:
        raise ValueError("invalid DES-crypt salt")
    return des_crypt.using(salt=match.group(0)).hash(password)
