"""Legacy site password hash formats that only need the standard library.

Every function reproduces a third-party storage format bit-exactly so a plaintext
password can be compared against hashes taken from breached sites. Operand order is
part of each format and must not be "normalized".
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import zlib

from exposure_check.domain.whirlpool import whirlpool_digest

_PHPASS_ALPHABET = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_PHPASS_PREFIX = "$H$"
_PHPASS_SETTING_LENGTH = 12
_PHPASS_MAX_ROUNDS_LOG2 = 30
_MASK32 = 0xFFFFFFFF
_MASK31 = 0x7FFFFFFF
_CUSTOM_ALGORITHM7_KEY = b"d2e1a4c569e7018cc142e9cce755a964bd9b193d2d31f02d80bb589c959afd7e"
_CUSTOM_ALGORITHM9_EXTRA_ROUNDS = 11


def _utf8(value: str) -> bytes:
    return value.encode("utf-8", errors="replace")


def replace_unpaired_surrogates(value: str) -> str:
    """Return `value` with each unpaired surrogate replaced by `?`."""

    return _utf8(value).decode("utf-8")


def md5_bytes(value: str | bytes) -> bytes:
    """Return the raw MD5 digest of text (UTF-8) or bytes."""

    data = _utf8(value) if isinstance(value, str) else value
    return hashlib.md5(data).digest()


def md5(value: str) -> str:
    """Return the lowercase hex MD5 digest of UTF-8 text."""

    return hashlib.md5(_utf8(value)).hexdigest()


def sha1(value: str) -> str:
    """Return the lowercase hex SHA1 digest of UTF-8 text."""

    return hashlib.sha1(_utf8(value)).hexdigest()


def sha256(value: str) -> str:
    """Return the lowercase hex SHA256 digest of UTF-8 text."""

    return hashlib.sha256(_utf8(value)).hexdigest()


def sha384(value: str) -> str:
    return hashlib.sha384(_utf8(value)).hexdigest()


def sha512(value: str) -> str:
    return hashlib.sha512(_utf8(value)).hexdigest()


def whirlpool(value: str) -> str:
    return whirlpool_digest(_utf8(value)).hex()


def crc32(value: str) -> str:
    """Return the unsigned CRC32 checksum as unpadded lowercase hex."""

    return f"{zlib.crc32(_utf8(value)) & _MASK32:x}"


def mybb(password: str, salt: str) -> str:
    return md5(md5(salt) + md5(password))


def vbulletin(password: str, salt: str) -> str:
    return md5(md5(password) + salt)


def phpbb3(password: str, salt: str) -> str:
    """Return the phpBB3 / phpass portable hash for a `$H$` setting string."""

    if not salt.startswith(_PHPASS_PREFIX) or len(salt) < _PHPASS_SETTING_LENGTH:
        raise ValueError("phpBB3 salt must be a $H$ setting of at least 12 characters")
    rounds_log2 = _PHPASS_ALPHABET.find(salt[3])
    if rounds_log2 < 0 or rounds_log2 > _PHPASS_MAX_ROUNDS_LOG2:
        raise ValueError("phpBB3 salt has an invalid rounds character")

    password_bytes = _utf8(password)
    digest = md5_bytes(salt[4:_PHPASS_SETTING_LENGTH] + password)
    for _ in range(1 << rounds_log2):
        digest = hashlib.md5(digest + password_bytes).digest()

    return salt + _encode_phpass64(digest)


def _encode_phpass64(raw: bytes) -> str:
    # 3 source bytes -> 4 output characters, little-endian bit order; the last
    # group stops as soon as the final source byte has been consumed.
    count = len(raw)
    output: list[str] = []
    index = 0
    while True:
        value = raw[index]
        index += 1
        output.append(_PHPASS_ALPHABET[value & 63])
        if index < count:
            value |= raw[index] << 8
        output.append(_PHPASS_ALPHABET[(value >> 6) & 63])
        if index >= count:
            break
        index += 1
        if index < count:
            value |= raw[index] << 16
        output.append(_PHPASS_ALPHABET[(value >> 12) & 63])
        if index >= count:
            break
        index += 1
        output.append(_PHPASS_ALPHABET[(value >> 18) & 63])
        if index >= count:
            break
    return "".join(output)


def custom_algorithm1(password: str, salt: str) -> str:
    left = hashlib.sha512(_utf8(password + salt)).digest()
    right = whirlpool_digest(_utf8(salt + password))
    return bytes(a ^ b for a, b in zip(left, right)).hex()


def custom_algorithm2(password: str, salt: str) -> str:
    return md5(password + salt)


def custom_algorithm5(password: str, salt: str) -> str:
    return sha256(md5(password + salt))


def custom_algorithm7(password: str, salt: str) -> str:
    message = _utf8(sha1(salt) + password)
    return hmac.new(_CUSTOM_ALGORITHM7_KEY, message, hashlib.sha256).hexdigest()


def custom_algorithm8(password: str, salt: str) -> str:
    return sha256(salt + password)


def custom_algorithm9(password: str, salt: str) -> str:
    result = sha512(password + salt)
    for _ in range(_CUSTOM_ALGORITHM9_EXTRA_ROUNDS):
        result = sha512(result)
    return result


def custom_algorithm10(password: str, salt: str) -> str:
    return sha512(f"{password}:{salt}")


def oscommerce_aef(password: str, salt: str) -> str:
    return md5(salt + password)


def mysql_pre_4_1(password: str) -> str:
    """Return the pre-4.1 MySQL PASSWORD() value.

    Arithmetic follows 32-bit two's complement overflow; spaces and tabs are skipped
    and characters are consumed as UTF-16 code units.
    """

    nr = 1345345333
    add = 7
    nr2 = 0x12345671

    units = password.encode("utf-16-le", errors="surrogatepass")
    for offset in range(0, len(units), 2):
        char = units[offset] | (units[offset + 1] << 8)
        if char in (0x20, 0x09):
            continue
        nr = (nr ^ ((((nr & 63) + add) * char) + (nr << 8))) & _MASK32
        nr2 = (nr2 + ((nr2 << 8) ^ nr)) & _MASK32
        add = (add + char) & _MASK32

    return f"{nr & _MASK31:x}{nr2 & _MASK31:x}"


def mysql_post_4_1(password: str) -> str:
    inner = hashlib.sha1(_utf8(password)).digest()
    return "*" + hashlib.sha1(inner).hexdigest()


def peoplesoft(password: str) -> str:
    digest = hashlib.sha1(password.encode("utf-16-le", errors="replace")).digest()
    return base64.b64encode(digest).decode("ascii")


def punbb(password: str, salt: str) -> str:
    return sha1(salt + sha1(password))


def ave_datalife_diferior(password: str) -> str:
    return md5(md5(password))


def django_md5(password: str, salt: str) -> str:
    return f"md5${salt}${md5(salt + password)}"


def django_sha1(password: str, salt: str) -> str:
    return f"sha1${salt}${sha1(salt + password)}"


def pligg_cms(password: str, salt: str) -> str:
    return salt + sha1(salt + password)


def runcms_smf1_1(password: str, salt: str) -> str:
    return sha1(salt + password)


def sha1_dash(password: str, salt: str) -> str:
    return sha1(f"--{salt}--{password}--")


def authme_sha256(password: str, salt: str) -> str:
    return f"$SHA${salt}${sha256(sha256(password) + salt)}"


def hmac_sha1_salt_as_key(password: str, salt: str) -> str:
    return hmac.new(_utf8(salt), _utf8(password), hashlib.sha1).hexdigest()
