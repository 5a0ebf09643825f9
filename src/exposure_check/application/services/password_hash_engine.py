"""Dispatch from a wire algorithm code to the legacy hash it names."""

from __future__ import annotations

import logging
from collections.abc import Callable

from exposure_check.application.ports.legacy_hash_primitives_port import (
    LegacyHashPrimitivesPort,
)
from exposure_check.domain import legacy_hashes
from exposure_check.domain.password_type import PasswordType

logger = logging.getLogger(__name__)

UnsaltedHash = Callable[[str], str]
SaltedHash = Callable[[str, str], str]


class PasswordHashEngine:
    """Compute legacy password hashes for the closed set of supported algorithms.

    `compute` never raises for algorithm-level problems: unsupported codes, missing
    salts and salts the algorithm cannot parse all yield None.
    """

    def __init__(self, *, primitives: LegacyHashPrimitivesPort) -> None:
        self._primitives = primitives
        self._unsalted: dict[PasswordType, UnsaltedHash] = {
            PasswordType.MD5: legacy_hashes.md5,
            PasswordType.SHA1: legacy_hashes.sha1,
            PasswordType.SHA256: legacy_hashes.sha256,
            PasswordType.SHA384: legacy_hashes.sha384,
            PasswordType.SHA512: legacy_hashes.sha512,
            PasswordType.CRC32: legacy_hashes.crc32,
            PasswordType.MySQLPre4_1: legacy_hashes.mysql_pre_4_1,
            PasswordType.MySQLPost4_1: legacy_hashes.mysql_post_4_1,
            PasswordType.PeopleSoft: legacy_hashes.peoplesoft,
            PasswordType.PartialMD5_20: lambda password: legacy_hashes.md5(password)[:20],
            PasswordType.PartialMD5_29: lambda password: legacy_hashes.md5(password)[:29],
            PasswordType.AVE_DataLife_Diferior: legacy_hashes.ave_datalife_diferior,
            PasswordType.NTLM: self._nt_hash,
        }
        self._salted: dict[PasswordType, SaltedHash] = {
            PasswordType.IPBoard_MyBB: legacy_hashes.mybb,
            PasswordType.vBulletinPre3_8_5: legacy_hashes.vbulletin,
            PasswordType.vBulletinPost3_8_5: legacy_hashes.vbulletin,
            PasswordType.BCrypt: self._bcrypt,
            PasswordType.PHPBB3: legacy_hashes.phpbb3,
            PasswordType.CustomAlgorithm1: legacy_hashes.custom_algorithm1,
            PasswordType.CustomAlgorithm2: legacy_hashes.custom_algorithm2,
            PasswordType.MD5Crypt: self._md5_crypt,
            PasswordType.CustomAlgorithm4: self._custom_algorithm4,
            PasswordType.CustomAlgorithm5: legacy_hashes.custom_algorithm5,
            PasswordType.osCommerce_AEF: legacy_hashes.oscommerce_aef,
            PasswordType.DESCrypt: self._posix_crypt,
            PasswordType.PunBB: legacy_hashes.punbb,
            PasswordType.DjangoMD5: legacy_hashes.django_md5,
            PasswordType.DjangoSHA1: legacy_hashes.django_sha1,
            PasswordType.PliggCMS: legacy_hashes.pligg_cms,
            PasswordType.RunCMS_SMF1_1: legacy_hashes.runcms_smf1_1,
            PasswordType.SHA1Dash: legacy_hashes.sha1_dash,
            PasswordType.CustomAlgorithm7: legacy_hashes.custom_algorithm7,
            PasswordType.CustomAlgorithm8: legacy_hashes.custom_algorithm8,
            PasswordType.CustomAlgorithm9: legacy_hashes.custom_algorithm9,
            PasswordType.SHA512Crypt: self._posix_crypt,
            PasswordType.CustomAlgorithm10: legacy_hashes.custom_algorithm10,
            PasswordType.SHA256Crypt: self._posix_crypt,
            PasswordType.AuthMeSHA256: legacy_hashes.authme_sha256,
            PasswordType.HMACSHA1_SaltAsKey: legacy_hashes.hmac_sha1_salt_as_key,
        }

    def compute(
        self,
        *,
        password: str,
        salt: str | None,
        password_type: PasswordType | None,
    ) -> str | None:
        """Return the legacy hash of one password, or None when it cannot be computed."""

        if password_type is None:
            return None

        try:
            unsalted = self._unsalted.get(password_type)
            if unsalted is not None:
                return unsalted(password)

            salted = self._salted.get(password_type)
            if salted is None or not salt:
                return None
            return salted(password, salt)
        except ValueError as error:
            logger.warning(
                "legacy_hash_skipped hash_type=%s reason=%s",
                password_type.name,
                error,
            )
            return None

    def _nt_hash(self, password: str) -> str:
        return self._primitives.nt_hash(password=password)

    def _bcrypt(self, password: str, salt: str) -> str:
        return self._primitives.bcrypt(password=password, salt=salt)

    def _custom_algorithm4(self, password: str, salt: str) -> str:
        return self._primitives.bcrypt(password=legacy_hashes.md5(password), salt=salt)

    def _posix_crypt(self, password: str, salt: str) -> str:
        return self._primitives.posix_crypt(password=password, salt=salt)

    def _md5_crypt(self, password: str, salt: str) -> str:
        if not salt.startswith("$1$"):
            raise ValueError("MD5-crypt salt must start with $1$")
        return self._primitives.posix_crypt(password=password, salt=salt)
