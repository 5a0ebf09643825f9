from __future__ import annotations

from exposure_check.domain.partial_hashes import partial_hash, unique_partial_hashes
from exposure_check.domain.password_type import PasswordType


def test_wire_codes_are_stable() -> None:
    assert PasswordType.MD5 == 1
    assert PasswordType.BCrypt == 8
    assert PasswordType.SHA512 == 14
    assert PasswordType.MD5Crypt == 16
    assert PasswordType.HMACSHA1_SaltAsKey == 43
    assert PasswordType.NoHash == 99
    assert 15 not in {member.value for member in PasswordType}


def test_from_code_returns_none_for_unknown_codes() -> None:
    assert PasswordType.from_code(7) is PasswordType.vBulletinPost3_8_5
    assert PasswordType.from_code(15) is None
    assert PasswordType.from_code(1234) is None
    assert PasswordType.from_code(None) is None


def test_partial_hash_keeps_first_ten_characters() -> None:
    assert partial_hash("e10adc3949ba59abbe56e057f20f883e") == "e10adc3949"
    assert partial_hash("abc") == "abc"


def test_unique_partial_hashes_preserve_first_seen_order() -> None:
    hashes = ["bbbbbbbbbb1", "aaaaaaaaaa1", "bbbbbbbbbb2"]

    assert unique_partial_hashes(hashes) == ("bbbbbbbbbb", "aaaaaaaaaa")
