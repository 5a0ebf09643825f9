from __future__ import annotations

import pytest

from exposure_check.domain.whirlpool import whirlpool_digest


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (
            b"",
            "19fa61d75522a4669b44e39c1d2e1726c530232130d407f89afee0964997f7a7"
            "3e83be698b288febcf88e3e03c4f0757ea8964e59b63d93708b138cc42a66eb3",
        ),
        (
            b"abc",
            "4e2448a4c6f486bb16b6562c73b4020bf3043e3a731bce721ae1b303d97e6d4c"
            "7181eebdb6c57e277d0e34957114cbd6c797fc9d95d8b582d225292076d4eef5",
        ),
        (
            b"123456",
            "fd9d94340dbd72c11b37ebb0d2a19b4d05e00fd78e4e2ce8923b9ea3a54e900d"
            "f181cfb112a8a73228d1f3551680e2ad9701a4fcfb248fa7fa77b95180628bb2",
        ),
    ],
)
def test_whirlpool_matches_reference_digests(data: bytes, expected: str) -> None:
    assert whirlpool_digest(data).hex() == expected


def test_whirlpool_handles_inputs_spanning_multiple_blocks() -> None:
    digest = whirlpool_digest(b"a" * 200)

    assert len(digest) == 64
    assert digest != whirlpool_digest(b"a" * 199)
