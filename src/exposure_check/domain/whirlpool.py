"""Whirlpool digest (ISO/IEC 10118-3, 2003 revision) for legacy hash pipelines.

OpenSSL 3 only exposes Whirlpool through its legacy provider, so hashlib cannot be
relied on for it. The S-box and the circulant diffusion tables are derived at import
time from the mini-boxes published with the algorithm.
"""

from __future__ import annotations

_ROUNDS = 10
_BLOCK_SIZE = 64
_LENGTH_FIELD_SIZE = 32
_MASK64 = 0xFFFFFFFFFFFFFFFF
_REDUCTION_POLYNOMIAL = 0x11D

_E_BOX = (0x1, 0xB, 0x9, 0xC, 0xD, 0x6, 0xF, 0x3, 0xE, 0x8, 0x7, 0x4, 0xA, 0x2, 0x5, 0x0)
_R_BOX = (0x7, 0xC, 0xB, 0xD, 0xE, 0x4, 0x9, 0xF, 0x6, 0x3, 0x8, 0xA, 0x2, 0x5, 0x1, 0x0)
_DIFFUSION_ROW = (0x01, 0x01, 0x04, 0x01, 0x08, 0x05, 0x02, 0x09)


def _build_sbox() -> tuple[int, ...]:
    e_inverse = [0] * 16
    for index, value in enumerate(_E_BOX):
        e_inverse[value] = index

    sbox: list[int] = []
    for value in range(256):
        left = _E_BOX[value >> 4]
        right = e_inverse[value & 0x0F]
        mixed = _R_BOX[left ^ right]
        sbox.append((_E_BOX[left ^ mixed] << 4) | e_inverse[right ^ mixed])
    return tuple(sbox)


def _gf_multiply(left: int, right: int) -> int:
    product = 0
    while right:
        if right & 1:
            product ^= left
        left <<= 1
        if left & 0x100:
            left ^= _REDUCTION_POLYNOMIAL
        right >>= 1
    return product


def _build_tables(sbox: tuple[int, ...]) -> tuple[tuple[int, ...], ...]:
    base: list[int] = []
    for value in sbox:
        word = 0
        for coefficient in _DIFFUSION_ROW:
            word = (word << 8) | _gf_multiply(value, coefficient)
        base.append(word)

    tables = [tuple(base)]
    for column in range(1, 8):
        bits = 8 * column
        tables.append(
            tuple(((word >> bits) | (word << (64 - bits))) & _MASK64 for word in base)
        )
    return tuple(tables)


_SBOX = _build_sbox()
_T0, _T1, _T2, _T3, _T4, _T5, _T6, _T7 = _build_tables(_SBOX)
_ROUND_CONSTANTS = tuple(
    int.from_bytes(bytes(_SBOX[8 * index : 8 * index + 8]), "big") for index in range(_ROUNDS)
)


def _round(words: list[int]) -> list[int]:
    # One pass of substitution, column shift and diffusion over the 8x8 byte state.
    return [
        _T0[(words[row] >> 56) & 0xFF]
        ^ _T1[(words[(row - 1) & 7] >> 48) & 0xFF]
        ^ _T2[(words[(row - 2) & 7] >> 40) & 0xFF]
        ^ _T3[(words[(row - 3) & 7] >> 32) & 0xFF]
        ^ _T4[(words[(row - 4) & 7] >> 24) & 0xFF]
        ^ _T5[(words[(row - 5) & 7] >> 16) & 0xFF]
        ^ _T6[(words[(row - 6) & 7] >> 8) & 0xFF]
        ^ _T7[words[(row - 7) & 7] & 0xFF]
        for row in range(8)
    ]


def _compress(chain: list[int], block: bytes) -> None:
    message = [int.from_bytes(block[8 * row : 8 * row + 8], "big") for row in range(8)]
    key = list(chain)
    state = [word ^ round_key for word, round_key in zip(message, key)]

    for constant in _ROUND_CONSTANTS:
        key = _round(key)
        key[0] ^= constant
        state = [word ^ round_key for word, round_key in zip(_round(state), key)]

    for row in range(8):
        chain[row] ^= state[row] ^ message[row]


def whirlpool_digest(data: bytes) -> bytes:
    """Return the 64-byte Whirlpool digest of one byte string."""

    bit_length = len(data) * 8
    padded = bytearray(data)
    padded.append(0x80)
    while len(padded) % _BLOCK_SIZE != _BLOCK_SIZE - _LENGTH_FIELD_SIZE:
        padded.append(0x00)
    padded += bit_length.to_bytes(_LENGTH_FIELD_SIZE, "big")

    chain = [0] * 8
    for offset in range(0, len(padded), _BLOCK_SIZE):
        _compress(chain, bytes(padded[offset : offset + _BLOCK_SIZE]))

    return b"".join(word.to_bytes(8, "big") for word in chain)
