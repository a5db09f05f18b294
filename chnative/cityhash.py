"""CityHash 1.0.2, the variant whose 128-bit form checksums compressed blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

_MASK = (1 << 64) - 1

K0 = 0xC3A5C85C97CB3127
K1 = 0xB492B66FBE98F273
K2 = 0x9AE16A3B2F90404F
K3 = 0xC949D7C7509E6557
K_MUL = 0x9DDFEA08EB382D69


@dataclass(frozen=True)
class Uint128:
    """A 128-bit hash result split into its low and high 64-bit halves."""

    lower: int
    higher: int

    def to_bytes(self) -> bytes:
        """The low half then the high half, each little-endian."""
        return self.lower.to_bytes(8, "little") + self.higher.to_bytes(8, "little")


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        raise TypeError("hash input must be bytes-like, not str")
    return bytes(data)


def _check_u64(value: int, name: str) -> int:
    if not 0 <= value <= _MASK:
        raise ValueError(f"{name} must be an unsigned 64-bit integer, got {value!r}")
    return value


def _fetch64(s: bytes, pos: int) -> int:
    return int.from_bytes(s[pos:pos + 8], "little")


def _fetch32(s: bytes, pos: int) -> int:
    return int.from_bytes(s[pos:pos + 4], "little")


def _rotate(value: int, shift: int) -> int:
    value &= _MASK
    if shift == 0:
        return value
    return ((value >> shift) | (value << (64 - shift))) & _MASK


def _shift_mix(value: int) -> int:
    value &= _MASK
    return value ^ (value >> 47)


def _hash_len16(u: int, v: int) -> int:
    a = ((u ^ v) * K_MUL) & _MASK
    a ^= a >> 47
    b = ((v ^ a) * K_MUL) & _MASK
    b ^= b >> 47
    return (b * K_MUL) & _MASK


def _hash_len0to16(s: bytes, length: int) -> int:
    if length > 8:
        a = _fetch64(s, 0)
        b = _fetch64(s, length - 8)
        return _hash_len16(a, _rotate(b + length, length)) ^ b
    if length >= 4:
        a = _fetch32(s, 0)
        return _hash_len16((length + (a << 3)) & _MASK, _fetch32(s, length - 4))
    if length > 0:
        a, b, c = s[0], s[length >> 1], s[length - 1]
        y = (a + (b << 8)) & 0xFFFFFFFF
        z = (length + (c << 2)) & 0xFFFFFFFF
        return (_shift_mix(((y * K2) & _MASK) ^ ((z * K3) & _MASK)) * K2) & _MASK
    return K2


def _hash_len17to32(s: bytes, length: int) -> int:
    a = (_fetch64(s, 0) * K1) & _MASK
    b = _fetch64(s, 8)
    c = (_fetch64(s, length - 8) * K2) & _MASK
    d = (_fetch64(s, length - 16) * K0) & _MASK
    return _hash_len16(
        (_rotate(a - b, 43) + _rotate(c, 30) + d) & _MASK,
        (a + _rotate(b ^ K3, 20) - c + length) & _MASK,
    )


def _weak_hash32(w: int, x: int, y: int, z: int, a: int, b: int) -> tuple[int, int]:
    a = (a + w) & _MASK
    b = _rotate(b + a + z, 21)
    c = a
    a = (a + x + y) & _MASK
    b = (b + _rotate(a, 44)) & _MASK
    return (a + z) & _MASK, (b + c) & _MASK


def _weak_hash32_at(s: bytes, pos: int, a: int, b: int) -> tuple[int, int]:
    return _weak_hash32(
        _fetch64(s, pos),
        _fetch64(s, pos + 8),
        _fetch64(s, pos + 16),
        _fetch64(s, pos + 24),
        a,
        b,
    )


def _hash_len33to64(s: bytes, length: int) -> int:
    z = _fetch64(s, 24)
    a = (_fetch64(s, 0) + (length + _fetch64(s, length - 16)) * K0) & _MASK
    b = _rotate(a + z, 52)
    c = _rotate(a, 37)
    a = (a + _fetch64(s, 8)) & _MASK
    c = (c + _rotate(a, 7)) & _MASK
    a = (a + _fetch64(s, 16)) & _MASK
    vf = (a + z) & _MASK
    vs = (b + _rotate(a, 31) + c) & _MASK

    a = (_fetch64(s, 16) + _fetch64(s, length - 32)) & _MASK
    z = _fetch64(s, length - 8)
    b = _rotate(a + z, 52)
    c = _rotate(a, 37)
    a = (a + _fetch64(s, length - 24)) & _MASK
    c = (c + _rotate(a, 7)) & _MASK
    a = (a + _fetch64(s, length - 16)) & _MASK

    wf = (a + z) & _MASK
    ws = (b + _rotate(a, 31) + c) & _MASK
    r = _shift_mix(((vf + ws) * K2 + (wf + vs) * K0) & _MASK)
    return (_shift_mix((r * K0 + vs) & _MASK) * K2) & _MASK


def _city_hash64(s: bytes) -> int:
    length = len(s)
    if length <= 16:
        return _hash_len0to16(s, length)
    if length <= 32:
        return _hash_len17to32(s, length)
    if length <= 64:
        return _hash_len33to64(s, length)

    x = _fetch64(s, 0)
    y = _fetch64(s, length - 16) ^ K1
    z = _fetch64(s, length - 56) ^ K0
    v = _weak_hash32_at(s, length - 64, length, y)
    w = _weak_hash32_at(s, length - 32, (length * K1) & _MASK, K0)

    z = (z + _shift_mix(v[1]) * K1) & _MASK
    x = (_rotate(z + x, 39) * K1) & _MASK
    y = (_rotate(y, 33) * K1) & _MASK

    remaining = (length - 1) & ~63
    pos = 0
    while True:
        x = (_rotate(x + y + v[0] + _fetch64(s, pos + 16), 37) * K1) & _MASK
        y = (_rotate(y + v[1] + _fetch64(s, pos + 48), 42) * K1) & _MASK
        x ^= w[1]
        y ^= v[0]
        z = _rotate(z ^ w[0], 33)
        v = _weak_hash32_at(s, pos, (v[1] * K1) & _MASK, (x + w[0]) & _MASK)
        w = _weak_hash32_at(s, pos + 32, (z + w[1]) & _MASK, y)
        z, x = x, z
        pos += 64
        remaining -= 64
        if remaining == 0:
            break

    return _hash_len16(
        (_hash_len16(v[0], w[0]) + _shift_mix(y) * K1 + z) & _MASK,
        (_hash_len16(v[1], w[1]) + x) & _MASK,
    )


def city_hash64(data: BytesLike) -> int:
    """64-bit CityHash of ``data``."""
    return _city_hash64(_as_bytes(data))


def city_hash64_with_seeds(data: BytesLike, seed0: int, seed1: int) -> int:
    """64-bit CityHash of ``data`` mixed with two seeds."""
    _check_u64(seed0, "seed0")
    _check_u64(seed1, "seed1")
    return _hash_len16((city_hash64(data) - seed0) & _MASK, seed1)


def city_hash64_with_seed(data: BytesLike, seed: int) -> int:
    """64-bit CityHash of ``data`` mixed with one seed."""
    return city_hash64_with_seeds(data, K2, seed)


def _city_murmur(s: bytes, seed: Uint128) -> Uint128:
    length = len(s)
    a, b = seed.lower, seed.higher
    remaining = length - 16

    if remaining <= 0:
        a = (_shift_mix((a * K1) & _MASK) * K1) & _MASK
        c = (b * K1 + _hash_len0to16(s, length)) & _MASK
        d = _shift_mix(a + (_fetch64(s, 0) if length >= 8 else c))
    else:
        c = _hash_len16((_fetch64(s, length - 8) + K1) & _MASK, a)
        d = _hash_len16((b + length) & _MASK, (c + _fetch64(s, length - 16)) & _MASK)
        a = (a + d) & _MASK
        pos = 0
        while True:
            a ^= (_shift_mix((_fetch64(s, pos) * K1) & _MASK) * K1) & _MASK
            a = (a * K1) & _MASK
            b ^= a
            c ^= (_shift_mix((_fetch64(s, pos + 8) * K1) & _MASK) * K1) & _MASK
            c = (c * K1) & _MASK
            d ^= c
            pos += 16
            remaining -= 16
            if remaining <= 0:
                break

    a = _hash_len16(a, c)
    b = _hash_len16(d, b)
    return Uint128(a ^ b, _hash_len16(b, a))


def _city_hash128_with_seed(s: bytes, seed: Uint128) -> Uint128:
    length = len(s)
    if length < 128:
        return _city_murmur(s, seed)

    x, y = seed.lower, seed.higher
    z = (length * K1) & _MASK

    v_lo = (_rotate(y ^ K1, 49) * K1 + _fetch64(s, 0)) & _MASK
    v_hi = (_rotate(v_lo, 42) * K1 + _fetch64(s, 8)) & _MASK
    v = (v_lo, v_hi)
    w = (
        (_rotate(y + z, 35) * K1 + x) & _MASK,
        (_rotate(x + _fetch64(s, 88), 53) * K1) & _MASK,
    )

    pos = 0
    while True:
        for _ in range(2):
            x = (_rotate(x + y + v[0] + _fetch64(s, pos + 16), 37) * K1) & _MASK
            y = (_rotate(y + v[1] + _fetch64(s, pos + 48), 42) * K1) & _MASK
            x ^= w[1]
            y ^= v[0]
            z = _rotate(z ^ w[0], 33)
            v = _weak_hash32_at(s, pos, (v[1] * K1) & _MASK, (x + w[0]) & _MASK)
            w = _weak_hash32_at(s, pos + 32, (z + w[1]) & _MASK, y)
            z, x = x, z
            pos += 64
        length -= 128
        if length < 128:
            break

    y = (y + _rotate(w[0], 37) * K0 + z) & _MASK
    x = (x + _rotate(v[0] + z, 49) * K0) & _MASK

    tail_done = 0
    while tail_done < length:
        tail_done += 32
        y = (_rotate(y - x, 42) * K0 + v[1]) & _MASK
        w_lo = (w[0] + _fetch64(s, pos + length - tail_done + 16)) & _MASK
        x = (_rotate(x, 49) * K0 + w_lo) & _MASK
        w = ((w_lo + v[0]) & _MASK, w[1])
        v = _weak_hash32_at(s, pos + length - tail_done, v[0], v[1])

    x = _hash_len16(x, v[0])
    y = _hash_len16(y, w[0])
    return Uint128(
        (_hash_len16((x + v[1]) & _MASK, w[1]) + y) & _MASK,
        _hash_len16((x + w[1]) & _MASK, (y + v[1]) & _MASK),
    )


def city_hash128_with_seed(data: BytesLike, seed: Uint128) -> Uint128:
    """128-bit CityHash of ``data`` starting from ``seed``."""
    _check_u64(seed.lower, "seed.lower")
    _check_u64(seed.higher, "seed.higher")
    return _city_hash128_with_seed(_as_bytes(data), seed)


def city_hash128(data: BytesLike) -> Uint128:
    """128-bit CityHash of ``data``."""
    s = _as_bytes(data)
    length = len(s)
    if length >= 16:
        seed = Uint128(_fetch64(s, 0) ^ K3, _fetch64(s, 8))
        return _city_hash128_with_seed(s[16:], seed)
    if length >= 8:
        seed = Uint128(
            _fetch64(s, 0) ^ ((length * K0) & _MASK),
            _fetch64(s, length - 8) ^ K1,
        )
        return _city_hash128_with_seed(b"", seed)
    return _city_hash128_with_seed(s, Uint128(K0, K1))


class City64:
    """Incremental interface to the 64-bit hash, in the style of hashlib."""

    name = "cityhash64"
    digest_size = 8
    block_size = 1

    def __init__(self, data: BytesLike = b"") -> None:
        self._buffer = bytearray()
        if data:
            self.update(data)

    def update(self, data: BytesLike) -> None:
        self._buffer += _as_bytes(data)

    def intdigest(self) -> int:
        return _city_hash64(bytes(self._buffer))

    def digest(self) -> bytes:
        """The hash as eight big-endian bytes."""
        return self.intdigest().to_bytes(8, "big")

    def hexdigest(self) -> str:
        return self.digest().hex()

    def reset(self) -> None:
        self._buffer.clear()

    def copy(self) -> "City64":
        other = City64()
        other._buffer = bytearray(self._buffer)
        return other