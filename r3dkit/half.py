"""Conversion between 32-bit floats and IEEE 754 half-precision values."""

from __future__ import annotations

import math
import struct

_F32 = struct.Struct("<f")
_U32 = struct.Struct("<I")


def float_bits_to_half(bits: int) -> int:
    """Convert the bit pattern of a 32-bit float to a 16-bit half.

    Values below the smallest normal half flush to zero, overflow becomes
    infinity and every NaN becomes a quiet NaN.
    """
    bits &= 0xFFFFFFFF
    sign = (bits >> 16) & 0x8000
    em = bits & 0x7FFFFFFF

    h = (em - (112 << 23) + (1 << 12)) >> 13
    if em < (113 << 23):
        h = 0
    if em >= (143 << 23):
        h = 0x7C00
    if em > (255 << 23):
        h = 0x7E00
    return (sign | h) & 0xFFFF


def half_to_float_bits(half: int) -> int:
    """Convert a 16-bit half to the bit pattern of a 32-bit float.

    Denormal halves flush to zero; infinities and NaN payloads are kept.
    """
    half &= 0xFFFF
    sign = (half & 0x8000) << 16
    em = half & 0x7FFF

    r = (em + (112 << 10)) << 13
    if em < (1 << 10):
        r = 0
    if em >= (31 << 10):
        r += 112 << 23
    return (sign | r) & 0xFFFFFFFF


def _float32_bits(value: float) -> int:
    try:
        packed = _F32.pack(value)
    except OverflowError:
        packed = _F32.pack(math.copysign(math.inf, value))
    return _U32.unpack(packed)[0]


def float_to_half(value: float) -> int:
    """Encode a float as a 16-bit half."""
    return float_bits_to_half(_float32_bits(value))


def half_to_float(half: int) -> float:
    """Decode a 16-bit half to a float."""
    return _F32.unpack(_U32.pack(half_to_float_bits(half)))[0]