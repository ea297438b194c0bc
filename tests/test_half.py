import math

import pytest
from hypothesis import given, strategies as st

from r3dkit.half import float_bits_to_half, float_to_half, half_to_float, half_to_float_bits


def test_one_encodes_to_known_pattern():
    assert float_to_half(1.0) == 0x3C00
    assert half_to_float(0x3C00) == 1.0


def test_bit_level_conversion_of_one():
    assert float_bits_to_half(0x3F800000) == 0x3C00
    assert half_to_float_bits(0x3C00) == 0x3F800000


def test_infinity_and_overflow():
    assert float_to_half(math.inf) == 0x7C00
    assert float_to_half(1e6) == 0x7C00
    assert float_to_half(1e40) == 0x7C00
    assert float_to_half(-math.inf) == 0x7C00 | 0x8000
    assert half_to_float(0x7C00) == math.inf


def test_nan_becomes_quiet_nan():
    assert float_to_half(math.nan) == 0x7E00
    assert math.isnan(half_to_float(0x7E00))


def test_underflow_flushes_to_zero():
    assert float_to_half(1e-8) == 0
    assert float_to_half(0.0) == 0


def test_denormal_half_decodes_to_zero():
    assert half_to_float(0x0001) == 0.0
    assert half_to_float(0x03FF) == 0.0


@pytest.mark.parametrize("sign", [0x0000, 0x8000])
def test_every_normal_half_round_trips(sign):
    for h in range(0x0400, 0x7C00):
        assert float_to_half(half_to_float(h | sign)) == h | sign


@given(st.floats(min_value=6.2e-5, max_value=65000.0))
def test_negation_sets_sign_bit(x):
    assert float_to_half(-x) == float_to_half(x) | 0x8000


@given(st.floats(min_value=6.2e-5, max_value=65000.0))
def test_relative_error_is_bounded(x):
    decoded = half_to_float(float_to_half(x))
    assert abs(decoded - x) <= x * 2.0 ** -11


@given(st.floats(min_value=6.2e-5, max_value=65000.0), st.floats(min_value=6.2e-5, max_value=65000.0))
def test_encoding_is_monotonic(a, b):
    lo, hi = sorted((a, b))
    assert float_to_half(lo) <= float_to_half(hi)