import pytest

from bufrng.common.stats import chi_square, histogram_uniform_ints, uniformity_report
from bufrng.distributions import RandomGen
from bufrng.sampler import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN


def test_byte_width_rejects_top_value(make_rng):
    # 255 is outside the largest multiple of 3 below 256
    rng, _ = make_rng(0x000007FF, 0)
    assert rng.uniform_uint(3) == 1


def test_short_width_rejects_above_usable(make_rng):
    rng, _ = make_rng(0x0005FFFF, 0)
    assert rng.uniform_uint(300) == 5


def test_word_width_rejects_above_usable(make_rng):
    rng, _ = make_rng(0xFFFFFFFF, 123456)
    assert rng.uniform_uint(70000) == 123456 % 70000


def test_count_one_is_always_zero(make_rng):
    rng, _ = make_rng(0xFFFFFFFF, 0xFFFFFFFF)
    assert [rng.uniform_int(1) for _ in range(8)] == [0] * 8


def test_full_word_range_is_raw(make_rng):
    rng, _ = make_rng(0xDEADBEEF, 0)
    assert rng.uniform_uint(1 << 32) == 0xDEADBEEF


def test_full_64bit_range_is_raw(make_rng):
    rng, _ = make_rng(0x12345678, 0x9ABCDEF0)
    assert rng.uniform_uint64(1 << 64) == 0x9ABCDEF012345678


def test_power_of_two_count_above_word_width(make_rng):
    rng, _ = make_rng(0x12345678, 0x9ABCDEF0)
    assert rng.uniform_uint64(1 << 40) == (0xF0 << 32) | 0x12345678


def test_start_end_single_value(make_rng):
    rng, _ = make_rng(0xFFFFFFFF, 0xFFFFFFFF)
    assert rng.uniform_int_start_end(-5, -5) == -5
    assert rng.uniform_int64_start_end(INT64_MAX, INT64_MAX) == INT64_MAX


def test_start_end_full_int32_range(make_rng):
    rng, _ = make_rng(0, 0xFFFFFFFF)
    assert rng.uniform_int_start_end(INT32_MIN, INT32_MAX) == INT32_MIN
    assert rng.uniform_int_start_end(INT32_MIN, INT32_MAX) == INT32_MAX


def test_start_end_full_int64_range(make_rng):
    rng, _ = make_rng(0, 0)
    assert rng.uniform_int64_start_end(INT64_MIN, INT64_MAX) == INT64_MIN


def test_start_count_offsets_result(make_rng):
    rng, _ = make_rng(0x000000FE, 0)
    assert rng.uniform_int_start_count(10, 3) == 12


def test_start_count_up_to_upper_bound(make_rng):
    rng, _ = make_rng(0, 0)
    assert rng.uniform_int_start_count(INT32_MAX - 1, 1) == INT32_MAX - 1
    assert rng.uniform_int64_start_count(INT64_MAX - 2, 2) == INT64_MAX - 2


@pytest.mark.parametrize("call,args", [
    ("uniform_int", (0,)),
    ("uniform_int", (-3,)),
    ("uniform_int", (INT32_MAX + 1,)),
    ("uniform_int64", (0,)),
    ("uniform_uint", ((1 << 32) + 1,)),
    ("uniform_uint64", ((1 << 64) + 1,)),
    ("uniform_int_start_end", (5, 4)),
    ("uniform_int_start_end", (0, INT32_MAX + 1)),
    ("uniform_int64_start_end", (INT64_MIN - 1, 0)),
    ("uniform_int_start_count", (0, 0)),
    ("uniform_int_start_count", (INT32_MAX, 1)),
    ("uniform_int64_start_count", (INT64_MAX, 1)),
    ("uniform_int64_start_count", (INT64_MIN - 1, 1)),
])
def test_invalid_arguments_raise_value_error(make_rng, call, args):
    rng, provider = make_rng(0, 0)
    with pytest.raises(ValueError):
        getattr(rng, call)(*args)
    assert provider.calls == 0


@pytest.mark.parametrize("value", [1.5, "3", None, True])
def test_non_integer_count_raises_type_error(make_rng, value):
    rng, _ = make_rng(0, 0)
    with pytest.raises(TypeError):
        rng.uniform_int(value)


@pytest.mark.parametrize("buckets", [5, 127, 128, 255, 256, 257, 1000])
def test_uniform_uint_is_flat(buckets):
    rng = RandomGen.create_fast(20240229)
    report = uniformity_report(rng, buckets, 100)
    assert report["samples"] == buckets * 100
    assert report["passed"], report


# top of the short width, the unrejected full short range, and the first word-width count
@pytest.mark.parametrize("buckets", [65535, 65536, 65537])
def test_uniform_uint_is_flat_at_width_boundaries(buckets):
    rng = RandomGen.create_fast(31337)
    report = uniformity_report(rng, buckets, 20)
    assert report["samples"] == buckets * 20
    assert report["passed"], report


def test_wide_range_stays_in_bounds():
    rng = RandomGen.create_fast(7)
    count = (1 << 33) + 12345
    draws = [rng.uniform_int64(count) for _ in range(2000)]
    assert all(0 <= d < count for d in draws)
    assert max(draws) > count // 2


def test_signed_ranges_stay_in_bounds():
    rng = RandomGen.create_fast(11)
    draws = [rng.uniform_int_start_end(-3, 3) for _ in range(700)]
    assert set(draws) == set(range(-3, 4))


def test_histogram_and_chi_square():
    rng = RandomGen.create_fast(3)
    hist = histogram_uniform_ints(rng, 4, 50)
    assert hist.sum() == 200
    assert len(hist) == 4
    assert chi_square([10, 10, 10, 10]) == 0.0
    assert chi_square([20, 0, 20, 0]) == pytest.approx(40.0)
