import time

import pytest

from posespline.timing import (
    DURATION_MAX,
    DURATION_MIN,
    INT32_MAX,
    INT32_MIN,
    NSEC_PER_SEC,
    TIME_MAX,
    TIME_MIN,
    UINT32_MAX,
    Duration,
    Time,
    TimeRangeError,
    WallDuration,
    WallTime,
    normalize_sec_nsec,
    normalize_sec_nsec_signed,
    normalize_sec_nsec_unsigned,
)


@pytest.mark.parametrize("sec,nsec", [(0, 0), (1, 2_500_000_000), (7, 999_999_999), (3, 10 * NSEC_PER_SEC)])
def test_normalize_preserves_total(sec, nsec):
    s, n = normalize_sec_nsec(sec, nsec)
    assert 0 <= n < NSEC_PER_SEC
    assert s * NSEC_PER_SEC + n == sec * NSEC_PER_SEC + nsec


def test_normalize_rejects_too_many_carried_seconds():
    with pytest.raises(TimeRangeError):
        normalize_sec_nsec(0, (UINT32_MAX + 1) * NSEC_PER_SEC)


@pytest.mark.parametrize("sec,nsec", [(5, -1), (5, -3 * NSEC_PER_SEC - 7), (0, 2 * NSEC_PER_SEC + 1)])
def test_normalize_unsigned_borrows_and_carries(sec, nsec):
    s, n = normalize_sec_nsec_unsigned(sec, nsec)
    assert 0 <= n < NSEC_PER_SEC
    assert s * NSEC_PER_SEC + n == sec * NSEC_PER_SEC + nsec


@pytest.mark.parametrize("sec,nsec", [(0, -1), (INT32_MAX, NSEC_PER_SEC), (-1, 0)])
def test_normalize_unsigned_out_of_range(sec, nsec):
    with pytest.raises(TimeRangeError):
        normalize_sec_nsec_unsigned(sec, nsec)


@pytest.mark.parametrize("sec,nsec", [(0, -1), (-2, 3 * NSEC_PER_SEC), (4, -7_000_000_001)])
def test_normalize_signed_preserves_total(sec, nsec):
    s, n = normalize_sec_nsec_signed(sec, nsec)
    assert 0 <= n < NSEC_PER_SEC
    assert s * NSEC_PER_SEC + n == sec * NSEC_PER_SEC + nsec


@pytest.mark.parametrize("sec,nsec", [(INT32_MIN, -1), (INT32_MAX, NSEC_PER_SEC)])
def test_normalize_signed_out_of_range(sec, nsec):
    with pytest.raises(TimeRangeError):
        normalize_sec_nsec_signed(sec, nsec)


def test_duration_constructor_normalizes_negative_nsec():
    d = Duration(0, -1)
    assert d.to_nsec() == -1
    assert 0 <= d.nsec < NSEC_PER_SEC


@pytest.mark.parametrize("nsec", [0, 1, -1, 123_456_789_012, -987_654_321_000])
def test_duration_nsec_round_trip(nsec):
    assert Duration.from_nsec(nsec).to_nsec() == nsec


@pytest.mark.parametrize("seconds", [0.0, 0.25, -0.25, 12.5, -3.75])
def test_duration_sec_round_trip(seconds):
    assert Duration.from_sec(seconds).to_sec() == pytest.approx(seconds, abs=1e-9)


def test_duration_from_sec_out_of_range():
    with pytest.raises(TimeRangeError):
        Duration.from_sec(float(INT32_MAX) + 10.0)


def test_duration_arithmetic_invariants():
    a = Duration(3, 400_000_000)
    b = Duration(1, 900_000_000)
    assert (a + b) - b == a
    assert -(-a) == a
    assert (a + (-a)).is_zero()
    assert a * 2 == a + a
    assert 2 * a == a * 2
    assert (a - b) + b == a


def test_duration_ordering():
    values = [Duration(1, 0), Duration(0, 999_999_999), Duration(-1, 5), Duration(0, 0)]
    ordered = sorted(values)
    assert [d.to_nsec() for d in ordered] == sorted(d.to_nsec() for d in values)
    assert Duration(1, 0) > Duration(0, 999_999_999)
    assert Duration(0, 1) >= Duration(0, 1)


def test_duration_and_wall_duration_do_not_mix():
    with pytest.raises(TypeError):
        Duration(1, 0) + WallDuration(1, 0)
    assert Duration(1, 0) != WallDuration(1, 0)


def test_duration_constants_match_limits():
    assert DURATION_MAX == Duration(INT32_MAX, 999_999_999)
    assert DURATION_MAX.to_nsec() == INT32_MAX * NSEC_PER_SEC + 999_999_999
    assert DURATION_MIN == Duration.from_nsec(INT32_MIN * NSEC_PER_SEC)
    assert DURATION_MIN.to_nsec() == INT32_MIN * NSEC_PER_SEC
    assert DURATION_MIN < DURATION_MAX


def test_duration_string_format():
    assert str(Duration(INT32_MAX, 999_999_999)) == "2147483647.999999999"
    assert str(Time(0, 1)) == "0.000000001"
    assert str(Duration.from_nsec(1_500_000_000)) == "1.500000000"


def test_duration_hash_consistent_with_equality():
    assert hash(Duration(2, 5)) == hash(Duration(1, NSEC_PER_SEC + 5))
    assert len({Duration(2, 5), Duration(1, NSEC_PER_SEC + 5)}) == 1


def test_zero_duration_sleep_returns_immediately():
    start = time.monotonic()
    assert Duration().sleep() is True
    assert time.monotonic() - start < 0.5


def test_positive_duration_sleep_waits():
    start = time.monotonic()
    assert WallDuration.from_sec(0.02).sleep() is True
    assert time.monotonic() - start >= 0.015


def test_time_rejects_negative_values():
    with pytest.raises(TimeRangeError):
        Time.from_sec(-1.0)
    with pytest.raises(TimeRangeError):
        Time.from_nsec(-5)
    with pytest.raises(TimeRangeError):
        Time(-1, 0)


@pytest.mark.parametrize("nsec", [0, 1, 1_400_000_000_123_456_789])
def test_time_nsec_round_trip(nsec):
    assert Time.from_nsec(nsec).to_nsec() == nsec


def test_time_sec_round_trip():
    assert Time.from_sec(1234.5).to_sec() == pytest.approx(1234.5, abs=1e-9)


def test_time_difference_and_addition_round_trip():
    t1 = Time(10, 200_000_000)
    t2 = Time(12, 100_000_000)
    d = t2 - t1
    assert d + t1 == t2
    assert t1 + d == t2
    assert t2 - d == t1
    assert (t1 - t2) == -d


def test_time_minus_duration_below_zero_raises():
    with pytest.raises(TimeRangeError):
        Time(0, 5) - Duration(1, 0)


def test_time_plus_duration_beyond_signed_range_raises():
    with pytest.raises(TimeRangeError):
        Time(INT32_MAX, 0) + Duration(1, 0)


def test_time_constants_and_zero():
    assert Time().is_zero()
    assert not TIME_MIN.is_zero()
    assert TIME_MAX.sec == UINT32_MAX
    assert TIME_MIN < TIME_MAX


def test_time_and_wall_time_do_not_mix():
    with pytest.raises(TypeError):
        Time(1, 0) - WallTime(1, 0)
    with pytest.raises(TypeError):
        Time(1, 0) + WallDuration(1, 0)


def test_time_now_tracks_system_clock():
    now = Time.now()
    assert abs(now.to_sec() - time.time()) < 1.0


def test_wall_time_now_is_monotone_enough():
    first = WallTime.now()
    second = WallTime.now()
    elapsed = second - first
    assert elapsed >= WallDuration()
    assert elapsed.to_sec() < 1.0


def test_sleep_until_past_returns_true():
    start = time.monotonic()
    assert Time.sleep_until(Time(1, 0)) is True
    assert WallTime.sleep_until(WallTime(1, 0)) is True
    assert time.monotonic() - start < 0.5


def test_sleep_until_future_waits():
    start = time.monotonic()
    target = WallTime.now() + WallDuration.from_sec(0.02)
    assert WallTime.sleep_until(target) is True
    assert WallTime.now() >= target
    assert time.monotonic() - start >= 0.01


def test_time_source_flags():
    assert Time.use_system_time() is True
    assert Time.is_sim_time() is False
    assert Time.is_system_time() is True
    assert Time.is_valid() is True