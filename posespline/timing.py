"""Second/nanosecond time stamps and durations.

``Duration`` values hold a signed 32-bit second count and ``Time`` values an
unsigned 32-bit second count, each with a nanosecond part kept in
``[0, 1e9)``.  The ``Wall*`` variants are distinct types with the same
behaviour, so system and wall-clock quantities cannot be mixed by accident.
"""

from __future__ import annotations

import functools
import math
import numbers
import time

NSEC_PER_SEC = 1_000_000_000
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1


class TimeRangeError(OverflowError):
    """A time or duration does not fit the 32-bit second range."""


def normalize_sec_nsec(sec: int, nsec: int) -> tuple[int, int]:
    """Carry whole seconds out of a non-negative nanosecond count."""
    if sec < 0 or nsec < 0:
        raise TimeRangeError("seconds and nanoseconds must be non-negative")
    sec_part, nsec_part = divmod(nsec, NSEC_PER_SEC)
    if sec_part > UINT32_MAX:
        raise TimeRangeError("Time is out of dual 32-bit range")
    return sec + sec_part, nsec_part


def normalize_sec_nsec_unsigned(sec: int, nsec: int) -> tuple[int, int]:
    """Bring ``nsec`` into ``[0, 1e9)``; the seconds must end up in ``[0, INT32_MAX]``."""
    carry, nsec_part = divmod(nsec, NSEC_PER_SEC)
    sec_part = sec + carry
    if sec_part < 0 or sec_part > INT32_MAX:
        raise TimeRangeError("Time is out of dual 32-bit range")
    return sec_part, nsec_part


def normalize_sec_nsec_signed(sec: int, nsec: int) -> tuple[int, int]:
    """Bring ``nsec`` into ``[0, 1e9)``; the seconds must fit a signed 32-bit int."""
    carry, nsec_part = divmod(nsec, NSEC_PER_SEC)
    sec_part = sec + carry
    if sec_part < INT32_MIN or sec_part > INT32_MAX:
        raise TimeRangeError("Duration is out of dual 32-bit range")
    return sec_part, nsec_part


def _split_seconds(t: float) -> tuple[int, int]:
    whole = math.floor(t)
    return whole, round((t - whole) * 1e9)


@functools.total_ordering
class Duration:
    """A signed span of time."""

    __slots__ = ("_sec", "_nsec")

    def __init__(self, sec: int = 0, nsec: int = 0) -> None:
        self._sec, self._nsec = normalize_sec_nsec_signed(int(sec), int(nsec))

    @property
    def sec(self) -> int:
        return self._sec

    @property
    def nsec(self) -> int:
        return self._nsec

    @classmethod
    def from_sec(cls, t: float):
        """Build from floating point seconds."""
        whole, nsec = _split_seconds(t)
        if whole < INT32_MIN or whole > INT32_MAX:
            raise TimeRangeError("Duration is out of dual 32-bit range")
        return cls(whole, nsec)

    @classmethod
    def from_nsec(cls, t: int):
        """Build from an integer nanosecond count."""
        sec, nsec = divmod(int(t), NSEC_PER_SEC)
        return cls(sec, nsec)

    def to_sec(self) -> float:
        return float(self._sec) + 1e-9 * float(self._nsec)

    def to_nsec(self) -> int:
        return self._sec * NSEC_PER_SEC + self._nsec

    def is_zero(self) -> bool:
        return self._sec == 0 and self._nsec == 0

    def sleep(self) -> bool:
        """Sleep for this span; non-positive spans return at once."""
        if self.to_nsec() > 0:
            time.sleep(self.to_sec())
        return True

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self._sec + other._sec, self._nsec + other._nsec)

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self._sec - other._sec, self._nsec - other._nsec)

    def __neg__(self):
        return type(self)(-self._sec, -self._nsec)

    def __mul__(self, scale):
        if isinstance(scale, bool) or not isinstance(scale, numbers.Real):
            return NotImplemented
        return type(self).from_sec(self.to_sec() * float(scale))

    __rmul__ = __mul__

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self._sec, self._nsec) == (other._sec, other._nsec)

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self._sec, self._nsec) < (other._sec, other._nsec)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._sec, self._nsec))

    def __str__(self) -> str:
        return f"{self._sec}.{self._nsec:09d}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sec={self._sec}, nsec={self._nsec})"


class WallDuration(Duration):
    """A span of wall-clock time."""

    __slots__ = ()


@functools.total_ordering
class Time:
    """A non-negative point in time measured from the epoch."""

    __slots__ = ("_sec", "_nsec")
    _duration_type: type[Duration] = Duration

    def __init__(self, sec: int = 0, nsec: int = 0) -> None:
        sec, nsec = normalize_sec_nsec(int(sec), int(nsec))
        if sec > UINT32_MAX:
            raise TimeRangeError("Time is out of dual 32-bit range")
        self._sec, self._nsec = sec, nsec

    @property
    def sec(self) -> int:
        return self._sec

    @property
    def nsec(self) -> int:
        return self._nsec

    @classmethod
    def from_sec(cls, t: float):
        """Build from floating point seconds since the epoch."""
        whole, nsec = _split_seconds(t)
        if whole < 0 or whole > UINT32_MAX:
            raise TimeRangeError("Time is out of dual 32-bit range")
        return cls(whole, nsec)

    @classmethod
    def from_nsec(cls, t: int):
        """Build from an integer nanosecond count since the epoch."""
        t = int(t)
        if t < 0:
            raise TimeRangeError("Time is out of dual 32-bit range")
        sec, nsec = divmod(t, NSEC_PER_SEC)
        return cls(sec, nsec)

    def to_sec(self) -> float:
        return float(self._sec) + 1e-9 * float(self._nsec)

    def to_nsec(self) -> int:
        return self._sec * NSEC_PER_SEC + self._nsec

    def is_zero(self) -> bool:
        return self._sec == 0 and self._nsec == 0

    @classmethod
    def now(cls):
        """Current wall-clock time."""
        sec, nsec = divmod(time.time_ns(), NSEC_PER_SEC)
        return cls(sec, nsec)

    @classmethod
    def sleep_until(cls, end) -> bool:
        """Sleep until ``end``; a time already passed returns at once."""
        remaining = end - cls.now()
        if remaining > cls._duration_type():
            return remaining.sleep()
        return True

    @staticmethod
    def use_system_time() -> bool:
        return True

    @staticmethod
    def is_sim_time() -> bool:
        return False

    @staticmethod
    def is_system_time() -> bool:
        return not Time.is_sim_time()

    @staticmethod
    def is_valid() -> bool:
        return True

    def __add__(self, other):
        if type(other) is not self._duration_type:
            return NotImplemented
        sec, nsec = normalize_sec_nsec_unsigned(self._sec + other.sec, self._nsec + other.nsec)
        return type(self)(sec, nsec)

    __radd__ = __add__

    def __sub__(self, other):
        if type(other) is type(self):
            return self._duration_type(self._sec - other._sec, self._nsec - other._nsec)
        if type(other) is self._duration_type:
            return self + (-other)
        return NotImplemented

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self._sec, self._nsec) == (other._sec, other._nsec)

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self._sec, self._nsec) < (other._sec, other._nsec)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._sec, self._nsec))

    def __str__(self) -> str:
        return f"{self._sec}.{self._nsec:09d}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sec={self._sec}, nsec={self._nsec})"


class WallTime(Time):
    """A point in wall-clock time."""

    __slots__ = ()
    _duration_type = WallDuration

    @classmethod
    def now(cls):
        """Current wall-clock time."""
        sec, nsec = divmod(time.time_ns(), NSEC_PER_SEC)
        return cls(sec, nsec)

    @classmethod
    def sleep_until(cls, end) -> bool:
        """Sleep until ``end``; a time already passed returns at once."""
        remaining = end - cls.now()
        if remaining > WallDuration():
            return remaining.sleep()
        return True


DURATION_MAX = Duration(INT32_MAX, 999_999_999)
DURATION_MIN = Duration(INT32_MIN, 0)
TIME_MAX = Time(UINT32_MAX, 999_999_999)
TIME_MIN = Time(0, 1)