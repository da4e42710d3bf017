"""
Floating-time 64-bit unique identifiers.

Random IDs with an embedded millisecond timestamp at a random position:

    1 bit            limiter, always 1
    0..63-T bits     prefix, random width and value
    T bits           time, now_ms - time_offset
    rest             suffix, random value

The time length T defines the last storable date (with a zero offset):
    41 bits = 2199023255551  = 2039-09-07 15:47:35 (UTC)
    42 bits = 4398046511103  = 2109-05-15 07:35:11 (UTC)
    43 bits = 8796093022207  = 2248-09-26 15:10:22 (UTC)
    44 bits = 17592186044415 = 2527-06-23 06:20:44 (UTC)
    45 bits = 35184372088831 = 3084-12-12 12:41:28 (UTC)

The time offset moves the starting point, which shrinks the stored time:
    0             = 1970-01-01 00:00:00 (UTC)
    1577836800000 = 2020-01-01 00:00:00 (UTC)
"""

import random
import struct

from core.errors import (
    ArgumentAboveMaximumError,
    ArgumentBelowMinimumError,
    InvalidArgumentTypeError,
    PlatformUnsupportedError,
)
from internal.logging import get_logger
from utils.timestamp import now_millis

ID_BITS = 64
# Bits left for prefix + time + suffix once the limiter is placed
PAYLOAD_BITS = ID_BITS - 1
LIMITER = 1 << PAYLOAD_BITS
UINT64_MASK = (1 << ID_BITS) - 1


def native_int_bits():
    """Width of the platform's native integer, in bits."""
    return struct.calcsize("P") * 8


def bit_length(number):
    """Bits needed to write a non-negative int; zero still takes one."""
    return max(number.bit_length(), 1)


class IdLayout:
    __slots__ = ("value", "time_length", "prefix_width", "prefix", "time_value", "suffix_width", "suffix")

    def __init__(self, value, time_length, prefix_width, prefix, time_value, suffix_width, suffix):
        self.value = value
        self.time_length = time_length
        self.prefix_width = prefix_width
        self.prefix = prefix
        self.time_value = time_value
        self.suffix_width = suffix_width
        self.suffix = suffix

    def to_dict(self):
        return {
            "value": self.value,
            "time_length": self.time_length,
            "prefix_width": self.prefix_width,
            "prefix": self.prefix,
            "time_value": self.time_value,
            "suffix_width": self.suffix_width,
            "suffix": self.suffix,
        }


class FloatingTimeGenerator:
    """Generate 64-bit IDs with a floating timestamp field.

    Holds no mutable state, so one instance can be shared across threads
    and tasks as long as ``clock`` and ``rng`` are safe to share (the
    defaults are).

    Args:
        time_length: bits reserved for the timestamp, 0..63.
        time_offset: epoch milliseconds subtracted before encoding.
        clock: zero-argument callable returning epoch milliseconds.
        rng: object with an inclusive ``randint(a, b)``.
    """

    __slots__ = ("_time_length", "_time_offset", "_clock", "_rng")

    def __init__(self, time_length=45, time_offset=0, clock=None, rng=None):
        bits = native_int_bits()
        if bits < ID_BITS:
            raise PlatformUnsupportedError(
                f"Generator requires {ID_BITS}-bit integers, platform supports {bits}-bit.",
                bits=bits,
            )

        _require_int("time_length", time_length)
        _require_int("time_offset", time_offset)

        if time_length < 0:
            raise ArgumentBelowMinimumError(
                f'Time length should be greater than or equal to "0", got "{time_length}".',
                argument="time_length", value=time_length, bound=0,
            )

        if time_offset < 0:
            raise ArgumentBelowMinimumError(
                f'Time offset should be greater than or equal to "0", got "{time_offset}".',
                argument="time_offset", value=time_offset, bound=0,
            )

        if time_length > PAYLOAD_BITS:
            raise ArgumentAboveMaximumError(
                f'Time length should be less than or equal to "{PAYLOAD_BITS}", got "{time_length}".',
                argument="time_length", value=time_length, bound=PAYLOAD_BITS,
            )

        clock = clock or now_millis
        now = clock()

        if time_offset > now:
            raise ArgumentAboveMaximumError(
                f'Time offset should be less than or equal to current time "{now}", got "{time_offset}".',
                argument="time_offset", value=time_offset, bound=now,
            )

        min_time_length = bit_length(now - time_offset)
        if time_length < min_time_length:
            raise ArgumentBelowMinimumError(
                f'Time length should be greater than or equal to "{min_time_length}", got "{time_length}".',
                argument="time_length", value=time_length, bound=min_time_length,
            )

        self._time_length = time_length
        self._time_offset = time_offset
        self._clock = clock
        self._rng = rng or random.SystemRandom()

        get_logger("generator").debug(
            "generator ready", time_length=time_length, time_offset=time_offset,
            expires_at_ms=self.expires_at_ms,
        )

    @classmethod
    def from_config(cls, config, clock=None, rng=None):
        return cls(config.time_length, config.time_offset, clock=clock, rng=rng)

    @property
    def time_length(self):
        return self._time_length

    @property
    def time_offset(self):
        return self._time_offset

    @property
    def max_time_value(self):
        return (1 << self._time_length) - 1

    @property
    def expires_at_ms(self):
        """Last epoch millisecond the time field can hold."""
        return self._time_offset + self.max_time_value

    def remaining_ms(self, now=None):
        """Milliseconds of headroom left; negative once the field overflows."""
        if now is None:
            now = self._clock()
        return self.expires_at_ms - now

    def generate(self):
        """Return a new ID as an unsigned 64-bit int."""
        return self.generate_layout().value

    def generate_layout(self):
        """Return a new ID together with the split it was built from."""
        # Past expires_at_ms the time bits spill into the prefix; see health checks
        time_value = self._clock() - self._time_offset

        prefix_width = self._rng.randint(0, PAYLOAD_BITS - self._time_length)
        prefix = self._rng.randint(0, (1 << prefix_width) - 1)

        suffix_width = PAYLOAD_BITS - prefix_width - self._time_length
        suffix = self._rng.randint(0, (1 << suffix_width) - 1)

        uid = LIMITER
        uid |= prefix << (self._time_length + suffix_width)
        uid |= time_value << suffix_width
        uid |= suffix

        return IdLayout(uid & UINT64_MASK, self._time_length, prefix_width, prefix,
                        time_value, suffix_width, suffix)

    def __repr__(self):
        return f"FloatingTimeGenerator(time_length={self._time_length}, time_offset={self._time_offset})"


def _require_int(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentTypeError(
            f'{name} should be an integer, got "{type(value).__name__}" instead.',
            argument=name, got=type(value).__name__,
        )
