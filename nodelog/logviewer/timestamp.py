# Timestamp parsing and elapsed-time formatting for log records
# Converts the ISO-8601 "t" field of a log line into an integer nanosecond sort key

import datetime
import functools
import re

from .errors import ParseError


# With and without fractional seconds; the offset is either +HH:MM / -HH:MM or Z
_TIME_FORMATS = [
    re.compile(
        r'(\d{4})-([01]\d)-([0-3]\d)T([0-2]\d):([0-5]\d):([0-5]\d)\.(\d+)([+-][0-2]\d:[0-5]\d|Z)'
    ),
    re.compile(
        r'(\d{4})-([01]\d)-([0-3]\d)T([0-2]\d):([0-5]\d):([0-5]\d)()([+-][0-2]\d:[0-5]\d|Z)'
    ),
]

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

ZERO_ELAPSED = '000.000000s'


def _parse_offset(text):
    if text == 'Z':
        return datetime.timezone.utc
    sign = -1 if text[0] == '-' else 1
    hours, minutes = text[1:].split(':')
    return datetime.timezone(sign * datetime.timedelta(hours=int(hours), minutes=int(minutes)))


@functools.total_ordering
class Timestamp:
    """A log timestamp with a monotonic nanosecond key and the original text.

    ``nanos`` is the epoch time of the whole seconds in milliseconds, times
    1_000_000, plus the fractional part read as a 6-digit integer. Timestamps
    compare and hash by ``nanos`` only; ``original`` is kept for display and export.
    """

    __slots__ = ('nanos', 'original')

    def __init__(self, nanos, original):
        self.nanos = nanos
        self.original = original

    @classmethod
    def parse(cls, text):
        """Parse *text* into a Timestamp, raising ParseError("invalid time") on failure."""
        if not isinstance(text, str):
            raise ParseError('invalid time', text)

        for pattern in _TIME_FORMATS:
            match = pattern.fullmatch(text.strip())
            if match is not None:
                break
        else:
            raise ParseError('invalid time', text)

        year, month, day, hour, minute, second, fraction, offset = match.groups()
        try:
            dt = datetime.datetime(
                int(year), int(month), int(day), int(hour), int(minute), int(second),
                tzinfo=_parse_offset(offset),
            )
        except ValueError:
            # digit shape matched but the calendar rejects it (hour 24-29, Feb 30, ...)
            raise ParseError('invalid time', text) from None

        seconds = (dt - _EPOCH) // datetime.timedelta(seconds=1)
        millis = seconds * 1000
        fraction = (fraction or '0')[:6].ljust(6, '0')
        return cls(millis * 1_000_000 + int(fraction), text)

    def elapsed(self, reference):
        """Return the time since *reference* formatted as ``SSS.ffffffs``.

        A reference later than this timestamp yields ``"000.000000s"``.
        """
        delta = self.nanos - reference.nanos
        if delta < 0:
            return ZERO_ELAPSED

        seconds, remainder = divmod(delta, 1_000_000_000)
        return f"{seconds:03d}.{remainder:06d}s"

    def __eq__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.nanos == other.nanos

    def __lt__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.nanos < other.nanos

    def __hash__(self):
        return hash(self.nanos)

    def __repr__(self):
        return f"<Timestamp {self.original!r} nanos={self.nanos}>"

    def __str__(self):
        return self.original
