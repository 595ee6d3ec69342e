"""Size and duration values as shown in the process tables."""

from __future__ import annotations

from dataclasses import dataclass

SIZE_UNITS = ("B", "kB", "MB", "GB", "TB")

# Durations are counted in 100-nanosecond ticks.
TICKS_PER_MILLISECOND = 10_000
TICKS_PER_SECOND = 10_000_000


@dataclass(frozen=True)
class SizeWithUnit:
    """A byte count scaled down to the largest unit that keeps it above 1024."""

    size: int
    unit: str

    @classmethod
    def from_bytes(cls, size):
        """Scale a byte count by steps of 1024 while it exceeds 1024."""
        if size < 0:
            raise ValueError(f"size must not be negative: {size}")
        value = int(size)
        unit_index = 0
        while value > 1024 and unit_index < len(SIZE_UNITS) - 1:
            value //= 1024
            unit_index += 1
        return cls(value, SIZE_UNITS[unit_index])

    def __str__(self):
        return f"{self.size:6d} {self.unit:<2}"


@dataclass(frozen=True)
class TimeSpan:
    """A duration split into hours, minutes, seconds and milliseconds."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0

    @classmethod
    def from_ticks(cls, ticks):
        """Build a span from a count of 100-nanosecond ticks; negative counts give zero."""
        total_ms = max(0, int(ticks)) // TICKS_PER_MILLISECOND
        total_seconds, milliseconds = divmod(total_ms, 1000)
        total_minutes, seconds = divmod(total_seconds, 60)
        hours, minutes = divmod(total_minutes, 60)
        return cls(hours, minutes, seconds, milliseconds)

    @classmethod
    def from_seconds(cls, seconds):
        """Build a span from a number of seconds, which may be fractional."""
        return cls.from_ticks(int(seconds * TICKS_PER_SECOND))

    def __str__(self):
        return f"{self.hours:5d}:{self.minutes:02d}:{self.seconds:02d}.{self.milliseconds:03d}"


def remove_extension(filename):
    """Drop a trailing '.exe' (any letter case) from a file name."""
    stem, dot, extension = filename.rpartition(".")
    if dot and f".{extension}".lower() == ".exe":
        return stem
    return filename