from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import total_ordering

MINUTE = timedelta(minutes=1)


def billed_minutes(start: datetime, end: datetime) -> int:
    """Elapsed time rounded up to whole minutes; any positive remainder bills a full minute."""
    elapsed = end - start
    if elapsed <= timedelta(0):
        return 0
    return -(-elapsed // MINUTE)


@total_ordering
@dataclass(frozen=True, slots=True)
class PhoneNumber:
    """Digits-only subscriber number, ordered by numeric magnitude."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Phone number cannot be null or empty")
        if not (self.value.isascii() and self.value.isdigit()):
            raise ValueError(f"Phone number must contain only digits: {self.value}")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PhoneNumber):
            return NotImplemented
        # longer digit strings are numerically larger (no leading-zero normalisation)
        return (len(self.value), self.value) < (len(other.value), other.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Call:
    number: PhoneNumber
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.number is None:
            raise ValueError("Phone number cannot be null")
        if self.start is None or self.end is None:
            raise ValueError("Start time and end time cannot be null")
        if self.end < self.start:
            raise ValueError("End time cannot be before start time")

    @property
    def billed_minutes(self) -> int:
        return billed_minutes(self.start, self.end)

    def minute_start(self, index: int) -> datetime:
        """Start instant of the 0-indexed billed minute."""
        if index < 0 or index >= self.billed_minutes:
            raise ValueError(f"Invalid minute index: {index}")
        return self.start + index * MINUTE
