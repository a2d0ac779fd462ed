from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal

from telbill_billing.config import Settings
from telbill_billing.models.call import MINUTE


@dataclass(frozen=True, slots=True)
class RateSchedule:
    """Daily-recurring peak window [peak_start, peak_end) with inside/outside per-minute rates."""

    peak_start: time = time(8, 0, 0)
    peak_end: time = time(16, 0, 0)
    peak_rate: Decimal = Decimal("1.00")
    off_peak_rate: Decimal = Decimal("0.50")

    def __post_init__(self) -> None:
        if self.peak_start >= self.peak_end:
            raise ValueError(f"peak_start must be before peak_end: {self.peak_start} .. {self.peak_end}")

    def is_peak(self, instant: datetime) -> bool:
        current = instant.time()
        return self.peak_start <= current < self.peak_end

    def rate_for(self, peak: bool) -> Decimal:
        return self.peak_rate if peak else self.off_peak_rate

    def rate_at(self, instant: datetime) -> Decimal:
        return self.rate_for(self.is_peak(instant))

    def next_change(self, instant: datetime) -> datetime:
        """First instant after `instant` whose classification differs from it."""
        day = instant.date()
        tz = instant.tzinfo
        current = instant.time()
        if current < self.peak_start:
            return datetime.combine(day, self.peak_start, tzinfo=tz)
        if current < self.peak_end:
            return datetime.combine(day, self.peak_end, tzinfo=tz)
        return datetime.combine(day + timedelta(days=1), self.peak_start, tzinfo=tz)

    def minutes_until_change(self, instant: datetime) -> int:
        # minute k (start = instant + k min) keeps the class while it starts before the boundary
        return -(-(self.next_change(instant) - instant) // MINUTE)


@dataclass(frozen=True, slots=True)
class DiscountPolicy:
    """Flat per-minute deduction for 0-indexed minute positions at or after `threshold`."""

    threshold: int = 5
    deduction: Decimal = Decimal("0.20")

    def __post_init__(self) -> None:
        if self.threshold < 0:
            raise ValueError(f"discount threshold must be >= 0: {self.threshold}")
        if self.deduction < 0:
            raise ValueError(f"discount deduction must be >= 0: {self.deduction}")

    def applies(self, position: int) -> bool:
        return position >= self.threshold

    def deduction_for(self, position: int) -> Decimal:
        return self.deduction if self.applies(position) else Decimal("0.00")


def schedule_from_settings(config: Settings) -> RateSchedule:
    return RateSchedule(
        peak_start=config.peak_start,
        peak_end=config.peak_end,
        peak_rate=config.peak_rate,
        off_peak_rate=config.off_peak_rate,
    )


def discount_from_settings(config: Settings) -> DiscountPolicy:
    return DiscountPolicy(
        threshold=config.discount_threshold_minutes,
        deduction=config.discount_per_minute,
    )
