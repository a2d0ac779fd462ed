from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal, Protocol

from loguru import logger

from telbill_billing.config import Settings, settings
from telbill_billing.models.call import MINUTE, Call
from telbill_billing.services.tariff import (
    DiscountPolicy,
    RateSchedule,
    discount_from_settings,
    schedule_from_settings,
)

EngineKind = Literal["interval", "reference"]

ZERO = Decimal("0.00")


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class PricingEngine(Protocol):
    schedule: RateSchedule
    discount: DiscountPolicy

    def price(self, call: Call) -> Decimal: ...


@dataclass(frozen=True)
class IntervalBillingEngine:
    """Prices a call by walking peak/off-peak boundaries instead of single minutes.

    The first `discount.threshold` minutes are rated one by one (never more than
    the threshold). Everything after that is billed in batches that run until the
    rate class of the pointer changes, so the loop count is bounded by the number
    of window crossings, at most two per calendar day.
    """

    schedule: RateSchedule = field(default_factory=RateSchedule)
    discount: DiscountPolicy = field(default_factory=DiscountPolicy)

    def price(self, call: Call) -> Decimal:
        total_minutes = call.billed_minutes
        if total_minutes == 0:
            return ZERO

        standard_minutes = min(total_minutes, self.discount.threshold)
        standard_amount = sum(
            (self.schedule.rate_at(call.start + index * MINUTE) for index in range(standard_minutes)),
            ZERO,
        )

        discounted_amount = ZERO
        batches = 0
        remaining = total_minutes - standard_minutes
        pointer = call.start + standard_minutes * MINUTE
        while remaining > 0:
            peak = self.schedule.is_peak(pointer)
            batch = min(remaining, self.schedule.minutes_until_change(pointer))
            discounted_amount += batch * (self.schedule.rate_for(peak) - self.discount.deduction)
            pointer += batch * MINUTE
            remaining -= batch
            batches += 1

        amount = _quantize(standard_amount + discounted_amount)
        logger.debug(
            "interval_engine.price number={} billed_minutes={} batches={} amount={}",
            call.number,
            total_minutes,
            batches,
            str(amount),
        )
        return amount


@dataclass(frozen=True)
class ReferenceMinuteEngine:
    """Minute-by-minute scan; kept as the oracle the interval engine must agree with."""

    schedule: RateSchedule = field(default_factory=RateSchedule)
    discount: DiscountPolicy = field(default_factory=DiscountPolicy)

    def price(self, call: Call) -> Decimal:
        total = ZERO
        for index in range(call.billed_minutes):
            minute_start = call.minute_start(index)
            total += self.schedule.rate_at(minute_start) - self.discount.deduction_for(index)
        return _quantize(total)


def build_engine(kind: EngineKind | None = None, config: Settings | None = None) -> PricingEngine:
    if config is None:
        config = settings
    resolved = kind or config.default_engine
    schedule = schedule_from_settings(config)
    discount = discount_from_settings(config)
    if resolved == "interval":
        return IntervalBillingEngine(schedule=schedule, discount=discount)
    if resolved == "reference":
        return ReferenceMinuteEngine(schedule=schedule, discount=discount)
    raise ValueError(f"unknown pricing engine: {resolved}")


_default_engine = IntervalBillingEngine()


def price_call(call: Call) -> Decimal:
    return _default_engine.price(call)
