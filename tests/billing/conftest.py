from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest

from telbill_billing.models.call import Call, PhoneNumber
from telbill_billing.services.billing_engine import IntervalBillingEngine, ReferenceMinuteEngine

DEFAULT_NUMBER = "420774577453"


@pytest.fixture(scope="function")
def make_call() -> Callable[..., Call]:
    def _make_call(start: datetime, end: datetime, number: str = DEFAULT_NUMBER) -> Call:
        return Call(number=PhoneNumber(number), start=start, end=end)

    return _make_call


@pytest.fixture(scope="function")
def interval_engine() -> IntervalBillingEngine:
    return IntervalBillingEngine()


@pytest.fixture(scope="function")
def reference_engine() -> ReferenceMinuteEngine:
    return ReferenceMinuteEngine()
