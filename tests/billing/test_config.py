from __future__ import annotations

from datetime import time
from decimal import Decimal

import pytest

from telbill_billing.config import Settings


def test_default_tariff() -> None:
    config = Settings(_env_file=None)
    assert config.peak_start == time(8, 0, 0)
    assert config.peak_end == time(16, 0, 0)
    assert config.peak_rate == Decimal("1.00")
    assert config.off_peak_rate == Decimal("0.50")
    assert config.discount_threshold_minutes == 5
    assert config.discount_per_minute == Decimal("0.20")
    assert config.default_engine == "interval"


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TELBILL_PEAK_START", "07:30:00")
    monkeypatch.setenv("TELBILL_PEAK_RATE", "1.25")
    monkeypatch.setenv("TELBILL_DISCOUNT_THRESHOLD_MINUTES", "10")
    monkeypatch.setenv("TELBILL_DEFAULT_ENGINE", "reference")

    config = Settings(_env_file=None)

    assert config.peak_start == time(7, 30, 0)
    assert config.peak_rate == Decimal("1.25")
    assert config.discount_threshold_minutes == 10
    assert config.default_engine == "reference"
