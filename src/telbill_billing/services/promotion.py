from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from loguru import logger

from telbill_billing.models.call import Call, PhoneNumber


def select_free_number(calls: Iterable[Call] | None) -> PhoneNumber | None:
    """Most frequently called number; ties go to the arithmetically highest number."""
    if calls is None:
        return None
    call_counts = Counter(call.number for call in calls)
    if not call_counts:
        return None

    max_count = max(call_counts.values())
    free_number = max(number for number, count in call_counts.items() if count == max_count)
    logger.debug(
        "promotion.select free_number={} call_count={} distinct_numbers={}",
        free_number,
        max_count,
        len(call_counts),
    )
    return free_number
