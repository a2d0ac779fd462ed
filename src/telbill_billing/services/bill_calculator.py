from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from loguru import logger

from telbill_billing.models.call import Call, PhoneNumber
from telbill_billing.schemas.billing import BillLine, BillSummary
from telbill_billing.services.billing_engine import ZERO, PricingEngine, build_engine
from telbill_billing.services.call_log_parser import parse_call_log
from telbill_billing.services.promotion import select_free_number
from telbill_common.observability import bill_run_context

CallLogParser = Callable[[str | None], list[Call]]
PromotionSelector = Callable[[Iterable[Call]], PhoneNumber | None]


@dataclass
class BillCalculator:
    """Parses a call log, drops calls to the promotional number and prices the rest."""

    parser: CallLogParser = parse_call_log
    engine: PricingEngine = field(default_factory=build_engine)
    promotion: PromotionSelector = select_free_number

    def calculate(self, phone_log: str | None) -> Decimal:
        return self.summarize(phone_log).total_amount

    def summarize(self, phone_log: str | None) -> BillSummary:
        with bill_run_context():
            calls = self.parser(phone_log)
            if not calls:
                logger.info("bill_calculator.empty_log")
                return BillSummary(call_count=0, billable_count=0, total_amount=ZERO)

            free_number = self.promotion(calls)
            lines: list[BillLine] = []
            total_amount = ZERO
            for call in calls:
                free = call.number == free_number
                price = ZERO if free else self.engine.price(call)
                total_amount += price
                lines.append(
                    BillLine(
                        number=str(call.number),
                        start=call.start,
                        end=call.end,
                        billed_minutes=call.billed_minutes,
                        price=price,
                        free=free,
                    )
                )

            billable_count = sum(1 for line in lines if not line.free)
            logger.info(
                "bill_calculator.summary call_count={} billable_count={} free_number={} total_amount={}",
                len(calls),
                billable_count,
                free_number,
                str(total_amount),
            )
            return BillSummary(
                free_number=str(free_number) if free_number is not None else None,
                call_count=len(calls),
                billable_count=billable_count,
                total_amount=total_amount,
                lines=lines,
            )


def calculate_bill(phone_log: str | None) -> Decimal:
    return BillCalculator().calculate(phone_log)
