from __future__ import annotations

from pathlib import Path

from loguru import logger

from telbill_billing.config import settings
from telbill_billing.services.bill_calculator import BillCalculator
from telbill_billing.services.billing_engine import build_engine
from telbill_billing.services.call_log_parser import CallLogParseError


def run_bill(log_path: Path, engine_kind: str | None = None, as_json: bool = False) -> int:
    """Price one call log file and print the result; returns a process exit code."""
    if not log_path.exists():
        logger.error("run_bill.missing_log log_path={}", log_path)
        return 1

    calculator = BillCalculator(engine=build_engine(engine_kind, settings))
    try:
        summary = calculator.summarize(log_path.read_text(encoding="utf-8"))
    except CallLogParseError as exc:
        logger.error("run_bill.parse_error line_no={} reason={}", exc.line_no, exc.reason)
        return 2

    if as_json:
        print(summary.model_dump_json(indent=2))
    else:
        print(f"{summary.total_amount}")
    return 0
