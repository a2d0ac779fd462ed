from __future__ import annotations

import re

from loguru import logger
from pydantic import ValidationError

from telbill_billing.config import settings
from telbill_billing.models.call import Call, PhoneNumber
from telbill_billing.schemas.billing import CallLogRow

CSV_DELIMITER = ","
EXPECTED_FIELDS = 3

_LINE_SPLIT = re.compile(r"\r?\n")


class CallLogParseError(ValueError):
    def __init__(self, line_no: int, line: str, reason: str) -> None:
        super().__init__(f"Failed to parse line {line_no}: {line} ({reason})")
        self.line_no = line_no
        self.line = line
        self.reason = reason


def _validation_reason(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


def _parse_line(line: str, timestamp_format: str) -> Call:
    fields = line.split(CSV_DELIMITER)
    if len(fields) != EXPECTED_FIELDS:
        raise ValueError(f"Expected {EXPECTED_FIELDS} fields, but got {len(fields)}")

    number, start, end = (item.strip() for item in fields)
    row = CallLogRow.model_validate(
        {"number": number, "start": start, "end": end},
        context={"timestamp_format": timestamp_format},
    )
    return Call(number=PhoneNumber(row.number), start=row.start, end=row.end)


def parse_call_log(phone_log: str | None, *, timestamp_format: str | None = None) -> list[Call]:
    """Parse `number,start,end` CSV lines; blank lines are skipped, any bad line aborts the parse."""
    if phone_log is None or not phone_log.strip():
        return []

    fmt = timestamp_format or settings.timestamp_format
    calls: list[Call] = []
    for line_no, raw_line in enumerate(_LINE_SPLIT.split(phone_log), start=1):
        line = raw_line.strip()
        if not line:
            continue
        try:
            calls.append(_parse_line(line, fmt))
        except ValidationError as exc:
            raise CallLogParseError(line_no, line, _validation_reason(exc)) from exc
        except ValueError as exc:
            raise CallLogParseError(line_no, line, str(exc)) from exc

    logger.debug("call_log_parser.parsed call_count={}", len(calls))
    return calls
