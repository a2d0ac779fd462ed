from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class CallLogRow(BaseModel):
    """One raw CSV record of the call log."""

    number: str = Field(description="Called phone number, digits only")
    start: datetime = Field(description="Call start, local wall clock")
    end: datetime = Field(description="Call end, local wall clock")

    @field_validator("number", mode="before")
    @classmethod
    def validate_number(cls, value: str) -> str:
        normalized = str(value).strip()
        if not normalized:
            raise ValueError("phone number must not be empty")
        if not (normalized.isascii() and normalized.isdigit()):
            raise ValueError(f"phone number must contain only digits: {normalized}")
        return normalized

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_timestamp(cls, value: object, info: ValidationInfo) -> object:
        if not isinstance(value, str):
            return value
        fmt = (info.context or {}).get("timestamp_format", "%d-%m-%Y %H:%M:%S")
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError as exc:
            raise ValueError(f"invalid timestamp {value!r}, expected format {fmt}") from exc


class BillLine(BaseModel):
    """Priced call within a bill."""

    model_config = ConfigDict(frozen=True)

    number: str = Field(description="Called phone number")
    start: datetime = Field(description="Call start")
    end: datetime = Field(description="Call end")
    billed_minutes: int = Field(ge=0, description="Elapsed time rounded up to whole minutes")
    price: Decimal = Field(description="Amount charged for this call, zero when free")
    free: bool = Field(default=False, description="Call goes to the promotional free number")


class BillSummary(BaseModel):
    """Bill for one call log."""

    free_number: str | None = Field(default=None, description="Number excluded by the promotion")
    call_count: int = Field(ge=0, description="Parsed calls")
    billable_count: int = Field(ge=0, description="Calls that were charged")
    total_amount: Decimal = Field(description="Sum of all charged calls")
    lines: list[BillLine] = Field(default_factory=list, description="Per-call breakdown in log order")
