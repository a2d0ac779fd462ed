from __future__ import annotations

import json
from pathlib import Path

import pytest

from telbill_billing.runner import run_bill

SAMPLE_LOG = (
    "420774577453,13-01-2020 18:10:15,13-01-2020 18:12:57\n"
    "420776562353,18-01-2020 08:59:20,18-01-2020 09:10:00\n"
)


@pytest.fixture(scope="function")
def log_file(tmp_path: Path) -> Path:
    path = tmp_path / "calls.csv"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return path


def test_run_bill_prints_total(log_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_bill(log_file) == 0
    assert capsys.readouterr().out.strip() == "1.50"


@pytest.mark.parametrize("engine_kind", ["interval", "reference"])
def test_run_bill_prints_json_summary(
    log_file: Path, capsys: pytest.CaptureFixture[str], engine_kind: str
) -> None:
    assert run_bill(log_file, engine_kind=engine_kind, as_json=True) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["free_number"] == "420776562353"
    assert payload["total_amount"] == "1.50"
    assert len(payload["lines"]) == 2


def test_run_bill_missing_file(tmp_path: Path) -> None:
    assert run_bill(tmp_path / "missing.csv") == 1


def test_run_bill_parse_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "broken.csv"
    path.write_text("420774577453,not-a-date,13-01-2020 18:12:57\n", encoding="utf-8")
    assert run_bill(path) == 2
    assert capsys.readouterr().out == ""
