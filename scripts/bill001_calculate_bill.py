from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from telbill_billing.config import settings
from telbill_billing.runner import run_bill
from telbill_common.observability import setup_loguru


def main() -> None:
    parser = argparse.ArgumentParser(description="Price a telephone call log (number,start,end CSV)")
    parser.add_argument(
        "--log-path",
        required=True,
        help="Path to the call log CSV",
    )
    parser.add_argument(
        "--engine",
        choices=["interval", "reference"],
        default=None,
        help="Pricing engine; defaults to TELBILL_DEFAULT_ENGINE",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full bill summary as JSON instead of the total",
    )
    args = parser.parse_args()

    setup_loguru(
        settings.app_name,
        log_to_console=settings.log_to_console,
        log_to_file=settings.log_to_file,
        log_dir=settings.log_dir,
        level=settings.log_level,
    )
    code = run_bill(Path(args.log_path), engine_kind=args.engine, as_json=args.json)
    raise SystemExit(code)


if __name__ == "__main__":
    main()
