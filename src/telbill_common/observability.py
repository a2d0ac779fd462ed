from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from pathlib import Path
from uuid import uuid4

from loguru import logger

bill_run_id_ctx: ContextVar[str] = ContextVar("bill_run_id", default="-")

LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[service]} "
    "| bill_run_id={extra[bill_run_id]} | {message}"
)


def setup_loguru(
    service_name: str,
    *,
    log_to_console: bool = True,
    log_to_file: bool = False,
    log_dir: str = "logs",
    level: str = "INFO",
) -> None:
    logger.remove()
    logger.configure(
        extra={"service": service_name, "bill_run_id": "-"},
        patcher=lambda record: record["extra"].update(
            {
                "bill_run_id": bill_run_id_ctx.get("-"),
            }
        ),
    )
    if log_to_console:
        logger.add(
            sys.stderr,
            level=level,
            enqueue=False,
            backtrace=False,
            diagnose=False,
            format=LOG_FORMAT,
        )
    if log_to_file:
        target_dir = Path(log_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            target_dir / f"{service_name}.log",
            level=level,
            rotation="10 MB",
            retention=5,
            enqueue=False,
            backtrace=False,
            diagnose=False,
            format=LOG_FORMAT,
        )


def current_bill_run_id() -> str:
    return bill_run_id_ctx.get("-")


@contextmanager
def bill_run_context(run_id: str | None = None) -> Iterator[str]:
    """Tag every log record emitted inside the block with one bill run id."""
    resolved = run_id or uuid4().hex
    token: Token[str] = bill_run_id_ctx.set(resolved)
    logger.info("bill_run.start")
    try:
        yield resolved
    except Exception:
        logger.exception("bill_run.error")
        raise
    else:
        logger.info("bill_run.end")
    finally:
        bill_run_id_ctx.reset(token)
