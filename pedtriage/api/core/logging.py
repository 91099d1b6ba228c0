"""Logging helpers for the PedTriage service."""
from __future__ import annotations

import logging
import re
import time
from typing import Callable

from fastapi import FastAPI, Request

# Resident ID numbers (18 chars, last may be X) and mainland mobile numbers.
_RE_SENSITIVE = re.compile(r"(\b\d{17}[\dXx]\b|\b1[3-9]\d{9}\b)")


class PHIRedactor(logging.Filter):
    """Filter that redacts simple personal identifiers from log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if isinstance(record.msg, str):
            record.msg = _RE_SENSITIVE.sub("[REDACTED]", record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                _RE_SENSITIVE.sub("[REDACTED]", arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure global logging handlers."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    redactor = PHIRedactor()
    for handler in logging.getLogger().handlers:
        handler.addFilter(redactor)
    logging.getLogger("uvicorn.access").addFilter(redactor)


async def timing_middleware(request: Request, call_next: Callable):
    """Log HTTP request duration."""

    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logging.getLogger("pedtriage.request").info(
        "%s %s -> %s in %.2f ms", request.method, request.url.path, response.status_code, duration_ms
    )
    return response


def register_middleware(app: FastAPI) -> None:
    app.middleware("http")(timing_middleware)
