"""Validation of raw form edits for age, weight and vital-sign fields."""

from __future__ import annotations

import re
from typing import Optional

__all__ = [
    "VITAL_FIELDS",
    "accepts_integer",
    "accepts_decimal",
    "to_integer",
    "to_decimal",
]

VITAL_FIELDS = ("temperature", "heart_rate", "resp_rate", "systolic_bp", "spo2", "crt")

_INTEGER_RE = re.compile(r"[0-9]+")
_DECIMAL_RE = re.compile(r"[0-9]*\.?[0-9]*")


def accepts_integer(raw: str) -> bool:
    """Return True when *raw* is an acceptable age edit (digits only, or empty)."""

    return isinstance(raw, str) and (raw == "" or bool(_INTEGER_RE.fullmatch(raw)))


def accepts_decimal(raw: str) -> bool:
    """Return True when *raw* is a non-negative decimal with at most one point, or empty."""

    return isinstance(raw, str) and bool(_DECIMAL_RE.fullmatch(raw))


def to_integer(raw: str) -> Optional[int]:
    if not raw:
        return None
    return int(raw)


def to_decimal(raw: str) -> Optional[float]:
    # "." and "" pass the edit check but carry no value.
    if not raw or raw == ".":
        return None
    return float(raw)
