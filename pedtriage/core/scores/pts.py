"""Pediatric Trauma Score (Tepas): six categories scored +2 / +1 / -1."""

from __future__ import annotations

from typing import Optional

from .registry import register

_POINTS = (-1, 1, 2)


@register(
    "PTS",
    components={
        "weight": _POINTS,
        "airway": _POINTS,
        "systolic_bp": _POINTS,
        "cns": _POINTS,
        "open_wound": _POINTS,
        "skeletal": _POINTS,
    },
    injects=("s6",),
)
def band(total: int) -> Optional[str]:
    # Totals of 8 or less mark severe trauma; above that the tag is withdrawn.
    if total <= 8:
        return "s6"
    return None
