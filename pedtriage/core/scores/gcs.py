"""Glasgow Coma Scale (paediatric-modified verbal scale)."""

from __future__ import annotations

from typing import Optional

from .registry import register


@register(
    "GCS",
    components={
        "eye": range(1, 5),
        "verbal": range(1, 6),
        "motor": range(1, 7),
    },
    injects=("n1", "n2", "n8"),
)
def band(total: int) -> Optional[str]:
    if total <= 9:
        return "n1"
    if total <= 13:
        return "n2"
    return "n8"
