"""Age normalisation for age-banded vital-sign rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = ["NormalizedAge", "normalize_age", "NEONATE_MAX_DAYS"]

NEONATE_MAX_DAYS = 28


@dataclass(frozen=True)
class NormalizedAge:
    years: int
    months: int
    days: int

    @property
    def total_months(self) -> int:
        return self.years * 12 + self.months

    @property
    def is_neonate(self) -> bool:
        # A blank age form also lands here; the rule table treats it as a newborn.
        return self.years == 0 and self.months == 0 and self.days <= NEONATE_MAX_DAYS


def normalize_age(
    years: Optional[int] = None,
    months: Optional[int] = None,
    days: Optional[int] = None,
) -> NormalizedAge:
    """Collapse optional age parts into a comparable age; absent parts count as zero."""

    return NormalizedAge(years=years or 0, months=months or 0, days=days or 0)
