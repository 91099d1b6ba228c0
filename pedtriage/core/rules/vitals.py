"""Age-banded vital-sign classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ...schemas.triage import TriageLevel, VitalFinding, VitalSigns
from ..normalizer.age import NormalizedAge

__all__ = [
    "AGE_BANDS",
    "HEART_RATE_TABLE",
    "RESP_RATE_TABLE",
    "age_band",
    "classify",
    "is_hypotensive",
]

# (band, exclusive upper bound in total months); the last band is open-ended.
AGE_BANDS: Tuple[Tuple[str, Optional[int]], ...] = (
    ("<3mo", 3),
    ("3-12mo", 12),
    ("1-3y", 48),
    ("4-11y", 144),
    (">=12y", None),
)


@dataclass(frozen=True)
class RespRateBand:
    critical_above: float
    emergent_above: float
    urgent_above: float


@dataclass(frozen=True)
class HeartRateBand:
    critical_above: float
    critical_below: float
    emergent_from: float
    urgent_from: float


RESP_RATE_TABLE: Dict[str, RespRateBand] = {
    "<3mo": RespRateBand(70, 60, 50),
    "3-12mo": RespRateBand(60, 50, 40),
    "1-3y": RespRateBand(50, 40, 30),
    "4-11y": RespRateBand(40, 30, 20),
    ">=12y": RespRateBand(30, 20, 15),
}

HEART_RATE_TABLE: Dict[str, HeartRateBand] = {
    "<3mo": HeartRateBand(210, 80, 180, 110),
    "3-12mo": HeartRateBand(190, 80, 170, 110),
    "1-3y": HeartRateBand(180, 80, 150, 100),
    "4-11y": HeartRateBand(160, 60, 130, 70),
    ">=12y": HeartRateBand(140, 50, 110, 60),
}

_RESP_RATE_TAGS = {
    TriageLevel.CRITICAL: "呼吸频率显著增快",
    TriageLevel.EMERGENT: "明显气促",
    TriageLevel.URGENT: "气促",
}


def _present(value: Optional[float]) -> bool:
    return value is not None and value > 0


def _finding(vital: str, prefix: str, tag: str, level: TriageLevel) -> VitalFinding:
    return VitalFinding(vital=vital, prefix=prefix, tag=tag, level=level)


def age_band(age: NormalizedAge) -> str:
    months = age.total_months
    for band, upper in AGE_BANDS:
        if upper is None or months < upper:
            return band
    return AGE_BANDS[-1][0]  # pragma: no cover - last band is open-ended


def is_hypotensive(sbp: float, age: NormalizedAge) -> bool:
    """True when any age rule flags *sbp*; overlapping bands are all checked."""

    return (
        (age.is_neonate and sbp < 60)
        or (age.total_months <= 12 and sbp < 70)
        or (1 <= age.years <= 10 and sbp < 70 + 2 * age.years)
        or (age.years > 10 and sbp < 90)
    )


def _spo2(value: Optional[float]) -> List[VitalFinding]:
    if not _present(value):
        return []
    if value < 90:
        return [_finding("spo2", "V", "SpO2 < 90%", TriageLevel.CRITICAL)]
    if value <= 94:
        return [_finding("spo2", "V", "SpO2 90-94%", TriageLevel.EMERGENT)]
    return []


def _crt(value: Optional[float]) -> List[VitalFinding]:
    if not _present(value):
        return []
    if value > 5:
        return [_finding("crt", "C", "CRT > 5s", TriageLevel.CRITICAL)]
    if value >= 3:
        return [_finding("crt", "C", "CRT 3-5s", TriageLevel.EMERGENT)]
    return []


def _systolic_bp(value: Optional[float], age: NormalizedAge) -> List[VitalFinding]:
    if not _present(value):
        return []
    if is_hypotensive(value, age):
        return [_finding("systolic_bp", "C", "低血压", TriageLevel.CRITICAL)]
    return []


def _temperature(value: Optional[float], age: NormalizedAge) -> List[VitalFinding]:
    if not _present(value):
        return []
    findings = []
    if value >= 41 or value < 35:
        findings.append(_finding("temperature", "V", "体温极值", TriageLevel.EMERGENT))
    if age.total_months < 3 and value >= 38:
        findings.append(_finding("temperature", "V", "<3月龄发热", TriageLevel.EMERGENT))
    return findings


def _resp_rate(value: Optional[float], age: NormalizedAge) -> List[VitalFinding]:
    if not _present(value):
        return []
    band = RESP_RATE_TABLE[age_band(age)]
    if value > band.critical_above:
        level = TriageLevel.CRITICAL
    elif value > band.emergent_above:
        level = TriageLevel.EMERGENT
    elif value > band.urgent_above:
        level = TriageLevel.URGENT
    else:
        return []
    return [_finding("resp_rate", "R", _RESP_RATE_TAGS[level], level)]


def _heart_rate(value: Optional[float], age: NormalizedAge) -> List[VitalFinding]:
    if not _present(value):
        return []
    band = HEART_RATE_TABLE[age_band(age)]
    if value > band.critical_above:
        return [_finding("heart_rate", "C", "心动过速", TriageLevel.CRITICAL)]
    if value < band.critical_below:
        return [_finding("heart_rate", "C", "心动过缓", TriageLevel.CRITICAL)]
    if value >= band.emergent_from:
        return [_finding("heart_rate", "C", "心率增快", TriageLevel.EMERGENT)]
    if value >= band.urgent_from:
        return [_finding("heart_rate", "C", "心率偏快", TriageLevel.URGENT)]
    return []


def classify(vitals: VitalSigns, age: NormalizedAge) -> List[VitalFinding]:
    """Return every vital-sign finding for the patient, in display order."""

    findings: List[VitalFinding] = []
    findings.extend(_spo2(vitals.spo2))
    findings.extend(_crt(vitals.crt))
    findings.extend(_systolic_bp(vitals.systolic_bp, age))
    findings.extend(_temperature(vitals.temperature, age))
    findings.extend(_resp_rate(vitals.resp_rate, age))
    findings.extend(_heart_rate(vitals.heart_rate, age))
    return findings
