from __future__ import annotations

import pytest

from pedtriage.core.normalizer.age import normalize_age
from pedtriage.core.rules.vitals import age_band, classify, is_hypotensive
from pedtriage.schemas.triage import TriageLevel, VitalSigns

NEWBORN = normalize_age()
ONE_MONTH = normalize_age(0, 1, 0)
SIX_MONTHS = normalize_age(0, 6, 0)
FIVE_YEARS = normalize_age(5)
TEEN = normalize_age(13)


def _levels(vitals: VitalSigns, age) -> list[tuple[str, int]]:
    return [(finding.tag, int(finding.level)) for finding in classify(vitals, age)]


def test_age_normalizer_totals_months():
    age = normalize_age(2, 5, 10)
    assert age.total_months == 29
    assert not age.is_neonate
    assert normalize_age(0, 0, 28).is_neonate
    assert not normalize_age(0, 0, 29).is_neonate
    # Blank age is treated as a newborn.
    assert NEWBORN.is_neonate and NEWBORN.total_months == 0


@pytest.mark.parametrize(
    "age,band",
    [
        (normalize_age(0, 2), "<3mo"),
        (normalize_age(0, 3), "3-12mo"),
        (normalize_age(0, 11), "3-12mo"),
        (normalize_age(1), "1-3y"),
        (normalize_age(3, 11), "1-3y"),
        (normalize_age(4), "4-11y"),
        (normalize_age(11, 11), "4-11y"),
        (normalize_age(12), ">=12y"),
    ],
)
def test_age_bands(age, band):
    assert age_band(age) == band


@pytest.mark.parametrize(
    "spo2,expected",
    [(88, [("SpO2 < 90%", 1)]), (89.9, [("SpO2 < 90%", 1)]), (90, [("SpO2 90-94%", 2)]),
     (94, [("SpO2 90-94%", 2)]), (95, []), (0, []), (None, [])],
)
def test_spo2_bands(spo2, expected):
    assert _levels(VitalSigns(spo2=spo2), FIVE_YEARS) == expected


@pytest.mark.parametrize(
    "crt,expected",
    [(2.9, []), (3, [("CRT 3-5s", 2)]), (5, [("CRT 3-5s", 2)]), (5.1, [("CRT > 5s", 1)])],
)
def test_capillary_refill_bands(crt, expected):
    assert _levels(VitalSigns(crt=crt), FIVE_YEARS) == expected


def test_hypotension_rules_overlap():
    # Under a year the 70 mmHg rule also covers neonates.
    assert is_hypotensive(65, NEWBORN)
    assert is_hypotensive(69, normalize_age(0, 0, 29))
    # Exactly one year is checked against both the infant and the 70 + 2x years rule.
    assert is_hypotensive(71, normalize_age(1, 0))
    assert not is_hypotensive(72, normalize_age(1, 0))
    assert is_hypotensive(71, normalize_age(1, 1))
    assert not is_hypotensive(72, normalize_age(1, 1))
    # Months past twelve with zero years match no rule.
    assert not is_hypotensive(65, normalize_age(0, 15))
    assert is_hypotensive(89, normalize_age(10))
    assert not is_hypotensive(90, normalize_age(10))
    assert is_hypotensive(89, normalize_age(11))
    assert not is_hypotensive(90, normalize_age(11))


@pytest.mark.parametrize(
    "age,sbp,hypotensive",
    [
        (NEWBORN, 59, True),
        (NEWBORN, 65, True),
        (NEWBORN, 70, False),
        (normalize_age(0, 15), 65, False),
        (normalize_age(1, 0), 71, True),
        (normalize_age(1, 0), 72, False),
        (SIX_MONTHS, 69, True),
        (SIX_MONTHS, 70, False),
        (FIVE_YEARS, 79, True),
        (FIVE_YEARS, 80, False),
        (TEEN, 89.5, True),
        (TEEN, 90, False),
    ],
)
def test_systolic_hypotension(age, sbp, hypotensive):
    expected = [("低血压", 1)] if hypotensive else []
    assert _levels(VitalSigns(systolic_bp=sbp), age) == expected


def test_temperature_findings_fire_independently():
    assert _levels(VitalSigns(temperature=41), ONE_MONTH) == [("体温极值", 2), ("<3月龄发热", 2)]
    assert _levels(VitalSigns(temperature=38), ONE_MONTH) == [("<3月龄发热", 2)]
    assert _levels(VitalSigns(temperature=38), normalize_age(0, 3)) == []
    assert _levels(VitalSigns(temperature=34.9), FIVE_YEARS) == [("体温极值", 2)]
    assert _levels(VitalSigns(temperature=35), FIVE_YEARS) == []


@pytest.mark.parametrize(
    "rate,expected",
    [(50, []), (51, [3]), (60, [3]), (61, [2]), (65, [2]), (70, [2]), (70.5, [1])],
)
def test_respiratory_rate_under_three_months(rate, expected):
    findings = classify(VitalSigns(resp_rate=rate), ONE_MONTH)
    assert [int(finding.level) for finding in findings] == expected


@pytest.mark.parametrize(
    "age,rate,level",
    [
        (SIX_MONTHS, 61, 1),
        (SIX_MONTHS, 45, 3),
        (normalize_age(2), 45, 2),
        (FIVE_YEARS, 25, 3),
        (FIVE_YEARS, 41, 1),
        (TEEN, 16, 3),
        (TEEN, 31, 1),
    ],
)
def test_respiratory_rate_bands(age, rate, level):
    findings = classify(VitalSigns(resp_rate=rate), age)
    assert len(findings) == 1
    assert findings[0].level == TriageLevel(level)


@pytest.mark.parametrize(
    "age,rate,expected",
    [
        (ONE_MONTH, 211, ("心动过速", 1)),
        (ONE_MONTH, 79, ("心动过缓", 1)),
        (ONE_MONTH, 210, ("心率增快", 2)),
        (ONE_MONTH, 110, ("心率偏快", 3)),
        (FIVE_YEARS, 145, ("心率增快", 2)),
        (FIVE_YEARS, 130, ("心率增快", 2)),
        (FIVE_YEARS, 59, ("心动过缓", 1)),
        (TEEN, 141, ("心动过速", 1)),
        (TEEN, 60, ("心率偏快", 3)),
    ],
)
def test_heart_rate_bands(age, rate, expected):
    assert _levels(VitalSigns(heart_rate=rate), age) == [expected]


def test_heart_rate_in_normal_range_has_no_finding():
    assert classify(VitalSigns(heart_rate=90), ONE_MONTH) == []
    assert classify(VitalSigns(heart_rate=55), TEEN) == []


def test_non_positive_readings_are_ignored():
    vitals = VitalSigns(temperature=-1, heart_rate=0, resp_rate=-3, systolic_bp=0, spo2=-5, crt=0)
    assert classify(vitals, ONE_MONTH) == []


def test_findings_follow_display_order():
    vitals = VitalSigns(heart_rate=145, resp_rate=25, spo2=92, crt=4, systolic_bp=70, temperature=41)
    vitals_order = [finding.vital for finding in classify(vitals, FIVE_YEARS)]
    assert vitals_order == ["spo2", "crt", "systolic_bp", "temperature", "resp_rate", "heart_rate"]


def test_finding_label_format():
    (finding,) = classify(VitalSigns(spo2=88), ONE_MONTH)
    assert finding.label == "V: SpO2 < 90% (1级)"
