import pytest

from emailshield.domain.result import RiskLevel, Verdict
from emailshield.scoring.engine import category_risk, verdict_for, weighted_total


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (0, RiskLevel.LOW),
        (30, RiskLevel.LOW),
        (31, RiskLevel.MEDIUM),
        (70, RiskLevel.MEDIUM),
        (71, RiskLevel.HIGH),
        (100, RiskLevel.HIGH),
    ],
)
def test_category_bands_are_exclusive(score, expected):
    assert category_risk(score) is expected


@pytest.mark.parametrize(
    ("total", "expected"),
    [
        (0, Verdict.LOW),
        (39, Verdict.LOW),
        (40, Verdict.MEDIUM),
        (69, Verdict.MEDIUM),
        (70, Verdict.HIGH),
        (100, Verdict.HIGH),
    ],
)
def test_verdict_bands_are_inclusive(total, expected):
    assert verdict_for(total) is expected


def test_thirty_five_differs_between_category_and_verdict():
    assert category_risk(35) is RiskLevel.MEDIUM
    assert verdict_for(35) is Verdict.LOW


def test_weighted_total_rounds_half_up():
    assert weighted_total({"senderReputation": 25}) == 3
    assert weighted_total({"maliciousUrls": 5}) == 2
    assert weighted_total({"phishing": 100, "spam": 100, "maliciousUrls": 100, "senderReputation": 80}) == 98


def test_weighted_total_is_clamped():
    assert weighted_total({"phishing": 1000}) == 100
    assert weighted_total({"phishing": -50}) == 0
