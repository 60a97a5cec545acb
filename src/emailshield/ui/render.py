"""Presentation mapping for analysis results.

Kept free of Gradio imports so the mapping can be reused by other front ends.
"""

from __future__ import annotations

from emailshield.domain.result import AnalysisResult, RiskLevel
from emailshield.indicators.models import AdvisoryIndicators
from emailshield.reporting.text import CATEGORY_TITLES, NO_ELEMENTS_TEXT

RISK_COLORS = {
    RiskLevel.HIGH: "#ef4444",
    RiskLevel.MEDIUM: "#f59e0b",
    RiskLevel.LOW: "#10b981",
}
VERDICT_ICONS = {
    RiskLevel.HIGH: "⚠️",
    RiskLevel.MEDIUM: "❗",
    RiskLevel.LOW: "✅",
}
ELEMENT_HEADERS = ["Element", "Tag"]
CATEGORY_HEADERS = ["Category", "Score", "Risk", "Details"]
SAFE_TAG = "Safe"
INDICATOR_HEADERS = ["Checked", "Risk", "Indicators"]


def risk_css_class(level: RiskLevel | str) -> str:
    return f"risk-{RiskLevel(level).value}"


def score_markdown(result: AnalysisResult) -> str:
    color = RISK_COLORS[result.verdict]
    return f"<div class='threat-score' style='color:{color}'><span class='percentage'>{result.threat_score}%</span></div>"


def verdict_banner(result: AnalysisResult) -> str:
    return (
        f"<div class='verdict {risk_css_class(result.verdict)}' style='color:{RISK_COLORS[result.verdict]}'>"
        f"{VERDICT_ICONS[result.verdict]} {result.verdict_details}</div>"
    )


def category_rows(result: AnalysisResult) -> list[list[object]]:
    return [
        [CATEGORY_TITLES[name], item.score, item.risk.value.capitalize(), item.details]
        for name, item in result.categories.items()
    ]


def element_rows(result: AnalysisResult) -> list[list[str]]:
    """Detected elements, or a single placeholder row when there are none."""

    if not result.detected_elements:
        return [[NO_ELEMENTS_TEXT, SAFE_TAG]]
    return [[item.content, item.label] for item in result.detected_elements]


def indicator_rows(indicators: AdvisoryIndicators) -> list[list[object]]:
    rows: list[list[object]] = [
        [link.url, link.risk_score, ", ".join(link.indicators) or "-"] for link in indicators.links
    ]
    sender = indicators.sender
    rows.append([f"Sender: {sender.sender}", sender.risk_score, ", ".join(sender.indicators) or "-"])
    return rows
