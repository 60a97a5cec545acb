"""Plain-text analysis report."""

from __future__ import annotations

from emailshield.domain.result import AnalysisResult
from emailshield.indicators.models import AdvisoryIndicators
from emailshield.reporting.advice import recommendations

CATEGORY_TITLES = {
    "phishing": "Phishing",
    "spam": "Spam",
    "maliciousUrls": "Malicious URLs",
    "senderReputation": "Sender Reputation",
}
NO_ELEMENTS_TEXT = "No suspicious elements detected"
NO_LINKS_TEXT = "No links to check"
ADVISORY_TITLE = "Advisory indicators (not part of the threat score)"
_RULE = "=" * 50


def _with_codes(text: str, codes: list[str]) -> str:
    return f"{text} ({', '.join(codes)})" if codes else text


def advisory_lines(indicators: AdvisoryIndicators) -> list[str]:
    """One line per checked link, then the sender line."""

    lines = []
    for link in indicators.links:
        line = _with_codes(f"- {link.url}: risk {link.risk_score}", link.indicators)
        lines.append(f"{line} [suspicious]" if link.suspicious else line)
    if not lines:
        lines.append(f"- {NO_LINKS_TEXT}")
    sender = indicators.sender
    lines.append(
        _with_codes(f"- Sender {sender.sender or '(missing)'}: spoofing risk {sender.risk_score}", sender.indicators)
    )
    return lines


def render_text_report(result: AnalysisResult, indicators: AdvisoryIndicators | None = None) -> str:
    lines = [
        "",
        "========== EMAIL THREAT ANALYSIS REPORT ==========",
        "",
        "Email details:",
        f"- Sender: {result.sender}",
        f"- Subject: {result.subject}",
        f"- Analyzed at: {result.analyzed_at.isoformat()}",
        "",
        "Overall assessment:",
        f"- Threat score: {result.threat_score}%",
        f"- Verdict: {result.verdict.value.upper()}",
        f"- {result.verdict_details}",
        "",
        "Threat categories:",
    ]
    for name, assessment in result.categories.items():
        lines.append(
            f"- {CATEGORY_TITLES[name]}: {assessment.score} ({assessment.risk.value} risk) - {assessment.details}"
        )
    lines.extend(["", "Detected elements:"])
    if result.detected_elements:
        lines.extend(f"- {item.content} ({item.label})" for item in result.detected_elements)
    else:
        lines.append(f"- {NO_ELEMENTS_TEXT}")
    if indicators is not None:
        lines.extend(["", f"{ADVISORY_TITLE}:"])
        lines.extend(advisory_lines(indicators))
    lines.extend(["", "Recommendations:"])
    lines.extend(f"- {item}" for item in recommendations(result))
    lines.extend(["", _RULE, ""])
    return "\n".join(lines)
