"""Fixed user advice derived from an already scored result."""

from __future__ import annotations

from emailshield.domain.result import AnalysisResult, RiskLevel, Verdict

_CATEGORY_ADVICE: dict[str, tuple[str, ...]] = {
    "phishing": (
        "Do not click on any links or buttons in this email",
        "Do not provide any personal information",
    ),
    "maliciousUrls": (
        "Do not click on any links in this email",
        "If you need to visit the website, type the address directly in your browser",
    ),
    "senderReputation": ("Verify the sender by contacting them through a known, trusted channel",),
    "spam": ("Mark the email as spam in your email client",),
}
_ADVICE_ORDER = ("phishing", "maliciousUrls", "senderReputation", "spam")

NO_THREAT_ADVICE = "No immediate threats detected, but always remain cautious"
DO_NOT_REPLY = "Do not reply to this email"


def recommendations(result: AnalysisResult) -> list[str]:
    if result.verdict is Verdict.LOW:
        return [NO_THREAT_ADVICE]

    risks = dict(result.categories.items())
    advice = [DO_NOT_REPLY]
    for name in _ADVICE_ORDER:
        if risks[name].risk is RiskLevel.LOW:
            continue
        advice.extend(_CATEGORY_ADVICE[name])
    return advice
