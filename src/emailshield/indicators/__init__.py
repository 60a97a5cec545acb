"""Advisory link and sender indicators.

They are reported beside the threat assessment and never feed the threat score.
"""

from __future__ import annotations

from emailshield.domain.email.models import EmailInput
from emailshield.domain.result import AnalysisResult, ElementKind
from emailshield.indicators.links import assess_link
from emailshield.indicators.models import AdvisoryIndicators, LinkIndicator, SenderIndicator
from emailshield.indicators.sender import assess_sender


def collect_indicators(email: EmailInput, result: AnalysisResult) -> AdvisoryIndicators:
    """Check each distinct URL the engine found, then the sender."""

    urls = dict.fromkeys(item.content for item in result.detected_elements if item.kind is ElementKind.URL)
    return AdvisoryIndicators(
        result_id=result.id,
        links=[assess_link(url) for url in urls],
        sender=assess_sender(email),
    )


__all__ = [
    "AdvisoryIndicators",
    "LinkIndicator",
    "SenderIndicator",
    "assess_link",
    "assess_sender",
    "collect_indicators",
]
