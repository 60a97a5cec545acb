"""Heuristic threat scoring."""

from emailshield.scoring.engine import (
    ThreatScoringEngine,
    analyze,
    category_risk,
    extract_urls,
    is_suspicious_sender,
    match_keywords,
    sender_domain,
    verdict_for,
    weighted_total,
)
from emailshield.scoring.tables import (
    CATEGORY_WEIGHTS,
    PHISHING_KEYWORDS,
    SPAM_KEYWORDS,
    SUSPICIOUS_SENDER_PATTERNS,
)

__all__ = [
    "CATEGORY_WEIGHTS",
    "PHISHING_KEYWORDS",
    "SPAM_KEYWORDS",
    "SUSPICIOUS_SENDER_PATTERNS",
    "ThreatScoringEngine",
    "analyze",
    "category_risk",
    "extract_urls",
    "is_suspicious_sender",
    "match_keywords",
    "sender_domain",
    "verdict_for",
    "weighted_total",
]
