"""Fixed keyword, pattern and message tables used by the engine.

Tuple order matters: it decides which matches are surfaced first when the
detected-element list is truncated.
"""

from __future__ import annotations

import re
from typing import Dict

PHISHING_KEYWORDS: tuple[str, ...] = (
    "verify",
    "account",
    "password",
    "bank",
    "urgent",
    "update",
    "security",
    "click",
    "link",
    "confirm",
    "login",
    "access",
    "suspend",
)

SPAM_KEYWORDS: tuple[str, ...] = (
    "free",
    "win",
    "winner",
    "prize",
    "offer",
    "discount",
    "congratulations",
    "money",
    "cash",
    "limited",
    "warranty",
    "extended",
)

SUSPICIOUS_SENDER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"temp", re.IGNORECASE | re.ASCII),
    re.compile(r"free", re.IGNORECASE | re.ASCII),
    re.compile(r"fake", re.IGNORECASE | re.ASCII),
    re.compile(r"anonymous", re.IGNORECASE | re.ASCII),
    re.compile(r"mail\.", re.IGNORECASE | re.ASCII),
)

# A URL stops at ASCII whitespace, the Unicode space separators and the BOM.
_URL_STOP = "\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
URL_PATTERN = re.compile(f"https?://[^{_URL_STOP}]+")

PHISHING_POINTS_PER_MATCH = 15
SPAM_POINTS_PER_MATCH = 10
URL_POINTS_PER_MATCH = 20
SUSPICIOUS_SENDER_SCORE = 80
TRUSTED_SENDER_SCORE = 20

CATEGORY_WEIGHTS: Dict[str, float] = {
    "phishing": 0.4,
    "spam": 0.2,
    "maliciousUrls": 0.3,
    "senderReputation": 0.1,
}

# Per-category bands are exclusive: 70 is still medium, 30 is still low.
CATEGORY_HIGH_ABOVE = 70
CATEGORY_MEDIUM_ABOVE = 30

# The overall verdict is inclusive: 70 is high, 40 is medium.
VERDICT_HIGH_FROM = 70
VERDICT_MEDIUM_FROM = 40

MAX_PHISHING_ELEMENTS = 3
MAX_SPAM_ELEMENTS = 2

PHISHING_DETAILS = {
    "high": "Multiple phishing indicators detected",
    "medium": "Some phishing indicators detected",
    "low": "No significant phishing indicators",
}
SPAM_DETAILS = {
    "high": "High likelihood of spam content",
    "medium": "May contain spam elements",
    "low": "Low probability of spam",
}
URL_DETAILS = {
    "high": "Contains {count} potentially malicious URLs",
    "medium": "Contains URLs that may be suspicious",
    "low": "Contains {count} URL(s) with no known threats",
    "none": "No URLs detected",
}
SENDER_DETAILS = {
    "high": "Sender appears suspicious",
    "medium": "Sender has questionable reputation",
    "low": "Sender appears legitimate",
}
VERDICT_DETAILS = {
    "high": "High Risk: This email contains multiple signs of phishing or malicious content",
    "medium": "Medium Risk: This email contains some suspicious elements",
    "low": "Low Risk: This email appears to be safe",
}

ELEMENT_LABELS = {
    "url": "Suspicious URL",
    "keyword_phishing": "Phishing Keyword",
    "keyword_spam": "Spam Keyword",
    "sender": "Suspicious Sender",
}
