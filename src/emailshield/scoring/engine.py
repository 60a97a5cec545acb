"""Deterministic keyword and pattern scoring for a single email."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
import logging
import math
import re
from typing import Any, Callable
import uuid

from pydantic import ValidationError

from emailshield.core.errors import InvalidInputError
from emailshield.domain.email.models import EmailInput
from emailshield.domain.result import (
    AnalysisResult,
    CategoryAssessment,
    DetectedElement,
    ElementKind,
    RiskLevel,
    ThreatCategories,
    Verdict,
)
from emailshield.scoring import tables

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]

_KEYWORD_CACHE: dict[str, re.Pattern[str]] = {}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_result_id() -> str:
    return f"email_{uuid.uuid4().hex}"


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    pattern = _KEYWORD_CACHE.get(keyword)
    if pattern is None:
        pattern = re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE | re.ASCII)
        _KEYWORD_CACHE[keyword] = pattern
    return pattern


def match_keywords(text: str, keywords: tuple[str, ...]) -> list[str]:
    """Return the keywords found as whole words, in table order."""

    return [keyword for keyword in keywords if _keyword_pattern(keyword).search(text)]


def extract_urls(text: str) -> list[str]:
    """Every ``http(s)://`` run up to the next whitespace, repeats included."""

    return tables.URL_PATTERN.findall(text or "")


def sender_domain(sender: str) -> str:
    parts = (sender or "").split("@", 1)
    return parts[1] if len(parts) > 1 else ""


def is_suspicious_sender(domain: str) -> bool:
    return any(pattern.search(domain) for pattern in tables.SUSPICIOUS_SENDER_PATTERNS)


def category_risk(score: int) -> RiskLevel:
    if score > tables.CATEGORY_HIGH_ABOVE:
        return RiskLevel.HIGH
    if score > tables.CATEGORY_MEDIUM_ABOVE:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def verdict_for(total: int) -> Verdict:
    if total >= tables.VERDICT_HIGH_FROM:
        return Verdict.HIGH
    if total >= tables.VERDICT_MEDIUM_FROM:
        return Verdict.MEDIUM
    return Verdict.LOW


def weighted_total(scores: Mapping[str, int], weights: Mapping[str, float] | None = None) -> int:
    """Weighted sum rounded half-up and clamped to 0-100."""

    weights = weights or tables.CATEGORY_WEIGHTS
    total = sum(scores.get(key, 0) * weight for key, weight in weights.items())
    return max(0, min(100, int(math.floor(total + 0.5))))


def _url_details(risk: RiskLevel, url_count: int) -> str:
    if risk is RiskLevel.LOW and url_count == 0:
        return tables.URL_DETAILS["none"]
    return tables.URL_DETAILS[risk.value].format(count=url_count)


def _assess(score: int, messages: Mapping[str, str]) -> CategoryAssessment:
    risk = category_risk(score)
    return CategoryAssessment(score=score, risk=risk, details=messages[risk.value])


def _coerce_input(email: EmailInput | Mapping[str, Any]) -> EmailInput:
    if isinstance(email, EmailInput):
        # model_construct() skips validation, so check the fields again here.
        for name in ("subject", "sender", "content"):
            value = getattr(email, name)
            if not isinstance(value, str):
                raise InvalidInputError(f"{name} must be text, got {type(value).__name__}")
        return email
    if not isinstance(email, Mapping):
        raise InvalidInputError(f"expected an email mapping, got {type(email).__name__}")
    try:
        return EmailInput.model_validate(dict(email))
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        raise InvalidInputError(f"non-text email field(s): {fields or 'unknown'}") from exc


def _detected_elements(
    urls: list[str],
    phishing: list[str],
    spam: list[str],
    sender: str,
    sender_flagged: bool,
) -> list[DetectedElement]:
    elements = [
        DetectedElement(kind=ElementKind.URL, content=url, label=tables.ELEMENT_LABELS["url"])
        for url in urls
    ]
    elements.extend(
        DetectedElement(
            kind=ElementKind.KEYWORD_PHISHING,
            content=keyword,
            label=tables.ELEMENT_LABELS["keyword_phishing"],
        )
        for keyword in phishing[: tables.MAX_PHISHING_ELEMENTS]
    )
    elements.extend(
        DetectedElement(
            kind=ElementKind.KEYWORD_SPAM,
            content=keyword,
            label=tables.ELEMENT_LABELS["keyword_spam"],
        )
        for keyword in spam[: tables.MAX_SPAM_ELEMENTS]
    )
    if sender_flagged:
        elements.append(
            DetectedElement(kind=ElementKind.SENDER, content=sender, label=tables.ELEMENT_LABELS["sender"])
        )
    return elements


def analyze(
    email: EmailInput | Mapping[str, Any],
    *,
    clock: Clock | None = None,
    id_factory: IdFactory | None = None,
) -> AnalysisResult:
    """Score an email and build the full analysis result.

    Raises InvalidInputError when a field is not a string. Empty fields are
    valid and simply contribute no matches.
    """

    email = _coerce_input(email)
    combined = f"{email.subject} {email.content}".lower()

    phishing_matches = match_keywords(combined, tables.PHISHING_KEYWORDS)
    spam_matches = match_keywords(combined, tables.SPAM_KEYWORDS)
    urls = extract_urls(combined)

    phishing_score = min(100, len(phishing_matches) * tables.PHISHING_POINTS_PER_MATCH)
    spam_score = min(100, len(spam_matches) * tables.SPAM_POINTS_PER_MATCH)
    url_score = min(100, len(urls) * tables.URL_POINTS_PER_MATCH)

    sender_flagged = is_suspicious_sender(sender_domain(email.sender))
    sender_score = tables.SUSPICIOUS_SENDER_SCORE if sender_flagged else tables.TRUSTED_SENDER_SCORE

    total = weighted_total(
        {
            "phishing": phishing_score,
            "spam": spam_score,
            "maliciousUrls": url_score,
            "senderReputation": sender_score,
        }
    )

    url_risk = category_risk(url_score)
    categories = ThreatCategories(
        phishing=_assess(phishing_score, tables.PHISHING_DETAILS),
        spam=_assess(spam_score, tables.SPAM_DETAILS),
        malicious_urls=CategoryAssessment(
            score=url_score,
            risk=url_risk,
            details=_url_details(url_risk, len(urls)),
        ),
        sender_reputation=_assess(sender_score, tables.SENDER_DETAILS),
    )

    verdict = verdict_for(total)
    result = AnalysisResult(
        id=(id_factory or _new_result_id)(),
        subject=email.subject,
        sender=email.sender,
        threat_score=total,
        verdict=verdict,
        verdict_details=tables.VERDICT_DETAILS[verdict.value],
        categories=categories,
        detected_elements=_detected_elements(
            urls, phishing_matches, spam_matches, email.sender, sender_flagged
        ),
        analyzed_at=(clock or _utcnow)(),
    )
    logger.debug("analyzed id=%s score=%d verdict=%s", result.id, total, verdict.value)
    return result


class ThreatScoringEngine:
    """Stateless wrapper around :func:`analyze` with injectable clock and ids."""

    def __init__(self, *, clock: Clock | None = None, id_factory: IdFactory | None = None) -> None:
        self._clock = clock
        self._id_factory = id_factory

    def analyze(self, email: EmailInput | Mapping[str, Any]) -> AnalysisResult:
        return analyze(email, clock=self._clock, id_factory=self._id_factory)
