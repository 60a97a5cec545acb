"""Analysis result structures handed to rendering and export."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# The overall verdict shares the three levels but uses its own thresholds.
Verdict = RiskLevel


class ElementKind(str, Enum):
    URL = "url"
    KEYWORD_PHISHING = "keyword_phishing"
    KEYWORD_SPAM = "keyword_spam"
    SENDER = "sender"


class CategoryAssessment(BaseModel):
    """Score, risk band and message for one threat category."""

    score: int = Field(ge=0, le=100)
    risk: RiskLevel
    details: str


class ThreatCategories(BaseModel):
    """The four fixed categories, serialised under their display keys."""

    model_config = ConfigDict(populate_by_name=True)

    phishing: CategoryAssessment
    spam: CategoryAssessment
    malicious_urls: CategoryAssessment = Field(alias="maliciousUrls")
    sender_reputation: CategoryAssessment = Field(alias="senderReputation")

    def items(self) -> Iterator[tuple[str, CategoryAssessment]]:
        yield "phishing", self.phishing
        yield "spam", self.spam
        yield "maliciousUrls", self.malicious_urls
        yield "senderReputation", self.sender_reputation


class DetectedElement(BaseModel):
    """A piece of evidence surfaced next to the score."""

    kind: ElementKind
    content: str
    label: str


class AnalysisResult(BaseModel):
    """Output of one engine run."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    subject: str = ""
    sender: str = ""
    threat_score: int = Field(alias="threatScore", ge=0, le=100)
    verdict: Verdict
    verdict_details: str = Field(alias="verdictDetails")
    categories: ThreatCategories
    detected_elements: list[DetectedElement] = Field(default_factory=list, alias="detectedElements")
    analyzed_at: datetime = Field(alias="analyzedAt")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def comparable(self) -> dict[str, Any]:
        """Payload without the per-run id and timestamp."""

        payload = self.to_payload()
        payload.pop("id", None)
        payload.pop("analyzedAt", None)
        return payload
