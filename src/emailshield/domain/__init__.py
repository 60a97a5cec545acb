"""Domain models shared by the engine and its collaborators."""

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

__all__ = [
    "AnalysisResult",
    "CategoryAssessment",
    "DetectedElement",
    "ElementKind",
    "EmailInput",
    "RiskLevel",
    "ThreatCategories",
    "Verdict",
]
