"""EmailShield: heuristic email threat scoring."""

from emailshield.domain.email.models import EmailInput
from emailshield.domain.result import AnalysisResult
from emailshield.scoring.engine import ThreatScoringEngine, analyze

__version__ = "0.1.0"

__all__ = ["AnalysisResult", "EmailInput", "ThreatScoringEngine", "analyze", "__version__"]
