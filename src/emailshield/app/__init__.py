"""Application wiring shared by the CLI, API and UI."""

from emailshield.app.service import AnalysisService, build_service

__all__ = ["AnalysisService", "build_service"]
