"""Parsing, scoring and history wired together for the transports."""

from __future__ import annotations

import asyncio
from collections import OrderedDict
import logging
from pathlib import Path
import threading

from emailshield.config.settings import AppConfig, load_config
from emailshield.core.errors import RecordNotFoundError
from emailshield.domain.email.models import EmailInput
from emailshield.domain.email.parse import (
    from_fields,
    parse_email_file,
    parse_email_text,
    require_fields,
)
from emailshield.domain.result import AnalysisResult
from emailshield.history.store import HistoryStore
from emailshield.indicators import AdvisoryIndicators, collect_indicators
from emailshield.scoring.engine import ThreatScoringEngine

logger = logging.getLogger(__name__)


class AnalysisService:
    def __init__(
        self,
        config: AppConfig | None = None,
        history: HistoryStore | None = None,
        engine: ThreatScoringEngine | None = None,
    ) -> None:
        self.config = config or AppConfig()
        if history is None:
            history = HistoryStore(
                seed_samples=self.config.seed_history,
                max_entries=self.config.max_history,
            )
        self.history = history
        self.engine = engine or ThreatScoringEngine()
        self._results: OrderedDict[str, tuple[AnalysisResult, AdvisoryIndicators]] = OrderedDict()
        self._lock = threading.Lock()

    def analyze(self, email: EmailInput) -> AnalysisResult:
        result = self.engine.analyze(email)
        indicators = collect_indicators(email, result)
        self._remember(result, indicators)
        self.history.record(result)
        logger.info(
            "analysis id=%s score=%d verdict=%s elements=%d",
            result.id,
            result.threat_score,
            result.verdict.value,
            len(result.detected_elements),
        )
        logger.debug(
            "advisory id=%s suspicious_links=%d sender_risk=%d",
            result.id,
            len(indicators.suspicious_links),
            indicators.sender.risk_score,
        )
        return result

    def analyze_fields(self, subject: str | None, sender: str | None, content: str | None) -> AnalysisResult:
        require_fields(subject, sender, content)
        return self.analyze(from_fields(subject, sender, content))

    def analyze_text(self, raw: str) -> AnalysisResult:
        return self.analyze(parse_email_text(raw))

    def analyze_file(self, path: str | Path) -> AnalysisResult:
        return self.analyze(parse_email_file(path))

    async def analyze_async(self, email: EmailInput) -> AnalysisResult:
        return await asyncio.to_thread(self.analyze, email)

    def _lookup(self, result_id: str) -> tuple[AnalysisResult, AdvisoryIndicators]:
        with self._lock:
            entry = self._results.get(result_id)
        if entry is None:
            raise RecordNotFoundError(f"unknown result id: {result_id}")
        return entry

    def get_result(self, result_id: str) -> AnalysisResult:
        return self._lookup(result_id)[0]

    def get_indicators(self, result_id: str) -> AdvisoryIndicators:
        """Advisory link and sender checks kept beside the result."""

        return self._lookup(result_id)[1]

    def _remember(self, result: AnalysisResult, indicators: AdvisoryIndicators) -> None:
        with self._lock:
            self._results[result.id] = (result, indicators)
            while len(self._results) > self.config.max_results:
                self._results.popitem(last=False)


def build_service(config: AppConfig | None = None) -> AnalysisService:
    if config is None:
        config, _ = load_config()
    return AnalysisService(config=config)
