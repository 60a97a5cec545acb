from __future__ import annotations

from datetime import datetime, timezone
import itertools

import pytest

from emailshield.app.service import AnalysisService
from emailshield.config.settings import AppConfig
from emailshield.history.store import HistoryStore
from emailshield.scoring.engine import ThreatScoringEngine

FIXED_NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def engine() -> ThreatScoringEngine:
    counter = itertools.count(1)
    return ThreatScoringEngine(clock=lambda: FIXED_NOW, id_factory=lambda: f"email_test{next(counter)}")


@pytest.fixture
def service(tmp_path, engine) -> AnalysisService:
    config = AppConfig(seed_history=True, max_results=5, report_dir=str(tmp_path / "reports"))
    return AnalysisService(config=config, history=HistoryStore(seed_samples=True), engine=engine)


@pytest.fixture
def phishing_email() -> dict[str, str]:
    return {
        "subject": "Your account needs attention",
        "sender": "security@example.com",
        "content": "Please verify your account and click this link: http://evil.example/login",
    }
