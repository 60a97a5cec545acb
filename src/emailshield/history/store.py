"""History listing and malicious/safe marking keyed by result id.

The store only sees finished results; it never calls back into scoring.
"""

from __future__ import annotations

from collections import OrderedDict
import datetime as dt
from enum import Enum
import logging
import threading

from pydantic import BaseModel, ConfigDict, Field

from emailshield.core.errors import RecordNotFoundError
from emailshield.domain.result import AnalysisResult, Verdict

logger = logging.getLogger(__name__)

VERDICT_LABELS = {
    Verdict.HIGH: "Malicious",
    Verdict.MEDIUM: "Suspicious",
    Verdict.LOW: "Safe",
}


class ReviewStatus(str, Enum):
    UNREVIEWED = "unreviewed"
    REPORTED_MALICIOUS = "reported_malicious"
    MARKED_SAFE = "marked_safe"


class HistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    subject: str
    sender: str
    date: dt.date
    threat_score: int = Field(alias="threatScore", ge=0, le=100)
    verdict: str
    status: ReviewStatus = ReviewStatus.UNREVIEWED


def verdict_label(verdict: Verdict) -> str:
    return VERDICT_LABELS[Verdict(verdict)]


def sample_entries() -> list[HistoryEntry]:
    return [
        HistoryEntry(
            id="1",
            subject="Your account needs attention",
            sender="security@example.com",
            date=dt.date(2023, 3, 15),
            threat_score=85,
            verdict="Malicious",
        ),
        HistoryEntry(
            id="2",
            subject="Meeting reminder",
            sender="hr@company.com",
            date=dt.date(2023, 3, 14),
            threat_score=12,
            verdict="Safe",
        ),
        HistoryEntry(
            id="3",
            subject="Free prize inside!",
            sender="marketing@offers.com",
            date=dt.date(2023, 3, 12),
            threat_score=68,
            verdict="Suspicious",
        ),
    ]


DEFAULT_MAX_ENTRIES = 500


class HistoryStore:
    """Bounded history; once full, the oldest recorded entry is dropped first."""

    def __init__(self, *, seed_samples: bool = False, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._lock = threading.Lock()
        self._max_entries = max_entries
        self._entries: OrderedDict[str, HistoryEntry] = OrderedDict()
        if seed_samples:
            for entry in sample_entries():
                self._entries[entry.id] = entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def record(self, result: AnalysisResult) -> HistoryEntry:
        entry = HistoryEntry(
            id=result.id,
            subject=result.subject,
            sender=result.sender,
            date=result.analyzed_at.date(),
            threat_score=result.threat_score,
            verdict=verdict_label(result.verdict),
        )
        with self._lock:
            self._entries.pop(entry.id, None)
            self._entries[entry.id] = entry
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("history full, dropped %s", evicted)
        return entry

    def list(self) -> list[HistoryEntry]:
        """Newest first; later insertions win ties on the same date."""

        with self._lock:
            ordered = list(self._entries.values())
        ordered.reverse()
        return sorted(ordered, key=lambda item: item.date, reverse=True)

    def get(self, entry_id: str) -> HistoryEntry:
        with self._lock:
            entry = self._entries.get(entry_id)
        if entry is None:
            raise RecordNotFoundError(f"unknown email id: {entry_id}")
        return entry

    def _set_status(self, entry_id: str, status: ReviewStatus) -> HistoryEntry:
        with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                raise RecordNotFoundError(f"unknown email id: {entry_id}")
            updated = entry.model_copy(update={"status": status})
            self._entries[entry_id] = updated
        logger.info("email %s marked %s", entry_id, status.value)
        return updated

    def report_malicious(self, entry_id: str) -> HistoryEntry:
        return self._set_status(entry_id, ReviewStatus.REPORTED_MALICIOUS)

    def mark_safe(self, entry_id: str) -> HistoryEntry:
        return self._set_status(entry_id, ReviewStatus.MARKED_SAFE)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
